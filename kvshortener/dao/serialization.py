"""JSON codec for the persisted history log.

The whole log lives in a single JSON array, newest first:

    [
        {"code": "a1b2c3", "url": "https://example.com/b", "createdAt": "2025-10-15T12:00:01.000Z"},
        {"code": "x9y8z7", "url": "https://example.com/a", "createdAt": "2025-10-15T12:00:00.000Z"}
    ]

Functions:
    dumps_history(records) -> str
        Serialize records into the compact JSON array.
    loads_history(blob) -> list[HistoryRecordModel]
        Deserialize the JSON array. Missing or corrupt content yields an empty list.
"""

import json
import logging

from kvshortener.models import HistoryRecordModel


logger = logging.getLogger(__name__)


def dumps_history(records: list[HistoryRecordModel]) -> str:
    return json.dumps([record.to_dict() for record in records], separators=(',', ':'), ensure_ascii=False)


def loads_history(blob: str | bytes | None) -> list[HistoryRecordModel]:
    """Deserialize the stored history log

    History is advisory, never the source of truth for link resolution, so
    unparseable content is recovered locally as an empty history instead of
    failing the caller.

    Args:
        blob (str | bytes | None):
            Raw stored value. None means the log was never written.

    Returns:
        list[HistoryRecordModel]: Records, newest first.

    Example:
        >>> loads_history(None)
        []
        >>> loads_history('{not json')
        []
    """
    if blob is None:
        return []

    try:
        items = json.loads(blob)
        if not isinstance(items, list):
            raise TypeError(f'History must be a JSON array (given type: {type(items).__name__}).')
        return [HistoryRecordModel.from_dict(item) for item in items]
    except (json.JSONDecodeError, UnicodeDecodeError, KeyError, TypeError, ValueError) as e:
        logger.warning('Discarding unparseable history log.', extra={'reason': str(e)})
        return []
