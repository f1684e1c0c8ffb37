from dataclasses import dataclass
from datetime import datetime, UTC
from typing import Any


def format_timestamp(moment: datetime) -> str:
    """Render a datetime as ISO-8601 UTC with millisecond precision, e.g. '2025-10-15T12:00:00.000Z'."""
    # fmt: off
    return moment.astimezone(UTC) \
                 .isoformat(timespec='milliseconds') \
                 .replace('+00:00', 'Z')
    # fmt: on


def parse_timestamp(value: str) -> datetime:
    moment = datetime.fromisoformat(value)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


@dataclass(frozen=True)
class HistoryRecordModel:
    # fmt: off
    code: str                   # Short code at creation time
    url: str                    # Copy of the destination URL, never a reference into the link store
    created_at: datetime        # Creation moment in UTC
    # fmt: on

    @classmethod
    def now(cls, code: str, url: str) -> 'HistoryRecordModel':
        return cls(code=code, url=url, created_at=datetime.now(UTC))

    def to_dict(self) -> dict[str, str]:
        return {
            'code': self.code,
            'url': self.url,
            'createdAt': format_timestamp(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'HistoryRecordModel':
        """Build a record from its persisted JSON object.

        Raises:
            KeyError: If a field is missing.
            TypeError, ValueError: If a field has the wrong type or an unparseable timestamp.
        """
        code, url, created_at = data['code'], data['url'], data['createdAt']
        if not isinstance(code, str) or not isinstance(url, str) or not isinstance(created_at, str):
            raise TypeError(f'History record fields must be strings (given: {data!r}).')
        return cls(code=code, url=url, created_at=parse_timestamp(created_at))
