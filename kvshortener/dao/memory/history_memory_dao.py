"""In-memory implementation of HistoryBaseDAO

The log is kept serialized, exactly as the Redis backend persists it, so corrupt
content handling and the JSON layout behave identically in tests.

NOTE:
    append() and remove() are plain read-modify-write cycles without any
    compare-and-swap. That is only safe within a single thread; the Redis backend
    is the one meant for concurrent writers.
"""

from beartype import beartype

from kvshortener.constants import HistoryDefaults
from kvshortener.models import HistoryRecordModel
from kvshortener.dao.base import HistoryBaseDAO
from kvshortener.dao.serialization import dumps_history, loads_history


class HistoryMemoryDAO(HistoryBaseDAO):
    def __init__(self, capacity: int = HistoryDefaults.CAPACITY, blob: str | None = None):
        super().__init__(capacity=capacity)
        self.blob = blob

    @beartype
    def append(self, record: HistoryRecordModel, **kwargs) -> 'HistoryMemoryDAO':
        self.blob = dumps_history(self._prepend(loads_history(self.blob), record))
        return self

    def list(self, **kwargs) -> list[HistoryRecordModel]:
        return loads_history(self.blob)

    @beartype
    def remove(self, code: str, **kwargs) -> 'HistoryMemoryDAO':
        self.blob = dumps_history(self._without(loads_history(self.blob), code))
        return self
