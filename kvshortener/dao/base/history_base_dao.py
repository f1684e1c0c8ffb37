"""Abstract base class for history log data access objects (DAOs).

The history log is a bounded, newest-first audit record of created links. It is
stored independently of the link store and holds copies of link entries, so the
two can diverge until deletion logic reconciles them.

Responsibilities:
    - Prepend records and evict the oldest once the capacity is reached.
    - List the whole log as a fully materialized sequence.
    - Remove every record matching a short code.
    - Degrade unparseable stored content to an empty history.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from kvshortener.models import HistoryRecordModel
        >>> from kvshortener.dao.redis import HistoryRedisDAO

        >>> dao = HistoryRedisDAO(...)
        >>> dao.append(HistoryRecordModel.now('a1b2c3', 'https://example.com'))

        >>> [record.code for record in dao.list()]
        ['a1b2c3']

        >>> dao.remove('a1b2c3')
        >>> dao.list()
        []
"""

from abc import ABC, abstractmethod

from kvshortener.constants import HistoryDefaults
from kvshortener.models import HistoryRecordModel


class HistoryBaseDAO(ABC):
    """Interface for history log data access objects (DAOs).

    Attributes:
        capacity (int):
            Maximum number of records kept. Defaults to HistoryDefaults.CAPACITY.

    Methods:
        append(record: HistoryRecordModel, **kwargs) -> HistoryBaseDAO:
            Prepend a record, truncating the log to capacity.
            Raises StorageUnavailableError on connection or write failure.

        list(**kwargs) -> list[HistoryRecordModel]:
            Return all records, newest first.
            Raises StorageUnavailableError on connection or read failure.

        remove(code: str, **kwargs) -> HistoryBaseDAO:
            Filter out every record with the given code.
            Raises StorageUnavailableError on connection or write failure.

    NOTE:
        - Corrupt stored content never raises; it is read as an empty history.
    """

    def __init__(self, capacity: int = HistoryDefaults.CAPACITY):
        if capacity < 1:
            raise ValueError(f'History capacity must be a positive integer (given value: {capacity}).')
        self.capacity = capacity

    def _prepend(self, records: list[HistoryRecordModel], record: HistoryRecordModel) -> list[HistoryRecordModel]:
        return [record, *records][: self.capacity]

    @staticmethod
    def _without(records: list[HistoryRecordModel], code: str) -> list[HistoryRecordModel]:
        # Every match goes, not only the first
        return [record for record in records if record.code != code]

    @abstractmethod
    def append(self, record: HistoryRecordModel, **kwargs) -> 'HistoryBaseDAO':
        """Prepend a record to the history log.

        Args:
            record (HistoryRecordModel):
                The record to insert at the head of the log.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            HistoryBaseDAO: self (for method chaining)

        Raises:
            StorageUnavailableError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def list(self, **kwargs) -> list[HistoryRecordModel]:
        """Return the full history, newest first.

        Raises:
            StorageUnavailableError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def remove(self, code: str, **kwargs) -> 'HistoryBaseDAO':
        """Remove every record matching a short code.

        Args:
            code (str):
                The short code whose records should be dropped.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            HistoryBaseDAO: self (for method chaining)

        Raises:
            StorageUnavailableError:
                If there is an error in the data store.
        """
        pass
