"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    StorageUnavailableError:
        Raised when the durable store fails (connection issues, timeouts, OOM, etc.).

    HistoryConflictError:
        Raised when the history log keeps changing underneath an optimistic
        read-modify-write and every retry attempt fails.

Example:
    >>> from kvshortener.dao.exceptions import StorageUnavailableError
    >>> raise StorageUnavailableError("Can't connect to Redis at localhost:6379/0.")
    Traceback (most recent call last):
        ...
    kvshortener.dao.exceptions.StorageUnavailableError: Can't connect to Redis at localhost:6379/0.
"""

from kvshortener.exceptions import KVShortenerError


class DAOError(KVShortenerError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class StorageUnavailableError(DAOError):
    """Raised when the data store encounters an error.

    Examples include connection issues, timeouts, and out-of-memory failures.
    """

    error_code = 'dao:storage_unavailable_error'


class HistoryConflictError(DAOError):
    """Raised when concurrent writers prevent a history update from committing."""

    error_code = 'dao:history_conflict_error'
