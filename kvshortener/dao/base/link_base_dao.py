"""Abstract base class for link data access objects (DAOs).

This class establishes a consistent contract for all link store implementations,
regardless of the underlying storage mechanism (e.g., Redis, in-memory).

Responsibilities:
    - Provide an interface for storing, retrieving and deleting code -> URL mappings.
    - Standardize error handling across multiple data store implementations.
    - Act as the single source of truth for redirect resolution and key existence checks.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from kvshortener.dao.redis import LinkRedisDAO

        >>> dao = LinkRedisDAO(...)
        >>> dao.put('a1b2c3', 'https://example.com/blog/article-123')

        >>> dao.get('a1b2c3')
        'https://example.com/blog/article-123'

        >>> dao.delete('a1b2c3')
        >>> dao.get('a1b2c3') is None
        True

NOTE:
    The store does not enforce code uniqueness. Uniqueness is a cooperative contract
    upheld by KeyGenerator checking exists() before the caller writes with put().
"""

from abc import ABC, abstractmethod


class LinkBaseDAO(ABC):
    """Interface for link data access objects (DAOs).

    Methods:
        put(code: str, url: str, **kwargs) -> LinkBaseDAO:
            Store the mapping, silently overwriting an existing one.
            Raises StorageUnavailableError on connection or write failure.

        get(code: str, **kwargs) -> str | None:
            Look up the destination URL. Returns None if absent. Never mutates.
            Raises StorageUnavailableError on connection or read failure.

        delete(code: str, **kwargs) -> None:
            Remove the mapping. Idempotent: succeeds when the code is absent.
            Raises StorageUnavailableError on connection or write failure.

        exists(code: str, **kwargs) -> bool:
            Check whether a mapping for the code is stored.
            Raises StorageUnavailableError on connection or read failure.

        count(**kwargs) -> int:
            Return the number of stored mappings.
            Raises StorageUnavailableError on connection or read failure.

    Subclassing:
        Datastore-specific implementations (e.g., LinkRedisDAO or LinkMemoryDAO)
        must extend this class and implement all abstract methods.

    NOTE:
        - Links never expire. They live until explicitly deleted.
    """

    @abstractmethod
    def put(self, code: str, url: str, **kwargs) -> 'LinkBaseDAO':
        """Store a code -> URL mapping, overwriting silently.

        Args:
            code (str):
                The short code.

            url (str):
                The destination URL.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            LinkBaseDAO: self (for method chaining)

        Raises:
            StorageUnavailableError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, code: str, **kwargs) -> str | None:
        """Retrieve the destination URL for a short code.

        Args:
            code (str):
                The short code to look up.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            str | None: The destination URL if found, otherwise None.

        Raises:
            StorageUnavailableError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete(self, code: str, **kwargs) -> None:
        """Remove the mapping for a short code, if any.

        Args:
            code (str):
                The short code to remove.

            **kwargs:
                Additional keyword arguments, used by data store.

        Raises:
            StorageUnavailableError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def exists(self, code: str, **kwargs) -> bool:
        """Check whether a short code is currently in use.

        Args:
            code (str):
                The short code to check.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            bool: True if a mapping is stored for the code.

        Raises:
            StorageUnavailableError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def count(self, **kwargs) -> int:
        """Return the number of stored links.

        Raises:
            StorageUnavailableError:
                If there is an error in the data store.
        """
        pass
