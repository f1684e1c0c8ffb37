"""Data Access Object (DAO) implementation for managing short links in Redis

This module provides a Redis-based implementation of LinkBaseDAO. Each link is a
single string key holding the destination URL:

    <prefix>:links:<code>:url  ->  https://example.com/page

Responsibilities:
    - Store, retrieve and delete code -> URL mappings;
    - Check short code existence for the key generator;
    - Count stored links;
    - Translate Redis connectivity issues and rejected commands into StorageUnavailableError.

Classes:
    LinkRedisDAO:
        DAO for storing and retrieving short links in a Redis datastore.

Example:
    >>> from kvshortener.dao.redis import LinkRedisDAO

    >>> dao = LinkRedisDAO(prefix="app:dev")
    >>> dao.put("abc123", "https://example.com/page")
    <LinkRedisDAO>

    >>> dao.get("abc123")
    'https://example.com/page'
    >>> dao.exists("abc123")
    True

    >>> dao.delete("abc123")
    >>> dao.get("abc123") is None
    True
"""

from beartype import beartype

from kvshortener.dao.base import LinkBaseDAO
from kvshortener.dao.redis.mixins import RedisClientMixin
from kvshortener.dao.redis.helpers import handle_redis_connection_error


class LinkRedisDAO(RedisClientMixin, LinkBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short link mappings

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    NOTE:
        put() is a plain SET and silently overwrites. Two creates racing for the same
        code between exists() and put() resolve to whichever write lands last.
    """

    @handle_redis_connection_error
    @beartype
    def put(self, code: str, url: str, **kwargs) -> 'LinkRedisDAO':
        """Store a short link mapping in Redis

        Example:
            >>> dao.put('abc123', 'https://example.com')
            <LinkRedisDAO>
        """
        self.redis.set(self.keys.link_url_key(code), url)
        return self

    @handle_redis_connection_error
    @beartype
    def get(self, code: str, **kwargs) -> str | None:
        """Retrieve the destination URL stored for a short code

        Returns:
            str | None:
                The destination URL, or None if the code is not stored.

        Example:
            >>> dao.get('abc123')
            'https://example.com'
        """
        url = self.redis.get(self.keys.link_url_key(code))
        if isinstance(url, bytes):
            url = url.decode('utf-8')
        return url

    @handle_redis_connection_error
    @beartype
    def delete(self, code: str, **kwargs) -> None:
        # DEL on a missing key returns 0 and is not an error
        self.redis.delete(self.keys.link_url_key(code))

    @handle_redis_connection_error
    @beartype
    def exists(self, code: str, **kwargs) -> bool:
        return bool(self.redis.exists(self.keys.link_url_key(code)))

    @handle_redis_connection_error
    def count(self, **kwargs) -> int:
        """Count stored links

        Uses SCAN rather than KEYS so Redis is never blocked by a full keyspace walk.

        Example:
            >>> dao.count()
            42
        """
        return sum(1 for _ in self.redis.scan_iter(match=self.keys.link_url_pattern(), count=1000))
