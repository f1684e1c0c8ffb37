"""Data Access Object (DAO) implementation for the link history log in Redis

The whole history is one JSON array (newest first) stored under a single,
well-known key:

    <prefix>:history  ->  [{"code": ..., "url": ..., "createdAt": ...}, ...]

Every write is a read-modify-write of the full array. To avoid lost updates
between concurrent writers, the cycle runs as an optimistic Redis transaction:

    WATCH <prefix>:history
    GET   <prefix>:history          (snapshot)
    ... prepend / filter / truncate in Python ...
    MULTI
    SET   <prefix>:history <new array>
    EXEC                            (aborts with WatchError if the key changed)

An aborted transaction is retried on a fresh snapshot, up to `write_attempts` times.

Classes:
    HistoryRedisDAO:
        DAO for the bounded history log in a Redis datastore.

Example:
    >>> from kvshortener.models import HistoryRecordModel
    >>> from kvshortener.dao.redis import HistoryRedisDAO

    >>> dao = HistoryRedisDAO(prefix="app:dev")
    >>> dao.append(HistoryRecordModel.now("abc123", "https://example.com/page"))
    <HistoryRedisDAO>
    >>> [record.code for record in dao.list()]
    ['abc123']
"""

import logging
from collections.abc import Callable

import redis
from beartype import beartype

from kvshortener.constants import HistoryDefaults
from kvshortener.models import HistoryRecordModel
from kvshortener.dao.base import HistoryBaseDAO
from kvshortener.dao.redis.mixins import RedisClientMixin
from kvshortener.dao.redis.helpers import handle_redis_connection_error
from kvshortener.dao.serialization import dumps_history, loads_history
from kvshortener.dao.exceptions import HistoryConflictError


logger = logging.getLogger(__name__)


class HistoryRedisDAO(RedisClientMixin, HistoryBaseDAO):
    """Redis-based Data Access Object (DAO) for the bounded history log

    Attributes (see RedisClientMixin and HistoryBaseDAO):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.
        capacity (int):
            Maximum number of records kept in the log.
        write_attempts (int):
            Optimistic transaction attempts before HistoryConflictError is raised.

    Methods:
        append(record: HistoryRecordModel, **kwargs) -> HistoryRedisDAO:
            Prepend a record and truncate to capacity.
            Raises HistoryConflictError when concurrent writers exhaust the retries.
            Raises StorageUnavailableError on connectivity issues or commands rejected by Redis.

        list(**kwargs) -> list[HistoryRecordModel]:
            Return the whole log, newest first. Corrupt content reads as [].
            Raises StorageUnavailableError on connectivity issues or commands rejected by Redis.

        remove(code: str, **kwargs) -> HistoryRedisDAO:
            Drop every record with the given code.
            Raises HistoryConflictError when concurrent writers exhaust the retries.
            Raises StorageUnavailableError on connectivity issues or commands rejected by Redis.
    """

    def __init__(
        self,
        capacity: int = HistoryDefaults.CAPACITY,
        write_attempts: int = HistoryDefaults.WRITE_ATTEMPTS,
        **redis_kwargs,
    ):
        if write_attempts < 1:
            raise ValueError(f'Write attempts must be a positive integer (given value: {write_attempts}).')

        HistoryBaseDAO.__init__(self, capacity=capacity)
        RedisClientMixin.__init__(self, **redis_kwargs)
        self.write_attempts = write_attempts

    @handle_redis_connection_error
    @beartype
    def append(self, record: HistoryRecordModel, **kwargs) -> 'HistoryRedisDAO':
        self._update(lambda records: self._prepend(records, record))
        return self

    @handle_redis_connection_error
    def list(self, **kwargs) -> list[HistoryRecordModel]:
        return loads_history(self.redis.get(self.keys.history_key()))

    @handle_redis_connection_error
    @beartype
    def remove(self, code: str, **kwargs) -> 'HistoryRedisDAO':
        self._update(lambda records: self._without(records, code))
        return self

    def _update(self, mutate: Callable) -> None:
        """Apply `mutate` to the stored log inside a WATCH/MULTI/EXEC transaction

        Args:
            mutate (Callable[[list[HistoryRecordModel]], list[HistoryRecordModel]]):
                Pure function computing the new log from the current snapshot.

        Raises:
            HistoryConflictError:
                If every attempt was aborted by a concurrent modification.
        """
        history_key = self.keys.history_key()

        for attempt in range(1, self.write_attempts + 1):
            with self.redis.pipeline(transaction=True) as pipe:
                try:
                    pipe.watch(history_key)
                    records = mutate(loads_history(pipe.get(history_key)))
                    pipe.multi()
                    pipe.set(history_key, dumps_history(records))
                    pipe.execute()
                except redis.exceptions.WatchError:
                    logger.debug(
                        'History log changed during update, retrying.',
                        extra={'attempt': attempt, 'writeAttempts': self.write_attempts},
                    )
                    continue
                else:
                    return

        raise HistoryConflictError(f'History log kept changing concurrently; gave up after {self.write_attempts} attempts.')
