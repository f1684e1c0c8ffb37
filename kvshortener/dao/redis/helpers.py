import functools
from typing import Any
from collections.abc import Callable

import redis

from kvshortener.dao.exceptions import StorageUnavailableError


__all__ = ['handle_redis_connection_error']


def _redis_address(client: redis.Redis) -> str:
    info = client.connection_pool.connection_kwargs
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


def handle_redis_connection_error[F: Callable[..., Any]](method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle connection errors, timeouts and rejected commands

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise redis.exceptions.ConnectionError,
            redis.exceptions.TimeoutError or redis.exceptions.ResponseError (OOM, MISCONF, READONLY, ...).

    Returns:
        Callable[..., Any]:
            Wrapped method which raises StorageUnavailableError on any of these Redis failures.

    Example:
        >>> @handle_redis_connection_error
        ... def get(self, code):
        ...     return self.redis.get(code)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise StorageUnavailableError(f"Can't connect to Redis at {_redis_address(self.redis)}.") from e
        except redis.exceptions.ResponseError as e:
            # ReadOnlyError and ExecAbortError are ResponseError subclasses
            raise StorageUnavailableError(f'Redis at {_redis_address(self.redis)} rejected the command: {e}') from e

    return wrapper
