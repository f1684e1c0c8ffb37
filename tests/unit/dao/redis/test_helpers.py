"""Unit tests for handle_redis_connection_error decorator.

This test suite verifies that the decorator properly handles Redis
connection failures and preserves the original method's behavior.

Test coverage includes:
    1. Normal function execution
       - Ensures the wrapped method executes and returns its result.
    2. Connection error handling
       - Ensures Redis connection errors and timeouts are converted into StorageUnavailableError.
       - Ensures commands rejected by the server (OOM, READONLY, ...) are converted too.
       - Ensures non-Redis errors pass through untouched.
    3. Function metadata preservation
       - Confirms functools.wraps preserves the original function's name and docstring.
"""

from unittest.mock import MagicMock

import pytest
import redis

from kvshortener.dao.redis.helpers import handle_redis_connection_error
from kvshortener.dao.exceptions import StorageUnavailableError


class DummyDAO:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.redis = MagicMock()
        self.redis.connection_pool.connection_kwargs = {
            'host': 'localhost',
            'port': 6379,
            'db': 0,
        }

    @handle_redis_connection_error
    def ping(self):
        if self.error is not None:
            raise self.error
        return 'OK'


# -------------------------------
# 1. Normal execution
# -------------------------------


def test_decorator_allows_normal_execution():
    """Ensure the wrapped function executes normally when no error occurs."""
    dao = DummyDAO()
    assert dao.ping() == 'OK'


# -------------------------------
# 2. Connection error handling
# -------------------------------


@pytest.mark.parametrize(
    'error',
    [
        redis.exceptions.ConnectionError('Cannot connect'),
        redis.exceptions.TimeoutError('Timed out'),
    ],
)
def test_decorator_transforms_redis_connection_error(error):
    """Ensure Redis connectivity errors are re-raised as StorageUnavailableError."""
    dao = DummyDAO(error=error)

    with pytest.raises(StorageUnavailableError, match="Can't connect to Redis at localhost:6379/0.") as exc_info:
        dao.ping()

    assert exc_info.value.__cause__ is error


@pytest.mark.parametrize(
    'error',
    [
        redis.exceptions.ResponseError('OOM command not allowed when used memory > maxmemory.'),
        redis.exceptions.ResponseError('WRONGTYPE Operation against a key holding the wrong kind of value'),
        redis.exceptions.ReadOnlyError("You can't write against a read only replica."),
        redis.exceptions.ExecAbortError('EXECABORT Transaction discarded because of previous errors.'),
    ],
)
def test_decorator_transforms_redis_response_error(error):
    """Ensure commands rejected by the Redis server are re-raised as StorageUnavailableError."""
    dao = DummyDAO(error=error)

    with pytest.raises(StorageUnavailableError, match='Redis at localhost:6379/0 rejected the command') as exc_info:
        dao.ping()

    assert exc_info.value.__cause__ is error


def test_decorator_ignores_non_redis_errors():
    """Ensure errors raised outside Redis are not masked."""
    dao = DummyDAO(error=ValueError('bad value'))

    with pytest.raises(ValueError):
        dao.ping()


# -------------------------------
# 3. Function metadata preservation
# -------------------------------


def test_decorator_preserves_function_metadata():
    """Ensure function name and docstring are preserved via functools.wraps."""

    @handle_redis_connection_error
    def sample_function():
        """This is a sample docstring."""
        return 'OK'

    assert sample_function.__name__ == 'sample_function'
    assert 'sample docstring' in sample_function.__doc__
