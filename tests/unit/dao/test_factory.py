"""Unit tests for the DAO factory

Test coverage includes:

1. Redis backend: both DAOs share one client and the given prefix.
2. Memory backend: process-wide singletons are returned.
3. Unsupported backends raise BadConfigurationError.
"""

from unittest.mock import MagicMock

import pytest

from kvshortener.dao import factory
from kvshortener.dao.memory import LinkMemoryDAO, HistoryMemoryDAO
from kvshortener.dao.redis import LinkRedisDAO, HistoryRedisDAO
from kvshortener.exceptions import BadConfigurationError


def test_create_redis_daos(monkeypatch):
    redis_mock = MagicMock()
    monkeypatch.setattr('kvshortener.dao.redis.mixins.redis.Redis', redis_mock)

    links, history = factory.create_daos({'redis': {'host': 'redis.test', 'port': 6380, 'db': 2}}, prefix='testapp:test')

    assert isinstance(links, LinkRedisDAO)
    assert isinstance(history, HistoryRedisDAO)
    redis_mock.assert_called_once_with(
        host='redis.test',
        port=6380,
        db=2,
        decode_responses=True,
        username=None,
        password=None,
        socket_timeout=None,
    )
    assert history.redis is links.redis
    assert links.keys.prefix == history.keys.prefix == 'testapp:test'


def test_create_memory_daos():
    links, history = factory.create_daos({'memory': {}})
    links_again, history_again = factory.create_daos({'memory': {}})

    assert isinstance(links, LinkMemoryDAO)
    assert isinstance(history, HistoryMemoryDAO)
    assert links is links_again
    assert history is history_again


@pytest.mark.parametrize('app_config', [{}, {'dynamodb': {}}])
def test_unsupported_backend(app_config):
    with pytest.raises(BadConfigurationError):
        factory.create_daos(app_config)
