from kvshortener.dao.redis.redis_key_schema import RedisKeySchema
from kvshortener.dao.redis.mixins import RedisClientMixin
from kvshortener.dao.redis.link_redis_dao import LinkRedisDAO
from kvshortener.dao.redis.history_redis_dao import HistoryRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'LinkRedisDAO',
    'HistoryRedisDAO',
]
