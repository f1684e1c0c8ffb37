"""Build the link store and history log for the configured backend

The Lambda configuration (see kvshortener.utils.config.load_config) holds a
single section keyed by the active backend:

    {"redis": {"host": "...", "port": 6379, "db": 0}}   -> LinkRedisDAO + HistoryRedisDAO
    {"memory": {}}                                      -> LinkMemoryDAO + HistoryMemoryDAO

Redis DAOs share one client (and its connection pool). Memory DAOs are process
singletons so consecutive invocations in one container see the same data.
"""

import logging

from kvshortener.types import LambdaConfiguration
from kvshortener.exceptions import BadConfigurationError
from kvshortener.dao.base import LinkBaseDAO, HistoryBaseDAO
from kvshortener.dao.redis import LinkRedisDAO, HistoryRedisDAO
from kvshortener.dao.memory import LinkMemoryDAO, HistoryMemoryDAO


logger = logging.getLogger(__name__)

_memory_links = LinkMemoryDAO()
_memory_history = HistoryMemoryDAO()


def create_daos(app_config: LambdaConfiguration, prefix: str | None = None) -> tuple[LinkBaseDAO, HistoryBaseDAO]:
    """Create (link DAO, history DAO) for the active backend

    Args:
        app_config (LambdaConfiguration):
            Lambda configuration section, keyed by backend name.
        prefix (str | None):
            Namespace prefix for Redis keys, usually app_prefix().

    Returns:
        tuple[LinkBaseDAO, HistoryBaseDAO]

    Raises:
        BadConfigurationError:
            If no supported backend is configured.
        StorageUnavailableError:
            If the Redis healthcheck fails.

    Example:
        >>> links, history = create_daos({'redis': {'host': 'localhost', 'port': 6379, 'db': 0}}, prefix='kvshortener:dev')
    """
    if 'redis' in app_config:
        logger.debug('Using Redis as the backend database for links and history.')
        redis_config = {f'redis_{k}': v for k, v in (app_config['redis'] or {}).items()}
        link_dao = LinkRedisDAO(**redis_config, prefix=prefix)
        history_dao = HistoryRedisDAO(redis_client=link_dao.redis, prefix=prefix)
        return link_dao, history_dao

    if 'memory' in app_config:
        logger.debug('Using process memory as the backend database for links and history.')
        return _memory_links, _memory_history

    raise BadConfigurationError(f'Unsupported backend configuration (given sections: {sorted(app_config)}).')
