import re
import functools
from collections.abc import Callable


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports

_GLOB_SPECIAL_CHARS = re.compile(r'([\\*?\[\]])')


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for storing data models.

    An optional prefix can be provided to namespace all generated keys.
    It is highly encouraged to set a custom prefix for each app and environment,
    e.g. "kvshortener:prod" or "kvshortener:dev".
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def link_url_key(self, code: str) -> str:
        return f'links:{code}:url'

    def link_url_pattern(self) -> str:
        # SCAN MATCH is a glob, so the prefix is escaped to match literally
        if self.prefix is None:
            return 'links:*:url'
        escaped_prefix = _GLOB_SPECIAL_CHARS.sub(r'\\\1', self.prefix)
        return f'{escaped_prefix}:links:*:url'

    @prefix_key
    def history_key(self) -> str:
        return 'history'
