"""In-memory implementation of LinkBaseDAO

Backs the link store with a plain dictionary. Used by the `memory` backend for
local runs and as a drop-in fake for the Redis DAO in tests.

Example:
    >>> dao = LinkMemoryDAO()
    >>> dao.put('abc123', 'https://example.com').get('abc123')
    'https://example.com'
"""

from beartype import beartype

from kvshortener.dao.base import LinkBaseDAO


class LinkMemoryDAO(LinkBaseDAO):
    """Dictionary-backed link store (process-local, not shared across Lambda containers)."""

    def __init__(self, links: dict[str, str] | None = None):
        self.links = {} if links is None else links

    @beartype
    def put(self, code: str, url: str, **kwargs) -> 'LinkMemoryDAO':
        self.links[code] = url
        return self

    @beartype
    def get(self, code: str, **kwargs) -> str | None:
        return self.links.get(code)

    @beartype
    def delete(self, code: str, **kwargs) -> None:
        self.links.pop(code, None)

    @beartype
    def exists(self, code: str, **kwargs) -> bool:
        return code in self.links

    def count(self, **kwargs) -> int:
        return len(self.links)
