import logging

from kvshortener.dao.base import LinkBaseDAO
from kvshortener.utils.shortener import is_valid_shortcode


logger = logging.getLogger(__name__)


class RedirectResolver:
    """Read path: short code -> destination URL, or None when the link is not found.

    Only ever reads the link store; the history log plays no part in resolution.
    """

    def __init__(self, links: LinkBaseDAO):
        self.links = links

    def resolve(self, code: str) -> str | None:
        if not is_valid_shortcode(code):
            logger.debug('Malformed short code, skipping lookup.', extra={'shortcode': code})
            return None
        return self.links.get(code)
