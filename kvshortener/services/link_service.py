"""Create, resolve, list and delete short links

LinkService wires the core components together for the Lambda handlers. Both
stores are injected, so tests and local runs can substitute in-memory DAOs.

Create flow:
    KeyGenerator.generate() -> LinkBaseDAO.put(code, url) -> HistoryBaseDAO.append(record) -> code

Example:
    >>> from kvshortener.dao.memory import LinkMemoryDAO, HistoryMemoryDAO
    >>> service = LinkService(LinkMemoryDAO(), HistoryMemoryDAO())
    >>> code = service.create('https://example.com/a')
    >>> service.resolve(code)
    'https://example.com/a'
    >>> [record.code for record in service.history()] == [code]
    True
"""

import logging

from kvshortener.models import HistoryRecordModel
from kvshortener.dao.base import LinkBaseDAO, HistoryBaseDAO
from kvshortener.dao.exceptions import DAOError
from kvshortener.services.key_generator import KeyGenerator
from kvshortener.services.redirect_resolver import RedirectResolver
from kvshortener.services.deletion_coordinator import DeletionCoordinator, DeletionResult


logger = logging.getLogger(__name__)


class LinkService:
    def __init__(
        self,
        links: LinkBaseDAO,
        history: HistoryBaseDAO,
        key_generator: KeyGenerator | None = None,
    ):
        self.links = links
        self.history_log = history
        self.key_generator = key_generator or KeyGenerator(links)
        self.resolver = RedirectResolver(links)
        self.deleter = DeletionCoordinator(links, history)

    def create(self, url: str) -> str:
        """Shorten a validated absolute URL and return its short code

        The history append runs after the link is committed. A failing append is
        logged and swallowed: the link stays resolvable and is never rolled back.

        Raises:
            KeySpaceExhaustedError:
                If no free short code could be drawn.
            StorageUnavailableError:
                If the link store fails while checking or writing the code.
        """
        code = self.key_generator.generate()
        self.links.put(code, url)
        logger.debug('Stored link.', extra={'shortcode': code})

        record = HistoryRecordModel.now(code=code, url=url)
        try:
            self.history_log.append(record)
        except DAOError as e:
            logger.warning(
                'Link created but history record could not be appended.',
                extra={'shortcode': code, 'error': e.error_code},
            )
        return code

    def resolve(self, code: str) -> str | None:
        return self.resolver.resolve(code)

    def delete(self, code: str) -> DeletionResult:
        return self.deleter.delete(code)

    def history(self) -> list[HistoryRecordModel]:
        return self.history_log.list()

    def count(self) -> int:
        return self.links.count()
