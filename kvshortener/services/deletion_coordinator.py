"""Remove a short link from both the link store and the history log

The two stores are independent, so deletion is two steps in a fixed order:

    1- LinkBaseDAO.delete(code)      failure -> report failure, history untouched
    2- HistoryBaseDAO.remove(code)   failure -> report success, history left stale

Link resolution correctness takes precedence over audit completeness: once the
link is gone the deletion has succeeded, even if a stale history record remains.
"""

import logging
from dataclasses import dataclass

from kvshortener.dao.base import LinkBaseDAO, HistoryBaseDAO
from kvshortener.dao.exceptions import DAOError, StorageUnavailableError


logger = logging.getLogger(__name__)


# fmt: off
@dataclass(frozen=True)
class DeletionResult:
    success: bool                       # True once the link store no longer holds the code
    error_code: str | None = None       # Error tag of the failing step, if any
    history_stale: bool = False         # True if a history record may have been left behind
# fmt: on


class DeletionCoordinator:
    def __init__(self, links: LinkBaseDAO, history: HistoryBaseDAO):
        self.links = links
        self.history = history

    def delete(self, code: str) -> DeletionResult:
        """Delete a short link. Deleting an absent code succeeds.

        Example:
            >>> coordinator.delete('abc123')
            DeletionResult(success=True, error_code=None, history_stale=False)
        """
        try:
            self.links.delete(code)
        except StorageUnavailableError as e:
            logger.error('Failed to delete link.', extra={'shortcode': code, 'error': e.error_code})
            return DeletionResult(success=False, error_code=e.error_code)

        try:
            self.history.remove(code)
        except DAOError as e:
            logger.warning(
                'Link deleted but history record could not be removed.',
                extra={'shortcode': code, 'error': e.error_code},
            )
            return DeletionResult(success=True, error_code=e.error_code, history_stale=True)

        logger.debug('Deleted link and history records.', extra={'shortcode': code})
        return DeletionResult(success=True)
