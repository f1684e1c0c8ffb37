"""Collision-avoiding short code generation over the shared key space

Example:
    >>> from kvshortener.dao.memory import LinkMemoryDAO
    >>> generator = KeyGenerator(LinkMemoryDAO())
    >>> generator.generate()
    'p0x7qa'
"""

import logging
from collections.abc import Callable

from kvshortener.constants import KeyGeneration
from kvshortener.dao.base import LinkBaseDAO
from kvshortener.exceptions import KeySpaceExhaustedError
from kvshortener.utils.shortener import generate_shortcode


logger = logging.getLogger(__name__)


class KeyGenerator:
    """Draw short codes that are not in use in the link store

    Attributes:
        links (LinkBaseDAO):
            Link store consulted for existence checks.
        max_attempts (int):
            Candidates drawn before giving up. Defaults to KeyGeneration.MAX_ATTEMPTS.
        draw (Callable[[], str]):
            Candidate source. Defaults to generate_shortcode.

    NOTE:
        The check does not reserve the code. A concurrent create can pick the same
        code between exists() and the caller's put(); the later write wins.
    """

    def __init__(
        self,
        links: LinkBaseDAO,
        max_attempts: int = KeyGeneration.MAX_ATTEMPTS,
        draw: Callable[[], str] = generate_shortcode,
    ):
        if max_attempts < 1:
            raise ValueError(f'Max attempts must be a positive integer (given value: {max_attempts}).')

        self.links = links
        self.max_attempts = max_attempts
        self.draw = draw

    def generate(self) -> str:
        """Return a short code currently unused in the link store

        Raises:
            KeySpaceExhaustedError:
                If every one of the `max_attempts` candidates was already taken.
            StorageUnavailableError:
                If the existence check fails.
        """
        for attempt in range(1, self.max_attempts + 1):
            code = self.draw()
            if not self.links.exists(code):
                return code
            logger.warning('Short code collision, drawing a new candidate.', extra={'shortcode': code, 'attempt': attempt})

        raise KeySpaceExhaustedError(f'No free short code found after {self.max_attempts} attempts.')
