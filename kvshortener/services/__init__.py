from kvshortener.services.key_generator import KeyGenerator
from kvshortener.services.redirect_resolver import RedirectResolver
from kvshortener.services.deletion_coordinator import DeletionCoordinator, DeletionResult
from kvshortener.services.link_service import LinkService


__all__ = [
    'KeyGenerator',
    'RedirectResolver',
    'DeletionCoordinator',
    'DeletionResult',
    'LinkService',
]
