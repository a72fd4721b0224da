"""Core business logic for QuickLink."""

from .shortcode import ShortCodeGenerator
from .link_store import LinkStore
from .service import ShortenerService

__all__ = ["ShortCodeGenerator", "LinkStore", "ShortenerService"]
