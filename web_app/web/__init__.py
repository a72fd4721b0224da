"""HTML pages and the redirect handler."""

from .routes import router as web_router

__all__ = ["web_router"]
