"""Web application for QuickLink."""

from .app_factory import create_app

__all__ = ["create_app"]
