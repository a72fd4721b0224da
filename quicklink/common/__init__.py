"""Common utilities for QuickLink."""

from .validators import is_valid_url, is_valid_short_code
from .headers import extract_forwarded_headers, build_base_url
from .url_builder import build_short_url
from .logging_config import setup_logging
from .timestamps import now_ms, from_ms, to_iso, parse_iso

__all__ = [
    "is_valid_url",
    "is_valid_short_code",
    "extract_forwarded_headers",
    "build_base_url",
    "build_short_url",
    "setup_logging",
    "now_ms",
    "from_ms",
    "to_iso",
    "parse_iso",
]
