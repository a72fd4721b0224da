"""Input validation for QuickLink.

These checks run before anything reaches the link store; the store itself
accepts any string it is given.
"""

import re
from urllib.parse import urlparse
from typing import Iterable, Optional, Tuple


# Codes that would shadow the web routes
RESERVED_CODES = {
    "api", "stats", "static", "health", "docs", "redoc", "favicon.ico",
}

_SHORT_CODE_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def is_valid_url(
    url: str,
    allowed_schemes: Optional[Iterable[str]] = None,
) -> Tuple[bool, str]:
    """Validate that a string is an absolute URL (scheme and host).
    
    Args:
        url: The URL to validate
        allowed_schemes: Optional whitelist of schemes (any scheme if None)
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"
    
    if len(url) > 2048:
        return False, "URL is too long (max 2048 characters)"
    
    if url != url.strip() or any(c.isspace() for c in url):
        return False, "URL must not contain whitespace"
    
    try:
        result = urlparse(url)
        # Accessing .port validates the port component
        result.port
    except ValueError as e:
        return False, f"Invalid URL format: {e}"
    
    if not result.scheme:
        return False, "URL must include a scheme (e.g. https://)"
    
    if allowed_schemes is not None and result.scheme.lower() not in {
        s.lower() for s in allowed_schemes
    }:
        return False, f"URL scheme '{result.scheme}' is not allowed"
    
    if not result.hostname:
        return False, "URL must have a valid host"
    
    return True, ""


def is_valid_short_code(
    short_code: str,
    min_length: int = 1,
    max_length: int = 32,
) -> Tuple[bool, str]:
    """Validate a user-supplied short code.
    
    Args:
        short_code: The short code to validate
        min_length: Minimum length for short code
        max_length: Maximum length for short code
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_code or not isinstance(short_code, str):
        return False, "Short code is required"
    
    if len(short_code) < min_length:
        return False, f"Short code must be at least {min_length} characters"
    
    if len(short_code) > max_length:
        return False, f"Short code must be at most {max_length} characters"
    
    if not _SHORT_CODE_RE.match(short_code):
        return False, "Short code can only contain letters, numbers, hyphens, and underscores"
    
    if short_code.lower() in RESERVED_CODES:
        return False, f"'{short_code}' is a reserved word and cannot be used"
    
    return True, ""
