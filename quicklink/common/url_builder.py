"""Short link building for QuickLink."""


def build_short_url(
    short_code: str,
    origin: str,
    route_prefix: str = "#",
) -> str:
    """Build the fully-qualified short link for a code.
    
    The default prefix produces fragment-routed links
    (``https://example.com/#/abc123``), which resolve without any
    server-side route table.
    
    Args:
        short_code: The short code
        origin: Scheme and host (e.g., https://example.com)
        route_prefix: Segment between origin and code ("" for /abc123)
        
    Returns:
        Complete short link
    """
    base = origin.rstrip("/")
    prefix = route_prefix.strip("/")
    
    if prefix:
        return f"{base}/{prefix}/{short_code}"
    return f"{base}/{short_code}"
