"""Input validation and summaries on top of the link store."""

import logging
import math
from typing import Any, Dict, List, Optional

from .link_store import LinkStore, DEFAULT_VALIDITY_MINUTES, MAX_VALIDITY_MINUTES
from .storage.models import LinkRecord
from .common.timestamps import from_ms
from .common.validators import is_valid_url, is_valid_short_code


class ShortenerService:
    """Service layer shared by the web pages, the JSON API and the CLI."""

    def __init__(
        self,
        store: LinkStore,
        logger: Optional[logging.Logger] = None,
        default_validity_minutes: int = DEFAULT_VALIDITY_MINUTES,
    ):
        """Initialize shortener service.

        Args:
            store: Link store instance
            logger: Optional logger
            default_validity_minutes: Validity used when none is given
        """
        self.store = store
        self.logger = logger or logging.getLogger(__name__)
        self.default_validity_minutes = default_validity_minutes

    def shorten(
        self,
        url: str,
        validity_minutes: Optional[float] = None,
        custom_code: Optional[str] = None,
        origin: Optional[str] = None,
    ) -> LinkRecord:
        """Validate input and create a short link.

        Args:
            url: The original long URL
            validity_minutes: Minutes until expiry (default if None)
            custom_code: Optional custom short code (blank means generated)
            origin: Optional origin for the short link

        Returns:
            The created record

        Raises:
            ValueError: If validation fails; the store is not touched
            StorageError: If the collection cannot be written
        """
        is_valid, error = is_valid_url(url)
        if not is_valid:
            raise ValueError(f"Invalid URL: {error}")

        if validity_minutes is None:
            validity_minutes = self.default_validity_minutes
        if isinstance(validity_minutes, float) and not math.isfinite(validity_minutes):
            raise ValueError("Validity must be a finite number of minutes")
        if validity_minutes < 1:
            raise ValueError("Validity must be at least 1 minute")
        if validity_minutes > MAX_VALIDITY_MINUTES:
            raise ValueError(f"Validity must be at most {MAX_VALIDITY_MINUTES} minutes")

        custom_code = custom_code.strip() if custom_code else None
        if custom_code:
            is_valid, error = is_valid_short_code(custom_code)
            if not is_valid:
                raise ValueError(f"Invalid short code: {error}")

        return self.store.create(
            url,
            validity_minutes=validity_minutes,
            custom_code=custom_code,
            origin=origin,
        )

    def resolve(self, code: str, referrer: str = "") -> Optional[str]:
        """Resolve a code to its original URL, recording the visit."""
        return self.store.record_visit(code, referrer=referrer)

    def get_link(self, code: str) -> Optional[LinkRecord]:
        """Get a record without recording a visit."""
        return self.store.lookup(code)

    def list_links(self) -> List[LinkRecord]:
        """List every record in storage order."""
        return self.store.list_all()

    def get_statistics(self) -> Dict[str, Any]:
        """Summarize the collection.

        Returns:
            Dictionary with total_links, total_clicks, expired_links, storage
        """
        records = self.store.list_all()
        now = from_ms(self.store.clock())

        return {
            "total_links": len(records),
            "total_clicks": sum(r.clicks for r in records),
            "expired_links": sum(1 for r in records if r.is_expired(now)),
            "storage": self.store.storage.name,
        }

    def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        storage_healthy = self.store.storage.health_check()

        return {
            "storage": storage_healthy,
            "overall": storage_healthy,
        }

    def close(self) -> None:
        """Close storage connections."""
        self.store.storage.close()
