"""Link record lifecycle: create, lookup, visit tracking and listing.

Every operation re-reads the full collection from storage before acting on
it, and every mutation writes the full collection back. There is no locking:
two writers that interleave their read-modify-write sequences lose one of
the updates (last write wins).
"""

import logging
from typing import Callable, List, Optional

from .shortcode import ShortCodeGenerator
from .storage.base import LinkStorageBase
from .storage.models import LinkRecord, VisitEvent
from .common.timestamps import now_ms, from_ms
from .common.url_builder import build_short_url


DEFAULT_VALIDITY_MINUTES = 30

# Ten years
MAX_VALIDITY_MINUTES = 10 * 365 * 24 * 60


class LinkStore:
    """Manages the collection of shortened links against a storage port."""

    def __init__(
        self,
        storage: LinkStorageBase,
        origin: str,
        route_prefix: str = "#",
        generator: Optional[ShortCodeGenerator] = None,
        clock: Optional[Callable[[], int]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize link store.

        Args:
            storage: Backend holding the serialized collection
            origin: Origin used to build short links (e.g., https://example.com)
            route_prefix: Segment between origin and code
            generator: Optional short code generator
            clock: Optional callable returning current time in milliseconds
            logger: Optional logger
        """
        self.storage = storage
        self.origin = origin
        self.route_prefix = route_prefix
        self.generator = generator or ShortCodeGenerator()
        self.clock = clock or now_ms
        self.logger = logger or logging.getLogger(__name__)

    def create(
        self,
        original: str,
        validity_minutes: float = DEFAULT_VALIDITY_MINUTES,
        custom_code: Optional[str] = None,
        origin: Optional[str] = None,
    ) -> LinkRecord:
        """Create a short link and append it to the collection.

        The URL is stored as given; callers validate it beforehand. A
        custom code is used verbatim and is not checked against existing
        records.

        Args:
            original: The original long URL
            validity_minutes: Minutes until the informational expiry
            custom_code: Optional short code (a generated one if empty)
            origin: Optional origin overriding the configured one

        Returns:
            The created record

        Raises:
            StorageError: If the collection cannot be written back
        """
        code = custom_code or self.generator.generate_random()
        created_ms = self.clock()

        record = LinkRecord(
            id=created_ms,
            original=original,
            code=code,
            short=build_short_url(code, origin or self.origin, self.route_prefix),
            # Whole milliseconds, so the record survives serialization unchanged
            expiry=from_ms(created_ms + round(validity_minutes * 60_000)),
        )

        records = self.storage.read()
        records.append(record)
        self.storage.write(records)

        self.logger.info(f"Created short link: {code} -> {original}")
        return record

    def lookup(self, code: str) -> Optional[LinkRecord]:
        """Find the first record with the given code.

        Args:
            code: The short code

        Returns:
            The record, or None if no record has this code
        """
        for record in self.storage.read():
            if record.code == code:
                return record
        return None

    def record_visit(self, code: str, referrer: str = "") -> Optional[str]:
        """Resolve a code and record the visit.

        Expiry is not checked: an expired link still resolves. When the
        code is unknown nothing is written.

        Args:
            code: The short code
            referrer: Referrer of the visit (may be empty)

        Returns:
            The original URL, or None if no record has this code

        Raises:
            StorageError: If the collection cannot be written back
        """
        records = self.storage.read()

        record = next((r for r in records if r.code == code), None)
        if record is None:
            self.logger.warning(f"Short code not found: {code}")
            return None

        record.clicks += 1
        record.history.append(
            VisitEvent(time=from_ms(self.clock()), referrer=referrer or "")
        )
        self.storage.write(records)

        self.logger.info(f"Visit {record.clicks} for {code} -> {record.original}")
        return record.original

    def list_all(self) -> List[LinkRecord]:
        """Return every record in storage (insertion) order."""
        return self.storage.read()
