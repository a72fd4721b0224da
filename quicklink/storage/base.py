"""Storage port for the link collection.

The whole collection lives under a single key as one JSON document, the
way a browser's local storage would hold it. Backends only need to get and
set that raw string; decoding, normalization and the recovery rules for bad
data live here so every backend behaves the same.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from .models import LinkRecord


DEFAULT_STORAGE_KEY = "urls"


class StorageError(RuntimeError):
    """Raised when a backend cannot read or persist the collection."""


class LinkCollection(list):
    """Records in storage order, plus the raw entries that failed to parse.

    ``unparsed`` holds ``(index, raw)`` pairs, where ``index`` is the
    entry's position in the stored array. ``write`` puts them back at
    those positions so a record this version cannot read is never lost.
    """

    def __init__(self, records=(), unparsed=None):
        super().__init__(records)
        self.unparsed = list(unparsed or [])


class LinkStorageBase(ABC):
    """Abstract key-value backend holding the serialized collection."""
    
    name = "base"
    
    def __init__(
        self,
        key: str = DEFAULT_STORAGE_KEY,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize storage.
        
        Args:
            key: Key under which the collection is stored
            logger: Optional logger instance
        """
        self.key = key
        self.logger = logger or logging.getLogger(__name__)
    
    @abstractmethod
    def get_item(self) -> Optional[str]:
        """Get the raw stored value.
        
        Returns:
            The stored string, or None if the key is absent
            
        Raises:
            StorageError: If the backend is unavailable
        """
        pass
    
    @abstractmethod
    def set_item(self, value: str) -> None:
        """Replace the raw stored value.
        
        Raises:
            StorageError: If the backend cannot persist the value
        """
        pass
    
    def read(self) -> LinkCollection:
        """Read the full collection.
        
        An absent key, an unavailable backend or an unparsable value all
        yield an empty collection. Individual malformed records are left out
        of the list but kept verbatim in ``unparsed``, so writing the
        collection back preserves them.
        
        Returns:
            Records in storage order
        """
        try:
            raw = self.get_item()
        except StorageError as e:
            self.logger.error(f"Storage read failed for key '{self.key}': {e}")
            return LinkCollection()
        
        if raw is None:
            return LinkCollection()
        
        try:
            data = json.loads(raw)
        except ValueError as e:
            self.logger.warning(f"Discarding unparsable collection under '{self.key}': {e}")
            return LinkCollection()
        
        if not isinstance(data, list):
            self.logger.warning(
                f"Discarding collection under '{self.key}': expected a list, "
                f"got {type(data).__name__}"
            )
            return LinkCollection()
        
        records = LinkCollection()
        for index, item in enumerate(data):
            try:
                records.append(LinkRecord.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                self.logger.warning(f"Keeping malformed record at index {index} as is: {e!r}")
                records.unparsed.append((index, item))
        
        return records
    
    def write(self, records: List[LinkRecord]) -> None:
        """Replace the full collection.
        
        No locking or versioning: a concurrent writer's snapshot is
        silently overwritten (last write wins).
        
        Raises:
            StorageError: If the backend cannot persist the collection
        """
        items = [record.to_dict() for record in records]
        # Records are only appended or changed in place, so the stored
        # positions of unparsed entries still hold
        for index, raw in getattr(records, "unparsed", ()):
            items.insert(min(index, len(items)), raw)
        
        payload = json.dumps(
            items,
            separators=(",", ":"),
            ensure_ascii=False,
        )
        self.set_item(payload)
        self.logger.debug(f"Wrote {len(items)} records under '{self.key}'")
    
    def health_check(self) -> bool:
        """Check if the backend is reachable."""
        try:
            self.get_item()
            return True
        except StorageError:
            return False
    
    def close(self) -> None:
        """Release backend resources."""
        pass
