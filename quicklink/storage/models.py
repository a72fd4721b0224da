"""Record schema for the persisted link collection."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..common.timestamps import from_ms, parse_iso, to_iso, ensure_utc


logger = logging.getLogger(__name__)


@dataclass
class VisitEvent:
    """A single resolution of a short code."""
    
    time: datetime
    referrer: str = ""
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"time": to_iso(self.time), "referrer": self.referrer}
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VisitEvent":
        """Create from dictionary."""
        return cls(
            time=parse_iso(data["time"]),
            referrer=str(data.get("referrer") or ""),
        )


@dataclass
class LinkRecord:
    """A shortened URL together with its visit statistics."""
    
    id: int
    original: str
    code: str
    short: str
    expiry: datetime
    clicks: int = 0
    history: List[VisitEvent] = field(default_factory=list)
    
    @property
    def created_at(self) -> datetime:
        """Creation time, recovered from the millisecond id."""
        return from_ms(self.id)
    
    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Whether the informational expiry has passed.
        
        Nothing in the store acts on this; it exists for display.
        """
        if now is None:
            now = datetime.now(self.expiry.tzinfo)
        return ensure_utc(now) >= self.expiry
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted dictionary layout."""
        return {
            "id": self.id,
            "original": self.original,
            "short": self.short,
            "code": self.code,
            "expiry": to_iso(self.expiry),
            "clicks": self.clicks,
            "history": [event.to_dict() for event in self.history],
        }
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LinkRecord":
        """Create from a persisted dictionary, normalizing loose shapes.
        
        Raises:
            KeyError: If id, original, code or expiry is missing
            TypeError: If the data is not a mapping or a field has the wrong type
            ValueError: If a numeric or timestamp field cannot be parsed
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected an object, got {type(data).__name__}")
        
        original = data["original"]
        code = data["code"]
        if not isinstance(original, str) or not isinstance(code, str):
            raise TypeError("'original' and 'code' must be strings")
        
        history = []
        for item in data.get("history") or []:
            if not isinstance(item, dict) or not item.get("time"):
                continue
            try:
                history.append(VisitEvent.from_dict(item))
            except ValueError:
                continue
        
        # The click count always mirrors the surviving history
        stored_clicks = data.get("clicks")
        if stored_clicks is not None and stored_clicks != len(history):
            logger.warning(
                f"Record '{code}' stores clicks={stored_clicks!r} but has "
                f"{len(history)} visits; using {len(history)}"
            )
        
        return cls(
            id=int(data["id"]),
            original=original,
            code=code,
            short=str(data.get("short") or ""),
            expiry=parse_iso(data["expiry"]),
            clicks=len(history),
            history=history,
        )
