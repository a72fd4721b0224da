"""Millisecond timestamps and their ISO-8601 wire form.

Records carry creation time as integer milliseconds since the epoch and
serialize dates the way browsers do (``2024-01-01T12:00:00.000Z``), so every
datetime produced here is UTC with millisecond precision.
"""

import time
from datetime import datetime, timedelta, timezone
from typing import Union


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def now_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def from_ms(ms: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime.
    
    Uses timedelta arithmetic rather than ``fromtimestamp`` so that the
    result is exact (no float rounding of the millisecond part).
    """
    return EPOCH + timedelta(milliseconds=ms)


def to_ms(value: datetime) -> int:
    """Convert a datetime to epoch milliseconds."""
    return (ensure_utc(value) - EPOCH) // timedelta(milliseconds=1)


def ensure_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_iso(value: datetime) -> str:
    """Format a datetime as ISO-8601 UTC with milliseconds and a Z suffix."""
    text = ensure_utc(value).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def parse_iso(value: Union[str, datetime]) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.
    
    Raises:
        ValueError: If the value is not a parseable timestamp
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    if not isinstance(value, str):
        raise ValueError(f"Expected ISO-8601 string, got {type(value).__name__}")
    
    text = value.strip()
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    return ensure_utc(datetime.fromisoformat(text))
