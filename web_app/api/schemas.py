"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from quicklink.storage.models import LinkRecord


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    url: str = Field(..., description="The URL to shorten", max_length=2048)
    validity_minutes: Optional[float] = Field(None, description="Minutes until the link's expiry (default 30)")
    custom_code: Optional[str] = Field(None, description="Optional custom short code", max_length=32)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://example.com/very/long/path/to/resource",
                    "validity_minutes": 30,
                    "custom_code": None
                },
                {
                    "url": "https://github.com/user/repo",
                    "validity_minutes": 120,
                    "custom_code": "myrepo"
                }
            ]
        }
    }


class VisitResponse(BaseModel):
    """A recorded visit."""

    time: datetime
    referrer: str


class LinkResponse(BaseModel):
    """A short link with its statistics."""

    id: int = Field(..., description="Creation time in milliseconds since the epoch")
    original: str = Field(..., description="The original long URL")
    code: str = Field(..., description="The short code")
    short: str = Field(..., description="The complete short link")
    expiry: datetime = Field(..., description="Informational expiry")
    expired: bool = Field(..., description="Whether the expiry has passed")
    clicks: int = Field(..., description="Number of recorded visits")
    history: List[VisitResponse] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: LinkRecord, now: datetime) -> "LinkResponse":
        """Build a response from a stored record."""
        return cls(
            id=record.id,
            original=record.original,
            code=record.code,
            short=record.short,
            expiry=record.expiry,
            expired=record.is_expired(now),
            clicks=record.clicks,
            history=[
                VisitResponse(time=event.time, referrer=event.referrer)
                for event in record.history
            ],
        )


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    storage: str = Field(..., description="Storage status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    detail: str = Field(..., description="Error message")


class StatisticsResponse(BaseModel):
    """Statistics response."""

    total_links: int
    total_clicks: int
    expired_links: int
    storage: str
