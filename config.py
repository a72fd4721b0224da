"""Configuration management for QuickLink."""

from typing import Literal, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""

    # Storage settings
    storage_backend: Literal["file", "memory", "redis"] = Field(
        default="file",
        description="Where the link collection is kept: file, memory or redis"
    )

    storage_path: str = Field(
        default="quicklink.json",
        description="JSON file used by the file backend"
    )

    storage_key: str = Field(
        default="urls",
        description="Key holding the serialized link collection"
    )

    redis_url: Optional[str] = Field(
        default=None,
        description="Redis connection URL for the redis backend"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=9200,
        description="Port to listen on"
    )

    workers: int = Field(
        default=1,
        ge=1,
        description="Number of uvicorn worker processes. Workers share the storage backend without locking; the memory backend is per process."
    )

    # Short link settings
    base_url: str = Field(
        default="http://localhost:9200",
        description="Origin used for short links when it cannot be taken from the request"
    )

    route_prefix: str = Field(
        default="#",
        description="Segment between origin and code ('#' gives /#/abc123, '' gives /abc123)"
    )

    short_code_length: int = Field(
        default=6,
        ge=1,
        description="Length of generated short codes"
    )

    default_validity_minutes: int = Field(
        default=30,
        ge=1,
        description="Validity used when a request does not give one"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
