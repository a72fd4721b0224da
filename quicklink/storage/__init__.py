"""Storage layer for QuickLink."""

import logging
from typing import Optional

from .base import LinkStorageBase, LinkCollection, StorageError, DEFAULT_STORAGE_KEY
from .models import LinkRecord, VisitEvent
from .memory import MemoryStorage
from .json_file import JSONFileStorage
from .redis_store import RedisStorage

__all__ = [
    "LinkStorageBase",
    "LinkCollection",
    "StorageError",
    "DEFAULT_STORAGE_KEY",
    "LinkRecord",
    "VisitEvent",
    "MemoryStorage",
    "JSONFileStorage",
    "RedisStorage",
    "create_storage",
]


def create_storage(
    backend: str,
    path: Optional[str] = None,
    key: str = DEFAULT_STORAGE_KEY,
    redis_url: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
) -> LinkStorageBase:
    """Build a storage backend by name.
    
    Args:
        backend: One of "file", "memory", "redis"
        path: JSON file path (file backend)
        key: Key under which the collection is stored
        redis_url: Redis connection URL (redis backend)
        logger: Optional logger instance
        
    Raises:
        ValueError: If the backend name is unknown or a required setting is missing
    """
    backend = backend.lower()
    
    if backend == "memory":
        return MemoryStorage(key=key, logger=logger)
    if backend == "file":
        if not path:
            raise ValueError("A storage path is required for file storage")
        return JSONFileStorage(path=path, key=key, logger=logger)
    if backend == "redis":
        return RedisStorage(redis_url=redis_url, key=key, logger=logger)
    
    raise ValueError(f"Unknown storage backend: {backend}")
