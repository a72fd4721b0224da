"""Redis storage backend.

One Redis string key holds the whole collection, shared by every process
pointed at the same server.
"""

import logging
from typing import Optional

import redis

from .base import LinkStorageBase, StorageError, DEFAULT_STORAGE_KEY


class RedisStorage(LinkStorageBase):
    """Stores the collection under a single Redis key."""
    
    name = "redis"
    
    def __init__(
        self,
        redis_url: Optional[str] = None,
        key: str = DEFAULT_STORAGE_KEY,
        client: Optional[redis.Redis] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis storage.
        
        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            key: Key under which the collection is stored
            client: Optional pre-built client (takes precedence over redis_url)
            logger: Optional logger instance
        """
        super().__init__(key=key, logger=logger)
        
        if client is None:
            if not redis_url:
                raise ValueError("redis_url is required for Redis storage")
            client = redis.Redis.from_url(
                redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            self.logger.info(f"Redis storage at {redis_url} (key '{key}')")
        
        self.redis_url = redis_url
        self.client = client
    
    def get_item(self) -> Optional[str]:
        try:
            value = self.client.get(self.key)
        except redis.RedisError as e:
            raise StorageError(f"Redis get failed: {e}") from e
        
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value
    
    def set_item(self, value: str) -> None:
        try:
            self.client.set(self.key, value)
        except redis.RedisError as e:
            raise StorageError(f"Redis set failed: {e}") from e
    
    def health_check(self) -> bool:
        try:
            return bool(self.client.ping())
        except redis.RedisError as e:
            self.logger.error(f"Redis health check failed: {e}")
            return False
    
    def close(self) -> None:
        self.client.close()
        self.logger.info("Redis connection closed")
