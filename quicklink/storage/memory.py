"""In-process storage backend."""

import logging
from typing import Dict, Optional

from .base import LinkStorageBase, DEFAULT_STORAGE_KEY


class MemoryStorage(LinkStorageBase):
    """Keeps raw values in a dict; nothing survives the process."""
    
    name = "memory"
    
    def __init__(
        self,
        key: str = DEFAULT_STORAGE_KEY,
        initial: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(key=key, logger=logger)
        self.items: Dict[str, str] = {}
        if initial is not None:
            self.items[key] = initial
    
    def get_item(self) -> Optional[str]:
        return self.items.get(self.key)
    
    def set_item(self, value: str) -> None:
        self.items[self.key] = value
