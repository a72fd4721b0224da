"""JSON file storage backend.

The file is a small key-value store: a JSON object mapping keys to string
values. Only this backend's key is touched; any other keys are preserved.
"""

import json
import logging
import os
import tempfile
from typing import Dict, Optional

from .base import LinkStorageBase, StorageError, DEFAULT_STORAGE_KEY


class JSONFileStorage(LinkStorageBase):
    """Stores the collection in a JSON file on local disk."""
    
    name = "file"
    
    def __init__(
        self,
        path: str,
        key: str = DEFAULT_STORAGE_KEY,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize file storage.
        
        Args:
            path: Path of the JSON file (created on first write)
            key: Key under which the collection is stored
            logger: Optional logger instance
        """
        super().__init__(key=key, logger=logger)
        self.path = os.path.abspath(path)
        self.logger.debug(f"File storage at {self.path} (key '{key}')")
    
    def _load_items(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                items = json.load(f)
        except OSError as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e
        except ValueError as e:
            raise StorageError(f"Corrupt storage file {self.path}: {e}") from e
        
        if not isinstance(items, dict):
            raise StorageError(f"Corrupt storage file {self.path}: expected an object")
        
        return items
    
    def get_item(self) -> Optional[str]:
        value = self._load_items().get(self.key)
        if value is None or isinstance(value, str):
            return value
        # Tolerate hand-edited files that inline the collection
        return json.dumps(value)
    
    def set_item(self, value: str) -> None:
        try:
            items = self._load_items()
        except StorageError as e:
            self.logger.warning(f"Replacing unreadable storage file: {e}")
            items = {}
        
        items[self.key] = value
        
        directory = os.path.dirname(self.path)
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=".quicklink-", suffix=".tmp", dir=directory
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(items, f, ensure_ascii=False)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e
