"""
File Cart Storage with Concurrency Control

Persists each key as a JSON file in the data directory:

    data/carts/order-saas-cart-v1.json
    data/carts/order-saas-cart-v1.json.lock

Writes go through a temporary file and an atomic rename while holding a
file lock, so a reader never sees a half-written snapshot.
"""

import os
import re
import logging
from pathlib import Path
from typing import Optional, Union

from filelock import FileLock, Timeout

from storefront.services.cart_storage.base import BaseCartStorage, CartStorageError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class FileCartStorage(BaseCartStorage):
    """
    JSON-file storage backend.

    Attributes:
        directory: Where files are written (created on demand)
        lock_timeout: Seconds to wait for a file lock
    """

    def __init__(self, directory: Union[str, Path], lock_timeout: int = 10):
        self.directory = Path(directory)
        self.lock_timeout = lock_timeout

    @property
    def provider_name(self) -> str:
        return "file"

    def _path_for(self, key: str) -> Path:
        safe = _UNSAFE_CHARS.sub("_", key)
        return self.directory / f"{safe}.json"

    def _lock_for(self, path: Path) -> FileLock:
        return FileLock(str(path) + ".lock", timeout=self.lock_timeout)

    def _ensure_directory(self) -> None:
        """Create data directory if needed."""
        if not self.directory.exists():
            self.directory.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created cart directory: {self.directory}")

    def get_item(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise CartStorageError(f"Could not read {path}: {e}") from e

    def set_item(self, key: str, value: str) -> None:
        self._ensure_directory()
        path = self._path_for(key)
        tmp_path = path.with_suffix(path.suffix + ".tmp")

        try:
            with self._lock_for(path):
                tmp_path.write_text(value, encoding="utf-8")
                os.replace(tmp_path, path)
        except Timeout as e:
            raise CartStorageError(f"Lock timeout ({self.lock_timeout}s) for {path}") from e
        except OSError as e:
            raise CartStorageError(f"Could not write {path}: {e}") from e

        logger.debug(f"Cart snapshot written to {path}")

    def remove_item(self, key: str) -> None:
        path = self._path_for(key)
        if not path.exists():
            return
        try:
            with self._lock_for(path):
                path.unlink(missing_ok=True)
        except Timeout as e:
            raise CartStorageError(f"Lock timeout ({self.lock_timeout}s) for {path}") from e

    def health_check(self) -> bool:
        try:
            self._ensure_directory()
            return os.access(self.directory, os.W_OK)
        except OSError as e:
            logger.error(f"Cart directory unavailable: {e}")
            return False
