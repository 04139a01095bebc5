"""
In-Memory Cart Storage

Process-local dictionary. Nothing survives a restart; used by tests and
throwaway sessions.
"""

from typing import Optional

from storefront.services.cart_storage.base import BaseCartStorage


class MemoryCartStorage(BaseCartStorage):
    """Dictionary-backed storage."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    @property
    def provider_name(self) -> str:
        return "memory"

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def health_check(self) -> bool:
        return True
