"""
Cart Storage Abstract Base Class

Defines the durable key-value interface the cart snapshot is persisted
through. Implementations mirror a browser's local storage: string values
under string keys, read once at startup and rewritten after each change.

Design Pattern: Strategy Pattern
    - Memory, file and Redis backends are interchangeable
    - Selected at runtime via CART_STORAGE_BACKEND / ENV_MODE
"""

from abc import ABC, abstractmethod
from typing import Optional


class CartStorageError(Exception):
    """Raised when a backend cannot read or write a value."""


class BaseCartStorage(ABC):
    """
    Abstract base class for cart storage backends.

    Example:
        >>> storage = get_cart_storage()
        >>> storage.set_item("order-saas-cart-v1", '{"version": 1, "items": []}')
        >>> storage.get_item("order-saas-cart-v1")
        '{"version": 1, "items": []}'
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """
        Return the name of the storage backend.

        Returns:
            str: Backend name (e.g., "memory", "file", "redis")
        """
        pass

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under ``key``.

        Returns:
            The stored string, or None if nothing is stored

        Raises:
            CartStorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store ``value`` under ``key``, replacing any previous value.

        Raises:
            CartStorageError: If the backend cannot be written
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete ``key``; no-op if absent."""
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """
        Verify the backend is usable.

        Returns:
            bool: True if values can be read and written
        """
        pass
