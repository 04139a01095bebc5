"""
Cart Storage Factory

Provides a single entry point for obtaining the durable storage the cart
snapshot is persisted through.

Usage:
    from storefront.services.cart_storage import get_cart_storage

    storage = get_cart_storage()
    storage.set_item("order-saas-cart-v1", snapshot)

Backend Selection:
    - CART_STORAGE_BACKEND=memory|file|redis wins when set
    - otherwise ENV_MODE=development → FileCartStorage
    - otherwise → RedisCartStorage
"""

import logging
from functools import lru_cache
from pathlib import Path

from storefront.core.config import get_settings, CartStorageBackend
from storefront.services.cart_storage.base import BaseCartStorage, CartStorageError
from storefront.services.cart_storage.memory import MemoryCartStorage
from storefront.services.cart_storage.file import FileCartStorage
from storefront.services.cart_storage.redis import RedisCartStorage

logger = logging.getLogger(__name__)


@lru_cache()
def get_cart_storage() -> BaseCartStorage:
    """
    Get the configured cart storage instance.

    The instance is cached so every cart in the process shares it.

    Returns:
        BaseCartStorage: Configured storage backend
    """
    settings = get_settings()
    backend = settings.resolved_cart_storage_backend

    if backend == CartStorageBackend.MEMORY:
        logger.info("Cart Storage: Using MemoryCartStorage")
        return MemoryCartStorage()

    if backend == CartStorageBackend.FILE:
        directory = Path(settings.data_directory) / "carts"
        logger.info(f"Cart Storage: Using FileCartStorage ({directory})")
        return FileCartStorage(directory, lock_timeout=settings.cart_lock_timeout)

    logger.info(f"Cart Storage: Using RedisCartStorage ({settings.env_mode.value} mode)")
    return RedisCartStorage.from_url(settings.redis_url, prefix=settings.cart_redis_prefix)


def reset_cart_storage() -> None:
    """
    Clear the cached storage instance.

    Useful for testing or when configuration changes at runtime.
    """
    get_cart_storage.cache_clear()
    logger.debug("Cart storage cache cleared")


__all__ = [
    "get_cart_storage",
    "reset_cart_storage",
    "BaseCartStorage",
    "CartStorageError",
    "MemoryCartStorage",
    "FileCartStorage",
    "RedisCartStorage",
]
