"""
Redis Cart Storage

Shared storage used when ENV_MODE=production or ENV_MODE=staging.
Each key becomes a Redis string under a configurable prefix.
"""

import logging
from typing import Optional

import redis

from storefront.services.cart_storage.base import BaseCartStorage, CartStorageError

logger = logging.getLogger(__name__)


class RedisCartStorage(BaseCartStorage):
    """
    Redis-backed storage.

    Example:
        >>> storage = RedisCartStorage.from_url("redis://localhost:6379/0")
        >>> storage.set_item("order-saas-cart-v1", "{}")
    """

    def __init__(self, client: "redis.Redis", prefix: str = "storefront:"):
        self._client = client
        self.prefix = prefix

    @classmethod
    def from_url(cls, url: str, prefix: str = "storefront:") -> "RedisCartStorage":
        client = redis.Redis.from_url(url, decode_responses=True, socket_timeout=2)
        logger.info("RedisCartStorage initialized")
        return cls(client, prefix=prefix)

    @property
    def provider_name(self) -> str:
        return "redis"

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get_item(self, key: str) -> Optional[str]:
        try:
            value = self._client.get(self._key(key))
        except redis.RedisError as e:
            raise CartStorageError(f"Redis read failed for {key}: {e}") from e
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set_item(self, key: str, value: str) -> None:
        try:
            self._client.set(self._key(key), value)
        except redis.RedisError as e:
            raise CartStorageError(f"Redis write failed for {key}: {e}") from e

    def remove_item(self, key: str) -> None:
        try:
            self._client.delete(self._key(key))
        except redis.RedisError as e:
            raise CartStorageError(f"Redis delete failed for {key}: {e}") from e

    def health_check(self) -> bool:
        try:
            return bool(self._client.ping())
        except redis.RedisError as e:
            logger.error(f"Redis health check failed: {e}")
            return False
