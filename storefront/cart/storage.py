"""Durable key-value storage for cart snapshots."""
from typing import Dict, Optional, Protocol

from storefront.db import get_redis_sync, RedisKeys, TTL
from storefront.logging import get_logger

logger = get_logger(__name__)


class SnapshotStorage(Protocol):
    """What the cart store needs from a key-value backend."""

    def load(self, key: str) -> Optional[str]: ...

    def save(self, key: str, raw: str) -> bool: ...

    def delete(self, key: str) -> bool: ...


class MemoryStorage:
    """Process-local storage (tests, local sessions)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def save(self, key: str, raw: str) -> bool:
        self.data[key] = raw
        return True

    def delete(self, key: str) -> bool:
        return self.data.pop(key, None) is not None


class RedisStorage:
    """
    Snapshot storage in Upstash Redis.

    Keys are namespaced under `cart:`. Snapshots expire after TTL.CART
    seconds of inactivity; pass ttl=None to keep them forever.
    """

    def __init__(self, redis=None, ttl: Optional[int] = TTL.CART):
        self._redis = redis  # Lazy initialization
        self.ttl = ttl

    @property
    def redis(self):
        """Get Redis client (lazy initialization)."""
        if self._redis is None:
            try:
                self._redis = get_redis_sync()
            except ValueError as e:
                raise ValueError(
                    f"Redis not available: {e}. Check UPSTASH_REDIS_REST_URL and "
                    "UPSTASH_REDIS_REST_TOKEN environment variables."
                )
        return self._redis

    def load(self, key: str) -> Optional[str]:
        data = self.redis.get(RedisKeys.cart_key(key))
        return data or None

    def save(self, key: str, raw: str) -> bool:
        redis_key = RedisKeys.cart_key(key)
        if self.ttl:
            self.redis.set(redis_key, raw, ex=self.ttl)
        else:
            self.redis.set(redis_key, raw)
        logger.debug(f"Saved cart snapshot {redis_key} ({len(raw)} bytes)")
        return True

    def delete(self, key: str) -> bool:
        return bool(self.redis.delete(RedisKeys.cart_key(key)))


__all__ = ["SnapshotStorage", "MemoryStorage", "RedisStorage"]
