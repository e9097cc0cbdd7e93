"""Key-value storage backends for guest carts."""
from typing import Dict, Optional, Protocol

from storefront.db import get_redis_sync, is_redis_configured, TTL
from storefront.logging import get_logger

logger = get_logger(__name__)


class KeyValueStorage(Protocol):
    """Minimal string key-value contract the guest cart is persisted through."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStorage:
    """Process-local storage. Used in tests and when Redis is not configured."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class RedisStorage:
    """
    Upstash Redis storage.

    Every write refreshes the key's TTL so carts of returning guests
    survive while abandoned ones expire.
    """

    def __init__(self, redis=None, ttl: Optional[int] = TTL.GUEST_CART):
        self._redis = redis
        self.ttl = ttl

    @property
    def redis(self):
        """Get Redis client (lazy initialization)."""
        if self._redis is None:
            self._redis = get_redis_sync()
        return self._redis

    def get(self, key: str) -> Optional[str]:
        value = self.redis.get(key)
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def set(self, key: str, value: str) -> None:
        if self.ttl:
            self.redis.set(key, value, ex=self.ttl)
        else:
            self.redis.set(key, value)

    def remove(self, key: str) -> None:
        self.redis.delete(key)


def get_default_storage() -> Optional[KeyValueStorage]:
    """
    Redis storage when Upstash credentials are configured, otherwise None.

    None is how callers learn that no persistent storage exists in the
    current context; the guest cart then behaves as empty.
    """
    if not is_redis_configured():
        logger.warning("Upstash Redis not configured; guest carts will not be persisted")
        return None
    return RedisStorage()
