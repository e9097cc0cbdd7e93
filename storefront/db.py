"""
Redis Module - Upstash Redis client and key layout

Provides the synchronous Upstash Redis client used as the durable
backing store for guest carts. Guest cart operations are synchronous
read-modify-write calls, so only the sync client is needed.
"""

import os
from typing import Optional

from upstash_redis import Redis


# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")


_redis_client: Optional[Redis] = None


def is_redis_configured() -> bool:
    """True when both Upstash credentials are present."""
    return bool(UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN)


def get_redis_sync() -> Redis:
    """
    Get sync Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _redis_client

    if _redis_client is None:
        if not is_redis_configured():
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _redis_client = Redis(url=UPSTASH_REDIS_REST_URL, token=UPSTASH_REDIS_REST_TOKEN)

    return _redis_client


class RedisKeys:
    """Redis key prefixes for different data types."""

    GUEST_CART = "guest_cart"  # guest_cart or guest_cart:{session}

    @staticmethod
    def guest_cart_key(namespace: Optional[str] = None) -> str:
        if not namespace:
            return RedisKeys.GUEST_CART
        return f"{RedisKeys.GUEST_CART}:{namespace}"


class TTL:
    """Time-to-live constants for Redis keys (seconds)."""

    GUEST_CART = 2592000  # 30 days
