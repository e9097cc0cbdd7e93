"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import AsyncMock

# Keep tests off real Redis and the real backend
os.environ.setdefault("UPSTASH_REDIS_REST_URL", "")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "")
os.environ.setdefault("STOREFRONT_API_URL", "https://api.test.local")
os.environ.setdefault("GUEST_CART_MERGE_DELAY", "0")

from storefront.cart import GuestCartManager, MemoryStorage


class FailingStorage:
    """Storage whose every call raises, like a full or disabled store."""

    def get(self, key):
        raise OSError("storage unavailable")

    def set(self, key, value):
        raise OSError("quota exceeded")

    def remove(self, key):
        raise OSError("storage unavailable")


@pytest.fixture
def memory_storage():
    """Empty in-memory storage"""
    return MemoryStorage()


@pytest.fixture
def failing_storage():
    """Storage that raises on every operation"""
    return FailingStorage()


@pytest.fixture
def manager(memory_storage):
    """Guest cart manager over in-memory storage"""
    return GuestCartManager(memory_storage)


@pytest.fixture
def sample_product():
    """Product display snapshot as the catalog returns it"""
    return {
        "_id": "p1",
        "name": "Ceramic Mug",
        "price": 100,
        "discountPrice": 0,
        "images": ["https://cdn.test.local/mug.jpg"],
        "stock": 12,
    }


@pytest.fixture
def discounted_product():
    """Product snapshot with an active discount"""
    return {
        "_id": "p2",
        "name": "Tea Towel",
        "price": 80,
        "discountPrice": 50,
        "images": [],
        "stock": 3,
    }


@pytest.fixture
def mock_cart_api():
    """Backend cart client that accepts every add"""
    api = AsyncMock()
    api.add_item = AsyncMock(return_value={"products": [], "totalItems": 0})
    return api
