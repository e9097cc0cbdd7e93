"""Tests for storage backends and logging helpers"""
import logging
from unittest.mock import Mock

import storefront.db as db
from storefront.cart import GuestCartManager, MemoryStorage, RedisStorage, get_default_storage
from storefront.db import TTL
from storefront.logging import (
    LOG_FORMAT_SIMPLE,
    configure_logging,
    sanitize_id_for_logging,
    sanitize_key_for_logging,
)


def test_memory_storage_roundtrip():
    storage = MemoryStorage()

    storage.set("k", "v")
    assert storage.get("k") == "v"

    storage.remove("k")
    storage.remove("k")
    assert storage.get("k") is None


def test_redis_storage_sets_ttl():
    redis = Mock()
    storage = RedisStorage(redis=redis)

    storage.set("guest_cart", "{}")

    redis.set.assert_called_once_with("guest_cart", "{}", ex=TTL.GUEST_CART)


def test_redis_storage_without_ttl():
    redis = Mock()
    storage = RedisStorage(redis=redis, ttl=None)

    storage.set("guest_cart", "{}")

    redis.set.assert_called_once_with("guest_cart", "{}")


def test_redis_storage_get_and_remove():
    redis = Mock()
    redis.get.side_effect = [b'{"products": []}', None]
    storage = RedisStorage(redis=redis)

    assert storage.get("guest_cart") == '{"products": []}'
    assert storage.get("guest_cart") is None

    storage.remove("guest_cart")
    redis.delete.assert_called_once_with("guest_cart")


def test_manager_over_redis_errors_degrades():
    redis = Mock()
    redis.get.side_effect = ConnectionError("upstash down")
    redis.set.side_effect = ConnectionError("upstash down")
    manager = GuestCartManager(RedisStorage(redis=redis))

    cart = manager.add_item("p1", 1)

    assert cart.total_items == 1
    assert manager.total_item_count() == 0


def test_default_storage_unconfigured(monkeypatch):
    monkeypatch.setattr(db, "UPSTASH_REDIS_REST_URL", "")
    monkeypatch.setattr(db, "UPSTASH_REDIS_REST_TOKEN", "")

    assert get_default_storage() is None


def test_default_storage_configured(monkeypatch):
    monkeypatch.setattr(db, "UPSTASH_REDIS_REST_URL", "https://redis.test.local")
    monkeypatch.setattr(db, "UPSTASH_REDIS_REST_TOKEN", "token")

    assert isinstance(get_default_storage(), RedisStorage)


def test_sanitize_id_for_logging():
    assert sanitize_id_for_logging(None) == "N/A"
    assert sanitize_id_for_logging("p1\nFAKE ENTRY") == "p1\\nFAKE ENTRY"
    assert len(sanitize_id_for_logging("x" * 100)) == 24


def test_sanitize_key_for_logging():
    assert sanitize_key_for_logging("guest_cart:3f9a0c1e-77aa-4bd2-9e0f") == "guest_cart:3f9a0c1e"
    assert sanitize_key_for_logging("guest_cart:ab\ncd") == "guest_cart:ab\\ncd"
    assert sanitize_key_for_logging("guest_cart") == "guest_cart"
    assert sanitize_key_for_logging("other:" + "x" * 40) == "other:" + "x" * 18
    assert sanitize_key_for_logging("") == "N/A"


def test_storage_failure_log_hides_session_id(failing_storage, caplog):
    manager = GuestCartManager.for_session(failing_storage, "3f9a0c1e-77aa-4bd2-9e0f")

    with caplog.at_level(logging.WARNING):
        manager.read()

    assert "guest_cart:3f9a0c1e" in caplog.text
    assert "77aa-4bd2" not in caplog.text


def test_configure_logging_on_bare_root(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    monkeypatch.setattr(logging.getLogger("upstash_redis"), "level", logging.NOTSET)
    monkeypatch.setenv("VERCEL", "1")

    configure_logging("debug")

    assert root.level == logging.DEBUG
    assert root.handlers[0].formatter._fmt == LOG_FORMAT_SIMPLE
    assert logging.getLogger("upstash_redis").level == logging.WARNING


def test_configure_logging_keeps_existing_handlers(monkeypatch):
    root = logging.getLogger()
    existing = logging.NullHandler()
    monkeypatch.setattr(root, "handlers", [existing])

    configure_logging("debug")

    assert root.handlers == [existing]
