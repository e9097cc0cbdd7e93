"""
Logging setup for the storefront guest cart.

Modules log through `get_logger(__name__)`. Guest session ids and product
ids come straight from request headers and bodies, so they are passed
through `sanitize_id_for_logging` or `sanitize_key_for_logging` first.
"""

import logging
import os
import sys
from functools import cache

from storefront.db import RedisKeys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
# Vercel stamps each line itself
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

# One request per merged item, one Redis call per cart operation
QUIET_LOGGERS = ("httpx", "httpcore", "upstash_redis")

SESSION_ID_LOG_LENGTH = 8


def configure_logging(level: str | None = None) -> logging.Logger:
    """
    Attach a stdout handler to the root logger.

    Does nothing when the root logger already has a handler (uvicorn,
    pytest). The level comes from `level`, else LOG_LEVEL, else INFO.
    """
    root = logging.getLogger()
    if root.handlers:
        return root

    level_name = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(
        LOG_FORMAT_SIMPLE if os.environ.get("VERCEL") == "1" else LOG_FORMAT
    ))
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return root


configure_logging()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _escape_log_injection(value: str) -> str:
    # CWE-117: a newline in a product id must not start a fake log line
    return (
        value.replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )


def sanitize_id_for_logging(id_value: str | None, max_length: int = 24) -> str:
    """Escaped product id cut to `max_length`, or "N/A"."""
    if not id_value:
        return "N/A"
    return _escape_log_injection(str(id_value))[:max_length]


def sanitize_key_for_logging(key: str | None) -> str:
    """
    Guest cart storage key with the session part shortened.

    `guest_cart:3f9a0c1e-...` logs as `guest_cart:3f9a0c1e`. The session id
    is the only thing tying a guest to a cart, so it never appears whole.
    """
    if not key:
        return "N/A"
    prefix, sep, session_id = str(key).partition(":")
    if not sep or prefix != RedisKeys.GUEST_CART:
        return sanitize_id_for_logging(key)
    return f"{prefix}:{sanitize_id_for_logging(session_id, SESSION_ID_LOG_LENGTH)}"


__all__ = [
    "configure_logging",
    "get_logger",
    "sanitize_id_for_logging",
    "sanitize_key_for_logging",
]
