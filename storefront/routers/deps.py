"""
Shared Dependencies for Routers

Lazy-loaded singletons and request-scoped guest cart helpers.
"""
from typing import AsyncIterator, Optional

from fastapi import Depends, Header, HTTPException

from storefront.cart import GuestCartManager, KeyValueStorage, get_default_storage
from storefront.errors import ERROR_CART_API_NOT_CONFIGURED, ERROR_GUEST_SESSION_REQUIRED, ERROR_UNAUTHORIZED
from storefront.logging import get_logger
from storefront.services.cart_api import UserCartAPI

logger = get_logger(__name__)


_storage: Optional[KeyValueStorage] = None
_storage_resolved = False


def get_storage() -> Optional[KeyValueStorage]:
    """Get the guest cart storage singleton (None when Redis is not configured)."""
    global _storage, _storage_resolved
    if not _storage_resolved:
        _storage = get_default_storage()
        _storage_resolved = True
    return _storage


def get_guest_session(x_guest_session: Optional[str] = Header(default=None)) -> str:
    """Guest session id the front end keeps for anonymous visitors."""
    if not x_guest_session or not x_guest_session.strip():
        raise HTTPException(status_code=400, detail=ERROR_GUEST_SESSION_REQUIRED)
    return x_guest_session.strip()


def get_session_cart_manager(
    session_id: str = Depends(get_guest_session),
    storage: Optional[KeyValueStorage] = Depends(get_storage),
) -> GuestCartManager:
    return GuestCartManager.for_session(storage, session_id)


def get_access_token(authorization: Optional[str] = Header(default=None)) -> str:
    """Bearer token of the user who just logged in."""
    if not authorization:
        raise HTTPException(status_code=401, detail=ERROR_UNAUTHORIZED)
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=401, detail=ERROR_UNAUTHORIZED)
    return token.strip()


async def get_user_cart_api(access_token: str = Depends(get_access_token)) -> AsyncIterator[UserCartAPI]:
    """Backend cart client for the request; closed after the response."""
    cart_api = UserCartAPI(access_token)
    # Without a backend every add fails and the merge would still clear the guest cart
    if not cart_api.base_url:
        logger.error("Guest cart merge refused: %s", ERROR_CART_API_NOT_CONFIGURED)
        raise HTTPException(status_code=503, detail=ERROR_CART_API_NOT_CONFIGURED)
    try:
        yield cart_api
    finally:
        await cart_api.aclose()
