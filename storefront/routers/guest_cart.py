"""
Guest Cart Router

Cart endpoints for visitors who have not logged in, plus the merge
endpoint the front end calls right after login.

Guest carts are keyed by the X-Guest-Session header.
"""
from fastapi import APIRouter, Depends, HTTPException

from storefront.cart import CartState, GuestCartManager, merge_guest_cart, project_guest_cart
from storefront.errors import ERROR_INTERNAL
from storefront.logging import get_logger, sanitize_key_for_logging
from storefront.services.cart_api import UserCartAPI
from .deps import get_session_cart_manager, get_user_cart_api
from .models import (
    AddToGuestCartRequest,
    UpdateGuestCartItemRequest,
    GuestCartCountResponse,
    MergeResponse,
)

logger = get_logger(__name__)

router = APIRouter(tags=["guest-cart"])


@router.get("/guest-cart")
async def get_guest_cart(manager: GuestCartManager = Depends(get_session_cart_manager)):
    """Current guest cart, empty when none exists."""
    state = CartState()
    state.sync_from_guest_cart(manager.read())
    return state.cart if state.cart is not None else project_guest_cart(None)


@router.get("/guest-cart/count", response_model=GuestCartCountResponse)
async def get_guest_cart_count(manager: GuestCartManager = Depends(get_session_cart_manager)):
    """Item count for the header badge."""
    return GuestCartCountResponse(total_items=manager.total_item_count())


@router.post("/guest-cart/add")
async def add_to_guest_cart(
    request: AddToGuestCartRequest,
    manager: GuestCartManager = Depends(get_session_cart_manager),
):
    """Add a product to the guest cart."""
    try:
        cart = manager.add_item(request.product_id, request.quantity, request.product)
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    return project_guest_cart(cart)


@router.patch("/guest-cart/item")
async def update_guest_cart_item(
    request: UpdateGuestCartItemRequest,
    manager: GuestCartManager = Depends(get_session_cart_manager),
):
    """Set an item's quantity (0 = remove)."""
    try:
        cart = manager.update_item_quantity(request.product_id, request.quantity)
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    return project_guest_cart(cart)


@router.delete("/guest-cart/item")
async def remove_guest_cart_item(
    product_id: str,
    manager: GuestCartManager = Depends(get_session_cart_manager),
):
    """Remove an item from the guest cart."""
    return project_guest_cart(manager.remove_item(product_id))


@router.delete("/guest-cart", status_code=204)
async def clear_guest_cart(manager: GuestCartManager = Depends(get_session_cart_manager)):
    """Delete the guest cart."""
    manager.clear()


@router.post("/guest-cart/merge", response_model=MergeResponse)
async def merge_guest_cart_into_user_cart(
    manager: GuestCartManager = Depends(get_session_cart_manager),
    cart_api: UserCartAPI = Depends(get_user_cart_api),
):
    """Replay the guest cart into the logged-in user's cart and clear it."""
    try:
        result = await merge_guest_cart(manager, cart_api)
    except Exception as e:
        logger.error(f"Error merging guest cart {sanitize_key_for_logging(manager.key)}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=ERROR_INTERNAL)

    # The front end swaps its guest badge for the user's count from this response
    state = CartState()
    state.set_cart(result.server_cart)
    return MergeResponse(
        **result.to_dict(),
        cart=state.cart,
        total_items=state.total_items if state.cart is not None else None,
    )
