"""
Cart state projection for rendering.

The storefront renders from a single cart payload whether the shopper is
a guest or logged in. For guests the payload is derived from the guest
cart store; for users it is whatever the backend returned.
"""
from dataclasses import dataclass
from typing import Any, Optional

from storefront.services.money import round_money, to_float
from .models import GuestCart


def project_guest_cart(cart: Optional[GuestCart]) -> dict:
    """Build the render payload for a guest cart (empty when absent)."""
    if cart is None:
        return {"products": [], "totalItems": 0, "totalPrice": 0.0}
    return {
        "products": [
            {"product": item.product, "quantity": item.quantity}
            for item in cart.products
        ],
        "totalItems": cart.total_items,
        "totalPrice": to_float(round_money(cart.total_price)),
    }


def _count_items(payload: dict) -> int:
    if payload.get("totalItems") is not None:
        try:
            return int(payload["totalItems"])
        except (TypeError, ValueError):
            return 0
    products = payload.get("products")
    if isinstance(products, list):
        return sum(int(item.get("quantity") or 0) for item in products if isinstance(item, dict))
    return 0


@dataclass
class CartState:
    """Current cart as seen by the page."""
    cart: Optional[dict] = None
    total_items: int = 0
    is_loading: bool = False

    def set_cart(self, payload: Any) -> None:
        """Replace the cart. Non-object payloads are ignored."""
        if not isinstance(payload, dict):
            return
        self.cart = payload
        self.total_items = _count_items(payload)

    def clear(self) -> None:
        self.cart = None
        self.total_items = 0

    def set_loading(self, is_loading: bool) -> None:
        self.is_loading = bool(is_loading)

    def update_item_count(self, count: Optional[int]) -> None:
        self.total_items = count or 0

    def sync_from_guest_cart(self, cart: Optional[GuestCart]) -> None:
        """Mirror the guest cart store; the store stays the source of truth."""
        if cart is None:
            self.clear()
            return
        self.set_cart(project_guest_cart(cart))
