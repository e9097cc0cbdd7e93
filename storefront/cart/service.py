"""Guest cart manager backed by a key-value storage."""
import json
from typing import List, Optional

from storefront.db import RedisKeys
from storefront.errors import ERROR_INVALID_PRODUCT_ID, ERROR_INVALID_QUANTITY, ERROR_QUANTITY_NOT_POSITIVE
from storefront.logging import get_logger, sanitize_id_for_logging, sanitize_key_for_logging
from .models import GuestCart, GuestCartItem, MergeableItem
from .storage import KeyValueStorage

logger = get_logger(__name__)


class GuestCartManager:
    """
    Manages the cart of an unauthenticated visitor.

    Storage faults never reach the caller: a cart that cannot be read
    behaves as absent, and a cart that cannot be written is still
    returned so the current request can render it.

    storage=None means no persistent storage exists in this context.
    """

    def __init__(self, storage: Optional[KeyValueStorage], key: str = RedisKeys.GUEST_CART):
        self.storage = storage
        self.key = key

    @classmethod
    def for_session(cls, storage: Optional[KeyValueStorage], session_id: str) -> "GuestCartManager":
        """Manager for a single guest session's cart."""
        return cls(storage, key=RedisKeys.guest_cart_key(session_id))

    def read(self) -> Optional[GuestCart]:
        """Load the stored cart, or None if there is none or it cannot be read."""
        if self.storage is None:
            return None

        try:
            data = self.storage.get(self.key)
        except Exception as e:
            logger.error(f"Failed to read guest cart {sanitize_key_for_logging(self.key)}: {e}")
            return None

        if not data:
            return None

        try:
            return GuestCart.from_dict(json.loads(data))
        except (ValueError, KeyError, TypeError, ArithmeticError) as e:
            logger.warning(f"Corrupted guest cart data under {sanitize_key_for_logging(self.key)}: {e}")
            return None

    def write(self, cart: Optional[GuestCart]) -> bool:
        """Persist the cart, or delete the record when given anything but a cart."""
        if self.storage is None:
            return False

        try:
            if isinstance(cart, GuestCart):
                self.storage.set(self.key, json.dumps(cart.to_dict()))
            else:
                self.storage.remove(self.key)
            return True
        except Exception as e:
            logger.error(f"Failed to save guest cart {sanitize_key_for_logging(self.key)}: {e}")
            return False

    def add_item(self, product_id: str, quantity: int = 1, product: Optional[dict] = None) -> GuestCart:
        """Add a product, accumulating quantity if it is already in the cart."""
        if not product_id or not isinstance(product_id, str):
            raise ValueError(ERROR_INVALID_PRODUCT_ID)
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            raise ValueError(ERROR_QUANTITY_NOT_POSITIVE)

        cart = self.read() or GuestCart()

        existing_item = cart.find(product_id)
        if existing_item:
            existing_item.quantity += quantity
        else:
            cart.products.append(GuestCartItem(product_id=product_id, quantity=quantity, product=product))

        cart.recalculate()
        self.write(cart)
        return cart

    def update_item_quantity(self, product_id: str, quantity: int) -> GuestCart:
        """Set an item's quantity. Zero or less removes the item; unknown ids are ignored."""
        if not isinstance(quantity, int) or isinstance(quantity, bool):
            raise ValueError(ERROR_INVALID_QUANTITY)

        if quantity <= 0:
            return self.remove_item(product_id)

        cart = self.read()
        if cart is None:
            return GuestCart()

        item = cart.find(product_id)
        if item is None:
            return cart

        item.quantity = quantity
        cart.recalculate()
        self.write(cart)
        return cart

    def remove_item(self, product_id: str) -> GuestCart:
        """Drop an item from the cart. The record is deleted once the last item goes."""
        cart = self.read()
        if cart is None:
            return GuestCart()

        remaining = [item for item in cart.products if item.product_id != product_id]
        if len(remaining) == len(cart.products):
            return cart

        cart.products = remaining
        cart.recalculate()
        self.write(cart if cart.products else None)
        return cart

    def clear(self) -> None:
        """Delete the stored cart."""
        if self.storage is None:
            return
        try:
            self.storage.remove(self.key)
        except Exception as e:
            logger.error(f"Failed to clear guest cart {sanitize_key_for_logging(self.key)}: {e}")

    def total_item_count(self) -> int:
        cart = self.read()
        if cart is None:
            return 0
        return cart.total_items

    def extract_mergeable_items(self) -> List[MergeableItem]:
        """(product_id, quantity) pairs in the order they were added."""
        cart = self.read()
        if cart is None or cart.is_empty:
            return []
        items = [MergeableItem(item.product_id, item.quantity) for item in cart.products]
        logger.debug(
            "Extracted %d guest cart items: %s",
            len(items),
            ", ".join(sanitize_id_for_logging(item.product_id) for item in items),
        )
        return items
