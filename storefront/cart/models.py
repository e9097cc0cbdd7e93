"""Guest cart models with Decimal-based pricing."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, NamedTuple, Optional

from storefront.services.money import to_decimal, multiply, round_money, to_float


def effective_unit_price(product: Optional[Dict[str, Any]]) -> Decimal:
    """Discount price when positive, otherwise the list price."""
    if not isinstance(product, dict):
        return Decimal("0")
    discount_price = to_decimal(product.get("discountPrice"))
    if discount_price > 0:
        return discount_price
    return to_decimal(product.get("price"))


class MergeableItem(NamedTuple):
    """A (product_id, quantity) pair replayed against the user's cart."""
    product_id: str
    quantity: int


@dataclass
class GuestCartItem:
    """Single line of a guest cart."""
    product_id: str
    quantity: int
    # Display snapshot cached at add time; never refreshed or validated
    product: Optional[Dict[str, Any]] = None

    @property
    def unit_price(self) -> Decimal:
        return effective_unit_price(self.product)

    @property
    def line_total(self) -> Decimal:
        return multiply(self.unit_price, self.quantity)

    def to_dict(self) -> dict:
        return {
            "productId": self.product_id,
            "quantity": self.quantity,
            "product": self.product,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GuestCartItem":
        return cls(
            product_id=str(data["productId"]),
            quantity=int(data["quantity"]),
            product=data.get("product"),
        )


@dataclass
class GuestCart:
    """
    Shopping cart of an unauthenticated visitor.

    total_items and total_price are derived from products. They are
    recomputed on construction and after every mutation and are never
    set directly.
    """
    products: List[GuestCartItem] = field(default_factory=list)
    total_items: int = field(default=0, init=False)
    total_price: Decimal = field(default=Decimal("0"), init=False)

    def __post_init__(self):
        self.recalculate()

    def recalculate(self) -> None:
        self.total_items = sum(item.quantity for item in self.products)
        self.total_price = sum((item.line_total for item in self.products), Decimal("0"))

    def find(self, product_id: str) -> Optional[GuestCartItem]:
        return next((item for item in self.products if item.product_id == product_id), None)

    @property
    def is_empty(self) -> bool:
        return not self.products

    def to_dict(self) -> dict:
        """Convert to the persisted JSON shape."""
        return {
            "products": [item.to_dict() for item in self.products],
            "totalItems": self.total_items,
            "totalPrice": to_float(round_money(self.total_price)),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GuestCart":
        """Create from the persisted JSON shape. Stored totals are recomputed."""
        if not isinstance(data, dict):
            raise TypeError(f"Guest cart payload must be an object, got {type(data).__name__}")
        products = data.get("products") or []
        if not isinstance(products, list):
            raise TypeError("Guest cart products must be a list")
        cart = cls()
        for raw in products:
            item = GuestCartItem.from_dict(raw)
            if item.quantity <= 0:
                continue
            existing = cart.find(item.product_id)
            if existing:
                existing.quantity += item.quantity
            else:
                cart.products.append(item)
        cart.recalculate()
        return cart
