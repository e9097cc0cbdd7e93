"""
Guest Cart API Pydantic Models
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel


class AddToGuestCartRequest(BaseModel):
    product_id: str
    quantity: int = 1
    # Display snapshot: name, price, discountPrice, images, stock
    product: Optional[Dict[str, Any]] = None


class UpdateGuestCartItemRequest(BaseModel):
    product_id: str
    quantity: int = 1  # 0 removes the item


class GuestCartCountResponse(BaseModel):
    total_items: int


class MergeResponse(BaseModel):
    state: str
    attempted: int
    merged: list[str]
    failed: list[str]
    cart: Optional[Any] = None
    # User cart item count after the merge; None when no add succeeded
    total_items: Optional[int] = None
