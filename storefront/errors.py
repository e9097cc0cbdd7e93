"""
Common Error Constants

Centralized error messages and the exception raised by the backend cart client.
"""
from typing import Optional

# Guest session errors
ERROR_GUEST_SESSION_REQUIRED = "X-Guest-Session header is required"
ERROR_INVALID_QUANTITY = "quantity must be an integer"
ERROR_QUANTITY_NOT_POSITIVE = "quantity must be a positive integer"
ERROR_INVALID_PRODUCT_ID = "product_id must be a non-empty string"

# Auth errors
ERROR_UNAUTHORIZED = "Unauthorized"

# Backend cart errors
ERROR_CART_API_UNAVAILABLE = "Cart service unavailable"
ERROR_CART_API_NOT_CONFIGURED = "STOREFRONT_API_URL must be set"

# Generic errors
ERROR_INTERNAL = "Internal server error"


class CartAPIError(Exception):
    """Raised when the authenticated cart backend rejects or fails a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.status_code}: {self.message}"
