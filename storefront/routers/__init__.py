"""HTTP routers."""
from .guest_cart import router as guest_cart_router

__all__ = ["guest_cart_router"]
