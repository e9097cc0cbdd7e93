"""Services: money helpers and the authenticated cart API client."""
from .cart_api import UserCartAPI, CartEndpoints

__all__ = ["UserCartAPI", "CartEndpoints"]
