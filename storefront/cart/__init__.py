"""Guest cart package: models, storage, manager and login merge."""
from .models import GuestCartItem, GuestCart, MergeableItem, effective_unit_price
from .storage import KeyValueStorage, MemoryStorage, RedisStorage, get_default_storage
from .service import GuestCartManager
from .merge import MergeState, MergeResult, merge_guest_cart, schedule_guest_cart_merge
from .state import CartState, project_guest_cart

__all__ = [
    "GuestCartItem",
    "GuestCart",
    "MergeableItem",
    "effective_unit_price",
    "KeyValueStorage",
    "MemoryStorage",
    "RedisStorage",
    "get_default_storage",
    "GuestCartManager",
    "MergeState",
    "MergeResult",
    "merge_guest_cart",
    "schedule_guest_cart_merge",
    "CartState",
    "project_guest_cart",
]
