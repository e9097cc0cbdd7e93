"""
Guest-to-User Cart Merge

Replays a guest cart into the authenticated user's server cart after
login, then clears the guest record.

Items are sent one at a time in the order they were added. A rejected
item (deleted product, no stock) is logged and skipped. The guest cart
is cleared once every item has been attempted, whatever the outcome.
"""
import asyncio
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Protocol, Set

from storefront.logging import get_logger, sanitize_id_for_logging
from .service import GuestCartManager

logger = get_logger(__name__)

# Gives the post-login cart fetch time to land before merge writes start
MERGE_DELAY_SECONDS = float(os.environ.get("GUEST_CART_MERGE_DELAY", "1.0"))

# The event loop only keeps weak references to tasks
_running_merges: Set["asyncio.Task[MergeResult]"] = set()


class CartAPI(Protocol):
    """The one backend operation the merge depends on."""

    async def add_item(self, product_id: str, quantity: int = 1) -> Any: ...


class MergeState(str, Enum):
    NO_GUEST_CART = "no_guest_cart"
    IN_FLIGHT = "in_flight"
    CLEARED = "cleared"


@dataclass
class MergeResult:
    """Outcome of one merge run."""
    state: MergeState = MergeState.NO_GUEST_CART
    attempted: int = 0
    merged: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    server_cart: Optional[Any] = None

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "attempted": self.attempted,
            "merged": list(self.merged),
            "failed": list(self.failed),
        }


async def merge_guest_cart(manager: GuestCartManager, cart_api: CartAPI) -> MergeResult:
    """Replay every guest cart line into the user's cart, then clear the guest cart."""
    result = MergeResult()

    items = manager.extract_mergeable_items()
    if not items:
        return result

    result.state = MergeState.IN_FLIGHT
    logger.info("Merging %d guest cart items into user cart", len(items))

    for item in items:
        result.attempted += 1
        try:
            result.server_cart = await cart_api.add_item(item.product_id, item.quantity)
            result.merged.append(item.product_id)
        except Exception as e:
            logger.error(
                "Failed to add product %s to user cart: %s",
                sanitize_id_for_logging(item.product_id),
                e,
            )
            result.failed.append(item.product_id)

    # Partial merges still clear; replaying stale items on the next login is worse
    manager.clear()
    result.state = MergeState.CLEARED

    if result.failed:
        logger.warning(
            "Guest cart merge finished with %d of %d items rejected",
            len(result.failed),
            result.attempted,
        )
    else:
        logger.info("Guest cart merge finished, %d items merged", len(result.merged))

    return result


async def _merge_after_delay(manager: GuestCartManager, cart_api: CartAPI, delay: float) -> MergeResult:
    if delay > 0:
        await asyncio.sleep(delay)
    # Once started the merge runs to completion, even if the caller cancels
    merge = asyncio.ensure_future(merge_guest_cart(manager, cart_api))
    _running_merges.add(merge)
    merge.add_done_callback(_running_merges.discard)
    return await asyncio.shield(merge)


def schedule_guest_cart_merge(
    manager: GuestCartManager,
    cart_api: CartAPI,
    delay: Optional[float] = None,
) -> "asyncio.Task[MergeResult]":
    """
    Start the merge on the running loop after `delay` seconds.

    Cancelling the returned task during the delay abandons the merge.
    Must be called from within a running event loop.
    """
    if delay is None:
        delay = MERGE_DELAY_SECONDS
    return asyncio.ensure_future(_merge_after_delay(manager, cart_api, delay))
