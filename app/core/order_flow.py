"""Forward-only order status sequence.

Staff may skip ahead in the sequence but never move to a status at or
behind the order's current progress. Progress is taken from two sources,
the order record and the latest staff action, because the order record can
be edited through the admin console.
"""

from enum import Enum


class OrderStatus(str, Enum):
    """Order status values."""

    PENDING = "pending"
    ADMIN_REJECTED = "admin_rejected"
    OUT_OF_STOCK = "out_of_stock"
    PAID = "paid"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    OUT_FOR_DELIVERY = "out_for_delivery"
    CUSTOMER_REJECTED = "customer_rejected"
    DELIVERED = "delivered"
    # Legacy terminal value; stored on old orders, never a staff target
    REJECTED = "rejected"


STATUS_FLOW: tuple[OrderStatus, ...] = (
    OrderStatus.PENDING,
    OrderStatus.ADMIN_REJECTED,
    OrderStatus.OUT_OF_STOCK,
    OrderStatus.PAID,
    OrderStatus.CONFIRMED,
    OrderStatus.SHIPPED,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.CUSTOMER_REJECTED,
    OrderStatus.DELIVERED,
)

NO_PROGRESS = -1

_FLOW_INDEX = {status.value: index for index, status in enumerate(STATUS_FLOW)}


def status_index(status: str | OrderStatus | None) -> int:
    """Position of a status in the flow, or -1 for unknown/legacy/missing."""
    if status is None:
        return NO_PROGRESS
    value = status.value if isinstance(status, OrderStatus) else str(status)
    return _FLOW_INDEX.get(value, NO_PROGRESS)


def effective_progress(
    order_status: str | OrderStatus | None,
    latest_action_status: str | OrderStatus | None,
) -> int:
    """Furthest flow index reached by either the order record or the action log."""
    return max(status_index(order_status), status_index(latest_action_status))


def can_move_to(target: str | OrderStatus, progress: int) -> bool:
    """Whether a staff move to ``target`` is legal given current progress."""
    target_index = status_index(target)
    if target_index == NO_PROGRESS:
        return False
    return target_index > progress


def progress_status(progress: int) -> OrderStatus | None:
    """Status value for a progress index, or None when nothing was recorded."""
    if progress == NO_PROGRESS:
        return None
    return STATUS_FLOW[progress]
