"""Tests for the forward-only order status sequence."""

import pytest

from app.core.order_flow import (
    NO_PROGRESS,
    STATUS_FLOW,
    OrderStatus,
    can_move_to,
    effective_progress,
    progress_status,
    status_index,
)


def test_flow_order() -> None:
    """The sequence runs from pending to delivered."""
    assert [status.value for status in STATUS_FLOW] == [
        "pending",
        "admin_rejected",
        "out_of_stock",
        "paid",
        "confirmed",
        "shipped",
        "out_for_delivery",
        "customer_rejected",
        "delivered",
    ]


@pytest.mark.parametrize("value", [None, "rejected", "lost_in_transit", OrderStatus.REJECTED])
def test_unknown_and_legacy_statuses_have_no_index(value) -> None:
    """Legacy, unknown and missing statuses sit before the flow."""
    assert status_index(value) == NO_PROGRESS


def test_effective_progress_takes_furthest_source() -> None:
    """Progress is the max of the order record and the latest action."""
    assert effective_progress("paid", "shipped") == status_index("shipped")
    assert effective_progress("shipped", "paid") == status_index("shipped")
    assert effective_progress(None, None) == NO_PROGRESS
    assert effective_progress("rejected", None) == NO_PROGRESS
    assert effective_progress(None, "confirmed") == status_index("confirmed")


def test_can_move_forward_and_skip_ahead() -> None:
    """Any strictly later status is legal, including skips."""
    progress = status_index("paid")
    assert can_move_to(OrderStatus.CONFIRMED, progress)
    assert can_move_to(OrderStatus.DELIVERED, progress)


def test_cannot_repeat_or_move_backward() -> None:
    """Same or earlier statuses are illegal."""
    progress = status_index("shipped")
    assert not can_move_to(OrderStatus.SHIPPED, progress)
    assert not can_move_to(OrderStatus.PAID, progress)
    assert not can_move_to(OrderStatus.PENDING, progress)


def test_legacy_rejected_is_never_a_target() -> None:
    """Even with no progress, ``rejected`` cannot be chosen by staff."""
    assert not can_move_to(OrderStatus.REJECTED, NO_PROGRESS)
    assert not can_move_to("not-a-status", NO_PROGRESS)


def test_everything_in_flow_is_legal_from_nothing() -> None:
    """With no progress every flow status is a legal first move."""
    assert all(can_move_to(status, NO_PROGRESS) for status in STATUS_FLOW)


def test_progress_status() -> None:
    """Progress index maps back to its status."""
    assert progress_status(NO_PROGRESS) is None
    assert progress_status(status_index("out_for_delivery")) is OrderStatus.OUT_FOR_DELIVERY
