# autevo/core/order_workflow.py
"""
Work-order status machine.

The adjacency map below is the only source of legal moves: scheduled,
in_inspection and in_progress may also be canceled; completed and canceled
are terminal.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, FrozenSet, Optional

from autevo.core.errors import InvalidTransitionError


class OrderStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_INSPECTION = "in_inspection"
    IN_PROGRESS = "in_progress"
    AWAITING_PAYMENT = "awaiting_payment"
    COMPLETED = "completed"
    CANCELED = "canceled"


ORDER_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.SCHEDULED: frozenset({OrderStatus.IN_INSPECTION, OrderStatus.CANCELED}),
    OrderStatus.IN_INSPECTION: frozenset({OrderStatus.IN_PROGRESS, OrderStatus.CANCELED}),
    OrderStatus.IN_PROGRESS: frozenset({OrderStatus.AWAITING_PAYMENT, OrderStatus.CANCELED}),
    OrderStatus.AWAITING_PAYMENT: frozenset({OrderStatus.COMPLETED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELED: frozenset(),
}

TERMINAL_STATUSES = frozenset(status for status, targets in ORDER_TRANSITIONS.items() if not targets)


def can_transition(current: OrderStatus, requested: OrderStatus) -> bool:
    return OrderStatus(requested) in ORDER_TRANSITIONS[OrderStatus(current)]


def validate_transition(current: OrderStatus, requested: OrderStatus) -> None:
    current, requested = OrderStatus(current), OrderStatus(requested)
    if not can_transition(current, requested):
        raise InvalidTransitionError(current, requested)


def apply_transition(order, requested: OrderStatus, now: Optional[datetime] = None):
    """
    Move `order` to `requested`, stamping lifecycle timestamps.

    `started_at` is set on entering in_progress only when it is still empty;
    `completed_at` is set on every entry into completed.
    """
    requested = OrderStatus(requested)
    validate_transition(order.status, requested)
    now = now or datetime.now(timezone.utc)

    if requested == OrderStatus.IN_PROGRESS and order.started_at is None:
        order.started_at = now
    if requested == OrderStatus.COMPLETED:
        order.completed_at = now

    order.status = requested.value
    return order
