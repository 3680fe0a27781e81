# storefront/domain/order_status.py
from enum import Enum

from storefront.domain.errors import InvalidInputError, ConflictingStateError


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    CANCELLED = "CANCELLED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"


INITIAL_STATUS = OrderStatus.PENDING
TERMINAL_STATUSES = frozenset({OrderStatus.CANCELLED, OrderStatus.DELIVERED})
CANCELLABLE_STATUSES = frozenset({OrderStatus.PENDING, OrderStatus.PAID})

_TRANSITIONS = {
    OrderStatus.PENDING: frozenset({OrderStatus.PAID, OrderStatus.CANCELLED}),
    OrderStatus.PAID: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.CANCELLED: frozenset(),
    OrderStatus.DELIVERED: frozenset(),
}


def parse_status(raw: str) -> OrderStatus:
    """Map a status string from the outside world onto the closed set, or raise InvalidInputError."""
    value = (raw or "").strip().upper()
    try:
        return OrderStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise InvalidInputError(f"Unknown order status '{raw}', expected one of: {allowed}")


def is_terminal(status: OrderStatus) -> bool:
    return status in TERMINAL_STATUSES


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in _TRANSITIONS[current]


def ensure_transition(current: OrderStatus, target: OrderStatus) -> None:
    if is_terminal(current):
        raise ConflictingStateError(f"Order is already {current.value} and cannot be changed")
    if not can_transition(current, target):
        raise ConflictingStateError(f"Cannot change order status from {current.value} to {target.value}")
