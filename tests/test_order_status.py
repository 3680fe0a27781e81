"""Tests for the order status state machine."""

import pytest

from storefront.domain.errors import InvalidInputError, ConflictingStateError
from storefront.domain.order_status import (
    OrderStatus,
    INITIAL_STATUS,
    parse_status,
    can_transition,
    ensure_transition,
    is_terminal,
)

pytestmark = pytest.mark.unit


def test_initial_status_is_pending():
    assert INITIAL_STATUS is OrderStatus.PENDING


@pytest.mark.parametrize("raw", ["PAID", "paid", "  Shipped "])
def test_parse_status_accepts_known_values(raw):
    assert parse_status(raw).value == raw.strip().upper()


@pytest.mark.parametrize("raw", ["FLERG", "", "PROCESSING"])
def test_parse_status_rejects_unknown_values(raw):
    with pytest.raises(InvalidInputError):
        parse_status(raw)


def test_terminal_statuses():
    assert is_terminal(OrderStatus.CANCELLED)
    assert is_terminal(OrderStatus.DELIVERED)
    assert not is_terminal(OrderStatus.SHIPPED)


@pytest.mark.parametrize(
    "current,target",
    [
        (OrderStatus.PENDING, OrderStatus.PAID),
        (OrderStatus.PENDING, OrderStatus.CANCELLED),
        (OrderStatus.PAID, OrderStatus.CANCELLED),
        (OrderStatus.PAID, OrderStatus.SHIPPED),
        (OrderStatus.SHIPPED, OrderStatus.DELIVERED),
    ],
)
def test_allowed_transitions(current, target):
    assert can_transition(current, target)
    ensure_transition(current, target)


@pytest.mark.parametrize(
    "current,target",
    [
        (OrderStatus.PENDING, OrderStatus.SHIPPED),
        (OrderStatus.SHIPPED, OrderStatus.CANCELLED),
        (OrderStatus.DELIVERED, OrderStatus.CANCELLED),
        (OrderStatus.CANCELLED, OrderStatus.PAID),
        (OrderStatus.PAID, OrderStatus.PAID),
    ],
)
def test_rejected_transitions(current, target):
    assert not can_transition(current, target)
    with pytest.raises(ConflictingStateError):
        ensure_transition(current, target)
