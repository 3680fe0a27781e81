"""Tests for order queries and the order status lifecycle."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from storefront.data.database import transaction
from storefront.data.models import CustomerModel, OrderModel, OrderDetailModel
from storefront.domain.errors import ConflictingStateError, InvalidInputError, NotFoundError
from storefront.services.checkout import checkout
from storefront.services.order_service import OrderService

pytestmark = pytest.mark.service


@pytest.fixture
def service(db, lock_service, notifier):
    return OrderService(db, lock_service=lock_service, notifier=notifier)


@pytest.fixture
def place_order(db, make_customer, make_product, make_cart_item):
    def _place(customer=None, status="PENDING", now=None):
        customer = customer or make_customer()
        make_cart_item(customer, make_product("20.00"), 1)
        with transaction(db):
            order = checkout(db, customer.id, now=now)
            order.status = status
        return order

    return _place


def _status(db, order_id):
    db.expire_all()
    return db.get(OrderModel, order_id).status


def _customer_of(db, order):
    return db.get(CustomerModel, order.customer_id)


@pytest.mark.parametrize("start", ["PENDING", "PAID"])
def test_cancel_from_pending_or_paid(service, db, place_order, start):
    order = place_order(status=start)

    result = service.cancel_order(order.id)

    assert result["status"] == "CANCELLED"
    assert _status(db, order.id) == "CANCELLED"


@pytest.mark.parametrize("start", ["SHIPPED", "DELIVERED", "CANCELLED"])
def test_cancel_rejected_after_shipping(service, db, notifier, place_order, start):
    order = place_order(status=start)

    with pytest.raises(ConflictingStateError):
        service.cancel_order(order.id)

    assert _status(db, order.id) == start
    notifier.send_order_notification.assert_not_called()


def test_update_status_unknown_string_is_rejected(service, db, place_order):
    order = place_order()

    with pytest.raises(InvalidInputError):
        service.update_status(order.id, "FLERG")

    assert _status(db, order.id) == "PENDING"


def test_update_status_follows_lifecycle(service, db, notifier, place_order):
    order = place_order()

    service.update_status(order.id, "paid")
    service.update_status(order.id, "SHIPPED")
    result = service.update_status(order.id, "DELIVERED")

    assert result["status"] == "DELIVERED"
    assert result["paid_at"] is not None
    assert notifier.send_order_notification.call_count == 3


def test_update_status_rejects_skipping_states(service, db, place_order):
    order = place_order()

    with pytest.raises(ConflictingStateError):
        service.update_status(order.id, "DELIVERED")

    assert _status(db, order.id) == "PENDING"


def test_update_status_terminal_order(service, place_order):
    order = place_order(status="DELIVERED")

    with pytest.raises(ConflictingStateError):
        service.update_status(order.id, "SHIPPED")


def test_update_status_unknown_order(service):
    with pytest.raises(NotFoundError):
        service.update_status(999, "PAID")


def test_process_payment(service, db, place_order, make_payment_method):
    order = place_order()
    method = make_payment_method(_customer_of(db, order))

    result = service.process_payment(order.id, method.id)

    assert result["status"] == "PAID"
    assert result["payment_method_id"] == method.id
    assert result["paid_at"] is not None


def test_process_payment_requires_pending(service, db, place_order, make_payment_method):
    order = place_order(status="CANCELLED")
    method = make_payment_method(_customer_of(db, order))

    with pytest.raises(ConflictingStateError):
        service.process_payment(order.id, method.id)

    assert _status(db, order.id) == "CANCELLED"


def test_process_payment_with_foreign_method(service, db, place_order, make_customer, make_payment_method):
    order = place_order()
    stranger_method = make_payment_method(make_customer())

    with pytest.raises(InvalidInputError):
        service.process_payment(order.id, stranger_method.id)

    assert _status(db, order.id) == "PENDING"


def test_process_payment_unknown_method(service, place_order):
    order = place_order()
    with pytest.raises(NotFoundError):
        service.process_payment(order.id, 999)


def test_get_order_includes_details(service, place_order):
    order = place_order()

    result = service.get_order(order.id)

    assert result["total"] == Decimal("20.00")
    assert len(result["details"]) == 1
    assert result["details"][0]["quantity"] == 1


def test_list_by_status_validates_status(service, place_order):
    place_order()
    place_order(status="PAID")

    assert [o["status"] for o in service.list_by_status("paid")] == ["PAID"]
    with pytest.raises(InvalidInputError):
        service.list_by_status("FLERG")


def test_list_by_customer(service, place_order, make_customer):
    alice = make_customer()
    place_order(customer=alice)
    place_order(customer=alice)
    place_order()

    assert len(service.list_by_customer(alice.id)) == 2
    with pytest.raises(NotFoundError):
        service.list_by_customer(999)


def test_list_between_dates(service, place_order):
    place_order(now=datetime(2024, 1, 15, 23, 59, tzinfo=timezone.utc))
    place_order(now=datetime(2024, 2, 1, 8, 0, tzinfo=timezone.utc))

    assert len(service.list_between(date(2024, 1, 15), date(2024, 1, 15))) == 1
    assert len(service.list_between(date(2024, 1, 1), date(2024, 2, 28))) == 2
    assert service.list_between(date(2024, 3, 1), date(2024, 3, 31)) == []


def test_list_between_inverted_range(service):
    with pytest.raises(InvalidInputError):
        service.list_between(date(2024, 2, 1), date(2024, 1, 1))


def test_delete_order_removes_details(service, db, place_order):
    order = place_order()

    service.delete_order(order.id)

    db.expire_all()
    assert db.get(OrderModel, order.id) is None
    assert db.query(OrderDetailModel).filter_by(order_id=order.id).count() == 0
