"""Tests for the checkout unit of work and OrderService.create_order_from_cart."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from storefront.data.database import transaction
from storefront.data.models import CartItemModel, OrderModel, OrderDetailModel
from storefront.domain.errors import ConflictingStateError, NotFoundError
from storefront.repos.order_repo import OrderRepo
from storefront.services.checkout import checkout
from storefront.services.order_service import OrderService

pytestmark = pytest.mark.service


@pytest.fixture
def service(db, lock_service, notifier):
    return OrderService(db, lock_service=lock_service, notifier=notifier)


@pytest.fixture
def filled_cart(make_customer, make_product, make_cart_item):
    """Product A 10.00 x 2 and product B 5.00 x 3."""
    customer = make_customer()
    a = make_product("10.00", "A")
    b = make_product("5.00", "B")
    make_cart_item(customer, a, 2)
    make_cart_item(customer, b, 3)
    return customer, a, b


def _count(db, model, **filters):
    db.expire_all()
    return db.query(model).filter_by(**filters).count()


def test_checkout_creates_pending_order_and_empties_cart(service, db, filled_cart):
    customer, a, b = filled_cart

    order_id = service.create_order_from_cart(customer.id)

    order = db.get(OrderModel, order_id)
    assert order.status == "PENDING"
    assert order.customer_id == customer.id
    assert order.total == Decimal("35.00")
    assert _count(db, CartItemModel, customer_id=customer.id) == 0
    assert _count(db, OrderModel) == 1


def test_checkout_snapshots_unit_prices_on_details(service, db, filled_cart):
    customer, a, b = filled_cart

    order_id = service.create_order_from_cart(customer.id)

    a.price = Decimal("99.00")
    db.commit()

    details = {d.product_id: d for d in db.query(OrderDetailModel).filter_by(order_id=order_id)}
    assert details[a.id].quantity == 2
    assert details[a.id].unit_price == Decimal("10.00")
    assert details[b.id].unit_price == Decimal("5.00")
    assert db.get(OrderModel, order_id).total == Decimal("35.00")


def test_checkout_notifies_after_commit(service, notifier, filled_cart):
    customer, _, _ = filled_cart

    order_id = service.create_order_from_cart(customer.id)

    notifier.send_order_notification.assert_called_once_with(customer.id, order_id, "PENDING")


def test_checkout_holds_cart_lock(service, lock_service, filled_cart):
    customer, _, _ = filled_cart

    service.create_order_from_cart(customer.id)

    lock_service.cart_lock.assert_called_once_with(customer.id)


def test_checkout_empty_cart_creates_no_order(service, db, notifier, make_customer):
    customer = make_customer()

    with pytest.raises(ConflictingStateError):
        service.create_order_from_cart(customer.id)

    assert _count(db, OrderModel) == 0
    notifier.send_order_notification.assert_not_called()


def test_checkout_unknown_customer(service):
    with pytest.raises(NotFoundError):
        service.create_order_from_cart(404)


def test_checkout_is_all_or_nothing(service, db, notifier, filled_cart, monkeypatch):
    customer, _, _ = filled_cart

    def fail(self, cart_ids):
        raise RuntimeError("storage failure")

    monkeypatch.setattr("storefront.repos.cart_repo.CartRepo.delete_items", fail)

    with pytest.raises(RuntimeError):
        service.create_order_from_cart(customer.id)

    assert _count(db, OrderModel) == 0
    assert _count(db, OrderDetailModel) == 0
    assert _count(db, CartItemModel, customer_id=customer.id) == 2
    notifier.send_order_notification.assert_not_called()


def test_checkout_function_uses_given_timestamp(db, filled_cart):
    customer, _, _ = filled_cart
    now = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    with transaction(db):
        order = checkout(db, customer.id, now=now)

    assert order.created_at.replace(tzinfo=None) == now.replace(tzinfo=None)


def test_checkout_does_not_touch_other_carts(service, db, filled_cart, make_customer, make_cart_item):
    customer, a, _ = filled_cart
    other = make_customer()
    make_cart_item(other, a, 1)

    service.create_order_from_cart(customer.id)

    assert _count(db, CartItemModel, customer_id=other.id) == 1


def test_line_added_during_checkout_stays_in_cart(service, db, filled_cart, make_product, monkeypatch):
    customer, a, b = filled_cart
    late = make_product("7.00", "late")
    create_order = OrderRepo.create_order

    def create_then_late_line(self, order, details):
        created = create_order(self, order, details)
        db.add(CartItemModel(customer_id=customer.id, product_id=late.id, quantity=4))
        db.flush()
        return created

    monkeypatch.setattr(OrderRepo, "create_order", create_then_late_line)

    order_id = service.create_order_from_cart(customer.id)

    ordered = {d.product_id for d in db.query(OrderDetailModel).filter_by(order_id=order_id)}
    db.expire_all()
    remaining = db.query(CartItemModel).filter_by(customer_id=customer.id).all()
    assert ordered == {a.id, b.id}
    assert [(line.product_id, line.quantity) for line in remaining] == [(late.id, 4)]
    assert db.get(OrderModel, order_id).total == Decimal("35.00")
