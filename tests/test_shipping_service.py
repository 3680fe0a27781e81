"""Tests for shipments and the SHIPPED/DELIVERED tail of the order lifecycle."""

from datetime import datetime, timezone

import pytest

from storefront.data.database import transaction
from storefront.data.models import OrderModel, ShipmentModel, ShipmentEventModel
from storefront.domain.errors import ConflictingStateError, InvalidInputError, NotFoundError
from storefront.services.checkout import checkout
from storefront.services.order_service import OrderService
from storefront.services.shipping_service import ShippingService

pytestmark = pytest.mark.service


@pytest.fixture
def service(db, notifier):
    return ShippingService(db, notifier=notifier)


@pytest.fixture
def place_order(db, make_customer, make_product, make_cart_item):
    def _place(status="PAID"):
        customer = make_customer()
        make_cart_item(customer, make_product("15.00"), 2)
        with transaction(db):
            order = checkout(db, customer.id)
            order.status = status
        return order

    return _place


def _status(db, order_id):
    db.expire_all()
    return db.get(OrderModel, order_id).status


def test_shipping_a_paid_order_marks_it_shipped(service, db, notifier, place_order):
    order = place_order()

    shipment = service.create_shipment(order.id, "DHL", tracking_number="TRK-1")

    assert shipment["status"] == "SHIPPED"
    assert shipment["order_id"] == order.id
    assert [e["event_type"] for e in shipment["events"]] == ["SHIPPED"]
    assert _status(db, order.id) == "SHIPPED"
    notifier.send_order_notification.assert_called_once_with(order.customer_id, order.id, "SHIPPED")


@pytest.mark.parametrize("start", ["PENDING", "SHIPPED", "DELIVERED", "CANCELLED"])
def test_only_paid_orders_can_be_shipped(service, db, notifier, place_order, start):
    order = place_order(status=start)

    with pytest.raises(ConflictingStateError):
        service.create_shipment(order.id, "DHL")

    assert _status(db, order.id) == start
    assert service.list_by_order(order.id) == []
    notifier.send_order_notification.assert_not_called()


def test_ship_unknown_order(service):
    with pytest.raises(NotFoundError):
        service.create_shipment(999, "DHL")


def test_duplicate_tracking_number_is_conflict(service, db, place_order):
    service.create_shipment(place_order().id, "DHL", tracking_number="TRK-1")
    second = place_order()

    with pytest.raises(ConflictingStateError):
        service.create_shipment(second.id, "UPS", tracking_number="TRK-1")

    assert _status(db, second.id) == "PAID"


def test_delivery_completes_the_order(service, db, notifier, place_order):
    order = place_order()
    shipment = service.create_shipment(order.id, "DHL", tracking_number="TRK-1")
    delivered_at = datetime(2024, 3, 2, 12, 0, tzinfo=timezone.utc)

    result = service.mark_delivered(shipment["id"], notes="left at door", now=delivered_at)

    assert result["status"] == "DELIVERED"
    assert result["delivered_at"].replace(tzinfo=None) == delivered_at.replace(tzinfo=None)
    assert result["events"][-1]["event_type"] == "DELIVERED"
    assert result["events"][-1]["notes"] == "left at door"
    assert _status(db, order.id) == "DELIVERED"
    assert notifier.send_order_notification.call_count == 2


def test_delivering_twice_is_conflict(service, place_order):
    shipment = service.create_shipment(place_order().id, "DHL")
    service.mark_delivered(shipment["id"])

    with pytest.raises(ConflictingStateError):
        service.mark_delivered(shipment["id"])


def test_delivery_requires_shipped_order(service, db, place_order):
    order = place_order()
    shipment = service.create_shipment(order.id, "DHL")
    with transaction(db):
        db.get(OrderModel, order.id).status = "CANCELLED"

    with pytest.raises(ConflictingStateError):
        service.mark_delivered(shipment["id"])

    assert service.get_shipment(shipment["id"])["status"] == "SHIPPED"


def test_status_update_records_event(service, place_order):
    shipment = service.create_shipment(place_order().id, "DHL")

    result = service.update_status(shipment["id"], "in_transit", notes="hub")

    assert result["status"] == "IN_TRANSIT"
    assert [e["event_type"] for e in result["events"]] == ["SHIPPED", "IN_TRANSIT"]


def test_status_update_to_delivered_moves_the_order(service, db, place_order):
    order = place_order()
    shipment = service.create_shipment(order.id, "DHL")

    service.update_status(shipment["id"], "DELIVERED")

    assert _status(db, order.id) == "DELIVERED"


def test_unknown_shipment_status_is_rejected(service, place_order):
    shipment = service.create_shipment(place_order().id, "DHL")

    with pytest.raises(InvalidInputError):
        service.update_status(shipment["id"], "LOST_AT_SEA")

    with pytest.raises(InvalidInputError):
        service.list_by_status("LOST_AT_SEA")


def test_status_update_after_delivery_is_conflict(service, place_order):
    shipment = service.create_shipment(place_order().id, "DHL")
    service.mark_delivered(shipment["id"])

    with pytest.raises(ConflictingStateError):
        service.update_status(shipment["id"], "IN_TRANSIT")


def test_track_by_number(service, place_order):
    shipment = service.create_shipment(place_order().id, "DHL", tracking_number="TRK-9")

    assert service.track("TRK-9")["id"] == shipment["id"]
    with pytest.raises(NotFoundError):
        service.track("NOPE")


def test_add_event(service, place_order):
    shipment = service.create_shipment(place_order().id, "DHL")

    result = service.add_event(shipment["id"], "arrived", "Warsaw")

    assert result["events"][-1]["event_type"] == "ARRIVED"
    assert result["events"][-1]["location"] == "Warsaw"
    with pytest.raises(InvalidInputError):
        service.add_event(shipment["id"], "  ", None)


def test_update_tracking_rejects_number_in_use(service, place_order):
    service.create_shipment(place_order().id, "DHL", tracking_number="TRK-1")
    other = service.create_shipment(place_order().id, "DHL", tracking_number="TRK-2")

    with pytest.raises(ConflictingStateError):
        service.update_tracking(other["id"], "UPS", "TRK-1")

    result = service.update_tracking(other["id"], "UPS", "TRK-2", "https://track.example/TRK-2")
    assert result["carrier"] == "UPS"
    assert result["tracking_url"] == "https://track.example/TRK-2"


def test_list_by_customer_and_status(service, place_order):
    order = place_order()
    shipment = service.create_shipment(order.id, "DHL")
    service.create_shipment(place_order().id, "DHL")

    assert [s["id"] for s in service.list_by_customer(order.customer_id)] == [shipment["id"]]
    assert len(service.list_by_status("shipped")) == 2
    with pytest.raises(NotFoundError):
        service.list_by_customer(999)


def test_deleting_order_removes_its_shipments(service, db, place_order):
    order = place_order()
    shipment = service.create_shipment(order.id, "DHL")

    OrderService(db).delete_order(order.id)

    db.expire_all()
    assert db.get(ShipmentModel, shipment["id"]) is None
    assert db.query(ShipmentEventModel).count() == 0
