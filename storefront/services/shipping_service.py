from datetime import datetime, timezone
from typing import Dict, Any, List

from sqlalchemy.orm import Session

from storefront.data.database import transaction
from storefront.data.models.order import OrderModel
from storefront.data.models.shipment import ShipmentModel
from storefront.data.models.shipment_event import ShipmentEventModel
from storefront.domain.errors import NotFoundError, InvalidInputError, ConflictingStateError
from storefront.domain.order_status import OrderStatus, ensure_transition
from storefront.domain.shipment_status import ShipmentStatus, parse_shipment_status
from storefront.repos.customer_repo import CustomerRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.shipment_repo import ShipmentRepo
from storefront.services.notification_service import NotificationService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ShippingService:
    """
    Shipments and their tracking events.

    Shipping drives the tail of the order lifecycle: creating a shipment moves
    the order PAID -> SHIPPED, delivering it moves the order SHIPPED -> DELIVERED.
    Both checks go through the order status machine on a row-locked order.
    """

    def __init__(self, db: Session, notifier: NotificationService | None = None):
        self.db = db
        self.repo = ShipmentRepo(db)
        self.orders = OrderRepo(db)
        self.customers = CustomerRepo(db)
        self.notifier = notifier or NotificationService()

    #queries
    def get_shipment(self, shipment_id: int) -> Dict[str, Any]:
        return self._to_dict(self._require(shipment_id))

    def shipment_owner(self, shipment_id: int) -> int:
        order = self.orders.get_order(self._require(shipment_id).order_id)
        return order.customer_id

    def track(self, tracking_number: str) -> Dict[str, Any]:
        shipment = self.repo.get_by_tracking_number(tracking_number)
        if not shipment:
            raise NotFoundError("Shipment", "tracking number", tracking_number)
        return self._to_dict(shipment)

    def list_all(self) -> List[Dict[str, Any]]:
        return [self._to_dict(s) for s in self.repo.list_all()]

    def list_by_order(self, order_id: int) -> List[Dict[str, Any]]:
        self._require_order(order_id)
        return [self._to_dict(s) for s in self.repo.list_by_order(order_id)]

    def list_by_customer(self, customer_id: int) -> List[Dict[str, Any]]:
        if not self.customers.get_customer(customer_id):
            raise NotFoundError("Customer", "id", customer_id)
        return [self._to_dict(s) for s in self.repo.list_by_customer(customer_id)]

    def list_by_status(self, raw_status: str) -> List[Dict[str, Any]]:
        status = parse_shipment_status(raw_status)
        return [self._to_dict(s) for s in self.repo.list_by_status(status.value)]

    #commands
    def create_shipment(
        self,
        order_id: int,
        carrier: str,
        tracking_number: str | None = None,
        tracking_url: str | None = None,
        now: datetime | None = None,
    ) -> Dict[str, Any]:
        now = now or datetime.now(timezone.utc)

        with transaction(self.db):
            order = self._require_order(order_id, for_update=True)
            ensure_transition(OrderStatus(order.status), OrderStatus.SHIPPED)
            self._ensure_tracking_number_free(tracking_number)

            order.status = OrderStatus.SHIPPED.value
            shipment = self.repo.add(
                ShipmentModel(
                    order_id=order.id,
                    carrier=carrier,
                    tracking_number=tracking_number,
                    tracking_url=tracking_url,
                    status=ShipmentStatus.SHIPPED.value,
                    shipped_at=now,
                )
            )
            self.repo.add_event(
                ShipmentEventModel(
                    shipment_id=shipment.id, event_type=ShipmentStatus.SHIPPED.value, occurred_at=now
                )
            )

        logger.info(f"Order {order_id} shipped with {carrier}, shipment {shipment.id}")
        self.notifier.send_order_notification(order.customer_id, order.id, order.status)
        return self._to_dict(shipment)

    def update_status(self, shipment_id: int, raw_status: str, notes: str | None = None) -> Dict[str, Any]:
        target = parse_shipment_status(raw_status)
        if target is ShipmentStatus.DELIVERED:
            return self.mark_delivered(shipment_id, notes)

        with transaction(self.db):
            shipment = self._require(shipment_id, for_update=True)
            self._ensure_not_delivered(shipment)
            shipment.status = target.value
            self.repo.add_event(ShipmentEventModel(shipment_id=shipment.id, event_type=target.value, notes=notes))

        logger.info(f"Shipment {shipment_id} is now {target.value}")
        return self._to_dict(shipment)

    def mark_delivered(self, shipment_id: int, notes: str | None = None, now: datetime | None = None) -> Dict[str, Any]:
        now = now or datetime.now(timezone.utc)

        with transaction(self.db):
            shipment = self._require(shipment_id, for_update=True)
            self._ensure_not_delivered(shipment)
            order = self._require_order(shipment.order_id, for_update=True)
            ensure_transition(OrderStatus(order.status), OrderStatus.DELIVERED)

            order.status = OrderStatus.DELIVERED.value
            shipment.status = ShipmentStatus.DELIVERED.value
            shipment.delivered_at = now
            self.repo.add_event(
                ShipmentEventModel(
                    shipment_id=shipment.id,
                    event_type=ShipmentStatus.DELIVERED.value,
                    notes=notes,
                    occurred_at=now,
                )
            )

        logger.info(f"Shipment {shipment_id} delivered, order {order.id} is DELIVERED")
        self.notifier.send_order_notification(order.customer_id, order.id, order.status)
        return self._to_dict(shipment)

    def add_event(self, shipment_id: int, event_type: str, location: str | None, notes: str | None = None) -> Dict[str, Any]:
        event_type = (event_type or "").strip().upper()
        if not event_type:
            raise InvalidInputError("Event type must not be empty")

        with transaction(self.db):
            shipment = self._require(shipment_id, for_update=True)
            self.repo.add_event(
                ShipmentEventModel(shipment_id=shipment.id, event_type=event_type, location=location, notes=notes)
            )

        logger.info(f"Shipment {shipment_id}: event {event_type} at {location}")
        return self._to_dict(shipment)

    def update_tracking(
        self, shipment_id: int, carrier: str, tracking_number: str, tracking_url: str | None = None
    ) -> Dict[str, Any]:
        with transaction(self.db):
            shipment = self._require(shipment_id, for_update=True)
            if tracking_number != shipment.tracking_number:
                self._ensure_tracking_number_free(tracking_number)
            shipment.carrier = carrier
            shipment.tracking_number = tracking_number
            shipment.tracking_url = tracking_url
            self.db.flush()

        logger.info(f"Shipment {shipment_id} tracking set to {carrier} {tracking_number}")
        return self._to_dict(shipment)

    def _ensure_tracking_number_free(self, tracking_number: str | None):
        if tracking_number and self.repo.get_by_tracking_number(tracking_number):
            raise ConflictingStateError(f"Tracking number {tracking_number} is already in use")

    @staticmethod
    def _ensure_not_delivered(shipment: ShipmentModel):
        if shipment.status == ShipmentStatus.DELIVERED.value:
            raise ConflictingStateError(f"Shipment {shipment.id} is already delivered")

    def _require(self, shipment_id: int, for_update: bool = False) -> ShipmentModel:
        shipment = self.repo.get(shipment_id, for_update=for_update)
        if not shipment:
            raise NotFoundError("Shipment", "id", shipment_id)
        return shipment

    def _require_order(self, order_id: int, for_update: bool = False) -> OrderModel:
        order = self.orders.get_order(order_id, for_update=for_update)
        if not order:
            raise NotFoundError("Order", "id", order_id)
        return order

    def _to_dict(self, shipment: ShipmentModel) -> Dict[str, Any]:
        return {
            "id": shipment.id,
            "order_id": shipment.order_id,
            "carrier": shipment.carrier,
            "tracking_number": shipment.tracking_number,
            "tracking_url": shipment.tracking_url,
            "status": shipment.status,
            "shipped_at": shipment.shipped_at,
            "delivered_at": shipment.delivered_at,
            "events": [
                {"event_type": e.event_type, "location": e.location, "notes": e.notes, "occurred_at": e.occurred_at}
                for e in self.repo.get_events(shipment.id)
            ],
        }
