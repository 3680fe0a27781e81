# storefront/services/order_service.py
from datetime import date, datetime, time, timedelta, timezone
from typing import Dict, Any, List

from sqlalchemy.orm import Session

from storefront.data.database import transaction
from storefront.data.models.order import OrderModel
from storefront.domain.errors import NotFoundError, InvalidInputError, ConflictingStateError
from storefront.domain.order_status import (
    OrderStatus,
    CANCELLABLE_STATUSES,
    parse_status,
    ensure_transition,
)
from storefront.repos.customer_repo import CustomerRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.payment_repo import PaymentMethodRepo
from storefront.services.checkout import checkout
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Orders: creation from the cart, queries and the status lifecycle.
    Every state change runs in one transaction; notifications go out after commit.
    """

    def __init__(
        self,
        db: Session,
        lock_service: LockService | None = None,
        notifier: NotificationService | None = None,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.customers = CustomerRepo(db)
        self.payment_methods = PaymentMethodRepo(db)
        self.lock_service = lock_service
        self.notifier = notifier or NotificationService()

    def create_order_from_cart(self, customer_id: int) -> int:
        """
        Use case: checkout.

        1. Locks the customer's cart
        2. Creates the order from the cart and clears it in one transaction
        3. Sends the notification (async)
        """
        with self.lock_service.cart_lock(customer_id), transaction(self.db):
            order = checkout(self.db, customer_id)

        logger.info(f"Order {order.id} created for customer {customer_id}, total {order.total}")
        self.notifier.send_order_notification(customer_id, order.id, order.status)

        return order.id

    #queries
    def get_order(self, order_id: int) -> Dict[str, Any]:
        return self._to_dict(self._require_order(order_id))

    def order_owner(self, order_id: int) -> int:
        return self._require_order(order_id).customer_id

    def list_orders(self, skip: int = 0, limit: int = 50) -> List[Dict[str, Any]]:
        return [self._to_dict(o) for o in self.repo.list_orders(skip, limit)]

    def list_by_customer(self, customer_id: int) -> List[Dict[str, Any]]:
        if not self.customers.get_customer(customer_id):
            raise NotFoundError("Customer", "id", customer_id)
        return [self._to_dict(o) for o in self.repo.list_by_customer(customer_id)]

    def list_by_status(self, raw_status: str) -> List[Dict[str, Any]]:
        status = parse_status(raw_status)
        return [self._to_dict(o) for o in self.repo.list_by_status(status.value)]

    def list_between(self, start_date: date, end_date: date) -> List[Dict[str, Any]]:
        if start_date > end_date:
            raise InvalidInputError("start_date must not be after end_date")

        # end date is inclusive
        start = datetime.combine(start_date, time.min, tzinfo=timezone.utc)
        end = datetime.combine(end_date + timedelta(days=1), time.min, tzinfo=timezone.utc)
        return [self._to_dict(o) for o in self.repo.list_between(start, end)]

    #commands
    def update_status(self, order_id: int, raw_status: str) -> Dict[str, Any]:
        target = parse_status(raw_status)

        with transaction(self.db):
            order = self._require_order(order_id, for_update=True)
            current = OrderStatus(order.status)
            ensure_transition(current, target)
            order.status = target.value
            if target is OrderStatus.PAID and order.paid_at is None:
                order.paid_at = datetime.now(timezone.utc)
            self.db.flush()

        logger.info(f"Order {order_id} status {current.value} -> {target.value}")
        self.notifier.send_order_notification(order.customer_id, order.id, order.status)
        return self._to_dict(order)

    def cancel_order(self, order_id: int) -> Dict[str, Any]:
        with transaction(self.db):
            order = self._require_order(order_id, for_update=True)
            current = OrderStatus(order.status)
            if current not in CANCELLABLE_STATUSES:
                raise ConflictingStateError(f"Cannot cancel an order that is {current.value}")
            order.status = OrderStatus.CANCELLED.value
            self.db.flush()

        logger.info(f"Order {order_id} cancelled (was {current.value})")
        self.notifier.send_order_notification(order.customer_id, order.id, order.status)
        return self._to_dict(order)

    def process_payment(self, order_id: int, payment_method_id: int) -> Dict[str, Any]:
        with transaction(self.db):
            order = self._require_order(order_id, for_update=True)

            method = self.payment_methods.get_method(payment_method_id)
            if not method:
                raise NotFoundError("Payment method", "id", payment_method_id)
            if method.customer_id != order.customer_id:
                raise InvalidInputError("Payment method does not belong to the order's customer")

            current = OrderStatus(order.status)
            if current is not OrderStatus.PENDING:
                raise ConflictingStateError(f"Only PENDING orders can be paid, order is {current.value}")

            order.status = OrderStatus.PAID.value
            order.payment_method_id = method.id
            order.paid_at = datetime.now(timezone.utc)
            self.db.flush()

        logger.info(f"Order {order_id} paid with payment method {payment_method_id}")
        self.notifier.send_order_notification(order.customer_id, order.id, order.status)
        return self._to_dict(order)

    def delete_order(self, order_id: int) -> None:
        with transaction(self.db):
            order = self._require_order(order_id)
            self.repo.delete_order(order)

        logger.warning(f"Order {order_id} deleted")

    def _require_order(self, order_id: int, for_update: bool = False) -> OrderModel:
        order = self.repo.get_order(order_id, for_update=for_update)
        if not order:
            raise NotFoundError("Order", "id", order_id)
        return order

    def _to_dict(self, order: OrderModel) -> Dict[str, Any]:
        return {
            "id": order.id,
            "customer_id": order.customer_id,
            "status": order.status,
            "total": order.total,
            "created_at": order.created_at,
            "payment_method_id": order.payment_method_id,
            "paid_at": order.paid_at,
            "details": [
                {"product_id": d.product_id, "quantity": d.quantity, "unit_price": d.unit_price}
                for d in self.repo.get_details(order.id)
            ],
        }
