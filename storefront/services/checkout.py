from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.data.models.order_detail import OrderDetailModel
from storefront.domain.errors import NotFoundError, ConflictingStateError
from storefront.domain.order_status import INITIAL_STATUS
from storefront.repos.cart_repo import CartRepo
from storefront.repos.customer_repo import CustomerRepo
from storefront.repos.order_repo import OrderRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_CENT = Decimal("0.01")


def checkout(db: Session, customer_id: int, now: datetime | None = None) -> OrderModel:
    """
    Turn the customer's cart into a PENDING order and empty the cart.

    Runs on the caller's unit of work and never commits: the caller wraps it in
    ``transaction(db)`` so the order, its details and the cart deletion become
    visible together or not at all. Cart rows are read with a row lock so a line
    added concurrently is neither lost nor counted twice.

    The total is computed from product prices at the time of the call and
    snapshotted on the order details.
    """
    if CustomerRepo(db).get_customer(customer_id) is None:
        raise NotFoundError("Customer", "id", customer_id)

    carts = CartRepo(db)
    lines = carts.get_priced_items(customer_id, for_update=True)
    if not lines:
        raise ConflictingStateError("Cart is empty")

    total = sum((price * item.quantity for item, price in lines), Decimal("0.00")).quantize(_CENT)

    order = OrderModel(
        customer_id=customer_id,
        status=INITIAL_STATUS.value,
        total=total,
        created_at=now or datetime.now(timezone.utc),
    )
    details = [
        OrderDetailModel(product_id=item.product_id, quantity=item.quantity, unit_price=price)
        for item, price in lines
    ]
    OrderRepo(db).create_order(order, details)

    # only the lines priced into this order, a line added meanwhile stays in the cart
    removed = carts.delete_items([item.id for item, _ in lines])
    logger.info(f"Checkout of customer {customer_id}: order {order.id}, {removed} line(s), total {total}")

    return order
