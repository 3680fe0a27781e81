from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.orm import Session

from storefront.data.database import transaction
from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import NotFoundError, InvalidInputError
from storefront.repos.cart_repo import CartRepo
from storefront.repos.customer_repo import CustomerRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.lock_service import LockService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _line(item: CartItemModel, price: Decimal) -> Dict[str, Any]:
    return {
        "cart_id": item.id,
        "customer_id": item.customer_id,
        "product_id": item.product_id,
        "quantity": item.quantity,
        "unit_price": price,
        "line_total": price * item.quantity,
        "added_at": item.added_at,
    }


class CartService:
    """
    Use cases of the cart aggregate.
    A cart is the set of line items of one customer, at most one line per product.
    Commands (add, update, remove, clear) change state under the customer's cart lock,
    queries (get) only read.
    """

    def __init__(self, db: Session, lock_service: LockService):
        self.db = db
        self.repo = CartRepo(db)
        self.customers = CustomerRepo(db)
        self.products = ProductRepo(db)
        self.lock_service = lock_service

    #queries
    def get_cart(self, customer_id: int) -> Dict[str, Any]:
        self._require_customer(customer_id)

        lines = self.repo.get_priced_items(customer_id)
        items = [_line(item, price) for item, price in lines]
        total = sum((i["line_total"] for i in items), Decimal("0.00"))

        return {"customer_id": customer_id, "items": items, "total": total}

    def get_cart_item(self, cart_id: int) -> Dict[str, Any]:
        item = self._require_item(cart_id)
        product = self.products.get_product(item.product_id)
        return _line(item, product.price)

    def cart_owner(self, cart_id: int) -> int:
        return self._require_item(cart_id).customer_id

    #commands
    def add_product(self, customer_id: int, product_id: int, quantity: int) -> Dict[str, Any]:
        if quantity is None or quantity <= 0:
            raise InvalidInputError("Quantity must be greater than zero")

        self._require_customer(customer_id)
        product = self.products.get_product(product_id)
        if not product:
            raise NotFoundError("Product", "id", product_id)

        with self.lock_service.cart_lock(customer_id), transaction(self.db):
            item = self.repo.get_customer_item(customer_id, product_id)

            if item:
                logger.info(
                    f"Product {product_id} already in cart of customer {customer_id}, "
                    f"quantity {item.quantity} -> {item.quantity + quantity}"
                )
                item.quantity += quantity
                self.db.flush()
            else:
                logger.info(f"Adding product {product_id} to cart of customer {customer_id}")
                item = self.repo.add_cart_item(
                    CartItemModel(
                        customer_id=customer_id,
                        product_id=product_id,
                        quantity=quantity,
                    )
                )

        return _line(item, product.price)

    def update_quantity(self, cart_id: int, product_id: int, quantity: int) -> Dict[str, Any]:
        # zero means "remove", that translation belongs to the caller
        if quantity is None or quantity <= 0:
            raise InvalidInputError("Quantity must be greater than zero")

        owner = self.cart_owner(cart_id)

        with self.lock_service.cart_lock(owner), transaction(self.db):
            item = self._require_line(cart_id, product_id, for_update=True)
            item.quantity = quantity
            self.db.flush()

        logger.info(f"Cart line {cart_id} quantity set to {quantity}")
        return self.get_cart_item(cart_id)

    def remove_product(self, cart_id: int, product_id: int) -> Dict[str, Any]:
        owner = self.cart_owner(cart_id)

        with self.lock_service.cart_lock(owner), transaction(self.db):
            item = self._require_line(cart_id, product_id, for_update=True)
            removed = self.get_cart_item(cart_id)
            self.repo.delete_cart_item(item)

        logger.info(f"Removed product {product_id} (line {cart_id}) from cart of customer {removed['customer_id']}")
        return removed

    def clear(self, customer_id: int) -> int:
        self._require_customer(customer_id)

        with self.lock_service.cart_lock(customer_id), transaction(self.db):
            if not self.repo.get_cart_items(customer_id):
                raise NotFoundError("Cart", "customer id", customer_id)
            removed = self.repo.delete_customer_items(customer_id)

        logger.info(f"Cleared cart of customer {customer_id}, {removed} line(s) removed")
        return removed

    def _require_customer(self, customer_id: int):
        customer = self.customers.get_customer(customer_id)
        if not customer:
            raise NotFoundError("Customer", "id", customer_id)
        return customer

    def _require_item(self, cart_id: int, for_update: bool = False) -> CartItemModel:
        item = self.repo.get_cart_item(cart_id, for_update=for_update)
        if not item:
            raise NotFoundError("Cart", "id", cart_id)
        return item

    def _require_line(self, cart_id: int, product_id: int, for_update: bool = False) -> CartItemModel:
        item = self._require_item(cart_id, for_update=for_update)
        if item.product_id != product_id:
            raise NotFoundError("Cart line", "cart id and product id", f"{cart_id}, {product_id}")
        return item
