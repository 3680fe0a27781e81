# storefront/repos/cart_repo.py
from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.product import ProductModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_item(self, cart_id: int, for_update: bool = False) -> CartItemModel | None:
        if not for_update:
            return self.db.get(CartItemModel, cart_id)
        # re-read under a row lock, a concurrent checkout may have deleted the line
        return self.db.execute(
            select(CartItemModel)
            .where(CartItemModel.id == cart_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def get_customer_item(self, customer_id: int, product_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.customer_id == customer_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def get_cart_items(self, customer_id: int) -> list[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.customer_id == customer_id)
                .order_by(CartItemModel.id)
            ).scalars()
        )

    def get_priced_items(self, customer_id: int, for_update: bool = False):
        """Cart lines joined with the product's current price, as (item, price) rows."""
        stmt = (
            select(CartItemModel, ProductModel.price)
            .join(ProductModel, ProductModel.id == CartItemModel.product_id)
            .where(CartItemModel.customer_id == customer_id)
            .order_by(CartItemModel.id)
        )
        if for_update:
            stmt = stmt.with_for_update(of=CartItemModel)
        return [(row[0], row[1]) for row in self.db.execute(stmt).all()]

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_cart_item(self, item: CartItemModel) -> None:
        self.db.delete(item)
        self.db.flush()

    def delete_customer_items(self, customer_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.customer_id == customer_id)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def delete_items(self, cart_ids: list[int]) -> int:
        if not cart_ids:
            return 0
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.id.in_(cart_ids))
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount
