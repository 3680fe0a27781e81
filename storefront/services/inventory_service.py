from typing import List

from sqlalchemy.orm import Session

from storefront.data.database import transaction
from storefront.data.models.inventory import InventoryModel
from storefront.domain.errors import NotFoundError, InvalidInputError, ConflictingStateError
from storefront.domain.schemas import MAX_QUANTITY
from storefront.repos.inventory_repo import InventoryRepo
from storefront.repos.product_repo import ProductRepo, StoreRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class InventoryService:
    """
    Stock per (store, product).
    adjust() is a relative change done as read-modify-write under a row lock,
    update() replaces quantity and location.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = InventoryRepo(db)
        self.stores = StoreRepo(db)
        self.products = ProductRepo(db)

    def get(self, store_id: int, product_id: int) -> InventoryModel:
        return self._require(store_id, product_id)

    def list_all(self) -> List[InventoryModel]:
        return self.repo.list_all()

    def list_by_store(self, store_id: int) -> List[InventoryModel]:
        self._require_store(store_id)
        return self.repo.list_by_store(store_id)

    def list_by_product(self, product_id: int) -> List[InventoryModel]:
        self._require_product(product_id)
        return self.repo.list_by_product(product_id)

    def list_low_stock(self, threshold: int) -> List[InventoryModel]:
        if threshold < 0:
            raise InvalidInputError("Threshold cannot be negative")
        return self.repo.list_low_stock(threshold)

    def create(self, store_id: int, product_id: int, quantity: int, location: str | None = None) -> InventoryModel:
        if quantity < 0:
            raise InvalidInputError("Quantity cannot be negative")
        self._require_store(store_id)
        self._require_product(product_id)

        with transaction(self.db):
            if self.repo.get(store_id, product_id):
                raise ConflictingStateError(
                    f"Inventory already exists for store {store_id} and product {product_id}"
                )
            record = self.repo.add(
                InventoryModel(store_id=store_id, product_id=product_id, quantity=quantity, location=location)
            )

        logger.info(f"Inventory created for store {store_id}, product {product_id}: {quantity}")
        return record

    def update(self, store_id: int, product_id: int, quantity: int, location: str | None) -> InventoryModel:
        if quantity < 0:
            raise InvalidInputError("Quantity cannot be negative")

        with transaction(self.db):
            record = self._require(store_id, product_id, for_update=True)
            record.quantity = quantity
            record.location = location
            self.db.flush()

        logger.info(f"Inventory for store {store_id}, product {product_id} set to {quantity}")
        return record

    def delete(self, store_id: int, product_id: int) -> None:
        with transaction(self.db):
            record = self._require(store_id, product_id)
            self.repo.delete(record)

        logger.info(f"Inventory for store {store_id}, product {product_id} deleted")

    def adjust(self, store_id: int, product_id: int, delta: int) -> InventoryModel:
        with transaction(self.db):
            record = self._require(store_id, product_id, for_update=True)

            new_quantity = record.quantity + delta
            if new_quantity < 0:
                raise InvalidInputError(
                    f"Adjustment {delta} would leave negative stock "
                    f"({record.quantity} on hand) for store {store_id}, product {product_id}"
                )
            if new_quantity > MAX_QUANTITY:
                raise InvalidInputError(f"Adjustment {delta} would exceed the maximum stock of {MAX_QUANTITY}")
            record.quantity = new_quantity
            self.db.flush()

        logger.info(f"Inventory for store {store_id}, product {product_id} adjusted by {delta} to {new_quantity}")
        return record

    def _require(self, store_id: int, product_id: int, for_update: bool = False) -> InventoryModel:
        record = self.repo.get(store_id, product_id, for_update=for_update)
        if not record:
            raise NotFoundError("Inventory", "store id and product id", f"{store_id}, {product_id}")
        return record

    def _require_store(self, store_id: int):
        store = self.stores.get_store(store_id)
        if not store:
            raise NotFoundError("Store", "id", store_id)
        return store

    def _require_product(self, product_id: int):
        product = self.products.get_product(product_id)
        if not product:
            raise NotFoundError("Product", "id", product_id)
        return product
