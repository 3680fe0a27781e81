# storefront/repos/inventory_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.inventory import InventoryModel


class InventoryRepo:
    def __init__(self, db: Session):
        self.db = db

    def get(self, store_id: int, product_id: int, for_update: bool = False) -> InventoryModel | None:
        if not for_update:
            return self.db.get(InventoryModel, (store_id, product_id))
        # row lock for read-modify-write, re-read even if already in the session
        return self.db.execute(
            select(InventoryModel)
            .where(InventoryModel.store_id == store_id, InventoryModel.product_id == product_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def list_all(self) -> list[InventoryModel]:
        return list(
            self.db.execute(
                select(InventoryModel).order_by(InventoryModel.store_id, InventoryModel.product_id)
            ).scalars()
        )

    def list_by_store(self, store_id: int) -> list[InventoryModel]:
        return list(
            self.db.execute(
                select(InventoryModel)
                .where(InventoryModel.store_id == store_id)
                .order_by(InventoryModel.product_id)
            ).scalars()
        )

    def list_by_product(self, product_id: int) -> list[InventoryModel]:
        return list(
            self.db.execute(
                select(InventoryModel)
                .where(InventoryModel.product_id == product_id)
                .order_by(InventoryModel.store_id)
            ).scalars()
        )

    def list_low_stock(self, threshold: int) -> list[InventoryModel]:
        return list(
            self.db.execute(
                select(InventoryModel)
                .where(InventoryModel.quantity < threshold)
                .order_by(InventoryModel.quantity, InventoryModel.store_id)
            ).scalars()
        )

    def add(self, record: InventoryModel) -> InventoryModel:
        self.db.add(record)
        self.db.flush()
        return record

    def delete(self, record: InventoryModel) -> None:
        self.db.delete(record)
        self.db.flush()
