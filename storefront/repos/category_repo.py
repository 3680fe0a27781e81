from sqlalchemy import select, func
from sqlalchemy.orm import Session

from storefront.data.models.category import CategoryModel
from storefront.data.models.product import ProductModel
from storefront.data.models.supplier import SupplierModel


class CategoryRepo:
    def __init__(self, db: Session):
        self.db = db

    def get(self, category_id: int) -> CategoryModel | None:
        return self.db.get(CategoryModel, category_id)

    def get_by_name(self, name: str) -> CategoryModel | None:
        return self.db.execute(
            select(CategoryModel).where(func.lower(CategoryModel.name) == name.lower())
        ).scalar_one_or_none()

    def list_all(self) -> list[CategoryModel]:
        return list(self.db.execute(select(CategoryModel).order_by(CategoryModel.name)).scalars())

    def list_children(self, parent_id: int) -> list[CategoryModel]:
        return list(
            self.db.execute(
                select(CategoryModel).where(CategoryModel.parent_id == parent_id).order_by(CategoryModel.name)
            ).scalars()
        )

    def count_products(self, category_id: int) -> int:
        return self.db.execute(
            select(func.count()).select_from(ProductModel).where(ProductModel.category_id == category_id)
        ).scalar_one()

    def add(self, category: CategoryModel) -> CategoryModel:
        self.db.add(category)
        self.db.flush()
        return category

    def delete(self, category: CategoryModel) -> None:
        self.db.delete(category)
        self.db.flush()


class SupplierRepo:
    def __init__(self, db: Session):
        self.db = db

    def get(self, supplier_id: int) -> SupplierModel | None:
        return self.db.get(SupplierModel, supplier_id)

    def get_by_name(self, name: str) -> SupplierModel | None:
        return self.db.execute(
            select(SupplierModel).where(func.lower(SupplierModel.name) == name.lower())
        ).scalar_one_or_none()

    def list_all(self) -> list[SupplierModel]:
        return list(self.db.execute(select(SupplierModel).order_by(SupplierModel.name)).scalars())

    def add(self, supplier: SupplierModel) -> SupplierModel:
        self.db.add(supplier)
        self.db.flush()
        return supplier

    def delete(self, supplier: SupplierModel) -> None:
        self.db.delete(supplier)
        self.db.flush()
