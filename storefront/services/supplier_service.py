from typing import List

from sqlalchemy.orm import Session

from storefront.data.database import transaction
from storefront.data.models.supplier import SupplierModel
from storefront.domain.errors import NotFoundError, InvalidInputError, ConflictingStateError
from storefront.domain.schemas import SupplierIn
from storefront.repos.category_repo import SupplierRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class SupplierService:
    """Suppliers, unique by name ignoring case."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SupplierRepo(db)

    def get_supplier(self, supplier_id: int) -> SupplierModel:
        supplier = self.repo.get(supplier_id)
        if not supplier:
            raise NotFoundError("Supplier", "id", supplier_id)
        return supplier

    def list_suppliers(self) -> List[SupplierModel]:
        return self.repo.list_all()

    def create_supplier(self, payload: SupplierIn) -> SupplierModel:
        name = self._clean_name(payload.name)

        with transaction(self.db):
            self._ensure_name_free(name)
            supplier = self.repo.add(
                SupplierModel(name=name, contact_name=payload.contact_name, email=payload.email, phone=payload.phone)
            )

        logger.info(f"Supplier {supplier.id} '{name}' created")
        return supplier

    def update_supplier(self, supplier_id: int, payload: SupplierIn) -> SupplierModel:
        name = self._clean_name(payload.name)

        with transaction(self.db):
            supplier = self.get_supplier(supplier_id)
            self._ensure_name_free(name, exclude_id=supplier_id)
            supplier.name = name
            supplier.contact_name = payload.contact_name
            supplier.email = payload.email
            supplier.phone = payload.phone
            self.db.flush()

        logger.info(f"Supplier {supplier_id} updated")
        return supplier

    def delete_supplier(self, supplier_id: int) -> None:
        with transaction(self.db):
            self.repo.delete(self.get_supplier(supplier_id))

        logger.info(f"Supplier {supplier_id} deleted")

    @staticmethod
    def _clean_name(name: str) -> str:
        name = (name or "").strip()
        if not name:
            raise InvalidInputError("Supplier name cannot be empty")
        return name

    def _ensure_name_free(self, name: str, exclude_id: int | None = None):
        existing = self.repo.get_by_name(name)
        if existing and existing.id != exclude_id:
            raise ConflictingStateError(f"Supplier with name '{name}' already exists")
