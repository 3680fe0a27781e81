from typing import List

from sqlalchemy.orm import Session

from storefront.data.database import transaction
from storefront.data.models.category import CategoryModel
from storefront.domain.errors import NotFoundError, InvalidInputError, ConflictingStateError
from storefront.domain.schemas import CategoryIn
from storefront.repos.category_repo import CategoryRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CategoryService:
    """
    Product categories, optionally nested one under another.
    Names are unique ignoring case; a category still holding products or
    subcategories cannot be deleted.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = CategoryRepo(db)

    def get_category(self, category_id: int) -> CategoryModel:
        category = self.repo.get(category_id)
        if not category:
            raise NotFoundError("Category", "id", category_id)
        return category

    def list_categories(self) -> List[CategoryModel]:
        return self.repo.list_all()

    def list_subcategories(self, parent_id: int) -> List[CategoryModel]:
        self.get_category(parent_id)
        return self.repo.list_children(parent_id)

    def create_category(self, payload: CategoryIn) -> CategoryModel:
        name = self._clean_name(payload.name)

        with transaction(self.db):
            self._ensure_name_free(name)
            if payload.parent_id is not None:
                self.get_category(payload.parent_id)
            category = self.repo.add(
                CategoryModel(name=name, description=payload.description, parent_id=payload.parent_id)
            )

        logger.info(f"Category {category.id} '{name}' created")
        return category

    def update_category(self, category_id: int, payload: CategoryIn) -> CategoryModel:
        name = self._clean_name(payload.name)
        if payload.parent_id == category_id:
            raise InvalidInputError("A category cannot be its own parent")

        with transaction(self.db):
            category = self.get_category(category_id)
            self._ensure_name_free(name, exclude_id=category_id)
            if payload.parent_id is not None:
                self.get_category(payload.parent_id)
            category.name = name
            category.description = payload.description
            category.parent_id = payload.parent_id
            self.db.flush()

        logger.info(f"Category {category_id} updated")
        return category

    def delete_category(self, category_id: int) -> None:
        with transaction(self.db):
            category = self.get_category(category_id)
            if self.repo.count_products(category_id):
                raise ConflictingStateError("Cannot delete a category that has products")
            if self.repo.list_children(category_id):
                raise ConflictingStateError("Cannot delete a category that has subcategories")
            self.repo.delete(category)

        logger.info(f"Category {category_id} deleted")

    @staticmethod
    def _clean_name(name: str) -> str:
        name = (name or "").strip()
        if not name:
            raise InvalidInputError("Category name cannot be empty")
        return name

    def _ensure_name_free(self, name: str, exclude_id: int | None = None):
        existing = self.repo.get_by_name(name)
        if existing and existing.id != exclude_id:
            raise ConflictingStateError(f"Category with name '{name}' already exists")
