from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.data.database import transaction
from storefront.data.models.product import ProductModel
from storefront.data.models.store import StoreModel
from storefront.domain.errors import NotFoundError, InvalidInputError
from storefront.domain.schemas import ProductCreate, StoreCreate
from storefront.repos.category_repo import CategoryRepo
from storefront.repos.product_repo import ProductRepo, StoreRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CatalogService:
    """Products with their current unit price, and the stores that hold stock."""

    def __init__(self, db: Session):
        self.db = db
        self.products = ProductRepo(db)
        self.stores = StoreRepo(db)
        self.categories = CategoryRepo(db)

    def create_product(self, payload: ProductCreate) -> ProductModel:
        if payload.price is None or payload.price <= Decimal("0"):
            raise InvalidInputError("Price must be greater than zero")
        if payload.category_id is not None and not self.categories.get(payload.category_id):
            raise NotFoundError("Category", "id", payload.category_id)

        with transaction(self.db):
            product = self.products.create_product(
                ProductModel(
                    name=payload.name,
                    description=payload.description,
                    price=payload.price,
                    category_id=payload.category_id,
                )
            )

        logger.info(f"Product {product.id} created at {product.price}")
        return product

    def get_product(self, product_id: int) -> ProductModel:
        product = self.products.get_product(product_id)
        if not product:
            raise NotFoundError("Product", "id", product_id)
        return product

    def list_products(self, skip: int = 0, limit: int = 50, category_id: int | None = None):
        return self.products.list_products(skip, limit, category_id)

    def create_store(self, payload: StoreCreate) -> StoreModel:
        with transaction(self.db):
            store = self.stores.create_store(StoreModel(name=payload.name, address=payload.address))

        logger.info(f"Store {store.id} created")
        return store

    def get_store(self, store_id: int) -> StoreModel:
        store = self.stores.get_store(store_id)
        if not store:
            raise NotFoundError("Store", "id", store_id)
        return store
