# storefront/data/seed.py
from decimal import Decimal

from storefront.data.database import SessionLocal, transaction
from storefront.data.models import ProductModel, StoreModel, InventoryModel
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCTS = [
    {"name": "Keyboard", "price": Decimal("199.99")},
    {"name": "Mouse", "price": Decimal("49.50")},
    {"name": "Monitor", "price": Decimal("899.00")},
]


def seed(db=None):
    own_session = db is None
    db = db or SessionLocal()
    try:
        # only seed an empty database
        if db.query(ProductModel).first():
            return

        with transaction(db):
            store = StoreModel(name="Main store", address="1 Market Street")
            db.add(store)
            db.flush()

            for p in PRODUCTS:
                product = ProductModel(name=p["name"], price=p["price"])
                db.add(product)
                db.flush()
                db.add(InventoryModel(store_id=store.id, product_id=product.id, quantity=25, location="A1"))

        logger.info(f"Seeded store and {len(PRODUCTS)} products")
    finally:
        if own_session:
            db.close()


if __name__ == "__main__":
    seed()
