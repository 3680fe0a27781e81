"""
Shared pytest fixtures.

The service runs against an in-memory SQLite database; Redis locks and Celery
notifications are replaced with mocks.
"""
import os

# must happen before anything from storefront is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import storefront.data.models  # noqa: F401
from storefront.api import create_app
from storefront.api.deps import get_lock_service, get_notifier
from storefront.data.database import Base, get_db
from storefront.data.models import (
    CustomerModel,
    ProductModel,
    StoreModel,
    InventoryModel,
    CartItemModel,
    PaymentMethodModel,
)


# ============================================================================
# DATABASE
# ============================================================================


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


# ============================================================================
# COLLABORATORS
# ============================================================================


@pytest.fixture
def lock_service():
    """Lock service whose cart_lock() context manager always succeeds."""
    return MagicMock()


@pytest.fixture
def notifier():
    return MagicMock()


@pytest.fixture
def client(session_factory, lock_service, notifier):
    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_lock_service] = lambda: lock_service
    app.dependency_overrides[get_notifier] = lambda: notifier

    with TestClient(app) as c:
        yield c


# ============================================================================
# DATA
# ============================================================================


@pytest.fixture
def make_customer(db):
    counter = {"n": 0}

    def _make(email=None, first_name="Ada", last_name="Lovelace"):
        counter["n"] += 1
        customer = CustomerModel(
            first_name=first_name,
            last_name=last_name,
            email=email or f"customer{counter['n']}@example.com",
        )
        db.add(customer)
        db.commit()
        return customer

    return _make


@pytest.fixture
def make_product(db):
    def _make(price="10.00", name="Widget"):
        product = ProductModel(name=name, price=Decimal(price))
        db.add(product)
        db.commit()
        return product

    return _make


@pytest.fixture
def make_store(db):
    def _make(name="Main store"):
        store = StoreModel(name=name)
        db.add(store)
        db.commit()
        return store

    return _make


@pytest.fixture
def make_inventory(db):
    def _make(store, product, quantity=10, location="A1"):
        record = InventoryModel(store_id=store.id, product_id=product.id, quantity=quantity, location=location)
        db.add(record)
        db.commit()
        return record

    return _make


@pytest.fixture
def make_cart_item(db):
    def _make(customer, product, quantity=1):
        item = CartItemModel(customer_id=customer.id, product_id=product.id, quantity=quantity)
        db.add(item)
        db.commit()
        return item

    return _make


@pytest.fixture
def make_payment_method(db):
    def _make(customer, method_type="CARD", last_four="4242"):
        method = PaymentMethodModel(
            customer_id=customer.id, method_type=method_type, last_four=last_four, is_default=True
        )
        db.add(method)
        db.commit()
        return method

    return _make


# ============================================================================
# CALLERS
# ============================================================================


@pytest.fixture
def admin_headers():
    return {"X-User-Id": "1", "X-User-Roles": "ADMIN"}


@pytest.fixture
def customer_headers():
    def _headers(customer_id, user_id=100):
        return {"X-User-Id": str(user_id), "X-User-Roles": "CUSTOMER", "X-Customer-Id": str(customer_id)}

    return _headers
