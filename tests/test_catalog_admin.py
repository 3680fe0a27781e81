"""Tests for categories and suppliers."""

from decimal import Decimal

import pytest

from storefront.data.models import ProductModel
from storefront.domain.errors import ConflictingStateError, InvalidInputError, NotFoundError
from storefront.domain.schemas import CategoryIn, SupplierIn, ProductCreate
from storefront.services.catalog_service import CatalogService
from storefront.services.category_service import CategoryService
from storefront.services.supplier_service import SupplierService

pytestmark = pytest.mark.service


@pytest.fixture
def categories(db):
    return CategoryService(db)


@pytest.fixture
def suppliers(db):
    return SupplierService(db)


def test_category_names_are_unique_ignoring_case(categories):
    categories.create_category(CategoryIn(name="Books"))

    with pytest.raises(ConflictingStateError):
        categories.create_category(CategoryIn(name="  books "))

    assert [c.name for c in categories.list_categories()] == ["Books"]


def test_blank_category_name_is_rejected(categories):
    with pytest.raises(InvalidInputError):
        categories.create_category(CategoryIn(name="   "))


def test_category_update_may_keep_its_own_name(categories):
    books = categories.create_category(CategoryIn(name="Books"))
    categories.create_category(CategoryIn(name="Music"))

    updated = categories.update_category(books.id, CategoryIn(name="BOOKS", description="paper"))
    assert updated.name == "BOOKS"

    with pytest.raises(ConflictingStateError):
        categories.update_category(books.id, CategoryIn(name="music"))


def test_category_cannot_be_its_own_parent(categories):
    books = categories.create_category(CategoryIn(name="Books"))

    with pytest.raises(InvalidInputError):
        categories.update_category(books.id, CategoryIn(name="Books", parent_id=books.id))


def test_subcategories(categories):
    books = categories.create_category(CategoryIn(name="Books"))
    categories.create_category(CategoryIn(name="Poetry", parent_id=books.id))

    assert [c.name for c in categories.list_subcategories(books.id)] == ["Poetry"]
    with pytest.raises(NotFoundError):
        categories.create_category(CategoryIn(name="Orphans", parent_id=999))


def test_category_in_use_cannot_be_deleted(categories, db):
    books = categories.create_category(CategoryIn(name="Books"))
    poetry = categories.create_category(CategoryIn(name="Poetry", parent_id=books.id))
    db.add(ProductModel(name="Sonnets", price=Decimal("9.99"), category_id=poetry.id))
    db.commit()

    with pytest.raises(ConflictingStateError):
        categories.delete_category(books.id)
    with pytest.raises(ConflictingStateError):
        categories.delete_category(poetry.id)

    assert categories.get_category(poetry.id)


def test_empty_category_is_deleted(categories):
    books = categories.create_category(CategoryIn(name="Books"))

    categories.delete_category(books.id)

    with pytest.raises(NotFoundError):
        categories.get_category(books.id)


def test_product_in_unknown_category_is_rejected(db):
    with pytest.raises(NotFoundError):
        CatalogService(db).create_product(ProductCreate(name="Lamp", price="5.00", category_id=42))


def test_products_filtered_by_category(db, categories):
    lamps = categories.create_category(CategoryIn(name="Lamps"))
    catalog = CatalogService(db)
    catalog.create_product(ProductCreate(name="Desk lamp", price="5.00", category_id=lamps.id))
    catalog.create_product(ProductCreate(name="Chair", price="25.00"))

    assert [p.name for p in catalog.list_products(category_id=lamps.id)] == ["Desk lamp"]


def test_supplier_names_are_unique_ignoring_case(suppliers):
    acme = suppliers.create_supplier(SupplierIn(name="Acme"))

    with pytest.raises(ConflictingStateError):
        suppliers.create_supplier(SupplierIn(name="ACME"))

    updated = suppliers.update_supplier(acme.id, SupplierIn(name="acme", contact_name="Wile"))
    assert updated.contact_name == "Wile"


def test_blank_supplier_name_is_rejected(suppliers):
    with pytest.raises(InvalidInputError):
        suppliers.create_supplier(SupplierIn(name=" "))


def test_delete_supplier(suppliers):
    acme = suppliers.create_supplier(SupplierIn(name="Acme"))

    suppliers.delete_supplier(acme.id)

    assert suppliers.list_suppliers() == []
    with pytest.raises(NotFoundError):
        suppliers.delete_supplier(acme.id)
