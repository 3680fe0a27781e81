from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_caller
from storefront.data.database import get_db
from storefront.domain.identity import Caller, Role
from storefront.domain.schemas import ProductCreate, ProductOut
from storefront.services.authorization import require_roles
from storefront.services.catalog_service import CatalogService

router = APIRouter(prefix="/products", tags=["products"])


@router.get("/", response_model=List[ProductOut])
def list_products(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    category_id: int | None = Query(None, gt=0),
    db: Session = Depends(get_db),
):
    return CatalogService(db).list_products(skip, limit, category_id)


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return CatalogService(db).get_product(product_id)


@router.post("/", response_model=ProductOut, status_code=201)
def create_product(
    payload: ProductCreate,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    require_roles(caller, Role.ADMIN)
    return CatalogService(db).create_product(payload)
