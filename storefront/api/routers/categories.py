# storefront/api/routers/categories.py
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from storefront.api.deps import get_caller
from storefront.data.database import get_db
from storefront.domain.identity import Caller, Role
from storefront.domain.schemas import CategoryIn, CategoryOut
from storefront.services.authorization import require_roles
from storefront.services.category_service import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("/", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return CategoryService(db).list_categories()


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: int, db: Session = Depends(get_db)):
    return CategoryService(db).get_category(category_id)


@router.get("/{category_id}/subcategories", response_model=List[CategoryOut])
def list_subcategories(category_id: int, db: Session = Depends(get_db)):
    return CategoryService(db).list_subcategories(category_id)


@router.post("/", response_model=CategoryOut, status_code=201)
def create_category(payload: CategoryIn, caller: Caller = Depends(get_caller), db: Session = Depends(get_db)):
    require_roles(caller, Role.ADMIN)
    return CategoryService(db).create_category(payload)


@router.put("/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: int,
    payload: CategoryIn,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    require_roles(caller, Role.ADMIN)
    return CategoryService(db).update_category(category_id, payload)


@router.delete("/{category_id}", status_code=204)
def delete_category(category_id: int, caller: Caller = Depends(get_caller), db: Session = Depends(get_db)):
    require_roles(caller, Role.ADMIN)
    CategoryService(db).delete_category(category_id)
    return Response(status_code=204)
