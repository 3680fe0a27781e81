from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_caller
from storefront.data.database import get_db
from storefront.domain.identity import Caller, Role
from storefront.domain.schemas import StoreCreate, StoreOut
from storefront.services.authorization import require_roles
from storefront.services.catalog_service import CatalogService

router = APIRouter(prefix="/stores", tags=["stores"])


@router.post("/", response_model=StoreOut, status_code=201)
def create_store(
    payload: StoreCreate,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    require_roles(caller, Role.ADMIN, Role.MANAGER)
    return CatalogService(db).create_store(payload)


@router.get("/{store_id}", response_model=StoreOut)
def get_store(store_id: int, db: Session = Depends(get_db)):
    return CatalogService(db).get_store(store_id)
