from typing import List

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from storefront.api.deps import get_caller
from storefront.data.database import get_db
from storefront.domain.identity import Caller, Role
from storefront.domain.schemas import MAX_QUANTITY, InventoryCreate, InventoryUpdate, InventoryOut
from storefront.services.authorization import require_roles
from storefront.services.inventory_service import InventoryService
from storefront.utils.settings import LOW_STOCK_THRESHOLD

router = APIRouter(prefix="/inventory", tags=["inventory"])


@router.get("/", response_model=List[InventoryOut])
def list_inventory(caller: Caller = Depends(get_caller), db: Session = Depends(get_db)):
    require_roles(caller, Role.ADMIN, Role.MANAGER)
    return InventoryService(db).list_all()


@router.get("/low-stock", response_model=List[InventoryOut])
def list_low_stock(
    threshold: int = Query(LOW_STOCK_THRESHOLD, ge=0),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    require_roles(caller, Role.ADMIN, Role.MANAGER)
    return InventoryService(db).list_low_stock(threshold)


@router.get("/store/{store_id}", response_model=List[InventoryOut])
def list_store_inventory(
    store_id: int,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    require_roles(caller, Role.ADMIN, Role.MANAGER)
    return InventoryService(db).list_by_store(store_id)


@router.get("/product/{product_id}", response_model=List[InventoryOut])
def list_product_inventory(product_id: int, db: Session = Depends(get_db)):
    return InventoryService(db).list_by_product(product_id)


@router.get("/store/{store_id}/product/{product_id}", response_model=InventoryOut)
def get_inventory(store_id: int, product_id: int, db: Session = Depends(get_db)):
    return InventoryService(db).get(store_id, product_id)


@router.post("/", response_model=InventoryOut, status_code=201)
def create_inventory(
    payload: InventoryCreate,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    require_roles(caller, Role.ADMIN, Role.MANAGER)
    return InventoryService(db).create(
        store_id=payload.store_id,
        product_id=payload.product_id,
        quantity=payload.quantity,
        location=payload.location,
    )


@router.put("/store/{store_id}/product/{product_id}", response_model=InventoryOut)
def update_inventory(
    store_id: int,
    product_id: int,
    payload: InventoryUpdate,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    require_roles(caller, Role.ADMIN, Role.MANAGER)
    return InventoryService(db).update(store_id, product_id, payload.quantity, payload.location)


@router.patch("/store/{store_id}/product/{product_id}/adjust", response_model=InventoryOut)
def adjust_inventory(
    store_id: int,
    product_id: int,
    adjustment: int = Query(..., ge=-MAX_QUANTITY, le=MAX_QUANTITY, description="Relative change, may be negative"),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    require_roles(caller, Role.ADMIN, Role.MANAGER)
    return InventoryService(db).adjust(store_id, product_id, adjustment)


@router.delete("/store/{store_id}/product/{product_id}", status_code=204)
def delete_inventory(
    store_id: int,
    product_id: int,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    require_roles(caller, Role.ADMIN)
    InventoryService(db).delete(store_id, product_id)
    return Response(status_code=204)
