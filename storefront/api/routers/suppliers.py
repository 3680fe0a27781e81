# storefront/api/routers/suppliers.py
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from storefront.api.deps import get_caller
from storefront.data.database import get_db
from storefront.domain.identity import Caller, Role
from storefront.domain.schemas import SupplierIn, SupplierOut
from storefront.services.authorization import require_roles
from storefront.services.supplier_service import SupplierService

router = APIRouter(prefix="/suppliers", tags=["suppliers"])


@router.get("/", response_model=List[SupplierOut])
def list_suppliers(caller: Caller = Depends(get_caller), db: Session = Depends(get_db)):
    require_roles(caller, Role.ADMIN, Role.MANAGER)
    return SupplierService(db).list_suppliers()


@router.get("/{supplier_id}", response_model=SupplierOut)
def get_supplier(supplier_id: int, caller: Caller = Depends(get_caller), db: Session = Depends(get_db)):
    require_roles(caller, Role.ADMIN, Role.MANAGER)
    return SupplierService(db).get_supplier(supplier_id)


@router.post("/", response_model=SupplierOut, status_code=201)
def create_supplier(payload: SupplierIn, caller: Caller = Depends(get_caller), db: Session = Depends(get_db)):
    require_roles(caller, Role.ADMIN)
    return SupplierService(db).create_supplier(payload)


@router.put("/{supplier_id}", response_model=SupplierOut)
def update_supplier(
    supplier_id: int,
    payload: SupplierIn,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    require_roles(caller, Role.ADMIN, Role.MANAGER)
    return SupplierService(db).update_supplier(supplier_id, payload)


@router.delete("/{supplier_id}", status_code=204)
def delete_supplier(supplier_id: int, caller: Caller = Depends(get_caller), db: Session = Depends(get_db)):
    require_roles(caller, Role.ADMIN)
    SupplierService(db).delete_supplier(supplier_id)
    return Response(status_code=204)
