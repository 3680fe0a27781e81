from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_caller
from storefront.data.database import get_db
from storefront.domain.identity import Caller
from storefront.domain.schemas import PaymentMethodCreate, PaymentMethodOut
from storefront.services.authorization import require_owner
from storefront.services.payment_service import PaymentService

router = APIRouter(tags=["payments"])


@router.post("/customers/{customer_id}/payment-methods", response_model=PaymentMethodOut, status_code=201)
def add_payment_method(
    customer_id: int,
    payload: PaymentMethodCreate,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    require_owner(caller, customer_id)
    return PaymentService(db).add_payment_method(customer_id, payload)


@router.get("/customers/{customer_id}/payment-methods", response_model=List[PaymentMethodOut])
def list_payment_methods(
    customer_id: int,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    require_owner(caller, customer_id)
    return PaymentService(db).list_payment_methods(customer_id)


@router.get("/payment-methods/{method_id}", response_model=PaymentMethodOut)
def get_payment_method(
    method_id: int,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    method = PaymentService(db).get_payment_method(method_id)
    require_owner(caller, method.customer_id)
    return method
