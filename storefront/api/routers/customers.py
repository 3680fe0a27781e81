from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_caller
from storefront.data.database import get_db
from storefront.domain.identity import Caller
from storefront.domain.schemas import CustomerCreate, CustomerOut
from storefront.services.authorization import require_owner
from storefront.services.customer_service import CustomerService

router = APIRouter(prefix="/customers", tags=["customers"])


@router.post("/", response_model=CustomerOut, status_code=201)
def create_customer(payload: CustomerCreate, db: Session = Depends(get_db)):
    return CustomerService(db).create_customer(payload)


@router.get("/{customer_id}", response_model=CustomerOut)
def get_customer(
    customer_id: int,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    require_owner(caller, customer_id)
    return CustomerService(db).get_customer(customer_id)
