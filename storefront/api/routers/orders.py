# storefront/api/routers/orders.py
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from storefront.api.deps import get_caller, get_notifier
from storefront.data.database import get_db
from storefront.domain.identity import Caller, Role
from storefront.domain.schemas import OrderOut
from storefront.services.authorization import require_owner, require_roles
from storefront.services.notification_service import NotificationService
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session, notifier: NotificationService | None = None):
    return OrderService(db, notifier=notifier)


@router.get("/", response_model=List[OrderOut])
def list_orders(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    """
    All orders, paginated. Admin only.
    """
    require_roles(caller, Role.ADMIN)
    return get_service(db).list_orders(skip, limit)


@router.get("/customer/{customer_id}", response_model=List[OrderOut])
def list_customer_orders(
    customer_id: int,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    require_owner(caller, customer_id)
    return get_service(db).list_by_customer(customer_id)


@router.get("/status/{status}", response_model=List[OrderOut])
def list_orders_by_status(
    status: str,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    require_roles(caller, Role.ADMIN, Role.STAFF)
    return get_service(db).list_by_status(status)


@router.get("/date-range", response_model=List[OrderOut])
def list_orders_by_date_range(
    start_date: date = Query(...),
    end_date: date = Query(...),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    """
    Orders created between start_date and end_date, both inclusive. Admin only.
    """
    require_roles(caller, Role.ADMIN)
    return get_service(db).list_between(start_date, end_date)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    require_owner(caller, svc.order_owner(order_id))
    return svc.get_order(order_id)


@router.put("/{order_id}/status", response_model=OrderOut)
def update_order_status(
    order_id: int,
    status: str = Query(..., min_length=1),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notifier),
):
    """
    Moves the order to the given status. Admin and staff only.
    Unknown status strings are rejected with 400.
    """
    require_roles(caller, Role.ADMIN, Role.STAFF)
    return get_service(db, notifier).update_status(order_id, status)


@router.put("/{order_id}/cancel", response_model=OrderOut)
def cancel_order(
    order_id: int,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notifier),
):
    svc = get_service(db, notifier)
    require_owner(caller, svc.order_owner(order_id))
    return svc.cancel_order(order_id)


@router.post("/{order_id}/payment", response_model=OrderOut)
def process_payment(
    order_id: int,
    payment_method_id: int = Query(..., gt=0),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notifier),
):
    svc = get_service(db, notifier)
    require_owner(caller, svc.order_owner(order_id))
    return svc.process_payment(order_id, payment_method_id)


@router.delete("/{order_id}", status_code=204)
def delete_order(
    order_id: int,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    """
    Administrative cleanup, normal flows cancel instead.
    """
    require_roles(caller, Role.ADMIN)
    get_service(db).delete_order(order_id)
    return Response(status_code=204)
