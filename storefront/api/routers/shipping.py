# storefront/api/routers/shipping.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_caller, get_notifier
from storefront.data.database import get_db
from storefront.domain.identity import Caller, Role
from storefront.domain.schemas import ShipmentCreate, ShipmentOut
from storefront.services.authorization import has_any_role, require_owner, require_roles
from storefront.services.notification_service import NotificationService
from storefront.services.order_service import OrderService
from storefront.services.shipping_service import ShippingService

router = APIRouter(prefix="/shipping", tags=["shipping"])


def get_service(db: Session, notifier: NotificationService | None = None):
    return ShippingService(db, notifier=notifier)


def _require_staff_or_owner(caller: Caller, owner_customer_id: int):
    if not has_any_role(caller, Role.ADMIN, Role.STAFF):
        require_owner(caller, owner_customer_id)


@router.get("/", response_model=List[ShipmentOut])
def list_shipments(caller: Caller = Depends(get_caller), db: Session = Depends(get_db)):
    require_roles(caller, Role.ADMIN, Role.STAFF)
    return get_service(db).list_all()


@router.get("/order/{order_id}", response_model=List[ShipmentOut])
def list_order_shipments(order_id: int, caller: Caller = Depends(get_caller), db: Session = Depends(get_db)):
    _require_staff_or_owner(caller, OrderService(db).order_owner(order_id))
    return get_service(db).list_by_order(order_id)


@router.get("/customer/{customer_id}", response_model=List[ShipmentOut])
def list_customer_shipments(customer_id: int, caller: Caller = Depends(get_caller), db: Session = Depends(get_db)):
    _require_staff_or_owner(caller, customer_id)
    return get_service(db).list_by_customer(customer_id)


@router.get("/status/{status}", response_model=List[ShipmentOut])
def list_shipments_by_status(status: str, caller: Caller = Depends(get_caller), db: Session = Depends(get_db)):
    require_roles(caller, Role.ADMIN, Role.STAFF)
    return get_service(db).list_by_status(status)


@router.get("/track/{tracking_number}", response_model=ShipmentOut)
def track_shipment(tracking_number: str, db: Session = Depends(get_db)):
    """
    Public tracking lookup.
    """
    return get_service(db).track(tracking_number)


@router.get("/{shipment_id}", response_model=ShipmentOut)
def get_shipment(shipment_id: int, caller: Caller = Depends(get_caller), db: Session = Depends(get_db)):
    svc = get_service(db)
    _require_staff_or_owner(caller, svc.shipment_owner(shipment_id))
    return svc.get_shipment(shipment_id)


@router.post("/", response_model=ShipmentOut, status_code=201)
def create_shipment(
    payload: ShipmentCreate,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notifier),
):
    """
    Ships a PAID order; the order moves to SHIPPED.
    """
    require_roles(caller, Role.ADMIN, Role.STAFF)
    return get_service(db, notifier).create_shipment(
        order_id=payload.order_id,
        carrier=payload.carrier,
        tracking_number=payload.tracking_number,
        tracking_url=payload.tracking_url,
    )


@router.put("/{shipment_id}/status", response_model=ShipmentOut)
def update_shipment_status(
    shipment_id: int,
    status: str = Query(..., min_length=1),
    notes: str | None = Query(None),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notifier),
):
    require_roles(caller, Role.ADMIN, Role.STAFF)
    return get_service(db, notifier).update_status(shipment_id, status, notes)


@router.put("/{shipment_id}/tracking", response_model=ShipmentOut)
def update_tracking(
    shipment_id: int,
    carrier: str = Query(..., min_length=1, max_length=50),
    tracking_number: str = Query(..., min_length=1, max_length=50),
    tracking_url: str | None = Query(None, max_length=255),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    require_roles(caller, Role.ADMIN, Role.STAFF)
    return get_service(db).update_tracking(shipment_id, carrier, tracking_number, tracking_url)


@router.post("/{shipment_id}/events", response_model=ShipmentOut)
def add_shipment_event(
    shipment_id: int,
    event_type: str = Query(..., min_length=1, max_length=30),
    location: str | None = Query(None, max_length=150),
    notes: str | None = Query(None),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    require_roles(caller, Role.ADMIN, Role.STAFF)
    return get_service(db).add_event(shipment_id, event_type, location, notes)


@router.put("/{shipment_id}/deliver", response_model=ShipmentOut)
def mark_delivered(
    shipment_id: int,
    notes: str | None = Query(None),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notifier),
):
    """
    Marks the shipment delivered; the order moves to DELIVERED.
    """
    require_roles(caller, Role.ADMIN, Role.STAFF)
    return get_service(db, notifier).mark_delivered(shipment_id, notes)
