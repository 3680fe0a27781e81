#storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_caller, get_lock_service, get_notifier
from storefront.data.database import get_db
from storefront.domain.identity import Caller
from storefront.domain.schemas import (
    ItemIn,
    CartItemOut,
    CartOut,
    CartClearedOut,
    CheckoutOut,
)
from storefront.services.authorization import require_owner
from storefront.services.cart_service import CartService
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/carts", tags=["carts"])


def get_service(db: Session, lock_service: LockService):
    return CartService(db=db, lock_service=lock_service)


@router.get("/customer/{customer_id}", response_model=CartOut)
def get_customer_cart(
    customer_id: int,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    require_owner(caller, customer_id)
    return get_service(db, lock_service).get_cart(customer_id)


@router.post("/customer/{customer_id}/items", response_model=CartItemOut)
def add_item(
    customer_id: int,
    payload: ItemIn,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    require_owner(caller, customer_id)
    return get_service(db, lock_service).add_product(
        customer_id=customer_id,
        product_id=payload.product_id,
        quantity=payload.quantity,
    )


@router.delete("/customer/{customer_id}", response_model=CartClearedOut)
def clear_cart(
    customer_id: int,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    require_owner(caller, customer_id)
    removed = get_service(db, lock_service).clear(customer_id)
    return {"customer_id": customer_id, "removed_items": removed}


@router.post("/customer/{customer_id}/checkout", response_model=CheckoutOut, status_code=201)
def checkout(
    customer_id: int,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
    notifier: NotificationService = Depends(get_notifier),
):
    require_owner(caller, customer_id)
    svc = OrderService(db, lock_service=lock_service, notifier=notifier)
    return {"order_id": svc.create_order_from_cart(customer_id)}


@router.get("/{cart_id}", response_model=CartItemOut)
def get_cart_item(
    cart_id: int,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    svc = get_service(db, lock_service)
    require_owner(caller, svc.cart_owner(cart_id))
    return svc.get_cart_item(cart_id)


@router.put("/{cart_id}/products/{product_id}", response_model=CartItemOut)
def update_item_quantity(
    cart_id: int,
    product_id: int,
    quantity: int = Query(..., ge=0, description="New quantity, 0 removes the line"),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    svc = get_service(db, lock_service)
    require_owner(caller, svc.cart_owner(cart_id))

    if quantity == 0:
        return svc.remove_product(cart_id, product_id)
    return svc.update_quantity(cart_id, product_id, quantity)


@router.delete("/{cart_id}/products/{product_id}", response_model=CartItemOut)
def remove_item(
    cart_id: int,
    product_id: int,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    svc = get_service(db, lock_service)
    require_owner(caller, svc.cart_owner(cart_id))
    return svc.remove_product(cart_id, product_id)
