# storefront/api/routers/promotions.py
from typing import List

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from storefront.api.deps import get_caller
from storefront.data.database import get_db
from storefront.domain.identity import Caller, Role
from storefront.domain.schemas import PromotionIn, PromotionOut
from storefront.services.authorization import require_roles
from storefront.services.promotion_service import PromotionService

router = APIRouter(prefix="/promotions", tags=["promotions"])


@router.get("/", response_model=List[PromotionOut])
def list_promotions(db: Session = Depends(get_db)):
    return PromotionService(db).list_promotions()


@router.get("/active", response_model=List[PromotionOut])
def list_active_promotions(db: Session = Depends(get_db)):
    return PromotionService(db).list_active()


@router.post("/validate-code", response_model=PromotionOut)
def validate_code(code: str = Query(..., min_length=1, max_length=50), db: Session = Depends(get_db)):
    return PromotionService(db).validate_code(code)


@router.get("/{promotion_id}", response_model=PromotionOut)
def get_promotion(promotion_id: int, db: Session = Depends(get_db)):
    return PromotionService(db).get_promotion(promotion_id)


@router.post("/", response_model=PromotionOut, status_code=201)
def create_promotion(payload: PromotionIn, caller: Caller = Depends(get_caller), db: Session = Depends(get_db)):
    require_roles(caller, Role.ADMIN)
    return PromotionService(db).create_promotion(payload)


@router.put("/{promotion_id}", response_model=PromotionOut)
def update_promotion(
    promotion_id: int,
    payload: PromotionIn,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    require_roles(caller, Role.ADMIN)
    return PromotionService(db).update_promotion(promotion_id, payload)


@router.put("/{promotion_id}/activate", response_model=PromotionOut)
def activate_promotion(promotion_id: int, caller: Caller = Depends(get_caller), db: Session = Depends(get_db)):
    require_roles(caller, Role.ADMIN)
    return PromotionService(db).set_active(promotion_id, True)


@router.put("/{promotion_id}/deactivate", response_model=PromotionOut)
def deactivate_promotion(promotion_id: int, caller: Caller = Depends(get_caller), db: Session = Depends(get_db)):
    require_roles(caller, Role.ADMIN)
    return PromotionService(db).set_active(promotion_id, False)


@router.delete("/{promotion_id}", status_code=204)
def delete_promotion(promotion_id: int, caller: Caller = Depends(get_caller), db: Session = Depends(get_db)):
    require_roles(caller, Role.ADMIN)
    PromotionService(db).delete_promotion(promotion_id)
    return Response(status_code=204)
