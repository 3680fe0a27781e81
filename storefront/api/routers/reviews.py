# storefront/api/routers/reviews.py
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from storefront.api.deps import get_caller
from storefront.data.database import get_db
from storefront.domain.identity import Caller
from storefront.domain.schemas import ReviewCreate, ReviewUpdate, ReviewOut, AverageRatingOut
from storefront.services.authorization import require_owner
from storefront.services.review_service import ReviewService

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get("/product/{product_id}", response_model=List[ReviewOut])
def list_product_reviews(product_id: int, db: Session = Depends(get_db)):
    return ReviewService(db).list_by_product(product_id)


@router.get("/product/{product_id}/average-rating", response_model=AverageRatingOut)
def get_average_rating(product_id: int, db: Session = Depends(get_db)):
    return ReviewService(db).average_rating(product_id)


@router.get("/customer/{customer_id}", response_model=List[ReviewOut])
def list_customer_reviews(customer_id: int, caller: Caller = Depends(get_caller), db: Session = Depends(get_db)):
    require_owner(caller, customer_id)
    return ReviewService(db).list_by_customer(customer_id)


@router.get("/{review_id}", response_model=ReviewOut)
def get_review(review_id: int, db: Session = Depends(get_db)):
    return ReviewService(db).get_review(review_id)


@router.post("/", response_model=ReviewOut, status_code=201)
def create_review(payload: ReviewCreate, caller: Caller = Depends(get_caller), db: Session = Depends(get_db)):
    require_owner(caller, payload.customer_id)
    return ReviewService(db).create_review(payload)


@router.put("/{review_id}", response_model=ReviewOut)
def update_review(
    review_id: int,
    payload: ReviewUpdate,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
):
    svc = ReviewService(db)
    require_owner(caller, svc.review_owner(review_id))
    return svc.update_review(review_id, payload)


@router.delete("/{review_id}", status_code=204)
def delete_review(review_id: int, caller: Caller = Depends(get_caller), db: Session = Depends(get_db)):
    svc = ReviewService(db)
    require_owner(caller, svc.review_owner(review_id))
    svc.delete_review(review_id)
    return Response(status_code=204)
