from typing import Dict, Any, List

from sqlalchemy.orm import Session

from storefront.data.database import transaction
from storefront.data.models.review import ReviewModel
from storefront.domain.errors import NotFoundError, InvalidInputError, ConflictingStateError
from storefront.domain.schemas import ReviewCreate, ReviewUpdate
from storefront.repos.customer_repo import CustomerRepo
from storefront.repos.product_repo import ProductRepo
from storefront.repos.review_repo import ReviewRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def _check_rating(rating: int):
    if rating is None or not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidInputError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")


class ReviewService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ReviewRepo(db)
        self.customers = CustomerRepo(db)
        self.products = ProductRepo(db)

    def get_review(self, review_id: int) -> ReviewModel:
        review = self.repo.get(review_id)
        if not review:
            raise NotFoundError("Review", "id", review_id)
        return review

    def review_owner(self, review_id: int) -> int:
        return self.get_review(review_id).customer_id

    def list_by_product(self, product_id: int) -> List[ReviewModel]:
        self._require_product(product_id)
        return self.repo.list_by_product(product_id)

    def list_by_customer(self, customer_id: int) -> List[ReviewModel]:
        if not self.customers.get_customer(customer_id):
            raise NotFoundError("Customer", "id", customer_id)
        return self.repo.list_by_customer(customer_id)

    def average_rating(self, product_id: int) -> Dict[str, Any]:
        self._require_product(product_id)
        average, count = self.repo.rating_stats(product_id)
        return {
            "product_id": product_id,
            "average_rating": None if average is None else round(average, 2),
            "review_count": count,
        }

    def create_review(self, payload: ReviewCreate) -> ReviewModel:
        _check_rating(payload.rating)
        if not self.customers.get_customer(payload.customer_id):
            raise NotFoundError("Customer", "id", payload.customer_id)
        self._require_product(payload.product_id)

        with transaction(self.db):
            if self.repo.get_for(payload.customer_id, payload.product_id):
                raise ConflictingStateError("Customer has already reviewed this product")
            review = self.repo.add(
                ReviewModel(
                    customer_id=payload.customer_id,
                    product_id=payload.product_id,
                    rating=payload.rating,
                    comment=payload.comment,
                )
            )

        logger.info(f"Review {review.id} ({review.rating}/5) for product {review.product_id}")
        return review

    def update_review(self, review_id: int, payload: ReviewUpdate) -> ReviewModel:
        _check_rating(payload.rating)

        with transaction(self.db):
            review = self.get_review(review_id)
            review.rating = payload.rating
            review.comment = payload.comment
            self.db.flush()

        return review

    def delete_review(self, review_id: int) -> None:
        with transaction(self.db):
            self.repo.delete(self.get_review(review_id))

        logger.info(f"Review {review_id} deleted")

    def _require_product(self, product_id: int):
        if not self.products.get_product(product_id):
            raise NotFoundError("Product", "id", product_id)
