from sqlalchemy import select, func
from sqlalchemy.orm import Session

from storefront.data.models.review import ReviewModel


class ReviewRepo:
    def __init__(self, db: Session):
        self.db = db

    def get(self, review_id: int) -> ReviewModel | None:
        return self.db.get(ReviewModel, review_id)

    def get_for(self, customer_id: int, product_id: int) -> ReviewModel | None:
        return self.db.execute(
            select(ReviewModel).where(
                ReviewModel.customer_id == customer_id,
                ReviewModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def list_by_product(self, product_id: int) -> list[ReviewModel]:
        return list(
            self.db.execute(
                select(ReviewModel)
                .where(ReviewModel.product_id == product_id)
                .order_by(ReviewModel.created_at.desc(), ReviewModel.id.desc())
            ).scalars()
        )

    def list_by_customer(self, customer_id: int) -> list[ReviewModel]:
        return list(
            self.db.execute(
                select(ReviewModel).where(ReviewModel.customer_id == customer_id).order_by(ReviewModel.id)
            ).scalars()
        )

    def rating_stats(self, product_id: int) -> tuple[float | None, int]:
        """(average rating, number of reviews) of a product."""
        avg, count = self.db.execute(
            select(func.avg(ReviewModel.rating), func.count(ReviewModel.id)).where(
                ReviewModel.product_id == product_id
            )
        ).one()
        return (None if avg is None else float(avg)), count

    def add(self, review: ReviewModel) -> ReviewModel:
        self.db.add(review)
        self.db.flush()
        return review

    def delete(self, review: ReviewModel) -> None:
        self.db.delete(review)
        self.db.flush()
