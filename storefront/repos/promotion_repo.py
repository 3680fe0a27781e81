from datetime import datetime

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from storefront.data.models.promotion import PromotionModel


class PromotionRepo:
    def __init__(self, db: Session):
        self.db = db

    def get(self, promotion_id: int) -> PromotionModel | None:
        return self.db.get(PromotionModel, promotion_id)

    def get_by_code(self, code: str) -> PromotionModel | None:
        return self.db.execute(
            select(PromotionModel).where(func.upper(PromotionModel.code) == code.upper())
        ).scalar_one_or_none()

    def list_all(self) -> list[PromotionModel]:
        return list(self.db.execute(select(PromotionModel).order_by(PromotionModel.id)).scalars())

    def list_active(self, at: datetime) -> list[PromotionModel]:
        return list(
            self.db.execute(
                select(PromotionModel)
                .where(
                    PromotionModel.active.is_(True),
                    PromotionModel.start_date <= at,
                    PromotionModel.end_date >= at,
                )
                .order_by(PromotionModel.end_date)
            ).scalars()
        )

    def is_valid(self, promotion_id: int, at: datetime) -> bool:
        # compared in SQL, sqlite hands back naive datetimes
        return self.db.execute(
            select(func.count())
            .select_from(PromotionModel)
            .where(
                PromotionModel.id == promotion_id,
                PromotionModel.active.is_(True),
                PromotionModel.start_date <= at,
                PromotionModel.end_date >= at,
            )
        ).scalar_one() > 0

    def add(self, promotion: PromotionModel) -> PromotionModel:
        self.db.add(promotion)
        self.db.flush()
        return promotion

    def delete(self, promotion: PromotionModel) -> None:
        self.db.delete(promotion)
        self.db.flush()
