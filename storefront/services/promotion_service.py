from datetime import datetime, timezone
from decimal import Decimal
from typing import List

from sqlalchemy.orm import Session

from storefront.data.database import transaction
from storefront.data.models.promotion import PromotionModel
from storefront.domain.errors import NotFoundError, InvalidInputError, ConflictingStateError
from storefront.domain.schemas import PromotionIn
from storefront.repos.promotion_repo import PromotionRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PROMO_TYPES = ("PERCENT", "FIXED")


def _utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class PromotionService:
    """
    Discount codes valid between start_date and end_date while active.
    A PERCENT promotion takes 0 < discount_percent <= 100, a FIXED promotion
    a positive discount_amount.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = PromotionRepo(db)

    def get_promotion(self, promotion_id: int) -> PromotionModel:
        promotion = self.repo.get(promotion_id)
        if not promotion:
            raise NotFoundError("Promotion", "id", promotion_id)
        return promotion

    def list_promotions(self) -> List[PromotionModel]:
        return self.repo.list_all()

    def list_active(self, now: datetime | None = None) -> List[PromotionModel]:
        return self.repo.list_active(now or datetime.now(timezone.utc))

    def validate_code(self, code: str, now: datetime | None = None) -> PromotionModel:
        promotion = self.repo.get_by_code(code.strip())
        if not promotion:
            raise NotFoundError("Promotion", "code", code)
        if not self.repo.is_valid(promotion.id, now or datetime.now(timezone.utc)):
            raise InvalidInputError(f"Promotion code {promotion.code} is not currently valid")
        return promotion

    def create_promotion(self, payload: PromotionIn) -> PromotionModel:
        values = self._validated(payload)

        with transaction(self.db):
            if self.repo.get_by_code(values["code"]):
                raise ConflictingStateError(f"Promotion code {values['code']} already exists")
            promotion = self.repo.add(PromotionModel(active=True, **values))

        logger.info(f"Promotion {promotion.id} '{promotion.code}' created")
        return promotion

    def update_promotion(self, promotion_id: int, payload: PromotionIn) -> PromotionModel:
        values = self._validated(payload)

        with transaction(self.db):
            promotion = self.get_promotion(promotion_id)
            existing = self.repo.get_by_code(values["code"])
            if existing and existing.id != promotion_id:
                raise ConflictingStateError(f"Promotion code {values['code']} already exists")
            for key, value in values.items():
                setattr(promotion, key, value)
            self.db.flush()

        logger.info(f"Promotion {promotion_id} updated")
        return promotion

    def set_active(self, promotion_id: int, active: bool) -> PromotionModel:
        with transaction(self.db):
            promotion = self.get_promotion(promotion_id)
            promotion.active = active
            self.db.flush()

        logger.info(f"Promotion {promotion_id} {'activated' if active else 'deactivated'}")
        return promotion

    def delete_promotion(self, promotion_id: int) -> None:
        with transaction(self.db):
            self.repo.delete(self.get_promotion(promotion_id))

        logger.info(f"Promotion {promotion_id} deleted")

    @staticmethod
    def _validated(payload: PromotionIn) -> dict:
        promo_type = payload.promo_type.strip().upper()
        if promo_type not in PROMO_TYPES:
            raise InvalidInputError(f"Promotion type must be one of: {', '.join(PROMO_TYPES)}")

        percent, amount = payload.discount_percent, payload.discount_amount
        if promo_type == "PERCENT":
            if percent is None or not Decimal("0") < percent <= Decimal("100"):
                raise InvalidInputError("Discount percent must be greater than 0 and at most 100")
            amount = None
        else:
            if amount is None or amount <= Decimal("0"):
                raise InvalidInputError("Discount amount must be greater than zero")
            percent = None

        start, end = _utc(payload.start_date), _utc(payload.end_date)
        if start > end:
            raise InvalidInputError("Start date must be before end date")

        return {
            "code": payload.code.strip().upper(),
            "description": payload.description,
            "promo_type": promo_type,
            "discount_percent": percent,
            "discount_amount": amount,
            "start_date": start,
            "end_date": end,
        }
