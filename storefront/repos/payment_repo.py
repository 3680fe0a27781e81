from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.payment_method import PaymentMethodModel


class PaymentMethodRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_method(self, method_id: int) -> PaymentMethodModel | None:
        return self.db.get(PaymentMethodModel, method_id)

    def list_by_customer(self, customer_id: int) -> list[PaymentMethodModel]:
        return list(
            self.db.execute(
                select(PaymentMethodModel)
                .where(PaymentMethodModel.customer_id == customer_id)
                .order_by(PaymentMethodModel.id)
            ).scalars()
        )

    def create_method(self, method: PaymentMethodModel) -> PaymentMethodModel:
        self.db.add(method)
        self.db.flush()
        return method
