from typing import List

from sqlalchemy.orm import Session

from storefront.data.database import transaction
from storefront.data.models.payment_method import PaymentMethodModel
from storefront.domain.errors import NotFoundError
from storefront.domain.schemas import PaymentMethodCreate
from storefront.repos.customer_repo import CustomerRepo
from storefront.repos.payment_repo import PaymentMethodRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class PaymentService:
    """Stored payment methods of a customer. Charging an order lives in OrderService.process_payment."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PaymentMethodRepo(db)
        self.customers = CustomerRepo(db)

    def add_payment_method(self, customer_id: int, payload: PaymentMethodCreate) -> PaymentMethodModel:
        self._require_customer(customer_id)

        with transaction(self.db):
            existing = self.repo.list_by_customer(customer_id)
            # first method becomes the default, a new default replaces the old one
            is_default = payload.is_default or not existing
            if is_default:
                for m in existing:
                    m.is_default = False
            method = self.repo.create_method(
                PaymentMethodModel(
                    customer_id=customer_id,
                    method_type=payload.method_type,
                    provider=payload.provider,
                    last_four=payload.last_four,
                    is_default=is_default,
                )
            )

        logger.info(f"Payment method {method.id} ({method.method_type}) added for customer {customer_id}")
        return method

    def list_payment_methods(self, customer_id: int) -> List[PaymentMethodModel]:
        self._require_customer(customer_id)
        return self.repo.list_by_customer(customer_id)

    def get_payment_method(self, method_id: int) -> PaymentMethodModel:
        method = self.repo.get_method(method_id)
        if not method:
            raise NotFoundError("Payment method", "id", method_id)
        return method

    def _require_customer(self, customer_id: int):
        if not self.customers.get_customer(customer_id):
            raise NotFoundError("Customer", "id", customer_id)
