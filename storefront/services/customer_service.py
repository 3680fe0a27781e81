from sqlalchemy.orm import Session

from storefront.data.database import transaction
from storefront.data.models.customer import CustomerModel
from storefront.domain.errors import NotFoundError, ConflictingStateError
from storefront.domain.schemas import CustomerCreate
from storefront.repos.customer_repo import CustomerRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CustomerService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = CustomerRepo(db)

    def create_customer(self, payload: CustomerCreate) -> CustomerModel:
        email = payload.email.lower()

        with transaction(self.db):
            if self.repo.get_by_email(email):
                raise ConflictingStateError(f"Email {email} is already registered")
            customer = self.repo.create_customer(
                CustomerModel(
                    first_name=payload.first_name,
                    last_name=payload.last_name,
                    email=email,
                    phone=payload.phone,
                )
            )

        logger.info(f"Customer {customer.id} registered")
        return customer

    def get_customer(self, customer_id: int) -> CustomerModel:
        customer = self.repo.get_customer(customer_id)
        if not customer:
            raise NotFoundError("Customer", "id", customer_id)
        return customer
