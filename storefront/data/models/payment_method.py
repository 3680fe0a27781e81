from sqlalchemy import Column, Integer, ForeignKey, String, Boolean

from storefront.data.database import Base


class PaymentMethodModel(Base):
    __tablename__ = "payment_methods"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)

    method_type = Column(String(30), nullable=False)  # CARD, PAYPAL, BANK_TRANSFER
    provider = Column(String(100), nullable=True)
    last_four = Column(String(4), nullable=True)
    is_default = Column(Boolean, nullable=False, default=False)
