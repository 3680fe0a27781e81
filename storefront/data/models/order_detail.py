from sqlalchemy import Column, Integer, ForeignKey, Numeric

from storefront.data.database import Base


class OrderDetailModel(Base):
    """Line of an order; unit_price is the product price at checkout time."""

    __tablename__ = "order_details"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)

    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
