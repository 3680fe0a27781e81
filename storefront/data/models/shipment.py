from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, DateTime

from storefront.data.database import Base


class ShipmentModel(Base):
    """Shipment of one order; created when the order moves to SHIPPED."""

    __tablename__ = "shipments"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)

    carrier = Column(String(50), nullable=False)
    tracking_number = Column(String(50), nullable=True, unique=True)
    tracking_url = Column(String(255), nullable=True)

    status = Column(String(20), nullable=False)
    shipped_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    delivered_at = Column(DateTime(timezone=True), nullable=True)
