from sqlalchemy import Column, Integer, ForeignKey, String, CheckConstraint

from storefront.data.database import Base


class InventoryModel(Base):
    __tablename__ = "store_inventory"

    store_id = Column(Integer, ForeignKey("stores.id"), primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id"), primary_key=True)

    quantity = Column(Integer, nullable=False, default=0)
    location = Column(String(100), nullable=True)

    __table_args__ = (CheckConstraint("quantity >= 0", name="ck_inventory_quantity_non_negative"),)
