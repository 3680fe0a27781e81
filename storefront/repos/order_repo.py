# storefront/repos/order_repo.py
from datetime import datetime

from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.data.models.order_detail import OrderDetailModel
from storefront.data.models.shipment import ShipmentModel
from storefront.data.models.shipment_event import ShipmentEventModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: OrderModel, details: list[OrderDetailModel]) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        for detail in details:
            detail.order_id = order.id
            self.db.add(detail)
        self.db.flush()
        return order

    def get_order(self, order_id: int, for_update: bool = False) -> OrderModel | None:
        if not for_update:
            return self.db.get(OrderModel, order_id)
        return self.db.execute(
            select(OrderModel)
            .where(OrderModel.id == order_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def get_details(self, order_id: int) -> list[OrderDetailModel]:
        return list(
            self.db.execute(
                select(OrderDetailModel)
                .where(OrderDetailModel.order_id == order_id)
                .order_by(OrderDetailModel.id)
            ).scalars()
        )

    def list_orders(self, skip: int = 0, limit: int = 50) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel).order_by(OrderModel.id).offset(skip).limit(limit)
            ).scalars()
        )

    def list_by_customer(self, customer_id: int) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.customer_id == customer_id)
                .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            ).scalars()
        )

    def list_by_status(self, status: str) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel).where(OrderModel.status == status).order_by(OrderModel.id)
            ).scalars()
        )

    def list_between(self, start: datetime, end: datetime) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.created_at >= start, OrderModel.created_at < end)
                .order_by(OrderModel.created_at)
            ).scalars()
        )

    def delete_order(self, order: OrderModel) -> None:
        # children first, sqlite does not enforce ON DELETE CASCADE by default
        shipment_ids = select(ShipmentModel.id).where(ShipmentModel.order_id == order.id)
        self.db.execute(delete(ShipmentEventModel).where(ShipmentEventModel.shipment_id.in_(shipment_ids)))
        self.db.execute(delete(ShipmentModel).where(ShipmentModel.order_id == order.id))
        self.db.execute(delete(OrderDetailModel).where(OrderDetailModel.order_id == order.id))
        self.db.delete(order)
        self.db.flush()
