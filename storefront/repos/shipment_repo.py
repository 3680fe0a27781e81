# storefront/repos/shipment_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.data.models.shipment import ShipmentModel
from storefront.data.models.shipment_event import ShipmentEventModel


class ShipmentRepo:
    def __init__(self, db: Session):
        self.db = db

    def get(self, shipment_id: int, for_update: bool = False) -> ShipmentModel | None:
        if not for_update:
            return self.db.get(ShipmentModel, shipment_id)
        return self.db.execute(
            select(ShipmentModel)
            .where(ShipmentModel.id == shipment_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def get_by_tracking_number(self, tracking_number: str) -> ShipmentModel | None:
        return self.db.execute(
            select(ShipmentModel).where(ShipmentModel.tracking_number == tracking_number)
        ).scalar_one_or_none()

    def list_all(self) -> list[ShipmentModel]:
        return list(self.db.execute(select(ShipmentModel).order_by(ShipmentModel.id)).scalars())

    def list_by_order(self, order_id: int) -> list[ShipmentModel]:
        return list(
            self.db.execute(
                select(ShipmentModel).where(ShipmentModel.order_id == order_id).order_by(ShipmentModel.id)
            ).scalars()
        )

    def list_by_customer(self, customer_id: int) -> list[ShipmentModel]:
        return list(
            self.db.execute(
                select(ShipmentModel)
                .join(OrderModel, OrderModel.id == ShipmentModel.order_id)
                .where(OrderModel.customer_id == customer_id)
                .order_by(ShipmentModel.id)
            ).scalars()
        )

    def list_by_status(self, status: str) -> list[ShipmentModel]:
        return list(
            self.db.execute(
                select(ShipmentModel).where(ShipmentModel.status == status).order_by(ShipmentModel.id)
            ).scalars()
        )

    def add(self, shipment: ShipmentModel) -> ShipmentModel:
        self.db.add(shipment)
        self.db.flush()
        return shipment

    def add_event(self, event: ShipmentEventModel) -> ShipmentEventModel:
        self.db.add(event)
        self.db.flush()
        return event

    def get_events(self, shipment_id: int) -> list[ShipmentEventModel]:
        return list(
            self.db.execute(
                select(ShipmentEventModel)
                .where(ShipmentEventModel.shipment_id == shipment_id)
                .order_by(ShipmentEventModel.id)
            ).scalars()
        )
