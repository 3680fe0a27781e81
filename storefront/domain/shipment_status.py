# storefront/domain/shipment_status.py
from enum import Enum

from storefront.domain.errors import InvalidInputError


class ShipmentStatus(str, Enum):
    SHIPPED = "SHIPPED"
    IN_TRANSIT = "IN_TRANSIT"
    OUT_FOR_DELIVERY = "OUT_FOR_DELIVERY"
    DELIVERED = "DELIVERED"


def parse_shipment_status(raw: str) -> ShipmentStatus:
    value = (raw or "").strip().upper()
    try:
        return ShipmentStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in ShipmentStatus)
        raise InvalidInputError(f"Unknown shipment status '{raw}', expected one of: {allowed}")
