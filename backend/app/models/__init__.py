"""Aggregate model imports for Alembic auto-detection."""

from app.models.product import Product  # noqa: F401
from app.models.storage_unit import StorageType, StorageUnit  # noqa: F401
from app.models.shipment import Shipment, ShipmentStatus  # noqa: F401
from app.models.sensor_reading import SensorReading  # noqa: F401
from app.models.alert import Alert  # noqa: F401
from app.models.user import User  # noqa: F401

__all__ = [
    "Product",
    "StorageType", "StorageUnit",
    "Shipment", "ShipmentStatus",
    "SensorReading",
    "Alert",
    "User",
]
