"""Pydantic schemas for Shipment CRUD and the status toggle."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.shipment import ShipmentStatus


# ── Create ────────────────────────────────────────────────────

class ShipmentCreate(BaseModel):
    product_id: str
    storage_unit_id: str
    shipment_code: str | None = Field(None, max_length=50)
    origin: str | None = Field(None, max_length=255)
    destination: str | None = Field(None, max_length=255)
    status: ShipmentStatus = ShipmentStatus.IN_TRANSIT
    departure_time: datetime | None = None
    arrival_time: datetime | None = None


# ── Update (partial) ─────────────────────────────────────────

class ShipmentUpdate(BaseModel):
    shipment_code: str | None = Field(None, max_length=50)
    origin: str | None = None
    destination: str | None = None
    departure_time: datetime | None = None
    arrival_time: datetime | None = None


class ShipmentStatusUpdate(BaseModel):
    status: ShipmentStatus


# ── Response ─────────────────────────────────────────────────

class ShipmentOut(BaseModel):
    id: str
    shipment_code: str | None
    product_id: str
    storage_unit_id: str
    origin: str | None
    destination: str | None
    status: str
    departure_time: datetime
    arrival_time: datetime | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ShipmentDetail(ShipmentOut):
    """Shipment joined with product/storage names and elapsed travel time."""
    product_name: str
    batch_no: str | None = None
    storage_unit_name: str
    storage_type: str
    travel_hours: int | None = None


class ShipmentStatusCount(BaseModel):
    status: str
    count: int
