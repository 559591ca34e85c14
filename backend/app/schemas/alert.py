"""Pydantic schemas for alert API responses."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AlertOut(BaseModel):
    id: str
    sensor_reading_id: str | None
    message: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AlertDetail(AlertOut):
    """Alert joined with the storage unit of its reading (if any)."""
    storage_unit_id: str | None = None
    storage_unit_name: str | None = None
    storage_type: str | None = None


class AlertCreate(BaseModel):
    """Manual operator alert."""
    sensor_reading_id: str | None = None
    message: str = Field(..., min_length=1)


class AlertProneStorage(BaseModel):
    storage_unit_id: str
    storage_unit_name: str
    total_alerts: int
