"""Pydantic schemas for sensor ingestion and reading queries."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.alert import AlertOut
from app.schemas.storage_unit import StorageTemperature


class SensorReadingCreate(BaseModel):
    storage_unit_id: str
    temperature: float = Field(..., allow_inf_nan=False)
    humidity: float = Field(..., ge=0, le=100, allow_inf_nan=False)
    recorded_at: datetime | None = None  # defaults to now


class SensorReadingOut(BaseModel):
    id: str
    storage_unit_id: str
    temperature: float
    humidity: float | None
    recorded_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SensorReadingDetail(SensorReadingOut):
    storage_unit_name: str
    storage_type: str
    location: str


class IngestionResult(BaseModel):
    """Response to an ingestion call; ``alert`` is set when the reading breached."""
    reading: SensorReadingOut
    alert: AlertOut | None = None


class DailyAverage(BaseModel):
    storage_unit_id: str
    storage_unit_name: str
    day: date
    avg_temp: float | None
    avg_humidity: float | None


class DashboardCounts(BaseModel):
    products: int
    storage_units: int
    shipments: int
    sensor_readings: int
    total_alerts: int
    in_transit: int
    recent_alerts: int


class DashboardStats(BaseModel):
    stats: DashboardCounts
    storage_avg_temps: list[StorageTemperature]
