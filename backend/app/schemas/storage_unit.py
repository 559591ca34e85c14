"""Pydantic schemas for StorageUnit CRUD and temperature summaries."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.storage_unit import StorageType


class StorageUnitCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    location: str = Field(..., min_length=1, max_length=255)
    type: StorageType


class StorageUnitUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    location: str | None = Field(None, min_length=1, max_length=255)
    type: StorageType | None = None


class StorageUnitOut(BaseModel):
    id: str
    name: str
    location: str
    type: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StorageTemperature(BaseModel):
    """Average temperature for one storage unit (null when it has no readings)."""
    storage_unit_id: str
    name: str
    avg_temp: float | None
    reading_count: int
