"""Pydantic schemas for Product CRUD operations."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    batch_no: str | None = Field(None, max_length=100)
    expiry_date: date | None = None
    min_temp: float = Field(..., allow_inf_nan=False)
    max_temp: float = Field(..., allow_inf_nan=False)

    @model_validator(mode="after")
    def _check_range(self):
        if self.min_temp > self.max_temp:
            raise ValueError("min_temp must not exceed max_temp")
        return self


class ProductUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    batch_no: str | None = None
    expiry_date: date | None = None
    min_temp: float | None = Field(None, allow_inf_nan=False)
    max_temp: float | None = Field(None, allow_inf_nan=False)


class ProductOut(BaseModel):
    id: str
    name: str
    batch_no: str | None
    expiry_date: date | None
    min_temp: float
    max_temp: float
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
