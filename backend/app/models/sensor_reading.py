"""SensorReading: one temperature/humidity sample from a storage unit.

Written once per ingestion call and never updated.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class SensorReading(Base):
    __tablename__ = "sensor_readings"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    storage_unit_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("storage_units.id"), nullable=False, index=True
    )
    temperature: Mapped[float] = mapped_column(Float, nullable=False)
    humidity: Mapped[float | None] = mapped_column(Float)
    recorded_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, index=True
    )

    storage_unit = relationship("StorageUnit")
