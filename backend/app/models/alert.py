"""Alert: a temperature breach raised against a sensor reading.

Created by the breach evaluator during ingestion (or manually by an
operator, in which case ``sensor_reading_id`` may be empty).  Alerts are
never mutated; they can only be deleted.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Alert(Base):
    __tablename__ = "alerts"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    sensor_reading_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("sensor_readings.id"), index=True
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, index=True
    )

    sensor_reading = relationship("SensorReading")
