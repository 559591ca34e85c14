"""Shipment: a product travelling through a storage unit.

Lifecycle:  In Transit ⇄ Delivered

Only ``In Transit`` shipments give a sensor reading its breach context.
Nothing prevents two in-transit shipments on the same storage unit; the
breach evaluator picks the most recently departed one.
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class ShipmentStatus(str, enum.Enum):
    IN_TRANSIT = "In Transit"
    DELIVERED = "Delivered"


class Shipment(Base):
    __tablename__ = "shipments"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    shipment_code: Mapped[str | None] = mapped_column(String(50), unique=True)

    # ── References ───────────────────────────────────────────
    product_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("products.id"), nullable=False, index=True
    )
    storage_unit_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("storage_units.id"), nullable=False, index=True
    )

    # ── Route ────────────────────────────────────────────────
    origin: Mapped[str | None] = mapped_column(String(255))
    destination: Mapped[str | None] = mapped_column(String(255))

    # ── Status & timing ──────────────────────────────────────
    status: Mapped[str] = mapped_column(
        String(20), default=ShipmentStatus.IN_TRANSIT.value, index=True
    )
    departure_time: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, index=True
    )
    arrival_time: Mapped[datetime | None] = mapped_column(DateTime)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    product = relationship("Product")
    storage_unit = relationship("StorageUnit")
