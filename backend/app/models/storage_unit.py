import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class StorageType(str, enum.Enum):
    WAREHOUSE = "Warehouse"
    COLD_ROOM = "Cold Room"
    TRUCK = "Truck"


class StorageUnit(Base):
    __tablename__ = "storage_units"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    # Warehouse | Cold Room | Truck
    type: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

