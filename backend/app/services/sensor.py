"""Sensor ingestion service.

Handles one incoming reading end to end:
  - Validating the storage unit exists
  - Persisting the SensorReading
  - Running the breach evaluator against it

The caller commits, then invalidates cached dashboard statistics.
"""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.middleware.exceptions import ResourceNotFoundError
from app.models.alert import Alert
from app.models.sensor_reading import SensorReading
from app.models.storage_unit import StorageUnit
from app.schemas.sensor import SensorReadingCreate
from app.services.breach import evaluate_reading
from app.utils.dates import to_naive_utc


async def record_reading(
    body: SensorReadingCreate,
    db: AsyncSession,
) -> tuple[SensorReading, Alert | None]:
    """Store a reading and evaluate it.

    Returns:
        (reading, alert) where alert is None unless the reading breached.

    Raises:
        ResourceNotFoundError if the storage unit does not exist.
    """
    unit = (
        await db.execute(
            select(StorageUnit.id).where(StorageUnit.id == body.storage_unit_id)
        )
    ).scalar_one_or_none()
    if unit is None:
        raise ResourceNotFoundError("Storage unit", body.storage_unit_id)

    reading = SensorReading(
        storage_unit_id=body.storage_unit_id,
        temperature=body.temperature,
        humidity=body.humidity,
        recorded_at=to_naive_utc(body.recorded_at) or datetime.utcnow(),
    )
    db.add(reading)
    await db.flush()

    alert = await evaluate_reading(db, reading)
    return reading, alert
