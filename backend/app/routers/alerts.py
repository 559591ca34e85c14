"""Alert router.

Alerts are written by the breach evaluator during ingestion; operators can
also raise one by hand or delete one.  Nothing here edits an alert.
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.middleware.exceptions import ResourceNotFoundError
from app.models.alert import Alert
from app.models.sensor_reading import SensorReading
from app.models.storage_unit import StorageUnit
from app.schemas.alert import AlertCreate, AlertDetail, AlertOut, AlertProneStorage
from app.services.stats import recent_alert_cutoff
from app.utils.cache import invalidate_cache

logger = logging.getLogger(__name__)

router = APIRouter()


def _detail_query():
    # Manual alerts may have no reading, hence the outer joins.
    return (
        select(
            Alert,
            StorageUnit.id.label("storage_unit_id"),
            StorageUnit.name.label("storage_unit_name"),
            StorageUnit.type.label("storage_type"),
        )
        .outerjoin(SensorReading, Alert.sensor_reading_id == SensorReading.id)
        .outerjoin(StorageUnit, SensorReading.storage_unit_id == StorageUnit.id)
    )


def _to_detail(row) -> AlertDetail:
    return AlertDetail(
        **AlertOut.model_validate(row.Alert).model_dump(),
        storage_unit_id=row.storage_unit_id,
        storage_unit_name=row.storage_unit_name,
        storage_type=row.storage_type,
    )


@router.get("/", response_model=list[AlertDetail])
async def list_alerts(
    limit: int = Query(50, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        _detail_query().order_by(Alert.created_at.desc()).limit(limit)
    )
    return [_to_detail(row) for row in result.all()]


@router.get("/recent", response_model=list[AlertDetail])
async def recent_alerts(db: AsyncSession = Depends(get_db)):
    """Alerts raised within the recent-alert window (24h by default)."""
    result = await db.execute(
        _detail_query()
        .where(Alert.created_at >= recent_alert_cutoff())
        .order_by(Alert.created_at.desc())
    )
    return [_to_detail(row) for row in result.all()]


@router.get("/most-alert-prone", response_model=list[AlertProneStorage])
async def most_alert_prone(db: AsyncSession = Depends(get_db)):
    total = func.count(Alert.id).label("total_alerts")
    result = await db.execute(
        select(StorageUnit.id, StorageUnit.name, total)
        .join(SensorReading, SensorReading.storage_unit_id == StorageUnit.id)
        .join(Alert, Alert.sensor_reading_id == SensorReading.id)
        .group_by(StorageUnit.id, StorageUnit.name)
        .order_by(total.desc(), StorageUnit.name)
        .limit(5)
    )
    return [
        AlertProneStorage(
            storage_unit_id=row.id,
            storage_unit_name=row.name,
            total_alerts=row.total_alerts,
        )
        for row in result.all()
    ]


@router.get("/storage/{storage_unit_id}", response_model=list[AlertDetail])
async def alerts_for_storage(storage_unit_id: str, db: AsyncSession = Depends(get_db)):
    if await db.get(StorageUnit, storage_unit_id) is None:
        raise ResourceNotFoundError("Storage unit", storage_unit_id)

    result = await db.execute(
        _detail_query()
        .where(SensorReading.storage_unit_id == storage_unit_id)
        .order_by(Alert.created_at.desc())
    )
    return [_to_detail(row) for row in result.all()]


@router.get("/{alert_id}", response_model=AlertDetail)
async def get_alert(alert_id: str, db: AsyncSession = Depends(get_db)):
    row = (await db.execute(_detail_query().where(Alert.id == alert_id))).first()
    if row is None:
        raise ResourceNotFoundError("Alert", alert_id)
    return _to_detail(row)


@router.post("/", response_model=AlertOut, status_code=status.HTTP_201_CREATED)
async def create_alert(body: AlertCreate, db: AsyncSession = Depends(get_db)):
    """Raise a manual alert, optionally tied to an existing reading."""
    if body.sensor_reading_id is not None:
        if await db.get(SensorReading, body.sensor_reading_id) is None:
            raise ResourceNotFoundError("Sensor reading", body.sensor_reading_id)

    alert = Alert(sensor_reading_id=body.sensor_reading_id, message=body.message)
    db.add(alert)
    await db.flush()
    await invalidate_cache("stats:*")

    logger.info("Manual alert created", extra={"alert_id": alert.id})
    return alert


@router.delete("/{alert_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_alert(alert_id: str, db: AsyncSession = Depends(get_db)):
    alert = await db.get(Alert, alert_id)
    if alert is None:
        raise ResourceNotFoundError("Alert", alert_id)

    await db.delete(alert)
    await db.flush()
    await invalidate_cache("stats:*")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
