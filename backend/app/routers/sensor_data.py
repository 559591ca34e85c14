"""Sensor data router: ingestion plus reading queries.

Endpoints:
    POST /api/sensor-data/                  Ingest one reading (evaluates breach)
    GET  /api/sensor-data/                  Recent readings with unit names
    GET  /api/sensor-data/latest            Latest reading per storage unit
    GET  /api/sensor-data/averages          Daily averages per storage unit
    GET  /api/sensor-data/dashboard-stats   Dashboard counters (cached)
    GET  /api/sensor-data/storage/{id}      Readings for one storage unit
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.middleware.exceptions import ResourceNotFoundError
from app.models.sensor_reading import SensorReading
from app.models.storage_unit import StorageUnit
from app.schemas.alert import AlertOut
from app.schemas.sensor import (
    DailyAverage,
    DashboardStats,
    IngestionResult,
    SensorReadingCreate,
    SensorReadingDetail,
    SensorReadingOut,
)
from app.services.sensor import record_reading
from app.services.stats import get_dashboard_stats, round_avg
from app.utils.cache import invalidate_cache

logger = logging.getLogger(__name__)

router = APIRouter()


def _detail_query():
    return select(
        SensorReading,
        StorageUnit.name.label("storage_unit_name"),
        StorageUnit.type.label("storage_type"),
        StorageUnit.location,
    ).join(StorageUnit, SensorReading.storage_unit_id == StorageUnit.id)


def _to_detail(row) -> SensorReadingDetail:
    return SensorReadingDetail(
        **SensorReadingOut.model_validate(row.SensorReading).model_dump(),
        storage_unit_name=row.storage_unit_name,
        storage_type=row.storage_type,
        location=row.location,
    )


@router.post("/", response_model=IngestionResult, status_code=status.HTTP_201_CREATED)
async def ingest_reading(body: SensorReadingCreate, db: AsyncSession = Depends(get_db)):
    """Store a reading and raise an alert if it breaches the active range.

    Reading and alert are committed together before responding; cached
    stats are dropped only after the commit.
    """
    reading, alert = await record_reading(body, db)
    await db.commit()
    await invalidate_cache("stats:*")

    return IngestionResult(
        reading=SensorReadingOut.model_validate(reading),
        alert=AlertOut.model_validate(alert) if alert is not None else None,
    )


@router.get("/", response_model=list[SensorReadingDetail])
async def list_readings(
    limit: int = Query(100, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        _detail_query().order_by(SensorReading.recorded_at.desc()).limit(limit)
    )
    return [_to_detail(row) for row in result.all()]


@router.get("/latest", response_model=list[SensorReadingDetail])
async def latest_readings(db: AsyncSession = Depends(get_db)):
    # One row per unit, even when recorded_at ties
    ranked = select(
        SensorReading.id,
        func.row_number()
        .over(
            partition_by=SensorReading.storage_unit_id,
            order_by=(SensorReading.recorded_at.desc(), SensorReading.id.desc()),
        )
        .label("row_rank"),
    ).subquery()
    result = await db.execute(
        _detail_query()
        .join(ranked, SensorReading.id == ranked.c.id)
        .where(ranked.c.row_rank == 1)
        .order_by(StorageUnit.name)
    )
    return [_to_detail(row) for row in result.all()]


@router.get("/averages", response_model=list[DailyAverage])
async def daily_averages(db: AsyncSession = Depends(get_db)):
    day = func.date(SensorReading.recorded_at).label("day")
    result = await db.execute(
        select(
            SensorReading.storage_unit_id,
            StorageUnit.name.label("storage_unit_name"),
            day,
            func.avg(SensorReading.temperature).label("avg_temp"),
            func.avg(SensorReading.humidity).label("avg_humidity"),
        )
        .join(StorageUnit, SensorReading.storage_unit_id == StorageUnit.id)
        .group_by(SensorReading.storage_unit_id, StorageUnit.name, day)
        .order_by(day.desc(), StorageUnit.name)
        .limit(50)
    )

    return [
        DailyAverage(
            storage_unit_id=row.storage_unit_id,
            storage_unit_name=row.storage_unit_name,
            day=row.day,
            avg_temp=round_avg(row.avg_temp),
            avg_humidity=round_avg(row.avg_humidity),
        )
        for row in result.all()
    ]


@router.get("/dashboard-stats", response_model=DashboardStats)
async def dashboard_stats(db: AsyncSession = Depends(get_db)):
    return await get_dashboard_stats(db)


@router.get("/storage/{storage_unit_id}", response_model=list[SensorReadingDetail])
async def readings_for_storage(
    storage_unit_id: str,
    limit: int = Query(100, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
):
    if await db.get(StorageUnit, storage_unit_id) is None:
        raise ResourceNotFoundError("Storage unit", storage_unit_id)

    result = await db.execute(
        _detail_query()
        .where(SensorReading.storage_unit_id == storage_unit_id)
        .order_by(SensorReading.recorded_at.desc())
        .limit(limit)
    )
    return [_to_detail(row) for row in result.all()]
