"""Storage unit router.

Endpoints:
    GET    /api/storage-units/               List storage units (by name)
    GET    /api/storage-units/temperatures   Average temperature per unit
    GET    /api/storage-units/type/{type}    Units of one type
    GET    /api/storage-units/{id}           Single unit
    POST   /api/storage-units/               Create unit
    PATCH  /api/storage-units/{id}           Update unit
    DELETE /api/storage-units/{id}           Delete unit
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.middleware.exceptions import ResourceInUseError, ResourceNotFoundError
from app.models.sensor_reading import SensorReading
from app.models.shipment import Shipment
from app.models.storage_unit import StorageType, StorageUnit
from app.schemas.storage_unit import (
    StorageTemperature,
    StorageUnitCreate,
    StorageUnitOut,
    StorageUnitUpdate,
)
from app.services.stats import storage_average_temperatures
from app.utils.cache import invalidate_cache

router = APIRouter()


async def _get_unit(db: AsyncSession, storage_unit_id: str) -> StorageUnit:
    unit = await db.get(StorageUnit, storage_unit_id)
    if unit is None:
        raise ResourceNotFoundError("Storage unit", storage_unit_id)
    return unit


@router.get("/", response_model=list[StorageUnitOut])
async def list_storage_units(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(StorageUnit).order_by(StorageUnit.name))
    return result.scalars().all()


@router.get("/temperatures", response_model=list[StorageTemperature])
async def get_average_temperatures(db: AsyncSession = Depends(get_db)):
    return await storage_average_temperatures(db)


@router.get("/type/{storage_type}", response_model=list[StorageUnitOut])
async def list_by_type(storage_type: StorageType, db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(StorageUnit)
        .where(StorageUnit.type == storage_type.value)
        .order_by(StorageUnit.name)
    )
    return result.scalars().all()


@router.get("/{storage_unit_id}", response_model=StorageUnitOut)
async def get_storage_unit(storage_unit_id: str, db: AsyncSession = Depends(get_db)):
    return await _get_unit(db, storage_unit_id)


@router.post("/", response_model=StorageUnitOut, status_code=status.HTTP_201_CREATED)
async def create_storage_unit(body: StorageUnitCreate, db: AsyncSession = Depends(get_db)):
    unit = StorageUnit(name=body.name, location=body.location, type=body.type.value)
    db.add(unit)
    await db.flush()
    await invalidate_cache("stats:*")
    return unit


@router.patch("/{storage_unit_id}", response_model=StorageUnitOut)
async def update_storage_unit(
    storage_unit_id: str,
    body: StorageUnitUpdate,
    db: AsyncSession = Depends(get_db),
):
    unit = await _get_unit(db, storage_unit_id)

    updates = body.model_dump(exclude_unset=True, exclude_none=True)
    if "type" in updates:
        updates["type"] = updates["type"].value
    for key, value in updates.items():
        setattr(unit, key, value)
    await db.flush()
    return unit


@router.delete("/{storage_unit_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_storage_unit(storage_unit_id: str, db: AsyncSession = Depends(get_db)):
    unit = await _get_unit(db, storage_unit_id)
    for model, label in ((Shipment, "shipments"), (SensorReading, "sensor readings")):
        in_use = await db.scalar(
            select(model.id).where(model.storage_unit_id == storage_unit_id).limit(1)
        )
        if in_use:
            raise ResourceInUseError("Storage unit", storage_unit_id, label)
    await db.delete(unit)
    await db.flush()
    await invalidate_cache("stats:*")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
