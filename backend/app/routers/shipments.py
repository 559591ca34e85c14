"""Shipment router: CRUD plus the In Transit / Delivered toggle.

Endpoints:
    GET    /api/shipments/                 List shipments (optional ?status=)
    GET    /api/shipments/summary          Shipment count per status
    GET    /api/shipments/status/{status}  Shipments in one status
    GET    /api/shipments/{id}             Single shipment with names
    POST   /api/shipments/                 Create shipment
    PATCH  /api/shipments/{id}             Update route / codes / times
    PUT    /api/shipments/{id}/status      Set status (stamps arrival_time)
    DELETE /api/shipments/{id}             Delete shipment

A shipment's status decides whether its product's safe range is applied to
readings from its storage unit, so status changes invalidate nothing but the
dashboard stats: ranges themselves are never cached.
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.middleware.exceptions import ResourceNotFoundError
from app.models.product import Product
from app.models.shipment import Shipment, ShipmentStatus
from app.models.storage_unit import StorageUnit
from app.schemas.shipment import (
    ShipmentCreate,
    ShipmentDetail,
    ShipmentOut,
    ShipmentStatusCount,
    ShipmentStatusUpdate,
    ShipmentUpdate,
)
from app.utils.cache import invalidate_cache
from app.utils.dates import to_naive_utc, whole_hours_between

logger = logging.getLogger(__name__)

router = APIRouter()


def _detail_query():
    return (
        select(
            Shipment,
            Product.name.label("product_name"),
            Product.batch_no,
            StorageUnit.name.label("storage_unit_name"),
            StorageUnit.type.label("storage_type"),
        )
        .join(Product, Shipment.product_id == Product.id)
        .join(StorageUnit, Shipment.storage_unit_id == StorageUnit.id)
    )


def _to_detail(row) -> ShipmentDetail:
    shipment: Shipment = row.Shipment
    end = shipment.arrival_time or datetime.utcnow()
    return ShipmentDetail(
        **ShipmentOut.model_validate(shipment).model_dump(),
        product_name=row.product_name,
        batch_no=row.batch_no,
        storage_unit_name=row.storage_unit_name,
        storage_type=row.storage_type,
        travel_hours=whole_hours_between(shipment.departure_time, end),
    )


async def _get_shipment(db: AsyncSession, shipment_id: str) -> Shipment:
    shipment = await db.get(Shipment, shipment_id)
    if shipment is None:
        raise ResourceNotFoundError("Shipment", shipment_id)
    return shipment


@router.get("/", response_model=list[ShipmentDetail])
async def list_shipments(
    shipment_status: ShipmentStatus | None = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
):
    stmt = _detail_query()
    if shipment_status:
        stmt = stmt.where(Shipment.status == shipment_status.value)
    stmt = stmt.order_by(Shipment.departure_time.desc())

    result = await db.execute(stmt)
    return [_to_detail(row) for row in result.all()]


@router.get("/summary", response_model=list[ShipmentStatusCount])
async def shipment_summary(db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(Shipment.status, func.count(Shipment.id).label("count"))
        .group_by(Shipment.status)
        .order_by(Shipment.status)
    )
    return [ShipmentStatusCount(status=row.status, count=row.count) for row in result.all()]


@router.get("/status/{shipment_status}", response_model=list[ShipmentDetail])
async def list_by_status(shipment_status: ShipmentStatus, db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        _detail_query()
        .where(Shipment.status == shipment_status.value)
        .order_by(Shipment.departure_time.desc())
    )
    return [_to_detail(row) for row in result.all()]


@router.get("/{shipment_id}", response_model=ShipmentDetail)
async def get_shipment(shipment_id: str, db: AsyncSession = Depends(get_db)):
    row = (await db.execute(_detail_query().where(Shipment.id == shipment_id))).first()
    if row is None:
        raise ResourceNotFoundError("Shipment", shipment_id)
    return _to_detail(row)


@router.post("/", response_model=ShipmentOut, status_code=status.HTTP_201_CREATED)
async def create_shipment(body: ShipmentCreate, db: AsyncSession = Depends(get_db)):
    if await db.get(Product, body.product_id) is None:
        raise ResourceNotFoundError("Product", body.product_id)
    if await db.get(StorageUnit, body.storage_unit_id) is None:
        raise ResourceNotFoundError("Storage unit", body.storage_unit_id)

    arrival_time = to_naive_utc(body.arrival_time)
    if body.status == ShipmentStatus.DELIVERED and arrival_time is None:
        arrival_time = datetime.utcnow()
    elif body.status == ShipmentStatus.IN_TRANSIT:
        arrival_time = None

    shipment = Shipment(
        product_id=body.product_id,
        storage_unit_id=body.storage_unit_id,
        shipment_code=body.shipment_code,
        origin=body.origin,
        destination=body.destination,
        status=body.status.value,
        departure_time=to_naive_utc(body.departure_time) or datetime.utcnow(),
        arrival_time=arrival_time,
    )
    db.add(shipment)
    await db.flush()
    await invalidate_cache("stats:*")

    logger.info(
        "Shipment created (%s)", shipment.status, extra={"shipment_id": shipment.id}
    )
    return shipment


@router.patch("/{shipment_id}", response_model=ShipmentOut)
async def update_shipment(
    shipment_id: str,
    body: ShipmentUpdate,
    db: AsyncSession = Depends(get_db),
):
    shipment = await _get_shipment(db, shipment_id)

    updates = body.model_dump(exclude_unset=True)
    for key in ("departure_time", "arrival_time"):
        if key in updates:
            updates[key] = to_naive_utc(updates[key])
    if updates.get("departure_time") is None:
        updates.pop("departure_time", None)

    for key, value in updates.items():
        setattr(shipment, key, value)
    await db.flush()
    return shipment


@router.put("/{shipment_id}/status", response_model=ShipmentOut)
async def update_shipment_status(
    shipment_id: str,
    body: ShipmentStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Toggle a shipment between In Transit and Delivered.

    Delivered stamps ``arrival_time``; going back to In Transit clears it.
    """
    shipment = await _get_shipment(db, shipment_id)

    shipment.status = body.status.value
    if body.status == ShipmentStatus.DELIVERED:
        shipment.arrival_time = datetime.utcnow()
    else:
        shipment.arrival_time = None
    await db.flush()
    await invalidate_cache("stats:*")

    logger.info(
        "Shipment status set to %s", shipment.status, extra={"shipment_id": shipment.id}
    )
    return shipment


@router.delete("/{shipment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_shipment(shipment_id: str, db: AsyncSession = Depends(get_db)):
    shipment = await _get_shipment(db, shipment_id)
    await db.delete(shipment)
    await db.flush()
    await invalidate_cache("stats:*")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
