"""Breach evaluator: checks a freshly stored reading against its product's safe range.

Context resolution:
    The reading's storage unit → the most recently departed ``In Transit``
    shipment on that unit → its product's [min_temp, max_temp].

    Several in-transit shipments on one unit are allowed.  Policy: the one
    with the latest ``departure_time`` wins; equal departure times fall back
    to the latest ``created_at``.  No shipment → no context → no alert.

Breach rule:
    temperature < min_temp  or  temperature > max_temp
    (bounds are safe)

Every breaching reading gets its own alert unless a cooldown is configured
(``ALERT_COOLDOWN_SECONDS`` > 0), in which case a unit that already alerted
within the window is skipped.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.alert import Alert
from app.models.product import Product
from app.models.sensor_reading import SensorReading
from app.models.shipment import Shipment, ShipmentStatus
from app.models.storage_unit import StorageUnit

logger = logging.getLogger("coldchain.breach")


@dataclass(frozen=True)
class BreachContext:
    """Safe range and display names that apply to a storage unit right now."""

    shipment_id: str
    product_name: str
    min_temp: float
    max_temp: float
    storage_unit_name: str


def is_breach(temperature: float, min_temp: float, max_temp: float) -> bool:
    return temperature < min_temp or temperature > max_temp


def _fmt(value: float) -> str:
    # 9.5 → "9.5", 2.0 → "2"
    return f"{value:g}"


def format_breach_message(temperature: float, ctx: BreachContext) -> str:
    return (
        f"Temperature breach in {ctx.storage_unit_name} "
        f"(reading: {_fmt(temperature)}°C, "
        f"safe range: {_fmt(ctx.min_temp)}°C to {_fmt(ctx.max_temp)}°C) "
        f"for product {ctx.product_name}"
    )


async def resolve_context(db: AsyncSession, storage_unit_id: str) -> BreachContext | None:
    """Find the product range governing ``storage_unit_id``, if any."""
    stmt = (
        select(
            Shipment.id,
            Product.name.label("product_name"),
            Product.min_temp,
            Product.max_temp,
            StorageUnit.name.label("storage_unit_name"),
        )
        .join(Product, Shipment.product_id == Product.id)
        .join(StorageUnit, Shipment.storage_unit_id == StorageUnit.id)
        .where(
            Shipment.storage_unit_id == storage_unit_id,
            Shipment.status == ShipmentStatus.IN_TRANSIT.value,
        )
        .order_by(Shipment.departure_time.desc(), Shipment.created_at.desc())
        .limit(1)
    )
    row = (await db.execute(stmt)).first()
    if row is None:
        return None

    return BreachContext(
        shipment_id=row.id,
        product_name=row.product_name,
        min_temp=row.min_temp,
        max_temp=row.max_temp,
        storage_unit_name=row.storage_unit_name,
    )


async def _within_cooldown(db: AsyncSession, storage_unit_id: str, now: datetime) -> bool:
    window = settings.alert_cooldown_seconds
    if window <= 0:
        return False

    stmt = (
        select(Alert.id)
        .join(SensorReading, Alert.sensor_reading_id == SensorReading.id)
        .where(
            SensorReading.storage_unit_id == storage_unit_id,
            Alert.created_at >= now - timedelta(seconds=window),
        )
        .limit(1)
    )
    return (await db.execute(stmt)).first() is not None


async def evaluate_reading(db: AsyncSession, reading: SensorReading) -> Alert | None:
    """Evaluate a persisted reading; insert and return an Alert on breach.

    The alert is added to the caller's session and flushed, so it commits
    together with the reading.
    """
    ctx = await resolve_context(db, reading.storage_unit_id)
    if ctx is None:
        logger.debug(
            "No in-transit shipment; skipping breach check",
            extra={"storage_unit_id": reading.storage_unit_id},
        )
        return None

    if not is_breach(reading.temperature, ctx.min_temp, ctx.max_temp):
        return None

    now = datetime.utcnow()
    if await _within_cooldown(db, reading.storage_unit_id, now):
        logger.info(
            "Breach suppressed by cooldown",
            extra={
                "storage_unit_id": reading.storage_unit_id,
                "sensor_reading_id": reading.id,
            },
        )
        return None

    alert = Alert(
        sensor_reading_id=reading.id,
        message=format_breach_message(reading.temperature, ctx),
        created_at=now,
    )
    db.add(alert)
    await db.flush()

    logger.warning(
        "%s",
        alert.message,
        extra={
            "storage_unit_id": reading.storage_unit_id,
            "sensor_reading_id": reading.id,
            "shipment_id": ctx.shipment_id,
            "alert_id": alert.id,
        },
    )
    return alert
