"""Dashboard aggregates.

All numbers are computed by the database (COUNT / AVG / GROUP BY); this module
only shapes them.  Averages are rounded in Python so the same queries run on
PostgreSQL and SQLite.
"""

from datetime import datetime, timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.alert import Alert
from app.models.product import Product
from app.models.sensor_reading import SensorReading
from app.models.shipment import Shipment, ShipmentStatus
from app.models.storage_unit import StorageUnit
from app.schemas.sensor import DashboardCounts, DashboardStats
from app.schemas.storage_unit import StorageTemperature
from app.utils.cache import cached


def round_avg(value: float | None) -> float | None:
    return round(float(value), 2) if value is not None else None


def recent_alert_cutoff() -> datetime:
    return datetime.utcnow() - timedelta(hours=settings.recent_alert_window_hours)


async def storage_average_temperatures(db: AsyncSession) -> list[StorageTemperature]:
    """Average temperature per storage unit; units without readings included."""
    stmt = (
        select(
            StorageUnit.id,
            StorageUnit.name,
            func.avg(SensorReading.temperature).label("avg_temp"),
            func.count(SensorReading.id).label("reading_count"),
        )
        .outerjoin(SensorReading, SensorReading.storage_unit_id == StorageUnit.id)
        .group_by(StorageUnit.id, StorageUnit.name)
        .order_by(StorageUnit.name)
    )
    result = await db.execute(stmt)
    return [
        StorageTemperature(
            storage_unit_id=row.id,
            name=row.name,
            avg_temp=round_avg(row.avg_temp),
            reading_count=row.reading_count,
        )
        for row in result.all()
    ]


@cached(ttl=settings.stats_cache_ttl, prefix="stats")
async def get_dashboard_stats(db: AsyncSession) -> DashboardStats:
    async def count(stmt) -> int:
        return (await db.scalar(stmt)) or 0

    counts = DashboardCounts(
        products=await count(select(func.count(Product.id))),
        storage_units=await count(select(func.count(StorageUnit.id))),
        shipments=await count(select(func.count(Shipment.id))),
        sensor_readings=await count(select(func.count(SensorReading.id))),
        total_alerts=await count(select(func.count(Alert.id))),
        in_transit=await count(
            select(func.count(Shipment.id)).where(
                Shipment.status == ShipmentStatus.IN_TRANSIT.value
            )
        ),
        recent_alerts=await count(
            select(func.count(Alert.id)).where(Alert.created_at >= recent_alert_cutoff())
        ),
    )

    return DashboardStats(
        stats=counts,
        storage_avg_temps=await storage_average_temperatures(db),
    )
