"""Management CLI for the cold-chain database.

Usage:
    python -m app.cli init-db     # Create all tables (no Alembic)
    python -m app.cli seed        # Insert demo products, units and shipments
    python -m app.cli drop-db     # Drop all tables
"""

import sys
from datetime import date, datetime, timedelta

from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import Session

from app.config import settings
from app.database import Base
from app.models import Product, Shipment, ShipmentStatus, StorageType, StorageUnit


def get_engine():
    return create_engine(settings.database_url_sync)


def init_db():
    engine = get_engine()
    Base.metadata.create_all(engine)
    print(f"Created {len(Base.metadata.tables)} table(s).")


def drop_db():
    engine = get_engine()
    Base.metadata.drop_all(engine)
    print("Dropped all tables.")


def seed():
    """Insert a small demo data set (skipped if products already exist)."""
    engine = get_engine()
    with Session(engine) as session:
        if session.scalar(select(func.count(Product.id))):
            print("Database already has products; skipping seed.")
            return

        today = date.today()
        vaccine = Product(
            name="Polio Vaccine", batch_no="PV-2301",
            expiry_date=today + timedelta(days=20), min_temp=2.0, max_temp=8.0,
        )
        ice_cream = Product(
            name="Vanilla Ice Cream", batch_no="IC-118",
            expiry_date=today + timedelta(days=120), min_temp=-25.0, max_temp=-18.0,
        )
        produce = Product(
            name="Fresh Spinach", batch_no="FS-07",
            expiry_date=today + timedelta(days=5), min_temp=0.0, max_temp=4.0,
        )
        truck = StorageUnit(name="Truck 12", type=StorageType.TRUCK.value, location="NH-48")
        cold_room = StorageUnit(
            name="Cold Room A", type=StorageType.COLD_ROOM.value, location="Pune Depot"
        )
        warehouse = StorageUnit(
            name="Central Warehouse", type=StorageType.WAREHOUSE.value, location="Mumbai"
        )
        session.add_all([vaccine, ice_cream, produce, truck, cold_room, warehouse])
        session.flush()

        now = datetime.utcnow()
        session.add_all([
            Shipment(
                shipment_code="SHP-1001", product_id=vaccine.id, storage_unit_id=truck.id,
                origin="Mumbai", destination="Pune",
                status=ShipmentStatus.IN_TRANSIT.value, departure_time=now - timedelta(hours=3),
            ),
            Shipment(
                shipment_code="SHP-1002", product_id=ice_cream.id, storage_unit_id=cold_room.id,
                origin="Pune", destination="Nashik",
                status=ShipmentStatus.IN_TRANSIT.value, departure_time=now - timedelta(hours=1),
            ),
            Shipment(
                shipment_code="SHP-0999", product_id=produce.id, storage_unit_id=warehouse.id,
                origin="Nashik", destination="Mumbai",
                status=ShipmentStatus.DELIVERED.value,
                departure_time=now - timedelta(days=1, hours=6),
                arrival_time=now - timedelta(days=1),
            ),
        ])
        session.commit()
    print("Seeded 3 products, 3 storage units, 3 shipments.")


COMMANDS = {
    "init-db": init_db,
    "seed": seed,
    "drop-db": drop_db,
}


if __name__ == "__main__":
    cmd = sys.argv[1] if len(sys.argv) > 1 else ""
    if cmd in COMMANDS:
        COMMANDS[cmd]()
    else:
        print(f"Usage: python -m app.cli [{'|'.join(COMMANDS)}]")
        sys.exit(1)
