"""Pytest configuration and fixtures for cold-chain tests.

Tests run against an in-memory SQLite database (aiosqlite) with Redis
caching switched off, so no external services are needed.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DATABASE_URL_SYNC"] = "sqlite:///:memory:"
os.environ["CACHE_ENABLED"] = "false"
os.environ["AUTO_CREATE_TABLES"] = "false"

from datetime import date, datetime, timedelta
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database import Base, get_db
from app.models import Product, Shipment, ShipmentStatus, StorageType, StorageUnit


# ── Test Database Setup ──────────────────────────────────────────

@pytest_asyncio.fixture
async def test_engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for tests."""
    session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with overridden database dependency."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# ── Test Data Fixtures ───────────────────────────────────────────

@pytest_asyncio.fixture
async def vaccine(db_session: AsyncSession) -> Product:
    """Product with a 2–8 °C safe range."""
    product = Product(
        name="Vaccine X",
        batch_no="VX-001",
        expiry_date=date.today() + timedelta(days=10),
        min_temp=2.0,
        max_temp=8.0,
    )
    db_session.add(product)
    await db_session.flush()
    return product


@pytest_asyncio.fixture
async def truck(db_session: AsyncSession) -> StorageUnit:
    unit = StorageUnit(name="Truck 7", type=StorageType.TRUCK.value, location="Route 9")
    db_session.add(unit)
    await db_session.flush()
    return unit


@pytest_asyncio.fixture
async def cold_room(db_session: AsyncSession) -> StorageUnit:
    unit = StorageUnit(name="Cold Room B", type=StorageType.COLD_ROOM.value, location="Depot")
    db_session.add(unit)
    await db_session.flush()
    return unit


@pytest_asyncio.fixture
async def in_transit_shipment(
    db_session: AsyncSession,
    vaccine: Product,
    truck: StorageUnit,
) -> Shipment:
    """Vaccine X travelling in Truck 7."""
    shipment = Shipment(
        shipment_code="SHP-T1",
        product_id=vaccine.id,
        storage_unit_id=truck.id,
        origin="Plant",
        destination="Clinic",
        status=ShipmentStatus.IN_TRANSIT.value,
        departure_time=datetime.utcnow() - timedelta(hours=2),
    )
    db_session.add(shipment)
    await db_session.flush()
    return shipment


# ── Test Markers ─────────────────────────────────────────────────

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "api: API endpoint tests")
    config.addinivalue_line("markers", "cache: Cache tests")
