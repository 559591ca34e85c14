"""Storage unit endpoint tests."""

import pytest
from httpx import AsyncClient

from app.models import SensorReading


@pytest.mark.api
@pytest.mark.asyncio
class TestStorageUnits:

    async def test_create(self, client: AsyncClient):
        resp = await client.post(
            "/api/storage-units/",
            json={"name": "Reefer 3", "type": "Truck", "location": "Harbour"},
        )

        assert resp.status_code == 201
        assert resp.json()["type"] == "Truck"

    async def test_unknown_type_rejected(self, client: AsyncClient):
        resp = await client.post(
            "/api/storage-units/",
            json={"name": "Boat", "type": "Ship", "location": "Sea"},
        )

        assert resp.status_code == 422

    async def test_list_by_type(self, client: AsyncClient, truck, cold_room):
        resp = await client.get("/api/storage-units/type/Cold Room")

        assert resp.status_code == 200
        assert [u["name"] for u in resp.json()] == ["Cold Room B"]

    async def test_temperatures_include_units_without_readings(
        self, client: AsyncClient, db_session, truck, cold_room
    ):
        db_session.add_all([
            SensorReading(storage_unit_id=truck.id, temperature=3.0, humidity=50),
            SensorReading(storage_unit_id=truck.id, temperature=4.0, humidity=50),
        ])
        await db_session.flush()

        resp = await client.get("/api/storage-units/temperatures")

        assert resp.status_code == 200
        rows = {r["name"]: r for r in resp.json()}
        assert rows["Truck 7"]["avg_temp"] == 3.5
        assert rows["Truck 7"]["reading_count"] == 2
        assert rows["Cold Room B"]["avg_temp"] is None
        assert rows["Cold Room B"]["reading_count"] == 0

    async def test_patch(self, client: AsyncClient, truck):
        resp = await client.patch(
            f"/api/storage-units/{truck.id}", json={"location": "Depot 2", "type": "Warehouse"}
        )

        assert resp.status_code == 200
        assert resp.json()["location"] == "Depot 2"
        assert resp.json()["type"] == "Warehouse"

    async def test_delete_unit_with_readings_conflicts(
        self, client: AsyncClient, db_session, cold_room
    ):
        db_session.add(SensorReading(storage_unit_id=cold_room.id, temperature=-20.0))
        await db_session.flush()

        resp = await client.delete(f"/api/storage-units/{cold_room.id}")

        assert resp.status_code == 409

    async def test_delete_unused_unit(self, client: AsyncClient, cold_room):
        resp = await client.delete(f"/api/storage-units/{cold_room.id}")
        assert resp.status_code == 204

    async def test_missing_unit_is_404(self, client: AsyncClient):
        resp = await client.get("/api/storage-units/nope")
        assert resp.status_code == 404
