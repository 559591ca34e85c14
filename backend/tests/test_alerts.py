"""Alert endpoint tests."""

from datetime import datetime, timedelta

import pytest
from httpx import AsyncClient

from app.models import Alert, SensorReading


async def _breach(client: AsyncClient, unit_id: str, temperature: float = 15.0) -> dict:
    resp = await client.post(
        "/api/sensor-data/",
        json={"storage_unit_id": unit_id, "temperature": temperature, "humidity": 50},
    )
    assert resp.status_code == 201
    return resp.json()


@pytest.mark.api
@pytest.mark.asyncio
class TestAlerts:

    async def test_list_joins_storage_details(self, client: AsyncClient, in_transit_shipment, truck):
        await _breach(client, truck.id)

        resp = await client.get("/api/alerts/")

        assert resp.status_code == 200
        [alert] = resp.json()
        assert alert["storage_unit_id"] == truck.id
        assert alert["storage_unit_name"] == "Truck 7"
        assert alert["storage_type"] == "Truck"

    async def test_list_respects_limit(self, client: AsyncClient, in_transit_shipment, truck):
        for temperature in (10, 11, 12):
            await _breach(client, truck.id, temperature)

        resp = await client.get("/api/alerts/", params={"limit": 2})

        assert len(resp.json()) == 2

    async def test_recent_excludes_old_alerts(self, client: AsyncClient, db_session):
        db_session.add_all([
            Alert(message="old", created_at=datetime.utcnow() - timedelta(hours=30)),
            Alert(message="new", created_at=datetime.utcnow() - timedelta(hours=1)),
        ])
        await db_session.flush()

        resp = await client.get("/api/alerts/recent")

        assert [a["message"] for a in resp.json()] == ["new"]

    async def test_alerts_for_storage(
        self, client: AsyncClient, in_transit_shipment, truck, cold_room
    ):
        await _breach(client, truck.id)

        resp = await client.get(f"/api/alerts/storage/{truck.id}")
        assert len(resp.json()) == 1

        resp = await client.get(f"/api/alerts/storage/{cold_room.id}")
        assert resp.json() == []

    async def test_most_alert_prone(
        self, client: AsyncClient, db_session, in_transit_shipment, truck, cold_room
    ):
        await _breach(client, truck.id, 10)
        await _breach(client, truck.id, 11)
        reading = SensorReading(storage_unit_id=cold_room.id, temperature=-5.0)
        db_session.add(reading)
        await db_session.flush()
        db_session.add(Alert(sensor_reading_id=reading.id, message="door open"))
        await db_session.flush()

        resp = await client.get("/api/alerts/most-alert-prone")

        assert resp.json() == [
            {"storage_unit_id": truck.id, "storage_unit_name": "Truck 7", "total_alerts": 2},
            {"storage_unit_id": cold_room.id, "storage_unit_name": "Cold Room B", "total_alerts": 1},
        ]

    async def test_manual_alert_without_reading(self, client: AsyncClient):
        resp = await client.post("/api/alerts/", json={"message": "Compressor noise"})

        assert resp.status_code == 201
        alert_id = resp.json()["id"]

        resp = await client.get(f"/api/alerts/{alert_id}")
        assert resp.status_code == 200
        assert resp.json()["sensor_reading_id"] is None
        assert resp.json()["storage_unit_name"] is None

    async def test_manual_alert_with_unknown_reading_is_404(self, client: AsyncClient):
        resp = await client.post(
            "/api/alerts/", json={"message": "x", "sensor_reading_id": "missing"}
        )
        assert resp.status_code == 404

    async def test_empty_message_rejected(self, client: AsyncClient):
        resp = await client.post("/api/alerts/", json={"message": ""})
        assert resp.status_code == 422

    async def test_delete(self, client: AsyncClient, in_transit_shipment, truck):
        alert_id = (await _breach(client, truck.id))["alert"]["id"]

        resp = await client.delete(f"/api/alerts/{alert_id}")
        assert resp.status_code == 204

        resp = await client.get(f"/api/alerts/{alert_id}")
        assert resp.status_code == 404
