"""Tests for the breach evaluator (context resolution, rule, alert creation)."""

import logging
from datetime import datetime, timedelta

import pytest
from sqlalchemy import func, select

from app.config import settings
from app.models import Alert, Product, SensorReading, Shipment, ShipmentStatus
from app.services.breach import (
    BreachContext,
    evaluate_reading,
    format_breach_message,
    is_breach,
    resolve_context,
)


async def _reading(db, unit, temperature):
    reading = SensorReading(storage_unit_id=unit.id, temperature=temperature, humidity=50.0)
    db.add(reading)
    await db.flush()
    return reading


@pytest.mark.unit
class TestBreachRule:

    @pytest.mark.parametrize(
        "temperature,expected",
        [
            (1.9, True),
            (2.0, False),
            (5.0, False),
            (8.0, False),
            (8.1, True),
            (-40.0, True),
        ],
    )
    def test_bounds_are_inclusive(self, temperature, expected):
        assert is_breach(temperature, 2.0, 8.0) is expected

    def test_message_format(self):
        ctx = BreachContext(
            shipment_id="s1",
            product_name="Vaccine X",
            min_temp=2.0,
            max_temp=8.0,
            storage_unit_name="Truck 7",
        )
        assert format_breach_message(9.5, ctx) == (
            "Temperature breach in Truck 7 (reading: 9.5°C, "
            "safe range: 2°C to 8°C) for product Vaccine X"
        )

    def test_message_negative_range(self):
        ctx = BreachContext("s1", "Ice Cream", -25.0, -18.0, "Cold Room B")
        assert "(reading: -15°C, safe range: -25°C to -18°C)" in format_breach_message(-15.0, ctx)


@pytest.mark.asyncio
class TestResolveContext:

    async def test_no_shipment_means_no_context(self, db_session, truck):
        assert await resolve_context(db_session, truck.id) is None

    async def test_delivered_shipment_is_ignored(self, db_session, in_transit_shipment, truck):
        in_transit_shipment.status = ShipmentStatus.DELIVERED.value
        await db_session.flush()

        assert await resolve_context(db_session, truck.id) is None

    async def test_in_transit_shipment_supplies_range(self, db_session, in_transit_shipment, truck):
        ctx = await resolve_context(db_session, truck.id)

        assert ctx is not None
        assert ctx.shipment_id == in_transit_shipment.id
        assert ctx.product_name == "Vaccine X"
        assert (ctx.min_temp, ctx.max_temp) == (2.0, 8.0)
        assert ctx.storage_unit_name == "Truck 7"

    async def test_other_units_shipment_does_not_apply(
        self, db_session, in_transit_shipment, cold_room
    ):
        assert await resolve_context(db_session, cold_room.id) is None

    async def test_latest_departure_wins(self, db_session, in_transit_shipment, truck):
        frozen = Product(name="Frozen Peas", min_temp=-20.0, max_temp=-15.0)
        db_session.add(frozen)
        await db_session.flush()
        newer = Shipment(
            product_id=frozen.id,
            storage_unit_id=truck.id,
            status=ShipmentStatus.IN_TRANSIT.value,
            departure_time=datetime.utcnow() - timedelta(minutes=5),
        )
        db_session.add(newer)
        await db_session.flush()

        ctx = await resolve_context(db_session, truck.id)

        assert ctx.shipment_id == newer.id
        assert ctx.product_name == "Frozen Peas"

    async def test_equal_departure_falls_back_to_created_at(self, db_session, vaccine, truck):
        departed = datetime.utcnow() - timedelta(hours=1)
        first = Shipment(
            product_id=vaccine.id,
            storage_unit_id=truck.id,
            status=ShipmentStatus.IN_TRANSIT.value,
            departure_time=departed,
            created_at=datetime.utcnow() - timedelta(minutes=30),
        )
        second = Shipment(
            product_id=vaccine.id,
            storage_unit_id=truck.id,
            status=ShipmentStatus.IN_TRANSIT.value,
            departure_time=departed,
            created_at=datetime.utcnow(),
        )
        db_session.add_all([first, second])
        await db_session.flush()

        ctx = await resolve_context(db_session, truck.id)

        assert ctx.shipment_id == second.id


@pytest.mark.asyncio
class TestEvaluateReading:

    async def test_breach_creates_alert(self, db_session, in_transit_shipment, truck):
        reading = await _reading(db_session, truck, 9.5)

        alert = await evaluate_reading(db_session, reading)

        assert alert is not None
        assert alert.sensor_reading_id == reading.id
        assert alert.message == (
            "Temperature breach in Truck 7 (reading: 9.5°C, "
            "safe range: 2°C to 8°C) for product Vaccine X"
        )

    async def test_in_range_creates_nothing(self, db_session, in_transit_shipment, truck):
        reading = await _reading(db_session, truck, 5.0)

        assert await evaluate_reading(db_session, reading) is None
        assert await db_session.scalar(select(func.count(Alert.id))) == 0

    async def test_no_context_creates_nothing(self, db_session, truck):
        reading = await _reading(db_session, truck, 99.0)

        assert await evaluate_reading(db_session, reading) is None

    async def test_every_breach_alerts_without_cooldown(
        self, db_session, in_transit_shipment, truck
    ):
        for temperature in (9.0, 10.0):
            reading = await _reading(db_session, truck, temperature)
            assert await evaluate_reading(db_session, reading) is not None

        assert await db_session.scalar(select(func.count(Alert.id))) == 2

    async def test_cooldown_suppresses_repeat(
        self, db_session, in_transit_shipment, truck, monkeypatch
    ):
        monkeypatch.setattr(settings, "alert_cooldown_seconds", 300)

        first = await evaluate_reading(db_session, await _reading(db_session, truck, 9.0))
        second = await evaluate_reading(db_session, await _reading(db_session, truck, 10.0))

        assert first is not None
        assert second is None
        assert await db_session.scalar(select(func.count(Alert.id))) == 1

    async def test_breach_logged_with_context(
        self, db_session, in_transit_shipment, truck, caplog
    ):
        reading = await _reading(db_session, truck, 20.0)

        with caplog.at_level(logging.WARNING, logger="coldchain.breach"):
            alert = await evaluate_reading(db_session, reading)

        [record] = [r for r in caplog.records if r.name == "coldchain.breach"]
        assert record.getMessage() == alert.message
        assert record.storage_unit_id == truck.id
        assert record.shipment_id == in_transit_shipment.id
        assert record.alert_id == alert.id
