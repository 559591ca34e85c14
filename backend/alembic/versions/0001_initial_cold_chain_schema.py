"""Initial cold-chain schema: products, storage, shipments, readings, alerts, users.

Revision ID: 0001
Revises: (none)
Create Date: 2026-10-18

Run with:
    alembic upgrade head
"""

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

from alembic import op
import sqlalchemy as sa


def upgrade() -> None:
    # ── Reference data ───────────────────────────────────────

    op.create_table(
        "products",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("batch_no", sa.String(100)),
        sa.Column("expiry_date", sa.Date()),
        sa.Column("min_temp", sa.Float(), nullable=False),
        sa.Column("max_temp", sa.Float(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.CheckConstraint("min_temp <= max_temp", name="ck_products_temp_range"),
    )
    op.create_index("ix_products_name", "products", ["name"])
    op.create_index("ix_products_expiry_date", "products", ["expiry_date"])

    op.create_table(
        "storage_units",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("type", sa.String(30), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_storage_units_name", "storage_units", ["name"])
    op.create_index("ix_storage_units_type", "storage_units", ["type"])

    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(20), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_users_phone", "users", ["phone"], unique=True)

    # ── Shipments ────────────────────────────────────────────

    op.create_table(
        "shipments",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("shipment_code", sa.String(50), unique=True),
        sa.Column("product_id", sa.String(36), sa.ForeignKey("products.id"), nullable=False),
        sa.Column(
            "storage_unit_id", sa.String(36), sa.ForeignKey("storage_units.id"), nullable=False
        ),
        sa.Column("origin", sa.String(255)),
        sa.Column("destination", sa.String(255)),
        sa.Column("status", sa.String(20), server_default="In Transit"),
        sa.Column("departure_time", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("arrival_time", sa.DateTime()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_shipments_product_id", "shipments", ["product_id"])
    op.create_index("ix_shipments_storage_unit_id", "shipments", ["storage_unit_id"])
    op.create_index("ix_shipments_status", "shipments", ["status"])
    op.create_index("ix_shipments_departure_time", "shipments", ["departure_time"])

    # ── Telemetry ────────────────────────────────────────────

    op.create_table(
        "sensor_readings",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "storage_unit_id", sa.String(36), sa.ForeignKey("storage_units.id"), nullable=False
        ),
        sa.Column("temperature", sa.Float(), nullable=False),
        sa.Column("humidity", sa.Float()),
        sa.Column("recorded_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_sensor_readings_storage_unit_id", "sensor_readings", ["storage_unit_id"])
    op.create_index("ix_sensor_readings_recorded_at", "sensor_readings", ["recorded_at"])

    op.create_table(
        "alerts",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "sensor_reading_id", sa.String(36), sa.ForeignKey("sensor_readings.id"), nullable=True
        ),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_alerts_sensor_reading_id", "alerts", ["sensor_reading_id"])
    op.create_index("ix_alerts_created_at", "alerts", ["created_at"])


def downgrade() -> None:
    op.drop_table("alerts")
    op.drop_table("sensor_readings")
    op.drop_table("shipments")
    op.drop_table("users")
    op.drop_table("storage_units")
    op.drop_table("products")
