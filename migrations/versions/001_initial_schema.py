"""Initial schema: customers, vehicles and trips.

Revision ID: 001
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # ── customers ─────────────────────────────────────────────────────
    op.create_table(
        "customers",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("email", sa.String(255), unique=True, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )

    # ── vehicles ──────────────────────────────────────────────────────
    op.create_table(
        "vehicles",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "vehicle_type",
            sa.Enum("PASSENGER_CAR", "CARGO_TRUCK", name="vehicletype"),
            nullable=False,
        ),
        sa.Column("capacity", sa.Integer, nullable=False),
        sa.Column("odometer_km", sa.Integer, default=0, nullable=False),
        sa.Column("wear_percent", sa.Numeric(20, 12), default=0, nullable=False),
        sa.Column("is_available", sa.Boolean, default=True, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint("capacity > 0", name="ck_vehicles_capacity_positive"),
        sa.CheckConstraint("odometer_km >= 0", name="ck_vehicles_odometer"),
        sa.CheckConstraint("wear_percent >= 0", name="ck_vehicles_wear"),
    )
    op.create_index(
        "idx_vehicles_eligible",
        "vehicles",
        ["vehicle_type", "is_available", "capacity"],
    )

    # ── trips ─────────────────────────────────────────────────────────
    op.create_table(
        "trips",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "customer_id",
            sa.Integer,
            sa.ForeignKey("customers.id"),
            nullable=False,
        ),
        sa.Column(
            "vehicle_id", sa.Integer, sa.ForeignKey("vehicles.id"), nullable=True
        ),
        sa.Column("trip_date", sa.Date, nullable=False),
        sa.Column(
            "trip_type",
            sa.Enum("PASSENGER", "CARGO", name="triptype"),
            nullable=False,
        ),
        sa.Column("distance_km", sa.Integer, nullable=False),
        sa.Column("passenger_count", sa.Integer, nullable=True),
        sa.Column("weight_kg", sa.Integer, nullable=True),
        sa.Column("price", sa.Numeric(12, 2), default=0, nullable=False),
        sa.Column(
            "status",
            sa.Enum("PLANNED", "REJECTED", "COMPLETED", name="tripstatus"),
            default="PLANNED",
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint("distance_km > 0", name="ck_trips_distance_positive"),
        sa.CheckConstraint("price >= 0", name="ck_trips_price"),
    )
    op.create_index("idx_trips_status", "trips", ["status"])
    op.create_index("idx_trips_customer", "trips", ["customer_id"])
    op.create_index("idx_trips_vehicle", "trips", ["vehicle_id"])


def downgrade() -> None:
    op.drop_table("trips")
    op.drop_table("vehicles")
    op.drop_table("customers")
    op.execute("DROP TYPE IF EXISTS tripstatus")
    op.execute("DROP TYPE IF EXISTS triptype")
    op.execute("DROP TYPE IF EXISTS vehicletype")
