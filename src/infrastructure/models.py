"""
SQLAlchemy ORM models  (maps to PostgreSQL).

Tables
------
* ``customers``  -- people who book trips
* ``vehicles``   -- passenger cars and cargo trucks with capacity, mileage
  and depreciation
* ``trips``      -- booked trips, planned, rejected or completed

Indexes
-------
* **Composite B-Tree** on ``vehicles (vehicle_type, is_available, capacity)``
  backing the eligibility scan that the planner locks.
* **B-Tree** on ``trips.status``, ``trips.customer_id``, ``trips.vehicle_id``.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    func,
)

from .database import Base
from src.domain.enums import TripStatus, TripType, VehicleType


class CustomerModel(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class VehicleModel(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle_type = Column(Enum(VehicleType), nullable=False)
    capacity = Column(Integer, nullable=False)  # seats or kg
    odometer_km = Column(Integer, default=0, nullable=False)
    wear_percent = Column(Numeric(20, 12), default=0, nullable=False)
    is_available = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_vehicles_capacity_positive"),
        CheckConstraint("odometer_km >= 0", name="ck_vehicles_odometer"),
        CheckConstraint("wear_percent >= 0", name="ck_vehicles_wear"),
        Index("idx_vehicles_eligible", "vehicle_type", "is_available", "capacity"),
    )


class TripModel(Base):
    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)
    # NULL for rejected trips
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=True)
    trip_date = Column(Date, nullable=False)
    trip_type = Column(Enum(TripType), nullable=False)
    distance_km = Column(Integer, nullable=False)
    passenger_count = Column(Integer, nullable=True)
    weight_kg = Column(Integer, nullable=True)
    price = Column(Numeric(12, 2), default=0, nullable=False)
    status = Column(Enum(TripStatus), default=TripStatus.PLANNED, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        CheckConstraint("distance_km > 0", name="ck_trips_distance_positive"),
        CheckConstraint("price >= 0", name="ck_trips_price"),
        Index("idx_trips_status", "status"),
        Index("idx_trips_customer", "customer_id"),
        Index("idx_trips_vehicle", "vehicle_id"),
    )
