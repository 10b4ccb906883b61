"""
Shared test fixtures.

Uses a temporary SQLite file (via aiosqlite) so tests run without
PostgreSQL.  SQLite ignores ``FOR UPDATE``, so every transaction is opened
with ``BEGIN IMMEDIATE``: the database-wide write lock serialises concurrent
units of work the way the vehicle row locks do in production.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import AsyncGenerator, Optional

import pytest_asyncio
from sqlalchemy import event, func, select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.domain.entities import TripRequest
from src.domain.enums import TripType, VehicleType
from src.infrastructure.database import Base
from src.infrastructure.models import CustomerModel, TripModel, VehicleModel
from src.services.reservation_engine import ReservationEngine

TOMORROW = date.today() + timedelta(days=1)


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def db_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Create the schema in a fresh database file, dispose afterwards."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'transport.db'}", echo=False
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    factory = async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with factory() as session:
        session.add(CustomerModel(name="Test Customer", email="test@example.com"))
        await session.commit()
    return factory


@pytest_asyncio.fixture
async def reservation_engine(session_factory) -> ReservationEngine:
    return ReservationEngine(session_factory)


# ── Helpers ───────────────────────────────────────────────────────────


def passenger_request(passengers: int, distance_km: int = 100) -> TripRequest:
    return TripRequest(
        customer_id=1,
        trip_date=TOMORROW,
        trip_type=TripType.PASSENGER,
        distance_km=distance_km,
        passenger_count=passengers,
    )


def cargo_request(weight_kg: int, distance_km: int = 60) -> TripRequest:
    return TripRequest(
        customer_id=1,
        trip_date=TOMORROW,
        trip_type=TripType.CARGO,
        distance_km=distance_km,
        weight_kg=weight_kg,
    )


async def add_vehicle(
    factory: async_sessionmaker[AsyncSession],
    vehicle_type: VehicleType,
    capacity: int,
    *,
    is_available: bool = True,
    odometer_km: int = 0,
    wear_percent: Decimal = Decimal(0),
) -> int:
    async with factory() as session:
        row = VehicleModel(
            vehicle_type=vehicle_type,
            capacity=capacity,
            odometer_km=odometer_km,
            wear_percent=wear_percent,
            is_available=is_available,
        )
        session.add(row)
        await session.commit()
        return row.id


async def load_vehicle(
    factory: async_sessionmaker[AsyncSession], vehicle_id: int
) -> Optional[VehicleModel]:
    async with factory() as session:
        return await session.get(VehicleModel, vehicle_id)


async def load_trip(
    factory: async_sessionmaker[AsyncSession], trip_id: int
) -> Optional[TripModel]:
    async with factory() as session:
        return await session.get(TripModel, trip_id)


async def count_trips(factory: async_sessionmaker[AsyncSession]) -> int:
    async with factory() as session:
        result = await session.execute(select(func.count()).select_from(TripModel))
        return result.scalar() or 0
