"""
Repository Pattern -- abstracts DB access so domain logic stays DB-agnostic.

Each repository receives an ``AsyncSession`` (unit-of-work) owned by the
caller and exposes domain-relevant queries only.  Rows are translated to
frozen domain entities on the way out; repositories never commit.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .models import TripModel, VehicleModel
from src.domain.entities import Trip, Vehicle
from src.domain.enums import VEHICLE_TYPE_FOR_TRIP, TripType


def _to_vehicle(row: VehicleModel) -> Vehicle:
    return Vehicle(
        id=row.id,
        vehicle_type=row.vehicle_type,
        capacity=row.capacity,
        odometer_km=row.odometer_km,
        wear_percent=row.wear_percent,
        is_available=row.is_available,
    )


def _to_trip(row: TripModel) -> Trip:
    return Trip(
        id=row.id,
        customer_id=row.customer_id,
        vehicle_id=row.vehicle_id,
        trip_date=row.trip_date,
        trip_type=row.trip_type,
        distance_km=row.distance_km,
        passenger_count=row.passenger_count,
        weight_kg=row.weight_kg,
        status=row.status,
        price=row.price,
    )


class VehicleRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_eligible(
        self, trip_type: TripType, required_capacity: int
    ) -> list[Vehicle]:
        """SELECT ... FOR UPDATE over every available vehicle that fits.

        Ordered by id so first-fit is reproducible.  The locks are held
        until the caller's transaction ends.
        """
        result = await self.session.execute(
            select(VehicleModel)
            .where(
                VehicleModel.vehicle_type == VEHICLE_TYPE_FOR_TRIP[trip_type],
                VehicleModel.capacity >= required_capacity,
                VehicleModel.is_available.is_(True),
            )
            .order_by(VehicleModel.id)
            .with_for_update()
        )
        return [_to_vehicle(row) for row in result.scalars().all()]

    async def get_for_update(self, vehicle_id: int) -> Optional[Vehicle]:
        result = await self.session.execute(
            select(VehicleModel)
            .where(VehicleModel.id == vehicle_id)
            .with_for_update()
        )
        row = result.scalar_one_or_none()
        return _to_vehicle(row) if row is not None else None

    async def list_all(self) -> list[Vehicle]:
        result = await self.session.execute(
            select(VehicleModel).order_by(VehicleModel.id)
        )
        return [_to_vehicle(row) for row in result.scalars().all()]

    async def save(self, vehicle: Vehicle) -> None:
        await self.session.execute(
            update(VehicleModel)
            .where(VehicleModel.id == vehicle.id)
            .values(
                odometer_km=vehicle.odometer_km,
                wear_percent=vehicle.wear_percent,
                is_available=vehicle.is_available,
            )
        )


class TripRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert(self, trip: Trip) -> int:
        row = TripModel(
            customer_id=trip.customer_id,
            vehicle_id=trip.vehicle_id,
            trip_date=trip.trip_date,
            trip_type=trip.trip_type,
            distance_km=trip.distance_km,
            # absent capacity figures are stored as NULL, never 0
            passenger_count=trip.passenger_count,
            weight_kg=trip.weight_kg,
            price=trip.price,
            status=trip.status,
        )
        self.session.add(row)
        await self.session.flush()
        return row.id

    async def find_by_id(self, trip_id: int, *, lock: bool = False) -> Optional[Trip]:
        query = select(TripModel).where(TripModel.id == trip_id)
        if lock:
            query = query.with_for_update()
        result = await self.session.execute(query)
        row = result.scalar_one_or_none()
        return _to_trip(row) if row is not None else None

    async def update_price_and_status(self, trip: Trip) -> None:
        await self.session.execute(
            update(TripModel)
            .where(TripModel.id == trip.id)
            .values(price=trip.price, status=trip.status)
        )
