"""
Seed script -- populates the database with sample data for reviewers.

Run after migrations:
    python seed.py

Creates:
  - 5 sample customers
  - 8 sample vehicles (passenger cars by seats, cargo trucks by kg)

Vehicles are created out-of-band here; the API never creates them.
"""

import asyncio

from sqlalchemy import text

from src.domain.entities import Vehicle
from src.domain.enums import VehicleType
from src.infrastructure.database import async_session_factory, engine
from src.infrastructure.models import CustomerModel, VehicleModel


CUSTOMERS = [
    {"name": "Sanne de Vries", "email": "sanne@example.com"},
    {"name": "Daan Jansen", "email": "daan@example.com"},
    {"name": "Emma Bakker", "email": "emma@example.com"},
    {"name": "Lucas Visser", "email": "lucas@example.com"},
    {"name": "Julia Smit", "email": "julia@example.com"},
]

VEHICLES = [
    # Passenger cars (capacity = seats)
    Vehicle(id=None, vehicle_type=VehicleType.PASSENGER_CAR, capacity=4),
    Vehicle(id=None, vehicle_type=VehicleType.PASSENGER_CAR, capacity=4, odometer_km=12_500),
    Vehicle(id=None, vehicle_type=VehicleType.PASSENGER_CAR, capacity=5),
    Vehicle(id=None, vehicle_type=VehicleType.PASSENGER_CAR, capacity=8, odometer_km=40_000),
    # Cargo trucks (capacity = kg)
    Vehicle(id=None, vehicle_type=VehicleType.CARGO_TRUCK, capacity=1_000),
    Vehicle(id=None, vehicle_type=VehicleType.CARGO_TRUCK, capacity=3_500),
    Vehicle(id=None, vehicle_type=VehicleType.CARGO_TRUCK, capacity=7_500, odometer_km=88_000),
    Vehicle(id=None, vehicle_type=VehicleType.CARGO_TRUCK, capacity=18_000),
]


async def seed():
    async with async_session_factory() as session:
        # Check if already seeded
        result = await session.execute(text("SELECT count(*) FROM vehicles"))
        if result.scalar() > 0:
            print("Database already seeded. Skipping.")
            return

        # ── Customers ─────────────────────────────────────────────────
        for c in CUSTOMERS:
            session.add(CustomerModel(name=c["name"], email=c["email"]))
        await session.flush()
        print(f"  Created {len(CUSTOMERS)} customers")

        # ── Vehicles ──────────────────────────────────────────────────
        for v in VEHICLES:
            session.add(
                VehicleModel(
                    vehicle_type=v.vehicle_type,
                    capacity=v.capacity,
                    odometer_km=v.odometer_km,
                    wear_percent=v.wear_percent,
                    is_available=v.is_available,
                )
            )
        await session.flush()
        print(f"  Created {len(VEHICLES)} vehicles")

        await session.commit()
        print("\nSeed complete!")


async def main():
    print("Seeding database...")
    await seed()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
