"""
Domain entities with business logic.

Patterns used
-------------
- **Value objects**: ``Vehicle`` and ``Trip`` are frozen; every state change
  returns a new instance, so an entity loaded inside one transaction is never
  shared with another.
- **State Pattern** on ``Trip``: enforces valid lifecycle transitions
  (PLANNED -> COMPLETED | REJECTED).
- ``Vehicle.advance`` encapsulates the mileage & depreciation rules.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Optional

from .enums import (
    TRIP_TRANSITIONS,
    TripStatus,
    TripType,
    VehicleType,
)
from .errors import InvalidFieldValue, InvalidStateTransition

# Kilometres per 1 % of depreciation
WEAR_KM_PER_PERCENT: dict[VehicleType, Decimal] = {
    VehicleType.PASSENGER_CAR: Decimal(2000),
    VehicleType.CARGO_TRUCK: Decimal(3000),
}
OVERLOAD_RATIO = Decimal("0.9")
OVERLOAD_WEAR_PERCENT = Decimal("0.5")


def _require_positive(field: str, value: Optional[int]) -> None:
    if value is None or value <= 0:
        raise InvalidFieldValue(field, f"must be positive, got {value!r}")


# ── Vehicle ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Vehicle:
    id: Optional[int]
    vehicle_type: VehicleType
    capacity: int
    odometer_km: int = 0
    wear_percent: Decimal = Decimal(0)
    is_available: bool = True

    def __post_init__(self) -> None:
        _require_positive("capacity", self.capacity)
        if self.odometer_km < 0:
            raise InvalidFieldValue("odometer_km", "must not be negative")
        if self.wear_percent < 0:
            raise InvalidFieldValue("wear_percent", "must not be negative")

    def reserve(self) -> Vehicle:
        if not self.is_available:
            raise InvalidStateTransition(f"Vehicle {self.id} is not available")
        return replace(self, is_available=False)

    def release(self) -> Vehicle:
        return replace(self, is_available=True)

    def advance(self, distance_km: int, load_kg: Optional[int] = None) -> Vehicle:
        """
        Drive *distance_km* and accrue depreciation.

        Passenger cars lose 1 % per 2000 km, cargo trucks 1 % per 3000 km.
        A cargo truck loaded above 90 % of its capacity takes a flat extra
        0.5 %.  *load_kg* is ignored for passenger cars.
        """
        _require_positive("distance_km", distance_km)
        km_per_percent = WEAR_KM_PER_PERCENT[self.vehicle_type]
        wear = self.wear_percent + Decimal(distance_km) / km_per_percent
        if (
            self.vehicle_type == VehicleType.CARGO_TRUCK
            and load_kg is not None
            and load_kg > self.capacity * OVERLOAD_RATIO
        ):
            wear += OVERLOAD_WEAR_PERCENT
        return replace(
            self, odometer_km=self.odometer_km + distance_km, wear_percent=wear
        )


# ── Trips ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TripRequest:
    customer_id: int
    trip_date: date
    trip_type: TripType
    distance_km: int
    passenger_count: Optional[int] = None
    weight_kg: Optional[int] = None

    @property
    def required_capacity(self) -> int:
        if self.trip_type == TripType.PASSENGER:
            return self.passenger_count or 0
        return self.weight_kg or 0


@dataclass(frozen=True)
class Trip:
    id: Optional[int]
    customer_id: int
    vehicle_id: Optional[int]
    trip_date: date
    trip_type: TripType
    distance_km: int
    passenger_count: Optional[int] = None
    weight_kg: Optional[int] = None
    status: TripStatus = TripStatus.PLANNED
    price: Decimal = Decimal(0)

    def __post_init__(self) -> None:
        _require_positive("distance_km", self.distance_km)
        if self.price < 0:
            raise InvalidFieldValue("price", "must not be negative")

    @classmethod
    def from_request(
        cls,
        request: TripRequest,
        vehicle_id: Optional[int] = None,
        price: Decimal = Decimal(0),
    ) -> Trip:
        return cls(
            id=None,
            customer_id=request.customer_id,
            vehicle_id=vehicle_id,
            trip_date=request.trip_date,
            trip_type=request.trip_type,
            distance_km=request.distance_km,
            passenger_count=request.passenger_count,
            weight_kg=request.weight_kg,
            price=price,
        )

    @property
    def load_kg(self) -> Optional[int]:
        """Cargo weight that counts towards overload wear; None for passengers."""
        return self.weight_kg if self.trip_type == TripType.CARGO else None

    def transition_to(self, new_status: TripStatus) -> Trip:
        """Return a copy in *new_status* if the transition is legal, else raise."""
        allowed = TRIP_TRANSITIONS.get(self.status, set())
        if new_status not in allowed:
            raise InvalidStateTransition(
                f"Cannot transition trip {self.id} from {self.status.value} "
                f"to {new_status.value}"
            )
        return replace(self, status=new_status)
