"""Domain enumerations and state-transition rules."""

import enum

from .errors import InvalidFieldValue


class TripStatus(str, enum.Enum):
    PLANNED = "PLANNED"
    REJECTED = "REJECTED"
    COMPLETED = "COMPLETED"


# State machine: maps current status -> set of valid next statuses
TRIP_TRANSITIONS: dict[TripStatus, set[TripStatus]] = {
    TripStatus.PLANNED: {TripStatus.COMPLETED, TripStatus.REJECTED},
    TripStatus.REJECTED: set(),
    TripStatus.COMPLETED: set(),
}


class TripType(str, enum.Enum):
    PASSENGER = "PASSENGER"
    CARGO = "CARGO"


class VehicleType(str, enum.Enum):
    PASSENGER_CAR = "PASSENGER_CAR"  # capacity in seats
    CARGO_TRUCK = "CARGO_TRUCK"  # capacity in kg


VEHICLE_TYPE_FOR_TRIP: dict[TripType, VehicleType] = {
    TripType.PASSENGER: VehicleType.PASSENGER_CAR,
    TripType.CARGO: VehicleType.CARGO_TRUCK,
}


def parse_trip_type(label: str) -> TripType:
    """Turn an external label (``"cargo"``, ``"PASSENGER"``) into a TripType."""
    try:
        return TripType(label.strip().upper())
    except (AttributeError, ValueError):
        raise InvalidFieldValue("trip_type", f"unknown trip type {label!r}") from None
