"""
Reservation Engine
==================

Plans and completes trips.  Each public call is one unit of work: it opens
its own session, runs a single transaction across the vehicle and trip
tables, and either commits everything or rolls everything back.

Concurrency safety
------------------
* **SELECT … FOR UPDATE** on the eligible ``vehicles`` rows during planning:
  a concurrent planner blocks until we commit and then no longer sees the
  vehicle as available, so a vehicle is never booked twice.
* **SELECT … FOR UPDATE** on the ``trips`` row and then the ``vehicles`` row
  during completion, so a completion never races an uncommitted reservation
  and a trip is never completed twice.

No vehicle available
--------------------
Planning persists a ``REJECTED`` trip (no vehicle, price 0) and returns
``Unassigned``; it never raises for this case.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, replace
from typing import Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.domain.entities import Trip, TripRequest
from src.domain.enums import TripStatus, TripType, parse_trip_type
from src.domain.errors import InvalidFieldValue, InvalidStateTransition
from src.domain.pricing import PricingEngine
from src.infrastructure.repositories import TripRepository, VehicleRepository

logger = logging.getLogger(__name__)


# ── Results ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Assigned:
    """A vehicle was reserved; ``trip`` is the persisted PLANNED trip."""

    trip: Trip


@dataclass(frozen=True)
class Unassigned:
    """No vehicle fits; ``trip`` is the persisted REJECTED trip."""

    trip: Trip


PlanningOutcome = Union[Assigned, Unassigned]


class CompletionOutcome(str, enum.Enum):
    COMPLETED = "COMPLETED"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class Completion:
    """``trip`` is the COMPLETED trip as committed; None when not found."""

    outcome: CompletionOutcome
    trip: Optional[Trip] = None


# ── Validation ────────────────────────────────────────────────────────


def validate_request(request: TripRequest) -> TripRequest:
    """Reject malformed requests before a transaction is opened.

    Returns the request with its trip type normalised to a ``TripType``.
    """
    request = replace(request, trip_type=parse_trip_type(request.trip_type))
    if request.distance_km is None or request.distance_km <= 0:
        raise InvalidFieldValue("distance_km", "must be positive")
    field = (
        "passenger_count" if request.trip_type == TripType.PASSENGER else "weight_kg"
    )
    if request.required_capacity <= 0:
        raise InvalidFieldValue(field, "must be positive")
    return request


# ── Engine ────────────────────────────────────────────────────────────


class ReservationEngine:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        pricing: Optional[PricingEngine] = None,
    ):
        self.session_factory = session_factory
        self.pricing = pricing or PricingEngine()

    async def plan(self, request: TripRequest) -> PlanningOutcome:
        """Reserve the first fitting vehicle and persist the trip."""
        request = validate_request(request)

        async with self.session_factory() as session:
            try:
                vehicles = VehicleRepository(session)
                trips = TripRepository(session)

                candidates = await vehicles.find_eligible(
                    request.trip_type, request.required_capacity
                )
                if not candidates:
                    trip = Trip.from_request(request).transition_to(
                        TripStatus.REJECTED
                    )
                    trip = replace(trip, id=await trips.insert(trip))
                    await session.commit()
                    logger.info(
                        "Trip %d rejected: no %s vehicle for capacity %d",
                        trip.id,
                        request.trip_type.value,
                        request.required_capacity,
                    )
                    return Unassigned(trip)

                # First fit
                vehicle = candidates[0].reserve()
                await vehicles.save(vehicle)

                trip = Trip.from_request(
                    request,
                    vehicle_id=vehicle.id,
                    price=self.pricing.calculate_price(
                        request.trip_type, request.distance_km
                    ),
                )
                trip = replace(trip, id=await trips.insert(trip))
                await session.commit()
            except Exception:
                await session.rollback()
                logger.exception(
                    "Planning rolled back for customer %d", request.customer_id
                )
                raise

        logger.info(
            "Trip %d planned on vehicle %d (price %s)",
            trip.id,
            vehicle.id,
            trip.price,
        )
        return Assigned(trip)

    async def complete(self, trip_id: int, distance_driven_km: int) -> Completion:
        """Apply mileage and wear, release the vehicle and close the trip."""
        if distance_driven_km is None or distance_driven_km <= 0:
            raise InvalidFieldValue("distance_driven_km", "must be positive")

        async with self.session_factory() as session:
            try:
                trips = TripRepository(session)
                vehicles = VehicleRepository(session)

                trip = await trips.find_by_id(trip_id, lock=True)
                if trip is None:
                    await session.rollback()
                    logger.warning("Completion skipped: trip %d not found", trip_id)
                    return Completion(CompletionOutcome.NOT_FOUND)

                # Guard before touching the vehicle
                completed = trip.transition_to(TripStatus.COMPLETED)

                vehicle = await vehicles.get_for_update(trip.vehicle_id)
                if vehicle is None:
                    await session.rollback()
                    logger.warning(
                        "Completion skipped: vehicle %s of trip %d not found",
                        trip.vehicle_id,
                        trip_id,
                    )
                    return Completion(CompletionOutcome.NOT_FOUND)

                vehicle = vehicle.advance(distance_driven_km, trip.load_kg).release()
                await vehicles.save(vehicle)
                await trips.update_price_and_status(completed)
                await session.commit()
            except InvalidStateTransition:
                await session.rollback()
                logger.warning("Completion refused for trip %d", trip_id)
                raise
            except Exception:
                await session.rollback()
                logger.exception("Completion rolled back for trip %d", trip_id)
                raise

        logger.info(
            "Trip %d completed: vehicle %d at %d km, wear %s%%",
            trip_id,
            vehicle.id,
            vehicle.odometer_km,
            vehicle.wear_percent,
        )
        return Completion(CompletionOutcome.COMPLETED, completed)
