"""
Trip endpoints
==============

POST /api/v1/trips                     -- book a trip (PLANNED or REJECTED)
GET  /api/v1/trips/{trip_id}           -- trip status and price
POST /api/v1/trips/{trip_id}/complete  -- record kilometres driven, close trip
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db, get_reservation_engine
from src.api.middleware import limiter
from src.api.schemas import (
    ErrorResponse,
    TripBookingRequest,
    TripCompletionRequest,
    TripResponse,
)
from src.domain.errors import InvalidStateTransition
from src.infrastructure.repositories import TripRepository
from src.services.reservation_engine import CompletionOutcome, ReservationEngine

router = APIRouter(prefix="/trips", tags=["trips"])


@router.post(
    "",
    status_code=201,
    response_model=TripResponse,
    summary="Book a trip",
    description=(
        "Reserves the first available vehicle of the right type and capacity. "
        "When none fits, the trip is stored with status REJECTED and no vehicle."
    ),
)
@limiter.limit("100/minute")
async def book_trip(
    request: Request,
    body: TripBookingRequest,
    engine: ReservationEngine = Depends(get_reservation_engine),
):
    outcome = await engine.plan(body.to_request())
    return outcome.trip


@router.get(
    "/{trip_id}",
    response_model=TripResponse,
    summary="Get trip status and price",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit("100/minute")
async def get_trip(
    request: Request,
    trip_id: int,
    db: AsyncSession = Depends(get_db),
):
    trip = await TripRepository(db).find_by_id(trip_id)
    if not trip:
        raise HTTPException(status_code=404, detail="Trip not found")
    return trip


@router.post(
    "/{trip_id}/complete",
    response_model=TripResponse,
    summary="Complete a planned trip",
    description=(
        "Adds the kilometres driven to the vehicle, accrues depreciation, "
        "releases the vehicle and marks the trip COMPLETED."
    ),
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
@limiter.limit("100/minute")
async def complete_trip(
    request: Request,
    trip_id: int,
    body: TripCompletionRequest,
    engine: ReservationEngine = Depends(get_reservation_engine),
):
    try:
        completion = await engine.complete(trip_id, body.distance_driven_km)
    except InvalidStateTransition as exc:
        raise HTTPException(status_code=409, detail=str(exc))

    if completion.outcome == CompletionOutcome.NOT_FOUND:
        raise HTTPException(status_code=404, detail="Trip not found")
    return completion.trip
