"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from src.domain.entities import TripRequest
from src.domain.enums import TripStatus, TripType, VehicleType, parse_trip_type


# ── Requests ──────────────────────────────────────────────────────────


class TripBookingRequest(BaseModel):
    customer_id: int = Field(..., ge=1)
    trip_type: TripType
    trip_date: date
    distance_km: int = Field(..., ge=1)
    passenger_count: Optional[int] = Field(
        None, ge=1, description="Required for PASSENGER trips."
    )
    weight_kg: Optional[int] = Field(
        None, ge=1, description="Required for CARGO trips."
    )

    @field_validator("trip_type", mode="before")
    @classmethod
    def _parse_trip_type(cls, value):
        if isinstance(value, str):
            return parse_trip_type(value)
        return value

    @field_validator("trip_date")
    @classmethod
    def _not_before_tomorrow(cls, value: date) -> date:
        if value < date.today() + timedelta(days=1):
            raise ValueError("trip_date must be tomorrow or later")
        return value

    @model_validator(mode="after")
    def _capacity_for_type(self) -> TripBookingRequest:
        if self.trip_type == TripType.PASSENGER and self.passenger_count is None:
            raise ValueError("passenger_count is required for passenger trips")
        if self.trip_type == TripType.CARGO and self.weight_kg is None:
            raise ValueError("weight_kg is required for cargo trips")
        return self

    def to_request(self) -> TripRequest:
        """Build the domain request, dropping the irrelevant capacity figure."""
        passenger = self.trip_type == TripType.PASSENGER
        return TripRequest(
            customer_id=self.customer_id,
            trip_date=self.trip_date,
            trip_type=self.trip_type,
            distance_km=self.distance_km,
            passenger_count=self.passenger_count if passenger else None,
            weight_kg=None if passenger else self.weight_kg,
        )


class TripCompletionRequest(BaseModel):
    distance_driven_km: int = Field(..., ge=1)


# ── Responses ─────────────────────────────────────────────────────────


class TripResponse(BaseModel):
    id: int
    customer_id: int
    vehicle_id: Optional[int] = None
    trip_date: date
    trip_type: TripType
    distance_km: int
    passenger_count: Optional[int] = None
    weight_kg: Optional[int] = None
    status: TripStatus
    price: float

    model_config = {"from_attributes": True}


class VehicleResponse(BaseModel):
    id: int
    vehicle_type: VehicleType
    capacity: int
    odometer_km: int
    wear_percent: float
    is_available: bool

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str
