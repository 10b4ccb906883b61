"""
Trip Pricing
============

Formula
-------
Price = Distance x Rate_Per_KM

* **Rate_Per_KM** = 1.0 for passenger trips, 2.0 for cargo trips

No base fare, no surge and no rounding beyond ``Decimal`` precision.
Complexity: O(1) per price calculation.
"""

from __future__ import annotations

from decimal import Decimal

from .enums import TripType

DEFAULT_RATES: dict[TripType, Decimal] = {
    TripType.PASSENGER: Decimal("1.0"),
    TripType.CARGO: Decimal("2.0"),
}


class PricingEngine:
    """High-level API used by the reservation engine."""

    def __init__(
        self,
        passenger_rate_per_km: Decimal = DEFAULT_RATES[TripType.PASSENGER],
        cargo_rate_per_km: Decimal = DEFAULT_RATES[TripType.CARGO],
    ):
        self.rates = {
            TripType.PASSENGER: Decimal(passenger_rate_per_km),
            TripType.CARGO: Decimal(cargo_rate_per_km),
        }

    def calculate_price(self, trip_type: TripType, distance_km: int) -> Decimal:
        return Decimal(distance_km) * self.rates[trip_type]
