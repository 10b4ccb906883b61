"""FastAPI dependency injection helpers."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.domain.pricing import PricingEngine
from src.infrastructure.database import async_session_factory
from src.services.reservation_engine import ReservationEngine


async def get_db() -> AsyncSession:  # type: ignore[misc]
    """Yield an async DB session; commit on success, rollback on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_reservation_engine() -> ReservationEngine:
    """The engine opens its own transactions, so it gets the factory."""
    return ReservationEngine(
        async_session_factory,
        PricingEngine(settings.passenger_rate_per_km, settings.cargo_rate_per_km),
    )
