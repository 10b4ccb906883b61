"""
Vehicle endpoints
=================

GET /api/v1/vehicles -- fleet overview (availability, mileage, wear)
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db
from src.api.middleware import limiter
from src.api.schemas import VehicleResponse
from src.infrastructure.repositories import VehicleRepository

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


@router.get(
    "",
    response_model=list[VehicleResponse],
    summary="List all vehicles",
)
@limiter.limit("100/minute")
async def list_vehicles(
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    return await VehicleRepository(db).list_all()
