"""
FastAPI application factory.

* Registers routes for trips, vehicles and admin.
* Maps domain validation faults to 422 responses.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.api.middleware import limiter
from src.api.routes import admin, trips, vehicles
from src.domain.errors import InvalidFieldValue

logging.basicConfig(level=logging.INFO)


async def _invalid_field_handler(request: Request, exc: InvalidFieldValue):
    return JSONResponse(
        status_code=422, content={"detail": str(exc), "field": exc.field}
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="Transport Planner API",
        description=(
            "Books passenger and cargo trips on a shared fleet.  Reserves the "
            "first fitting vehicle under row locks, prices the trip and, on "
            "completion, applies mileage and depreciation."
        ),
        version="1.0.0",
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(InvalidFieldValue, _invalid_field_handler)

    # Routers
    app.include_router(trips.router, prefix="/api/v1")
    app.include_router(vehicles.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
