"""
Integration tests for the REST API endpoints.

Runs the app against the SQLite test database: ``get_db`` and
``get_reservation_engine`` are overridden with the test session factory.
"""

from __future__ import annotations

from datetime import date, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.api.app import create_app
from src.api.dependencies import get_db, get_reservation_engine
from src.domain.enums import VehicleType
from src.services.reservation_engine import ReservationEngine
from tests.conftest import TOMORROW, add_vehicle, load_vehicle


# ── Fixture ───────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def client(session_factory):
    """AsyncClient backed by the SQLite test database."""

    async def _test_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app = create_app()
    app.dependency_overrides[get_db] = _test_db
    app.dependency_overrides[get_reservation_engine] = lambda: ReservationEngine(
        session_factory
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def passenger_body(**overrides) -> dict:
    body = {
        "customer_id": 1,
        "trip_type": "PASSENGER",
        "trip_date": TOMORROW.isoformat(),
        "distance_km": 100,
        "passenger_count": 2,
    }
    body.update(overrides)
    return body


# ── Tests ─────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    resp = await client.get("/api/v1/admin/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_book_trip_returns_planned(client: AsyncClient, session_factory):
    vehicle_id = await add_vehicle(session_factory, VehicleType.PASSENGER_CAR, 4)

    resp = await client.post("/api/v1/trips", json=passenger_body())

    assert resp.status_code == 201
    data = resp.json()
    assert data["status"] == "PLANNED"
    assert data["vehicle_id"] == vehicle_id
    assert data["price"] == 100.0
    assert data["weight_kg"] is None


@pytest.mark.asyncio
async def test_book_trip_without_vehicle_is_rejected(client: AsyncClient):
    resp = await client.post("/api/v1/trips", json=passenger_body())

    assert resp.status_code == 201
    data = resp.json()
    assert data["status"] == "REJECTED"
    assert data["vehicle_id"] is None
    assert data["price"] == 0


@pytest.mark.asyncio
async def test_book_cargo_drops_passenger_count(client: AsyncClient, session_factory):
    await add_vehicle(session_factory, VehicleType.CARGO_TRUCK, 1000)

    resp = await client.post(
        "/api/v1/trips",
        json=passenger_body(
            trip_type="cargo", weight_kg=950, distance_km=60, passenger_count=3
        ),
    )

    assert resp.status_code == 201
    data = resp.json()
    assert data["trip_type"] == "CARGO"
    assert data["passenger_count"] is None
    assert data["weight_kg"] == 950
    assert data["price"] == 120.0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"trip_type": "CARGO"},  # weight missing
        {"passenger_count": None},
        {"passenger_count": 0},
        {"distance_km": 0},
        {"trip_type": "bicycle"},
        {"trip_date": date.today().isoformat()},
        {"trip_date": (date.today() - timedelta(days=3)).isoformat()},
    ],
)
async def test_book_trip_validation(client: AsyncClient, overrides):
    resp = await client.post("/api/v1/trips", json=passenger_body(**overrides))
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_get_trip(client: AsyncClient, session_factory):
    await add_vehicle(session_factory, VehicleType.PASSENGER_CAR, 4)
    trip_id = (await client.post("/api/v1/trips", json=passenger_body())).json()["id"]

    resp = await client.get(f"/api/v1/trips/{trip_id}")

    assert resp.status_code == 200
    assert resp.json()["id"] == trip_id


@pytest.mark.asyncio
async def test_get_trip_not_found(client: AsyncClient):
    resp = await client.get("/api/v1/trips/9999")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_complete_trip(client: AsyncClient, session_factory):
    vehicle_id = await add_vehicle(session_factory, VehicleType.PASSENGER_CAR, 4)
    trip_id = (await client.post("/api/v1/trips", json=passenger_body())).json()["id"]

    resp = await client.post(
        f"/api/v1/trips/{trip_id}/complete", json={"distance_driven_km": 100}
    )

    assert resp.status_code == 200
    assert resp.json()["status"] == "COMPLETED"
    assert resp.json()["price"] == 100.0
    vehicle = await load_vehicle(session_factory, vehicle_id)
    assert vehicle.odometer_km == 100
    assert vehicle.is_available is True


@pytest.mark.asyncio
async def test_complete_twice_conflicts(client: AsyncClient, session_factory):
    await add_vehicle(session_factory, VehicleType.PASSENGER_CAR, 4)
    trip_id = (await client.post("/api/v1/trips", json=passenger_body())).json()["id"]
    url = f"/api/v1/trips/{trip_id}/complete"

    await client.post(url, json={"distance_driven_km": 10})
    resp = await client.post(url, json={"distance_driven_km": 10})

    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_complete_unknown_trip(client: AsyncClient):
    resp = await client.post(
        "/api/v1/trips/4242/complete", json={"distance_driven_km": 10}
    )
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_complete_requires_positive_distance(client: AsyncClient):
    resp = await client.post(
        "/api/v1/trips/1/complete", json={"distance_driven_km": 0}
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_vehicle_overview(client: AsyncClient, session_factory):
    await add_vehicle(session_factory, VehicleType.PASSENGER_CAR, 4)
    await add_vehicle(session_factory, VehicleType.CARGO_TRUCK, 3500, is_available=False)

    resp = await client.get("/api/v1/vehicles")

    assert resp.status_code == 200
    data = resp.json()
    assert [v["vehicle_type"] for v in data] == ["PASSENGER_CAR", "CARGO_TRUCK"]
    assert data[1]["capacity"] == 3500
    assert data[1]["is_available"] is False
    assert data[0]["wear_percent"] == 0.0
