"""
Integration tests for the REST API endpoints.

Each test gets a fresh app wired to the in-memory dispatcher fixture, so
no seed data or lifespan startup is involved.
"""

from __future__ import annotations

from datetime import timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.api.app import create_app
from src.api.middleware import limiter
from src.api.schemas import DriverResponse, RiderResponse
from src.domain.enums import DriverStatus
from tests.conftest import NOW


# ── Fixture ───────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def client(dispatcher):
    limiter.reset()
    app = create_app(dispatcher)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ── Tests ─────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    resp = await client.get("/api/v1/admin/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_summary(client: AsyncClient):
    resp = await client.get("/api/v1/admin/summary")
    assert resp.status_code == 200
    assert resp.json() == {"trips": 3, "drivers": 3, "riders": 6}


@pytest.mark.asyncio
async def test_request_trip_returns_201(client: AsyncClient, dispatcher):
    resp = await client.post("/api/v1/trips", json={"rider_id": 1})
    assert resp.status_code == 201
    data = resp.json()
    assert data["id"] == 4
    assert data["driver_id"] == 5
    assert data["status"] == "PENDING"
    assert data["cost"] is None
    assert dispatcher.find_driver(5).status == DriverStatus.UNAVAILABLE


@pytest.mark.asyncio
async def test_request_trip_unknown_rider(client: AsyncClient):
    resp = await client.post("/api/v1/trips", json={"rider_id": 99})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_request_trip_invalid_rider_id(client: AsyncClient):
    resp = await client.post("/api/v1/trips", json={"rider_id": -2})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_request_trip_no_drivers(client: AsyncClient, dispatcher):
    for driver in dispatcher.drivers:
        driver.status = DriverStatus.UNAVAILABLE
    resp = await client.post("/api/v1/trips", json={"rider_id": 1})
    assert resp.status_code == 409
    assert "no available drivers" in resp.json()["detail"].lower()
    assert len(dispatcher.trips) == 3


@pytest.mark.asyncio
async def test_get_trip(client: AsyncClient):
    resp = await client.get("/api/v1/trips/2")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "COMPLETED"
    assert data["duration_seconds"] == 1800.0


@pytest.mark.asyncio
async def test_get_trip_not_found(client: AsyncClient):
    resp = await client.get("/api/v1/trips/9999")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_complete_trip(client: AsyncClient, dispatcher):
    create_resp = await client.post("/api/v1/trips", json={"rider_id": 1})
    trip_id = create_resp.json()["id"]
    end_time = (NOW + timedelta(minutes=15)).isoformat()
    resp = await client.patch(
        f"/api/v1/trips/{trip_id}/complete",
        json={"cost": 11.5, "rating": 5, "end_time": end_time},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "COMPLETED"
    assert data["duration_seconds"] == 900.0
    assert dispatcher.find_driver(5).status == DriverStatus.AVAILABLE


@pytest.mark.asyncio
async def test_complete_trip_twice_conflicts(client: AsyncClient):
    resp = await client.patch(
        "/api/v1/trips/1/complete", json={"cost": 1.0, "rating": 5}
    )
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_complete_trip_bad_rating(client: AsyncClient):
    resp = await client.patch(
        "/api/v1/trips/1/complete", json={"cost": 1.0, "rating": 7}
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_get_rider(client: AsyncClient):
    resp = await client.get("/api/v1/riders/1")
    assert resp.status_code == 200
    data = resp.json()
    assert data["is_driver"] is False
    assert data["trip_ids"] == [1]
    assert data["total_time_spent"] == 3600.0
    assert data["net_expenditures"] == 10.0


@pytest.mark.asyncio
async def test_get_rider_who_drives(client: AsyncClient):
    resp = await client.get("/api/v1/riders/4")
    assert resp.status_code == 200
    data = resp.json()
    assert data["is_driver"] is True
    assert data["net_expenditures"] == -8.86  # 12.50 spent - 21.36 earned


def test_rider_response_matches_driver_response(dispatcher):
    driver = dispatcher.find_rider(4)
    as_rider = RiderResponse.from_rider(driver)
    as_driver = DriverResponse.from_driver(driver)
    assert as_rider.is_driver is True
    assert as_rider.trip_ids == as_driver.trip_ids
    assert as_rider.net_expenditures == as_driver.net_expenditures


@pytest.mark.asyncio
async def test_get_rider_invalid_id(client: AsyncClient):
    resp = await client.get("/api/v1/riders/0")
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_get_driver(client: AsyncClient):
    resp = await client.get("/api/v1/drivers/4")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "AVAILABLE"
    assert data["driven_trip_ids"] == [1, 2]
    assert data["average_rating"] == 4.0
    assert data["total_revenue"] == 21.36


@pytest.mark.asyncio
async def test_get_driver_not_found(client: AsyncClient):
    resp = await client.get("/api/v1/drivers/1")
    assert resp.status_code == 404
