"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.domain.entities import Driver, Passenger, Trip


# ── Requests ──────────────────────────────────────────────────────────


class TripCreateRequest(BaseModel):
    rider_id: int = Field(..., description="Id of the rider requesting the trip.")


class TripCompleteRequest(BaseModel):
    cost: float = Field(..., ge=0)
    rating: int = Field(..., ge=1, le=5)
    end_time: Optional[datetime] = Field(
        None, description="Defaults to the server clock when omitted."
    )


# ── Responses ─────────────────────────────────────────────────────────


class TripResponse(BaseModel):
    id: int
    passenger_id: int
    driver_id: int
    status: str
    start_time: datetime
    end_time: Optional[datetime] = None
    cost: Optional[float] = None
    rating: Optional[int] = None
    duration_seconds: float = 0.0

    @classmethod
    def from_trip(cls, trip: Trip) -> TripResponse:
        return cls(
            id=trip.id,
            passenger_id=trip.passenger_id,
            driver_id=trip.driver_id,
            status=trip.status.value,
            start_time=trip.start_time,
            end_time=trip.end_time,
            cost=trip.cost,
            rating=trip.rating,
            duration_seconds=trip.duration(),
        )


class RiderResponse(BaseModel):
    id: int
    name: str
    phone: str
    is_driver: bool = False
    trip_ids: list[int] = []
    total_time_spent: float
    net_expenditures: float

    @classmethod
    def from_rider(cls, rider: Passenger) -> RiderResponse:
        return cls(
            id=rider.id,
            name=rider.name,
            phone=rider.phone,
            is_driver=isinstance(rider, Driver),
            trip_ids=[trip.id for trip in rider.trips],
            total_time_spent=rider.total_time_spent(),
            net_expenditures=rider.net_expenditures(),
        )


class DriverResponse(BaseModel):
    id: int
    name: str
    phone: str
    vehicle_id: str
    status: str
    trip_ids: list[int] = []
    driven_trip_ids: list[int] = []
    average_rating: float
    total_revenue: float
    total_time_spent: float
    net_expenditures: float

    @classmethod
    def from_driver(cls, driver: Driver) -> DriverResponse:
        return cls(
            id=driver.id,
            name=driver.name,
            phone=driver.phone,
            vehicle_id=driver.vehicle_id,
            status=driver.status.value,
            trip_ids=[trip.id for trip in driver.trips],
            driven_trip_ids=[trip.id for trip in driver.driven_trips],
            average_rating=driver.average_rating(),
            total_revenue=driver.total_revenue(),
            total_time_spent=driver.total_time_spent(),
            net_expenditures=driver.net_expenditures(),
        )


class SummaryResponse(BaseModel):
    trips: int
    drivers: int
    riders: int


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str
