"""
Trip endpoints
==============

POST  /api/v1/trips                  -- request a trip (returns 201 Created)
GET   /api/v1/trips/{trip_id}        -- trip status, driver and fare
PATCH /api/v1/trips/{trip_id}/complete -- record end time, cost and rating
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from src.api.dependencies import get_dispatcher
from src.api.middleware import limiter
from src.api.schemas import (
    ErrorResponse,
    TripCompleteRequest,
    TripCreateRequest,
    TripResponse,
)
from src.config import settings
from src.services.dispatcher import TripDispatcher

router = APIRouter(prefix="/trips", tags=["trips"])


@router.post(
    "",
    status_code=201,
    response_model=TripResponse,
    summary="Request a trip",
    responses={
        404: {"model": ErrorResponse, "description": "Unknown rider."},
        409: {"model": ErrorResponse, "description": "No driver is available."},
    },
)
@limiter.limit(settings.rate_limit)
async def request_trip(
    request: Request,
    body: TripCreateRequest,
    dispatcher: TripDispatcher = Depends(get_dispatcher),
):
    trip = dispatcher.request_trip(body.rider_id)
    return TripResponse.from_trip(trip)


@router.get(
    "/{trip_id}",
    response_model=TripResponse,
    summary="Get a trip",
)
@limiter.limit(settings.rate_limit)
async def get_trip(
    request: Request,
    trip_id: int,
    dispatcher: TripDispatcher = Depends(get_dispatcher),
):
    trip = dispatcher.find_trip(trip_id)
    if not trip:
        raise HTTPException(status_code=404, detail="Trip not found")
    return TripResponse.from_trip(trip)


@router.patch(
    "/{trip_id}/complete",
    response_model=TripResponse,
    summary="Complete a trip",
    description=(
        "Transitions a PENDING trip to COMPLETED and makes its driver "
        "AVAILABLE again."
    ),
    responses={409: {"model": ErrorResponse, "description": "Already completed."}},
)
@limiter.limit(settings.rate_limit)
async def complete_trip(
    request: Request,
    trip_id: int,
    body: TripCompleteRequest,
    dispatcher: TripDispatcher = Depends(get_dispatcher),
):
    trip = dispatcher.complete_trip(
        trip_id, cost=body.cost, rating=body.rating, end_time=body.end_time
    )
    return TripResponse.from_trip(trip)
