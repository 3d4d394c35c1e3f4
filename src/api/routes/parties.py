"""
Rider / driver endpoints
========================

GET /api/v1/riders/{rider_id}   -- rider profile with time and spend totals
GET /api/v1/drivers/{driver_id} -- driver profile with rating and revenue
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from src.api.dependencies import get_dispatcher
from src.api.middleware import limiter
from src.api.schemas import DriverResponse, RiderResponse
from src.config import settings
from src.services.dispatcher import TripDispatcher

router = APIRouter(tags=["parties"])


@router.get(
    "/riders/{rider_id}",
    response_model=RiderResponse,
    summary="Get a rider and their trip totals",
)
@limiter.limit(settings.rate_limit)
async def get_rider(
    request: Request,
    rider_id: int,
    dispatcher: TripDispatcher = Depends(get_dispatcher),
):
    rider = dispatcher.find_rider(rider_id)
    if not rider:
        raise HTTPException(status_code=404, detail="Rider not found")
    return RiderResponse.from_rider(rider)


@router.get(
    "/drivers/{driver_id}",
    response_model=DriverResponse,
    summary="Get a driver with rating and revenue",
)
@limiter.limit(settings.rate_limit)
async def get_driver(
    request: Request,
    driver_id: int,
    dispatcher: TripDispatcher = Depends(get_dispatcher),
):
    driver = dispatcher.find_driver(driver_id)
    if not driver:
        raise HTTPException(status_code=404, detail="Driver not found")
    return DriverResponse.from_driver(driver)
