"""
Admin / observability endpoints
===============================

GET /api/v1/admin/summary -- trip, driver and rider counts
GET /api/v1/admin/health  -- simple health check
"""

from fastapi import APIRouter, Depends, Request

from src.api.dependencies import get_dispatcher
from src.api.middleware import limiter
from src.api.schemas import HealthResponse, SummaryResponse
from src.config import settings
from src.services.dispatcher import TripDispatcher

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get(
    "/summary",
    response_model=SummaryResponse,
    summary="Count trips, drivers and riders",
)
@limiter.limit(settings.rate_limit)
async def get_summary(
    request: Request,
    dispatcher: TripDispatcher = Depends(get_dispatcher),
):
    return SummaryResponse(**dispatcher.summary())


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health():
    return HealthResponse()
