"""
FastAPI application factory.

* Registers routes for trips, riders / drivers and admin.
* Loads the seed data set into a ``TripDispatcher`` via lifespan events
  unless a dispatcher is supplied.
* Translates domain errors into HTTP status codes.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.api.middleware import limiter
from src.api.routes import admin, parties, trips
from src.config import settings
from src.domain.exceptions import (
    InvalidStateTransition,
    NoAvailableDrivers,
    NotFound,
    RideShareError,
)
from src.domain.pricing import PayoutPolicy
from src.services.dispatcher import TripDispatcher

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

# Most specific first; anything else in the hierarchy is a validation error.
_STATUS_CODES: list[tuple[type[RideShareError], int]] = [
    (NotFound, 404),
    (NoAvailableDrivers, 409),
    (InvalidStateTransition, 409),
    (RideShareError, 422),
]


async def _domain_error_handler(request: Request, exc: RideShareError) -> JSONResponse:
    status_code = next(code for kind, code in _STATUS_CODES if isinstance(exc, kind))
    if status_code >= 409:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def _seed_dispatcher() -> TripDispatcher:
    from seed import build_dispatcher

    return build_dispatcher(payout=PayoutPolicy.from_settings(settings))


def create_app(dispatcher: Optional[TripDispatcher] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Attach the dispatcher on startup."""
        if dispatcher is not None:
            app.state.dispatcher = dispatcher
        elif settings.seed_on_startup:
            app.state.dispatcher = _seed_dispatcher()
        else:
            app.state.dispatcher = TripDispatcher(
                payout=PayoutPolicy.from_settings(settings)
            )
        logger.info("Serving %r", app.state.dispatcher)
        yield

    app = FastAPI(
        title="Ride Share Dispatch API",
        description=(
            "Assigns the longest-idle available driver to each trip request "
            "and reports rider spend and driver rating / revenue derived "
            "from trip history."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )
    if dispatcher is not None:
        app.state.dispatcher = dispatcher

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Domain errors
    app.add_exception_handler(RideShareError, _domain_error_handler)

    # Routers
    app.include_router(trips.router, prefix="/api/v1")
    app.include_router(parties.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
