"""FastAPI dependency injection helpers."""

from fastapi import Request

from src.services.dispatcher import TripDispatcher


def get_dispatcher(request: Request) -> TripDispatcher:
    """Return the dispatcher owned by the running application."""
    return request.app.state.dispatcher
