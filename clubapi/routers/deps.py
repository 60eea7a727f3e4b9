"""Helpers shared by the routers: app.state lookups and error responses."""
from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from clubapi.core.config import Settings
from clubapi.core.events import EventBroadcaster
from clubapi.core.rate_limiter import RequestThrottle
from clubapi.repositories.document_store import DocumentStore
from clubapi.services.errors import ServiceError


def _state(request: Request, name: str) -> Any:
    value = getattr(getattr(request.app, "state", None), name, None)
    if value is None:
        raise RuntimeError(f"app.state.{name} not configured")
    return value


def get_settings(request: Request) -> Settings:
    return _state(request, "settings")


def get_store(request: Request) -> DocumentStore:
    return _state(request, "store")


def get_events(request: Request) -> EventBroadcaster:
    return _state(request, "events")


def get_login_throttle(request: Request) -> RequestThrottle:
    return _state(request, "login_throttle")


async def publish(request: Request, event: str, data: Any) -> None:
    await get_events(request).publish(event, data)


def error_response(err: ServiceError) -> JSONResponse:
    return JSONResponse({"error": err.message}, status_code=err.status_code)
