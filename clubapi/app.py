from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from clubapi.core.config import Settings, get_settings
from clubapi.core.events import EventBroadcaster
from clubapi.core.rate_limiter import RequestThrottle
from clubapi.core.logging_config import setup_logging
from clubapi.repositories.document_store import DocumentStore, open_store
from clubapi.repositories.errors import PersistenceError
from clubapi.routers import admins as admins_router
from clubapi.routers import club as club_router
from clubapi.routers import members as members_router
from clubapi.routers import news as news_router
from clubapi.routers import system as system_router
from clubapi.services.admin_service import default_documents

logger = logging.getLogger(__name__)


_BASE_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


class ApiHeadersMiddleware(BaseHTTPMiddleware):
    """Baseline security headers on every response; API payloads are never cached."""

    def __init__(self, app, *, hsts: bool) -> None:
        super().__init__(app)
        self.headers = dict(_BASE_HEADERS)
        if hsts:
            self.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        for name, value in self.headers.items():
            response.headers.setdefault(name, value)
        if request.url.path.startswith("/api/"):
            response.headers.setdefault("Cache-Control", "no-store")
        return response


async def _persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse({"error": "Failed to persist changes", "details": exc.message}, status_code=500)


def _allowed_origins(settings: Settings) -> list[str]:
    allowed = {settings.public_base_url}
    if settings.app_env != "prod":
        allowed.update(
            {
                "http://localhost:3000",
                "http://127.0.0.1:3000",
                "http://localhost:5173",
                "http://127.0.0.1:5173",
            }
        )
    return sorted(origin for origin in allowed if origin)


def create_app(settings: Optional[Settings] = None, store: Optional[DocumentStore] = None) -> FastAPI:
    """Build the API: open the document store, seed first-run data, mount routers."""
    settings = settings or get_settings()
    setup_logging(settings.log_level)
    logger.info("Starting AMSAL FC application (%s)", settings.app_env)

    if store is None:
        store = open_store(settings)
    store.seed(default_documents(settings))

    app = FastAPI(title="AMSAL FC API")
    app.state.settings = settings
    app.state.store = store
    app.state.events = EventBroadcaster()
    app.state.login_throttle = RequestThrottle(settings.login_rate_limit, window_seconds=60)

    origins = _allowed_origins(settings)
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(ApiHeadersMiddleware, hsts=settings.app_env == "prod")
    app.add_exception_handler(PersistenceError, _persistence_error_handler)

    app.include_router(club_router.router)
    app.include_router(members_router.router)
    app.include_router(news_router.router)
    app.include_router(admins_router.router)
    app.include_router(system_router.router)

    logger.info(
        "Storage ready: remote %s, local files in %s",
        "available" if store.remote_available else "unavailable",
        store.fallback.directory,
    )
    return app
