"""FastAPI application factory.

Every response body is an envelope: ``{"data": ..., "success": true}`` on
success and ``{"error": "...", "success": false}`` on failure, with the HTTP
status telling validation (400), not-found (404) and storage (500) apart.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..database.db import configure_engine, init_db
from ..errors import DashboardError
from ..settings import Settings
from .routes import links_router, notes_router, pomodoro_router, tasks_router

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "success": False},
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part != "body"]
    field = ".".join(location) or "body"
    return f"{field}: {first.get('msg', 'invalid value')}"


def _install_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(DashboardError)
    async def _dashboard_error(request: Request, exc: DashboardError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError):
        return _error(400, _describe_validation_error(exc))

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return _error(404, f"Route {request.method} {request.url.path} not found")
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, "Internal server error")


def create_app(
    settings: Settings | None = None,
    *,
    database_url: str | None = None,
    init_database: bool = True,
) -> FastAPI:
    """Build the API.

    ``database_url`` (or ``settings.database_url``) replaces the default
    on-disk SQLite file; tests pass an in-memory URL and configure the
    engine themselves with ``init_database=False``.
    """
    settings = settings or Settings()
    url = database_url or settings.database_url
    started_at = time.monotonic()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if init_database:
            if url:
                configure_engine(url)
            init_db()
        logger.info("Deskboard API ready")
        yield

    app = FastAPI(title="Deskboard API", version=__version__, lifespan=lifespan)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    @app.get(f"{API_PREFIX}/health")
    def health() -> dict:
        return {
            "status": "ok",
            "timestamp": datetime.now().isoformat(),
            "uptime": round(time.monotonic() - started_at, 3),
        }

    for router in (notes_router, tasks_router, links_router, pomodoro_router):
        app.include_router(router, prefix=API_PREFIX)

    _install_error_handlers(app)
    return app


def serve(settings: Settings) -> None:
    """Run the API with uvicorn until interrupted."""
    app = create_app(settings)
    logger.info(
        "Serving Deskboard API on http://%s:%d%s",
        settings.server_host, settings.server_port, API_PREFIX,
    )
    uvicorn.run(
        app,
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )
