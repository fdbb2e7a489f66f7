"""FastAPI application entry point."""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from employee_api.config import Settings, get_settings
from employee_api.middleware import (
    BodyLimitMiddleware,
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    TimeoutMiddleware,
)
from employee_api.middleware.error_handler import register_error_handlers
from employee_api.repositories.employee_repository import create_store_client
from employee_api.routers import employees, system
from employee_api.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    settings: Settings = app.state.settings
    # Startup
    setup_logging(settings.log_level, settings.environment)
    logger.info(f"{settings.app_name} started on port {settings.port}")
    logger.info(f"Record store: {settings.record_store_url}")
    logger.info(f"Environment: {settings.environment}")
    for route in employees.router.routes:
        for method in sorted(route.methods):
            logger.info(f"Endpoint: {method:<6} /api{route.path}")
    yield
    # Shutdown
    logger.info("Shutting down, closing record store client")
    await app.state.store_client.aclose()
    logger.info("HTTP server closed")


def create_app(
    settings: Settings | None = None,
    store_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to bind to the app; loaded from the environment if omitted
        store_transport: Optional transport for the record store client

    Returns:
        Configured FastAPI application
    """
    config = settings or get_settings()

    app = FastAPI(
        title=config.app_name,
        version=config.app_version,
        description="Employee management REST API",
        lifespan=lifespan,
        docs_url="/docs" if config.is_development else None,
        redoc_url="/redoc" if config.is_development else None,
    )
    app.state.settings = config
    app.state.store_client = create_store_client(config, transport=store_transport)
    app.state.started_at = time.monotonic()

    register_error_handlers(app)

    # Middleware runs in REVERSE order of addition: CORS sees requests first,
    # the catch-all error middleware sits closest to the routes.
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(BodyLimitMiddleware, max_body_bytes=config.max_body_bytes)
    app.add_middleware(TimeoutMiddleware, timeout_seconds=config.request_timeout_seconds)
    app.add_middleware(RequestLoggingMiddleware, verbose=not config.is_development)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # Include routers
    app.include_router(system.router, tags=["System"])
    app.include_router(employees.router, prefix="/api", tags=["Employees"])

    return app


def run() -> None:
    """Serve the API with uvicorn."""
    config = get_settings()
    uvicorn.run(
        "employee_api.main:create_app",
        factory=True,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        timeout_graceful_shutdown=config.shutdown_timeout_seconds,
    )


if __name__ == "__main__":
    run()
