"""
FastAPI application entry point for the RSS Aggregator API.

This module provides:
- The application factory wiring CORS, request logging and the /v1 router
- Database connection pool management during the application lifespan
- An HTTP exception handler that keeps routing errors in the
  {"error": ...} envelope
- The `rss-agg` process entry point
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
import uvicorn
from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.src.config import Settings, load_settings
from api.src.dependencies import ApiConfig, UserGateway
from api.src.middleware import RequestLoggingMiddleware, add_cors_middleware
from api.src.repositories.user_repo import UserRepository, close_pool, create_pool
from api.src.responses import respond_with_error
from api.src.routers import v1
from shared.logging import configure_logging

logger = structlog.get_logger(__name__)


# ============================================================================
# Lifespan Management
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the database pool on startup and close it on shutdown.

    When a gateway was injected into the application no pool is opened.
    A pool that cannot be opened aborts startup.
    """
    api_config: ApiConfig = app.state.api_config
    settings = api_config.settings
    pool = None

    logger.info(
        "application_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment
    )

    if api_config.users is None:
        pool = await create_pool(settings)
        api_config.users = UserRepository(pool)

    logger.info("application_started", app_name=settings.app_name)

    try:
        yield
    finally:
        logger.info("application_shutting_down")
        if pool is not None:
            await close_pool(pool)
            api_config.users = None
        logger.info("application_shutdown_complete")


# ============================================================================
# Exception Handlers
# ============================================================================

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render routing and HTTP errors as the error envelope."""
    logger.warning(
        "http_exception",
        path=request.url.path,
        status_code=exc.status_code,
        detail=exc.detail
    )
    response = respond_with_error(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


# ============================================================================
# FastAPI Application
# ============================================================================

def create_app(settings: Settings, users: Optional[UserGateway] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Application settings
        users: Gateway to use instead of opening a database pool

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="HTTP API for the RSS aggregator.",
        lifespan=lifespan,
    )
    app.state.api_config = ApiConfig(settings=settings, users=users)

    app.add_middleware(RequestLoggingMiddleware)
    add_cors_middleware(app, settings)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    app.include_router(v1.router, prefix=settings.api_prefix)

    return app


# ============================================================================
# Application Entry Point
# ============================================================================

def main() -> None:
    """Load configuration, then bind and serve until a fatal error."""
    settings = load_settings()

    configure_logging(
        log_level=settings.log_level,
        json_logs=settings.json_logs,
        service_name=settings.app_name,
        environment=settings.environment,
    )

    app = create_app(settings)

    logger.info("server_listening", host=settings.host, port=settings.port)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        lifespan="on",
        access_log=False,
    )


if __name__ == "__main__":
    main()
