"""
FastAPI application for the Results Receiver service.

This module initializes and configures the FastAPI application that accepts
test run uploads.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import PlainTextResponse

from results_receiver.api.endpoints import results
from results_receiver.config.settings import settings
from results_receiver.core.errors import ResultsReceiverError
from results_receiver.integrations.checks import ChecksClient
from results_receiver.utils.db_health import check_db_connection
from results_receiver.utils.db_session import get_async_engine
from results_receiver.utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager for startup and shutdown events.

    Configures logging and the checks client on startup, and releases the
    HTTP client and database pool on shutdown.
    """
    setup_logging()
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    if settings.CHECKS_API_URL:
        logger.info("Initializing checks client")
        app.state.checks_client = ChecksClient(
            api_url=settings.CHECKS_API_URL,
            api_token=settings.CHECKS_API_TOKEN,
            timeout=settings.CHECKS_TIMEOUT_SECONDS
        )
    else:
        logger.info("Checks integration not configured - check runs will not be completed")
        app.state.checks_client = None

    yield

    logger.info("Shutting down application")

    if app.state.checks_client:
        await app.state.checks_client.close()

    if get_async_engine.cache_info().currsize:
        await get_async_engine().dispose()


async def results_receiver_error_handler(request: Request, exc: ResultsReceiverError) -> PlainTextResponse:
    """Render a request-terminating error as a plain-text response."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
    return PlainTextResponse(exc.message, status_code=exc.status_code)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="""Results Receiver API for uploading test runs to the results dashboard.

        This API provides endpoints for:
        - Uploading finished test runs (internal uploader only)
        - Reading back stored test runs
        - Health monitoring""",
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,  # Disable docs in production
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_tags=[
            {
                "name": "results",
                "description": "Test run upload and retrieval"
            },
            {
                "name": "health",
                "description": "Health check and monitoring"
            }
        ]
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS if not settings.DEBUG else ["*"],
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=settings.ALLOWED_HOSTS if not settings.DEBUG else ["*"]
    )

    app.add_exception_handler(ResultsReceiverError, results_receiver_error_handler)

    app.include_router(
        results.router,
        prefix="/api",
        tags=["results"]
    )

    @app.get("/health", tags=["health"], summary="Health Check", description="Get application health status")
    async def health_check():
        """
        Health check endpoint.

        Returns:
            dict: Service status, version, timestamp, database reachability
                and checks integration status.
        """
        checks_client = getattr(app.state, "checks_client", None)
        database_ok = await check_db_connection()

        return {
            "status": "healthy" if database_ok else "degraded",
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "database": "ok" if database_ok else "unreachable",
            "checks_integration": "enabled" if checks_client else "disabled",
            "debug_mode": settings.DEBUG,
        }

    return app


# Create the application instance
app = create_app()
