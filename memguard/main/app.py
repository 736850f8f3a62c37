"""
Main Application - Main Layer

This module serves as the entry point for the FastAPI application.
It initializes the container, creates the FastAPI app, exposes the
Prometheus registry on /metrics and includes the API routers.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from memguard.main.config import get_settings
from memguard.main.container import app_lifespan, init_container
from memguard.presentation.controllers import health_router, system_router
from memguard.shared import configure_logging, get_logger, update_logging_from_settings

# Configure logging with basic settings first - before configuration is loaded
configure_logging()

# Get structured logger
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan management.

    Starts the allocation and assessment loops through the container's
    app_lifespan and stops them when the server shuts down.
    """
    app.state.started_at = datetime.now(timezone.utc)
    logger.info("application.starting")

    async with app_lifespan() as container:
        app.state.container = container
        yield

    logger.info("application.stopped")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application
    """
    settings = get_settings()

    # Update logging with complete settings
    update_logging_from_settings(settings)

    # Initialize dependency injection container
    container = init_container(settings)

    app = FastAPI(
        title=settings.service.title,
        description=settings.service.description,
        version=settings.service.version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Prometheus exposition, served from the container's own registry
    registry = container.metrics().registry

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(generate_latest(registry), media_type=CONTENT_TYPE_LATEST)

    # Include routers
    app.include_router(system_router)
    app.include_router(health_router)

    return app


app = create_app()
