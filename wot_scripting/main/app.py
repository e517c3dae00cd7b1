"""
Main Application - Main Layer

This module serves as the entry point for the FastAPI application.
It initializes the container, creates the FastAPI app, and includes
the API routers.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wot_scripting.main.config import get_settings
from wot_scripting.main.container import app_lifespan, init_container
from wot_scripting.presentation.controllers import (
    context_router,
    operations_router,
    system_router,
)
from wot_scripting.shared import (
    configure_logging,
    get_logger,
    update_logging_from_settings,
)

# Bootstrap logging from environment variables so that settings loading
# problems are logged too
configure_logging()

settings = get_settings()

update_logging_from_settings(settings)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan management.

    Starts the thing runtime on startup and releases cached sessions and
    runtime connections on shutdown through the container's app_lifespan.
    """
    app.state.started_at = datetime.now(timezone.utc)
    logger.info("Application starting up")

    async with app_lifespan() as container:
        app.state.container = container
        yield

    logger.info("Application shutting down")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application
    """
    settings = get_settings()

    init_container(settings)

    app = FastAPI(
        title=settings.service.title,
        description=settings.service.description,
        version=settings.service.version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(operations_router)
    app.include_router(context_router)
    app.include_router(system_router)

    return app


app = create_app()
