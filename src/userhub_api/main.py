"""Main FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from userhub_api.config import Settings, get_settings
from userhub_api.errors import register_exception_handlers
from userhub_api.middleware import setup_middleware
from userhub_api.routes import api_router
from userhub_api.services import get_user_store

# Initialize settings
settings = get_settings()

# Configure logging
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)


def initialize_user_store(settings: Settings) -> None:
    """Create the configured user store during startup.

    For Cosmos this creates the database and users container if missing. In
    development a failure is logged and the app keeps running.
    """
    try:
        get_user_store(settings)
    except Exception as e:
        logger.error("Failed to initialize %s user store: %s", settings.user_store_backend, e)
        if settings.environment == "production":
            raise
        logger.warning("Continuing without user store initialization (development mode)")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Handle application lifespan events."""
    # Startup
    logger.info("%s v%s started", settings.app_name, settings.app_version)
    logger.info("Environment: %s", settings.environment)
    logger.info("User store backend: %s", settings.user_store_backend)

    initialize_user_store(settings)

    yield

    # Shutdown
    logger.info("%s shutting down", settings.app_name)


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="User registration, login and profile management API",
    version=settings.app_version,
    lifespan=lifespan,
    redirect_slashes=False,
)

# Setup middleware (must be before exception handlers)
setup_middleware(app, ui_url=settings.ui_url, environment=settings.environment)
register_exception_handlers(app, ui_url=settings.ui_url, environment=settings.environment)

# Include routers
app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "userhub_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
        log_level=settings.log_level.lower(),
    )
