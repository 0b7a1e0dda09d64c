"""Ephemeral Links - Main FastAPI Application.

A session-scoped URL shortening service with:
- Create short URLs with optional custom codes
- Expiring links, swept from memory periodically
- Redirect with click counting
- Per-link statistics and a session event log
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from .core.config import Settings, settings as default_settings
from .core.exceptions import (
    DuplicateShortcodeError,
    ShortcodeExpiredError,
    ShortcodeGenerationError,
    ShortcodeNotFoundError,
    ShortenerError,
)
from .core.session import ShortenerSession
from .api.routes import health_router, urls_router

# Configure logging
logging.basicConfig(
    level=default_settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    DuplicateShortcodeError: 409,
    ShortcodeNotFoundError: 404,
    ShortcodeExpiredError: 410,
    ShortcodeGenerationError: 500,
}


def error_status_code(exc: ShortenerError) -> int:
    """HTTP status for a registry error; validation failures are 400."""
    for error_class, status_code in ERROR_STATUS_CODES.items():
        if isinstance(exc, error_class):
            return status_code
    return 400


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    # Startup
    logger.info(f"Starting {app.state.settings.app_title}...")
    session = ShortenerSession(settings=app.state.settings)
    session.start()
    app.state.session = session
    yield
    # Shutdown
    logger.info(f"Shutting down {app.state.settings.app_title}...")
    session.close()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Settings to use instead of the environment-derived ones.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or default_settings
    app = FastAPI(
        title=settings.app_title,
        description=settings.app_description,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ShortenerError)
    async def shortener_exception_handler(request: Request, exc: ShortenerError):
        """Registry error handler."""
        return JSONResponse(
            status_code=error_status_code(exc),
            content={"detail": exc.message, "error_code": exc.error_code},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """General exception handler."""
        logger.error(f"Unhandled Exception: {exc}")
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error", "error_code": "500"},
        )

    # Include routers
    app.include_router(health_router)
    app.include_router(urls_router)
    return app


app = create_app()
