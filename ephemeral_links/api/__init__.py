"""API package for Ephemeral Links."""

from .routes import health_router, urls_router

__all__ = ["health_router", "urls_router"]
