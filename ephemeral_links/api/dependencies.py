"""FastAPI dependencies for Ephemeral Links."""

from fastapi import Request

from ..core.session import ShortenerSession


def get_session(request: Request) -> ShortenerSession:
    """Get the session created by the application lifespan.

    Args:
        request: FastAPI request object.

    Returns:
        The application's ShortenerSession.
    """
    return request.app.state.session


def get_base_url(request: Request) -> str:
    """Get base URL for short links, preferring the configured one.

    Args:
        request: FastAPI request object.

    Returns:
        Base URL string.
    """
    base_url = request.app.state.settings.base_url or str(request.base_url)
    return base_url.rstrip("/")
