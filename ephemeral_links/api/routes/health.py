"""Health check API routes."""

from fastapi import APIRouter, Depends

from ...core.session import ShortenerSession
from ...schemas.url import HealthResponse, SessionStatusResponse
from ..dependencies import get_session

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        Health status.
    """
    return {"status": "healthy"}


@router.get("/health/session", response_model=SessionStatusResponse, summary="Session status")
async def session_status(session: ShortenerSession = Depends(get_session)) -> dict:
    """Report whether the expiry sweep is scheduled and how much is held."""
    return session.get_status()
