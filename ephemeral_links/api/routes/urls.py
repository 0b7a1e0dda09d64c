"""URL shortening API routes.

This module contains all endpoints for URL operations:
- Create short URL (POST /shorten)
- Get URL statistics (GET /stats/{shortcode})
- List session events (GET /events)
- Redirect to original URL (GET /{shortcode})

Registry errors propagate to the handler registered in ``main``.
"""

from urllib.parse import urlsplit

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse

from ...core.session import ShortenerSession
from ...models.url import URLCreate, ErrorResponse
from ...schemas.url import URLCreateResponse, URLStatsResponse, EventResponse
from ...utils.shortener import create_short_url
from ..dependencies import get_base_url, get_session

router = APIRouter(prefix="", tags=["URLs"])


@router.post(
    "/shorten",
    response_model=URLCreateResponse,
    status_code=201,
    responses={
        201: {"description": "Short URL created successfully"},
        400: {"model": ErrorResponse, "description": "Invalid URL or shortcode"},
        409: {"model": ErrorResponse, "description": "Short code already exists"},
    },
    summary="Create a short URL",
    description="Create a new short URL. Optionally specify a custom code and validity in minutes.",
)
async def create_short_url_endpoint(
    request: Request,
    url_data: URLCreate,
    session: ShortenerSession = Depends(get_session),
) -> dict:
    """Create a short URL from a long URL.

    Args:
        request: FastAPI request object.
        url_data: URL creation data.
        session: Current shortener session.

    Returns:
        Created URL information.
    """
    record = session.registry.create(
        url_data.original_url,
        custom_code=url_data.custom_code,
        validity_minutes=url_data.validity_minutes,
    )
    return {
        **record.model_dump(),
        "short_url": create_short_url(get_base_url(request), record.shortcode),
    }


@router.get(
    "/stats/{shortcode}",
    response_model=URLStatsResponse,
    responses={
        200: {"description": "URL statistics retrieved"},
        404: {"model": ErrorResponse, "description": "Short URL not found"},
    },
    summary="Get URL statistics",
    description="Get click statistics for a short URL, including expired ones not yet swept.",
)
async def get_url_stats(
    shortcode: str,
    request: Request,
    session: ShortenerSession = Depends(get_session),
) -> dict:
    """Get URL statistics.

    Args:
        shortcode: The short URL code.
        request: FastAPI request object.
        session: Current shortener session.

    Returns:
        URL statistics.
    """
    record = session.registry.get_stats(shortcode)
    if record is None:
        raise HTTPException(status_code=404, detail="No statistics found for this shortcode")

    return {
        **record.model_dump(),
        "short_url": create_short_url(get_base_url(request), shortcode),
        "is_expired": record.is_expired(session.registry.clock()),
    }


@router.get(
    "/events",
    response_model=list[EventResponse],
    summary="List session events",
    description="List the events logged by this session, oldest first.",
)
async def list_events(session: ShortenerSession = Depends(get_session)) -> list[dict]:
    return session.events.entries()


@router.get(
    "/{shortcode}",
    response_class=RedirectResponse,
    status_code=302,
    responses={
        302: {"description": "Redirect to original URL"},
        404: {"model": ErrorResponse, "description": "Short URL not found"},
        403: {"model": ErrorResponse, "description": "Target URL scheme is not allowed"},
        410: {"model": ErrorResponse, "description": "Short URL has expired"},
    },
    summary="Redirect to original URL",
    description="Redirect to the original URL and count the click.",
)
async def redirect_to_url(
    shortcode: str,
    session: ShortenerSession = Depends(get_session),
) -> RedirectResponse:
    """Redirect to the original URL.

    Args:
        shortcode: The short URL code.
        session: Current shortener session.

    Returns:
        Redirect response to original URL.
    """
    record = session.registry.get_stats(shortcode)
    scheme = urlsplit(record.original_url).scheme.lower() if record else None
    if record is not None and scheme not in session.settings.redirect_schemes:
        raise HTTPException(status_code=403, detail="Redirect scheme not allowed")

    redirect = session.registry.resolve(shortcode)
    return RedirectResponse(url=redirect.url, status_code=302)
