"""Response schemas for Ephemeral Links."""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel


class URLCreateResponse(BaseModel):
    """Response model for created short URL."""

    original_url: str
    shortcode: str
    short_url: str
    created_at: int
    expires_at: int
    clicks: int


class URLStatsResponse(BaseModel):
    """Response model for short URL statistics."""

    original_url: str
    shortcode: str
    short_url: str
    created_at: int
    expires_at: int
    clicks: int
    is_expired: bool


class EventResponse(BaseModel):
    """Response model for an event log entry."""

    timestamp: str
    event_type: str
    details: dict[str, Any]


class SessionStatusResponse(BaseModel):
    """Response model for the session's sweep status."""

    running: bool
    closed: bool
    records: int
    events: int
    next_sweep: Optional[datetime] = None


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
