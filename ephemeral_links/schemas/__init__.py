"""Schemas package for Ephemeral Links."""

from .url import (
    URLCreateResponse,
    URLStatsResponse,
    EventResponse,
    SessionStatusResponse,
    HealthResponse,
)

__all__ = [
    "URLCreateResponse",
    "URLStatsResponse",
    "EventResponse",
    "SessionStatusResponse",
    "HealthResponse",
]
