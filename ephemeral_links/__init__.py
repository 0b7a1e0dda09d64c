"""Ephemeral Links - session-scoped URL shortener."""

from .core.registry import Redirect, Registry, sweep_records
from .core.session import ShortenerSession
from .models.url import UrlRecord

__all__ = ["Redirect", "Registry", "ShortenerSession", "UrlRecord", "sweep_records"]
