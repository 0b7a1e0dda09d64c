"""Core package - configuration, events and errors.

The registry and session live in ``core.registry`` and ``core.session``.
"""

from .config import Settings, settings, get_settings
from .events import EventLog, EventSink
from .exceptions import ShortenerError

__all__ = [
    "Settings",
    "settings",
    "get_settings",
    "EventLog",
    "EventSink",
    "ShortenerError",
]
