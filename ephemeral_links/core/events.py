"""Event log for registry outcomes.

Each session owns its own ``EventLog``; nothing is shared between sessions
and the log is discarded with the session that created it.
"""

import logging
from collections import deque
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Protocol

logger = logging.getLogger(__name__)

ERROR = "error"
URL_CREATED = "url_created"
REDIRECT_FAIL = "redirect_fail"
REDIRECT_SUCCESS = "redirect_success"


class EventSink(Protocol):
    """Anything that accepts registry events."""

    def log(self, event_type: str, details: Mapping[str, Any]) -> None:
        ...


class EventLog:
    """Append-only, in-memory event log."""

    def __init__(self, max_entries: Optional[int] = None):
        """Initialize the event log.

        Args:
            max_entries: Keep at most this many entries, dropping the oldest.
                None keeps everything.
        """
        self._entries: deque = deque(maxlen=max_entries)

    def log(self, event_type: str, details: Mapping[str, Any]) -> None:
        """Record an event with the current UTC timestamp."""
        timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        self._entries.append(
            {"timestamp": timestamp, "event_type": event_type, "details": dict(details)}
        )
        logger.debug(f"Event {event_type}: {details}")

    def entries(self) -> list[dict]:
        """Return a copy of the logged entries, oldest first."""
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
