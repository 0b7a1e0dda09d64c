"""Shortcode registry.

Holds the URL records of one session keyed by shortcode, in insertion
order. Records are created by ``create``, have their click counter bumped
by ``resolve`` and are dropped by ``sweep``; nothing else changes them.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional

from .config import Settings, settings as default_settings
from .events import ERROR, REDIRECT_FAIL, REDIRECT_SUCCESS, URL_CREATED, EventSink
from .exceptions import (
    DuplicateShortcodeError,
    EmptyUrlError,
    InvalidShortcodeError,
    InvalidUrlFormatError,
    ShortcodeExpiredError,
    ShortcodeNotFoundError,
)
from ..models.url import UrlRecord
from ..utils.shortener import (
    generate_short_code,
    is_absolute_url,
    is_valid_shortcode,
    now_ms,
    parse_validity_minutes,
)

logger = logging.getLogger(__name__)

MS_PER_MINUTE = 60_000

Clock = Callable[[], int]


@dataclass(frozen=True)
class Redirect:
    """Navigation requested by a successful resolution.

    The caller navigates to ``url`` after ``delay_ms``.
    """

    record: UrlRecord
    url: str
    delay_ms: int


def sweep_records(records: Iterable[UrlRecord], now: int) -> list[UrlRecord]:
    """Return the records still live at ``now``, in their original order."""
    return [record for record in records if record.expires_at > now]


class Registry:
    """In-memory collection of URL records for one session."""

    def __init__(
        self,
        sink: Optional[EventSink] = None,
        clock: Optional[Clock] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize the registry.

        Args:
            sink: Receives an event for every create and resolve outcome.
            clock: Returns the current time in epoch milliseconds.
            settings: Defaults for validity, code length and redirect delay.
        """
        self.sink = sink
        self.clock = clock or now_ms
        self.settings = settings or default_settings
        self._records: dict[str, UrlRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[UrlRecord]:
        return iter(list(self._records.values()))

    def __contains__(self, shortcode: object) -> bool:
        return shortcode in self._records

    def shortcodes(self) -> set[str]:
        """All retained shortcodes, expired-but-unswept ones included."""
        return set(self._records)

    def _emit(self, event_type: str, details: Mapping[str, Any]) -> None:
        if self.sink is None:
            return
        try:
            self.sink.log(event_type, details)
        except Exception as e:
            logger.warning(f"Event sink failed for {event_type}: {e}", exc_info=True)

    def create(
        self,
        original_url: Optional[str],
        custom_code: Optional[str] = None,
        validity_minutes: Any = None,
    ) -> UrlRecord:
        """Create a short URL record.

        Args:
            original_url: The long URL to shorten.
            custom_code: Optional shortcode to use instead of a generated one.
            validity_minutes: Minutes until expiry. Missing, non-numeric or
                non-positive values fall back to the configured default.

        Returns:
            The newly added record.

        Raises:
            EmptyUrlError: The URL is blank.
            InvalidUrlFormatError: The URL is not absolute.
            InvalidShortcodeError: The custom code is malformed.
            DuplicateShortcodeError: The custom code is already retained.
        """
        url = (original_url or "").strip()
        if not url:
            self._emit(ERROR, {"message": "Empty original URL submitted"})
            raise EmptyUrlError("Original URL is required.")

        if not is_absolute_url(url):
            self._emit(ERROR, {"message": "Invalid URL format submitted", "url": url})
            raise InvalidUrlFormatError("Invalid URL format.", url=url)

        shortcode = (custom_code or "").strip()
        if shortcode:
            if not is_valid_shortcode(shortcode):
                self._emit(ERROR, {"message": "Invalid custom shortcode", "shortcode": shortcode})
                raise InvalidShortcodeError(
                    "Custom shortcode must be alphanumeric and 4-10 characters long.",
                    shortcode,
                )
            if shortcode in self:
                self._emit(ERROR, {"message": "Duplicate custom shortcode", "shortcode": shortcode})
                raise DuplicateShortcodeError("Custom shortcode already in use.", shortcode)
        else:
            shortcode = generate_short_code(
                self.shortcodes(),
                length=self.settings.generated_code_length,
                max_attempts=self.settings.max_generation_attempts,
            )

        minutes = parse_validity_minutes(validity_minutes, self.settings.default_validity_minutes)
        now = self.clock()
        record = UrlRecord(
            original_url=url,
            shortcode=shortcode,
            created_at=now,
            expires_at=now + minutes * MS_PER_MINUTE,
            clicks=0,
        )
        self._records[shortcode] = record

        logger.info(f"Created short URL: {shortcode} ({minutes} min)")
        self._emit(URL_CREATED, record.to_event())
        return record

    def resolve(self, shortcode: str, now: Optional[int] = None) -> Redirect:
        """Resolve a shortcode for redirection and count the click.

        Args:
            shortcode: The short URL code.
            now: Resolution time in epoch milliseconds. Defaults to the clock.

        Returns:
            The navigation the caller should perform.

        Raises:
            ShortcodeNotFoundError: No record holds the shortcode.
            ShortcodeExpiredError: The record has expired. It is not removed.
        """
        record = self._records.get(shortcode)
        if record is None:
            self._emit(REDIRECT_FAIL, {"shortcode": shortcode, "reason": "Not found"})
            raise ShortcodeNotFoundError("Short URL not found.", shortcode)

        now = self.clock() if now is None else now
        if record.is_expired(now):
            self._emit(REDIRECT_FAIL, {"shortcode": shortcode, "reason": "Expired"})
            raise ShortcodeExpiredError("Short URL has expired.", shortcode)

        record.clicks += 1
        self._emit(REDIRECT_SUCCESS, {"shortcode": shortcode, "originalUrl": record.original_url})
        return Redirect(record=record, url=record.original_url, delay_ms=self.settings.redirect_delay_ms)

    def get_stats(self, shortcode: str) -> Optional[UrlRecord]:
        """Look up a record without side effects.

        Expired records are returned as-is; compare ``expires_at`` to tell
        them apart from live ones.
        """
        return self._records.get(shortcode)

    def sweep(self, now: Optional[int] = None) -> int:
        """Drop every record whose expiry time has passed.

        Returns:
            Number of records removed.
        """
        now = self.clock() if now is None else now
        live = sweep_records(self._records.values(), now)
        removed = len(self._records) - len(live)
        self._records = {record.shortcode: record for record in live}
        if removed:
            logger.debug(f"Swept {removed} expired short URLs")
        return removed
