"""URL shortening utilities module.

This module handles the generation and validation of short codes, the
absolute URL check applied to submitted links, and parsing of the
optional validity period.
"""

import math
import random
import re
import string
import time
import logging
from typing import AbstractSet, Any, Optional

from pydantic import AnyUrl, TypeAdapter, ValidationError

from ..core.config import MAX_SHORTCODE_LENGTH, MIN_SHORTCODE_LENGTH, settings
from ..core.exceptions import ShortcodeGenerationError

logger = logging.getLogger(__name__)


# Characters allowed in short codes
ALPHABET = string.ascii_letters + string.digits

SHORTCODE_PATTERN = re.compile(r"[A-Za-z0-9]+")
LEADING_INT_PATTERN = re.compile(r"\s*([+-]?\d+)")

_absolute_url = TypeAdapter(AnyUrl)


def now_ms() -> int:
    """Current time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def is_valid_shortcode(code: Any) -> bool:
    """Validate short code format.

    Args:
        code: Candidate short code. Anything that is not a string is invalid.

    Returns:
        True if the code is 4-10 alphanumeric characters, False otherwise.
    """
    if not isinstance(code, str):
        return False
    if len(code) < MIN_SHORTCODE_LENGTH or len(code) > MAX_SHORTCODE_LENGTH:
        return False
    return SHORTCODE_PATTERN.fullmatch(code) is not None


def generate_short_code(
    existing_codes: AbstractSet[str] = frozenset(),
    length: Optional[int] = None,
    max_attempts: Optional[int] = None,
) -> str:
    """Generate a random short code that is not already taken.

    Characters are drawn uniformly from ALPHABET. After ``max_attempts``
    collisions the code grows by one character, up to the longest length
    a valid short code may have.

    Args:
        existing_codes: Codes the result must not collide with.
        length: Starting length. Defaults to settings value.
        max_attempts: Collisions tolerated per length. Defaults to settings value.

    Returns:
        Random short code string.

    Raises:
        ShortcodeGenerationError: If every length up to the maximum is exhausted.
    """
    length = length or settings.generated_code_length
    max_attempts = max_attempts or settings.max_generation_attempts

    while length <= MAX_SHORTCODE_LENGTH:
        for _ in range(max_attempts):
            code = "".join(random.choices(ALPHABET, k=length))
            if code not in existing_codes:
                return code
        logger.warning(
            f"{max_attempts} collisions generating {length}-character short codes, "
            f"retrying with length {length + 1}"
        )
        length += 1

    raise ShortcodeGenerationError("Failed to generate unique short code")


def is_absolute_url(url: str) -> bool:
    """Check that a string parses as an absolute URL.

    Args:
        url: URL to check.

    Returns:
        True if the URL has a scheme and parses, False otherwise.
    """
    try:
        _absolute_url.validate_python(url)
    except ValidationError:
        return False
    return True


def parse_validity_minutes(value: Any, default: Optional[int] = None) -> int:
    """Read a validity period in minutes, falling back to the default.

    Strings are read like a form field: the leading integer counts and the
    rest is ignored, so ``"15min"`` is 15 and ``"1.9"`` is 1.

    Args:
        value: Raw validity value (None, int, float or str).
        default: Fallback minutes. Defaults to settings value.

    Returns:
        A positive number of minutes.
    """
    default = default or settings.default_validity_minutes
    minutes: Optional[int] = None

    if isinstance(value, bool):
        minutes = None
    elif isinstance(value, int):
        minutes = value
    elif isinstance(value, float):
        if math.isfinite(value):
            minutes = int(value)
    elif isinstance(value, str):
        match = LEADING_INT_PATTERN.match(value)
        if match:
            minutes = int(match.group(1))

    if minutes is None or minutes <= 0:
        return default
    return minutes


def create_short_url(base_url: str, short_code: str) -> str:
    """Create full short URL from base URL and short code.

    Args:
        base_url: Base URL of the service.
        short_code: Short code.

    Returns:
        Full short URL string.
    """
    return f"{base_url.rstrip('/')}/{short_code}"
