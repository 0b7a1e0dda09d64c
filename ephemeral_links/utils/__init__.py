"""Utils package for Ephemeral Links."""

from .shortener import (
    ALPHABET,
    now_ms,
    is_valid_shortcode,
    generate_short_code,
    is_absolute_url,
    parse_validity_minutes,
    create_short_url,
)

__all__ = [
    "ALPHABET",
    "now_ms",
    "is_valid_shortcode",
    "generate_short_code",
    "is_absolute_url",
    "parse_validity_minutes",
    "create_short_url",
]
