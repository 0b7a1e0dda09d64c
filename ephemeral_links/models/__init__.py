"""Models package for Ephemeral Links."""

from .url import UrlRecord, URLCreate, ErrorResponse

__all__ = ["UrlRecord", "URLCreate", "ErrorResponse"]
