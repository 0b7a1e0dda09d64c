"""Exceptions raised by the shortcode registry.

Every error is local and recoverable: the registry is left untouched when
one of these is raised. ``error_code`` is the stable name a caller can
switch on or show to a user.
"""


class ShortenerError(Exception):
    """Base exception for all registry errors."""

    error_code = "ShortenerError"

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context


class URLError(ShortenerError):
    """Base exception for problems with the submitted URL."""


class EmptyUrlError(URLError):
    """The original URL is empty or only whitespace."""

    error_code = "EmptyUrl"


class InvalidUrlFormatError(URLError):
    """The original URL is not an absolute URL."""

    error_code = "InvalidUrlFormat"


class ShortcodeError(ShortenerError):
    """Base exception for shortcode problems."""

    def __init__(self, message: str, shortcode: str, **context):
        super().__init__(message, shortcode=shortcode, **context)
        self.shortcode = shortcode


class InvalidShortcodeError(ShortcodeError):
    """The custom shortcode is not 4-10 alphanumeric characters."""

    error_code = "InvalidShortcode"


class DuplicateShortcodeError(ShortcodeError):
    """The custom shortcode is already held by a retained record."""

    error_code = "DuplicateShortcode"


class ShortcodeNotFoundError(ShortcodeError):
    """No record exists for the shortcode."""

    error_code = "NotFound"


class ShortcodeExpiredError(ShortcodeError):
    """The record exists but its expiry time has passed."""

    error_code = "Expired"


class ShortcodeGenerationError(ShortenerError):
    """Failed to generate a unique shortcode."""

    error_code = "ShortcodeGeneration"
