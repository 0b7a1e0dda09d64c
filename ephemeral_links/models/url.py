"""Pydantic models for Ephemeral Links."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UrlRecord(BaseModel):
    """A shortened URL held by the registry.

    Times are milliseconds since the epoch. ``clicks`` is the only field
    that changes after creation.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    original_url: str = Field(..., description="The original long URL")
    shortcode: str = Field(..., description="Short code mapping to the URL")
    created_at: int = Field(..., description="Creation time in epoch milliseconds")
    expires_at: int = Field(..., description="Expiry time in epoch milliseconds")
    clicks: int = Field(0, ge=0, description="Successful redirects so far")

    def is_expired(self, now: int) -> bool:
        """Whether the record can no longer be resolved at ``now``."""
        return self.expires_at < now

    def to_event(self) -> dict:
        """Event-log form of the record, keyed the way the browser client expects."""
        return self.model_dump(by_alias=True)


class URLCreate(BaseModel):
    """Model for creating a short URL.

    Values are checked by the registry rather than here, so a blank or
    malformed submission gets the same error the registry reports.
    """

    original_url: str = Field(..., description="The original long URL to shorten")
    custom_code: Optional[str] = Field(None, description="Custom short code (4-10 alphanumeric)")
    # Passed through untouched; the registry decides what counts as numeric.
    validity_minutes: Any = Field(None, description="Minutes until the short URL expires (default 30)")


class ErrorResponse(BaseModel):
    """Model for error responses."""

    detail: str
    error_code: Optional[str] = None
