"""
Error taxonomy for Pastebin Lite.

Every error the lifecycle raises on purpose derives from ``PasteError`` and
carries the message and HTTP status the API responds with.
"""
from typing import Optional

CONTENT_REQUIRED = "Content is required and must be a non-empty string"
INVALID_TTL = "ttl_seconds must be an integer >= 1"
INVALID_MAX_VIEWS = "max_views must be an integer >= 1"
INVALID_JSON = "Invalid JSON in request body"
INVALID_TEST_HEADER = "Invalid x-test-now-ms header value"
NOT_FOUND = "Paste not found or unavailable"
INTERNAL_ERROR = "Internal server error"


class ConfigurationError(Exception):
    """Raised when environment settings cannot be parsed."""


class PasteError(Exception):
    """Base class for lifecycle errors."""

    status_code = 500
    default_message = INTERNAL_ERROR

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PasteError):
    """Client sent something the service refuses to store."""

    status_code = 400


class InvalidContentError(ValidationError):
    default_message = CONTENT_REQUIRED


class InvalidTTLError(ValidationError):
    default_message = INVALID_TTL


class InvalidMaxViewsError(ValidationError):
    default_message = INVALID_MAX_VIEWS


class InvalidBodyError(ValidationError):
    default_message = INVALID_JSON


class InvalidTestClockError(ValidationError):
    default_message = INVALID_TEST_HEADER


class PasteNotFoundError(PasteError):
    """Missing, expired and view-exhausted pastes all look the same."""

    status_code = 404
    default_message = NOT_FOUND


class StoreUnavailableError(PasteError):
    """The durable store could not be reached or refused the command."""


class CorruptPasteError(PasteError):
    """A stored record is missing fields or holds unparseable values."""
