"""
Custom Exceptions

This module defines the error taxonomy of the URL shortener.

Every exception carries the HTTP status and the machine-readable error code
the API reports for it, so the API layer can render any of them with a single
exception handler:

    {"error": <message>, "code": <error_code>}
"""

from datetime import datetime
from typing import Optional


class URLShortenerException(Exception):
    """Base exception for URL shortener service."""

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingURLError(URLShortenerException):
    """Raised when a create request carries no URL."""

    status_code = 400
    error_code = "MISSING_URL"
    message = "URL is required"


class InvalidURLError(URLShortenerException):
    """Raised when URL validation fails."""

    status_code = 400
    error_code = "INVALID_URL"
    message = "Invalid URL format"

    def __init__(self, url: str):
        self.url = url
        super().__init__()


class InvalidShortCodeError(URLShortenerException):
    """Raised when a custom short code does not match [A-Za-z0-9]{3,10}."""

    status_code = 400
    error_code = "INVALID_SHORTCODE"
    message = "Invalid custom shortcode format"

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__()


class ShortCodeCollisionError(URLShortenerException):
    """Raised when the resulting short code is already registered."""

    status_code = 409
    error_code = "SHORTCODE_COLLISION"
    message = "Shortcode already exists"

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__()


class ShortCodeNotFoundError(URLShortenerException):
    """Raised when a short code is not found in the store."""

    status_code = 404
    error_code = "NOT_FOUND"
    message = "Short URL not found"

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__()


class ExpiredLinkError(URLShortenerException):
    """Raised when a redirect is requested for an expired short code."""

    status_code = 410
    error_code = "EXPIRED_LINK"
    message = "Short URL has expired"

    def __init__(self, short_code: str, expired_at: datetime):
        self.short_code = short_code
        self.expired_at = expired_at
        super().__init__()


class EndpointNotFoundError(URLShortenerException):
    """Raised for routes the service does not serve."""

    status_code = 404
    error_code = "ENDPOINT_NOT_FOUND"
    message = "Endpoint not found"


class StoreConsistencyError(URLShortenerException):
    """
    Raised when the URL map and the analytics map disagree.

    This means the create-then-init atomicity was broken somewhere; it is a
    defect, reported as an internal error and never swallowed.
    """

    def __init__(self, short_code: str, detail: str):
        self.short_code = short_code
        self.detail = detail
        super().__init__()

    def __str__(self) -> str:
        return f"{self.detail}: '{self.short_code}'"


class DuplicateCodeError(StoreConsistencyError):
    """Raised when analytics are initialized twice for the same code."""

    def __init__(self, short_code: str):
        super().__init__(short_code, "Analytics entry already exists")


class UnknownCodeError(StoreConsistencyError):
    """Raised when a click is recorded for a code without analytics."""

    def __init__(self, short_code: str):
        super().__init__(short_code, "No analytics entry for short code")
