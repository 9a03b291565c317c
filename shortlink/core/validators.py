"""
Input Validators and Short Code Generation

This module provides the pure helpers the registry relies on:
- URL syntax validation
- Custom short code validation
- Random short code generation
- ISO-8601 rendering of timestamps

None of these touch the store, so they can run before any mutation.
"""

import re
import secrets
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlsplit

from shortlink.core.exceptions import InvalidShortCodeError

# Custom codes: 3 to 10 alphanumeric characters
SHORT_CODE_PATTERN = re.compile(r"[A-Za-z0-9]{3,10}")

# RFC 3986 scheme syntax
URL_SCHEME_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")

# Generated codes are 3 random bytes rendered as 6 hex characters
GENERATED_CODE_BYTES = 3


def is_valid_url(url: str) -> bool:
    """
    Check that a string is a syntactically valid absolute URL.

    An absolute URL needs a scheme followed by a non-empty remainder, so
    ``mailto:a@b.com`` and ``urn:isbn:0451450523`` qualify. When an authority
    (``//host[:port]``) is present, the host must be non-empty and free of
    whitespace and the port must be a valid number. Surrounding whitespace
    is ignored.

    Args:
        url: The URL string to validate

    Returns:
        True if valid, False otherwise
    """
    if not url or not isinstance(url, str):
        return False

    url = url.strip()

    try:
        result = urlsplit(url)
        if not URL_SCHEME_PATTERN.fullmatch(result.scheme):
            return False

        rest = url[len(result.scheme) + 1:]
        if not rest:
            return False

        if rest.startswith("//"):
            if not result.hostname:
                return False
            if any(char.isspace() for char in result.netloc):
                return False
            # Accessing .port validates it (raises ValueError when out of range)
            result.port
    except ValueError:
        return False

    return True


def is_valid_short_code(short_code: str) -> bool:
    """Return True if ``short_code`` may be used as a custom code."""
    return isinstance(short_code, str) and bool(SHORT_CODE_PATTERN.fullmatch(short_code))


def generate_short_code() -> str:
    """
    Generate a random short code.

    Collisions are possible (16^6 codes) and are left for the caller to
    detect and report.

    Example:
        generate_short_code() -> "9f3a1c"
    """
    return secrets.token_hex(GENERATED_CODE_BYTES)


def pick_short_code(custom_code: Optional[str] = None) -> str:
    """
    Pick the short code for a new link.

    Args:
        custom_code: User supplied code (optional). Empty means "generate one".

    Returns:
        The custom code if supplied and valid, otherwise a random code

    Raises:
        InvalidShortCodeError: If a custom code is supplied but malformed
    """
    if custom_code:
        if not is_valid_short_code(custom_code):
            raise InvalidShortCodeError(custom_code)
        return custom_code
    return generate_short_code()


def to_iso8601(value: datetime) -> str:
    """
    Render a datetime as ISO-8601 UTC with millisecond precision.

    Example:
        to_iso8601(datetime(2025, 1, 1, tzinfo=timezone.utc))
            -> "2025-01-01T00:00:00.000Z"
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")
