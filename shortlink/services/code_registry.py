"""
Code Registry Service

This service handles the core business logic for URL shortening:
- Validating URLs and custom short codes
- Generating random short codes
- Detecting collisions
- Evaluating expiry and counting clicks on redirect

Design Decisions:
- All validation runs before the store transaction is opened, so a rejected
  request leaves no trace
- Collisions are reported to the caller, never retried; this holds for
  generated codes as well as custom ones
- Codes are never recycled: an expired code still collides
- On redirect the analytics append happens before the click count
  increment, inside the same transaction. If the analytics entry is missing
  the append raises and the count is left untouched.
"""

from datetime import timedelta
from dataclasses import replace
from typing import Any, Optional

from shortlink.core.clock import Clock, system_clock
from shortlink.core.exceptions import (
    ExpiredLinkError,
    InvalidURLError,
    MissingURLError,
    ShortCodeCollisionError,
    ShortCodeNotFoundError,
)
from shortlink.core.validators import is_valid_url, pick_short_code
from shortlink.services.analytics_log import AnalyticsLog
from shortlink.store.interface import LinkStore
from shortlink.store.models import (
    DIRECT,
    UNKNOWN,
    ClickEvent,
    CreatedLink,
    UrlRecord,
)

DEFAULT_VALIDITY_MINUTES = 30


class CodeRegistry:
    """
    Core business logic for URL shortening.

    Owns the short code -> UrlRecord mapping and keeps the AnalyticsLog in
    step with it.
    """

    def __init__(
        self,
        store: LinkStore,
        analytics: AnalyticsLog,
        clock: Clock = system_clock,
        default_validity_minutes: float = DEFAULT_VALIDITY_MINUTES
    ):
        """
        Initialize the code registry.

        Args:
            store: Link store shared with the analytics log
            analytics: Analytics log to initialize and append to
            clock: Time source for creation and expiry
            default_validity_minutes: Lifetime used when a request gives none
        """
        self.store = store
        self.analytics = analytics
        self.clock = clock
        self.default_validity_minutes = default_validity_minutes

    async def create(
        self,
        url: Any,
        validity_minutes: Optional[float] = None,
        custom_code: Any = None
    ) -> CreatedLink:
        """
        Create a new short link.

        Args:
            url: The long URL to shorten; surrounding whitespace is dropped
            validity_minutes: Lifetime in minutes; absent or zero means the
                default. Negative values give an already expired link.
            custom_code: Requested short code (optional). Anything other than
                a 3-10 character alphanumeric string is rejected.

        Returns:
            CreatedLink with the short code and expiry time

        Raises:
            MissingURLError: If no URL is given
            InvalidURLError: If URL format is invalid
            InvalidShortCodeError: If the custom code is malformed
            ShortCodeCollisionError: If the resulting code is already taken
        """
        if not url:
            raise MissingURLError()

        if not is_valid_url(url):
            raise InvalidURLError(url)

        url = url.strip()
        short_code = pick_short_code(custom_code)
        validity = validity_minutes or self.default_validity_minutes

        async with self.store.transaction():
            if self.store.has_code(short_code):
                raise ShortCodeCollisionError(short_code)

            created_at = self.clock.now()
            record = UrlRecord(
                original_url=url,
                short_code=short_code,
                created_at=created_at,
                expiry_time=created_at + timedelta(minutes=validity),
            )

            self.analytics.init(
                short_code,
                original_url=record.original_url,
                created_at=record.created_at,
                expiry_time=record.expiry_time,
            )
            self.store.put_url_record(record)

            return CreatedLink(record.short_code, record.expiry_time)

    async def resolve(
        self,
        short_code: str,
        user_agent: Optional[str] = None,
        referrer: Optional[str] = None,
        ip: Optional[str] = None
    ) -> str:
        """
        Resolve a short code for redirection and record the click.

        Args:
            short_code: The short code to look up
            user_agent: Visitor's User-Agent header, "Unknown" if absent
            referrer: Visitor's Referer header, "Direct" if absent
            ip: Visitor's IP address, "Unknown" if absent

        Returns:
            The original URL

        Raises:
            ShortCodeNotFoundError: If the code is unknown
            ExpiredLinkError: If the link has expired (no click is recorded)
        """
        async with self.store.transaction():
            record = self.store.get_url_record(short_code)
            if record is None:
                raise ShortCodeNotFoundError(short_code)

            now = self.clock.now()
            if record.is_expired(now):
                raise ExpiredLinkError(short_code, record.expiry_time)

            event = ClickEvent(
                timestamp=now,
                user_agent=user_agent or UNKNOWN,
                referrer=referrer or DIRECT,
                ip=ip or UNKNOWN,
            )
            self.analytics.record_click(short_code, event)
            record.click_count += 1

            return record.original_url

    async def get_record(self, short_code: str) -> Optional[UrlRecord]:
        """
        Get a copy of the record for a short code.

        Returns:
            UrlRecord copy if found, None otherwise
        """
        async with self.store.transaction():
            record = self.store.get_url_record(short_code)
            return replace(record) if record is not None else None
