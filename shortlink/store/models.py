"""
Storage Models for URL Shortener Service

This module defines the records kept by the link store:
- UrlRecord: Mapping between a short code and its original URL
- AnalyticsEntry: Click log and aggregate count for a short code
- ClickEvent: A single successful redirect

Design Decisions:
- AnalyticsEntry duplicates original_url, created_at and expiry_time from the
  UrlRecord at creation time and never re-syncs them. Statistics report the
  state at creation.
- click_count (UrlRecord) and total_clicks (AnalyticsEntry) are tracked
  separately and move together on every redirect.
- ClickEvent is frozen: events are appended, never edited or removed.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, NamedTuple

UNKNOWN = "Unknown"
DIRECT = "Direct"


@dataclass
class UrlRecord:
    """
    A shortened URL.

    Fields:
    - original_url: The long URL that was shortened
    - short_code: Unique short code (3-10 alphanumeric characters)
    - created_at: When the link was created (UTC)
    - expiry_time: After this instant redirects are refused
    - click_count: Number of successful redirects
    """
    original_url: str
    short_code: str
    created_at: datetime
    expiry_time: datetime
    click_count: int = 0

    def is_expired(self, now: datetime) -> bool:
        """
        A link is dead from its expiry instant onwards (now >= expiry_time).

        A strict now > expiry_time comparison would keep the link alive for
        that one instant; here expiry_time <= now always refuses.
        """
        return now >= self.expiry_time


@dataclass(frozen=True)
class ClickEvent:
    """A successful redirect, as seen by the HTTP layer."""
    timestamp: datetime
    user_agent: str = UNKNOWN
    referrer: str = DIRECT
    ip: str = UNKNOWN


@dataclass
class AnalyticsEntry:
    """Append-only click log for one short code."""
    original_url: str
    created_at: datetime
    expiry_time: datetime
    clicks: List[ClickEvent] = field(default_factory=list)
    total_clicks: int = 0


class CreatedLink(NamedTuple):
    """Result of creating a short link."""
    short_code: str
    expiry_time: datetime


@dataclass(frozen=True)
class ClickDetail:
    """Read-side view of a click. No geolocation exists, so location is fixed."""
    timestamp: datetime
    source: str
    user_agent: str
    location: str = UNKNOWN


@dataclass(frozen=True)
class LinkStatistics:
    """Aggregate statistics for a short code."""
    total_clicks: int
    original_url: str
    creation_date: datetime
    expiry_date: datetime
    clicks: List[ClickDetail]
