"""
Clock

Single source of wall-clock time for the service.

Services receive a clock instead of calling datetime directly, so expiry
behaviour can be exercised in tests without sleeping.
"""

from datetime import datetime, timezone


class Clock:
    """System clock returning timezone-aware UTC datetimes."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


system_clock = Clock()
