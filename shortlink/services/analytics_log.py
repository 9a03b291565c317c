"""
Analytics Log Service

This service owns the click log of every short code:
- Initializing an empty log when a link is created
- Appending click events on successful redirects
- Producing read-side statistics

Design Decisions:
- init() and record_click() are only called by CodeRegistry while it holds
  the store transaction, so they do not lock themselves
- get_statistics() is a standalone read and opens its own transaction
- Statistics are not gated on expiry: expired links keep their history
- Location is always "Unknown"; there is no geolocation
"""

from datetime import datetime

from shortlink.core.exceptions import (
    DuplicateCodeError,
    ShortCodeNotFoundError,
    UnknownCodeError,
)
from shortlink.store.interface import LinkStore
from shortlink.store.models import (
    AnalyticsEntry,
    ClickDetail,
    ClickEvent,
    LinkStatistics,
)


class AnalyticsLog:
    """
    Service for recording clicks and reading statistics.
    """

    def __init__(self, store: LinkStore):
        """
        Initialize the analytics log.

        Args:
            store: Link store shared with the CodeRegistry
        """
        self.store = store

    def init(
        self,
        short_code: str,
        original_url: str,
        created_at: datetime,
        expiry_time: datetime
    ) -> None:
        """
        Create the empty log for a newly registered short code.

        Must be called inside a store transaction.

        Raises:
            DuplicateCodeError: If the code already has a log
        """
        if self.store.get_analytics(short_code) is not None:
            raise DuplicateCodeError(short_code)

        self.store.put_analytics(
            short_code,
            AnalyticsEntry(
                original_url=original_url,
                created_at=created_at,
                expiry_time=expiry_time,
            )
        )

    def record_click(self, short_code: str, event: ClickEvent) -> None:
        """
        Append a click event and bump the total.

        Must be called inside a store transaction.

        Raises:
            UnknownCodeError: If the code has no log
        """
        entry = self.store.get_analytics(short_code)
        if entry is None:
            raise UnknownCodeError(short_code)

        entry.clicks.append(event)
        entry.total_clicks += 1

    async def get_statistics(self, short_code: str) -> LinkStatistics:
        """
        Get statistics for a short code.

        Args:
            short_code: The short code to report on

        Returns:
            LinkStatistics with totals, the values captured at creation and
            the ordered click details

        Raises:
            ShortCodeNotFoundError: If the code is unknown
        """
        async with self.store.transaction():
            entry = self.store.get_analytics(short_code)
            if entry is None:
                raise ShortCodeNotFoundError(short_code)

            return LinkStatistics(
                total_clicks=entry.total_clicks,
                original_url=entry.original_url,
                creation_date=entry.created_at,
                expiry_date=entry.expiry_time,
                clicks=[
                    ClickDetail(
                        timestamp=click.timestamp,
                        source=click.referrer,
                        user_agent=click.user_agent,
                    )
                    for click in entry.clicks
                ],
            )
