"""
In-Memory Link Store

This module implements the LinkStore interface with two dictionaries guarded
by a single asyncio.Lock.

Key characteristics:
- Process-local: nothing survives a restart
- Records are never evicted; expired links stay until the process exits
- One lock for both maps, so a create or a redirect is never observed
  half-applied
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional

from shortlink.store.interface import LinkStore
from shortlink.store.models import AnalyticsEntry, UrlRecord


class InMemoryLinkStore(LinkStore):
    """Dictionary-backed store for a single process."""

    def __init__(self):
        self._urls: Dict[str, UrlRecord] = {}
        self._analytics: Dict[str, AnalyticsEntry] = {}
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        async with self._lock:
            yield

    def has_code(self, short_code: str) -> bool:
        return short_code in self._urls

    def get_url_record(self, short_code: str) -> Optional[UrlRecord]:
        return self._urls.get(short_code)

    def put_url_record(self, record: UrlRecord) -> None:
        self._urls[record.short_code] = record

    def get_analytics(self, short_code: str) -> Optional[AnalyticsEntry]:
        return self._analytics.get(short_code)

    def put_analytics(self, short_code: str, entry: AnalyticsEntry) -> None:
        self._analytics[short_code] = entry

    def __len__(self) -> int:
        return len(self._urls)


def get_link_store() -> LinkStore:
    """
    Factory function to get the link store.

    Returns a fresh store; each application instance owns one.
    To switch backends, return a different LinkStore implementation here.
    """
    return InMemoryLinkStore()
