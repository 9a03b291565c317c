"""
Link Store Abstraction Interface

This module defines the storage abstraction that the services depend on.
It allows replacing the in-memory store with another backend without
changing the registry or the analytics log.

The store owns both maps (short code -> UrlRecord and
short code -> AnalyticsEntry) and the lock that serializes every operation
on them.
"""

from abc import ABC, abstractmethod
from typing import AsyncContextManager, Optional

from shortlink.store.models import AnalyticsEntry, UrlRecord


class LinkStore(ABC):
    """
    Abstract base class for link stores.

    Every read or write must happen inside ``transaction()``; the services
    open exactly one transaction per operation and call the accessors below
    while holding it.
    """

    @abstractmethod
    def transaction(self) -> AsyncContextManager[None]:
        """
        Acquire exclusive access to both maps.

        Returns:
            Async context manager held for the duration of one operation
        """
        pass

    @abstractmethod
    def has_code(self, short_code: str) -> bool:
        """Return True if the code is registered (expired or not)."""
        pass

    @abstractmethod
    def get_url_record(self, short_code: str) -> Optional[UrlRecord]:
        pass

    @abstractmethod
    def put_url_record(self, record: UrlRecord) -> None:
        pass

    @abstractmethod
    def get_analytics(self, short_code: str) -> Optional[AnalyticsEntry]:
        pass

    @abstractmethod
    def put_analytics(self, short_code: str, entry: AnalyticsEntry) -> None:
        pass
