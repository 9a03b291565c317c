"""
Services module for business logic separation.

This module contains the service classes that encapsulate business logic,
keeping it separate from API endpoints and the store:
- CodeRegistry: link creation and redirect resolution
- AnalyticsLog: click recording and statistics
"""

from shortlink.services.analytics_log import AnalyticsLog
from shortlink.services.code_registry import CodeRegistry

__all__ = ["AnalyticsLog", "CodeRegistry"]
