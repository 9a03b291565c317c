"""
Request Dependencies

FastAPI dependency functions that hand the endpoints their collaborators.
The services are created once per application by create_app() and kept on
app.state, so each application (and each test client) has its own store.
"""

from fastapi import Request

from shortlink.core.clock import Clock
from shortlink.core.setting import Settings
from shortlink.services.analytics_log import AnalyticsLog
from shortlink.services.code_registry import CodeRegistry


def get_client_ip(request: Request) -> str:
    """
    Extract client IP address from request.

    Handles proxies and load balancers by checking X-Forwarded-For header.

    Args:
        request: FastAPI Request object

    Returns:
        IP address as string, "Unknown" when not available
    """
    # Check for forwarded IP (from proxy/load balancer)
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        # X-Forwarded-For can contain multiple IPs, take the first one
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop

    # Fallback to direct client IP
    return request.client.host if request.client and request.client.host else "Unknown"


def get_code_registry(request: Request) -> CodeRegistry:
    return request.app.state.code_registry


def get_analytics_log(request: Request) -> AnalyticsLog:
    return request.app.state.analytics_log


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_clock(request: Request) -> Clock:
    return request.app.state.clock
