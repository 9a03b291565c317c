"""
FastAPI Endpoints for URL Shortener Service

This module defines all REST API endpoints with minimal logic.
Endpoints only handle:
- Request parsing (Pydantic models)
- Extracting visitor metadata (IP, User-Agent, Referer)
- Shaping responses
- Delegating to service layer

Errors are raised by the services and rendered by the handlers in
shortlink.api.errors.

Route order matters: the literal /shorturls routes are registered before the
catch-all /{short_code} redirect route.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse

from shortlink.api.deps import (
    get_analytics_log,
    get_client_ip,
    get_code_registry,
    get_settings,
)
from shortlink.api.schemas import (
    ClickDetailResponse,
    ErrorResponse,
    ShortenRequest,
    ShortenResponse,
    StatsResponse,
)
from shortlink.core.exceptions import EndpointNotFoundError
from shortlink.core.setting import Settings
from shortlink.core.validators import to_iso8601
from shortlink.services.analytics_log import AnalyticsLog
from shortlink.services.code_registry import CodeRegistry

# Literal route segments that can never be served as short codes
RESERVED_CODES = frozenset({"shorturls", "health"})

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    410: {"model": ErrorResponse},
}

router = APIRouter()


@router.post(
    "/shorturls",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Create a short URL",
    description="Takes a long URL and returns a short link with its expiry"
)
async def create_short_url(
    body: Optional[ShortenRequest] = None,
    registry: CodeRegistry = Depends(get_code_registry),
    app_settings: Settings = Depends(get_settings)
) -> ShortenResponse:
    """
    Create a new short URL from a long URL.

    Returns:
        ShortenResponse with shortLink and expiry
    """
    body = body or ShortenRequest()

    created = await registry.create(
        body.url,
        validity_minutes=body.validity,
        custom_code=body.shortcode
    )

    return ShortenResponse(
        shortLink=f"{app_settings.BASE_URL.rstrip('/')}/{created.short_code}",
        expiry=to_iso8601(created.expiry_time)
    )


@router.get(
    "/shorturls/{short_code}",
    response_model=StatsResponse,
    responses=ERROR_RESPONSES,
    summary="Get URL statistics",
    description="Returns click statistics for a short URL, expired or not"
)
async def get_url_stats(
    short_code: str,
    analytics: AnalyticsLog = Depends(get_analytics_log)
) -> StatsResponse:
    """
    Get statistics for a short URL.

    Args:
        short_code: The short code to get statistics for

    Returns:
        StatsResponse with totals and per-click details
    """
    stats = await analytics.get_statistics(short_code)

    return StatsResponse(
        totalClicks=stats.total_clicks,
        originalUrl=stats.original_url,
        creationDate=to_iso8601(stats.creation_date),
        expiryDate=to_iso8601(stats.expiry_date),
        detailedClickData=[
            ClickDetailResponse(
                timestamp=to_iso8601(click.timestamp),
                source=click.source,
                userAgent=click.user_agent,
                location=click.location
            )
            for click in stats.clicks
        ]
    )


@router.get(
    "/{short_code}",
    status_code=status.HTTP_302_FOUND,
    responses=ERROR_RESPONSES,
    summary="Redirect to original URL",
    description="Takes a short code and redirects to the original long URL"
)
async def redirect_to_url(
    short_code: str,
    request: Request,
    registry: CodeRegistry = Depends(get_code_registry)
) -> RedirectResponse:
    """
    Redirect to the original URL for a given short code.

    Args:
        short_code: The short code to look up
        request: FastAPI Request object (for visitor metadata)

    Returns:
        RedirectResponse (HTTP 302) to original URL

    Raises:
        EndpointNotFoundError: If the code is a reserved route segment
        ShortCodeNotFoundError: If short code not found
        ExpiredLinkError: If the link has expired
    """
    if short_code in RESERVED_CODES:
        raise EndpointNotFoundError()

    original_url = await registry.resolve(
        short_code,
        user_agent=request.headers.get("User-Agent"),
        referrer=request.headers.get("Referer"),
        ip=get_client_ip(request)
    )

    return RedirectResponse(
        url=original_url,
        status_code=status.HTTP_302_FOUND
    )
