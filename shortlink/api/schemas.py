"""
API Request and Response Schemas

This module defines all Pydantic models for API requests and responses.
Separated from endpoints to keep concerns separated and enable reuse.

Design Principles:
- url and shortcode are accepted as any JSON value; the services decide
  whether they are valid so a wrong type still maps to INVALID_URL or
  INVALID_SHORTCODE
- Response models use the camelCase field names of the public API
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ShortenRequest(BaseModel):
    """Request model for the short URL creation endpoint."""
    model_config = ConfigDict(extra="ignore")

    url: Optional[Any] = Field(None, description="The long URL to shorten")
    validity: Optional[float] = Field(
        None, description="Link lifetime in minutes (default 30)"
    )
    shortcode: Optional[Any] = Field(
        None, description="Custom short code, 3-10 alphanumeric characters"
    )


class ShortenResponse(BaseModel):
    """Response model for the short URL creation endpoint."""
    shortLink: str = Field(..., description="The complete short URL")
    expiry: str = Field(..., description="ISO-8601 expiry timestamp")


class ClickDetailResponse(BaseModel):
    """A single click in the statistics response."""
    timestamp: str
    source: str
    userAgent: str
    location: str


class StatsResponse(BaseModel):
    """Response model for statistics endpoint."""
    totalClicks: int
    originalUrl: str
    creationDate: str
    expiryDate: str
    detailedClickData: List[ClickDetailResponse]


class ErrorResponse(BaseModel):
    """Body of every error response."""
    error: str
    code: str


class HealthResponse(BaseModel):
    """Response model for the health endpoint."""
    status: str
    timestamp: str
    service: str
