"""
Configuration Settings

This module defines application configuration using Pydantic Settings.
All configuration is loaded from environment variables or .env file.

Design Decisions:
- Uses pydantic-settings for type-safe configuration
- Supports multiple environments (production, staging, dev)
- Storage is in-memory only, so there is no database configuration
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Settings", "settings"]


class EnvSettingsOptions(Enum):
    """Environment options for deployment."""
    production = "production"
    staging = "staging"
    development = "dev"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Project Configuration
    ENV_SETTING: EnvSettingsOptions = Field(
        default=EnvSettingsOptions.development,
        description="Environment setting (production, staging, dev)"
    )
    SERVICE_NAME: str = Field(
        default="URL Shortener Microservice",
        description="Service name reported by the health endpoint"
    )

    # Application Configuration
    BASE_URL: str = Field(
        default="http://localhost:8000",
        description="Base URL for generating short URLs"
    )
    DEFAULT_VALIDITY_MINUTES: float = Field(
        default=30,
        description="Link lifetime in minutes when a request gives none"
    )

    # Server Configuration (used by `python -m shortlink`)
    HOST: str = Field(default="0.0.0.0", description="Interface to bind")
    PORT: int = Field(default=8000, description="Port to listen on")

    # Logging
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Level for the url_shortener logger"
    )


settings = Settings()
