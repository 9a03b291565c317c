"""
FastAPI Application Entry Point

This module builds the FastAPI application and configures:
- API routes
- Middleware (logging, CORS)
- Exception handlers
- The link store and the services that share it

Design Decisions:
- create_app() wires a fresh store per application instead of keeping one
  in module state, so tests get an isolated service
- Health endpoints are defined before the router so they win over the
  catch-all short code route
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shortlink.api import endpoints
from shortlink.api.deps import get_clock
from shortlink.api.errors import add_exception_handlers
from shortlink.api.schemas import HealthResponse
from shortlink.core.clock import Clock, system_clock
from shortlink.core.setting import EnvSettingsOptions, Settings, settings
from shortlink.core.validators import to_iso8601
from shortlink.middleware.logging import add_logging_middleware, configure_logging
from shortlink.services.analytics_log import AnalyticsLog
from shortlink.services.code_registry import CodeRegistry
from shortlink.store.memory import get_link_store

logger = logging.getLogger("url_shortener")

VERSION = "1.0.0"


def create_app(
    app_settings: Optional[Settings] = None,
    clock: Optional[Clock] = None
) -> FastAPI:
    """
    Build a fully wired application.

    Args:
        app_settings: Settings to use (defaults to the environment settings)
        clock: Time source for the services (defaults to the system clock)

    Returns:
        FastAPI application instance
    """
    app_settings = app_settings or settings
    clock = clock or system_clock

    configure_logging(app_settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        base_url = app_settings.BASE_URL.rstrip("/")
        logger.info(f"{app_settings.SERVICE_NAME} started")
        logger.info(f"Health check available at: {base_url}/health")
        logger.info(f"API Base URL: {base_url}")
        yield
        logger.info(f"{app_settings.SERVICE_NAME} stopped")

    # API documentation is not served in production
    show_docs = app_settings.ENV_SETTING != EnvSettingsOptions.production

    app = FastAPI(
        title="URL Shortener Service",
        description="In-memory URL shortener with expiring links and click analytics",
        version=VERSION,
        docs_url="/docs" if show_docs else None,  # Swagger UI documentation
        redoc_url="/redoc" if show_docs else None,  # ReDoc documentation
        openapi_url="/openapi.json" if show_docs else None,
        lifespan=lifespan,
    )

    store = get_link_store()
    analytics_log = AnalyticsLog(store)
    app.state.settings = app_settings
    app.state.clock = clock
    app.state.store = store
    app.state.analytics_log = analytics_log
    app.state.code_registry = CodeRegistry(
        store,
        analytics_log,
        clock=clock,
        default_validity_minutes=app_settings.DEFAULT_VALIDITY_MINUTES
    )

    add_exception_handlers(app)
    add_logging_middleware(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", tags=["Health"])
    async def root():
        """Service banner."""
        return {
            "message": app_settings.SERVICE_NAME,
            "version": VERSION,
            "docs": "/docs" if show_docs else None
        }

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(service_clock: Clock = Depends(get_clock)) -> HealthResponse:
        """
        Health check endpoint for monitoring.

        Returns:
            Health status of the service
        """
        return HealthResponse(
            status="healthy",
            timestamp=to_iso8601(service_clock.now()),
            service=app_settings.SERVICE_NAME
        )

    app.include_router(endpoints.router, tags=["URL Shortener"])

    return app


app = create_app()
