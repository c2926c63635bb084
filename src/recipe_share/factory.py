"""Application factory for creating FastAPI instances.

This module provides the create_app factory function that:
- Configures the FastAPI application from settings
- Sets up the middleware stack in the correct order
- Registers exception handlers
- Mounts the v1 API router
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from recipe_share.api.v1.router import router as v1_router
from recipe_share.core.config import Settings, get_settings
from recipe_share.core.events import lifespan
from recipe_share.core.exceptions import setup_exception_handlers
from recipe_share.core.middleware import (
    LoggingMiddleware,
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
    TimingMiddleware,
)
from recipe_share.observability.metrics import setup_metrics
from recipe_share.observability.tracing import setup_tracing


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    docs_enabled = settings.is_non_production
    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Recipe sharing API: recipes, comments, ratings and bookmarks",
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        debug=settings.app.debug,
    )

    # Lifespan and request dependencies read settings from here
    app.state.settings = settings

    setup_exception_handlers(app)
    _setup_middleware(app, settings)
    app.include_router(v1_router, prefix=settings.api.v1_prefix)

    # Observability after routes are mounted
    setup_tracing(app, settings)
    setup_metrics(app, settings)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Middleware is executed in reverse order of addition. From the request's
    perspective: security headers, request ID, timing, logging, gzip, CORS.
    """
    # Credentials are required for the refresh-token cookie
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Process-Time"],
        )

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    app.add_middleware(LoggingMiddleware, prefix=settings.api.v1_prefix)
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
