"""
Application factory for FastAPI.

This module provides the create_app() function that creates and configures
the FastAPI application instance.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from api.services.event_publisher import ConnectionRegistry, EventBroadcaster
from api.v1 import api_router, ws_router
from app.routes import health_router
from core.config import settings
from core.error_handlers import register_exception_handlers
from core.lifespan import lifespan
from core.middleware import CorrelationIdMiddleware
from core.rate_limit import limiter


def create_app() -> FastAPI:
    """
    Application factory function.

    Creates and configures the FastAPI application with all necessary
    middleware, routes, and instrumentation. Each app owns its own
    connection registry and broadcaster.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    # Create FastAPI app
    app = FastAPI(
        title=settings.api.app_name,
        version=settings.api.app_version,
        description="Ground service request coordination for flight-simulator airports",
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    # Real-time fan-out
    registry = ConnectionRegistry()
    app.state.connection_registry = registry
    app.state.broadcaster = EventBroadcaster(
        registry, send_timeout=settings.websocket.send_timeout_seconds
    )

    # Add rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=[
            "Content-Type",
            "Accept",
            "Origin",
            "X-Correlation-ID",
            settings.auth.user_id_header,
            settings.auth.display_name_header,
            settings.auth.avatar_header,
        ],
        expose_headers=["X-Correlation-ID"],
    )

    # Correlation IDs for log lines (added last so it runs first)
    app.add_middleware(CorrelationIdMiddleware)

    # Include routers
    app.include_router(health_router)
    app.include_router(api_router, prefix=settings.api.api_v1_prefix)
    app.include_router(ws_router)

    # Instrumentation
    app.mount("/metrics", make_asgi_app())

    return app
