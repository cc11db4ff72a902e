"""
API v1 routes.

Endpoints are organized into subdirectories: auth, setting, support, internal.
The WebSocket channel (internal.events) is mounted outside the versioned
prefix.
"""

from fastapi import APIRouter

from .endpoints.auth import auth
from .endpoints.setting import airports, service_types
from .endpoints.support import chat, requests
from .endpoints.internal import events

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])

api_router.include_router(airports.router, prefix="/airports", tags=["airports"])

api_router.include_router(
    service_types.router, prefix="/service-types", tags=["service-types"]
)

api_router.include_router(
    requests.router, prefix="/requests", tags=["requests"]
)

api_router.include_router(chat.router, prefix="/requests", tags=["chat"])

ws_router = events.router

__all__ = ["api_router", "ws_router"]
