"""
Health check endpoint handler.
"""

from fastapi import APIRouter, Request

from core.config import settings
from core.database import ping_database

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """
    Health check endpoint for monitoring.
    Checks database connectivity and reports connected subscribers.
    """
    database_ok = await ping_database()
    registry = request.app.state.connection_registry

    return {
        "status": "healthy" if database_ok else "degraded",
        "version": settings.api.app_version,
        "services": {
            "database": {"status": "healthy" if database_ok else "unhealthy"},
            "websocket": {"status": "healthy", "subscribers": len(registry)},
        },
    }
