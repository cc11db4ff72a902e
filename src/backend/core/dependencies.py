"""
Identity and shared-object dependencies for FastAPI.

The external identity provider authenticates callers and forwards a stable
user identifier in a request header. This module turns that header into a
persisted User and hands out the process-wide event broadcaster.
"""

from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import HTTPConnection

from core.config import settings
from core.database import get_session
from db import User


class AuthenticationError(HTTPException):
    """Custom authentication error."""

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def _header(request: Request, name: str) -> Optional[str]:
    value = request.headers.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def get_current_user_id(request: Request) -> str:
    """Asserted user identifier, or 401 when absent."""
    user_id = _header(request, settings.auth.user_id_header)
    if not user_id:
        raise AuthenticationError()
    return user_id


async def get_current_user(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_session),
) -> User:
    """Get the current user, creating or refreshing the stored record.

    Args:
        request: Incoming request (profile headers are optional)
        user_id: Asserted user identifier
        db: Database session

    Returns:
        The persisted User
    """
    # Imported here to keep core free of an import cycle through api.services
    from api.services.user_service import UserService

    return await UserService.upsert_user(
        db,
        user_id,
        display_name=_header(request, settings.auth.display_name_header),
        avatar_url=_header(request, settings.auth.avatar_header),
    )


def get_broadcaster(connection: HTTPConnection):
    """Process-wide EventBroadcaster created by the app factory.

    Typed on HTTPConnection so HTTP and WebSocket routes can both use it.
    """
    return connection.app.state.broadcaster


def get_connection_registry(connection: HTTPConnection):
    return connection.app.state.connection_registry
