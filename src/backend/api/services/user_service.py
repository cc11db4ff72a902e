"""
User service: identity upsert for callers asserted by the identity provider.
"""
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from core.decorators import handle_store_errors
from core.exceptions import ValidationError
from crud import UserCRUD
from db import User

logger = logging.getLogger(__name__)


class UserService:
    """Service for user records."""

    @staticmethod
    @handle_store_errors("upsert_user")
    async def upsert_user(
        db: AsyncSession,
        user_id: str,
        display_name: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> User:
        """Create the user on first sight, refresh name and avatar afterwards."""
        user_id = (user_id or "").strip()
        if not user_id:
            raise ValidationError("User identifier is required")

        user = await UserCRUD.upsert(
            db,
            user_id,
            display_name=(display_name or "").strip() or None,
            avatar_url=(avatar_url or "").strip() or None,
        )
        await db.commit()
        logger.debug(f"User {user_id} upserted")
        return user
