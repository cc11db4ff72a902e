"""
User CRUD for database operations.

Handles all database queries related to users.
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from db import User, utc_now
from crud.base_repository import BaseCRUD

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class UserCRUD(BaseCRUD[User]):
    """CRUD for User database operations."""

    model = User

    @classmethod
    async def upsert(
        cls,
        db: AsyncSession,
        user_id: str,
        *,
        display_name: Optional[str] = None,
        avatar_url: Optional[str] = None
    ) -> User:
        """
        Insert the user on first sight, refresh profile fields afterwards.

        Missing profile values never overwrite stored ones.

        Args:
            db: Database session
            user_id: Identifier asserted by the identity provider
            display_name: Optional display name
            avatar_url: Optional avatar URL

        Returns:
            The stored user
        """
        now = utc_now()
        dialect = db.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)

        if insert is None:
            # Read-then-write for backends without ON CONFLICT
            user = await cls.find_by_id(db, user_id)
            if user is None:
                user = User(id=user_id, created_at=now)
                db.add(user)
            if display_name is not None:
                user.display_name = display_name
            if avatar_url is not None:
                user.avatar_url = avatar_url
            user.updated_at = now
            await db.flush()
            return user

        stmt = insert(User).values(
            id=user_id,
            display_name=display_name,
            avatar_url=avatar_url,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[User.id],
            set_={
                "display_name": func.coalesce(stmt.excluded.display_name, User.display_name),
                "avatar_url": func.coalesce(stmt.excluded.avatar_url, User.avatar_url),
                "updated_at": now,
            },
        )
        await db.execute(stmt)

        result = await db.execute(
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()
