"""
Chat CRUD for database operations.

Handles all database queries related to chat messages.
"""
from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db import ChatMessage
from crud.base_repository import BaseCRUD


class ChatMessageCRUD(BaseCRUD[ChatMessage]):
    """CRUD for ChatMessage database operations."""

    model = ChatMessage

    @classmethod
    async def find_by_request_id(
        cls,
        db: AsyncSession,
        request_id: UUID
    ) -> List[ChatMessage]:
        """
        Get all messages for a request.

        Args:
            db: Database session
            request_id: Request ID

        Returns:
            Messages in chronological order (oldest first)
        """
        stmt = (
            select(ChatMessage)
            .where(ChatMessage.request_id == request_id)
            .order_by(ChatMessage.created_at.asc())
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())
