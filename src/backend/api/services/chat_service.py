"""
Chat service for request-scoped messages.

Messages are append-only and may only be posted while the request is
claimed or in progress.
"""
import logging
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from core.decorators import handle_store_errors, log_database_operation
from core.exceptions import InactiveRequestError, NotFoundError, ValidationError
from crud import ChatMessageCRUD, ServiceRequestCRUD
from db import ChatMessage, utc_now
from api.schemas.chat_message import ChatMessageRead
from api.services.event_publisher import EventBroadcaster
from api.services.event_types import EventType

logger = logging.getLogger(__name__)


class ChatService:
    """Service for posting and listing chat messages."""

    @staticmethod
    @handle_store_errors("post_chat_message")
    @log_database_operation("chat message creation", level="info")
    async def post_message(
        db: AsyncSession,
        broadcaster: EventBroadcaster,
        request_id: UUID,
        author_id: str,
        text: str,
    ) -> ChatMessage:
        """
        Append a message to a request's chat and announce it.

        Args:
            db: Database session
            broadcaster: Event broadcaster
            request_id: Owning request
            author_id: Message author
            text: Message body, stored as given

        Returns:
            The stored message

        Raises:
            ValidationError: Empty text
            NotFoundError: No such request
            InactiveRequestError: Request is not claimed or in progress
        """
        if text is None or not text.strip():
            raise ValidationError("Message text is required", details={"text": "must not be empty"})

        request = await ServiceRequestCRUD.find_by_id(db, request_id, fresh=True)
        if request is None:
            raise NotFoundError(f"Service request {request_id} not found")
        if not request.status.accepts_chat:
            raise InactiveRequestError(
                f"Chat is closed for request {request_id} ({request.status.value})"
            )

        message = await ChatMessageCRUD.create(
            db,
            obj_in={
                "request_id": request_id,
                "user_id": author_id,
                "message": text,
                "created_at": utc_now(),
            },
            commit=True,
        )
        logger.info(f"Message {message.id} posted on request {request_id} by {author_id}")

        payload = ChatMessageRead.model_validate(message).model_dump(mode="json", by_alias=True)
        await broadcaster.publish(
            EventType.NEW_MESSAGE,
            {"requestId": str(request_id), "message": payload},
        )
        return message

    @staticmethod
    @handle_store_errors("list_chat_messages")
    @log_database_operation("chat messages retrieval", level="debug")
    async def list_messages(db: AsyncSession, request_id: UUID) -> List[ChatMessage]:
        """Messages for a request, oldest first."""
        if not await ServiceRequestCRUD.exists(db, request_id):
            raise NotFoundError(f"Service request {request_id} not found")
        return await ChatMessageCRUD.find_by_request_id(db, request_id)
