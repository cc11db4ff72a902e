"""
Chat API endpoints.

Messages are scoped to a service request and can only be posted while the
request is claimed or in progress.
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from core.database import get_session
from core.dependencies import get_broadcaster, get_current_user
from core.rate_limit import limiter
from db import User
from api.schemas import ChatMessageCreate, ChatMessageRead
from api.services.chat_service import ChatService
from api.services.event_publisher import EventBroadcaster

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{request_id}/messages", response_model=List[ChatMessageRead])
async def list_messages(
    request_id: UUID,
    db: AsyncSession = Depends(get_session),
):
    """Messages for a request, oldest first."""
    return await ChatService.list_messages(db, request_id)


@router.post("/{request_id}/messages", response_model=ChatMessageRead, status_code=201)
@limiter.limit(settings.rate_limit.chat_message_limit)
async def post_message(
    request: Request,
    request_id: UUID,
    message_data: ChatMessageCreate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
    broadcaster: EventBroadcaster = Depends(get_broadcaster),
):
    """
    Post a chat message on a request as the current user.

    A new_message event carrying {requestId, message} is pushed to every
    connected client.
    """
    return await ChatService.post_message(
        db, broadcaster, request_id, current_user.id, message_data.text
    )
