"""
Chat Message schemas for API validation and serialization.
"""

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, Field

from core.schema_base import HTTPSchemaModel


class ChatMessageCreate(HTTPSchemaModel):
    """Schema for posting a chat message (author inferred from identity)."""

    text: str = Field(
        ...,
        max_length=10000,
        validation_alias=AliasChoices("text", "message"),
    )


class ChatMessageRead(HTTPSchemaModel):
    """Schema for reading chat message data."""

    id: UUID
    request_id: UUID
    user_id: str
    message: str
    created_at: datetime
