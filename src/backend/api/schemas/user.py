"""
User schemas for API serialization.
"""

from datetime import datetime
from typing import Optional

from core.schema_base import HTTPSchemaModel


class UserRead(HTTPSchemaModel):
    """Current user as seen by the identity provider."""

    id: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime
