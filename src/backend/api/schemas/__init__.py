"""
API request/response schemas.
"""

from .airport import AirportRead, ServiceTypeCatalog
from .chat_message import ChatMessageCreate, ChatMessageRead
from .service_request import (
    ServiceRequestCreate,
    ServiceRequestRead,
    ServiceRequestStatusUpdate,
)
from .user import UserRead

__all__ = [
    "AirportRead",
    "ServiceTypeCatalog",
    "ChatMessageCreate",
    "ChatMessageRead",
    "ServiceRequestCreate",
    "ServiceRequestRead",
    "ServiceRequestStatusUpdate",
    "UserRead",
]
