"""
CRUD layer for database operations.

This package contains all data access logic isolated from business logic.

Pattern:
    await ServiceRequestCRUD.find_by_id(db, request_id)
"""

from .airport_crud import AirportCRUD
from .base_repository import BaseCRUD
from .chat_crud import ChatMessageCRUD
from .service_request_crud import ServiceRequestCRUD
from .user_crud import UserCRUD

__all__ = [
    "AirportCRUD",
    "BaseCRUD",
    "ChatMessageCRUD",
    "ServiceRequestCRUD",
    "UserCRUD",
]
