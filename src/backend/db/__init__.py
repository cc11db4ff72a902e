"""
Database models and enums.

Importing this package registers every table on SQLModel.metadata.
"""
from .enums import SERVICE_TYPES_VERSION, RequestStatus, ServiceType
from .models import (
    Airport,
    ChatMessage,
    ServiceRequest,
    TableModel,
    User,
    utc_now,
)

__all__ = [
    "SERVICE_TYPES_VERSION",
    "RequestStatus",
    "ServiceType",
    "Airport",
    "ChatMessage",
    "ServiceRequest",
    "TableModel",
    "User",
    "utc_now",
]
