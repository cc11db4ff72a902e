"""
Database models using SQLModel.

Four tables: users, airports, service_requests and chat_messages. Service
requests and chat messages are never physically deleted.
"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

import sqlalchemy as sa
from sqlalchemy import Column, ForeignKey, Index, String, Text
from sqlmodel import Field, SQLModel

from db.enums import RequestStatus, ServiceType


def utc_now():
    """
    Get current time in UTC (timezone-naive) for database storage.

    The API layer serializes these values with a 'Z' suffix.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


def _timestamp_column() -> Column:
    """Naive UTC timestamp column (values come from utc_now)."""
    return Column(sa.DateTime(timezone=False), nullable=False)


class TableModel(SQLModel):
    """Base table model with common functionality."""

    pass


class User(TableModel, table=True):
    """Pilot or ground crew member, identified by the external identity provider."""

    __tablename__ = "users"

    id: str = Field(
        sa_column=Column(String(255), primary_key=True, nullable=False),
        description="Stable identifier issued by the identity provider",
    )
    display_name: Optional[str] = Field(default=None, max_length=255)
    avatar_url: Optional[str] = Field(default=None, max_length=1024)
    created_at: datetime = Field(default_factory=utc_now, sa_column=_timestamp_column())
    updated_at: datetime = Field(default_factory=utc_now, sa_column=_timestamp_column())


class Airport(TableModel, table=True):
    """Supported airport, keyed by ICAO code."""

    __tablename__ = "airports"

    icao: str = Field(
        sa_column=Column(String(4), primary_key=True, nullable=False),
        description="Four-letter ICAO code",
    )
    name: str = Field(max_length=255, nullable=False)


class ServiceRequest(TableModel, table=True):
    """A pilot's request for a ground service at an airport."""

    __tablename__ = "service_requests"

    id: UUID = Field(
        default_factory=uuid4,
        sa_column=Column(sa.Uuid, primary_key=True, nullable=False),
        description="Unique identifier for the service request",
    )

    pilot_id: str = Field(
        sa_column=Column(String(255), ForeignKey("users.id"), nullable=False),
        description="User who created the request",
    )
    airport_icao: str = Field(
        sa_column=Column(String(4), ForeignKey("airports.icao"), nullable=False),
    )
    service_type: ServiceType = Field(
        sa_column=Column(
            sa.Enum(
                ServiceType,
                native_enum=False,
                length=64,
                values_callable=_enum_values,
                validate_strings=True,
            ),
            nullable=False,
        ),
    )
    gate: str = Field(max_length=64, nullable=False)
    flight_number: str = Field(max_length=32, nullable=False)
    aircraft: Optional[str] = Field(default=None, max_length=64)
    description: str = Field(sa_column=Column(Text, nullable=False))

    status: RequestStatus = Field(
        default=RequestStatus.OPEN,
        sa_column=Column(
            sa.Enum(
                RequestStatus,
                native_enum=False,
                length=32,
                values_callable=_enum_values,
                validate_strings=True,
            ),
            nullable=False,
        ),
    )
    # Null while open (and when cancelled before any claim)
    ground_crew_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), ForeignKey("users.id"), nullable=True),
    )

    created_at: datetime = Field(default_factory=utc_now, sa_column=_timestamp_column())
    updated_at: datetime = Field(default_factory=utc_now, sa_column=_timestamp_column())

    __table_args__ = (
        Index("ix_service_requests_airport_created", "airport_icao", "created_at"),
        Index("ix_service_requests_status_created", "status", "created_at"),
        Index("ix_service_requests_pilot_id", "pilot_id"),
        Index("ix_service_requests_ground_crew_id", "ground_crew_id"),
    )


class ChatMessage(TableModel, table=True):
    """Append-only chat message on a service request."""

    __tablename__ = "chat_messages"

    id: UUID = Field(
        default_factory=uuid4,
        sa_column=Column(sa.Uuid, primary_key=True, nullable=False),
    )
    request_id: UUID = Field(
        sa_column=Column(sa.Uuid, ForeignKey("service_requests.id"), nullable=False),
    )
    user_id: str = Field(
        sa_column=Column(String(255), ForeignKey("users.id"), nullable=False),
        description="Author of the message",
    )
    message: str = Field(sa_column=Column(Text, nullable=False))
    created_at: datetime = Field(default_factory=utc_now, sa_column=_timestamp_column())

    __table_args__ = (
        Index("ix_chat_messages_request_created", "request_id", "created_at"),
    )
