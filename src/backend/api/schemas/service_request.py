"""
Service Request schemas for API validation and serialization.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import AliasChoices, Field

from core.schema_base import HTTPSchemaModel
from db.enums import RequestStatus, ServiceType


class ServiceRequestCreate(HTTPSchemaModel):
    """Schema for creating a new service request (pilot inferred from identity).

    Fields are plain strings so that emptiness, membership in the service
    catalog and airport existence are all reported as the same
    validation_error by the service layer.
    """

    airport_code: str = Field(
        ...,
        validation_alias=AliasChoices(
            "airportCode", "airport_code", "airportIcao", "airport_icao"
        ),
    )
    service_type: str = Field(..., max_length=64)
    gate: str = Field(..., max_length=64)
    flight_number: str = Field(..., max_length=32)
    aircraft: Optional[str] = Field(None, max_length=64)
    description: str


class ServiceRequestStatusUpdate(HTTPSchemaModel):
    """Schema for a status change request."""

    status: str = Field(..., description="in_progress, completed or cancelled")


class ServiceRequestRead(HTTPSchemaModel):
    """Schema for reading service request data."""

    id: UUID
    pilot_id: str
    airport_icao: str
    service_type: ServiceType
    gate: str
    flight_number: str
    aircraft: Optional[str] = None
    description: str
    status: RequestStatus
    ground_crew_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime
