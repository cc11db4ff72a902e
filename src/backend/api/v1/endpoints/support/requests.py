"""
Service Request API endpoints.

This module provides endpoints for the service request lifecycle:
- Creation by pilots
- Listing by airport, pilot, assigned crew, or open status
- Claiming by ground crew (first claimer wins)
- Status changes (in progress, completed, cancelled)

**Authentication:** Every endpoint except the open-request and per-pilot
listings requires the identity header.
"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from core.database import get_session
from core.dependencies import get_broadcaster, get_current_user
from core.rate_limit import limiter
from db import User
from api.schemas import (
    ServiceRequestCreate,
    ServiceRequestRead,
    ServiceRequestStatusUpdate,
)
from api.services.event_publisher import EventBroadcaster
from api.services.request_service import RequestService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[ServiceRequestRead])
async def list_requests(
    airport: Optional[str] = Query(None, description="ICAO code to filter by"),
    role: Optional[str] = Query(None, description="'pilot' or 'crew' to list your own requests"),
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    """
    List service requests for the dashboard.

    - role=pilot: requests created by the caller
    - role=crew: requests claimed by the caller
    - airport=XXXX: all requests at that airport
    - otherwise: all open requests

    Results are newest first.
    """
    if role == "pilot":
        return await RequestService.list_by_pilot(db, current_user.id)
    if role == "crew":
        return await RequestService.list_by_ground_crew(db, current_user.id)
    if airport:
        return await RequestService.list_by_airport(db, airport)
    return await RequestService.list_open(db)


@router.get("/open", response_model=List[ServiceRequestRead])
async def list_open_requests(
    airport: Optional[str] = Query(None, description="ICAO code to filter by"),
    db: AsyncSession = Depends(get_session),
):
    """List open requests, optionally at one airport. No authentication required."""
    return await RequestService.list_open(db, airport)


@router.get("/pilot/{pilot_id}", response_model=List[ServiceRequestRead])
async def list_pilot_requests(
    pilot_id: str,
    db: AsyncSession = Depends(get_session),
):
    return await RequestService.list_by_pilot(db, pilot_id)


@router.post("", response_model=ServiceRequestRead, status_code=201)
@limiter.limit(settings.rate_limit.create_request_limit)
async def create_request(
    request: Request,
    request_data: ServiceRequestCreate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
    broadcaster: EventBroadcaster = Depends(get_broadcaster),
):
    """
    Create a new service request as the current pilot.

    The request starts open and unassigned; a new_request event is pushed
    to every connected client.

    **Permissions:** Any authenticated user
    """
    return await RequestService.create_request(
        db,
        broadcaster,
        pilot_id=current_user.id,
        airport_code=request_data.airport_code,
        service_type=request_data.service_type,
        gate=request_data.gate,
        flight_number=request_data.flight_number,
        description=request_data.description,
        aircraft=request_data.aircraft,
    )


@router.get("/{request_id}", response_model=ServiceRequestRead)
async def get_request(
    request_id: UUID,
    db: AsyncSession = Depends(get_session),
):
    return await RequestService.get_request(db, request_id)


@router.post("/{request_id}/claim", response_model=ServiceRequestRead)
async def claim_request(
    request_id: UUID,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
    broadcaster: EventBroadcaster = Depends(get_broadcaster),
):
    """
    Claim an open request for the current crew member.

    Returns 409 claim_conflict when someone else claimed it first and
    403 not_authorized when the pilot tries to claim their own request.
    """
    return await RequestService.claim_request(db, broadcaster, request_id, current_user.id)


@router.post("/{request_id}/status", response_model=ServiceRequestRead)
async def update_request_status(
    request_id: UUID,
    status_data: ServiceRequestStatusUpdate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
    broadcaster: EventBroadcaster = Depends(get_broadcaster),
):
    """
    Change the status of a request.

    The assigned crew member may start or complete the work; the crew
    member or the pilot may cancel.
    """
    return await RequestService.update_status(
        db, broadcaster, request_id, current_user.id, status_data.status
    )
