"""
Service request lifecycle service.

Owns the request state machine: creation, the compare-and-swap claim, and
guarded status transitions. Every accepted mutation is committed before its
event is published, so subscribers never see a change that a follow-up
query cannot read.
"""
import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from core.decorators import handle_store_errors, log_database_operation
from core.exceptions import (
    ClaimConflictError,
    InvalidTransitionError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from core.metrics import record_claim_attempt, record_transition
from crud import AirportCRUD, ServiceRequestCRUD
from db import RequestStatus, ServiceRequest, ServiceType, utc_now
from api.schemas.service_request import ServiceRequestRead
from api.services.event_publisher import EventBroadcaster
from api.services.event_types import EventType

# Module-level logger using __name__
logger = logging.getLogger(__name__)

# Status changes reachable through update_status. open -> claimed only
# happens through claim.
ALLOWED_TRANSITIONS = frozenset(
    {
        (RequestStatus.CLAIMED, RequestStatus.IN_PROGRESS),
        (RequestStatus.CLAIMED, RequestStatus.COMPLETED),
        (RequestStatus.IN_PROGRESS, RequestStatus.COMPLETED),
        (RequestStatus.OPEN, RequestStatus.CANCELLED),
        (RequestStatus.CLAIMED, RequestStatus.CANCELLED),
        (RequestStatus.IN_PROGRESS, RequestStatus.CANCELLED),
    }
)

UPDATABLE_STATUSES = (
    RequestStatus.IN_PROGRESS,
    RequestStatus.COMPLETED,
    RequestStatus.CANCELLED,
)


def is_allowed_transition(current: RequestStatus, target: RequestStatus) -> bool:
    return (current, target) in ALLOWED_TRANSITIONS


def can_actor_transition(request: ServiceRequest, actor_id: str, target: RequestStatus) -> bool:
    """Only the assigned crew moves work forward; the pilot may also cancel."""
    if target == RequestStatus.CANCELLED:
        return actor_id in (request.ground_crew_id, request.pilot_id)
    return request.ground_crew_id is not None and actor_id == request.ground_crew_id


def serialize_request(request: ServiceRequest) -> Dict[str, Any]:
    """Event payload for a request: same camelCase shape as the HTTP API."""
    return ServiceRequestRead.model_validate(request).model_dump(mode="json", by_alias=True)


def _require(value: Optional[str], field: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required", details={field: "must not be empty"})
    return str(value).strip()


class RequestService:
    """Service for the service request lifecycle."""

    @staticmethod
    @handle_store_errors("create_request")
    @log_database_operation("service request creation", level="info")
    async def create_request(
        db: AsyncSession,
        broadcaster: EventBroadcaster,
        *,
        pilot_id: str,
        airport_code: Optional[str],
        service_type: Optional[str],
        gate: Optional[str],
        flight_number: Optional[str],
        description: Optional[str],
        aircraft: Optional[str] = None,
    ) -> ServiceRequest:
        """
        Create an open service request and announce it.

        Args:
            db: Database session
            broadcaster: Event broadcaster
            pilot_id: Requesting pilot
            airport_code: ICAO code of an existing airport
            service_type: Member of the ServiceType catalog
            gate: Gate or stand label
            flight_number: Flight number
            description: Free-text description
            aircraft: Optional aircraft type

        Returns:
            The created request

        Raises:
            ValidationError: Missing field, unknown service type or unknown airport
        """
        airport_code = _require(airport_code, "airportCode").upper()
        service_type_value = _require(service_type, "serviceType")
        gate = _require(gate, "gate")
        flight_number = _require(flight_number, "flightNumber")
        description = _require(description, "description")
        aircraft = aircraft.strip() if aircraft and aircraft.strip() else None

        try:
            service_type_member = ServiceType(service_type_value)
        except ValueError:
            raise ValidationError(
                f"Unknown service type '{service_type_value}'",
                details={"serviceType": "not in the service type catalog"},
            )

        if not await AirportCRUD.exists(db, airport_code):
            raise ValidationError(
                f"Unknown airport '{airport_code}'",
                details={"airportCode": "no such airport"},
            )

        now = utc_now()
        request = await ServiceRequestCRUD.create(
            db,
            obj_in={
                "pilot_id": pilot_id,
                "airport_icao": airport_code,
                "service_type": service_type_member,
                "gate": gate,
                "flight_number": flight_number,
                "aircraft": aircraft,
                "description": description,
                "status": RequestStatus.OPEN,
                "ground_crew_id": None,
                "created_at": now,
                "updated_at": now,
            },
            commit=True,
        )
        logger.info(
            f"Request {request.id} created by pilot {pilot_id} at {airport_code} ({service_type_member.value})"
        )

        await broadcaster.publish(EventType.NEW_REQUEST, serialize_request(request))
        return request

    @staticmethod
    @handle_store_errors("claim_request")
    @log_database_operation("service request claim", level="info")
    async def claim_request(
        db: AsyncSession,
        broadcaster: EventBroadcaster,
        request_id: UUID,
        crew_id: str,
    ) -> ServiceRequest:
        """
        Claim an open request for a crew member.

        Exactly one of any number of concurrent claimers wins; the rest get
        ClaimConflictError.

        Raises:
            NotFoundError: No such request
            NotAuthorizedError: The pilot tried to claim their own request
            ClaimConflictError: The request is no longer open
        """
        won = await ServiceRequestCRUD.claim_if_open(db, request_id, crew_id, utc_now())
        request = await ServiceRequestCRUD.find_by_id(db, request_id, fresh=True)

        if not won:
            if request is None:
                record_claim_attempt("not_found")
                raise NotFoundError(f"Service request {request_id} not found")
            if request.status == RequestStatus.OPEN and request.pilot_id == crew_id:
                record_claim_attempt("own_request")
                raise NotAuthorizedError("Pilots cannot claim their own request")
            record_claim_attempt("conflict")
            logger.info(
                f"Claim of {request_id} by {crew_id} lost: request is {request.status.value}"
            )
            raise ClaimConflictError(
                f"Service request {request_id} has already been claimed"
            )

        await db.commit()
        record_claim_attempt("won")
        record_transition(RequestStatus.OPEN.value, RequestStatus.CLAIMED.value)
        logger.info(f"Request {request_id} claimed by {crew_id}")

        await broadcaster.publish(EventType.REQUEST_CLAIMED, serialize_request(request))
        return request

    @staticmethod
    @handle_store_errors("update_request_status")
    @log_database_operation("service request status update", level="info")
    async def update_status(
        db: AsyncSession,
        broadcaster: EventBroadcaster,
        request_id: UUID,
        actor_id: str,
        new_status: Optional[str],
    ) -> ServiceRequest:
        """
        Move a request along its lifecycle.

        Args:
            db: Database session
            broadcaster: Event broadcaster
            request_id: Request to update
            actor_id: Caller identity
            new_status: "in_progress", "completed" or "cancelled"

        Returns:
            The updated request

        Raises:
            ValidationError: Unknown status value
            NotFoundError: No such request
            InvalidTransitionError: Edge not allowed from the current status
            NotAuthorizedError: Caller is not a participant or may not perform this transition
        """
        status_value = _require(new_status, "status")
        try:
            target = RequestStatus(status_value)
        except ValueError:
            raise ValidationError(
                f"Unknown status '{status_value}'",
                details={"status": "must be one of in_progress, completed, cancelled"},
            )
        if target not in UPDATABLE_STATUSES:
            raise InvalidTransitionError(
                f"Status '{target.value}' cannot be set directly"
            )

        request = await ServiceRequestCRUD.find_by_id(db, request_id, fresh=True)
        if request is None:
            raise NotFoundError(f"Service request {request_id} not found")

        # Outsiders learn nothing about the request's state
        if actor_id not in (request.pilot_id, request.ground_crew_id):
            raise NotAuthorizedError(
                f"User {actor_id} is not a participant of request {request_id}"
            )

        current = request.status
        if not is_allowed_transition(current, target):
            raise InvalidTransitionError(
                f"Cannot move request from {current.value} to {target.value}"
            )
        if not can_actor_transition(request, actor_id, target):
            raise NotAuthorizedError(
                f"User {actor_id} may not set {target.value} on request {request_id}"
            )

        updated = await ServiceRequestCRUD.transition_status_if(
            db, request_id, current, target, utc_now()
        )
        if not updated:
            await db.rollback()
            raise InvalidTransitionError(
                f"Request {request_id} changed status concurrently, reload and retry"
            )

        request = await ServiceRequestCRUD.find_by_id(db, request_id, fresh=True)
        await db.commit()
        record_transition(current.value, target.value)
        logger.info(
            f"Request {request_id} moved {current.value} -> {target.value} by {actor_id}"
        )

        await broadcaster.publish(EventType.REQUEST_STATUS_UPDATED, serialize_request(request))
        return request

    @staticmethod
    @handle_store_errors("get_request")
    async def get_request(db: AsyncSession, request_id: UUID) -> ServiceRequest:
        request = await ServiceRequestCRUD.find_by_id(db, request_id)
        if request is None:
            raise NotFoundError(f"Service request {request_id} not found")
        return request

    @staticmethod
    @handle_store_errors("list_requests_by_airport")
    async def list_by_airport(db: AsyncSession, airport_code: str) -> List[ServiceRequest]:
        return await ServiceRequestCRUD.list_by_airport(db, airport_code.strip().upper())

    @staticmethod
    @handle_store_errors("list_requests_by_pilot")
    async def list_by_pilot(db: AsyncSession, pilot_id: str) -> List[ServiceRequest]:
        return await ServiceRequestCRUD.list_by_pilot(db, pilot_id)

    @staticmethod
    @handle_store_errors("list_requests_by_ground_crew")
    async def list_by_ground_crew(db: AsyncSession, crew_id: str) -> List[ServiceRequest]:
        return await ServiceRequestCRUD.list_by_ground_crew(db, crew_id)

    @staticmethod
    @handle_store_errors("list_open_requests")
    async def list_open(
        db: AsyncSession, airport_code: Optional[str] = None
    ) -> List[ServiceRequest]:
        """Open requests newest first, optionally for one airport."""
        airport = airport_code.strip().upper() if airport_code and airport_code.strip() else None
        return await ServiceRequestCRUD.list_open(db, airport)
