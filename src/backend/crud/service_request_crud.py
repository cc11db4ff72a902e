"""
Service Request CRUD for database operations.

Handles listing queries and the conditional (compare-and-swap) writes the
request lifecycle relies on.
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from db import RequestStatus, ServiceRequest
from crud.base_repository import BaseCRUD


class ServiceRequestCRUD(BaseCRUD[ServiceRequest]):
    """CRUD for ServiceRequest database operations."""

    model = ServiceRequest

    @classmethod
    async def _list_newest_first(cls, db: AsyncSession, **filters) -> List[ServiceRequest]:
        return await cls.find_all(
            db,
            filters=filters,
            order_by=[ServiceRequest.created_at.desc(), ServiceRequest.id],
        )

    @classmethod
    async def list_by_airport(cls, db: AsyncSession, airport_icao: str) -> List[ServiceRequest]:
        return await cls._list_newest_first(db, airport_icao=airport_icao)

    @classmethod
    async def list_by_pilot(cls, db: AsyncSession, pilot_id: str) -> List[ServiceRequest]:
        return await cls._list_newest_first(db, pilot_id=pilot_id)

    @classmethod
    async def list_by_ground_crew(cls, db: AsyncSession, crew_id: str) -> List[ServiceRequest]:
        return await cls._list_newest_first(db, ground_crew_id=crew_id)

    @classmethod
    async def list_open(
        cls, db: AsyncSession, airport_icao: Optional[str] = None
    ) -> List[ServiceRequest]:
        """Open requests, optionally restricted to one airport."""
        return await cls._list_newest_first(
            db, status=RequestStatus.OPEN, airport_icao=airport_icao
        )

    @classmethod
    async def claim_if_open(
        cls,
        db: AsyncSession,
        request_id: UUID,
        crew_id: str,
        now: datetime,
    ) -> bool:
        """
        Atomically assign a crew member to an open request.

        A single conditional UPDATE: at most one concurrent caller sees a
        row affected. The requesting pilot never matches.

        Returns:
            True if this caller won the claim
        """
        stmt = (
            update(ServiceRequest)
            .where(
                ServiceRequest.id == request_id,
                ServiceRequest.status == RequestStatus.OPEN,
                ServiceRequest.pilot_id != crew_id,
            )
            .values(
                status=RequestStatus.CLAIMED,
                ground_crew_id=crew_id,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        return result.rowcount == 1

    @classmethod
    async def transition_status_if(
        cls,
        db: AsyncSession,
        request_id: UUID,
        expected: RequestStatus,
        new_status: RequestStatus,
        now: datetime,
    ) -> bool:
        """
        Move a request to new_status only if it is still in the expected status.

        Returns:
            True if the row was updated
        """
        stmt = (
            update(ServiceRequest)
            .where(
                ServiceRequest.id == request_id,
                ServiceRequest.status == expected,
            )
            .values(status=new_status, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        return result.rowcount == 1
