"""
Airport API endpoints.

Airports are static reference data seeded at startup. When the database is
unreachable the built-in PTFS list is served instead.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_session
from api.schemas import AirportRead
from api.services.airport_service import AirportService

router = APIRouter()


@router.get("", response_model=List[AirportRead])
async def list_airports(db: AsyncSession = Depends(get_session)):
    """
    List all supported airports sorted by ICAO code.

    **Permissions:** No authentication required
    """
    return await AirportService.list_airports(db)
