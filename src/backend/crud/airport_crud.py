"""
Airport CRUD for database operations.
"""
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from db import Airport
from crud.base_repository import BaseCRUD


class AirportCRUD(BaseCRUD[Airport]):
    """CRUD for Airport database operations."""

    model = Airport
    pk_field = "icao"

    @classmethod
    async def list_all(cls, db: AsyncSession) -> List[Airport]:
        """All airports sorted by ICAO code."""
        return await cls.find_all(db, order_by=Airport.icao.asc())
