"""
Airport and service catalog reads.
"""
import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from core.decorators import handle_store_errors
from core.exceptions import StoreUnavailableError
from crud import AirportCRUD
from db import SERVICE_TYPES_VERSION, Airport, ServiceType
from db.setup import fallback_airports

logger = logging.getLogger(__name__)


class AirportService:
    """Service for airport reference data."""

    @staticmethod
    @handle_store_errors("list_airports")
    async def _list_stored(db: AsyncSession) -> List[Airport]:
        return await AirportCRUD.list_all(db)

    @staticmethod
    async def list_airports(db: AsyncSession) -> List[Airport]:
        """
        All airports sorted by ICAO code.

        Falls back to the built-in PTFS list when the store is unavailable.
        """
        try:
            return await AirportService._list_stored(db)
        except StoreUnavailableError as e:
            logger.warning(f"Serving built-in airport list: {e.message}")
            return fallback_airports()

    @staticmethod
    def service_type_catalog() -> dict:
        """Versioned list of service types, in catalog order."""
        return {
            "version": SERVICE_TYPES_VERSION,
            "service_types": [member.value for member in ServiceType],
        }
