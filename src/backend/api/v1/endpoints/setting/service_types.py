"""
Service type catalog endpoint.
"""

from fastapi import APIRouter

from api.schemas import ServiceTypeCatalog
from api.services.airport_service import AirportService

router = APIRouter()


@router.get("", response_model=ServiceTypeCatalog)
async def get_service_types():
    """Versioned list of requestable service types."""
    return AirportService.service_type_catalog()
