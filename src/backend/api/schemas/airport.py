"""
Airport and service catalog schemas.
"""

from typing import List

from core.schema_base import HTTPSchemaModel


class AirportRead(HTTPSchemaModel):
    icao: str
    name: str


class ServiceTypeCatalog(HTTPSchemaModel):
    """Versioned list of requestable service types."""

    version: str
    service_types: List[str]
