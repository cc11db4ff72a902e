"""
Unit tests for API schemas and the service type catalog.
"""

from datetime import datetime, timezone
from uuid import uuid4

from api.schemas import (
    ChatMessageCreate,
    ChatMessageRead,
    ServiceRequestCreate,
    ServiceRequestRead,
)
from api.services.airport_service import AirportService
from core.schema_base import serialize_datetime, to_camel
from db.enums import SERVICE_TYPES_VERSION, RequestStatus, ServiceType
from db.setup import PTFS_AIRPORTS, fallback_airports
from tests.factories import ServiceRequestFactory


class TestSchemaBase:
    def test_to_camel(self):
        assert to_camel("ground_crew_id") == "groundCrewId"
        assert to_camel("status") == "status"

    def test_naive_datetime_gets_z_suffix(self):
        assert serialize_datetime(datetime(2024, 5, 1, 12, 30)) == "2024-05-01T12:30:00Z"

    def test_aware_datetime_converted_to_utc(self):
        aware = datetime(2024, 5, 1, 14, 30, tzinfo=timezone.utc)
        assert serialize_datetime(aware) == "2024-05-01T14:30:00Z"

    def test_none_datetime(self):
        assert serialize_datetime(None) is None


class TestServiceRequestSchemas:
    def test_create_accepts_camel_and_snake_case(self):
        camel = ServiceRequestCreate.model_validate(
            {
                "airportCode": "IRFD",
                "serviceType": "fuel",
                "gate": "A1",
                "flightNumber": "GO101",
                "description": "Fuel",
            }
        )
        snake = ServiceRequestCreate.model_validate(
            {
                "airport_icao": "IRFD",
                "service_type": "fuel",
                "gate": "A1",
                "flight_number": "GO101",
                "description": "Fuel",
            }
        )
        assert camel.airport_code == snake.airport_code == "IRFD"
        assert camel.aircraft is None

    def test_read_serializes_camel_case(self):
        request = ServiceRequestFactory.create(
            pilot_id="pilot-1",
            status=RequestStatus.CLAIMED,
            ground_crew_id="crew-1",
            service_type=ServiceType.PUSHBACK,
        )

        data = ServiceRequestRead.model_validate(request).model_dump(mode="json", by_alias=True)

        assert data["id"] == str(request.id)
        assert data["pilotId"] == "pilot-1"
        assert data["groundCrewId"] == "crew-1"
        assert data["airportIcao"] == "IRFD"
        assert data["serviceType"] == "pushback"
        assert data["status"] == "claimed"
        assert data["createdAt"].endswith("Z")


class TestChatSchemas:
    def test_create_accepts_text_or_message(self):
        assert ChatMessageCreate.model_validate({"text": "hi"}).text == "hi"
        assert ChatMessageCreate.model_validate({"message": "hi"}).text == "hi"

    def test_read_shape(self):
        read = ChatMessageRead(
            id=uuid4(),
            request_id=uuid4(),
            user_id="crew-1",
            message="On my way",
            created_at=datetime(2024, 1, 1),
        )
        data = read.model_dump(mode="json", by_alias=True)
        assert set(data) == {"id", "requestId", "userId", "message", "createdAt"}


class TestCatalogs:
    def test_service_type_catalog(self):
        catalog = AirportService.service_type_catalog()

        assert catalog["version"] == SERVICE_TYPES_VERSION
        assert len(catalog["service_types"]) == 74
        assert len(set(catalog["service_types"])) == 74
        assert catalog["service_types"][0] == "fuel"
        assert catalog["service_types"][-1] == "immigration_processing"

    def test_ptfs_airports(self):
        codes = [a["icao"] for a in PTFS_AIRPORTS]
        assert len(codes) == 24
        assert all(len(code) == 4 for code in codes)

    def test_fallback_airports_sorted(self):
        codes = [a.icao for a in fallback_airports()]
        assert codes == sorted(codes)
        assert len(codes) == 24
