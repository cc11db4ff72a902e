"""
Integration tests for the Service Request API endpoints.

Tests:
- Create request (201, validation errors, identity required)
- Claim request (200, 409 conflict, 403 own request, 404 missing)
- Status updates through the API
- Dashboard listings by role, airport and open status
"""

import json
from uuid import uuid4

import pytest

from tests.conftest import auth_headers

API = "/api/v1/requests"


def _payload(**overrides):
    body = {
        "airportCode": "IRFD",
        "serviceType": "fuel",
        "gate": "A12",
        "flightNumber": "GO123",
        "aircraft": "A320",
        "description": "Full tanks",
    }
    body.update(overrides)
    return body


async def _create(client, pilot_id="pilot-1", **overrides):
    response = await client.post(API, json=_payload(**overrides), headers=auth_headers(pilot_id))
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateRequestAPI:
    @pytest.mark.asyncio
    async def test_create_request(self, client, app_listener):
        response = await client.post(
            API, json=_payload(), headers=auth_headers("pilot-1", "Speedbird 1")
        )

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "open"
        assert data["groundCrewId"] is None
        assert data["pilotId"] == "pilot-1"
        assert data["airportIcao"] == "IRFD"
        assert data["createdAt"].endswith("Z")
        assert response.headers["X-Correlation-ID"]

        frames = [json.loads(f) for f in app_listener.frames]
        assert frames == [{"type": "new_request", "data": data}]

    @pytest.mark.asyncio
    async def test_missing_identity(self, client):
        response = await client.post(API, json=_payload())
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_service_type(self, client, app_listener):
        response = await client.post(
            API, json=_payload(serviceType="rocket_refuel"), headers=auth_headers("pilot-1")
        )
        assert response.status_code == 400
        assert response.json()["kind"] == "validation_error"
        assert app_listener.frames == []

    @pytest.mark.asyncio
    async def test_empty_gate(self, client):
        response = await client.post(
            API, json=_payload(gate="  "), headers=auth_headers("pilot-1")
        )
        assert response.status_code == 400
        assert response.json()["kind"] == "validation_error"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            {"gate": "G" * 65},
            {"flightNumber": "F" * 33},
            {"aircraft": "A" * 65},
        ],
    )
    async def test_oversized_fields(self, client, app_listener, overrides):
        response = await client.post(
            API, json=_payload(**overrides), headers=auth_headers("pilot-1")
        )
        assert response.status_code == 400
        assert response.json()["kind"] == "validation_error"
        assert app_listener.frames == []

    @pytest.mark.asyncio
    async def test_missing_field(self, client):
        body = _payload()
        del body["flightNumber"]
        response = await client.post(API, json=body, headers=auth_headers("pilot-1"))
        assert response.status_code == 400
        assert response.json()["kind"] == "validation_error"

    @pytest.mark.asyncio
    async def test_get_request(self, client):
        created = await _create(client)

        response = await client.get(f"{API}/{created['id']}")
        assert response.status_code == 200
        assert response.json() == created

        missing = await client.get(f"{API}/{uuid4()}")
        assert missing.status_code == 404
        assert missing.json()["kind"] == "not_found"


class TestClaimAPI:
    @pytest.mark.asyncio
    async def test_claim_then_conflict(self, client, app_listener):
        created = await _create(client)

        first = await client.post(f"{API}/{created['id']}/claim", headers=auth_headers("crew-1"))
        assert first.status_code == 200
        assert first.json()["status"] == "claimed"
        assert first.json()["groundCrewId"] == "crew-1"

        second = await client.post(f"{API}/{created['id']}/claim", headers=auth_headers("crew-2"))
        assert second.status_code == 409
        assert second.json()["kind"] == "claim_conflict"

        types = [json.loads(f)["type"] for f in app_listener.frames]
        assert types == ["new_request", "request_claimed"]

    @pytest.mark.asyncio
    async def test_claim_own_request(self, client):
        created = await _create(client, pilot_id="pilot-1")
        response = await client.post(f"{API}/{created['id']}/claim", headers=auth_headers("pilot-1"))
        assert response.status_code == 403
        assert response.json()["kind"] == "not_authorized"

    @pytest.mark.asyncio
    async def test_claim_missing(self, client):
        response = await client.post(f"{API}/{uuid4()}/claim", headers=auth_headers("crew-1"))
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_claim_invalid_id(self, client):
        response = await client.post(f"{API}/not-a-uuid/claim", headers=auth_headers("crew-1"))
        assert response.status_code == 400


class TestStatusAPI:
    @pytest.mark.asyncio
    async def test_progress_and_complete(self, client, app_listener):
        created = await _create(client)
        await client.post(f"{API}/{created['id']}/claim", headers=auth_headers("crew-1"))

        started = await client.post(
            f"{API}/{created['id']}/status",
            json={"status": "in_progress"},
            headers=auth_headers("crew-1"),
        )
        assert started.status_code == 200
        assert started.json()["status"] == "in_progress"

        done = await client.post(
            f"{API}/{created['id']}/status",
            json={"status": "completed"},
            headers=auth_headers("crew-1"),
        )
        assert done.status_code == 200
        assert done.json()["status"] == "completed"

        last = json.loads(app_listener.frames[-1])
        assert last["type"] == "request_status_updated"
        assert last["data"]["status"] == "completed"

    @pytest.mark.asyncio
    async def test_invalid_transition(self, client):
        created = await _create(client)
        response = await client.post(
            f"{API}/{created['id']}/status",
            json={"status": "completed"},
            headers=auth_headers("pilot-1"),
        )
        assert response.status_code == 409
        assert response.json()["kind"] == "invalid_transition"

    @pytest.mark.asyncio
    async def test_not_assigned_crew(self, client):
        created = await _create(client)
        await client.post(f"{API}/{created['id']}/claim", headers=auth_headers("crew-1"))

        response = await client.post(
            f"{API}/{created['id']}/status",
            json={"status": "in_progress"},
            headers=auth_headers("crew-2"),
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_unknown_status(self, client):
        created = await _create(client)
        response = await client.post(
            f"{API}/{created['id']}/status",
            json={"status": "boarding"},
            headers=auth_headers("pilot-1"),
        )
        assert response.status_code == 400


class TestListAPI:
    @pytest.mark.asyncio
    async def test_role_and_airport_listings(self, client):
        first = await _create(client, pilot_id="pilot-1", airportCode="IRFD")
        second = await _create(client, pilot_id="pilot-2", airportCode="ITKO")
        third = await _create(client, pilot_id="pilot-1", airportCode="ITKO")
        await client.post(f"{API}/{second['id']}/claim", headers=auth_headers("crew-1"))

        def ids(response):
            assert response.status_code == 200
            return [r["id"] for r in response.json()]

        mine = await client.get(API, params={"role": "pilot"}, headers=auth_headers("pilot-1"))
        assert ids(mine) == [third["id"], first["id"]]

        crew = await client.get(API, params={"role": "crew"}, headers=auth_headers("crew-1"))
        assert ids(crew) == [second["id"]]

        at_itko = await client.get(API, params={"airport": "ITKO"}, headers=auth_headers("crew-1"))
        assert ids(at_itko) == [third["id"], second["id"]]

        default = await client.get(API, headers=auth_headers("crew-1"))
        assert ids(default) == [third["id"], first["id"]]

        open_itko = await client.get(f"{API}/open", params={"airport": "ITKO"})
        assert ids(open_itko) == [third["id"]]

        by_pilot = await client.get(f"{API}/pilot/pilot-2")
        assert ids(by_pilot) == [second["id"]]

    @pytest.mark.asyncio
    async def test_list_requires_identity(self, client):
        response = await client.get(API)
        assert response.status_code == 401
