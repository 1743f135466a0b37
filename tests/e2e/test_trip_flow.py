"""End-to-end tests for the trip and join request flow."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from carpool.interface.api.app import create_app
from tests.conftest import auth_headers, in_future
from tests.di import build_test_container


@pytest.fixture
def client():
    """Test client backed by in-memory persistence."""
    with TestClient(create_app(build_test_container())) as test_client:
        yield test_client


@pytest.fixture
def creator():
    return auth_headers(uuid4(), "21CS001")


@pytest.fixture
def rider():
    return auth_headers(uuid4(), "21CS002")


def create_trip(client, headers, **overrides) -> dict:
    body = {
        "departure_location": "North Campus",
        "destination": "Central Station",
        "departure_time": in_future().isoformat(),
        "available_seats": 3,
    }
    body.update(overrides)
    response = client.post("/trips", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["trip"]


class TestHealth:
    def test_health_is_public(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestAuthentication:
    def test_missing_token_is_401(self, client):
        response = client.get("/trips")

        assert response.status_code == 401
        assert response.json()["error"] == "not_authenticated"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_garbage_token_is_401(self, client):
        response = client.get("/trips", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401

    def test_cookie_token_is_accepted(self, client, creator):
        token = creator["Authorization"].removeprefix("Bearer ")
        client.cookies.set("auth_token", token)

        response = client.get("/trips")

        assert response.status_code == 200


class TestTripLifecycle:
    def test_create_and_get_trip(self, client, creator):
        trip = create_trip(client, creator, description="Two bags max")

        response = client.get(f"/trips/{trip['trip_id']}", headers=creator)

        assert response.status_code == 200
        fetched = response.json()["trip"]
        assert fetched["creator"]["handle"] == "21CS001"
        assert fetched["status"] == "active"
        assert fetched["description"] == "Two bags max"

    def test_invalid_seats_are_400(self, client, creator):
        response = client.post(
            "/trips",
            json={
                "departure_location": "A",
                "destination": "B",
                "departure_time": in_future().isoformat(),
                "available_seats": 9,
            },
            headers=creator,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_malformed_body_is_422(self, client, creator):
        response = client.post("/trips", json={"destination": "B"}, headers=creator)

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"]

    def test_unknown_trip_is_404(self, client, creator):
        response = client.get(f"/trips/{uuid4()}", headers=creator)

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_only_creator_updates(self, client, creator, rider):
        trip = create_trip(client, creator)

        denied = client.patch(
            f"/trips/{trip['trip_id']}", json={"available_seats": 1}, headers=rider
        )
        allowed = client.patch(
            f"/trips/{trip['trip_id']}", json={"available_seats": 1}, headers=creator
        )

        assert denied.status_code == 403
        assert denied.json()["error"] == "not_authorized"
        assert allowed.status_code == 200
        assert allowed.json()["trip"]["available_seats"] == 1

    def test_cancelled_trip_leaves_listing_and_cannot_reopen(self, client, creator):
        trip = create_trip(client, creator)

        cancelled = client.patch(
            f"/trips/{trip['trip_id']}", json={"status": "cancelled"}, headers=creator
        )
        reopened = client.patch(
            f"/trips/{trip['trip_id']}", json={"status": "active"}, headers=creator
        )
        listing = client.get("/trips", headers=creator).json()["trips"]

        assert cancelled.status_code == 200
        assert reopened.status_code == 409
        assert reopened.json()["error"] == "invalid_trip_transition"
        assert listing == []

    def test_delete_trip(self, client, creator):
        trip = create_trip(client, creator)

        response = client.delete(f"/trips/{trip['trip_id']}", headers=creator)

        assert response.status_code == 200
        assert response.json() == {"trip_id": trip["trip_id"], "deleted": True}
        missing = client.get(f"/trips/{trip['trip_id']}", headers=creator)
        assert missing.status_code == 404


class TestJoinFlow:
    def test_join_approve_and_notify(self, client, creator, rider):
        trip = create_trip(client, creator)
        trip_id = trip["trip_id"]

        joined = client.post(f"/trips/{trip_id}/join", headers=rider)
        assert joined.status_code == 201
        participation = joined.json()["participation"]
        assert participation["status"] == "pending"

        inbox = client.get("/notifications", headers=creator).json()["notifications"]
        assert [n["title"] for n in inbox] == ["New Join Request"]
        assert inbox[0]["participation_id"] == participation["participation_id"]

        listing = client.get("/trips", headers=rider).json()["trips"]
        assert listing[0]["my_participation"]["status"] == "pending"
        assert listing[0]["participants"] is None

        decided = client.put(
            f"/trips/{trip_id}/participants/{participation['participation_id']}",
            json={"status": "approved"},
            headers=creator,
        )
        assert decided.status_code == 200
        assert decided.json()["participation"]["status"] == "approved"

        rider_inbox = client.get("/notifications", headers=rider).json()
        assert rider_inbox["notifications"][0]["title"] == "Join Request Approved!"

        participants = client.get(f"/trips/{trip_id}/participants", headers=creator)
        assert participants.status_code == 200
        assert [p["user"]["handle"] for p in participants.json()["participants"]] == [
            "21CS002"
        ]

    def test_join_errors(self, client, creator, rider):
        trip_id = create_trip(client, creator)["trip_id"]

        own = client.post(f"/trips/{trip_id}/join", headers=creator)
        first = client.post(f"/trips/{trip_id}/join", headers=rider)
        again = client.post(f"/trips/{trip_id}/join", headers=rider)

        assert own.status_code == 409
        assert own.json()["error"] == "self_join_denied"
        assert first.status_code == 201
        assert again.status_code == 409
        assert again.json()["error"] == "duplicate_participation"

    def test_invalid_decision_is_400(self, client, creator, rider):
        trip_id = create_trip(client, creator)["trip_id"]
        participation_id = client.post(
            f"/trips/{trip_id}/join", headers=rider
        ).json()["participation"]["participation_id"]

        response = client.put(
            f"/trips/{trip_id}/participants/{participation_id}",
            json={"status": "maybe"},
            headers=creator,
        )

        assert response.status_code == 400
        assert response.json()["message"] == (
            "Invalid status. Must be either 'approved' or 'rejected'"
        )

    def test_decision_through_wrong_trip_is_400(self, client, creator, rider):
        trip_id = create_trip(client, creator)["trip_id"]
        other_id = create_trip(client, creator)["trip_id"]
        participation_id = client.post(
            f"/trips/{trip_id}/join", headers=rider
        ).json()["participation"]["participation_id"]

        response = client.put(
            f"/trips/{other_id}/participants/{participation_id}",
            json={"status": "approved"},
            headers=creator,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "mismatched_trip"

    def test_notifications_read_state(self, client, creator, rider):
        trip_id = create_trip(client, creator)["trip_id"]
        client.post(f"/trips/{trip_id}/join", headers=rider)

        count = client.get("/notifications/unread-count", headers=creator).json()
        notification_id = client.get("/notifications", headers=creator).json()[
            "notifications"
        ][0]["notification_id"]

        forbidden = client.put(
            f"/notifications/{notification_id}/read", headers=rider
        )
        read = client.put(f"/notifications/{notification_id}/read", headers=creator)
        cleared = client.put("/notifications/read-all", headers=creator)

        assert count == {"count": 1}
        assert forbidden.status_code == 403
        assert read.json()["notification"]["is_read"] is True
        assert cleared.json() == {"updated": 0}
