"""End-to-end tests for direct messages, group chat and the realtime channel."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from carpool.interface.api.app import create_app
from tests.conftest import auth_headers, in_future, make_token
from tests.di import build_test_container


@pytest.fixture
def client():
    """Test client backed by in-memory persistence."""
    with TestClient(create_app(build_test_container())) as test_client:
        yield test_client


@pytest.fixture
def people():
    """Creator, approved rider and an outsider as (user_id, handle) pairs."""
    return {
        "creator": (str(uuid4()), "21ME010"),
        "rider": (str(uuid4()), "21ME011"),
        "outsider": (str(uuid4()), "21ME012"),
    }


def headers_for(people, who: str) -> dict[str, str]:
    return auth_headers(*people[who])


@pytest.fixture
def trip_id(client, people):
    """A trip with one approved rider."""
    creator = headers_for(people, "creator")
    trip = client.post(
        "/trips",
        json={
            "departure_location": "Library",
            "destination": "Airport",
            "departure_time": in_future().isoformat(),
            "available_seats": 2,
        },
        headers=creator,
    ).json()["trip"]
    participation = client.post(
        f"/trips/{trip['trip_id']}/join", headers=headers_for(people, "rider")
    ).json()["participation"]
    client.put(
        f"/trips/{trip['trip_id']}/participants/{participation['participation_id']}",
        json={"status": "approved"},
        headers=creator,
    )
    return trip["trip_id"]


class TestDirectMessages:
    def test_send_count_list_and_read(self, client, people, trip_id):
        creator_id = people["creator"][0]
        rider = headers_for(people, "rider")
        creator = headers_for(people, "creator")

        sent = client.post(
            "/messages/direct",
            json={"trip_id": trip_id, "receiver_id": creator_id, "body": " Hi! "},
            headers=rider,
        )
        assert sent.status_code == 201
        message = sent.json()["message"]
        assert message["body"] == "Hi!"
        assert message["mode"] == "direct"

        assert client.get("/messages/unread-count", headers=creator).json() == {
            "count": 1
        }

        listed = client.get(
            f"/messages/direct/trips/{trip_id}",
            params={"counterpart_id": people["rider"][0]},
            headers=creator,
        )
        assert [m["body"] for m in listed.json()["messages"]] == ["Hi!"]

        not_receiver = client.put(
            f"/messages/{message['message_id']}/read", headers=rider
        )
        read = client.put(f"/messages/{message['message_id']}/read", headers=creator)
        assert not_receiver.status_code == 403
        assert read.status_code == 200
        assert read.json()["message"]["read_at"] is not None
        assert client.get("/messages/unread-count", headers=creator).json() == {
            "count": 0
        }

    def test_outsider_cannot_message_members(self, client, people, trip_id):
        response = client.post(
            "/messages/direct",
            json={
                "trip_id": trip_id,
                "receiver_id": people["creator"][0],
                "body": "hello",
            },
            headers=headers_for(people, "outsider"),
        )

        assert response.status_code == 403

    def test_message_to_self_is_409(self, client, people, trip_id):
        response = client.post(
            "/messages/direct",
            json={
                "trip_id": trip_id,
                "receiver_id": people["creator"][0],
                "body": "note to self",
            },
            headers=headers_for(people, "creator"),
        )

        assert response.status_code == 409
        assert response.json()["error"] == "self_message_denied"

    def test_blank_body_is_400(self, client, people, trip_id):
        response = client.post(
            "/messages/direct",
            json={"trip_id": trip_id, "receiver_id": people["creator"][0], "body": "  "},
            headers=headers_for(people, "rider"),
        )

        assert response.status_code == 400


class TestGroupChat:
    def test_history_and_members(self, client, people, trip_id):
        rider = headers_for(people, "rider")
        client.post(
            f"/chat/trips/{trip_id}/messages",
            json={"body": "Meet at gate 2"},
            headers=headers_for(people, "creator"),
        )

        history = client.get(f"/chat/trips/{trip_id}/messages", headers=rider)
        members = client.get(f"/chat/trips/{trip_id}/participants", headers=rider)

        assert [m["body"] for m in history.json()["messages"]] == ["Meet at gate 2"]
        assert [
            (p["handle"], p["is_creator"]) for p in members.json()["participants"]
        ] == [("21ME010", True), ("21ME011", False)]

    def test_outsider_cannot_read_history(self, client, people, trip_id):
        response = client.get(
            f"/chat/trips/{trip_id}/messages", headers=headers_for(people, "outsider")
        )

        assert response.status_code == 403

    def test_deleting_trip_removes_chat(self, client, people, trip_id):
        creator = headers_for(people, "creator")
        client.post(
            f"/chat/trips/{trip_id}/messages", json={"body": "bye"}, headers=creator
        )

        client.delete(f"/trips/{trip_id}", headers=creator)
        response = client.get(f"/chat/trips/{trip_id}/messages", headers=creator)

        assert response.status_code == 404


class TestRealtimeChannel:
    def test_member_receives_group_messages(self, client, people, trip_id):
        token = make_token(*people["rider"])

        with client.websocket_connect(f"/ws?token={token}") as websocket:
            websocket.send_json({"action": "join-trip", "trip_id": trip_id})
            assert websocket.receive_json() == {"event": "joined", "trip_id": trip_id}

            sent = client.post(
                f"/chat/trips/{trip_id}/messages",
                json={"body": "Five minutes away"},
                headers=headers_for(people, "creator"),
            )
            assert sent.status_code == 201

            event = websocket.receive_json()
            assert event["event"] == "new-message"
            assert event["data"]["body"] == "Five minutes away"
            assert event["data"]["sender"]["handle"] == "21ME010"
            assert event["data"]["id"] == sent.json()["message"]["message_id"]

            websocket.send_json({"action": "leave-trip", "trip_id": trip_id})
            assert websocket.receive_json() == {"event": "left", "trip_id": trip_id}

    def test_outsider_is_refused(self, client, people, trip_id):
        token = make_token(*people["outsider"])

        with client.websocket_connect(f"/ws?token={token}") as websocket:
            websocket.send_json({"action": "join-trip", "trip_id": trip_id})
            reply = websocket.receive_json()

        assert reply["event"] == "error"
        assert reply["error"] == "not_authorized"

    def test_anonymous_is_refused(self, client, trip_id):
        with client.websocket_connect("/ws") as websocket:
            websocket.send_json({"action": "join-trip", "trip_id": trip_id})
            reply = websocket.receive_json()

        assert reply["event"] == "error"
        assert reply["error"] == "not_authenticated"

    def test_malformed_frame_gets_error(self, client):
        with client.websocket_connect("/ws") as websocket:
            websocket.send_json({"action": "dance"})
            reply = websocket.receive_json()

        assert reply["event"] == "error"
        assert reply["error"] == "validation_error"
