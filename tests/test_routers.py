"""Tests for the read-only HTTP monitoring endpoints."""

import pytest
from fastapi.testclient import TestClient

from qute_server.app import create_app
from qute_server.config import Settings


@pytest.fixture
def client(state, connect):
    connect("u1", "u2", "u3")
    app = create_app(settings=Settings(), state=state)
    with TestClient(app) as test_client:
        yield test_client


class TestRoomsRouter:
    def test_health(self, client, state):
        state.rooms.create("u1")
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "sessions": 3, "rooms": 1}

    def test_list_rooms(self, client, state):
        code = state.rooms.create("u1")
        state.rooms.join(code, "u2")
        state.rooms.join(code, "u3")

        response = client.get("/rooms")

        assert response.status_code == 200
        assert response.json() == [
            {"code": code, "player_count": 2, "spectator_count": 1, "players": ["u1", "u2"]}
        ]

    def test_room_detail(self, client, state):
        code = state.rooms.create("u1")
        state.rooms.join(code, "u2")
        state.rooms.join(code, "u3")
        state.roles.set_character(code, "u2", 5)

        body = client.get(f"/rooms/{code}").json()

        assert body["code"] == code
        assert body["players"] == [
            {"index": 0, "username": "u1", "character": None},
            {"index": 1, "username": "u2", "character": 5},
        ]
        assert body["spectators"] == ["u3"]

    def test_unknown_room_is_404(self, client):
        assert client.get("/rooms/999999").status_code == 404
