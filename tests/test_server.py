"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from starlane.server.main import app, sessions


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    sessions.sessions.clear()


def _create(client, **body):
    payload = {"size": "small", "difficulty": 1, "seed": 42}
    payload.update(body)
    response = client.post("/api/games", json=payload)
    assert response.status_code == 200
    return response.json()


class TestGameLifecycle:
    """Test creating, reading and deleting games."""

    def test_health(self, client):
        response = client.get("/api")

        assert response.status_code == 200
        assert response.json()["status"] == "operational"

    def test_create_game(self, client):
        data = _create(client)

        assert data["gameId"].startswith("game-")
        assert data["seed"] == 42
        state = data["state"]
        assert state["phase"] == "rolling"
        assert (state["columns"], state["rows"]) == (5, 4)
        assert state["position"] == state["startVertex"]
        assert state["movementPool"] == 45
        assert len(state["hexCenters"]) == 20

    def test_seed_reproduces_board(self, client):
        first = _create(client, difficulty=6)
        second = _create(client, difficulty=6)

        assert first["gameId"] != second["gameId"]
        assert first["state"]["objects"] == second["state"]["objects"]

    def test_get_state(self, client):
        game_id = _create(client)["gameId"]

        response = client.get(f"/api/games/{game_id}/state")

        assert response.status_code == 200
        assert response.json()["phase"] == "rolling"

    def test_unknown_game(self, client):
        assert client.get("/api/games/game-missing/state").status_code == 404
        assert client.post("/api/games/game-missing/roll").status_code == 404

    def test_delete_game(self, client):
        game_id = _create(client)["gameId"]

        assert client.delete(f"/api/games/{game_id}").status_code == 200
        assert client.delete(f"/api/games/{game_id}").status_code == 404

    @pytest.mark.parametrize(
        "body",
        [{"size": "huge"}, {"difficulty": 0}, {"difficulty": 11}],
    )
    def test_invalid_create(self, client, body):
        assert client.post("/api/games", json=body).status_code == 422


class TestPlay:
    """Test the turn endpoints."""

    def test_roll_then_move(self, client):
        game_id = _create(client)["gameId"]

        roll = client.post(f"/api/games/{game_id}/roll").json()
        assert 1 <= roll["diceValue"] <= 6
        assert roll["phase"] == "selecting_direction"

        direction = roll["state"]["availableDirections"][0]["direction"]
        response = client.post(f"/api/games/{game_id}/move", json={"direction": direction})

        assert response.status_code == 200
        data = response.json()
        assert 1 <= len(data["path"]["path"]) <= roll["diceValue"]
        assert data["phase"] in {"rolling", "combat", "won", "lost"}

    def test_move_before_roll_conflicts(self, client):
        game_id = _create(client)["gameId"]

        response = client.post(f"/api/games/{game_id}/move", json={"direction": 0})

        assert response.status_code == 409

    def test_double_roll_conflicts(self, client):
        game_id = _create(client)["gameId"]
        client.post(f"/api/games/{game_id}/roll")

        assert client.post(f"/api/games/{game_id}/roll").status_code == 409

    def test_invalid_direction(self, client):
        game_id = _create(client)["gameId"]
        client.post(f"/api/games/{game_id}/roll")

        response = client.post(f"/api/games/{game_id}/move", json={"direction": 6})

        assert response.status_code == 422

    def test_combat_outside_combat_conflicts(self, client):
        game_id = _create(client)["gameId"]

        attack = client.post(f"/api/games/{game_id}/combat/attack", json={"target": "Bridge"})
        assert attack.status_code == 409
        assert client.post(f"/api/games/{game_id}/combat/enemy-turn").status_code == 409
        assert client.post(f"/api/games/{game_id}/combat/escape").status_code == 409
