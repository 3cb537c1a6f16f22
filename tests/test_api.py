"""Tests for the FastAPI tic-tac-toe interface."""

from __future__ import annotations

from fastapi.testclient import TestClient

from tictactoe import ui
from tictactoe.ui import app


client = TestClient(app)
ui.BOT_THINK_DELAY = (0.0, 0.0)


def test_create_game_defaults():
    response = client.post("/api/game", json={})
    assert response.status_code == 200
    payload = response.json()
    assert payload["currentPlayer"] == "X"
    assert payload["cells"] == [""] * 9
    assert payload["botEnabled"] is False
    assert payload["difficulty"] == "easy"
    assert payload["moveLog"] == []


def test_move_then_bot_reply():
    response = client.post(
        "/api/game", json={"botEnabled": True, "difficulty": "medium"}
    )
    game_id = response.json()["id"]

    move_response = client.post(f"/api/game/{game_id}/move", json={"index": 4})
    assert move_response.status_code == 200
    state = move_response.json()
    assert state["cells"][4] == "X"
    assert state["currentPlayer"] == "O"
    assert state["botThinking"] is True

    follow_up = client.get(f"/api/game/{game_id}")
    assert follow_up.status_code == 200
    final_state = follow_up.json()
    assert final_state["currentPlayer"] == "X"
    assert final_state["botThinking"] is False
    assert final_state["moveLog"][-1]["player"] == "O"


def test_invalid_move_rejected():
    game_id = client.post("/api/game", json={}).json()["id"]
    first = client.post(f"/api/game/{game_id}/move", json={"index": 0})
    assert first.status_code == 200

    duplicate = client.post(f"/api/game/{game_id}/move", json={"index": 0})
    assert duplicate.status_code == 400
    assert duplicate.json()["detail"] == "Cell already occupied"


def test_out_of_range_index_is_validation_error():
    game_id = client.post("/api/game", json={}).json()["id"]
    response = client.post(f"/api/game/{game_id}/move", json={"index": 9})
    assert response.status_code == 422


def test_rejects_unknown_difficulty():
    response = client.post("/api/game", json={"difficulty": "impossible"})
    assert response.status_code == 422


def test_rejects_empty_mark():
    assert client.post("/api/game", json={"humanMark": ""}).status_code == 422

    game_id = client.post("/api/game", json={}).json()["id"]
    response = client.post(f"/api/game/{game_id}/mark", json={"mark": ""})
    assert response.status_code == 422
    assert client.get(f"/api/game/{game_id}").json()["humanMark"] == "X"


def test_choosing_o_lets_bot_open():
    game_id = client.post(
        "/api/game", json={"botEnabled": True, "difficulty": "easy"}
    ).json()["id"]
    response = client.post(f"/api/game/{game_id}/mark", json={"mark": "O"})
    assert response.status_code == 200
    assert response.json()["humanMark"] == "O"

    state = client.get(f"/api/game/{game_id}").json()
    assert state["currentPlayer"] == "O"
    assert [c for c in state["cells"] if c] == ["X"]


def test_difficulty_change_does_not_reset():
    game_id = client.post("/api/game", json={}).json()["id"]
    client.post(f"/api/game/{game_id}/move", json={"index": 2})
    response = client.post(
        f"/api/game/{game_id}/difficulty", json={"difficulty": "hard"}
    )
    assert response.status_code == 200
    assert response.json()["difficulty"] == "hard"
    assert response.json()["cells"][2] == "X"


def test_bot_toggle_and_reset():
    game_id = client.post("/api/game", json={}).json()["id"]
    client.post(f"/api/game/{game_id}/move", json={"index": 0})

    toggled = client.post(f"/api/game/{game_id}/bot", json={})
    assert toggled.json()["botEnabled"] is True
    assert toggled.json()["cells"] == [""] * 9

    explicit = client.post(f"/api/game/{game_id}/bot", json={"enabled": False})
    assert explicit.json()["botEnabled"] is False

    client.post(f"/api/game/{game_id}/move", json={"index": 5})
    reset = client.post(f"/api/game/{game_id}/reset")
    assert reset.status_code == 200
    assert reset.json()["cells"] == [""] * 9


def test_missing_game_returns_404():
    assert client.get("/api/game/missing").status_code == 404
    assert client.post("/api/game/missing/reset").status_code == 404


def test_index_serves_page():
    response = client.get("/")
    assert response.status_code == 200
    assert "Tic-Tac-Toe" in response.text
