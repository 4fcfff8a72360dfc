import random
import threading

import pytest

from conftest import rig

from app import create_app
from controllers.flask_controller import FlaskGameController
from game.manager import GameManager
from game.models import PLAYER


@pytest.fixture
def manager():
    return GameManager(rng=random.Random(3))


@pytest.fixture
def client(manager):
    app = create_app(manager=manager, think_delay=0)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def game_id(client, manager):
    resp = client.post("/api/game/create", json={})
    assert resp.status_code == 201
    gid = resp.get_json()["game_id"]
    rig(manager.get_game(gid), player=["5-hearts", "8-clubs", "K-spades"],
        opponent=["2-spades", "3-diamonds"], top="9-hearts")
    return gid


def test_create_game(client):
    resp = client.post("/api/game/create", json={"player_name": "Ana"})
    data = resp.get_json()
    assert resp.status_code == 201
    assert data["player_name"] == "Ana"
    state = data["state"]
    assert state["deck_count"] == 35
    assert len(state["player_hand"]) == 8
    assert state["opponent_hand_count"] == 8
    assert state["turn"] == PLAYER
    assert state["status"] == "in_progress"


def test_create_game_bad_mode(client):
    resp = client.post("/api/game/create", json={"mode": "online"})
    assert resp.status_code == 400


def test_unknown_game_is_404(client):
    resp = client.get("/api/game/nope/state")
    assert resp.status_code == 404
    assert "not found" in resp.get_json()["error"]


def test_play_then_opponent_answers(client, game_id):
    resp = client.post(f"/api/game/{game_id}/play", json={"card": "5-hearts"})
    data = resp.get_json()

    assert resp.status_code == 200
    assert data["results"]["ok"]
    # opponent cannot follow 5-hearts and draws the front of the deck
    assert [r["action"] for r in data["opponent_results"]] == ["draw"]
    state = data["ui_state"]
    assert state["opponent_hand_count"] == 3
    assert state["turn"] == PLAYER
    assert state["top_discard"] == "5-hearts"


def test_eight_then_suit(client, game_id):
    resp = client.post(f"/api/game/{game_id}/play", json={"index": 1})
    state = resp.get_json()["ui_state"]
    assert state["awaiting_suit"]
    assert state["turn"] == PLAYER

    resp = client.post(f"/api/game/{game_id}/suit", json={"suit": "spades"})
    data = resp.get_json()
    assert resp.status_code == 200
    # opponent follows spades with its 2
    assert data["opponent_results"][0]["card"] == "2-spades"
    assert data["ui_state"]["active_suit"] is None
    assert data["ui_state"]["turn"] == PLAYER


def test_illegal_play_is_409(client, game_id, manager):
    before = manager.get_game(game_id).get_state()
    resp = client.post(f"/api/game/{game_id}/play", json={"card": "K-spades"})
    assert resp.status_code == 409
    assert "error" in resp.get_json()["results"]
    assert manager.get_game(game_id).get_state()["player_hand"] == before["player_hand"]


def test_bad_bodies_are_400(client, game_id):
    assert client.post(f"/api/game/{game_id}/play", json={}).status_code == 400
    assert client.post(f"/api/game/{game_id}/play", json={"index": "x"}).status_code == 400
    assert client.post(f"/api/game/{game_id}/suit", json={}).status_code == 400


def test_index_out_of_range_is_409(client, game_id):
    resp = client.post(f"/api/game/{game_id}/play", json={"index": 9})
    assert resp.status_code == 409


def test_unknown_suit_is_409(client, game_id):
    client.post(f"/api/game/{game_id}/play", json={"card": "8-clubs"})
    resp = client.post(f"/api/game/{game_id}/suit", json={"suit": "stars"})
    assert resp.status_code == 409


def test_draw_keeps_player_turn(client, game_id):
    resp = client.post(f"/api/game/{game_id}/draw")
    data = resp.get_json()
    assert resp.status_code == 200
    assert data["opponent_results"] == []
    assert len(data["ui_state"]["player_hand"]) == 4
    assert data["ui_state"]["turn"] == PLAYER


def test_restart_and_delete(client, game_id, manager):
    resp = client.post(f"/api/game/{game_id}/restart")
    state = resp.get_json()
    assert state["game_number"] == 2
    assert len(state["player_hand"]) == 8

    assert game_id in client.get("/api/games").get_json()

    assert client.delete(f"/api/game/{game_id}").status_code == 200
    assert client.get(f"/api/game/{game_id}/state").status_code == 404
    assert client.delete(f"/api/game/{game_id}").status_code == 404


def test_win_marks_session_completed(client, game_id, manager):
    rig(manager.get_game(game_id), player=["5-hearts"], opponent=["2-spades"], top="9-hearts")
    resp = client.post(f"/api/game/{game_id}/play", json={"card": "5-hearts"})
    assert resp.get_json()["ui_state"]["status"] == "player_won"
    assert manager.list_games()[game_id]["status"] == "completed"


def test_non_object_bodies_are_400(client, game_id):
    assert client.post("/api/game/create", json=["x"]).status_code == 400
    assert client.post(f"/api/game/{game_id}/play", json="card").status_code == 400
    assert client.post(f"/api/game/{game_id}/suit", json=["spades"]).status_code == 400


def test_controllers_share_session_lock(game_id, manager):
    lock = manager.get_lock(game_id)
    first = FlaskGameController(manager.get_game(game_id), think_delay=0, lock=lock)
    second = FlaskGameController(manager.get_game(game_id), think_delay=0, lock=lock)
    assert first.ai.lock is second.ai.lock is lock


@pytest.mark.parametrize("method, path, body", [
    ("post", "/play", {"card": "5-hearts"}),
    ("post", "/draw", None),
    ("post", "/restart", None),
])
def test_requests_wait_for_session_lock(client, game_id, manager, method, path, body):
    responses = []

    def send():
        responses.append(getattr(client, method)(f"/api/game/{game_id}{path}", json=body))

    with manager.get_lock(game_id):
        worker = threading.Thread(target=send)
        worker.start()
        worker.join(0.2)
        # the request is parked on the lock held by this thread
        assert worker.is_alive()
        assert responses == []

    worker.join(5)
    assert responses[0].status_code == 200
