"""Tests for the HTTP and WebSocket surface."""

import pytest
from fastapi.testclient import TestClient

import main
from game.config import GameConfig


@pytest.fixture
def client():
    # Long tick so the scheduler stays quiet while messages are exchanged
    main.app.state.config = GameConfig(tick_ms=60_000, seed=1)
    with TestClient(main.app) as client:
        yield client
    main.app.state.config = None


class TestHttp:
    """Tests for HTTP endpoints."""

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_config(self, client):
        data = client.get("/config").json()
        assert data["grid_size"] == 20
        assert data["tick_ms"] == 60_000


class TestWebSocket:
    """Tests for the /ws/game endpoint."""

    def test_initial_state(self, client):
        with client.websocket_connect("/ws/game") as ws:
            message = ws.receive_json()
            assert message["type"] == "state_update"
            assert message["state"]["snake"] == [{"x": 10, "y": 10}]
            assert message["state"]["status"] == "running"
            assert message["state"]["direction"] == "right"

    def test_pause_and_resume(self, client):
        with client.websocket_connect("/ws/game") as ws:
            ws.receive_json()
            ws.send_json({"type": "pause"})
            assert ws.receive_json()["state"]["status"] == "paused"
            ws.send_json({"type": "key", "key": " "})
            assert ws.receive_json()["state"]["status"] == "running"

    def test_reset(self, client):
        with client.websocket_connect("/ws/game") as ws:
            ws.receive_json()
            ws.send_json({"type": "reset"})
            message = ws.receive_json()
            assert message["type"] == "state_update"
            assert message["state"]["score"] == 0

    def test_direction_change_is_accepted(self, client):
        """A valid turn produces a new snapshot; a reversal does not."""
        with client.websocket_connect("/ws/game") as ws:
            ws.receive_json()
            ws.send_json({"type": "direction", "direction": "left"})
            ws.send_json({"type": "direction", "direction": "Up"})
            message = ws.receive_json()
            assert message["type"] == "state_update"
            assert message["state"]["direction"] == "right"

    @pytest.mark.parametrize(
        "payload",
        [
            "not json",
            '{"type": "fly"}',
            '{"type": "direction", "direction": "sideways"}',
            '{"type": "key"}',
        ],
    )
    def test_malformed_message(self, client, payload):
        with client.websocket_connect("/ws/game") as ws:
            ws.receive_json()
            ws.send_text(payload)
            message = ws.receive_json()
            assert message["type"] == "error"
            ws.send_json({"type": "pause"})
            assert ws.receive_json()["state"]["status"] == "paused"


class TestGameOverMessages:
    """The game_over message is sent once per collision."""

    @pytest.fixture
    def fast_client(self):
        main.app.state.config = GameConfig(grid_size=4, tick_ms=20, seed=1)
        with TestClient(main.app) as client:
            yield client
        main.app.state.config = None

    def test_single_game_over_message(self, fast_client):
        with fast_client.websocket_connect("/ws/game") as ws:
            ws.receive_json()
            for _ in range(20):
                message = ws.receive_json()
                if message["type"] == "game_over":
                    break
            assert message["type"] == "game_over"

            for direction in ("up", "down", "right"):
                ws.send_json({"type": "direction", "direction": direction})
            ws.send_json({"type": "pause"})
            ws.send_json({"type": "reset"})

            message = ws.receive_json()
            assert message["type"] == "state_update"
            assert message["state"]["status"] == "running"
            assert message["state"]["score"] == 0


class TestResolvePort:
    """Tests for choosing the server port."""

    def test_explicit_port(self, monkeypatch, caplog):
        monkeypatch.setenv("PORT", "9123")
        monkeypatch.setattr(main, "find_available_port", lambda *args: pytest.fail("port search ran"))
        with caplog.at_level("INFO", logger="main"):
            assert main.resolve_port() == 9123
        assert "in use" not in caplog.text

    def test_falls_back_to_free_port(self, monkeypatch, caplog):
        monkeypatch.delenv("PORT", raising=False)
        monkeypatch.setattr(main, "find_available_port", lambda start: start + 1)
        with caplog.at_level("INFO", logger="main"):
            assert main.resolve_port(8000) == 8001
        assert "Port 8000 is in use, using port 8001 instead" in caplog.text

    def test_default_port_free(self, monkeypatch, caplog):
        monkeypatch.delenv("PORT", raising=False)
        monkeypatch.setattr(main, "find_available_port", lambda start: start)
        with caplog.at_level("INFO", logger="main"):
            assert main.resolve_port(8000) == 8000
        assert "in use" not in caplog.text
