"""Tests for the WebSocket gateway."""

from fastapi.testclient import TestClient

from reminder_bot.replies import FALLBACK, GREETING
from reminder_bot.server import app


def test_health_endpoint():
    client = TestClient(app)
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "active_sessions" in data


def test_unknown_route_returns_error_body():
    client = TestClient(app)
    response = client.get("/nope")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "404"


def test_greeting_on_connect():
    client = TestClient(app)
    with client.websocket_connect("/ws") as ws:
        assert ws.receive_text() == GREETING


def test_one_reply_per_message():
    client = TestClient(app)
    with client.websocket_connect("/ws") as ws:
        ws.receive_text()

        ws.send_text("remind me about my homework")
        assert ws.receive_text() == "How long does your homework take?"

        ws.send_text("20 minutes")
        assert ws.receive_text() == "Ok, I will remind you about your homework in 1200 seconds."

        ws.send_text("banana")
        assert ws.receive_text() == FALLBACK


def test_oversized_duration_keeps_session_open():
    client = TestClient(app)
    with client.websocket_connect("/ws") as ws:
        ws.receive_text()

        ws.send_text("remind me about tea in " + "9" * 400 + " seconds")
        assert ws.receive_text() == FALLBACK

        ws.send_text("list reminders")
        assert ws.receive_text() == "You have no reminders."


def test_session_visible_in_health_while_connected():
    client = TestClient(app)
    with client.websocket_connect("/ws") as ws:
        ws.receive_text()
        assert client.get("/health").json()["active_sessions"] >= 1


def test_fired_reminder_is_sent_out_of_band():
    client = TestClient(app)
    with client.websocket_connect("/ws") as ws:
        ws.receive_text()

        ws.send_text("remind me about tea in 0 seconds")
        assert ws.receive_text() == "Ok, I will remind you about tea in 0 seconds."
        assert ws.receive_text() == "It is time for tea!"
        assert ws.receive_text() == "Should I remember that tea takes 0 seconds?"

        ws.send_text("yes")
        assert ws.receive_text() == "Consider it done."

        ws.send_text("remind me about tea")
        assert ws.receive_text() == "Ok, I will remind you about tea in 0 seconds."
        assert ws.receive_text() == "It is time for tea!"


def test_sessions_are_independent():
    client = TestClient(app)
    with client.websocket_connect("/ws") as first, client.websocket_connect("/ws") as second:
        first.receive_text()
        second.receive_text()

        first.send_text("remind me about tea in 5 minutes")
        first.receive_text()

        second.send_text("list reminders")
        assert second.receive_text() == "You have no reminders."
