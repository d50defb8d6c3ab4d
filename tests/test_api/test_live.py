"""Tests for the live WebSocket channel."""

import time
from collections.abc import Callable

from fastapi.testclient import TestClient

from partner_status.main import app
from partner_status.services.notifier import ConnectionRegistry


def wait_until(condition: Callable[[], bool], timeout: float = 2.0) -> None:
    """Poll until the server side catches up with the messages we sent."""
    deadline = time.monotonic() + timeout
    while not condition():
        assert time.monotonic() < deadline, "condition not met in time"
        time.sleep(0.01)


def test_authenticated_connection_receives_pushes(registry: ConnectionRegistry) -> None:
    client = TestClient(app)

    with client.websocket_connect("/ws") as websocket:
        websocket.send_json({"type": "auth", "userId": "bob"})
        wait_until(lambda: registry.is_connected("bob"))

        message = {"type": "statusUpdate", "status": {"type": "busy"}, "userId": "alice"}
        websocket.portal.call(registry.send_if_present, "bob", message)

        assert websocket.receive_json() == message

    wait_until(lambda: not registry.is_connected("bob"))


def test_invalid_messages_do_not_authenticate(registry: ConnectionRegistry) -> None:
    client = TestClient(app)

    with client.websocket_connect("/ws") as websocket:
        websocket.send_text("not json")
        websocket.send_json({"type": "ping"})
        websocket.send_json({"type": "auth"})
        websocket.send_bytes(b"\xff\xfe")
        # Messages are handled in order, so once the marker is registered
        # everything before it has been processed and ignored
        websocket.send_json({"type": "auth", "userId": "marker"})
        wait_until(lambda: registry.is_connected("marker"))

        assert len(registry) == 1
