"""Tests for the live connection registry, sessions and notifier."""

import json
from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from partner_status.models.status import Status, StatusType
from partner_status.models.user import User
from partner_status.services.notifier import (
    ConnectionRegistry,
    LiveNotifier,
    LiveSession,
    SessionState,
)


def make_connection() -> AsyncMock:
    """A stand-in for a WebSocket with async send_text/close."""
    return AsyncMock()


def sent_payloads(connection: AsyncMock) -> list[dict]:
    return [json.loads(call.args[0]) for call in connection.send_text.await_args_list]


class TestConnectionRegistry:
    """Tests for ConnectionRegistry."""

    async def test_register_and_send(self) -> None:
        registry = ConnectionRegistry()
        connection = make_connection()

        await registry.register("alice", connection)
        await registry.send_if_present("alice", {"type": "statusUpdate"})

        assert registry.is_connected("alice")
        assert sent_payloads(connection) == [{"type": "statusUpdate"}]

    async def test_send_to_absent_user_is_noop(self) -> None:
        registry = ConnectionRegistry()

        await registry.send_if_present("nobody", {"type": "statusUpdate"})

        assert len(registry) == 0

    async def test_last_registration_wins(self) -> None:
        registry = ConnectionRegistry()
        old, new = make_connection(), make_connection()

        await registry.register("alice", old)
        await registry.register("alice", new)
        await registry.send_if_present("alice", {"n": 1})

        old.send_text.assert_not_awaited()
        assert sent_payloads(new) == [{"n": 1}]
        assert len(registry) == 1

    async def test_stale_handle_does_not_evict_replacement(self) -> None:
        registry = ConnectionRegistry()
        old, new = make_connection(), make_connection()
        await registry.register("alice", old)
        await registry.register("alice", new)

        removed = await registry.unregister("alice", old)

        assert removed is False
        assert registry.is_connected("alice")

    async def test_unregister_without_handle(self) -> None:
        registry = ConnectionRegistry()
        await registry.register("alice", make_connection())

        assert await registry.unregister("alice") is True
        assert await registry.unregister("alice") is False
        assert not registry.is_connected("alice")

    async def test_failed_send_drops_connection(self) -> None:
        registry = ConnectionRegistry()
        connection = make_connection()
        connection.send_text.side_effect = RuntimeError("socket closed")
        await registry.register("alice", connection)

        await registry.send_if_present("alice", {"type": "statusUpdate"})

        assert not registry.is_connected("alice")

    async def test_close_all(self) -> None:
        registry = ConnectionRegistry()
        first, second = make_connection(), make_connection()
        second.close.side_effect = RuntimeError("already closed")
        await registry.register("alice", first)
        await registry.register("bob", second)

        await registry.close_all()

        first.close.assert_awaited_once_with(code=1001)
        assert len(registry) == 0


class TestLiveSession:
    """Tests for the per-connection state machine."""

    @pytest.fixture
    def registry(self) -> ConnectionRegistry:
        return ConnectionRegistry()

    async def test_starts_disconnected_then_authenticating(
        self, registry: ConnectionRegistry
    ) -> None:
        session = LiveSession(make_connection(), registry)
        assert session.state is SessionState.DISCONNECTED

        session.opened()

        assert session.state is SessionState.AUTHENTICATING
        assert len(registry) == 0

    async def test_auth_registers_connection(self, registry: ConnectionRegistry) -> None:
        connection = make_connection()
        session = LiveSession(connection, registry)
        session.opened()

        await session.handle_message(json.dumps({"type": "auth", "userId": "alice"}))

        assert session.state is SessionState.AUTHENTICATED
        assert session.user_id == "alice"
        assert registry.is_connected("alice")

    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            "[1, 2, 3]",
            json.dumps({"type": "ping"}),
            json.dumps({"type": "auth"}),
            json.dumps({"type": "auth", "userId": ""}),
            json.dumps({"type": "auth", "userId": 42}),
        ],
    )
    async def test_bad_messages_are_ignored(self, registry: ConnectionRegistry, raw: str) -> None:
        connection = make_connection()
        session = LiveSession(connection, registry)
        session.opened()

        await session.handle_message(raw)

        assert session.state is SessionState.AUTHENTICATING
        assert len(registry) == 0
        connection.close.assert_not_awaited()

    async def test_bad_message_after_auth_keeps_session(
        self, registry: ConnectionRegistry
    ) -> None:
        session = LiveSession(make_connection(), registry)
        session.opened()
        await session.handle_message(json.dumps({"type": "auth", "userId": "alice"}))

        await session.handle_message("{broken")

        assert session.state is SessionState.AUTHENTICATED
        assert registry.is_connected("alice")

    async def test_reauth_as_other_user_moves_registration(
        self, registry: ConnectionRegistry
    ) -> None:
        session = LiveSession(make_connection(), registry)
        session.opened()

        await session.handle_message(json.dumps({"type": "auth", "userId": "alice"}))
        await session.handle_message(json.dumps({"type": "auth", "userId": "bob"}))

        assert not registry.is_connected("alice")
        assert registry.is_connected("bob")

    async def test_close_unregisters(self, registry: ConnectionRegistry) -> None:
        session = LiveSession(make_connection(), registry)
        session.opened()
        await session.handle_message(json.dumps({"type": "auth", "userId": "alice"}))

        await session.closed()

        assert session.state is SessionState.DISCONNECTED
        assert not registry.is_connected("alice")

    async def test_closed_session_is_terminal(self, registry: ConnectionRegistry) -> None:
        session = LiveSession(make_connection(), registry)
        session.opened()
        await session.closed()

        session.opened()
        await session.handle_message(json.dumps({"type": "auth", "userId": "alice"}))

        assert session.state is SessionState.DISCONNECTED
        assert len(registry) == 0

    async def test_unauthenticated_session_never_receives(
        self, registry: ConnectionRegistry
    ) -> None:
        connection = make_connection()
        session = LiveSession(connection, registry)
        session.opened()

        await registry.send_if_present("alice", {"type": "statusUpdate"})

        connection.send_text.assert_not_awaited()


class TestLiveNotifier:
    """Tests for LiveNotifier.status_changed."""

    @staticmethod
    def make_status(user_id: str) -> Status:
        return Status(
            id="status-1",
            user_id=user_id,
            type=StatusType.BUSY,
            title="Busy",
            message="Do not disturb",
            icon="times",
            color="danger",
            expires_at=None,
            is_active=True,
            created_at=datetime(2025, 6, 1, 9, 30, 0),
        )

    async def test_pushes_to_connected_partner(self) -> None:
        registry = ConnectionRegistry()
        partner_connection = make_connection()
        await registry.register("bob", partner_connection)
        actor = User(id="alice", name="Alice", invitation_code="AAAAAAAA", partner_id="bob")

        await LiveNotifier(registry).status_changed(actor, self.make_status("alice"))

        (payload,) = sent_payloads(partner_connection)
        assert payload["type"] == "statusUpdate"
        assert payload["userId"] == "alice"
        assert payload["status"]["id"] == "status-1"
        assert payload["status"]["userId"] == "alice"
        assert payload["status"]["type"] == "busy"
        assert payload["status"]["isActive"] is True
        assert payload["status"]["createdAt"] == "2025-06-01T09:30:00"

    async def test_no_partner_no_push(self) -> None:
        registry = ConnectionRegistry()
        own_connection = make_connection()
        await registry.register("alice", own_connection)
        actor = User(id="alice", name="Alice", invitation_code="AAAAAAAA", partner_id=None)

        await LiveNotifier(registry).status_changed(actor, self.make_status("alice"))

        own_connection.send_text.assert_not_awaited()

    async def test_partner_offline_is_silent(self) -> None:
        registry = ConnectionRegistry()
        actor = User(id="alice", name="Alice", invitation_code="AAAAAAAA", partner_id="bob")

        await LiveNotifier(registry).status_changed(actor, self.make_status("alice"))

        assert len(registry) == 0
