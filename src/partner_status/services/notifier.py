"""Live notification of partner status changes over WebSockets."""

import asyncio
import enum
import json
import logging
from typing import Any, Protocol

from pydantic import ValidationError as PydanticValidationError

from partner_status.models.status import Status
from partner_status.models.user import User
from partner_status.schemas.status import LiveAuthMessage, StatusResponse, StatusUpdateMessage

logger = logging.getLogger(__name__)


class LiveConnection(Protocol):
    """The subset of a WebSocket the registry needs."""

    async def send_text(self, data: str) -> None: ...

    async def close(self, code: int = 1000, reason: str | None = None) -> None: ...


class ConnectionRegistry:
    """Tracks the authenticated live connection of each user.

    One connection per user; a newer registration replaces the older one.
    Owned by the application instance, not shared between apps.
    """

    def __init__(self) -> None:
        self._connections: dict[str, LiveConnection] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._connections)

    def is_connected(self, user_id: str) -> bool:
        return user_id in self._connections

    async def register(self, user_id: str, handle: LiveConnection) -> None:
        async with self._lock:
            previous = self._connections.get(user_id)
            self._connections[user_id] = handle
        if previous is not None and previous is not handle:
            logger.info("Replaced live connection for user=%s", user_id)
        logger.info("Live connections: %s", len(self._connections))

    async def unregister(self, user_id: str, handle: LiveConnection | None = None) -> bool:
        """Remove a user's entry.

        With ``handle`` given, the entry is only removed while it still
        belongs to that connection.
        """
        async with self._lock:
            current = self._connections.get(user_id)
            if current is None or (handle is not None and current is not handle):
                return False
            del self._connections[user_id]
        logger.debug("Unregistered live connection for user=%s", user_id)
        return True

    async def send_if_present(self, user_id: str, payload: dict[str, Any]) -> None:
        """Send a JSON payload to the user's connection, if any. Best effort."""
        async with self._lock:
            handle = self._connections.get(user_id)
        if handle is None:
            logger.debug("Skipped live push; user=%s has no live connection", user_id)
            return

        try:
            await handle.send_text(json.dumps(payload))
        except Exception as exc:
            logger.warning("Failed to push live message to user=%s: %s", user_id, exc)
            await self.unregister(user_id, handle)

    async def close_all(self) -> None:
        """Close every registered connection and empty the registry."""
        async with self._lock:
            handles = list(self._connections.items())
            self._connections.clear()
        for user_id, handle in handles:
            try:
                await handle.close(code=1001)
            except Exception as exc:
                logger.debug("Error closing live connection for user=%s: %s", user_id, exc)


class SessionState(enum.Enum):
    """Lifecycle of a single live connection."""

    DISCONNECTED = "disconnected"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class LiveSession:
    """State machine for one live connection.

    DISCONNECTED -> AUTHENTICATING on open, -> AUTHENTICATED on a valid
    ``auth`` message, -> DISCONNECTED on close. Closed sessions stay closed.
    """

    def __init__(self, connection: LiveConnection, registry: ConnectionRegistry) -> None:
        self.connection = connection
        self.registry = registry
        self.state = SessionState.DISCONNECTED
        self.user_id: str | None = None
        self._closed = False

    def opened(self) -> None:
        if self._closed:
            return
        self.state = SessionState.AUTHENTICATING

    async def handle_message(self, raw: str) -> None:
        """Handle one inbound frame. Bad frames are logged and ignored."""
        if self.state is SessionState.DISCONNECTED:
            logger.warning("Ignoring live message on a disconnected session")
            return

        try:
            message = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring malformed live message: not JSON")
            return

        if not isinstance(message, dict):
            logger.warning("Ignoring malformed live message: expected an object")
            return

        msg_type = message.get("type")
        if msg_type != "auth":
            logger.debug("Ignoring live message of unknown type %r", msg_type)
            return

        try:
            auth = LiveAuthMessage.model_validate(message)
        except PydanticValidationError as exc:
            logger.warning("Ignoring invalid live auth message: %s", exc.errors()[0]["msg"])
            return

        await self._authenticate(auth.user_id)

    async def _authenticate(self, user_id: str) -> None:
        if self.user_id is not None and self.user_id != user_id:
            await self.registry.unregister(self.user_id, self.connection)
        self.user_id = user_id
        await self.registry.register(user_id, self.connection)
        self.state = SessionState.AUTHENTICATED
        logger.info("User %s authenticated on live channel", user_id)

    async def closed(self) -> None:
        """Tear down after a clean close or a transport failure."""
        if self.user_id is not None:
            await self.registry.unregister(self.user_id, self.connection)
            logger.info("User %s disconnected from live channel", self.user_id)
        self.state = SessionState.DISCONNECTED
        self._closed = True


class LiveNotifier:
    """Pushes status changes to the actor's partner. One-way, no acknowledgement."""

    def __init__(self, registry: ConnectionRegistry) -> None:
        self.registry = registry

    async def status_changed(self, actor: User, status: Status) -> None:
        if actor.partner_id is None:
            return

        message = StatusUpdateMessage(
            status=StatusResponse.model_validate(status),
            user_id=actor.id,
        )
        await self.registry.send_if_present(
            actor.partner_id, message.model_dump(mode="json", by_alias=True)
        )
