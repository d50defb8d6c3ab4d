"""Live channel: WebSocket endpoint for partner status pushes."""

import logging

from fastapi import APIRouter, Depends, WebSocket

from partner_status.api.dependencies import get_connection_registry
from partner_status.config import get_settings
from partner_status.services.notifier import ConnectionRegistry, LiveSession

router = APIRouter(tags=["live"])
logger = logging.getLogger(__name__)


@router.websocket(get_settings().live_path)
async def live_channel(
    websocket: WebSocket,
    registry: ConnectionRegistry = Depends(get_connection_registry),
) -> None:
    """Accept a connection and wait for ``{"type": "auth", "userId": ...}``.

    Until it authenticates the connection receives nothing.
    """
    await websocket.accept()
    session = LiveSession(websocket, registry)
    session.opened()
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            raw = message.get("text")
            if raw is None:
                raw = (message.get("bytes") or b"").decode("utf-8", errors="replace")
            await session.handle_message(raw)
    except Exception:
        logger.exception("Live channel error for user=%s", session.user_id)
    finally:
        await session.closed()
