"""WebSocket endpoint carrying the chat event protocol."""

import json
import logging
from typing import Annotated

import anyio
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from app.core.events import Event, Outbox
from app.core.exceptions import InvalidFormatError
from app.dependencies import get_connections, get_coordinator
from app.services.coordinator import ChatCoordinator
from app.transport import ConnectionManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["chat"])


@router.websocket("/ws")
async def chat_socket(
    websocket: WebSocket,
    coordinator: Annotated[ChatCoordinator, Depends(get_coordinator)],
    connections: Annotated[ConnectionManager, Depends(get_connections)],
) -> None:
    """
    One socket per anonymous user.

    Frames are JSON objects `{"event": ..., "data": {...}}`. Events from a
    connection are handled in arrival order; closing the socket runs the
    same cleanup as a logout.
    """
    connection_id = await connections.connect(websocket)
    logger.info("Client connected: %s", connection_id)

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))

            # Binary frames carry the same JSON, UTF-8 encoded
            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes") or b""
            try:
                frame = json.loads(raw)
            except ValueError:
                frame = None

            if not isinstance(frame, dict):
                outbox = Outbox()
                outbox.emit(
                    connection_id,
                    Event.ERROR,
                    InvalidFormatError("Frames must be JSON objects").to_ack(),
                )
                await coordinator.flush(outbox)
                continue

            await coordinator.handle_event(connection_id, frame.get("event"), frame.get("data"))
    except WebSocketDisconnect:
        pass
    finally:
        connections.disconnect(connection_id)
        # Partner notices must go out even when the socket task is being cancelled
        with anyio.CancelScope(shield=True):
            await coordinator.disconnect(connection_id)
        logger.info("Client disconnected: %s", connection_id)
