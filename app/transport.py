"""WebSocket transport: live connections and ordered, best-effort JSON frames."""

import asyncio
import logging
from collections import deque
from typing import Any, Protocol
from uuid import uuid4

from fastapi import WebSocket

from app.core.events import Outbound

logger = logging.getLogger(__name__)


class Transport(Protocol):
    async def send(self, connection_id: str, event: str, data: dict[str, Any]) -> None:
        ...


class ConnectionManager:
    """Registry of open sockets keyed by a generated connection id."""

    def __init__(self) -> None:
        self.connections: dict[str, WebSocket] = {}

    async def connect(self, websocket: WebSocket) -> str:
        await websocket.accept()
        connection_id = uuid4().hex
        self.connections[connection_id] = websocket
        return connection_id

    def disconnect(self, connection_id: str) -> None:
        self.connections.pop(connection_id, None)

    async def send(self, connection_id: str, event: str, data: dict[str, Any]) -> None:
        """Send one frame. Unknown connection ids are ignored."""
        websocket = self.connections.get(connection_id)
        if websocket is None:
            logger.debug("Dropping %s for closed connection %s", event, connection_id)
            return
        await websocket.send_json({"event": event, "data": data})


class OrderedDelivery:
    """
    Per-connection FIFO of outbound frames on top of a Transport.

    `submit` is synchronous, so frames reach each connection in the order the
    store changes produced them, whatever the sockets' speed. A connection with
    pending frames has exactly one writer task; a slow socket holds up only its
    own frames. A failed send is logged and the writer moves on.
    """

    def __init__(self, transport: Transport) -> None:
        self.transport = transport
        self._pending: dict[str, deque[tuple[Outbound, asyncio.Future]]] = {}
        self._writers: dict[str, asyncio.Task] = {}

    def submit(self, item: Outbound) -> asyncio.Future:
        """Queue one frame. The returned future resolves once the send was attempted."""
        done = asyncio.get_running_loop().create_future()
        pending = self._pending.get(item.connection_id)
        if pending is None:
            pending = self._pending[item.connection_id] = deque()
            self._writers[item.connection_id] = asyncio.create_task(
                self._drain(item.connection_id, pending)
            )
        pending.append((item, done))
        return done

    async def _drain(
        self,
        connection_id: str,
        pending: deque[tuple[Outbound, asyncio.Future]],
    ) -> None:
        try:
            while pending:
                item, done = pending[0]
                try:
                    await self.transport.send(item.connection_id, item.event, item.data)
                except Exception as exc:
                    logger.warning(
                        "Failed to deliver %s to %s: %s",
                        item.event,
                        item.connection_id,
                        exc,
                    )
                pending.popleft()
                if not done.done():
                    done.set_result(None)
        finally:
            # Writer retires once idle; the next submit starts a fresh one
            self._pending.pop(connection_id, None)
            self._writers.pop(connection_id, None)
            for _, done in pending:
                done.cancel()
