import asyncio
from typing import Any

from app.core.events import Outbox
from app.services.coordinator import ChatCoordinator


class RecordingTransport:
    """In-memory transport that remembers every frame it was asked to send."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, dict[str, Any]]] = []
        self.broken: set[str] = set()

    async def send(self, connection_id: str, event: str, data: dict[str, Any]) -> None:
        if connection_id in self.broken:
            raise ConnectionError(f"socket {connection_id} is gone")
        self.sent.append((connection_id, event, data))

    def frames(self, connection_id: str, event: str | None = None) -> list[dict[str, Any]]:
        return [
            data
            for target, name, data in self.sent
            if target == connection_id and (event is None or name == event)
        ]

    def events(self, connection_id: str) -> list[str]:
        return [name for target, name, _ in self.sent if target == connection_id]

    def clear(self) -> None:
        self.sent.clear()


async def register_user(
    coordinator: ChatCoordinator,
    connection_id: str,
    nickname: str,
    gender: str = "unspecified",
    device_id: str | None = None,
    bio: str = "",
) -> dict[str, Any]:
    """Helper to register a connection. Returns the ack data."""
    outbox = await coordinator.handle_event(
        connection_id,
        "auth:register",
        {
            "deviceId": device_id or f"device-{connection_id}",
            "nickname": nickname,
            "bio": bio,
            "gender": gender,
        },
    )
    return outbox.for_connection(connection_id)[0].data


async def join_queue(
    coordinator: ChatCoordinator,
    connection_id: str,
    preferred_gender: str = "any",
) -> Outbox:
    return await coordinator.handle_event(
        connection_id, "queue:join", {"preferredGender": preferred_gender}
    )


async def pair(coordinator: ChatCoordinator, first: str, second: str) -> str:
    """Register two connections, match them on the any queue. Returns the session id."""
    await register_user(coordinator, first, f"user-{first}")
    await register_user(coordinator, second, f"user-{second}")
    await join_queue(coordinator, first)
    outbox = await join_queue(coordinator, second)
    found = [item for item in outbox if item.event == "match:found"]
    return found[0].data["sessionId"]


class YieldingTransport(RecordingTransport):
    """Recording transport whose sends give up control first, like a real socket."""

    async def send(self, connection_id: str, event: str, data: dict[str, Any]) -> None:
        await asyncio.sleep(0)
        await super().send(connection_id, event, data)
