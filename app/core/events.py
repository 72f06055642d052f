"""Socket event names and the per-event outbox of notifications."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator


class Event(str, Enum):
    # Client -> server (acks reuse the same name)
    AUTH_REGISTER = "auth:register"
    AUTH_CHECK = "auth:check"
    AUTH_LOGOUT = "auth:logout"
    QUEUE_JOIN = "queue:join"
    QUEUE_LEAVE = "queue:leave"
    QUEUE_STATUS = "queue:status"
    CHAT_SEND = "chat:send"
    CHAT_TYPING = "chat:typing"
    CHAT_LEAVE = "chat:leave"
    CHAT_REPORT = "chat:report"
    PLATFORM_STATS = "platform:stats"

    # Server -> client
    MATCH_FOUND = "match:found"
    CHAT_MESSAGE = "chat:message"
    CHAT_PARTNER_LEFT = "chat:partnerLeft"
    ERROR = "error"


@dataclass(frozen=True)
class Outbound:
    connection_id: str
    event: str
    data: dict[str, Any]


@dataclass
class Outbox:
    """Ordered notifications produced while handling one inbound event."""

    items: list[Outbound] = field(default_factory=list)

    def emit(self, connection_id: str, event: Event | str, data: dict[str, Any]) -> None:
        self.items.append(Outbound(connection_id, _event_name(event), data))

    def reply_first(self, connection_id: str, event: Event | str, data: dict[str, Any]) -> None:
        """Queue an acknowledgement ahead of every notification."""
        self.items.insert(0, Outbound(connection_id, _event_name(event), data))

    def for_connection(self, connection_id: str) -> list[Outbound]:
        return [item for item in self.items if item.connection_id == connection_id]

    def without(self, connection_id: str) -> "Outbox":
        """Copy keeping only the frames addressed to other connections."""
        return Outbox([item for item in self.items if item.connection_id != connection_id])

    def __iter__(self) -> Iterator[Outbound]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


def _event_name(event: Event | str) -> str:
    return event.value if isinstance(event, Event) else event
