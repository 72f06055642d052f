"""In-memory state owned by one coordinator instance."""

from dataclasses import dataclass, field

from app.models.chat_session import ChatSession
from app.models.profile import UserProfile
from app.models.queue_entry import QUEUE_ORDER, QueueEntry, QueuePreference


def _empty_queues() -> dict[QueuePreference, list[QueueEntry]]:
    return {preference: [] for preference in QUEUE_ORDER}


@dataclass
class ChatStore:
    """
    Registry, preference queues and sessions for one coordinator.

    Services receive the store as their first argument and mutate it
    synchronously, so a single event-loop step sees a consistent store.
    """

    profiles: dict[str, UserProfile] = field(default_factory=dict)
    queues: dict[QueuePreference, list[QueueEntry]] = field(default_factory=_empty_queues)
    sessions: dict[str, ChatSession] = field(default_factory=dict)
    # connection id -> session id
    session_index: dict[str, str] = field(default_factory=dict)
