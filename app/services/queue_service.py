"""Preference queues: three FIFO waiting lists keyed by wanted gender."""

from dataclasses import dataclass

from app.models.queue_entry import QUEUE_ORDER, QueueEntry, QueuePreference
from app.store import ChatStore


@dataclass(frozen=True)
class QueuePosition:
    preference: QueuePreference
    position: int  # 1-based
    total_in_queue: int


def get_entry(store: ChatStore, connection_id: str) -> QueueEntry | None:
    for preference in QUEUE_ORDER:
        for entry in store.queues[preference]:
            if entry.connection_id == connection_id:
                return entry
    return None


def enqueue(
    store: ChatStore,
    connection_id: str,
    preference: QueuePreference,
) -> int:
    """
    Put a connection at the back of the queue for `preference`.

    Any previous entry for the connection is dropped first, so re-joining
    moves the connection to the back with a fresh joined_at.
    Returns the 1-based position.
    """
    dequeue(store, connection_id)
    queue = store.queues[preference]
    queue.append(QueueEntry(connection_id=connection_id, preference=preference))
    return len(queue)


def dequeue(store: ChatStore, connection_id: str) -> bool:
    """Remove the connection from every queue. Returns True if it was queued."""
    removed = False
    for preference in QUEUE_ORDER:
        queue = store.queues[preference]
        kept = [entry for entry in queue if entry.connection_id != connection_id]
        if len(kept) != len(queue):
            store.queues[preference] = kept
            removed = True
    return removed


def position_of(store: ChatStore, connection_id: str) -> QueuePosition | None:
    for preference in QUEUE_ORDER:
        queue = store.queues[preference]
        for index, entry in enumerate(queue):
            if entry.connection_id == connection_id:
                return QueuePosition(
                    preference=preference,
                    position=index + 1,
                    total_in_queue=len(queue),
                )
    return None


def iter_entries(store: ChatStore, preferences: tuple[QueuePreference, ...]):
    """Yield entries of the given queues in the order given, FIFO within each."""
    for preference in preferences:
        yield from list(store.queues[preference])


def count_all(store: ChatStore) -> int:
    return sum(len(store.queues[preference]) for preference in QUEUE_ORDER)
