"""Session manager for two-party chat sessions."""

import logging
from uuid import uuid4

from app.models.chat_session import ChatSession
from app.store import ChatStore

logger = logging.getLogger(__name__)


def generate_session_id() -> str:
    return f"session_{uuid4().hex}"


def create_session(store: ChatStore, connection_a: str, connection_b: str) -> ChatSession:
    """
    Create a session between two connections.

    Callers must have checked that neither connection is already in a session.
    """
    if connection_a == connection_b:
        raise ValueError("A session needs two distinct participants")

    session = ChatSession(
        id=generate_session_id(),
        participants=(connection_a, connection_b),
    )
    store.sessions[session.id] = session
    store.session_index[connection_a] = session.id
    store.session_index[connection_b] = session.id
    logger.info("Session %s started: %s <-> %s", session.id, connection_a, connection_b)
    return session


def get_session(store: ChatStore, session_id: str) -> ChatSession | None:
    return store.sessions.get(session_id)


def find_by_participant(store: ChatStore, connection_id: str) -> ChatSession | None:
    """O(1) lookup of the active session a connection belongs to."""
    session_id = store.session_index.get(connection_id)
    if session_id is None:
        return None
    return store.sessions.get(session_id)


def destroy_session(store: ChatStore, session_id: str) -> bool:
    """Remove a session and its participant index entries. Idempotent."""
    session = store.sessions.pop(session_id, None)
    if session is None:
        return False
    for participant in session.participants:
        if store.session_index.get(participant) == session_id:
            del store.session_index[participant]
    logger.info("Session %s ended", session_id)
    return True


def count_sessions(store: ChatStore) -> int:
    return len(store.sessions)
