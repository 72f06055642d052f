"""Cascading cleanup when a connection goes away."""

import logging

from app.core.events import Outbox
from app.services import message_service, queue_service, registry_service
from app.store import ChatStore

logger = logging.getLogger(__name__)


def cleanup_connection(
    store: ChatStore,
    outbox: Outbox,
    connection_id: str,
    notice: str = message_service.PARTNER_DISCONNECTED_MESSAGE,
) -> None:
    """
    Remove every trace of a connection from the store.

    1. End its session, notifying the partner.
    2. Drop it from the preference queues.
    3. Drop its profile.

    Each step is a no-op when there is nothing to remove, so this is safe
    for connections that never registered and safe to call twice.
    """
    ended = message_service.leave_session(store, outbox, connection_id, notice=notice)
    dequeued = queue_service.dequeue(store, connection_id)
    profile = registry_service.remove(store, connection_id)

    if ended or dequeued or profile:
        logger.info(
            "Cleaned up %s (session_ended=%s, dequeued=%s, profile=%s)",
            connection_id,
            ended,
            dequeued,
            profile.nickname if profile else None,
        )
