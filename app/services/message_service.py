"""Message router for chat, typing and leave events inside a session."""

import logging
from uuid import uuid4

from app.config import settings
from app.core.events import Event, Outbox
from app.core.exceptions import NotInSessionError, RequiredFieldError, ValidationError
from app.models.message import Message
from app.schemas.message import ChatMessageEvent, PartnerLeftEvent, TypingEvent
from app.services import registry_service, session_service
from app.store import ChatStore

logger = logging.getLogger(__name__)

PARTNER_LEFT_MESSAGE = "Stranger has left the chat"
PARTNER_DISCONNECTED_MESSAGE = "Stranger has disconnected"


def generate_message_id() -> str:
    return f"msg_{uuid4().hex}"


def validate_content(content: str | None) -> str:
    if content is None or not content.strip():
        raise RequiredFieldError("Message cannot be empty", field="message")
    if len(content) > settings.MAX_MESSAGE_LENGTH:
        raise ValidationError(
            f"Message must be at most {settings.MAX_MESSAGE_LENGTH} characters",
            field="message",
        )
    return content


def send_message(
    store: ChatStore,
    outbox: Outbox,
    from_connection_id: str,
    content: str | None,
) -> Message:
    """
    Deliver a chat message to both participants, sender included.

    Each copy carries is_own so clients can align it without knowing
    their own identity.
    """
    session = session_service.find_by_participant(store, from_connection_id)
    if session is None:
        raise NotInSessionError()

    content = validate_content(content)
    sender = registry_service.get_profile(store, from_connection_id)
    message = Message(
        id=generate_message_id(),
        sender=sender.nickname if sender else "Stranger",
        content=content,
    )

    for participant in session.participants:
        event = ChatMessageEvent(
            id=message.id,
            sender=message.sender,
            content=message.content,
            timestamp=message.timestamp,
            is_own=participant == from_connection_id,
        )
        outbox.emit(participant, Event.CHAT_MESSAGE, event.to_payload())
    return message


def relay_typing(store: ChatStore, outbox: Outbox, from_connection_id: str) -> bool:
    """Forward a typing signal to the partner only. No-op outside a session."""
    session = session_service.find_by_participant(store, from_connection_id)
    if session is None:
        return False

    partner_id = session.partner_of(from_connection_id)
    sender = registry_service.get_profile(store, from_connection_id)
    if partner_id is None or sender is None:
        return False

    outbox.emit(partner_id, Event.CHAT_TYPING, TypingEvent(nickname=sender.nickname).to_payload())
    return True


def leave_session(
    store: ChatStore,
    outbox: Outbox,
    from_connection_id: str,
    notice: str = PARTNER_LEFT_MESSAGE,
) -> bool:
    """
    End the caller's session and tell the partner.

    Returns False when the caller had no session; leaving twice is not an error.
    The partner is not re-queued.
    """
    session = session_service.find_by_participant(store, from_connection_id)
    if session is None:
        return False

    partner_id = session.partner_of(from_connection_id)
    if partner_id is not None:
        outbox.emit(
            partner_id,
            Event.CHAT_PARTNER_LEFT,
            PartnerLeftEvent(message=notice).to_payload(),
        )
    session_service.destroy_session(store, session.id)
    return True


def report_partner(
    store: ChatStore,
    from_connection_id: str,
    reason: str | None,
) -> None:
    """Log a report about the current partner. Reports are not stored."""
    reason = (reason or "").strip()[: settings.MAX_REPORT_REASON_LENGTH]
    session = session_service.find_by_participant(store, from_connection_id)
    reporter = registry_service.get_profile(store, from_connection_id)
    reported = None
    if session is not None:
        partner_id = session.partner_of(from_connection_id)
        reported = registry_service.get_profile(store, partner_id) if partner_id else None

    logger.warning(
        "Report from %s (%s) against %s in session %s: %s",
        from_connection_id,
        reporter.nickname if reporter else None,
        reported.nickname if reported else None,
        session.id if session else None,
        reason or "<no reason>",
    )
