"""
Event coordinator: runs one inbound socket event at a time against the store.

Every handler mutates the store synchronously and records what must be sent
in an Outbox. Only after the handler returns are the frames flushed through
the transport, so no other event can observe a half-applied change.
"""

import asyncio
import logging
from typing import Any, Callable

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.core.events import Event, Outbox
from app.core.exception_handlers import app_exception_ack, generic_exception_ack
from app.core.exceptions import (
    AlreadyInSessionError,
    AppException,
    InvalidFormatError,
    NotRegisteredError,
)
from app.models.queue_entry import QueuePreference
from app.schemas import (
    AuthCheckResponse,
    ChatReportRequest,
    ChatSendRequest,
    PlatformStats,
    ProfileResponse,
    QueueJoinRequest,
    QueueJoinResponse,
    QueueStatusResponse,
    RegisterRequest,
    RegisterResponse,
    SuccessResponse,
)
from app.services import (
    cleanup_service,
    matching_service,
    message_service,
    queue_service,
    registry_service,
    session_service,
)
from app.store import ChatStore
from app.transport import OrderedDelivery, Transport

logger = logging.getLogger(__name__)

Handler = Callable[[str, Any, Outbox], dict[str, Any] | None]


def _parse(schema: type[BaseModel], data: Any) -> Any:
    """Validate an inbound payload, converting pydantic errors to InvalidFormatError."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidFormatError("Payload must be an object")
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        error = exc.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or None
        raise InvalidFormatError(f"Invalid {field}: {error['msg']}", field=field) from exc


class ChatCoordinator:
    """Owns one ChatStore and dispatches socket events against it."""

    def __init__(self, transport: Transport, store: ChatStore | None = None) -> None:
        self.transport = transport
        self.delivery = OrderedDelivery(transport)
        self.store = store or ChatStore()
        self._handlers: dict[str, Handler] = {
            Event.AUTH_REGISTER.value: self._on_register,
            Event.AUTH_CHECK.value: self._on_auth_check,
            Event.AUTH_LOGOUT.value: self._on_logout,
            Event.QUEUE_JOIN.value: self._on_queue_join,
            Event.QUEUE_LEAVE.value: self._on_queue_leave,
            Event.QUEUE_STATUS.value: self._on_queue_status,
            Event.CHAT_SEND.value: self._on_chat_send,
            Event.CHAT_TYPING.value: self._on_chat_typing,
            Event.CHAT_LEAVE.value: self._on_chat_leave,
            Event.CHAT_REPORT.value: self._on_chat_report,
            Event.PLATFORM_STATS.value: self._on_platform_stats,
        }

    # ============== Entry points ==============

    async def handle_event(self, connection_id: str, event: Any, data: Any = None) -> Outbox:
        """
        Process one inbound event to completion and flush its frames.

        Never raises: failures become a `success: false` ack to the caller.
        Returns the flushed outbox.
        """
        outbox = Outbox()
        handler = self._handlers.get(event) if isinstance(event, str) else None
        reply_event = event if handler is not None else Event.ERROR.value

        try:
            if handler is None:
                raise InvalidFormatError(f"Unknown event: {event}", field="event")
            ack = handler(connection_id, data, outbox)
        except AppException as exc:
            outbox = outbox.without(connection_id)
            ack = app_exception_ack(exc, str(event), connection_id)
        except Exception as exc:
            # Changes already made for other connections still get announced
            outbox = outbox.without(connection_id)
            ack = generic_exception_ack(exc, str(event), connection_id)

        if ack is not None:
            outbox.reply_first(connection_id, reply_event, ack)
        await self.flush(outbox)
        return outbox

    async def disconnect(self, connection_id: str) -> Outbox:
        """Transport lost the connection: cascade cleanup and notify the partner."""
        outbox = Outbox()
        try:
            cleanup_service.cleanup_connection(self.store, outbox, connection_id)
        except Exception:
            logger.exception("Cleanup failed for connection %s", connection_id)
        await self.flush(outbox)
        return outbox

    async def flush(self, outbox: Outbox) -> None:
        """
        Queue every frame before the first await, then wait for delivery.

        Queueing happens right after the store change, so frames from a later
        event never overtake those of an earlier one on the same connection.
        """
        pending = [self.delivery.submit(item) for item in outbox]
        if pending:
            await asyncio.gather(*pending)

    def stats(self) -> PlatformStats:
        return PlatformStats(
            online=registry_service.count_online(self.store),
            in_queue=queue_service.count_all(self.store),
            in_chat=session_service.count_sessions(self.store) * 2,
        )

    # ============== Auth ==============

    def _on_register(self, connection_id: str, data: Any, outbox: Outbox) -> dict[str, Any]:
        request = _parse(RegisterRequest, data)
        result = registry_service.register(
            self.store,
            connection_id,
            request.device_id,
            request.nickname,
            request.bio,
            request.gender,
        )
        for stale_id in result.evicted:
            cleanup_service.cleanup_connection(self.store, outbox, stale_id)

        logger.info("Registered %s as %s", connection_id, result.profile.nickname)
        return RegisterResponse(profile=ProfileResponse.from_profile(result.profile)).to_payload()

    def _on_auth_check(self, connection_id: str, data: Any, outbox: Outbox) -> dict[str, Any]:
        profile = registry_service.get_profile(self.store, connection_id)
        return AuthCheckResponse(
            authenticated=profile is not None,
            profile=ProfileResponse.from_profile(profile) if profile else None,
        ).to_payload()

    def _on_logout(self, connection_id: str, data: Any, outbox: Outbox) -> dict[str, Any]:
        cleanup_service.cleanup_connection(self.store, outbox, connection_id)
        return SuccessResponse().to_payload(exclude_none=True)

    # ============== Queue ==============

    def _on_queue_join(self, connection_id: str, data: Any, outbox: Outbox) -> dict[str, Any]:
        request = _parse(QueueJoinRequest, data)
        if registry_service.get_profile(self.store, connection_id) is None:
            raise NotRegisteredError()
        if session_service.find_by_participant(self.store, connection_id) is not None:
            raise AlreadyInSessionError()

        preference = request.preferred_gender or QueuePreference.any
        position = queue_service.enqueue(self.store, connection_id, preference)
        matching_service.try_match(self.store, outbox, connection_id)

        return QueueJoinResponse(queue_type=preference, position=position).to_payload()

    def _on_queue_leave(self, connection_id: str, data: Any, outbox: Outbox) -> dict[str, Any]:
        queue_service.dequeue(self.store, connection_id)
        return SuccessResponse().to_payload(exclude_none=True)

    def _on_queue_status(self, connection_id: str, data: Any, outbox: Outbox) -> dict[str, Any]:
        position = queue_service.position_of(self.store, connection_id)
        if position is None:
            return QueueStatusResponse(in_queue=False).to_payload(exclude_none=True)
        return QueueStatusResponse(
            in_queue=True,
            queue_type=position.preference,
            position=position.position,
            total_in_queue=position.total_in_queue,
        ).to_payload()

    # ============== Chat ==============

    def _on_chat_send(self, connection_id: str, data: Any, outbox: Outbox) -> None:
        request = _parse(ChatSendRequest, data)
        message_service.send_message(self.store, outbox, connection_id, request.message)
        return None

    def _on_chat_typing(self, connection_id: str, data: Any, outbox: Outbox) -> None:
        message_service.relay_typing(self.store, outbox, connection_id)
        return None

    def _on_chat_leave(self, connection_id: str, data: Any, outbox: Outbox) -> dict[str, Any]:
        message_service.leave_session(self.store, outbox, connection_id)
        return SuccessResponse().to_payload(exclude_none=True)

    def _on_chat_report(self, connection_id: str, data: Any, outbox: Outbox) -> dict[str, Any]:
        request = _parse(ChatReportRequest, data)
        message_service.report_partner(self.store, connection_id, request.reason)
        return SuccessResponse(message="Report submitted").to_payload()

    # ============== Platform ==============

    def _on_platform_stats(self, connection_id: str, data: Any, outbox: Outbox) -> dict[str, Any]:
        return self.stats().to_payload()
