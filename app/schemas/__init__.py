from app.schemas.common import PlatformStats, SuccessResponse
from app.schemas.match import MatchFound
from app.schemas.message import (
    ChatMessageEvent,
    ChatReportRequest,
    ChatSendRequest,
    PartnerLeftEvent,
    TypingEvent,
)
from app.schemas.profile import (
    AuthCheckResponse,
    PartnerBrief,
    ProfileResponse,
    RegisterRequest,
    RegisterResponse,
)
from app.schemas.queue import QueueJoinRequest, QueueJoinResponse, QueueStatusResponse

__all__ = [
    "RegisterRequest",
    "RegisterResponse",
    "ProfileResponse",
    "PartnerBrief",
    "AuthCheckResponse",
    "QueueJoinRequest",
    "QueueJoinResponse",
    "QueueStatusResponse",
    "MatchFound",
    "ChatSendRequest",
    "ChatMessageEvent",
    "TypingEvent",
    "PartnerLeftEvent",
    "ChatReportRequest",
    "SuccessResponse",
    "PlatformStats",
]
