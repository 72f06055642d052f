"""Chat event schemas."""

from datetime import datetime

from app.schemas.base import CamelModel


class ChatSendRequest(CamelModel):
    message: str | None = None


class ChatMessageEvent(CamelModel):
    """chat:message delivered to each participant."""
    id: str
    sender: str
    content: str
    timestamp: datetime
    is_own: bool


class TypingEvent(CamelModel):
    nickname: str


class PartnerLeftEvent(CamelModel):
    message: str


class ChatReportRequest(CamelModel):
    reason: str | None = None
