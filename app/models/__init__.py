from app.models.chat_session import ChatSession
from app.models.message import Message
from app.models.profile import Gender, UserProfile
from app.models.queue_entry import QUEUE_ORDER, QueueEntry, QueuePreference

__all__ = [
    "UserProfile",
    "Gender",
    "QueueEntry",
    "QueuePreference",
    "QUEUE_ORDER",
    "ChatSession",
    "Message",
]
