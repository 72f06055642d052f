"""Ephemeral chat message, never persisted beyond delivery."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class Message:
    id: str
    sender: str
    content: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
