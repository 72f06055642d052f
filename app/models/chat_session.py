"""Two-party chat session."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class ChatSession:
    id: str
    participants: tuple[str, str]
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def partner_of(self, connection_id: str) -> str | None:
        """Return the other participant, or None if connection_id is not in the session."""
        first, second = self.participants
        if connection_id == first:
            return second
        if connection_id == second:
            return first
        return None
