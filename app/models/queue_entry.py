"""Waiting-list entry for the matching queues."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class QueuePreference(str, Enum):
    any = "any"
    male = "male"
    female = "female"


# Candidate pools are scanned in this order; FIFO within each queue.
QUEUE_ORDER: tuple[QueuePreference, ...] = (
    QueuePreference.any,
    QueuePreference.male,
    QueuePreference.female,
)


@dataclass
class QueueEntry:
    connection_id: str
    preference: QueuePreference
    joined_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
