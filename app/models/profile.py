"""User profile held for one live connection."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class Gender(str, Enum):
    male = "male"
    female = "female"
    unspecified = "unspecified"


@dataclass(frozen=True)
class UserProfile:
    connection_id: str
    device_id: str
    nickname: str
    bio: str = ""
    gender: Gender = Gender.unspecified
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
