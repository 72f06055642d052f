from datetime import datetime

from app.models.profile import Gender, UserProfile
from app.schemas.base import CamelModel


class RegisterRequest(CamelModel):
    """auth:register payload. Presence and length rules live in registry_service."""

    device_id: str | None = None
    nickname: str | None = None
    bio: str | None = None
    gender: str | None = None


class ProfileResponse(CamelModel):
    device_id: str
    nickname: str
    bio: str
    gender: Gender
    created_at: datetime

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "ProfileResponse":
        return cls(
            device_id=profile.device_id,
            nickname=profile.nickname,
            bio=profile.bio,
            gender=profile.gender,
            created_at=profile.created_at,
        )


class PartnerBrief(CamelModel):
    """What a matched user learns about their partner"""

    nickname: str
    bio: str

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "PartnerBrief":
        return cls(nickname=profile.nickname, bio=profile.bio)


class RegisterResponse(CamelModel):
    success: bool = True
    profile: ProfileResponse


class AuthCheckResponse(CamelModel):
    authenticated: bool
    profile: ProfileResponse | None = None
