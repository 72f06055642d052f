"""Identity registry: connection id -> user profile."""

import logging
from dataclasses import dataclass, field

from app.config import settings
from app.core.exceptions import NicknameTakenError, RequiredFieldError, ValidationError
from app.models.profile import Gender, UserProfile
from app.store import ChatStore

logger = logging.getLogger(__name__)


@dataclass
class RegistrationResult:
    profile: UserProfile
    # Connections that held the same device id and were dropped from the registry.
    # Their queue and session state still has to be cleaned up by the caller.
    evicted: list[str] = field(default_factory=list)


def _normalize_gender(gender: str | None) -> Gender:
    if gender in (Gender.male.value, Gender.female.value):
        return Gender(gender)
    return Gender.unspecified


def validate_registration(
    device_id: str | None,
    nickname: str | None,
    bio: str | None,
) -> tuple[str, str, str]:
    """Return stripped (device_id, nickname, bio) or raise a ValidationError."""
    device_id = (device_id or "").strip()
    nickname = (nickname or "").strip()
    bio = (bio or "").strip()

    if not device_id or not nickname:
        missing = "deviceId" if not device_id else "nickname"
        raise RequiredFieldError("Device ID and nickname are required", field=missing)

    if not settings.NICKNAME_MIN_LENGTH <= len(nickname) <= settings.NICKNAME_MAX_LENGTH:
        raise ValidationError(
            f"Nickname must be {settings.NICKNAME_MIN_LENGTH}-"
            f"{settings.NICKNAME_MAX_LENGTH} characters",
            field="nickname",
        )

    if len(bio) > settings.BIO_MAX_LENGTH:
        raise ValidationError(
            f"Bio must be at most {settings.BIO_MAX_LENGTH} characters",
            field="bio",
        )

    return device_id, nickname, bio


def get_profile(store: ChatStore, connection_id: str) -> UserProfile | None:
    """Get profile by connection id."""
    return store.profiles.get(connection_id)


def get_profile_by_nickname(store: ChatStore, nickname: str) -> UserProfile | None:
    """Case-insensitive nickname lookup among live profiles."""
    wanted = nickname.casefold()
    for profile in store.profiles.values():
        if profile.nickname.casefold() == wanted:
            return profile
    return None


def get_connections_for_device(store: ChatStore, device_id: str) -> list[str]:
    return [
        connection_id
        for connection_id, profile in store.profiles.items()
        if profile.device_id == device_id
    ]


def register(
    store: ChatStore,
    connection_id: str,
    device_id: str | None,
    nickname: str | None,
    bio: str | None = None,
    gender: str | None = None,
) -> RegistrationResult:
    """
    Register (or re-register) the profile for a connection.

    - Nickname must not be held by another live connection on a different device.
    - Other connections registered with the same device id are evicted.
    - Registering again from the same connection replaces its profile.

    Nothing is mutated when validation or the nickname check fails.
    """
    device_id, nickname, bio = validate_registration(device_id, nickname, bio)

    holder = get_profile_by_nickname(store, nickname)
    if (
        holder is not None
        and holder.connection_id != connection_id
        and holder.device_id != device_id
    ):
        raise NicknameTakenError()

    evicted = [
        other_id
        for other_id in get_connections_for_device(store, device_id)
        if other_id != connection_id
    ]
    for other_id in evicted:
        remove(store, other_id)
        logger.info(
            "Evicted connection %s: device %s re-registered on %s",
            other_id,
            device_id,
            connection_id,
        )

    profile = UserProfile(
        connection_id=connection_id,
        device_id=device_id,
        nickname=nickname,
        bio=bio,
        gender=_normalize_gender(gender),
    )
    store.profiles[connection_id] = profile
    return RegistrationResult(profile=profile, evicted=evicted)


def remove(store: ChatStore, connection_id: str) -> UserProfile | None:
    """Remove the profile for a connection; no error if absent."""
    return store.profiles.pop(connection_id, None)


def count_online(store: ChatStore) -> int:
    return len(store.profiles)
