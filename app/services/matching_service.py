"""Matching service: pairs a newly queued user with a compatible waiter."""

import logging
from dataclasses import dataclass

from app.core.events import Event, Outbox
from app.models.chat_session import ChatSession
from app.models.profile import Gender, UserProfile
from app.models.queue_entry import QUEUE_ORDER, QueueEntry, QueuePreference
from app.schemas.match import MatchFound
from app.schemas.profile import PartnerBrief
from app.services import queue_service, registry_service, session_service
from app.store import ChatStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchResult:
    session: ChatSession
    joiner: UserProfile
    partner: UserProfile


def candidate_pools(
    preference: QueuePreference,
    gender: Gender,
) -> tuple[QueuePreference, ...]:
    """
    Queues a joining user is matched against, in tie-break order.

    - preference "any": every queue (any, male, female).
    - preference "male"/"female": the "any" queue plus the queue named after
      the joiner's OWN gender, i.e. people who want someone like the joiner.
      The joiner's stated preference does not pick the second queue.
    - An unspecified gender with a specific preference only sees "any".
    """
    if preference == QueuePreference.any:
        return QUEUE_ORDER
    if gender in (Gender.male, Gender.female):
        return (QueuePreference.any, QueuePreference(gender.value))
    return (QueuePreference.any,)


def find_candidate(
    store: ChatStore,
    joiner: UserProfile,
    preference: QueuePreference,
) -> QueueEntry | None:
    """First eligible waiter: pool order first, then arrival order within a queue."""
    for entry in queue_service.iter_entries(store, candidate_pools(preference, joiner.gender)):
        if entry.connection_id == joiner.connection_id:
            continue
        if registry_service.get_profile(store, entry.connection_id) is None:
            # Queue entries never outlive their profile; drop a stray one.
            logger.warning("Dropping queue entry without profile: %s", entry.connection_id)
            queue_service.dequeue(store, entry.connection_id)
            continue
        return entry
    return None


def try_match(store: ChatStore, outbox: Outbox, connection_id: str) -> MatchResult | None:
    """
    Try to pair a queued connection.

    On success both connections leave every queue, a session is created and
    each side gets match:found with the other's nickname and bio.
    Returns None and leaves the joiner queued when nobody is eligible.
    """
    joiner = registry_service.get_profile(store, connection_id)
    entry = queue_service.get_entry(store, connection_id)
    if joiner is None or entry is None:
        return None

    candidate = find_candidate(store, joiner, entry.preference)
    if candidate is None:
        return None

    partner = registry_service.get_profile(store, candidate.connection_id)

    queue_service.dequeue(store, joiner.connection_id)
    queue_service.dequeue(store, partner.connection_id)
    session = session_service.create_session(store, joiner.connection_id, partner.connection_id)

    outbox.emit(
        joiner.connection_id,
        Event.MATCH_FOUND,
        MatchFound(session_id=session.id, partner=PartnerBrief.from_profile(partner)).to_payload(),
    )
    outbox.emit(
        partner.connection_id,
        Event.MATCH_FOUND,
        MatchFound(session_id=session.id, partner=PartnerBrief.from_profile(joiner)).to_payload(),
    )

    logger.info(
        "Matched %s (%s) with %s (%s) in session %s",
        joiner.connection_id,
        entry.preference.value,
        partner.connection_id,
        candidate.preference.value,
        session.id,
    )
    return MatchResult(session=session, joiner=joiner, partner=partner)
