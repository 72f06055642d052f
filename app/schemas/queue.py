from app.models.queue_entry import QueuePreference
from app.schemas.base import CamelModel


class QueueJoinRequest(CamelModel):
    preferred_gender: QueuePreference | None = None


class QueueJoinResponse(CamelModel):
    success: bool = True
    queue_type: QueuePreference
    position: int


class QueueStatusResponse(CamelModel):
    in_queue: bool
    queue_type: QueuePreference | None = None
    position: int | None = None
    total_in_queue: int | None = None
