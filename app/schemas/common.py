from app.schemas.base import CamelModel


class SuccessResponse(CamelModel):
    success: bool = True
    message: str | None = None


class PlatformStats(CamelModel):
    online: int
    in_queue: int
    in_chat: int
