from typing import Annotated

from fastapi import APIRouter, Depends

from app.dependencies import get_coordinator
from app.schemas.common import PlatformStats
from app.services.coordinator import ChatCoordinator

router = APIRouter(prefix="", tags=["stats"])


@router.get("/", response_model=PlatformStats)
async def get_platform_stats(
    coordinator: Annotated[ChatCoordinator, Depends(get_coordinator)],
) -> PlatformStats:
    """Online users, users waiting in any queue and users currently chatting."""
    return coordinator.stats()
