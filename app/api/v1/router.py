from fastapi import APIRouter

from app.api.v1.endpoints import chat, stats

router = APIRouter()

router.include_router(chat.router)
router.include_router(stats.router, prefix="/stats")
