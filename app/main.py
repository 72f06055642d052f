import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1.router import router as v1_router
from app.config import settings
from app.core.exception_handlers import (
    generic_exception_handler,
    http_exception_handler,
)
from app.core.logging import setup_logging
from app.services.coordinator import ChatCoordinator
from app.transport import ConnectionManager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # All matching state lives in memory for the lifetime of the process
    connections = ConnectionManager()
    app.state.connections = connections
    app.state.coordinator = ChatCoordinator(transport=connections)
    logger.info("Chat coordinator started")
    yield
    logger.info(
        "Chat coordinator stopped with %d open connections",
        len(connections.connections),
    )


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        lifespan=lifespan,
    )

    # Register exception handlers
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # Parse CORS origins from settings
    cors_origins = [origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(v1_router, prefix="/api/v1")

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


app = create_app()
