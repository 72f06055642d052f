from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.core.events import Outbox
from app.main import create_app
from app.services.coordinator import ChatCoordinator
from app.store import ChatStore
from tests.helpers import RecordingTransport


@pytest.fixture
def store() -> ChatStore:
    return ChatStore()


@pytest.fixture
def outbox() -> Outbox:
    return Outbox()


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def coordinator(transport: RecordingTransport, store: ChatStore) -> ChatCoordinator:
    return ChatCoordinator(transport=transport, store=store)


@pytest.fixture
def app() -> FastAPI:
    return create_app()


@pytest_asyncio.fixture(scope="function")
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with app.router.lifespan_context(app):
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac
