from starlette.requests import HTTPConnection

from app.services.coordinator import ChatCoordinator
from app.transport import ConnectionManager


def get_coordinator(connection: HTTPConnection) -> ChatCoordinator:
    """Coordinator created by the app lifespan."""
    return connection.app.state.coordinator


def get_connections(connection: HTTPConnection) -> ConnectionManager:
    return connection.app.state.connections
