"""
Exception handlers for the HTTP surface and the socket event loop.
Provides consistent error payloads across both.
"""

import logging
import uuid
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import AppException, ErrorCode, ServerError

logger = logging.getLogger(__name__)


def generate_request_id() -> str:
    """Generate a unique request ID for error tracing"""
    return str(uuid.uuid4())[:8]


# ============== Socket events ==============


def app_exception_ack(exc: AppException, event: str, connection_id: str) -> dict[str, Any]:
    """
    Turn an AppException raised by an event handler into a failed ack.
    The caller's state is unchanged; the reason goes back inline.
    """
    logger.warning(
        "AppException: %s (code=%s, event=%s, connection=%s)",
        exc.message,
        exc.code.value,
        event,
        connection_id,
    )
    return exc.to_ack()


def generic_exception_ack(exc: Exception, event: str, connection_id: str) -> dict[str, Any]:
    """
    Catch-all for unexpected errors inside an event handler.
    Logs the traceback and keeps the coordinator running.
    """
    logger.exception(
        "Unhandled exception (event=%s, connection=%s): %s",
        event,
        connection_id,
        str(exc),
    )
    return ServerError().to_ack()


# ============== HTTP ==============


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """
    Handle standard HTTP exceptions from FastAPI/Starlette.
    Converts them to our standardized response format.
    """
    request_id = generate_request_id()

    status_to_code = {
        400: ErrorCode.VALIDATION_ERROR,
        404: ErrorCode.RESOURCE_NOT_FOUND,
        405: ErrorCode.VALIDATION_ERROR,
        422: ErrorCode.VALIDATION_ERROR,
        500: ErrorCode.SERVER_ERROR,
        502: ErrorCode.SERVER_UNAVAILABLE,
        503: ErrorCode.SERVER_UNAVAILABLE,
    }

    error_code = status_to_code.get(exc.status_code, ErrorCode.SERVER_ERROR)

    logger.warning(
        "HTTPException: %s (status=%d, request_id=%s, path=%s)",
        exc.detail,
        exc.status_code,
        request_id,
        request.url.path,
    )

    response_body: dict[str, Any] = {
        "detail": exc.detail or "An error occurred",
        "code": error_code.value,
    }

    return JSONResponse(
        status_code=exc.status_code,
        content=response_body,
        headers={"X-Request-ID": request_id},
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all handler for unexpected exceptions.
    Logs the full error for debugging and returns a generic error response.
    """
    request_id = generate_request_id()

    logger.exception(
        "Unhandled exception (request_id=%s, path=%s): %s",
        request_id,
        request.url.path,
        str(exc),
    )

    response_body: dict[str, Any] = {
        "detail": "Internal server error. Please try again later.",
        "code": ErrorCode.SERVER_ERROR.value,
    }

    return JSONResponse(
        status_code=500,
        content=response_body,
        headers={"X-Request-ID": request_id},
    )
