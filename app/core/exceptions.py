"""
Custom exception classes for the Greyroom coordinator.
Provides structured error handling with machine-readable error codes.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes matching frontend for consistency"""

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    VALIDATION_INVALID_FORMAT = "VALIDATION_INVALID_FORMAT"
    VALIDATION_REQUIRED_FIELD = "VALIDATION_REQUIRED_FIELD"

    # Conflict errors
    NICKNAME_TAKEN = "NICKNAME_TAKEN"

    # State errors
    STATE_ERROR = "STATE_ERROR"
    STATE_NOT_REGISTERED = "STATE_NOT_REGISTERED"
    STATE_NOT_IN_SESSION = "STATE_NOT_IN_SESSION"
    STATE_ALREADY_IN_SESSION = "STATE_ALREADY_IN_SESSION"

    # Resource errors (HTTP surface)
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Server errors
    SERVER_ERROR = "SERVER_ERROR"
    SERVER_UNAVAILABLE = "SERVER_UNAVAILABLE"


class AppException(Exception):
    """
    Base exception class for application errors.
    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SERVER_ERROR,
        field: str | None = None,
    ):
        self.message = message
        self.code = code
        self.field = field
        super().__init__(self.message)

    def to_ack(self) -> dict[str, Any]:
        """Convert exception to a failed socket acknowledgement"""
        ack: dict[str, Any] = {
            "success": False,
            "error": self.message,
            "code": self.code.value,
        }
        if self.field:
            ack["field"] = self.field
        return ack


# Validation Errors


class ValidationError(AppException):
    """Validation error"""

    def __init__(
        self,
        message: str = "Please check the submitted data",
        field: str | None = None,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ):
        super().__init__(
            message=message,
            code=code,
            field=field,
        )


class InvalidFormatError(ValidationError):
    """Invalid data format"""

    def __init__(
        self,
        message: str = "Invalid data format",
        field: str | None = None,
    ):
        super().__init__(
            message=message,
            field=field,
            code=ErrorCode.VALIDATION_INVALID_FORMAT,
        )


class RequiredFieldError(ValidationError):
    """Required field missing"""

    def __init__(
        self,
        message: str = "This field is required",
        field: str | None = None,
    ):
        super().__init__(
            message=message,
            field=field,
            code=ErrorCode.VALIDATION_REQUIRED_FIELD,
        )


# Conflict Errors


class NicknameTakenError(AppException):
    """Nickname held by another live device"""

    def __init__(self, message: str = "This nickname is already in use"):
        super().__init__(
            message=message,
            code=ErrorCode.NICKNAME_TAKEN,
            field="nickname",
        )


# State Errors


class StateError(AppException):
    """Operation not allowed in the connection's current state"""

    def __init__(
        self,
        message: str = "Operation not allowed right now",
        code: ErrorCode = ErrorCode.STATE_ERROR,
    ):
        super().__init__(
            message=message,
            code=code,
        )


class NotRegisteredError(StateError):
    """Connection has no profile"""

    def __init__(self, message: str = "Please register first"):
        super().__init__(message=message, code=ErrorCode.STATE_NOT_REGISTERED)


class NotInSessionError(StateError):
    """Connection is not a session participant"""

    def __init__(self, message: str = "Not in an active chat"):
        super().__init__(message=message, code=ErrorCode.STATE_NOT_IN_SESSION)


class AlreadyInSessionError(StateError):
    """Connection is already chatting"""

    def __init__(self, message: str = "Leave the current chat before joining the queue"):
        super().__init__(message=message, code=ErrorCode.STATE_ALREADY_IN_SESSION)


# Server Errors


class ServerError(AppException):
    """Internal server error"""

    def __init__(
        self,
        message: str = "Internal server error",
        code: ErrorCode = ErrorCode.SERVER_ERROR,
    ):
        super().__init__(
            message=message,
            code=code,
        )
