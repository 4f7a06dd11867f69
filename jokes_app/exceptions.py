"""Custom exceptions for the Jokes App with proper HTTP status codes."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    # Generic errors
    APP_ERROR = "APP_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Auth errors
    AUTH_ERROR = "AUTH_ERROR"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    USERNAME_TAKEN = "USERNAME_TAKEN"

    # Joke errors
    JOKE_ERROR = "JOKE_ERROR"
    JOKE_NOT_FOUND = "JOKE_NOT_FOUND"
    JOKE_FORBIDDEN = "JOKE_FORBIDDEN"


class JokesAppException(Exception):
    """Base exception for application errors with HTTP status code support.

    All custom exceptions should inherit from this class to ensure
    consistent error handling across the application.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.APP_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize application exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            status_code: HTTP status code (default 500)
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ValidationException(JokesAppException):
    """Request data failed validation."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=details,
        )


class AuthException(JokesAppException):
    """Authentication-related errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.AUTH_ERROR,
        status_code: int = 401,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)


class NotAuthenticatedException(AuthException):
    """The request has no valid user session."""

    def __init__(self, message: str = "You must be logged in", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.NOT_AUTHENTICATED,
            status_code=401,
            details=details,
        )


class InvalidCredentialsException(AuthException):
    """Username/password combination did not match."""

    def __init__(
        self,
        message: str = "Username/Password combination is incorrect",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message,
            code=ErrorCode.INVALID_CREDENTIALS,
            status_code=400,
            details=details,
        )


class UsernameTakenException(AuthException):
    """Registration attempted with an existing username."""

    def __init__(self, username: str, details: dict[str, Any] | None = None):
        super().__init__(
            f"User with username {username} already exists",
            code=ErrorCode.USERNAME_TAKEN,
            status_code=400,
            details=details,
        )


class JokeException(JokesAppException):
    """Joke-related errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.JOKE_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)


class JokeNotFoundException(JokeException):
    """Joke does not exist."""

    def __init__(self, message: str = "What a joke! Not found.", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.JOKE_NOT_FOUND,
            status_code=404,
            details=details,
        )


class JokeForbiddenException(JokeException):
    """User tried to modify a joke they do not own."""

    def __init__(self, message: str = "Pssh, nice try. That's not your joke", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.JOKE_FORBIDDEN,
            status_code=403,
            details=details,
        )
