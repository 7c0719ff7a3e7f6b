"""Application exception types."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION_FAILURE = "VALIDATION_FAILURE"
    UNIQUENESS_CONFLICT = "UNIQUENESS_CONFLICT"
    AUTHENTICATION_FAILURE = "AUTHENTICATION_FAILURE"
    NOT_FOUND = "NOT_FOUND"
    UNCLASSIFIED = "UNCLASSIFIED"


class ApiError(Exception):
    """Failure tagged with the error kind that selects its HTTP response."""

    kind: ErrorKind = ErrorKind.UNCLASSIFIED

    def __init__(self, message: str, *, messages: list[str] | None = None, status_code: int | None = None) -> None:
        self.message = message
        self.messages = list(messages) if messages else [message]
        self.status_code = status_code
        super().__init__(message)


class ValidationFailure(ApiError):
    """One or more field rules were violated; carries one message per rule."""

    kind = ErrorKind.VALIDATION_FAILURE

    def __init__(self, messages: list[str]) -> None:
        super().__init__("; ".join(messages), messages=messages)


class UniquenessConflict(ApiError):
    kind = ErrorKind.UNIQUENESS_CONFLICT


class AuthenticationFailure(ApiError):
    kind = ErrorKind.AUTHENTICATION_FAILURE

    def __init__(self, message: str = "access denied") -> None:
        super().__init__(message)


class NotFound(ApiError):
    kind = ErrorKind.NOT_FOUND


__all__ = [
    "ApiError",
    "AuthenticationFailure",
    "ErrorKind",
    "NotFound",
    "UniquenessConflict",
    "ValidationFailure",
]
