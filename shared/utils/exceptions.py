"""
Custom exception hierarchy for the lesson API simulator.

Exception Hierarchy:
    LessonApiException (base)
    ├── ApiError                      simulated call failures (status + trace id)
    │   ├── UpstreamFailureError      500, chaos draw
    │   ├── AuthFailureError          401, chaos draw
    │   └── LessonNotFoundError       404, unknown lesson id
    ├── LessonCatalogError
    │   ├── DuplicateLessonError
    │   └── LessonFixtureError
    └── ConfigurationError
"""
from enum import Enum
from typing import Any, Dict, Optional

from shared.models.schemas import ApiErrorBody
from shared.utils.constants import (
    STATUS_INTERNAL_ERROR,
    STATUS_UNAUTHORIZED,
    STATUS_NOT_FOUND,
    UPSTREAM_FAILURE_MESSAGE,
    UPSTREAM_FAILURE_SUGGESTION,
    AUTH_FAILURE_MESSAGE,
    AUTH_FAILURE_SUGGESTION,
    NOT_FOUND_MESSAGE_TEMPLATE,
    NOT_FOUND_SUGGESTION,
)


class ErrorKind(str, Enum):
    """Closed set of simulated failure kinds."""
    UPSTREAM_FAILURE = "upstream_failure"
    AUTH_FAILURE = "auth_failure"
    NOT_FOUND = "not_found"


class LessonApiException(Exception):
    """Base exception for all application errors."""
    pass


# API Errors

class ApiError(LessonApiException):
    """
    Structured failure of one simulated call.

    Carries everything a caller needs to decide on retry or user-facing
    messaging: status, message, the call's trace id and a fixed suggestion.
    """

    kind: ErrorKind
    status: int
    suggestion: str

    def __init__(self, message: str, request_id: str, latency_ms: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.request_id = request_id
        self.latency_ms = latency_ms

    def to_payload(self) -> ApiErrorBody:
        return ApiErrorBody(
            message=self.message,
            status=self.status,
            request_id=self.request_id,
            suggestion=self.suggestion,
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable error envelope with camelCase keys."""
        return self.to_payload().model_dump(by_alias=True)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status}, request_id={self.request_id!r})"


class UpstreamFailureError(ApiError):
    """Raised when the simulated database times out."""

    kind = ErrorKind.UPSTREAM_FAILURE
    status = STATUS_INTERNAL_ERROR
    suggestion = UPSTREAM_FAILURE_SUGGESTION

    def __init__(self, request_id: str, latency_ms: Optional[int] = None):
        super().__init__(UPSTREAM_FAILURE_MESSAGE, request_id, latency_ms)


class AuthFailureError(ApiError):
    """Raised when the simulated session token is rejected."""

    kind = ErrorKind.AUTH_FAILURE
    status = STATUS_UNAUTHORIZED
    suggestion = AUTH_FAILURE_SUGGESTION

    def __init__(self, request_id: str, latency_ms: Optional[int] = None):
        super().__init__(AUTH_FAILURE_MESSAGE, request_id, latency_ms)


class LessonNotFoundError(ApiError):
    """Raised when the requested lesson id is not in the store."""

    kind = ErrorKind.NOT_FOUND
    status = STATUS_NOT_FOUND
    suggestion = NOT_FOUND_SUGGESTION

    def __init__(self, lesson_id: str, request_id: str, latency_ms: Optional[int] = None):
        self.lesson_id = lesson_id
        super().__init__(
            NOT_FOUND_MESSAGE_TEMPLATE.format(lesson_id=lesson_id),
            request_id,
            latency_ms,
        )


# Catalog Errors

class LessonCatalogError(LessonApiException):
    """Base exception for lesson catalog construction errors."""
    pass


class DuplicateLessonError(LessonCatalogError):
    """Raised when two lessons share an id."""

    def __init__(self, lesson_id: str):
        self.lesson_id = lesson_id
        super().__init__(f"Duplicate lesson id: {lesson_id}")


class LessonFixtureError(LessonCatalogError):
    """Raised when a fixture file cannot be parsed into lessons."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid lesson fixture '{path}': {reason}")


# Configuration Errors

class ConfigurationError(LessonApiException):
    """Raised when configuration is invalid or missing."""

    def __init__(self, config_key: str, reason: str):
        message = f"Configuration error for '{config_key}': {reason}"
        super().__init__(message)
        self.config_key = config_key
        self.reason = reason
