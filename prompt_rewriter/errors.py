"""Error taxonomy and the mapping from error kinds to HTTP responses."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure categories produced by the rewrite pipeline."""

    INVALID_INPUT = "invalid_input"
    MISCONFIGURED = "misconfigured"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    RATE_LIMITED = "rate_limited"
    TIMEOUT = "timeout"
    SERVICE_UNAVAILABLE = "service_unavailable"
    EMPTY_RESPONSE = "empty_response"
    UNEXPECTED = "unexpected"
    SEARCH_UNAVAILABLE = "search_unavailable"


ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.MISCONFIGURED: "Service configuration error. Please contact support.",
    ErrorKind.PAYLOAD_TOO_LARGE: "Your input is too long. Please shorten it and try again.",
    ErrorKind.RATE_LIMITED: "Service is experiencing high demand. Please wait a moment and try again.",
    ErrorKind.TIMEOUT: "Request timed out. Please check your connection and try again.",
    ErrorKind.SERVICE_UNAVAILABLE: "Service temporarily unavailable. Please try again in a few minutes.",
}

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again."

ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.MISCONFIGURED: 500,
    ErrorKind.PAYLOAD_TOO_LARGE: 413,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.TIMEOUT: 503,
    ErrorKind.SERVICE_UNAVAILABLE: 503,
    ErrorKind.EMPTY_RESPONSE: 500,
    ErrorKind.UNEXPECTED: 500,
    ErrorKind.SEARCH_UNAVAILABLE: 500,
}


class ServiceError(Exception):
    """Terminal pipeline failure carrying its classified kind.

    ``detail`` is only shown to callers for ``INVALID_INPUT``; for every other
    kind it is kept for logs.
    """

    def __init__(self, kind: ErrorKind, detail: str | None = None):
        self.kind = kind
        self.detail = detail
        super().__init__(detail or kind.value)

    def __repr__(self) -> str:
        return f"ServiceError(kind={self.kind.value!r}, detail={self.detail!r})"


def resolve_error(error: BaseException) -> tuple[int, str]:
    """Map any exception to an HTTP status and a short user-facing message."""
    if not isinstance(error, ServiceError):
        return 500, GENERIC_ERROR_MESSAGE

    status = ERROR_STATUS.get(error.kind, 500)
    if error.kind is ErrorKind.INVALID_INPUT:
        return status, error.detail or "Invalid request."
    return status, ERROR_MESSAGES.get(error.kind, GENERIC_ERROR_MESSAGE)
