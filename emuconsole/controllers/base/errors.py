"""Exception hierarchy shared by controllers and the sync layer."""

from __future__ import annotations


class ConsoleError(Exception):
    """Base exception for console failures."""


class ApiError(ConsoleError):
    """The backend answered with a non-2xx status.

    ``message`` is the backend's ``error`` text verbatim, or ``HTTP <status>``
    when the body carries none.
    """

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class TransportError(ConsoleError):
    """The request never produced an HTTP response."""


class StreamError(ConsoleError):
    """The event stream could not be opened or was interrupted."""


class ValidationFailed(ConsoleError):
    """Local input validation failed; nothing was sent to the backend."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


__all__ = [
    "ApiError",
    "ConsoleError",
    "StreamError",
    "TransportError",
    "ValidationFailed",
]
