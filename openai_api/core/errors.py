"""Exception hierarchy for the client.

Every failure surfaces as a subclass of :class:`APIError`. Callers should
branch on the class, never on the message text.
"""

from __future__ import annotations

from typing import Any


class APIError(Exception):
    """Base exception for API errors."""
    def __init__(self, message: str, status_code: int = None, body: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body

    def __str__(self):
        if self.status_code:
            return f"[{self.status_code}] {self.message}"
        return self.message


# =============================================================================
# Transport
# =============================================================================

class TransportError(APIError):
    """Raised when the network call itself fails (connection, DNS, TLS)."""
    pass


class RequestTimeoutError(TransportError):
    """Raised when a single HTTP request exceeds its timeout."""
    pass


# =============================================================================
# HTTP status
# =============================================================================

class HttpStatusError(APIError):
    """Raised for any non-2xx response. ``body`` holds the raw response text."""
    pass


class BadRequestError(HttpStatusError):
    """Raised for 400 errors."""
    pass


class AuthenticationError(HttpStatusError):
    """Raised for 401 errors."""
    pass


class PermissionDeniedError(HttpStatusError):
    """Raised for 403 errors."""
    pass


class NotFoundError(HttpStatusError):
    """Raised for 404 errors."""
    pass


class RateLimitError(HttpStatusError):
    """Raised for 429 errors."""
    pass


class InternalServerError(HttpStatusError):
    """Raised for 500+ errors."""
    pass


STATUS_ERRORS = {
    400: BadRequestError,
    401: AuthenticationError,
    403: PermissionDeniedError,
    404: NotFoundError,
    429: RateLimitError,
}


def status_error_class(status_code: int) -> type:
    if status_code in STATUS_ERRORS:
        return STATUS_ERRORS[status_code]
    if status_code >= 500:
        return InternalServerError
    return HttpStatusError


# =============================================================================
# Decoding, polling, configuration, output
# =============================================================================

class DecodeError(APIError):
    """Raised when a response body cannot be parsed into the expected type."""
    pass


class RunTimeoutError(APIError):
    """Raised when polling gives up before a terminal status was observed.

    ``last`` is the most recent snapshot that was fetched.
    """
    def __init__(self, message: str, last: Any = None):
        super().__init__(message)
        self.last = last


class PollCancelledError(APIError):
    """Raised when the caller's cancel event stops a polling loop."""
    def __init__(self, message: str, last: Any = None):
        super().__init__(message)
        self.last = last


class ConfigurationError(APIError, ValueError):
    """Raised for invalid caller-supplied parameters."""
    pass


class OutputError(APIError):
    """Raised when binary output cannot be written to disk."""
    pass
