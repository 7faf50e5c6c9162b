"""Typed client for the OpenAI HTTP API."""

import logging

__version__ = "0.4.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .config import ClientConfig  # noqa: E402
from .core.async_client import AsyncClient, AsyncResult  # noqa: E402
from .core.client import Client, OpenAI  # noqa: E402
from .core.errors import (  # noqa: E402
    APIError,
    AuthenticationError,
    BadRequestError,
    ConfigurationError,
    DecodeError,
    HttpStatusError,
    InternalServerError,
    NotFoundError,
    OutputError,
    PermissionDeniedError,
    PollCancelledError,
    RateLimitError,
    RequestTimeoutError,
    RunTimeoutError,
    TransportError,
)
from .core.retry import with_retry  # noqa: E402

__all__ = [
    "__version__",
    "Client",
    "OpenAI",
    "AsyncClient",
    "AsyncResult",
    "ClientConfig",
    "with_retry",
    "APIError",
    "TransportError",
    "RequestTimeoutError",
    "HttpStatusError",
    "BadRequestError",
    "AuthenticationError",
    "PermissionDeniedError",
    "NotFoundError",
    "RateLimitError",
    "InternalServerError",
    "DecodeError",
    "RunTimeoutError",
    "PollCancelledError",
    "ConfigurationError",
    "OutputError",
]
