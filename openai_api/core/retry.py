"""Caller-side retries for transient failures.

The client itself never retries: a failed request, including a failed poll
inside ``await_terminal``, surfaces as soon as it happens. Callers that want
backoff wrap their own calls::

    create_run = with_retry(max_retries=5)(client.runs.create)
    run = create_run("thread_1", CreateRunRequest("asst_1"))
"""

from __future__ import annotations

import functools
import logging
import time

from .errors import InternalServerError, RateLimitError, TransportError

logger = logging.getLogger(__name__)

# rate limits, 5xx and network failures; everything else is permanent
TRANSIENT_ERRORS = (RateLimitError, InternalServerError, TransportError)


def backoff_delay(attempt: int, backoff_factor: float) -> float:
    """Seconds to wait before retry number ``attempt + 1``."""
    return backoff_factor * (2 ** attempt)


def with_retry(max_retries: int = 3, backoff_factor: float = 1.0, retry_on: tuple = TRANSIENT_ERRORS):
    """Retry the wrapped call on ``retry_on`` errors with exponential backoff.

    The last error is re-raised once ``max_retries`` retries are spent.
    """
    def decorator(func):
        name = getattr(func, "__qualname__", getattr(func, "__name__", repr(func)))

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            attempt = 0
            while True:
                try:
                    return func(*args, **kwargs)
                except retry_on as e:
                    if attempt >= max_retries:
                        logger.warning("%s failed after %d attempt(s): %s", name, attempt + 1, e)
                        raise
                    delay = backoff_delay(attempt, backoff_factor)
                    logger.info("%s failed (%s), retry %d/%d in %.1fs", name, e, attempt + 1, max_retries, delay)
                    time.sleep(delay)
                    attempt += 1
        return wrapper
    return decorator
