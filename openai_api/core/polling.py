"""Poll a remote job until it settles.

One loop serves every resource whose work happens asynchronously on the
server (assistant runs, fine-tuning jobs). The loop only observes: it fetches,
checks the status, waits, and repeats.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Container, Optional, TypeVar

from .errors import ConfigurationError, PollCancelledError, RunTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def validate_polling(poll_interval: float, max_wait: float):
    if poll_interval is None or poll_interval <= 0:
        raise ConfigurationError(f"poll_interval must be positive, got {poll_interval!r}")
    if max_wait is None or max_wait < 0:
        raise ConfigurationError(f"max_wait must be zero or positive, got {max_wait!r}")


def poll_until(
    fetch: Callable[[], T],
    settled: Container[str],
    *,
    poll_interval: float,
    max_wait: float,
    cancel_event: Optional[threading.Event] = None,
    label: str = "job",
) -> T:
    """Call ``fetch`` until the returned object's ``status`` is in ``settled``.

    Always fetches at least once. After an unsettled fetch, gives up with
    RunTimeoutError if the next fetch would land past ``max_wait``. Errors
    from ``fetch`` propagate untouched. ``cancel_event`` is checked once per
    iteration and cuts the wait short; when set, PollCancelledError is raised.
    """
    validate_polling(poll_interval, max_wait)

    deadline = time.monotonic() + max_wait
    waiter = cancel_event or threading.Event()
    last = None
    attempts = 0

    while True:
        if cancel_event is not None and cancel_event.is_set():
            raise PollCancelledError(f"Polling {label} cancelled after {attempts} attempt(s)", last=last)

        last = fetch()
        attempts += 1
        status = _status_value(last)
        logger.debug("%s status=%s (attempt %d)", label, status, attempts)

        if status in settled:
            logger.info("%s settled with status=%s after %d attempt(s)", label, status, attempts)
            return last

        if time.monotonic() + poll_interval > deadline:
            logger.warning("%s still %s after %.1fs, giving up", label, status, max_wait)
            raise RunTimeoutError(
                f"{label} did not settle within {max_wait}s (last status: {status})",
                last=last,
            )

        if waiter.wait(poll_interval):
            raise PollCancelledError(f"Polling {label} cancelled after {attempts} attempt(s)", last=last)


def _status_value(obj) -> str:
    status = getattr(obj, "status", None)
    return getattr(status, "value", status)
