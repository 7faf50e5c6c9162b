"""Thread-backed async support.

Every call runs on its own daemon thread and hands back an
:class:`AsyncResult`. Waiting for a run (``runs.await_terminal``) therefore
blocks only the thread driving that run.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from .client import Client

logger = logging.getLogger(__name__)


class AsyncResult:
    """Async result that can be awaited (via .result()) or used with callbacks."""

    def __init__(self):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._result = None
        self._error = None
        self._callbacks = []

    def _set_result(self, result):
        with self._lock:
            self._result = result
            self._event.set()
            callbacks = list(self._callbacks)
        for cb in callbacks:
            cb(result, None)

    def _set_error(self, error):
        with self._lock:
            self._error = error
            self._event.set()
            callbacks = list(self._callbacks)
        for cb in callbacks:
            cb(None, error)

    def result(self, timeout: float = None) -> Any:
        """Block until the result is available and return it, or raise its error.

        Raises TimeoutError if ``timeout`` elapses first.
        """
        if not self._event.wait(timeout=timeout):
            raise TimeoutError(f"result not ready after {timeout}s")
        if self._error is not None:
            raise self._error
        return self._result

    def then(self, callback: Callable) -> "AsyncResult":
        """Add a callback: callback(result, error)."""
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return self
        callback(self._result, self._error)
        return self

    @property
    def done(self) -> bool:
        return self._event.is_set()


def submit(func: Callable, *args, **kwargs) -> AsyncResult:
    """Run ``func(*args, **kwargs)`` on a new thread."""
    result = AsyncResult()

    def run():
        try:
            result._set_result(func(*args, **kwargs))
        except Exception as e:
            logger.debug("async call %s failed: %s", getattr(func, "__name__", func), e)
            result._set_error(e)

    threading.Thread(target=run, daemon=True).start()
    return result


class _AsyncNamespace:
    """Wraps a resource so each public method returns an AsyncResult."""

    def __init__(self, resource):
        self._resource = resource

    def __getattr__(self, name):
        attr = getattr(self._resource, name)
        if name.startswith("_") or not callable(attr):
            return attr

        def call(*args, **kwargs) -> AsyncResult:
            return submit(attr, *args, **kwargs)

        call.__name__ = name
        call.__doc__ = attr.__doc__
        return call


class AsyncChat:
    """Async chat namespace."""

    def __init__(self, chat):
        self.completions = _AsyncNamespace(chat.completions)


class AsyncClient:
    """Async client wrapper using threading.

    Same namespaces as :class:`Client`; every call returns an AsyncResult::

        with AsyncClient.from_env() as client:
            pending = [client.runs.await_terminal(thread_id, run_id) for run_id in run_ids]
            runs = [p.result() for p in pending]
    """

    def __init__(self, *args, **kwargs):
        self._sync_client = kwargs.pop("client", None) or Client(*args, **kwargs)
        sync = self._sync_client
        self.chat = AsyncChat(sync.chat)
        self.completions = _AsyncNamespace(sync.completions)
        self.edits = _AsyncNamespace(sync.edits)
        self.embeddings = _AsyncNamespace(sync.embeddings)
        self.images = _AsyncNamespace(sync.images)
        self.audio = _AsyncNamespace(sync.audio)
        self.files = _AsyncNamespace(sync.files)
        self.fine_tuning = _AsyncNamespace(sync.fine_tuning)
        self.moderations = _AsyncNamespace(sync.moderations)
        self.models = _AsyncNamespace(sync.models)
        self.assistants = _AsyncNamespace(sync.assistants)
        self.threads = _AsyncNamespace(sync.threads)
        self.messages = _AsyncNamespace(sync.messages)
        self.runs = _AsyncNamespace(sync.runs)

    @classmethod
    def from_env(cls, dotenv_path: str = None, **overrides) -> "AsyncClient":
        return cls(client=Client.from_env(dotenv_path=dotenv_path, **overrides))

    def close(self):
        self._sync_client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
