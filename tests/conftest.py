import json
from collections import namedtuple

import pytest

from openai_api import Client
from openai_api.core.transport import Response

Call = namedtuple("Call", "method path body params fields files")


def json_response(payload, headers=None, status_code=200):
    return Response(status_code, dict(headers or {}), json.dumps(payload).encode("utf-8"))


class FakeTransport:
    """Scripted stand-in for HTTPTransport.

    Each route holds a queue of responses (or exceptions). The last entry is
    reused once the queue is down to one, so a settled job keeps reporting
    the same status.
    """

    def __init__(self):
        self.calls = []
        self._routes = {}

    def add(self, method, path, *responses):
        queue = self._routes.setdefault((method, path), [])
        for item in responses:
            if isinstance(item, dict):
                item = json_response(item)
            queue.append(item)
        return self

    def count(self, method, path):
        return sum(1 for c in self.calls if c.method == method and c.path == path)

    def _dispatch(self, method, path, body=None, params=None, fields=None, files=None):
        self.calls.append(Call(method, path, body, params, fields, files))
        queue = self._routes.get((method, path))
        if not queue:
            raise AssertionError(f"unexpected request {method} {path}")
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        return item

    def get(self, path, params=None, **kwargs):
        return self._dispatch("GET", path, params=params)

    def post(self, path, body=None, **kwargs):
        return self._dispatch("POST", path, body=body)

    def delete(self, path, **kwargs):
        return self._dispatch("DELETE", path)

    def post_multipart(self, path, fields, files, **kwargs):
        return self._dispatch("POST", path, fields=fields, files=files)

    def close(self):
        pass


def run_payload(status, run_id="run_1", thread_id="thread_1", **extra):
    payload = {
        "id": run_id,
        "object": "thread.run",
        "thread_id": thread_id,
        "assistant_id": "asst_1",
        "status": status,
        "created_at": 1700000000,
    }
    payload.update(extra)
    return payload


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(transport):
    return Client(api_key="sk-test", transport=transport)


@pytest.fixture
def make_run():
    return run_payload
