import threading

import pytest

from conftest import FakeTransport, json_response, run_payload
from openai_api import Client, ConfigurationError, DecodeError, NotFoundError, PollCancelledError, RunTimeoutError
from openai_api.resources.runs import (
    CreateRunRequest,
    CreateThreadAndRunRequest,
    ModifyRunRequest,
    RunStatus,
    SubmitToolOutputsRequest,
    ToolOutput,
)
from openai_api.resources.threads import CreateThreadRequest, ThreadMessage

RUNS = "/threads/thread_1/runs"
RUN = "/threads/thread_1/runs/run_1"


def _script_lifecycle(transport):
    transport.add("POST", RUNS, run_payload("queued"))
    transport.add(
        "GET",
        RUN,
        run_payload("in_progress", started_at=1700000001),
        json_response(
            run_payload("completed", started_at=1700000001, completed_at=1700000005),
            headers={"x-request-id": "req_done"},
        ),
    )


def test_create_poll_poll_reaches_completed(client, transport):
    _script_lifecycle(transport)

    run = client.runs.create("thread_1", CreateRunRequest("asst_1"))
    assert run.status == RunStatus.QUEUED
    assert transport.calls[0].body == {"assistant_id": "asst_1"}

    run = client.runs.poll("thread_1", run.id)
    assert run.status == RunStatus.IN_PROGRESS

    run = client.runs.poll("thread_1", run.id)
    assert run.status == RunStatus.COMPLETED
    assert run.completed_at == 1700000005
    assert run.failed_at is None
    assert run.is_terminal


def test_await_terminal_matches_manual_polls(transport):
    _script_lifecycle(transport)
    manual = Client(api_key="sk-test", transport=transport)
    manual.runs.create("thread_1", CreateRunRequest("asst_1"))
    manual.runs.poll("thread_1", "run_1")
    expected = manual.runs.poll("thread_1", "run_1")

    fresh = FakeTransport()
    _script_lifecycle(fresh)
    client = Client(api_key="sk-test", transport=fresh)
    client.runs.create("thread_1", CreateRunRequest("asst_1"))
    result = client.runs.await_terminal("thread_1", "run_1", poll_interval=0.01, max_wait=5)

    assert result == expected
    assert result.headers == {"x-request-id": "req_done"}
    assert fresh.count("GET", RUN) == 2


def test_terminal_observation_is_idempotent(client, transport):
    transport.add("GET", RUN, run_payload("completed", completed_at=1700000005))

    first = client.runs.poll("thread_1", "run_1")
    second = client.runs.poll("thread_1", "run_1")

    assert first.status == second.status == RunStatus.COMPLETED


def test_await_terminal_makes_exactly_k_polls(client, transport):
    transport.add(
        "GET",
        RUN,
        run_payload("queued"),
        run_payload("in_progress"),
        run_payload("in_progress"),
        run_payload("completed"),
        run_payload("completed"),
    )

    run = client.runs.await_terminal("thread_1", "run_1", poll_interval=0.01, max_wait=5)

    assert run.status == RunStatus.COMPLETED
    assert transport.count("GET", RUN) == 4


def test_await_terminal_returns_requires_action(client, transport):
    tool_call = {"id": "call_1", "type": "function", "function": {"name": "lookup", "arguments": "{}"}}
    transport.add(
        "GET",
        RUN,
        run_payload("in_progress"),
        run_payload(
            "requires_action",
            required_action={"type": "submit_tool_outputs", "submit_tool_outputs": {"tool_calls": [tool_call]}},
        ),
    )

    run = client.runs.await_terminal("thread_1", "run_1", poll_interval=0.01, max_wait=5)

    assert run.status == RunStatus.REQUIRES_ACTION
    assert not run.is_terminal
    assert [c.function.name for c in run.tool_calls] == ["lookup"]


def test_await_terminal_rejects_zero_interval_without_requests(client, transport):
    with pytest.raises(ConfigurationError):
        client.runs.await_terminal("thread_1", "run_1", poll_interval=0, max_wait=5)

    assert transport.calls == []


def test_short_max_wait_still_polls_once(client, transport):
    transport.add("GET", RUN, run_payload("queued"))

    with pytest.raises(RunTimeoutError) as excinfo:
        client.runs.await_terminal("thread_1", "run_1", poll_interval=10, max_wait=1)

    assert transport.count("GET", RUN) == 1
    assert excinfo.value.last.status == RunStatus.QUEUED


def test_short_max_wait_returns_fast_completion(client, transport):
    transport.add("GET", RUN, run_payload("completed"))

    run = client.runs.await_terminal("thread_1", "run_1", poll_interval=10, max_wait=0)

    assert run.status == RunStatus.COMPLETED


def test_poll_error_propagates_without_retry(client, transport):
    transport.add("GET", RUN, run_payload("in_progress"), NotFoundError("No run found", status_code=404))

    with pytest.raises(NotFoundError):
        client.runs.await_terminal("thread_1", "run_1", poll_interval=0.01, max_wait=5)

    assert transport.count("GET", RUN) == 2


def test_cancel_then_await_observes_cancelled(client, transport):
    transport.add("POST", RUN + "/cancel", run_payload("cancelling"))
    transport.add("GET", RUN, run_payload("cancelling"), run_payload("cancelled", cancelled_at=1700000009))

    run = client.runs.cancel("thread_1", "run_1")
    assert run.status == RunStatus.CANCELLING
    assert transport.calls[0].body == {}

    run = client.runs.await_terminal("thread_1", "run_1", poll_interval=0.01, max_wait=5)
    assert run.status == RunStatus.CANCELLED
    assert run.cancelled_at == 1700000009


def test_cancel_event_stops_waiting(client, transport):
    transport.add("GET", RUN, run_payload("in_progress"))
    stop = threading.Event()
    timer = threading.Timer(0.05, stop.set)
    timer.start()

    try:
        with pytest.raises(PollCancelledError) as excinfo:
            client.runs.await_terminal("thread_1", "run_1", poll_interval=0.02, max_wait=30, cancel_event=stop)
    finally:
        timer.cancel()

    assert excinfo.value.last.status == RunStatus.IN_PROGRESS


def test_unknown_status_is_a_decode_error(client, transport):
    transport.add("GET", RUN, run_payload("paused"))

    with pytest.raises(DecodeError):
        client.runs.poll("thread_1", "run_1")


def test_submit_tool_outputs_body(client, transport):
    transport.add("POST", RUN + "/submit_tool_outputs", run_payload("queued"))

    request = SubmitToolOutputsRequest([ToolOutput(tool_call_id="call_1", output="42")])
    client.runs.submit_tool_outputs("thread_1", "run_1", request)

    assert transport.calls[0].body == {"tool_outputs": [{"tool_call_id": "call_1", "output": "42"}]}


def test_create_and_await(client, transport):
    transport.add("POST", RUNS, run_payload("queued"))
    transport.add("GET", RUN, run_payload("completed"))

    run = client.runs.create_and_await(
        "thread_1",
        CreateRunRequest("asst_1").set(instructions="Be brief."),
        poll_interval=0.01,
        max_wait=5,
    )

    assert run.status == RunStatus.COMPLETED
    assert transport.calls[0].body == {"assistant_id": "asst_1", "instructions": "Be brief."}


def test_create_and_await_validates_before_creating(client, transport):
    with pytest.raises(ConfigurationError):
        client.runs.create_and_await("thread_1", CreateRunRequest("asst_1"), poll_interval=0)

    assert transport.calls == []


def test_create_thread_and_run_nests_thread(client, transport):
    transport.add("POST", "/threads/runs", run_payload("queued", thread_id="thread_9"))

    request = CreateThreadAndRunRequest(
        "asst_1",
        thread=CreateThreadRequest(messages=[ThreadMessage("hello")]),
    )
    run = client.runs.create_thread_and_run(request)

    assert run.thread_id == "thread_9"
    assert transport.calls[0].body == {
        "assistant_id": "asst_1",
        "thread": {"messages": [{"role": "user", "content": "hello"}]},
    }


def test_list_and_modify(client, transport):
    transport.add("GET", RUNS, {"object": "list", "data": [run_payload("completed")], "has_more": False})
    transport.add("POST", RUN, run_payload("completed", metadata={"k": "v"}))

    runs = client.runs.list("thread_1", limit=5, order="desc")
    assert [r.id for r in runs] == ["run_1"]
    assert transport.calls[0].params == {"limit": 5, "order": "desc"}

    run = client.runs.modify("thread_1", "run_1", ModifyRunRequest(metadata={"k": "v"}))
    assert run.metadata == {"k": "v"}


def test_list_steps(client, transport):
    step = {"id": "step_1", "run_id": "run_1", "status": "completed", "type": "message_creation"}
    transport.add("GET", RUN + "/steps", {"object": "list", "data": [step]})
    transport.add("GET", RUN + "/steps/step_1", step)

    steps = client.runs.list_steps("thread_1", "run_1")
    assert len(steps) == 1
    assert client.runs.retrieve_step("thread_1", "run_1", "step_1").type == "message_creation"
