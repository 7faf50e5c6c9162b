"""Runs: asynchronous executions of an assistant over a thread.

A run is created, then observed. The server moves it through its statuses
and the client only re-fetches it::

    run = client.runs.create("thread_1", CreateRunRequest("asst_1"))
    run = client.runs.await_terminal("thread_1", run.id, poll_interval=1, max_wait=120)
    if run.status == RunStatus.REQUIRES_ACTION:
        ...  # answer run.required_action, then submit_tool_outputs

``await_terminal`` stops on any terminal status and on ``requires_action``,
which it hands back to the caller rather than resolving.
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import List, Optional

from ..core.models import BaseModel, ListObject, Metadata, SortOrder, Tools, Usage, decode, page_params
from ..core.polling import poll_until, validate_polling
from ..core.transport import HTTPTransport
from .chat import ToolCall
from .threads import CreateThreadRequest


class RunStatus(str, Enum):
    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REQUIRES_ACTION = "requires_action"
    CANCELLING = "cancelling"
    CANCELLED = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        return self.value in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({
    RunStatus.COMPLETED.value,
    RunStatus.FAILED.value,
    RunStatus.CANCELLED.value,
    RunStatus.EXPIRED.value,
})

# statuses that end await_terminal
SETTLED_STATUSES = TERMINAL_STATUSES | {RunStatus.REQUIRES_ACTION.value}


# =============================================================================
# Requests
# =============================================================================

class CreateRunRequest(BaseModel):
    def __init__(
        self,
        assistant_id: str,
        model: str = None,
        instructions: str = None,
        additional_instructions: str = None,
        tools: Tools = None,
        metadata: Metadata = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.assistant_id = assistant_id
        self.model = model
        self.instructions = instructions
        self.additional_instructions = additional_instructions
        self.tools = tools
        self.metadata = metadata


class ModifyRunRequest(BaseModel):
    def __init__(self, metadata: Metadata = None, **kwargs):
        super().__init__(**kwargs)
        self.metadata = metadata


class CreateThreadAndRunRequest(BaseModel):
    def __init__(
        self,
        assistant_id: str,
        thread: CreateThreadRequest = None,
        model: str = None,
        instructions: str = None,
        tools: Tools = None,
        metadata: Metadata = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.assistant_id = assistant_id
        self.thread = thread
        self.model = model
        self.instructions = instructions
        self.tools = tools
        self.metadata = metadata


class ToolOutput(BaseModel):
    def __init__(self, tool_call_id: str, output: str, **kwargs):
        super().__init__(**kwargs)
        self.tool_call_id = tool_call_id
        self.output = output


class SubmitToolOutputsRequest(BaseModel):
    _nested = {"tool_outputs": [ToolOutput]}

    def __init__(self, tool_outputs: List[ToolOutput], **kwargs):
        super().__init__(**kwargs)
        self.tool_outputs = tool_outputs


# =============================================================================
# Responses
# =============================================================================

class RunError(BaseModel):
    def __init__(self, code: str = None, message: str = None, **kwargs):
        super().__init__(**kwargs)
        self.code = code
        self.message = message


class SubmitToolOutputs(BaseModel):
    _nested = {"tool_calls": [ToolCall]}

    def __init__(self, tool_calls: List[ToolCall], **kwargs):
        super().__init__(**kwargs)
        self.tool_calls = tool_calls


class RequiredAction(BaseModel):
    _nested = {"submit_tool_outputs": SubmitToolOutputs}

    def __init__(self, type: str, submit_tool_outputs: SubmitToolOutputs = None, **kwargs):
        super().__init__(**kwargs)
        self.type = type
        self.submit_tool_outputs = submit_tool_outputs


class Run(BaseModel):
    """A run snapshot. Timestamps are set only once the transition happened."""
    _nested = {
        "status": RunStatus,
        "required_action": RequiredAction,
        "last_error": RunError,
        "usage": Usage,
    }

    def __init__(
        self,
        id: str,
        thread_id: str,
        assistant_id: str,
        status: RunStatus,
        created_at: int = None,
        started_at: int = None,
        expires_at: int = None,
        cancelled_at: int = None,
        failed_at: int = None,
        completed_at: int = None,
        model: str = None,
        instructions: str = None,
        tools: Tools = None,
        file_ids: List[str] = None,
        metadata: Metadata = None,
        required_action: RequiredAction = None,
        last_error: RunError = None,
        usage: Usage = None,
        object: str = "thread.run",
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.id = id
        self.object = object
        self.thread_id = thread_id
        self.assistant_id = assistant_id
        self.status = status
        self.created_at = created_at
        self.started_at = started_at
        self.expires_at = expires_at
        self.cancelled_at = cancelled_at
        self.failed_at = failed_at
        self.completed_at = completed_at
        self.model = model
        self.instructions = instructions
        self.tools = tools
        self.file_ids = file_ids
        self.metadata = metadata
        self.required_action = required_action
        self.last_error = last_error
        self.usage = usage

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @property
    def tool_calls(self) -> List[ToolCall]:
        """Tool calls the run is waiting on, empty unless ``requires_action``."""
        if self.required_action is None or self.required_action.submit_tool_outputs is None:
            return []
        return self.required_action.submit_tool_outputs.tool_calls


class RunList(ListObject):
    _nested = {"data": [Run]}


class RunStepStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    CANCELLED = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    EXPIRED = "expired"


class RunStep(BaseModel):
    _nested = {"status": RunStepStatus, "last_error": RunError, "usage": Usage}

    def __init__(
        self,
        id: str,
        run_id: str,
        status: RunStepStatus,
        type: str = None,
        thread_id: str = None,
        assistant_id: str = None,
        step_details: dict = None,
        last_error: RunError = None,
        created_at: int = None,
        expired_at: int = None,
        cancelled_at: int = None,
        failed_at: int = None,
        completed_at: int = None,
        metadata: Metadata = None,
        usage: Usage = None,
        object: str = "thread.run.step",
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.id = id
        self.object = object
        self.run_id = run_id
        self.thread_id = thread_id
        self.assistant_id = assistant_id
        self.type = type
        self.status = status
        self.step_details = step_details
        self.last_error = last_error
        self.created_at = created_at
        self.expired_at = expired_at
        self.cancelled_at = cancelled_at
        self.failed_at = failed_at
        self.completed_at = completed_at
        self.metadata = metadata
        self.usage = usage


class RunStepList(ListObject):
    _nested = {"data": [RunStep]}


# =============================================================================
# Resource
# =============================================================================

class Runs:
    """Runs resource."""

    def __init__(self, transport: HTTPTransport):
        self._transport = transport

    def create(self, thread_id: str, request: CreateRunRequest) -> Run:
        """Start a run. Returns at once, normally with status ``queued``."""
        response = self._transport.post(f"/threads/{thread_id}/runs", body=request.to_dict())
        return decode(response, Run)

    def poll(self, thread_id: str, run_id: str) -> Run:
        """Fetch the current snapshot of a run once."""
        return decode(self._transport.get(f"/threads/{thread_id}/runs/{run_id}"), Run)

    retrieve = poll

    def await_terminal(
        self,
        thread_id: str,
        run_id: str,
        poll_interval: float = 1.0,
        max_wait: float = 600.0,
        cancel_event: Optional[threading.Event] = None,
    ) -> Run:
        """Poll until the run is terminal or ``requires_action``.

        Raises ConfigurationError before any request for a non-positive
        ``poll_interval``, RunTimeoutError once ``max_wait`` is spent, and
        PollCancelledError when ``cancel_event`` is set. Errors raised by a
        poll propagate immediately.
        """
        return poll_until(
            lambda: self.poll(thread_id, run_id),
            SETTLED_STATUSES,
            poll_interval=poll_interval,
            max_wait=max_wait,
            cancel_event=cancel_event,
            label=f"run {run_id}",
        )

    def cancel(self, thread_id: str, run_id: str) -> Run:
        """Ask the server to cancel. The snapshot is usually ``cancelling``."""
        response = self._transport.post(f"/threads/{thread_id}/runs/{run_id}/cancel", body={})
        return decode(response, Run)

    def modify(self, thread_id: str, run_id: str, request: ModifyRunRequest) -> Run:
        response = self._transport.post(f"/threads/{thread_id}/runs/{run_id}", body=request.to_dict())
        return decode(response, Run)

    def list(
        self,
        thread_id: str,
        limit: int = None,
        order: SortOrder = None,
        after: str = None,
        before: str = None,
    ) -> RunList:
        params = page_params(limit, order, after, before)
        return decode(self._transport.get(f"/threads/{thread_id}/runs", params=params), RunList)

    def create_thread_and_run(self, request: CreateThreadAndRunRequest) -> Run:
        return decode(self._transport.post("/threads/runs", body=request.to_dict()), Run)

    def submit_tool_outputs(self, thread_id: str, run_id: str, request: SubmitToolOutputsRequest) -> Run:
        response = self._transport.post(
            f"/threads/{thread_id}/runs/{run_id}/submit_tool_outputs",
            body=request.to_dict(),
        )
        return decode(response, Run)

    def retrieve_step(self, thread_id: str, run_id: str, step_id: str) -> RunStep:
        return decode(self._transport.get(f"/threads/{thread_id}/runs/{run_id}/steps/{step_id}"), RunStep)

    def list_steps(
        self,
        thread_id: str,
        run_id: str,
        limit: int = None,
        order: SortOrder = None,
        after: str = None,
        before: str = None,
    ) -> RunStepList:
        params = page_params(limit, order, after, before)
        response = self._transport.get(f"/threads/{thread_id}/runs/{run_id}/steps", params=params)
        return decode(response, RunStepList)

    def create_and_await(
        self,
        thread_id: str,
        request: CreateRunRequest,
        poll_interval: float = 1.0,
        max_wait: float = 600.0,
        cancel_event: Optional[threading.Event] = None,
    ) -> Run:
        """Create a run and wait for it to settle."""
        validate_polling(poll_interval, max_wait)
        run = self.create(thread_id, request)
        if run.status.value in SETTLED_STATUSES:
            return run
        return self.await_terminal(thread_id, run.id, poll_interval, max_wait, cancel_event)
