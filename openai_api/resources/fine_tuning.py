"""Fine-tuning jobs.

Fine-tuning jobs run server-side like assistant runs, so they share the same
polling loop (:func:`openai_api.core.polling.poll_until`).
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import List, Optional

from ..core.models import BaseModel, ListObject, decode
from ..core.polling import poll_until
from ..core.transport import HTTPTransport


class FineTuningStatus(str, Enum):
    VALIDATING_FILES = "validating_files"
    QUEUED = "queued"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


FINE_TUNING_TERMINAL = frozenset({
    FineTuningStatus.SUCCEEDED.value,
    FineTuningStatus.FAILED.value,
    FineTuningStatus.CANCELLED.value,
})


class HyperParameters(BaseModel):
    """Values may be numbers or ``"auto"``."""
    def __init__(self, batch_size=None, learning_rate_multiplier=None, n_epochs=None, **kwargs):
        super().__init__(**kwargs)
        self.batch_size = batch_size
        self.learning_rate_multiplier = learning_rate_multiplier
        self.n_epochs = n_epochs


class CreateFineTuningJobRequest(BaseModel):
    def __init__(
        self,
        model,
        training_file: str,
        hyperparameters: HyperParameters = None,
        suffix: str = None,
        validation_file: str = None,
        seed: int = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.model = model
        self.training_file = training_file
        self.hyperparameters = hyperparameters
        self.suffix = suffix
        self.validation_file = validation_file
        self.seed = seed


class FineTuningJobError(BaseModel):
    def __init__(self, code: str = None, message: str = None, param: str = None, **kwargs):
        super().__init__(**kwargs)
        self.code = code
        self.message = message
        self.param = param


class FineTuningJob(BaseModel):
    _nested = {"status": FineTuningStatus, "error": FineTuningJobError, "hyperparameters": HyperParameters}

    def __init__(
        self,
        id: str,
        status: FineTuningStatus,
        model: str = None,
        training_file: str = None,
        created_at: int = None,
        finished_at: int = None,
        fine_tuned_model: str = None,
        organization_id: str = None,
        result_files: List[str] = None,
        trained_tokens: int = None,
        validation_file: str = None,
        hyperparameters: HyperParameters = None,
        error: FineTuningJobError = None,
        object: str = "fine_tuning.job",
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.id = id
        self.object = object
        self.status = status
        self.model = model
        self.training_file = training_file
        self.created_at = created_at
        self.finished_at = finished_at
        self.fine_tuned_model = fine_tuned_model
        self.organization_id = organization_id
        self.result_files = result_files
        self.trained_tokens = trained_tokens
        self.validation_file = validation_file
        self.hyperparameters = hyperparameters
        self.error = error

    @property
    def is_terminal(self) -> bool:
        return self.status.value in FINE_TUNING_TERMINAL


class FineTuningJobEvent(BaseModel):
    def __init__(self, id: str, message: str = None, level: str = None, created_at: int = None, object: str = "fine_tuning.job.event", **kwargs):
        super().__init__(**kwargs)
        self.id = id
        self.object = object
        self.created_at = created_at
        self.level = level
        self.message = message


class FineTuningJobList(ListObject):
    _nested = {"data": [FineTuningJob]}


class FineTuningJobEventList(ListObject):
    _nested = {"data": [FineTuningJobEvent]}


class FineTuning:
    """fine_tuning.jobs resource."""

    def __init__(self, transport: HTTPTransport):
        self._transport = transport

    def create(self, request: CreateFineTuningJobRequest) -> FineTuningJob:
        return decode(self._transport.post("/fine_tuning/jobs", body=request.to_dict()), FineTuningJob)

    def list(self, after: str = None, limit: int = None) -> FineTuningJobList:
        params = {"after": after, "limit": limit}
        return decode(self._transport.get("/fine_tuning/jobs", params=params), FineTuningJobList)

    def list_events(self, job_id: str, after: str = None, limit: int = None) -> FineTuningJobEventList:
        params = {"after": after, "limit": limit}
        response = self._transport.get(f"/fine_tuning/jobs/{job_id}/events", params=params)
        return decode(response, FineTuningJobEventList)

    def retrieve(self, job_id: str) -> FineTuningJob:
        return decode(self._transport.get(f"/fine_tuning/jobs/{job_id}"), FineTuningJob)

    def cancel(self, job_id: str) -> FineTuningJob:
        """Request cancellation; the returned job may not be cancelled yet."""
        return decode(self._transport.post(f"/fine_tuning/jobs/{job_id}/cancel", body={}), FineTuningJob)

    def await_terminal(
        self,
        job_id: str,
        poll_interval: float = 5.0,
        max_wait: float = 3600.0,
        cancel_event: Optional[threading.Event] = None,
    ) -> FineTuningJob:
        """Poll until the job succeeds, fails or is cancelled."""
        return poll_until(
            lambda: self.retrieve(job_id),
            FINE_TUNING_TERMINAL,
            poll_interval=poll_interval,
            max_wait=max_wait,
            cancel_event=cancel_event,
            label=f"fine-tuning job {job_id}",
        )
