from __future__ import annotations

from typing import List

from ..core.models import BaseModel, DeletionStatus, Metadata, MessageRole, decode
from ..core.transport import HTTPTransport


class ThreadMessage(BaseModel):
    """An initial message supplied when creating a thread."""
    def __init__(
        self,
        content: str,
        role: MessageRole = MessageRole.USER,
        file_ids: List[str] = None,
        metadata: Metadata = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.role = role
        self.content = content
        self.file_ids = file_ids
        self.metadata = metadata


class CreateThreadRequest(BaseModel):
    def __init__(self, messages: List[ThreadMessage] = None, metadata: Metadata = None, **kwargs):
        super().__init__(**kwargs)
        self.messages = messages
        self.metadata = metadata


class ModifyThreadRequest(BaseModel):
    def __init__(self, metadata: Metadata = None, **kwargs):
        super().__init__(**kwargs)
        self.metadata = metadata


class Thread(BaseModel):
    def __init__(self, id: str, created_at: int = None, metadata: Metadata = None, object: str = "thread", **kwargs):
        super().__init__(**kwargs)
        self.id = id
        self.object = object
        self.created_at = created_at
        self.metadata = metadata


class Threads:
    """Threads resource. Messages and runs live in their own namespaces."""

    def __init__(self, transport: HTTPTransport):
        self._transport = transport

    def create(self, request: CreateThreadRequest = None) -> Thread:
        body = request.to_dict() if request is not None else {}
        return decode(self._transport.post("/threads", body=body), Thread)

    def retrieve(self, thread_id: str) -> Thread:
        return decode(self._transport.get(f"/threads/{thread_id}"), Thread)

    def modify(self, thread_id: str, request: ModifyThreadRequest) -> Thread:
        return decode(self._transport.post(f"/threads/{thread_id}", body=request.to_dict()), Thread)

    def delete(self, thread_id: str) -> DeletionStatus:
        return decode(self._transport.delete(f"/threads/{thread_id}"), DeletionStatus)
