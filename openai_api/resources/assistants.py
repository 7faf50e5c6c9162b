"""Assistants and the files attached to them."""

from __future__ import annotations

from typing import List

from ..core.models import BaseModel, DeletionStatus, ListObject, Metadata, SortOrder, Tools, decode, page_params
from ..core.transport import HTTPTransport


class AssistantRequest(BaseModel):
    """Create or modify an assistant.

    ``tools`` takes :class:`~openai_api.resources.chat.Tool` objects or plain
    dicts such as ``{"type": "code_interpreter"}``.
    """

    def __init__(
        self,
        model,
        name: str = None,
        description: str = None,
        instructions: str = None,
        tools: Tools = None,
        file_ids: List[str] = None,
        metadata: Metadata = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.model = model
        self.name = name
        self.description = description
        self.instructions = instructions
        self.tools = tools
        self.file_ids = file_ids
        self.metadata = metadata


class Assistant(BaseModel):
    def __init__(
        self,
        id: str,
        model: str,
        created_at: int = None,
        name: str = None,
        description: str = None,
        instructions: str = None,
        tools: Tools = None,
        file_ids: List[str] = None,
        metadata: Metadata = None,
        object: str = "assistant",
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.id = id
        self.object = object
        self.created_at = created_at
        self.name = name
        self.description = description
        self.model = model
        self.instructions = instructions
        self.tools = tools
        self.file_ids = file_ids
        self.metadata = metadata


class AssistantList(ListObject):
    _nested = {"data": [Assistant]}


class AssistantFileRequest(BaseModel):
    def __init__(self, file_id: str, **kwargs):
        super().__init__(**kwargs)
        self.file_id = file_id


class AssistantFile(BaseModel):
    def __init__(self, id: str, assistant_id: str = None, created_at: int = None, object: str = "assistant.file", **kwargs):
        super().__init__(**kwargs)
        self.id = id
        self.object = object
        self.created_at = created_at
        self.assistant_id = assistant_id


class AssistantFileList(ListObject):
    _nested = {"data": [AssistantFile]}


class Assistants:
    """Assistants resource."""

    def __init__(self, transport: HTTPTransport):
        self._transport = transport

    def create(self, request: AssistantRequest) -> Assistant:
        return decode(self._transport.post("/assistants", body=request.to_dict()), Assistant)

    def retrieve(self, assistant_id: str) -> Assistant:
        return decode(self._transport.get(f"/assistants/{assistant_id}"), Assistant)

    def modify(self, assistant_id: str, request: AssistantRequest) -> Assistant:
        response = self._transport.post(f"/assistants/{assistant_id}", body=request.to_dict())
        return decode(response, Assistant)

    def delete(self, assistant_id: str) -> DeletionStatus:
        return decode(self._transport.delete(f"/assistants/{assistant_id}"), DeletionStatus)

    def list(
        self,
        limit: int = None,
        order: SortOrder = None,
        after: str = None,
        before: str = None,
    ) -> AssistantList:
        params = page_params(limit, order, after, before)
        return decode(self._transport.get("/assistants", params=params), AssistantList)

    def create_file(self, assistant_id: str, request: AssistantFileRequest) -> AssistantFile:
        response = self._transport.post(f"/assistants/{assistant_id}/files", body=request.to_dict())
        return decode(response, AssistantFile)

    def retrieve_file(self, assistant_id: str, file_id: str) -> AssistantFile:
        return decode(self._transport.get(f"/assistants/{assistant_id}/files/{file_id}"), AssistantFile)

    def delete_file(self, assistant_id: str, file_id: str) -> DeletionStatus:
        return decode(self._transport.delete(f"/assistants/{assistant_id}/files/{file_id}"), DeletionStatus)

    def list_files(
        self,
        assistant_id: str,
        limit: int = None,
        order: SortOrder = None,
        after: str = None,
        before: str = None,
    ) -> AssistantFileList:
        params = page_params(limit, order, after, before)
        response = self._transport.get(f"/assistants/{assistant_id}/files", params=params)
        return decode(response, AssistantFileList)
