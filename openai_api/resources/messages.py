"""Thread messages."""

from __future__ import annotations

from enum import Enum
from typing import List

from ..core.models import BaseModel, ListObject, Metadata, MessageRole, SortOrder, decode, page_params
from ..core.transport import HTTPTransport


class CreateMessageRequest(BaseModel):
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


class ModifyMessageRequest(BaseModel):
    def __init__(self, metadata: Metadata = None, **kwargs):
        super().__init__(**kwargs)
        self.metadata = metadata


class MessageContentType(str, Enum):
    TEXT = "text"
    IMAGE_FILE = "image_file"
    IMAGE_URL = "image_url"


class MessageText(BaseModel):
    def __init__(self, value: str, annotations: list = None, **kwargs):
        super().__init__(**kwargs)
        self.value = value
        self.annotations = annotations


class MessageImageFile(BaseModel):
    def __init__(self, file_id: str, **kwargs):
        super().__init__(**kwargs)
        self.file_id = file_id


class MessageContent(BaseModel):
    """One typed part of a message: text or an image reference."""
    _nested = {"type": MessageContentType, "text": MessageText, "image_file": MessageImageFile}

    def __init__(
        self,
        type: MessageContentType,
        text: MessageText = None,
        image_file: MessageImageFile = None,
        image_url: dict = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.type = type
        self.text = text
        self.image_file = image_file
        self.image_url = image_url


class Message(BaseModel):
    _nested = {"role": MessageRole, "content": [MessageContent]}

    def __init__(
        self,
        id: str,
        thread_id: str,
        role: MessageRole,
        content: List[MessageContent],
        created_at: int = None,
        assistant_id: str = None,
        run_id: str = None,
        file_ids: List[str] = None,
        metadata: Metadata = None,
        object: str = "thread.message",
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.id = id
        self.object = object
        self.created_at = created_at
        self.thread_id = thread_id
        self.role = role
        self.content = content
        self.assistant_id = assistant_id
        self.run_id = run_id
        self.file_ids = file_ids
        self.metadata = metadata

    @property
    def text(self) -> str:
        """All text parts joined by newlines."""
        return "\n".join(part.text.value for part in self.content if part.text is not None)


class MessageList(ListObject):
    _nested = {"data": [Message]}


class MessageFile(BaseModel):
    def __init__(self, id: str, message_id: str = None, created_at: int = None, object: str = "thread.message.file", **kwargs):
        super().__init__(**kwargs)
        self.id = id
        self.object = object
        self.created_at = created_at
        self.message_id = message_id


class MessageFileList(ListObject):
    _nested = {"data": [MessageFile]}


class Messages:
    """Messages resource, scoped by thread id."""

    def __init__(self, transport: HTTPTransport):
        self._transport = transport

    def create(self, thread_id: str, request: CreateMessageRequest) -> Message:
        response = self._transport.post(f"/threads/{thread_id}/messages", body=request.to_dict())
        return decode(response, Message)

    def retrieve(self, thread_id: str, message_id: str) -> Message:
        return decode(self._transport.get(f"/threads/{thread_id}/messages/{message_id}"), Message)

    def modify(self, thread_id: str, message_id: str, request: ModifyMessageRequest) -> Message:
        response = self._transport.post(f"/threads/{thread_id}/messages/{message_id}", body=request.to_dict())
        return decode(response, Message)

    def list(
        self,
        thread_id: str,
        limit: int = None,
        order: SortOrder = None,
        after: str = None,
        before: str = None,
    ) -> MessageList:
        params = page_params(limit, order, after, before)
        return decode(self._transport.get(f"/threads/{thread_id}/messages", params=params), MessageList)

    def retrieve_file(self, thread_id: str, message_id: str, file_id: str) -> MessageFile:
        response = self._transport.get(f"/threads/{thread_id}/messages/{message_id}/files/{file_id}")
        return decode(response, MessageFile)

    def list_files(
        self,
        thread_id: str,
        message_id: str,
        limit: int = None,
        order: SortOrder = None,
        after: str = None,
        before: str = None,
    ) -> MessageFileList:
        params = page_params(limit, order, after, before)
        response = self._transport.get(f"/threads/{thread_id}/messages/{message_id}/files", params=params)
        return decode(response, MessageFileList)
