"""Uploaded files."""

from __future__ import annotations

from typing import Any

from ..core.models import BaseModel, DeletionStatus, ListObject, decode, multipart_fields
from ..core.transport import HTTPTransport
from ..utils.output import write_bytes


class FileUploadRequest(BaseModel):
    """``file`` is an upload: a path, bytes, tuple or file object."""

    def __init__(self, file: Any, purpose: str, **kwargs):
        super().__init__(**kwargs)
        self.file = file
        self.purpose = purpose


class FileObject(BaseModel):
    def __init__(
        self,
        id: str,
        bytes: int = None,
        created_at: int = None,
        filename: str = None,
        purpose: str = None,
        object: str = "file",
        status: str = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.id = id
        self.object = object
        self.bytes = bytes
        self.created_at = created_at
        self.filename = filename
        self.purpose = purpose
        self.status = status


class FileList(ListObject):
    _nested = {"data": [FileObject]}


class FileContent(BaseModel):
    """Raw file contents as returned by ``/files/{id}/content``."""
    def __init__(self, file_id: str, content: bytes, **kwargs):
        super().__init__(**kwargs)
        self.file_id = file_id
        self.content = content

    def save(self, destination) -> str:
        return write_bytes(self.content, destination)


class Files:
    """Files resource."""

    def __init__(self, transport: HTTPTransport):
        self._transport = transport

    def list(self, purpose: str = None) -> FileList:
        params = {"purpose": purpose} if purpose else None
        return decode(self._transport.get("/files", params=params), FileList)

    def upload(self, request: FileUploadRequest) -> FileObject:
        fields, files = multipart_fields(request, ("file",))
        return decode(self._transport.post_multipart("/files", fields, files), FileObject)

    def delete(self, file_id: str) -> DeletionStatus:
        return decode(self._transport.delete(f"/files/{file_id}"), DeletionStatus)

    def retrieve(self, file_id: str) -> FileObject:
        return decode(self._transport.get(f"/files/{file_id}"), FileObject)

    def retrieve_content(self, file_id: str) -> FileContent:
        response = self._transport.get(f"/files/{file_id}/content")
        result = FileContent(file_id=file_id, content=response.content)
        result.headers = dict(response.headers)
        return result
