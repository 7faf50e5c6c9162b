from __future__ import annotations

from typing import List, Union

from ..core.models import BaseModel, Usage, decode
from ..core.transport import HTTPTransport


class EmbeddingRequest(BaseModel):
    def __init__(
        self,
        model,
        input: Union[str, List[str]],
        dimensions: int = None,
        encoding_format: str = None,
        user: str = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.model = model
        self.input = input
        self.dimensions = dimensions
        self.encoding_format = encoding_format
        self.user = user


class EmbeddingData(BaseModel):
    def __init__(self, embedding: List[float], index: int = 0, object: str = "embedding", **kwargs):
        super().__init__(**kwargs)
        self.object = object
        self.embedding = embedding
        self.index = index


class EmbeddingResponse(BaseModel):
    _nested = {"data": [EmbeddingData], "usage": Usage}

    def __init__(self, data: List[EmbeddingData], model: str = None, object: str = "list", usage: Usage = None, **kwargs):
        super().__init__(**kwargs)
        self.object = object
        self.data = data
        self.model = model
        self.usage = usage


class Embeddings:
    """Embeddings resource."""

    def __init__(self, transport: HTTPTransport):
        self._transport = transport

    def create(self, request: EmbeddingRequest) -> EmbeddingResponse:
        return decode(self._transport.post("/embeddings", body=request.to_dict()), EmbeddingResponse)
