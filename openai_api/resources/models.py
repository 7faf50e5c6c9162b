"""Model identifiers and the ``/models`` resource."""

from __future__ import annotations

from enum import Enum

from ..core.models import BaseModel, DeletionStatus, ListObject, decode
from ..core.transport import HTTPTransport


class GPT4(str, Enum):
    GPT4_TURBO = "gpt-4-turbo"
    GPT4_TURBO_PREVIEW = "gpt-4-turbo-preview"
    GPT4 = "gpt-4"
    GPT4_0125_PREVIEW = "gpt-4-0125-preview"
    GPT4O = "gpt-4o"


class GPT3(str, Enum):
    GPT35_TURBO_INSTRUCT = "gpt-3.5-turbo-instruct"
    GPT35_TURBO = "gpt-3.5-turbo"
    GPT35_TURBO_0125 = "gpt-3.5-turbo-0125"


class EmbeddingModel(str, Enum):
    TEXT_EMBEDDING_ADA_002 = "text-embedding-ada-002"
    TEXT_EMBEDDING_3_SMALL = "text-embedding-3-small"
    TEXT_EMBEDDING_3_LARGE = "text-embedding-3-large"


class ImageModel(str, Enum):
    DALL_E_2 = "dall-e-2"
    DALL_E_3 = "dall-e-3"


class AudioModel(str, Enum):
    WHISPER_1 = "whisper-1"
    TTS_1 = "tts-1"
    TTS_1_HD = "tts-1-hd"


class Voice(str, Enum):
    ALLOY = "alloy"
    ECHO = "echo"
    FABLE = "fable"
    ONYX = "onyx"
    NOVA = "nova"
    SHIMMER = "shimmer"


DEFAULT_MODEL = GPT4.GPT4O


def model_name(model) -> str:
    """Accept an enum member or a plain string."""
    return model.value if isinstance(model, Enum) else model


class ModelInfo(BaseModel):
    def __init__(self, id: str, object: str = "model", created: int = None, owned_by: str = None, **kwargs):
        super().__init__(**kwargs)
        self.id = id
        self.object = object
        self.created = created
        self.owned_by = owned_by


class ModelList(ListObject):
    _nested = {"data": [ModelInfo]}


class Models:
    """Models resource."""

    def __init__(self, transport: HTTPTransport):
        self._transport = transport

    def list(self) -> ModelList:
        """List available models."""
        return decode(self._transport.get("/models"), ModelList)

    def retrieve(self, model) -> ModelInfo:
        """Retrieve a specific model."""
        return decode(self._transport.get(f"/models/{model_name(model)}"), ModelInfo)

    def delete(self, model) -> DeletionStatus:
        """Delete a fine-tuned model."""
        return decode(self._transport.delete(f"/models/{model_name(model)}"), DeletionStatus)
