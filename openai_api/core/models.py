"""Base model, envelope decoding and types shared across resources."""

from __future__ import annotations

import inspect
import json
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from .errors import ConfigurationError, DecodeError
from .transport import Response, file_part

T = TypeVar("T", bound="BaseModel")


# =============================================================================
# Base Model
# =============================================================================

class BaseModel:
    """Base model with dict-like access and wire (de)serialization.

    Subclasses declare their fields in ``__init__``. Parameters without a
    default are required when decoding. Two class attributes tune the wire
    mapping:

    ``_wire``   attribute name -> JSON key, for keys that are not identifiers
                or clash with builtins (``"type"``, ``"hate/threatening"``).
    ``_nested`` attribute name -> model class, enum, or ``[model class]`` for
                lists, applied when decoding.
    """

    _wire: Dict[str, str] = {}
    _nested: Dict[str, Any] = {}

    headers: Optional[Dict[str, str]] = None

    def __init__(self, **kwargs):
        for key, value in kwargs.items():
            setattr(self, key, value)

    def __getitem__(self, key):
        return getattr(self, key)

    def get(self, key, default=None):
        return getattr(self, key, default)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    # -- encoding ------------------------------------------------------------

    def to_dict(self) -> dict:
        """Wire representation; ``None`` fields and headers are omitted."""
        result = {}
        for key, value in self.__dict__.items():
            if value is None or key == "headers":
                continue
            result[self._wire.get(key, key)] = _encode(value)
        return result

    def model_dump_json(self, indent: int = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def set(self: T, **fields) -> T:
        """Fluent setter for optional fields: ``req.set(temperature=0.2)``."""
        known = _init_params(type(self))
        for name, value in fields.items():
            if name not in known:
                raise ConfigurationError(f"{type(self).__name__} has no field {name!r}")
            setattr(self, name, value)
        return self

    # -- decoding ------------------------------------------------------------

    @classmethod
    def from_dict(cls: Type[T], data: Any) -> T:
        """Build an instance from decoded JSON, raising DecodeError on mismatch."""
        if not isinstance(data, dict):
            raise DecodeError(f"{cls.__name__}: expected a JSON object, got {type(data).__name__}")

        params = _init_params(cls)
        wire_to_attr = {cls._wire.get(name, name): name for name in params}
        kwargs = {}
        for key, value in data.items():
            name = wire_to_attr.get(key, key)
            if name in cls._nested and value is not None:
                value = _decode(cls._nested[name], value, f"{cls.__name__}.{name}")
            kwargs[name] = value

        missing = [cls._wire.get(n, n) for n, p in params.items() if p.default is p.empty and n not in kwargs]
        if missing:
            raise DecodeError(f"{cls.__name__}: missing required field(s) {', '.join(missing)}")

        try:
            return cls(**kwargs)
        except (TypeError, ValueError) as e:
            raise DecodeError(f"{cls.__name__}: {e}")

    def __repr__(self):
        fields = ", ".join(f"{k}={v!r}" for k, v in self.__dict__.items() if v is not None and k != "headers")
        return f"{self.__class__.__name__}({fields})"

    def __str__(self):
        return self.__repr__()


def _init_params(cls) -> Dict[str, inspect.Parameter]:
    params = inspect.signature(cls.__init__).parameters
    return {
        name: p for name, p in params.items()
        if name != "self" and p.kind not in (p.VAR_KEYWORD, p.VAR_POSITIONAL)
    }


def _encode(value):
    if isinstance(value, BaseModel):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_encode(item) for item in value]
    if isinstance(value, dict):
        return {k: _encode(v) for k, v in value.items()}
    return value


def _decode(target, value, where: str):
    if isinstance(target, list):
        if not isinstance(value, list):
            raise DecodeError(f"{where}: expected a list, got {type(value).__name__}")
        return [_decode(target[0], item, where) for item in value]
    if isinstance(target, type) and issubclass(target, Enum):
        try:
            return target(value)
        except ValueError:
            raise DecodeError(f"{where}: unknown value {value!r}")
    if isinstance(target, type) and issubclass(target, BaseModel):
        return target.from_dict(value)
    return target(value)


# =============================================================================
# Response Envelope
# =============================================================================

def decode(response: Response, model: Type[T]) -> T:
    """Decode a response body into ``model`` and attach the response headers.

    Headers are captured before the body is touched so the envelope always
    reflects the exchange that produced the payload. A body that does not
    decode raises DecodeError and nothing is returned.
    """
    headers = dict(response.headers)
    obj = model.from_dict(response.json())
    obj.headers = headers
    return obj


def multipart_fields(request: BaseModel, upload_fields) -> Tuple[dict, dict]:
    """Split a request into plain form fields and normalized file uploads."""
    fields = request.to_dict()
    files = {}
    for name in upload_fields:
        fields.pop(name, None)
        value = getattr(request, name, None)
        if value is not None:
            files[name] = file_part(value, name)
    return fields, files


# =============================================================================
# Shared Types
# =============================================================================

class MessageRole(str, Enum):
    USER = "user"
    SYSTEM = "system"
    ASSISTANT = "assistant"
    TOOL = "tool"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class Usage(BaseModel):
    """Token usage for a request."""
    def __init__(self, prompt_tokens: int = 0, completion_tokens: int = 0, total_tokens: int = 0, **kwargs):
        super().__init__(**kwargs)
        self.prompt_tokens = prompt_tokens
        self.completion_tokens = completion_tokens
        self.total_tokens = total_tokens


class DeletionStatus(BaseModel):
    """Result of a delete call."""
    def __init__(self, id: str, deleted: bool, object: str = None, **kwargs):
        super().__init__(**kwargs)
        self.id = id
        self.object = object
        self.deleted = deleted


class ListObject(BaseModel):
    """A page of objects. Subclasses set ``_nested = {"data": [ItemType]}``."""
    def __init__(
        self,
        data: list,
        object: str = "list",
        first_id: str = None,
        last_id: str = None,
        has_more: bool = False,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.object = object
        self.data = data
        self.first_id = first_id
        self.last_id = last_id
        self.has_more = has_more

    def __iter__(self):
        return iter(self.data)

    def __len__(self):
        return len(self.data)


def page_params(
    limit: int = None,
    order: Optional[str] = None,
    after: str = None,
    before: str = None,
) -> dict:
    """Query parameters for list endpoints; unset values are dropped."""
    params = {"limit": limit, "order": order, "after": after, "before": before}
    if isinstance(order, SortOrder):
        params["order"] = order.value
    return {k: v for k, v in params.items() if v is not None}


Metadata = Dict[str, str]
Tools = List[Dict[str, Any]]
