"""Chat completions: request/response types, tool definitions and dispatch."""

from __future__ import annotations

import inspect
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from ..core.models import BaseModel, MessageRole, Usage, decode
from ..core.transport import HTTPTransport
from .models import DEFAULT_MODEL


# =============================================================================
# Message Content
# =============================================================================

class ContentType(str, Enum):
    TEXT = "text"
    IMAGE_URL = "image_url"


class ImageUrl(BaseModel):
    def __init__(self, url: str, detail: str = None, **kwargs):
        super().__init__(**kwargs)
        self.url = url
        self.detail = detail


class ContentPart(BaseModel):
    """One part of a multi-part message: text or an image reference."""
    _nested = {"type": ContentType, "image_url": ImageUrl}

    def __init__(self, type: ContentType, text: str = None, image_url: ImageUrl = None, **kwargs):
        super().__init__(**kwargs)
        self.type = type
        self.text = text
        self.image_url = image_url

    @classmethod
    def of_text(cls, text: str) -> "ContentPart":
        return cls(type=ContentType.TEXT, text=text)

    @classmethod
    def of_image(cls, url: str, detail: str = None) -> "ContentPart":
        return cls(type=ContentType.IMAGE_URL, image_url=ImageUrl(url=url, detail=detail))


Content = Union[str, List[ContentPart]]


class ChatCompletionMessage(BaseModel):
    """A message sent to the model."""

    def __init__(
        self,
        role: Union[MessageRole, str],
        content: Content,
        name: str = None,
        tool_call_id: str = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.role = role
        self.content = content
        self.name = name
        self.tool_call_id = tool_call_id

    @classmethod
    def user(cls, content: Content, **kwargs) -> "ChatCompletionMessage":
        return cls(role=MessageRole.USER, content=content, **kwargs)

    @classmethod
    def system(cls, content: str, **kwargs) -> "ChatCompletionMessage":
        return cls(role=MessageRole.SYSTEM, content=content, **kwargs)

    @classmethod
    def assistant(cls, content: str, **kwargs) -> "ChatCompletionMessage":
        return cls(role=MessageRole.ASSISTANT, content=content, **kwargs)

    @classmethod
    def tool(cls, content: str, tool_call_id: str) -> "ChatCompletionMessage":
        return cls(role=MessageRole.TOOL, content=content, tool_call_id=tool_call_id)

    @classmethod
    def vision(cls, text: str, image_urls: List[str], detail: str = None) -> "ChatCompletionMessage":
        """User message with a text part followed by one part per image."""
        parts = [ContentPart.of_text(text)]
        parts.extend(ContentPart.of_image(url, detail) for url in image_urls)
        return cls.user(parts)


# =============================================================================
# Tool / Function Definitions
# =============================================================================

class JSONSchemaType(str, Enum):
    OBJECT = "object"
    NUMBER = "number"
    INTEGER = "integer"
    STRING = "string"
    ARRAY = "array"
    NULL = "null"
    BOOLEAN = "boolean"


class JSONSchemaDefine(BaseModel):
    _wire = {"enum_values": "enum"}

    def __init__(
        self,
        type: JSONSchemaType = None,
        description: str = None,
        enum_values: List[str] = None,
        properties: Dict[str, "JSONSchemaDefine"] = None,
        required: List[str] = None,
        items: "JSONSchemaDefine" = None,
        default: Any = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.type = type
        self.description = description
        self.enum_values = enum_values
        self.properties = properties
        self.required = required
        self.items = items
        self.default = default


class FunctionParameters(BaseModel):
    def __init__(
        self,
        properties: Dict[str, JSONSchemaDefine] = None,
        required: List[str] = None,
        type: JSONSchemaType = JSONSchemaType.OBJECT,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.type = type
        self.properties = properties
        self.required = required


_PY_TO_SCHEMA = {
    str: JSONSchemaType.STRING,
    int: JSONSchemaType.INTEGER,
    float: JSONSchemaType.NUMBER,
    bool: JSONSchemaType.BOOLEAN,
    list: JSONSchemaType.ARRAY,
    dict: JSONSchemaType.OBJECT,
}


class Function(BaseModel):
    def __init__(self, name: str, parameters: FunctionParameters = None, description: str = None, **kwargs):
        super().__init__(**kwargs)
        self.name = name
        self.description = description
        self.parameters = parameters or FunctionParameters(properties={}, required=[])

    @classmethod
    def from_callable(cls, func: Callable, description: str = None) -> "Function":
        """Create a function definition from a Python function's signature."""
        properties = {}
        required = []

        for param_name, param in inspect.signature(func).parameters.items():
            if param_name in ("self", "cls"):
                continue
            annotation = param.annotation
            if isinstance(annotation, str):
                annotation = {"str": str, "int": int, "float": float, "bool": bool, "list": list, "dict": dict}.get(annotation)
            schema = JSONSchemaDefine(type=_PY_TO_SCHEMA.get(annotation, JSONSchemaType.STRING))

            if param.default is inspect.Parameter.empty:
                required.append(param_name)
            else:
                schema.default = param.default
            properties[param_name] = schema

        doc = description or func.__doc__ or f"Function: {func.__name__}"
        return cls(
            name=func.__name__,
            description=doc.strip(),
            parameters=FunctionParameters(properties=properties, required=required),
        )


class ToolType(str, Enum):
    FUNCTION = "function"


class Tool(BaseModel):
    def __init__(self, function: Function, type: ToolType = ToolType.FUNCTION, **kwargs):
        super().__init__(**kwargs)
        self.type = type
        self.function = function


class ToolChoiceType(str, Enum):
    NONE = "none"
    AUTO = "auto"


ToolChoice = Union[ToolChoiceType, str, Tool]


def _encode_tool_choice(choice: ToolChoice):
    if isinstance(choice, Tool):
        return {"type": choice.type.value, "function": {"name": choice.function.name}}
    return ToolChoiceType(choice).value


# =============================================================================
# Request
# =============================================================================

class ChatCompletionRequest(BaseModel):
    def __init__(
        self,
        model,
        messages: Union[ChatCompletionMessage, List[ChatCompletionMessage]],
        temperature: float = None,
        top_p: float = None,
        n: int = None,
        response_format: dict = None,
        stop: List[str] = None,
        max_tokens: int = None,
        presence_penalty: float = None,
        frequency_penalty: float = None,
        logit_bias: Dict[str, int] = None,
        user: str = None,
        seed: int = None,
        tools: List[Tool] = None,
        tool_choice: ToolChoice = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.model = model
        self.messages = messages if isinstance(messages, list) else [messages]
        self.temperature = temperature
        self.top_p = top_p
        self.n = n
        self.response_format = response_format
        self.stop = stop
        self.max_tokens = max_tokens
        self.presence_penalty = presence_penalty
        self.frequency_penalty = frequency_penalty
        self.logit_bias = logit_bias
        self.user = user
        self.seed = seed
        self.tools = tools
        self.tool_choice = tool_choice

    @classmethod
    def from_prompt(cls, prompt: str, model=DEFAULT_MODEL) -> "ChatCompletionRequest":
        return cls(model=model, messages=[ChatCompletionMessage.user(prompt)])

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.tool_choice is not None:
            body["tool_choice"] = _encode_tool_choice(self.tool_choice)
        return body


# =============================================================================
# Response
# =============================================================================

class FinishReason(str, Enum):
    STOP = "stop"
    LENGTH = "length"
    CONTENT_FILTER = "content_filter"
    TOOL_CALLS = "tool_calls"
    FUNCTION_CALL = "function_call"


class ToolCallFunction(BaseModel):
    def __init__(self, name: str = None, arguments: str = None, **kwargs):
        super().__init__(**kwargs)
        self.name = name
        self.arguments = arguments


class ToolCall(BaseModel):
    _nested = {"function": ToolCallFunction}

    def __init__(self, id: str, function: ToolCallFunction, type: str = "function", **kwargs):
        super().__init__(**kwargs)
        self.id = id
        self.type = type
        self.function = function


class ChatCompletionMessageForResponse(BaseModel):
    _nested = {"role": MessageRole, "tool_calls": [ToolCall]}

    def __init__(
        self,
        role: MessageRole,
        content: str = None,
        name: str = None,
        tool_calls: List[ToolCall] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.role = role
        self.content = content
        self.name = name
        self.tool_calls = tool_calls


class ChatCompletionChoice(BaseModel):
    _nested = {"message": ChatCompletionMessageForResponse, "finish_reason": FinishReason}

    def __init__(
        self,
        index: int,
        message: ChatCompletionMessageForResponse,
        finish_reason: Optional[FinishReason] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.index = index
        self.message = message
        self.finish_reason = finish_reason


class ChatCompletionResponse(BaseModel):
    _nested = {"choices": [ChatCompletionChoice], "usage": Usage}

    def __init__(
        self,
        id: str,
        choices: List[ChatCompletionChoice],
        object: str = "chat.completion",
        created: int = None,
        model: str = None,
        usage: Usage = None,
        system_fingerprint: str = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.id = id
        self.object = object
        self.created = created
        self.model = model
        self.choices = choices
        self.usage = usage
        self.system_fingerprint = system_fingerprint

    def get_choice(self) -> str:
        """Content of the first choice, or an empty string."""
        if not self.choices:
            return ""
        return self.choices[0].message.content or ""


# =============================================================================
# Dispatch
# =============================================================================

class Completions:
    """chat.completions resource."""

    def __init__(self, transport: HTTPTransport):
        self._transport = transport

    def create(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        """Create a chat completion."""
        response = self._transport.post("/chat/completions", body=request.to_dict())
        return decode(response, ChatCompletionResponse)


class Chat:
    """chat resource namespace."""

    def __init__(self, transport: HTTPTransport):
        self.completions = Completions(transport)
