"""Legacy text completions and edits."""

from __future__ import annotations

from typing import Dict, List

from ..core.models import BaseModel, Usage, decode
from ..core.transport import HTTPTransport


class CompletionRequest(BaseModel):
    def __init__(
        self,
        model,
        prompt: str,
        suffix: str = None,
        max_tokens: int = None,
        temperature: float = None,
        top_p: float = None,
        n: int = None,
        logprobs: int = None,
        echo: bool = None,
        stop: List[str] = None,
        presence_penalty: float = None,
        frequency_penalty: float = None,
        best_of: int = None,
        logit_bias: Dict[str, int] = None,
        user: str = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.model = model
        self.prompt = prompt
        self.suffix = suffix
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.top_p = top_p
        self.n = n
        self.logprobs = logprobs
        self.echo = echo
        self.stop = stop
        self.presence_penalty = presence_penalty
        self.frequency_penalty = frequency_penalty
        self.best_of = best_of
        self.logit_bias = logit_bias
        self.user = user


class LogprobResult(BaseModel):
    def __init__(
        self,
        tokens: List[str] = None,
        token_logprobs: List[float] = None,
        top_logprobs: List[Dict[str, float]] = None,
        text_offset: List[int] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.tokens = tokens
        self.token_logprobs = token_logprobs
        self.top_logprobs = top_logprobs
        self.text_offset = text_offset


class CompletionChoice(BaseModel):
    _nested = {"logprobs": LogprobResult}

    def __init__(self, text: str, index: int = 0, finish_reason: str = None, logprobs: LogprobResult = None, **kwargs):
        super().__init__(**kwargs)
        self.text = text
        self.index = index
        self.finish_reason = finish_reason
        self.logprobs = logprobs


class CompletionResponse(BaseModel):
    _nested = {"choices": [CompletionChoice], "usage": Usage}

    def __init__(
        self,
        id: str,
        choices: List[CompletionChoice],
        object: str = "text_completion",
        created: int = None,
        model: str = None,
        usage: Usage = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.id = id
        self.object = object
        self.created = created
        self.model = model
        self.choices = choices
        self.usage = usage


class EditRequest(BaseModel):
    def __init__(
        self,
        model,
        instruction: str,
        input: str = None,
        n: int = None,
        temperature: float = None,
        top_p: float = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.model = model
        self.instruction = instruction
        self.input = input
        self.n = n
        self.temperature = temperature
        self.top_p = top_p


class EditChoice(BaseModel):
    def __init__(self, text: str, index: int = 0, **kwargs):
        super().__init__(**kwargs)
        self.text = text
        self.index = index


class EditResponse(BaseModel):
    _nested = {"choices": [EditChoice], "usage": Usage}

    def __init__(self, choices: List[EditChoice], object: str = "edit", created: int = None, usage: Usage = None, **kwargs):
        super().__init__(**kwargs)
        self.object = object
        self.created = created
        self.usage = usage
        self.choices = choices


class Completions:
    """Legacy /completions endpoint."""

    def __init__(self, transport: HTTPTransport):
        self._transport = transport

    def create(self, request: CompletionRequest) -> CompletionResponse:
        return decode(self._transport.post("/completions", body=request.to_dict()), CompletionResponse)


class Edits:
    """Legacy /edits endpoint."""

    def __init__(self, transport: HTTPTransport):
        self._transport = transport

    def create(self, request: EditRequest) -> EditResponse:
        return decode(self._transport.post("/edits", body=request.to_dict()), EditResponse)
