from __future__ import annotations

from typing import List, Union

from ..core.models import BaseModel, decode
from ..core.transport import HTTPTransport


class CreateModerationRequest(BaseModel):
    def __init__(self, input: Union[str, List[str]], model: str = None, **kwargs):
        super().__init__(**kwargs)
        self.input = input
        self.model = model


# attribute name -> category name on the wire
_CATEGORY_WIRE = {
    "hate": "hate",
    "hate_threatening": "hate/threatening",
    "harassment": "harassment",
    "harassment_threatening": "harassment/threatening",
    "self_harm": "self-harm",
    "self_harm_intent": "self-harm/intent",
    "self_harm_instructions": "self-harm/instructions",
    "sexual": "sexual",
    "sexual_minors": "sexual/minors",
    "violence": "violence",
    "violence_graphic": "violence/graphic",
}

class ModerationCategories(BaseModel):
    """Per-category flags. The seven core categories are required."""
    _wire = _CATEGORY_WIRE

    def __init__(
        self,
        hate: bool,
        hate_threatening: bool,
        self_harm: bool,
        sexual: bool,
        sexual_minors: bool,
        violence: bool,
        violence_graphic: bool,
        harassment: bool = None,
        harassment_threatening: bool = None,
        self_harm_intent: bool = None,
        self_harm_instructions: bool = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.hate = hate
        self.hate_threatening = hate_threatening
        self.harassment = harassment
        self.harassment_threatening = harassment_threatening
        self.self_harm = self_harm
        self.self_harm_intent = self_harm_intent
        self.self_harm_instructions = self_harm_instructions
        self.sexual = sexual
        self.sexual_minors = sexual_minors
        self.violence = violence
        self.violence_graphic = violence_graphic


class ModerationCategoryScores(BaseModel):
    """Per-category likelihood scores, same names as the flags."""
    _wire = _CATEGORY_WIRE

    def __init__(
        self,
        hate: float,
        hate_threatening: float,
        self_harm: float,
        sexual: float,
        sexual_minors: float,
        violence: float,
        violence_graphic: float,
        harassment: float = None,
        harassment_threatening: float = None,
        self_harm_intent: float = None,
        self_harm_instructions: float = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.hate = hate
        self.hate_threatening = hate_threatening
        self.harassment = harassment
        self.harassment_threatening = harassment_threatening
        self.self_harm = self_harm
        self.self_harm_intent = self_harm_intent
        self.self_harm_instructions = self_harm_instructions
        self.sexual = sexual
        self.sexual_minors = sexual_minors
        self.violence = violence
        self.violence_graphic = violence_graphic


class ModerationResult(BaseModel):
    _nested = {"categories": ModerationCategories, "category_scores": ModerationCategoryScores}

    def __init__(
        self,
        flagged: bool,
        categories: ModerationCategories,
        category_scores: ModerationCategoryScores,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.flagged = flagged
        self.categories = categories
        self.category_scores = category_scores

    def flagged_categories(self) -> List[str]:
        """Wire names of every category flagged true."""
        return [
            wire for attr, wire in _CATEGORY_WIRE.items()
            if getattr(self.categories, attr, None)
        ]


class CreateModerationResponse(BaseModel):
    _nested = {"results": [ModerationResult]}

    def __init__(self, id: str, model: str, results: List[ModerationResult], **kwargs):
        super().__init__(**kwargs)
        self.id = id
        self.model = model
        self.results = results


class Moderations:
    """Content moderation resource."""

    def __init__(self, transport: HTTPTransport):
        self._transport = transport

    def create(self, request: CreateModerationRequest) -> CreateModerationResponse:
        return decode(self._transport.post("/moderations", body=request.to_dict()), CreateModerationResponse)
