"""Content moderation requests and results."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any

from gptwire.api import ApiCall, HttpMethod


class ModerationModel(str, Enum):
    """Moderation model names."""

    OMNI_LATEST = "omni-moderation-latest"
    OMNI_20240926 = "omni-moderation-2024-09-26"
    TEXT_STABLE = "text-moderation-stable"
    TEXT_LATEST = "text-moderation-latest"
    # Deprecated and no longer accepted by moderations().
    TEXT_001 = "text-moderation-001"


_VALID_MODELS = frozenset(
    {
        ModerationModel.OMNI_LATEST.value,
        ModerationModel.OMNI_20240926.value,
        ModerationModel.TEXT_STABLE.value,
        ModerationModel.TEXT_LATEST.value,
    }
)


class InvalidModerationModelError(ValueError):
    """The requested model cannot be used for moderation."""

    def __init__(self) -> None:
        super().__init__(
            "this model is not supported with moderation, please use "
            "text-moderation-stable or text-moderation-latest instead"
        )


def _model_name(model: Any) -> str:
    return model.value if isinstance(model, Enum) else str(model or "")


@dataclass
class ModerationRequest:
    """Body for a moderation call."""

    input: str = ""
    model: ModerationModel | str = ""
    extra_headers: dict[str, str] | None = None
    extra_query: dict[str, str] | None = None
    extra_body: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.input:
            out["input"] = self.input
        model = _model_name(self.model)
        if model:
            out["model"] = model
        for name in ("extra_headers", "extra_query", "extra_body"):
            value = getattr(self, name)
            if value:
                out[name] = dict(value)
        return out


# Attribute name -> JSON key, shared by the category flags and scores.
_CATEGORY_KEYS = {
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


@dataclass
class ResultCategories:
    """Which categories a piece of content was flagged for."""

    hate: bool = False
    hate_threatening: bool = False
    harassment: bool = False
    harassment_threatening: bool = False
    self_harm: bool = False
    self_harm_intent: bool = False
    self_harm_instructions: bool = False
    sexual: bool = False
    sexual_minors: bool = False
    violence: bool = False
    violence_graphic: bool = False

    def to_dict(self) -> dict[str, bool]:
        return {_CATEGORY_KEYS[f.name]: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ResultCategories:
        data = data or {}
        return cls(**{name: bool(data.get(key)) for name, key in _CATEGORY_KEYS.items()})


@dataclass
class ResultCategoryScores:
    """Confidence score per category."""

    hate: float = 0.0
    hate_threatening: float = 0.0
    harassment: float = 0.0
    harassment_threatening: float = 0.0
    self_harm: float = 0.0
    self_harm_intent: float = 0.0
    self_harm_instructions: float = 0.0
    sexual: float = 0.0
    sexual_minors: float = 0.0
    violence: float = 0.0
    violence_graphic: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {_CATEGORY_KEYS[f.name]: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ResultCategoryScores:
        data = data or {}
        return cls(
            **{name: float(data.get(key) or 0.0) for name, key in _CATEGORY_KEYS.items()}
        )


@dataclass
class Result:
    """Moderation verdict for one input."""

    categories: ResultCategories = field(default_factory=ResultCategories)
    category_scores: ResultCategoryScores = field(default_factory=ResultCategoryScores)
    flagged: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Result:
        return cls(
            categories=ResultCategories.from_dict(data.get("categories")),
            category_scores=ResultCategoryScores.from_dict(data.get("category_scores")),
            flagged=bool(data.get("flagged")),
        )


@dataclass
class ModerationResponse:
    """Reply to a moderation call."""

    id: str = ""
    model: str = ""
    results: list[Result] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ModerationResponse:
        return cls(
            id=data.get("id") or "",
            model=data.get("model") or "",
            results=[Result.from_dict(item) for item in data.get("results") or []],
        )


def moderations(request: ModerationRequest) -> ApiCall[ModerationResponse]:
    """Check text against the usage policies; an empty model uses the server default."""
    model = _model_name(request.model)
    if model and model not in _VALID_MODELS:
        raise InvalidModerationModelError()
    return ApiCall(
        HttpMethod.POST,
        "/moderations",
        query=tuple((request.extra_query or {}).items()),
        body=request.to_dict(),
        parse=ModerationResponse.from_dict,
    )