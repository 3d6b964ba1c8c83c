"""Content moderation requests, results and the endpoint call."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

from gptkit.request_builder import ApiCall

MODERATION_TEXT_STABLE = "text-moderation-stable"
MODERATION_TEXT_LATEST = "text-moderation-latest"
# Deprecated: not accepted by ``moderations``.
MODERATION_TEXT_001 = "text-moderation-001"

_VALID_MODELS = frozenset({MODERATION_TEXT_STABLE, MODERATION_TEXT_LATEST})

_CATEGORY_KEYS = {
    "hate": "hate",
    "hate_threatening": "hate/threatening",
    "self_harm": "self-harm",
    "sexual": "sexual",
    "sexual_minors": "sexual/minors",
    "violence": "violence",
    "violence_graphic": "violence/graphic",
}


class InvalidModerationModelError(ValueError):
    def __init__(self) -> None:
        super().__init__(
            "this model is not supported with moderation, please use "
            "text-moderation-stable or text-moderation-latest instead"
        )


@dataclass
class ModerationRequest:
    input: str = ""
    model: str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.input:
            out["input"] = self.input
        if self.model:
            out["model"] = self.model
        return out


@dataclass
class ResultCategories:
    hate: bool = False
    hate_threatening: bool = False
    self_harm: bool = False
    sexual: bool = False
    sexual_minors: bool = False
    violence: bool = False
    violence_graphic: bool = False

    @classmethod
    def _from_dict(cls, data: dict[str, Any] | None) -> ResultCategories:
        data = data or {}
        return cls(**{f.name: bool(data.get(_CATEGORY_KEYS[f.name])) for f in fields(cls)})


@dataclass
class ResultCategoryScores:
    hate: float = 0.0
    hate_threatening: float = 0.0
    self_harm: float = 0.0
    sexual: float = 0.0
    sexual_minors: float = 0.0
    violence: float = 0.0
    violence_graphic: float = 0.0

    @classmethod
    def _from_dict(cls, data: dict[str, Any] | None) -> ResultCategoryScores:
        data = data or {}
        return cls(
            **{f.name: float(data.get(_CATEGORY_KEYS[f.name]) or 0) for f in fields(cls)}
        )


@dataclass
class ModerationResult:
    categories: ResultCategories = field(default_factory=ResultCategories)
    category_scores: ResultCategoryScores = field(default_factory=ResultCategoryScores)
    flagged: bool = False


@dataclass
class ModerationResponse:
    id: str = ""
    model: str = ""
    results: list[ModerationResult] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ModerationResponse:
        return cls(
            id=data.get("id") or "",
            model=data.get("model") or "",
            results=[
                ModerationResult(
                    categories=ResultCategories._from_dict(item.get("categories")),
                    category_scores=ResultCategoryScores._from_dict(item.get("category_scores")),
                    flagged=bool(item.get("flagged")),
                )
                for item in data.get("results") or []
            ],
        )


def moderations(request: ModerationRequest) -> ApiCall:
    """Call that checks text; an empty model means the server default."""
    if request.model and request.model not in _VALID_MODELS:
        raise InvalidModerationModelError()
    return ApiCall(
        "POST",
        "/moderations",
        body=request.to_dict(),
        model=request.model,
        parse=ModerationResponse.from_dict,
    )