"""Pydantic models for suggestion records produced by the model service."""

from __future__ import annotations

import math
from abc import abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Category(str, Enum):
    SPELLING = "spelling"
    TONE = "tone"
    STYLE = "style"
    MIXING = "mixing"
    PUNCTUATION = "punctuation"
    EUPHONY = "euphony"


class _WireModel(BaseModel):
    """Accepts the camelCase keys the model returns and snake_case in code."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class SuggestionBase(_WireModel):
    category: ClassVar[Category]
    highlight_color: ClassVar[str]

    position: int = 0  # 0-based whitespace word index, a hint only
    confidence_score: float = 1.0

    @field_validator("position", mode="before")
    @classmethod
    def default_position(cls, v):
        return 0 if v is None else v

    @field_validator("confidence_score", mode="before")
    @classmethod
    def default_score(cls, v):
        return 1.0 if v is None else v

    @property
    @abstractmethod
    def identity(self) -> str:
        """The field used as the normalized matching key."""

    @property
    @abstractmethod
    def replacement_candidates(self) -> list[str]: ...


def _as_list(v):
    if v is None:
        return []
    if isinstance(v, str):
        return [v]
    return v


class SpellingError(SuggestionBase):
    category: ClassVar[Category] = Category.SPELLING
    highlight_color: ClassVar[str] = "#fee2e2"

    kind: Literal["spelling"] = "spelling"
    wrong: str
    suggestions: list[str] = []
    explanation: str | None = None
    severity: str | None = None  # "critical" | "minor"

    @field_validator("suggestions", mode="before")
    @classmethod
    def coerce_suggestions(cls, v):
        return _as_list(v)

    @property
    def identity(self) -> str:
        return self.wrong

    @property
    def replacement_candidates(self) -> list[str]:
        return list(self.suggestions)


class ToneSuggestion(SuggestionBase):
    category: ClassVar[Category] = Category.TONE
    highlight_color: ClassVar[str] = "#fef3c7"

    kind: Literal["tone"] = "tone"
    current: str
    suggestion: str = ""
    reason: str | None = None

    @property
    def identity(self) -> str:
        return self.current

    @property
    def replacement_candidates(self) -> list[str]:
        return [self.suggestion] if self.suggestion else []


class StyleSuggestion(SuggestionBase):
    category: ClassVar[Category] = Category.STYLE
    highlight_color: ClassVar[str] = "#ccfbf1"

    kind: Literal["style"] = "style"
    current: str
    suggestion: str = ""
    type: str | None = None  # "Verb", "Pronoun", ...

    @property
    def identity(self) -> str:
        return self.current

    @property
    def replacement_candidates(self) -> list[str]:
        return [self.suggestion] if self.suggestion else []


class MixingCorrection(SuggestionBase):
    category: ClassVar[Category] = Category.MIXING
    highlight_color: ClassVar[str] = "#e9d5ff"

    kind: Literal["mixing"] = "mixing"
    current: str
    suggestion: str = ""
    type: str | None = None  # "Sadhu->Cholito"

    @property
    def identity(self) -> str:
        return self.current

    @property
    def replacement_candidates(self) -> list[str]:
        return [self.suggestion] if self.suggestion else []


class PunctuationIssue(SuggestionBase):
    category: ClassVar[Category] = Category.PUNCTUATION
    highlight_color: ClassVar[str] = "#ffedd5"

    kind: Literal["punctuation"] = "punctuation"
    issue: str | None = None
    current_sentence: str
    corrected_sentence: str = ""
    explanation: str | None = None

    @property
    def identity(self) -> str:
        return self.current_sentence

    @property
    def replacement_candidates(self) -> list[str]:
        return [self.corrected_sentence] if self.corrected_sentence else []


class EuphonyImprovement(SuggestionBase):
    category: ClassVar[Category] = Category.EUPHONY
    highlight_color: ClassVar[str] = "#fce7f3"

    kind: Literal["euphony"] = "euphony"
    current: str
    suggestions: list[str] = []
    reason: str | None = None

    @field_validator("suggestions", mode="before")
    @classmethod
    def coerce_suggestions(cls, v):
        return _as_list(v)

    @property
    def identity(self) -> str:
        return self.current

    @property
    def replacement_candidates(self) -> list[str]:
        return list(self.suggestions)


Suggestion = Annotated[
    Union[
        SpellingError,
        ToneSuggestion,
        StyleSuggestion,
        MixingCorrection,
        PunctuationIssue,
        EuphonyImprovement,
    ],
    Field(discriminator="kind"),
]

SUGGESTION_TYPES: dict[Category, type[SuggestionBase]] = {
    Category.SPELLING: SpellingError,
    Category.TONE: ToneSuggestion,
    Category.STYLE: StyleSuggestion,
    Category.MIXING: MixingCorrection,
    Category.PUNCTUATION: PunctuationIssue,
    Category.EUPHONY: EuphonyImprovement,
}


def parse_suggestion(category: Category, raw: dict) -> SuggestionBase:
    """Build the variant for ``category`` from a raw wire dict."""
    data = {k: v for k, v in raw.items() if k != "kind"}
    return SUGGESTION_TYPES[category].model_validate(data)


class StyleMixingReport(_WireModel):
    """Sadhu/Cholito mixing detection; never kept with zero corrections."""

    detected: bool = False
    recommended_style: str | None = None
    reason: str | None = None
    corrections: list[MixingCorrection] = []


class AnalysisStats(_WireModel):
    total_words: int = 0
    error_count: int = 0
    accuracy: int = 100

    @classmethod
    def compute(cls, total_words: int, error_count: int) -> AnalysisStats:
        if total_words == 0:
            accuracy = 100
        else:
            # Half-up rounding
            accuracy = math.floor((total_words - error_count) / total_words * 100 + 0.5)
        return cls(total_words=total_words, error_count=error_count, accuracy=accuracy)


class AnalysisMeta(_WireModel):
    """The model's own ``_analysis`` block (detected tone/style, quality note)."""

    detected_tone: str | None = None
    detected_style: str | None = None  # "sadhu" | "cholito" | "mixed"
    overall_quality: str | None = None


class ContentAnalysis(_WireModel):
    content_type: str
    description: str | None = None
    missing_elements: list[str] = []
    suggestions: list[str] = []


@dataclass(frozen=True)
class HighlightItem:
    """One text fragment to highlight; equality is structural."""

    text: str
    color: str
    position: int | None = None


@dataclass(frozen=True)
class Message:
    """User-facing notification."""

    text: str
    type: Literal["success", "error"]
