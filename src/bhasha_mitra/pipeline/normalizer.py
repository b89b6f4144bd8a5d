"""Maps raw model payloads onto typed suggestions and filters by confidence."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping

from pydantic import ValidationError

from bhasha_mitra.models.suggestion import (
    AnalysisMeta,
    AnalysisStats,
    Category,
    ContentAnalysis,
    EuphonyImprovement,
    MixingCorrection,
    PunctuationIssue,
    SpellingError,
    StyleMixingReport,
    StyleSuggestion,
    SuggestionBase,
    ToneSuggestion,
    parse_suggestion,
)
from bhasha_mitra.utils.text import tokenize_words

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLDS: dict[Category, float] = {
    Category.SPELLING: 0.8,
    Category.PUNCTUATION: 0.75,
    Category.EUPHONY: 0.7,
    Category.TONE: 0.8,
    Category.STYLE: 0.9,
    Category.MIXING: 0.85,
}


@dataclass
class MainResult:
    """Everything the main check contributes to the store."""

    spelling: list[SpellingError] = field(default_factory=list)
    punctuation: list[PunctuationIssue] = field(default_factory=list)
    euphony: list[EuphonyImprovement] = field(default_factory=list)
    mixing: StyleMixingReport | None = None
    stats: AnalysisStats = field(default_factory=AnalysisStats)
    meta: AnalysisMeta | None = None


class ResponseNormalizer:
    """Turns parsed payloads into filtered, typed suggestion lists."""

    def __init__(self, thresholds: Mapping[Category | str, float] | None = None):
        self.thresholds = dict(DEFAULT_THRESHOLDS)
        for key, value in (thresholds or {}).items():
            self.thresholds[Category(key)] = value

    def passes(self, item: SuggestionBase) -> bool:
        """An item is kept iff its score reaches its category threshold."""
        return item.confidence_score >= self.thresholds[item.category]

    def parse_items(self, category: Category, raw) -> list:
        """Validate and filter one raw array. Malformed entries are skipped."""
        if not isinstance(raw, list):
            if raw is not None:
                logger.warning("Expected a list for %s, got %s", category.value, type(raw).__name__)
            return []

        kept = []
        dropped = 0
        for entry in raw:
            if not isinstance(entry, dict):
                continue
            try:
                item = parse_suggestion(category, entry)
            except ValidationError:
                logger.warning("Skipping malformed %s item: %s", category.value, entry)
                continue
            if self.passes(item):
                kept.append(item)
            else:
                dropped += 1
        if dropped:
            logger.debug("Dropped %d low-confidence %s item(s)", dropped, category.value)
        return kept

    def normalize_mixing(self, raw) -> StyleMixingReport | None:
        """Filter the report's corrections; a report left empty collapses to None."""
        if not isinstance(raw, dict):
            return None
        corrections: list[MixingCorrection] = self.parse_items(Category.MIXING, raw.get("corrections"))
        if not corrections:
            return None
        header = {k: v for k, v in raw.items() if k != "corrections"}
        try:
            report = StyleMixingReport.model_validate(header)
        except ValidationError:
            logger.warning("Malformed mixing report header: %s", header)
            report = StyleMixingReport(detected=True)
        return report.model_copy(update={"corrections": corrections})

    def normalize_main(self, payload: dict, text: str) -> MainResult:
        spelling: list[SpellingError] = self.parse_items(Category.SPELLING, payload.get("spellingErrors"))

        meta = None
        if isinstance(payload.get("_analysis"), dict):
            try:
                meta = AnalysisMeta.model_validate(payload["_analysis"])
                logger.debug("Model analysis: %s", meta)
            except ValidationError:
                logger.warning("Ignoring malformed _analysis block")

        return MainResult(
            spelling=spelling,
            punctuation=self.parse_items(Category.PUNCTUATION, payload.get("punctuationIssues")),
            euphony=self.parse_items(Category.EUPHONY, payload.get("euphonyImprovements")),
            mixing=self.normalize_mixing(payload.get("languageStyleMixing")),
            stats=compute_stats(text, len(spelling)),
            meta=meta,
        )

    def normalize_tone(self, payload: dict) -> list[ToneSuggestion]:
        return self.parse_items(Category.TONE, payload.get("toneConversions"))

    def normalize_style(self, payload: dict) -> list[StyleSuggestion]:
        return self.parse_items(Category.STYLE, payload.get("styleConversions"))

    @staticmethod
    def normalize_content(payload: dict) -> ContentAnalysis | None:
        try:
            return ContentAnalysis.model_validate(payload)
        except ValidationError:
            logger.warning("Malformed content analysis payload")
            return None


def compute_stats(text: str, error_count: int) -> AnalysisStats:
    return AnalysisStats.compute(len(tokenize_words(text)), error_count)
