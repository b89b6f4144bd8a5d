"""Data models for suggestions, stats and highlight requests."""

from bhasha_mitra.models.suggestion import (
    SUGGESTION_TYPES,
    AnalysisMeta,
    AnalysisStats,
    Category,
    ContentAnalysis,
    EuphonyImprovement,
    HighlightItem,
    Message,
    MixingCorrection,
    PunctuationIssue,
    SpellingError,
    StyleMixingReport,
    StyleSuggestion,
    Suggestion,
    SuggestionBase,
    ToneSuggestion,
    parse_suggestion,
)

__all__ = [
    "SUGGESTION_TYPES",
    "AnalysisMeta",
    "AnalysisStats",
    "Category",
    "ContentAnalysis",
    "EuphonyImprovement",
    "HighlightItem",
    "Message",
    "MixingCorrection",
    "PunctuationIssue",
    "SpellingError",
    "StyleMixingReport",
    "StyleSuggestion",
    "Suggestion",
    "SuggestionBase",
    "ToneSuggestion",
    "parse_suggestion",
]
