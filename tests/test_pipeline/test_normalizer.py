"""Tests for ResponseNormalizer."""

import pytest

from bhasha_mitra.models.suggestion import (
    Category,
    ContentAnalysis,
    SpellingError,
    StyleMixingReport,
    ToneSuggestion,
)
from bhasha_mitra.pipeline.normalizer import DEFAULT_THRESHOLDS, ResponseNormalizer


@pytest.fixture
def normalizer() -> ResponseNormalizer:
    return ResponseNormalizer()


class TestConfidenceFiltering:
    @pytest.mark.parametrize("category", list(Category))
    def test_threshold_is_inclusive(self, normalizer, category):
        t = DEFAULT_THRESHOLDS[category]
        identity = "currentSentence" if category is Category.PUNCTUATION else (
            "wrong" if category is Category.SPELLING else "current"
        )
        raw = [
            {identity: "at", "confidenceScore": t},
            {identity: "below", "confidenceScore": t - 0.01},
            {identity: "unscored"},
        ]
        kept = normalizer.parse_items(category, raw)
        assert [i.identity for i in kept] == ["at", "unscored"]

    def test_custom_thresholds(self):
        normalizer = ResponseNormalizer({"style": 0.5})
        kept = normalizer.parse_items(Category.STYLE, [{"current": "ক", "confidenceScore": 0.6}])
        assert len(kept) == 1
        assert normalizer.thresholds[Category.SPELLING] == 0.8

    def test_malformed_items_are_skipped(self, normalizer):
        raw = [
            "not a dict",
            {"suggestion": "no identity"},
            {"current": "ঠিক", "suggestion": "ঠিকঠাক", "confidenceScore": 0.95},
        ]
        kept = normalizer.parse_items(Category.TONE, raw)
        assert len(kept) == 1
        assert isinstance(kept[0], ToneSuggestion)

    def test_non_list_input(self, normalizer):
        assert normalizer.parse_items(Category.SPELLING, None) == []
        assert normalizer.parse_items(Category.SPELLING, {"wrong": "ক"}) == []


class TestNormalizeMain:
    def test_scenario_three_words_one_error(self, normalizer):
        payload = {"spellingErrors": [{"wrong": "ভাথ", "suggestions": ["ভাত"], "confidenceScore": 0.9}]}
        result = normalizer.normalize_main(payload, "আমি ভাথ খাই")

        assert len(result.spelling) == 1
        assert isinstance(result.spelling[0], SpellingError)
        assert result.spelling[0].position == 0
        assert result.stats.total_words == 3
        assert result.stats.error_count == 1
        assert result.stats.accuracy == 67

    def test_full_payload(self, normalizer, main_payload, sample_text):
        result = normalizer.normalize_main(main_payload, sample_text)

        assert [s.wrong for s in result.spelling] == ["বাজারে"]
        assert len(result.punctuation) == 1
        assert result.euphony == []  # 0.6 < 0.7
        assert isinstance(result.mixing, StyleMixingReport)
        assert result.mixing.recommended_style == "cholito"
        assert [c.current for c in result.mixing.corrections] == ["তাহার"]
        assert result.meta.detected_style == "mixed"
        assert result.stats.error_count == 1

    def test_mixing_report_collapses_when_filtered_empty(self, normalizer):
        payload = {
            "languageStyleMixing": {
                "detected": True,
                "corrections": [{"current": "তাহার", "suggestion": "তার", "confidenceScore": 0.5}],
            }
        }
        assert normalizer.normalize_main(payload, "তাহার").mixing is None

    def test_mixing_report_without_corrections_collapses(self, normalizer):
        payload = {"languageStyleMixing": {"detected": False}}
        assert normalizer.normalize_main(payload, "x").mixing is None

    def test_empty_payload_gives_default_stats(self, normalizer):
        result = normalizer.normalize_main({"_analysis": {}}, "")
        assert result.spelling == []
        assert result.stats.accuracy == 100


class TestOtherCategories:
    def test_tone(self, normalizer, tone_payload):
        items = normalizer.normalize_tone(tone_payload)
        assert items[0].current == "তাহার"
        assert items[0].position == 5

    def test_style_threshold(self, normalizer):
        payload = {"styleConversions": [{"current": "ক", "confidenceScore": 0.85}]}
        assert normalizer.normalize_style(payload) == []

    def test_content(self, normalizer, content_payload):
        content = normalizer.normalize_content(content_payload)
        assert isinstance(content, ContentAnalysis)
        assert content.content_type == "গল্প"

    def test_content_without_type(self, normalizer):
        assert normalizer.normalize_content({"description": "x"}) is None
