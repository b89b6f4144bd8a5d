"""Tests for text helpers."""

import pytest

from bhasha_mitra.utils.text import (
    clean_document_text,
    is_whole_word_search,
    normalize_key,
    tokenize_words,
)


class TestNormalizeKey:
    @pytest.mark.parametrize(
        "a, b",
        [
            ("তাহার", "  তাহার  "),
            ("সে তাহার", "সে\n\nতাহার"),
            ("সে   তাহার", "সে\tতাহার"),
            ("Hello World", "hello world"),
            ("line one\r\nline two", "LINE ONE line two"),
        ],
    )
    def test_equal_keys(self, a, b):
        assert normalize_key(a) == normalize_key(b)

    @pytest.mark.parametrize(
        "a, b",
        [
            ("তাহার", "তার"),
            ("সেতাহার", "সে তাহার"),
            ("hello.", "hello"),
        ],
    )
    def test_different_keys(self, a, b):
        assert normalize_key(a) != normalize_key(b)

    def test_empty_and_none(self):
        assert normalize_key("") == ""
        assert normalize_key(None) == ""
        assert normalize_key("   \n ") == ""


class TestTokenize:
    def test_whitespace_runs(self):
        assert tokenize_words("  আমি  ভাত\nখাই\t ") == ["আমি", "ভাত", "খাই"]

    def test_empty(self):
        assert tokenize_words("") == []
        assert tokenize_words("   ") == []


class TestCleanDocumentText:
    def test_line_endings(self):
        assert clean_document_text("a\r\nb\rc\nd") == "a\nb\nc\nd"


class TestWholeWordHeuristic:
    def test_single_clean_word(self):
        assert is_whole_word_search("তাহার") is True
        assert is_whole_word_search("  তাহার ") is True

    @pytest.mark.parametrize("text", ["সে তাহার", "গেল।", "হ্যাঁ,", "কি?", "দারুণ!", "etc."])
    def test_phrases_and_punctuation(self, text):
        assert is_whole_word_search(text) is False
