"""Text helpers shared by the normalizer, the store and document sync."""

from __future__ import annotations

import re

_WHITESPACE_RUN = re.compile(r"\s+")
# Whitespace, period, comma, Bengali danda, question and exclamation marks.
_FREE_SUBSTRING_CHARS = re.compile(r"[\s.,।?!]")


def normalize_key(text: str | None) -> str:
    """Identity key used to match suggestions across categories.

    Trims, collapses whitespace and line-break runs to a single space,
    and case-folds. Two strings target the same fragment iff their keys
    are equal.
    """
    if not text:
        return ""
    return _WHITESPACE_RUN.sub(" ", text.strip()).casefold()


def clean_document_text(text: str) -> str:
    """Normalize host line endings to ``\\n``."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def tokenize_words(text: str) -> list[str]:
    """Split on any whitespace run, dropping empty tokens."""
    return [t for t in _WHITESPACE_RUN.split(text) if t]


def is_whole_word_search(text: str) -> bool:
    """Whether a search for ``text`` should enforce whole-word matching.

    Multi-word phrases and punctuation-bearing fragments are matched as
    free substrings; single clean words are matched as whole tokens.
    """
    return not _FREE_SUBSTRING_CHARS.search(text.strip())
