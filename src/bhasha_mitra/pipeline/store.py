"""Current suggestion sets for one analysis run, with cross-category invalidation."""

from __future__ import annotations

import logging
from typing import Literal

from bhasha_mitra.document.sync import DocumentSync, ReplaceOutcome
from bhasha_mitra.models.suggestion import (
    AnalysisMeta,
    AnalysisStats,
    Category,
    ContentAnalysis,
    EuphonyImprovement,
    Message,
    PunctuationIssue,
    SpellingError,
    StyleMixingReport,
    StyleSuggestion,
    SuggestionBase,
    ToneSuggestion,
)
from bhasha_mitra.pipeline.normalizer import MainResult
from bhasha_mitra.utils.text import normalize_key

logger = logging.getLogger(__name__)

ViewFilter = Literal["all", "spelling", "punctuation"]

VIEW_FILTERS: dict[str, tuple[Category, ...]] = {
    "all": tuple(Category),
    "spelling": (Category.SPELLING,),
    "punctuation": (Category.PUNCTUATION,),
}

REPLACED_MESSAGE = "সংশোধিত হয়েছে ✓"
NOT_FOUND_MESSAGE = "শব্দটি ডকুমেন্টে খুঁজে পাওয়া যায়নি। লেখাটি হয়তো পরিবর্তিত হয়েছে।"


class SuggestionStore:
    """Holds the six category lists plus stats for the latest run.

    Each analysis task owns a disjoint slice and replaces it wholesale;
    afterwards items only ever leave the store, via replace or dismiss.
    """

    def __init__(self, sync: DocumentSync):
        self.sync = sync
        self.reset()

    def reset(self) -> None:
        self.spelling: list[SpellingError] = []
        self.tone: list[ToneSuggestion] = []
        self.style: list[StyleSuggestion] = []
        self.mixing: StyleMixingReport | None = None
        self.punctuation: list[PunctuationIssue] = []
        self.euphony: list[EuphonyImprovement] = []
        self.content: ContentAnalysis | None = None
        self.stats = AnalysisStats()
        self.meta: AnalysisMeta | None = None
        self.message: Message | None = None

    # --- slice setters -----------------------------------------------------

    def set_main(self, result: MainResult) -> None:
        self.spelling = list(result.spelling)
        self.punctuation = list(result.punctuation)
        self.euphony = list(result.euphony)
        self.mixing = result.mixing
        self.stats = result.stats
        self.meta = result.meta

    def set_tone(self, items: list[ToneSuggestion]) -> None:
        self.tone = list(items)

    def set_style(self, items: list[StyleSuggestion]) -> None:
        self.style = list(items)

    def set_content(self, content: ContentAnalysis | None) -> None:
        self.content = content

    # --- reads -------------------------------------------------------------

    def items(self, category: Category) -> list[SuggestionBase]:
        if category is Category.MIXING:
            return list(self.mixing.corrections) if self.mixing else []
        return list(getattr(self, category.value))

    @property
    def total_count(self) -> int:
        return sum(len(self.items(c)) for c in Category)

    @staticmethod
    def visible_categories(view_filter: ViewFilter = "all") -> tuple[Category, ...]:
        """Categories a view shows. Filtering never touches the stored lists."""
        try:
            return VIEW_FILTERS[view_filter]
        except KeyError:
            raise ValueError(f"Unknown view filter: {view_filter!r}") from None

    @classmethod
    def is_visible(cls, category: Category, view_filter: ViewFilter = "all") -> bool:
        return Category(category) in cls.visible_categories(view_filter)

    def snapshot(self, view_filter: ViewFilter = "all") -> dict:
        """Plain-dict view of the visible categories, stats and reports."""
        data: dict = {
            c.value: [i.model_dump(by_alias=True) for i in self.items(c)]
            for c in self.visible_categories(view_filter)
        }
        if view_filter == "all":
            data["mixingReport"] = (
                self.mixing.model_dump(by_alias=True, exclude={"corrections"}) if self.mixing else None
            )
            data["content"] = self.content.model_dump(by_alias=True) if self.content else None
        data["stats"] = self.stats.model_dump(by_alias=True)
        return data

    # --- removals ----------------------------------------------------------

    def _remove_matching(self, categories: tuple[Category, ...], text: str) -> int:
        target = normalize_key(text)
        removed = 0

        def keep(item: SuggestionBase) -> bool:
            return normalize_key(item.identity) != target

        for category in categories:
            if category is Category.MIXING:
                if self.mixing is None:
                    continue
                remaining = [c for c in self.mixing.corrections if keep(c)]
                removed += len(self.mixing.corrections) - len(remaining)
                self.mixing = (
                    self.mixing.model_copy(update={"corrections": remaining}) if remaining else None
                )
                continue
            current = getattr(self, category.value)
            remaining = [i for i in current if keep(i)]
            removed += len(current) - len(remaining)
            setattr(self, category.value, remaining)
        return removed

    async def replace(self, old_text: str, new_text: str) -> bool:
        """Apply a replacement in the document, then resolve every matching suggestion.

        The same fragment may have been flagged under several categories;
        accepting one replacement removes all of them. If the fragment is no
        longer in the document nothing is removed.
        """
        outcome = await self.sync.replace_first(old_text, new_text)
        if outcome is ReplaceOutcome.NOT_FOUND:
            logger.info("Replace target not found in document: %r", old_text)
            self.message = Message(NOT_FOUND_MESSAGE, "error")
            return False

        removed = self._remove_matching(tuple(Category), old_text)
        logger.debug("Replaced %r, resolved %d suggestion(s)", old_text, removed)
        self.message = Message(REPLACED_MESSAGE, "success")
        return True

    def dismiss(self, category: Category | str, text: str) -> int:
        """Drop suggestions in one category whose identity matches ``text``."""
        return self._remove_matching((Category(category),), text)
