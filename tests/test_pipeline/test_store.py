"""Tests for SuggestionStore."""

import pytest

from bhasha_mitra.document.host import TextDocumentHost
from bhasha_mitra.models.suggestion import (
    AnalysisStats,
    Category,
    EuphonyImprovement,
    MixingCorrection,
    PunctuationIssue,
    SpellingError,
    StyleMixingReport,
    StyleSuggestion,
    ToneSuggestion,
)
from bhasha_mitra.pipeline.normalizer import MainResult, ResponseNormalizer
from bhasha_mitra.pipeline.store import NOT_FOUND_MESSAGE, SuggestionStore


BODY = "আমি কাল বাজারে গিয়েছিলাম। সে তাহার বাড়ি গেল।"


@pytest.fixture
def host() -> TextDocumentHost:
    return TextDocumentHost(BODY)


def _fill(store: SuggestionStore) -> None:
    store.set_main(
        MainResult(
            spelling=[SpellingError(wrong="বাজারে", suggestions=["বাজার"])],
            punctuation=[PunctuationIssue(current_sentence="সে তাহার বাড়ি গেল।", corrected_sentence="সে তার বাড়ি গেল।")],
            euphony=[EuphonyImprovement(current="গিয়েছিলাম", suggestions=["গেছিলাম"])],
            mixing=StyleMixingReport(
                detected=True,
                recommended_style="cholito",
                corrections=[
                    MixingCorrection(current="তাহার", suggestion="তার"),
                    MixingCorrection(current="গিয়েছিলাম", suggestion="গেছিলাম"),
                ],
            ),
            stats=AnalysisStats.compute(7, 1),
        )
    )
    store.set_tone([ToneSuggestion(current="তাহার", suggestion="তাঁর")])
    store.set_style([StyleSuggestion(current="গিয়েছিলাম", suggestion="গেছিলাম")])


class TestReplace:
    async def test_replace_removes_identity_from_every_category(self, store, host):
        _fill(store)

        ok = await store.replace("তাহার", "তাঁর")

        assert ok is True
        assert store.tone == []
        assert [c.current for c in store.mixing.corrections] == ["গিয়েছিলাম"]
        assert "তাঁর" in host.body
        # Punctuation identity is the whole sentence, which is a different key
        assert len(store.punctuation) == 1
        assert store.message.type == "success"

    async def test_replace_matches_normalized_identity(self, store):
        store.set_tone([ToneSuggestion(current="  তাহার\n", suggestion="তাঁর")])
        store.set_main(
            MainResult(
                mixing=StyleMixingReport(detected=True, corrections=[MixingCorrection(current="তাহার")])
            )
        )

        assert await store.replace("তাহার", "তার") is True
        assert store.tone == []
        assert store.mixing is None

    async def test_replace_clears_several_categories_sharing_a_fragment(self, store):
        _fill(store)

        await store.replace("গিয়েছিলাম", "গেছিলাম")

        assert store.euphony == []
        assert store.style == []
        assert [c.current for c in store.mixing.corrections] == ["তাহার"]
        assert len(store.spelling) == 1

    async def test_replace_not_found_leaves_store_untouched(self, store, host):
        _fill(store)
        before = store.snapshot()
        body_before = host.body

        ok = await store.replace("অনুপস্থিত", "কিছু")

        assert ok is False
        assert store.snapshot() == before
        assert host.body == body_before
        assert store.message.text == NOT_FOUND_MESSAGE
        assert store.message.type == "error"


class TestDismiss:
    def test_dismiss_only_touches_one_category(self, store):
        _fill(store)

        removed = store.dismiss(Category.TONE, "তাহার")

        assert removed == 1
        assert store.tone == []
        assert [c.current for c in store.mixing.corrections] == ["তাহার", "গিয়েছিলাম"]

    def test_dismiss_accepts_category_name_and_normalizes(self, store):
        _fill(store)
        assert store.dismiss("spelling", "  বাজারে ") == 1
        assert store.spelling == []

    def test_dismiss_last_mixing_correction_collapses_report(self, store):
        _fill(store)
        store.dismiss(Category.MIXING, "তাহার")
        store.dismiss(Category.MIXING, "গিয়েছিলাম")
        assert store.mixing is None

    def test_dismiss_unknown_text_is_noop(self, store):
        _fill(store)
        assert store.dismiss(Category.STYLE, "নেই") == 0
        assert len(store.style) == 1

    def test_dismiss_does_not_mutate_previous_lists(self, store):
        _fill(store)
        old_tone = store.tone
        store.dismiss(Category.TONE, "তাহার")
        assert len(old_tone) == 1


class TestResetAndViews:
    def test_reset(self, store):
        _fill(store)
        store.reset()
        assert store.total_count == 0
        assert store.mixing is None
        assert store.stats == AnalysisStats()

    def test_total_count(self, store):
        _fill(store)
        assert store.total_count == 7

    @pytest.mark.parametrize(
        "view, expected",
        [
            ("all", tuple(Category)),
            ("spelling", (Category.SPELLING,)),
            ("punctuation", (Category.PUNCTUATION,)),
        ],
    )
    def test_visible_categories(self, store, view, expected):
        assert store.visible_categories(view) == expected

    def test_is_visible(self, store):
        assert store.is_visible(Category.TONE, "all")
        assert not store.is_visible(Category.TONE, "spelling")
        assert store.is_visible("punctuation", "punctuation")

    def test_unknown_view(self, store):
        with pytest.raises(ValueError, match="view filter"):
            store.visible_categories("tone")

    def test_snapshot_view_does_not_mutate_store(self, store):
        _fill(store)
        snap = store.snapshot("spelling")
        assert set(snap) == {"spelling", "stats"}
        assert store.total_count == 7

    def test_set_main_from_normalizer(self, store, main_payload, sample_text):
        store.set_main(ResponseNormalizer().normalize_main(main_payload, sample_text))
        assert store.stats.total_words == 8
        assert store.items(Category.MIXING)[0].current == "তাহার"
