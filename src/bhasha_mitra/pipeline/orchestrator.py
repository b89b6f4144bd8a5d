"""Runs the category analyses concurrently and merges their highlights."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Callable

from bhasha_mitra.clients.errors import AuthError, ModelError, NetworkError, ServerBusyError
from bhasha_mitra.clients.gemini_client import GeminiClient
from bhasha_mitra.document.sync import BatchResult, DocumentSync, HighlightDebouncer
from bhasha_mitra.models.suggestion import (
    HighlightItem,
    Message,
    SpellingError,
    StyleSuggestion,
    SuggestionBase,
    ToneSuggestion,
)
from bhasha_mitra.pipeline.normalizer import ResponseNormalizer
from bhasha_mitra.pipeline.prompts import (
    build_content_prompt,
    build_main_prompt,
    build_style_prompt,
    build_tone_prompt,
)
from bhasha_mitra.pipeline.store import SuggestionStore
from bhasha_mitra.settings import Settings

logger = logging.getLogger(__name__)

# Start offsets (seconds) for the main, tone, style and content tasks.
STAGGER_OFFSETS: tuple[float, float, float, float] = (0.0, 0.3, 0.6, 0.9)

TEMPERATURES = {"main": 0.1, "tone": 0.2, "style": 0.2, "content": 0.4}

DONE_MESSAGE = "বিশ্লেষণ সম্পন্ন হয়েছে ✓"
NO_KEY_MESSAGE = "অনুগ্রহ করে প্রথমে API Key দিন"
NO_TEXT_MESSAGE = "টেক্সট নির্বাচন করুন বা কার্সার রাখুন"
AUTH_MESSAGE = "API Key বা অনুমতি (permission) সংক্রান্ত সমস্যা হয়েছে। সেটিংস চেক করুন।"
NETWORK_MESSAGE = "সার্ভার রেসপন্স করেনি। ইন্টারনেট সংযোগ চেক করুন।"
BUSY_MESSAGE = "সার্ভার ব্যস্ত। কিছুক্ষণ পর আবার চেষ্টা করুন।"
GENERIC_ERROR_MESSAGE = "ত্রুটি হয়েছে। আবার চেষ্টা করুন।"


@dataclass
class AnalysisSelection:
    tone: str = ""  # empty: no tone target
    style: str = "none"  # "none" | "sadhu" | "cholito"


@dataclass
class AnalysisRunResult:
    errors: dict[str, BaseException] = field(default_factory=dict)
    highlight: BatchResult | None = None
    elapsed_seconds: float = 0.0
    message: Message | None = None

    @property
    def ok(self) -> bool:
        return not self.errors


def error_message(exc: BaseException) -> str:
    """User-facing text for a failed category task."""
    if isinstance(exc, AuthError):
        return AUTH_MESSAGE
    if isinstance(exc, NetworkError):
        return NETWORK_MESSAGE
    if isinstance(exc, ServerBusyError):
        return BUSY_MESSAGE
    if isinstance(exc, ModelError):
        return f"{GENERIC_ERROR_MESSAGE} ({exc})"
    return GENERIC_ERROR_MESSAGE


class AnalysisOrchestrator:
    """Coordinates the main, tone, style and content analyses for one document."""

    def __init__(
        self,
        client: GeminiClient,
        store: SuggestionStore,
        sync: DocumentSync,
        settings: Settings,
        *,
        normalizer: ResponseNormalizer | None = None,
        stagger_offsets: tuple[float, ...] = STAGGER_OFFSETS,
        max_retries: int | None = None,
        hover_delay: float = 0.3,
        sleep: Callable = asyncio.sleep,
    ):
        self.client = client
        self.store = store
        self.sync = sync
        self.settings = settings
        self.normalizer = normalizer or ResponseNormalizer()
        self.stagger_offsets = tuple(stagger_offsets)
        self.max_retries = max_retries
        self.debouncer = HighlightDebouncer(sync, delay=hover_delay)
        self._sleep = sleep
        self._run_id = 0

    async def check(
        self,
        selection: AnalysisSelection | None = None,
        *,
        on_phase: Callable[[str, str], None] | None = None,
    ) -> AnalysisRunResult:
        """Read the active text from the document and analyze it."""
        if not self.settings.api_key:
            return AnalysisRunResult(message=Message(NO_KEY_MESSAGE, "error"))
        text = await self.sync.read_active_text()
        if not text.strip():
            return AnalysisRunResult(message=Message(NO_TEXT_MESSAGE, "error"))
        return await self.run_analysis(text, selection or AnalysisSelection(), on_phase=on_phase)

    async def run_analysis(
        self,
        text: str,
        selection: AnalysisSelection,
        *,
        on_phase: Callable[[str, str], None] | None = None,
    ) -> AnalysisRunResult:
        """Run every selected category analysis against ``text``.

        Args:
            text: Text to analyze.
            selection: Tone and style targets; empty tone or style "none"
                skips that analysis.
            on_phase: Optional callback(phase_name, detail) for progress.
        """
        start = time.monotonic()
        self._run_id += 1
        run_id = self._run_id

        def _notify(phase: str, detail: str = "") -> None:
            if on_phase:
                on_phase(phase, detail)

        self.store.reset()
        await self.sync.clear_all_highlights()
        _notify("start", "বিশ্লেষণ করা হচ্ছে...")

        names = ("main", "tone", "style", "content")
        tasks = [
            self._staggered(self.stagger_offsets[0], self._run_main(text, run_id)),
            self._staggered(self.stagger_offsets[1], self._run_tone(text, selection.tone, run_id))
            if selection.tone
            else _empty(),
            self._staggered(self.stagger_offsets[2], self._run_style(text, selection.style, run_id))
            if selection.style and selection.style != "none"
            else _empty(),
            self._staggered(self.stagger_offsets[3], self._run_content(text, run_id)),
        ]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        result = AnalysisRunResult()
        highlight_items: list[HighlightItem] = []
        for name, outcome in zip(names, outcomes):
            if isinstance(outcome, asyncio.CancelledError):
                raise outcome
            if isinstance(outcome, BaseException):
                logger.error("%s analysis failed: %s", name, outcome)
                result.errors[name] = outcome
                continue
            if name != "content":
                highlight_items.extend(_highlight_items(outcome))

        if run_id != self._run_id:
            logger.info("Discarding results of superseded run %d", run_id)
            result.elapsed_seconds = time.monotonic() - start
            return result

        if highlight_items:
            _notify("highlight", "হাইলাইট করা হচ্ছে...")
            result.highlight = await self.sync.highlight_batch(highlight_items)

        if result.errors:
            first = next(iter(result.errors.values()))
            result.message = Message(error_message(first), "error")
        else:
            result.message = Message(DONE_MESSAGE, "success")

        result.elapsed_seconds = time.monotonic() - start
        _notify("done", f"{self.store.total_count} suggestions, {result.elapsed_seconds:.1f}s")
        return result

    async def _staggered(self, delay: float, coro):
        if delay > 0:
            await self._sleep(delay)
        return await coro

    async def _call(self, prompt: str, temperature: float) -> dict | None:
        return await self.client.analyze(
            prompt,
            api_key=self.settings.api_key or None,
            model=self.settings.model or None,
            temperature=temperature,
            max_retries=self.max_retries,
        )

    async def _run_main(self, text: str, run_id: int) -> list[SpellingError]:
        payload = await self._call(build_main_prompt(text, self.settings.doc_type), TEMPERATURES["main"])
        if payload is None or run_id != self._run_id:
            return []
        result = self.normalizer.normalize_main(payload, text)
        self.store.set_main(result)
        return result.spelling

    async def _run_tone(self, text: str, tone: str, run_id: int) -> list[ToneSuggestion]:
        payload = await self._call(build_tone_prompt(text, tone), TEMPERATURES["tone"])
        if payload is None or run_id != self._run_id:
            return []
        items = self.normalizer.normalize_tone(payload)
        self.store.set_tone(items)
        return items

    async def _run_style(self, text: str, style: str, run_id: int) -> list[StyleSuggestion]:
        payload = await self._call(build_style_prompt(text, style), TEMPERATURES["style"])
        if payload is None or run_id != self._run_id:
            return []
        items = self.normalizer.normalize_style(payload)
        self.store.set_style(items)
        return items

    async def _run_content(self, text: str, run_id: int) -> None:
        payload = await self._call(build_content_prompt(text, self.settings.doc_type), TEMPERATURES["content"])
        if payload is None or run_id != self._run_id:
            return None
        self.store.set_content(self.normalizer.normalize_content(payload))
        return None

    def hover(self, item: SuggestionBase) -> asyncio.Task:
        """Debounced highlight of one suggestion's text."""
        return self.debouncer.schedule(item.identity, item.highlight_color)

    async def accept(self, item: SuggestionBase, replacement: str) -> bool:
        """Apply ``replacement`` for ``item`` and resolve every matching suggestion."""
        return await self.store.replace(item.identity, replacement)


async def _empty() -> list:
    return []


def _highlight_items(items) -> list[HighlightItem]:
    return [HighlightItem(i.identity, i.highlight_color, i.position) for i in items or []]
