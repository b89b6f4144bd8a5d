"""Search, highlight and replace against the document host.

Every operation ends with an explicit ``flush()`` before its result is
trusted. Host calls are issued one after another; do not fan them out
concurrently.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from bhasha_mitra.document.host import (
    WHOLE_DOCUMENT,
    DocumentHost,
    DocumentHostError,
    MatchHandle,
    SearchResult,
)
from bhasha_mitra.models.suggestion import HighlightItem
from bhasha_mitra.utils.text import clean_document_text, is_whole_word_search

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 20


class ReplaceOutcome(Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"


@dataclass
class HighlightResult:
    matches: int = 0
    ok: bool = True


@dataclass
class BatchResult:
    searched: int = 0
    matches: int = 0
    ok: bool = True


class DocumentSync:
    """Serialized access to a DocumentHost."""

    def __init__(self, host: DocumentHost, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.host = host
        self.chunk_size = chunk_size

    async def read_active_text(self) -> str:
        """Selected text if any, else the whole body, with ``\\n`` line endings."""
        try:
            text = self.host.get_selection_or_body_text()
            await self.host.flush()
        except DocumentHostError:
            logger.error("Reading document text failed", exc_info=True)
            return ""
        return clean_document_text(text or "")

    def _search(self, text: str) -> SearchResult | None:
        clean = text.strip()
        if not clean:
            return None
        return self.host.search(clean, match_case=False, whole_word=is_whole_word_search(clean))

    async def search_all(self, text: str) -> list[MatchHandle]:
        try:
            result = self._search(text)
            await self.host.flush()
            return result.items if result is not None else []
        except DocumentHostError:
            logger.error("Search for %r failed", text, exc_info=True)
            return []

    async def highlight(self, text: str, color: str) -> HighlightResult:
        """Highlight every occurrence of ``text``, not only the hinted one."""
        try:
            handles = await self.search_all(text)
            for handle in handles:
                self.host.set_highlight(handle, color)
            await self.host.flush()
        except DocumentHostError:
            logger.error("Highlight of %r failed", text, exc_info=True)
            return HighlightResult(ok=False)
        return HighlightResult(matches=len(handles))

    async def highlight_batch(self, items: Iterable[HighlightItem]) -> BatchResult:
        """Highlight many fragments, de-duplicated and processed in chunks.

        Each chunk issues its searches, flushes once, then queues its
        highlights; the next chunk's flush (or the final one) commits them.
        """
        unique = list(dict.fromkeys(items))
        result = BatchResult()
        if not unique:
            return result

        try:
            for i in range(0, len(unique), self.chunk_size):
                chunk = unique[i : i + self.chunk_size]
                found: list[tuple[HighlightItem, SearchResult]] = []
                for item in chunk:
                    if not item.text.strip():
                        continue
                    found.append((item, self._search(item.text)))
                    result.searched += 1
                await self.host.flush()

                for item, search in found:
                    handles = search.items
                    for handle in handles:
                        self.host.set_highlight(handle, item.color)
                    result.matches += len(handles)
            await self.host.flush()
        except DocumentHostError:
            logger.error("Batch highlight failed", exc_info=True)
            result.ok = False

        logger.debug(
            "Batch highlight: %d unique items, %d searched, %d matches",
            len(unique), result.searched, result.matches,
        )
        return result

    async def replace_first(self, old_text: str, new_text: str) -> ReplaceOutcome:
        """Replace the first occurrence of ``old_text`` and clear its highlight."""
        if not old_text.strip():
            return ReplaceOutcome.NOT_FOUND
        try:
            handles = await self.search_all(old_text)
            if not handles:
                return ReplaceOutcome.NOT_FOUND
            self.host.set_highlight(handles[0], None)
            self.host.replace_text(handles[0], new_text)
            await self.host.flush()
        except DocumentHostError:
            logger.error("Replace of %r failed", old_text, exc_info=True)
            return ReplaceOutcome.NOT_FOUND
        return ReplaceOutcome.FOUND

    async def clear_all_highlights(self) -> bool:
        try:
            self.host.set_highlight(WHOLE_DOCUMENT, None)
            await self.host.flush()
        except DocumentHostError:
            logger.error("Clearing highlights failed", exc_info=True)
            return False
        return True


class HighlightDebouncer:
    """Owns the single pending hover-highlight task.

    Scheduling a new highlight cancels the previous one if it has not
    fired yet, so only the most recent hover is applied.
    """

    def __init__(self, sync: DocumentSync, delay: float = 0.3):
        self.sync = sync
        self.delay = delay
        self._task: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def schedule(self, text: str, color: str) -> asyncio.Task:
        self.cancel()
        self._task = asyncio.create_task(self._fire(text, color))
        return self._task

    async def _fire(self, text: str, color: str) -> HighlightResult:
        await asyncio.sleep(self.delay)
        return await self.sync.highlight(text, color)

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def wait(self) -> HighlightResult | None:
        """Wait for the pending highlight, if any, and return its result."""
        if self._task is None:
            return None
        return await self._task
