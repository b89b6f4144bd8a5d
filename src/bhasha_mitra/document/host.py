"""Document host interface and an in-memory text implementation.

The host owns the live document. Callers only read, search, highlight and
replace through it. Mutations are queued and search results stay
unreadable until the next ``flush()``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


class DocumentHostError(Exception):
    """The host rejected an operation (stale handle, closed document, ...)."""


@dataclass(frozen=True)
class MatchHandle:
    """One search hit, valid until the next flushed mutation."""

    start: int
    end: int
    text: str
    revision: int


class _WholeDocument:
    def __repr__(self) -> str:
        return "WHOLE_DOCUMENT"


WHOLE_DOCUMENT = _WholeDocument()


class SearchResult:
    """Hits of one search; readable only once the host has been flushed."""

    def __init__(self, handles: list[MatchHandle]):
        self._handles = handles
        self.loaded = False

    @property
    def items(self) -> list[MatchHandle]:
        if not self.loaded:
            raise DocumentHostError("Search results are not available before flush()")
        return list(self._handles)


@runtime_checkable
class DocumentHost(Protocol):
    def get_selection_or_body_text(self) -> str: ...

    def search(self, pattern: str, *, match_case: bool, whole_word: bool) -> SearchResult: ...

    def set_highlight(self, target: MatchHandle | _WholeDocument, color: str | None) -> None: ...

    def replace_text(self, handle: MatchHandle, new_text: str) -> None: ...

    async def flush(self) -> None: ...


# Bengali block, ZWNJ and ZWJ count as word characters alongside \w so that
# vowel signs and conjunct joiners do not look like word boundaries.
_WORD_CHARS = r"\w\u0980-\u09FF\u200c\u200d"


class TextDocumentHost:
    """Plain-text document with per-character highlight colours."""

    def __init__(self, body: str = "", selection: tuple[int, int] | None = None):
        self._body = body
        self._colors: list[str | None] = [None] * len(body)
        self.selection = selection
        self.revision = 0
        self._pending: list[tuple] = []
        self._unloaded: list[SearchResult] = []
        self.search_count = 0
        self.flush_count = 0

    @property
    def body(self) -> str:
        return self._body

    def get_selection_or_body_text(self) -> str:
        if self.selection is not None:
            start, end = self.selection
            selected = self._body[start:end]
            if selected.strip():
                return selected
        return self._body

    def search(self, pattern: str, *, match_case: bool = False, whole_word: bool = False) -> SearchResult:
        self.search_count += 1
        handles: list[MatchHandle] = []
        if pattern:
            regex = re.escape(pattern)
            if whole_word:
                regex = rf"(?<![{_WORD_CHARS}]){regex}(?![{_WORD_CHARS}])"
            flags = 0 if match_case else re.IGNORECASE
            handles = [
                MatchHandle(m.start(), m.end(), m.group(0), self.revision)
                for m in re.finditer(regex, self._body, flags)
            ]
        result = SearchResult(handles)
        self._unloaded.append(result)
        return result

    def set_highlight(self, target, color: str | None) -> None:
        self._pending.append(("highlight", target, color))

    def replace_text(self, handle: MatchHandle, new_text: str) -> None:
        self._pending.append(("replace", handle, new_text))

    async def flush(self) -> None:
        """Apply queued operations in issue order and load pending search results."""
        self.flush_count += 1
        pending, self._pending = self._pending, []
        unloaded, self._unloaded = self._unloaded, []
        for result in unloaded:
            result.loaded = True
        for op, target, value in pending:
            if op == "highlight":
                self._apply_highlight(target, value)
            else:
                self._apply_replace(target, value)

    def _check(self, handle: MatchHandle) -> None:
        if handle.revision != self.revision:
            raise DocumentHostError(f"Stale match handle for {handle.text!r}")

    def _apply_highlight(self, target, color: str | None) -> None:
        if target is WHOLE_DOCUMENT:
            self._colors = [color] * len(self._body)
            return
        self._check(target)
        for i in range(target.start, target.end):
            self._colors[i] = color

    def _apply_replace(self, handle: MatchHandle, new_text: str) -> None:
        self._check(handle)
        self._body = self._body[: handle.start] + new_text + self._body[handle.end :]
        # New text takes over the formatting of the range it replaces
        color = self._colors[handle.start] if handle.end > handle.start else None
        self._colors[handle.start : handle.end] = [color] * len(new_text)
        self.revision += 1

    def highlighted(self) -> list[tuple[str, str]]:
        """Maximal runs of highlighted text as ``(text, color)`` pairs."""
        runs: list[tuple[str, str]] = []
        start = 0
        for i in range(1, len(self._body) + 1):
            if i == len(self._body) or self._colors[i] != self._colors[start]:
                if self._colors[start] is not None:
                    runs.append((self._body[start:i], self._colors[start]))
                start = i
        return runs

    def color_at(self, index: int) -> str | None:
        return self._colors[index]
