"""Document host interface and serialized sync layer."""
from bhasha_mitra.document.host import (
    WHOLE_DOCUMENT,
    DocumentHost,
    DocumentHostError,
    MatchHandle,
    SearchResult,
    TextDocumentHost,
)
from bhasha_mitra.document.sync import (
    BatchResult,
    DocumentSync,
    HighlightDebouncer,
    HighlightResult,
    ReplaceOutcome,
)

__all__ = [
    "WHOLE_DOCUMENT",
    "BatchResult",
    "DocumentHost",
    "DocumentHostError",
    "DocumentSync",
    "HighlightDebouncer",
    "HighlightResult",
    "MatchHandle",
    "ReplaceOutcome",
    "SearchResult",
    "TextDocumentHost",
]
