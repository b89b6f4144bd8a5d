"""Utility to extract JSON from model responses."""

from __future__ import annotations

import json
import logging
import re

logger = logging.getLogger(__name__)

_FENCED_BLOCK = re.compile(r"```[\w-]*[ \t]*\n?(.*?)(?:```|$)", re.DOTALL)
_CLOSER = {"{": "}", "[": "]"}


def extract_json(text: str | None) -> dict | list | None:
    """Extract JSON from a model response, handling prose and ```json blocks.

    Tries in order:
    1. Direct json.loads on the full text
    2. The body of the first fenced code block
    3. First '{' to last '}' (greedy)
    4. Closing a truncated object, as left by an output-token cutoff
    5. First '[' to last ']' (JSON array)

    Returns None when nothing parseable is found.
    """
    if not text or not text.strip():
        return None
    text = text.strip()

    candidates = [text]
    fenced = _FENCED_BLOCK.search(text)
    if fenced and fenced.group(1).strip():
        candidates.append(fenced.group(1).strip())
    for candidate in candidates:
        parsed = _loads(candidate)
        if parsed is not None:
            return parsed

    body = candidates[-1]
    parsed = _loads(_span(body, "{"))
    if parsed is not None:
        return parsed

    parsed = _close_truncated(body)
    if parsed is not None:
        logger.debug("Recovered truncated JSON payload")
        return parsed

    parsed = _loads(_span(body, "["))
    if parsed is not None:
        return parsed

    logger.warning("Could not extract JSON from model text: %s", text[:200])
    return None


def extract_text_from_response(data: dict | None) -> str:
    """Concatenate ``candidates[0].content.parts[].text`` in order, trimmed."""
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    first = candidates[0] if isinstance(candidates[0], dict) else {}
    parts = (first.get("content") or {}).get("parts")
    if not isinstance(parts, list):
        return ""
    return "".join(
        p.get("text") or "" for p in parts if isinstance(p, dict)
    ).strip()


def _loads(text: str | None):
    if not text:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return None


def _span(text: str, opener: str) -> str | None:
    start = text.find(opener)
    end = text.rfind(_CLOSER[opener])
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def _close_truncated(text: str) -> dict | None:
    """Close an object cut off mid-stream.

    Scans from the first '{' tracking open containers outside string
    literals. First tries closing everything at the end of the text (closing
    an unterminated string too). Failing that, cuts back to each earlier
    comma in turn, dropping the partial trailing element.
    """
    start = text.find("{")
    if start == -1:
        return None
    body = text[start:]

    stack: list[str] = []
    cuts: list[tuple[int, str]] = []
    in_string = escaped = False
    for i, ch in enumerate(body):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch in _CLOSER:
            stack.append(_CLOSER[ch])
        elif ch in "}]":
            if not stack or stack.pop() != ch:
                return None
        elif ch == ",":
            cuts.append((i, "".join(reversed(stack))))

    if not stack:
        return None

    tail = body.rstrip()
    if in_string:
        tail += '"'
    attempts = [tail.rstrip(",") + "".join(reversed(stack))]
    attempts += [body[:i] + closers for i, closers in reversed(cuts)]
    for attempt in attempts:
        parsed = _loads(attempt)
        if isinstance(parsed, dict):
            return parsed
    return None
