"""Classified failures of a model service call."""

from __future__ import annotations


class ModelError(Exception):
    """Base class for model service failures."""

    retryable: bool = False


class AuthError(ModelError):
    """401/403 or missing credential. The user must fix the API key."""


class ClientError(ModelError):
    """Any other 4xx except 429: the request itself is malformed."""

    def __init__(self, status: int, body: str = ""):
        super().__init__(f"Client error ({status}): {body[:200]}")
        self.status = status
        self.body = body


class ServerBusyError(ModelError):
    """429 or 5xx."""

    retryable = True

    def __init__(self, status: int):
        super().__init__(f"Server error or rate limit (status {status})")
        self.status = status


class NetworkError(ModelError):
    """The request never completed."""

    retryable = True


class InvalidStructureError(ModelError):
    """Parsed JSON has none of the expected top-level keys."""

    retryable = True


class ParseError(ModelError):
    """Model text contained no parseable JSON object."""
