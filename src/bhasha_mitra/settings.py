"""Persisted user settings: model credential, model id and document type."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Callable

import yaml

from bhasha_mitra.clients.gemini_client import DEFAULT_MODEL

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path.home() / ".bhasha-mitra" / "settings.yaml"
DEFAULT_DOC_TYPE = "generic"


@dataclass(frozen=True)
class Settings:
    api_key: str = ""
    model: str = DEFAULT_MODEL
    doc_type: str = DEFAULT_DOC_TYPE


class SettingsStore:
    """YAML-backed settings, read once at construction and written only by save()."""

    def __init__(self, path: str | Path = DEFAULT_SETTINGS_PATH):
        self.path = Path(path)
        self._observers: list[Callable[[Settings], None]] = []
        self.current = self._load()

    def _load(self) -> Settings:
        if not self.path.exists():
            return Settings()
        raw = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
        known = {k: str(v) for k, v in raw.items() if k in Settings.__dataclass_fields__ and v is not None}
        return Settings(**known)

    def update(self, **changes) -> Settings:
        """Change the in-memory settings. Nothing is written until save()."""
        self.current = replace(self.current, **changes)
        return self.current

    def on_save(self, callback: Callable[[Settings], None]) -> None:
        self._observers.append(callback)

    def save(self) -> None:
        """Persist the current settings and notify observers."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            yaml.safe_dump(asdict(self.current), allow_unicode=True, sort_keys=False),
            encoding="utf-8",
        )
        logger.info("Settings saved to %s", self.path)
        for callback in self._observers:
            callback(self.current)
