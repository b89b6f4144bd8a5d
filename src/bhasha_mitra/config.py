"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from bhasha_mitra.clients.gemini_client import (
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    RETRY_ON_PARSE_FAILURE,
)


@dataclass(frozen=True)
class LLMConfig:
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    max_retries: int = 1
    backoff_base: float = 1.0  # seconds; doubles on every retry
    timeout: int = 60
    retry_on_parse_failure: bool = RETRY_ON_PARSE_FAILURE

    def __post_init__(self):
        if not 0 <= self.max_retries <= 10:
            raise ValueError(f"max_retries must be between 0 and 10, got {self.max_retries}")
        if self.backoff_base < 0:
            raise ValueError(f"backoff_base must be >= 0, got {self.backoff_base}")
        if self.timeout < 1:
            raise ValueError(f"timeout must be >= 1, got {self.timeout}")


@dataclass(frozen=True)
class ThresholdConfig:
    spelling: float = 0.8
    punctuation: float = 0.75
    euphony: float = 0.7
    tone: float = 0.8
    style: float = 0.9
    mixing: float = 0.85

    def __post_init__(self):
        for name, value in self.as_dict().items():
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"threshold {name} must be within [0, 1], got {value}")

    def as_dict(self) -> dict[str, float]:
        return {
            "spelling": self.spelling,
            "punctuation": self.punctuation,
            "euphony": self.euphony,
            "tone": self.tone,
            "style": self.style,
            "mixing": self.mixing,
        }


@dataclass(frozen=True)
class PipelineConfig:
    # Start offsets (seconds) of the main, tone, style and content tasks
    stagger_offsets: tuple[float, ...] = (0.0, 0.3, 0.6, 0.9)
    highlight_chunk_size: int = 20
    hover_debounce: float = 0.3

    def __post_init__(self):
        # YAML gives lists
        object.__setattr__(self, "stagger_offsets", tuple(self.stagger_offsets))
        if len(self.stagger_offsets) != 4:
            raise ValueError(
                f"stagger_offsets needs 4 values (main, tone, style, content), got {len(self.stagger_offsets)}"
            )
        if any(o < 0 for o in self.stagger_offsets):
            raise ValueError("stagger_offsets must be non-negative")
        if self.highlight_chunk_size < 1:
            raise ValueError(f"highlight_chunk_size must be >= 1, got {self.highlight_chunk_size}")
        if self.hover_debounce < 0:
            raise ValueError(f"hover_debounce must be >= 0, got {self.hover_debounce}")


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        thresholds=ThresholdConfig(**raw.get("thresholds", {})),
        pipeline=PipelineConfig(**raw.get("pipeline", {})),
    )
