"""Tests for config loading."""

import pytest

from bhasha_mitra.config import AppConfig, LLMConfig, PipelineConfig, load_config


class TestConfig:
    def test_defaults(self):
        config = AppConfig()
        assert config.llm.model == "gemini-2.5-flash"
        assert config.llm.max_retries == 1
        assert config.llm.retry_on_parse_failure is False
        assert config.pipeline.stagger_offsets == (0.0, 0.3, 0.6, 0.9)
        assert config.pipeline.highlight_chunk_size == 20
        assert config.thresholds.style == 0.9

    def test_load_config_defaults(self, tmp_path):
        """Loading from non-existent path returns defaults."""
        config = load_config(tmp_path / "nonexistent.yaml")
        assert config.llm.model == "gemini-2.5-flash"
        assert config.thresholds.as_dict()["punctuation"] == 0.75

    def test_load_config_from_yaml(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text(
            "llm:\n  model: test-model\n  max_retries: 2\n"
            "thresholds:\n  euphony: 0.5\n"
            "pipeline:\n  stagger_offsets: [0, 0, 0, 0]\n"
        )
        config = load_config(yaml_path)
        assert config.llm.model == "test-model"
        assert config.llm.max_retries == 2
        assert config.thresholds.euphony == 0.5
        assert config.pipeline.stagger_offsets == (0, 0, 0, 0)
        # Defaults for unspecified
        assert config.thresholds.spelling == 0.8
        assert config.pipeline.hover_debounce == 0.3

    def test_empty_yaml(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text("")
        assert load_config(yaml_path) == AppConfig()

    def test_frozen_config(self):
        config = LLMConfig()
        with pytest.raises(AttributeError):
            config.model = "changed"

    def test_stagger_list_becomes_tuple(self):
        assert PipelineConfig(stagger_offsets=[0, 1, 2, 3]).stagger_offsets == (0, 1, 2, 3)
