"""Tests for settings and YAML configuration."""

from __future__ import annotations

from pathlib import Path

from content_wizard.providers.config import (
    FALLBACK_MODEL,
    WizardConfig,
    WizardSettings,
    load_wizard_config,
)


class TestWizardSettings:

    def test_default_model_order(self):
        assert WizardSettings(_env_file=None, wizard_default_model="a", default_text_model="b").default_model == "a"
        assert WizardSettings(_env_file=None, wizard_default_model=None, default_text_model="b").default_model == "b"
        assert WizardSettings(
            _env_file=None, wizard_default_model=None, default_text_model=None
        ).default_model == FALLBACK_MODEL

    def test_blank_values_are_none(self):
        settings = WizardSettings(_env_file=None, openrouter_api_key="  ", apify_api_token="")

        assert settings.openrouter_api_key is None
        assert settings.apify_api_token is None


class TestWizardConfig:

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_wizard_config(tmp_path / "missing.yaml")

        assert config == WizardConfig()
        assert "openai/gpt-4.1" in config.available_models

    def test_task_overrides(self, tmp_path):
        path = tmp_path / "wizard.yaml"
        path.write_text(
            "task_overrides:\n"
            "  narratives:\n"
            "    model: anthropic/claude-sonnet-4.5\n"
            "    temperature: 0.9\n",
            encoding="utf-8",
        )

        config = load_wizard_config(path)

        assert config.model_for("narratives", "x") == "anthropic/claude-sonnet-4.5"
        assert config.temperature_for("narratives", 0.7) == 0.9
        assert config.max_tokens_for("narratives", None) is None
        assert config.model_for("content_text", "x") == "x"

    def test_project_config_parses(self):
        path = Path(__file__).parent.parent.parent / "config" / "wizard.yaml"

        config = load_wizard_config(path)

        assert config.temperature_for("video_titles", 0.5) == 0.8
        assert config.max_tokens_for("youtube_seo", None) == 4000
