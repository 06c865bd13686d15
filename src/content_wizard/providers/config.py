"""Wizard configuration loading and validation."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file
load_dotenv()

FALLBACK_MODEL = "openai/gpt-4.1"


class WizardSettings(BaseSettings):
    """Credentials and paths read from the environment."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    openrouter_api_key: str | None = None
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    openrouter_app_url: str = "https://maquina-deconteudo.com"
    openrouter_app_name: str = "contentMachine"

    apify_api_token: str | None = None
    firecrawl_api_key: str | None = None
    tavily_api_key: str | None = None

    wizard_default_model: str | None = None
    default_text_model: str | None = None
    synthesizer_default_model: str | None = None

    knowledge_dir: Path = Path("knowledge")
    wizards_dir: Path = Path("wizards")
    profile_file: Path | None = None

    @field_validator(
        "openrouter_api_key",
        "apify_api_token",
        "firecrawl_api_key",
        "tavily_api_key",
        "wizard_default_model",
        "default_text_model",
        "synthesizer_default_model",
        mode="before",
    )
    @classmethod
    def _blank_as_none(cls, value: str | None) -> str | None:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def default_model(self) -> str:
        """Model used when a caller does not pick one."""
        return self.wizard_default_model or self.default_text_model or FALLBACK_MODEL


class TaskOverride(BaseModel):
    """Task-specific model override."""

    model: str | None = None
    temperature: float | None = None
    max_tokens: int | None = None


class WizardConfig(BaseModel):
    """Optional YAML configuration (config/wizard.yaml)."""

    available_models: list[str] = Field(default_factory=lambda: [
        "openai/gpt-4.1",
        "openai/gpt-4.1-mini",
        "anthropic/claude-sonnet-4.5",
        "anthropic/claude-opus-4.5",
        "google/gemini-3-pro-preview",
    ])
    task_overrides: dict[str, TaskOverride] = Field(default_factory=dict)

    def model_for(self, task: str, default: str) -> str:
        """Get the configured model for a task, or the default."""
        override = self.task_overrides.get(task)
        if override and override.model:
            return override.model
        return default

    def temperature_for(self, task: str, default: float) -> float:
        """Get the configured temperature for a task, or the default."""
        override = self.task_overrides.get(task)
        if override and override.temperature is not None:
            return override.temperature
        return default

    def max_tokens_for(self, task: str, default: int | None) -> int | None:
        """Get the configured token ceiling for a task, or the default."""
        override = self.task_overrides.get(task)
        if override and override.max_tokens is not None:
            return override.max_tokens
        return default


def load_wizard_config(config_path: Path | None = None) -> WizardConfig:
    """Load wizard configuration from YAML file."""
    if config_path is None:
        # Default to config/wizard.yaml relative to project root
        config_path = Path(__file__).parent.parent.parent.parent / "config" / "wizard.yaml"

    if not config_path.exists():
        # Return default config if file doesn't exist
        return WizardConfig()

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return WizardConfig(**data)


@lru_cache(maxsize=1)
def get_settings() -> WizardSettings:
    """Get process-wide settings (cached; call cache_clear() after env changes)."""
    return WizardSettings()


@lru_cache(maxsize=1)
def get_wizard_config() -> WizardConfig:
    """Get process-wide YAML configuration (cached)."""
    return load_wizard_config()
