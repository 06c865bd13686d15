"""LLM provider and configuration layer."""

from .config import (
    TaskOverride,
    WizardConfig,
    WizardSettings,
    get_settings,
    get_wizard_config,
    load_wizard_config,
)
from .openrouter import (
    OpenRouterClient,
    OpenRouterEmptyResponseError,
    OpenRouterError,
    OpenRouterNotConfiguredError,
    get_openrouter_client,
)

__all__ = [
    "TaskOverride",
    "WizardConfig",
    "WizardSettings",
    "get_settings",
    "get_wizard_config",
    "load_wizard_config",
    "OpenRouterClient",
    "OpenRouterEmptyResponseError",
    "OpenRouterError",
    "OpenRouterNotConfiguredError",
    "get_openrouter_client",
]
