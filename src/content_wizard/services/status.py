"""Availability of the services the wizard can call."""

from __future__ import annotations

import logging

from ..constants import ServicesStatusDict
from ..providers.config import WizardSettings, get_settings

_logger = logging.getLogger("content_wizard.status")


def get_wizard_services_status(settings: WizardSettings | None = None) -> ServicesStatusDict:
    """Report which services are usable with the current credentials.

    Keys keep their historical names: ``firecrawl`` is reference extraction
    (always available, no key) and ``tavily`` is web research (needs the
    planner LLM).
    """
    settings = settings or get_settings()
    llm = bool(settings.openrouter_api_key)
    status: ServicesStatusDict = {
        "llm": llm,
        "rag": True,
        "firecrawl": True,
        "tavily": llm,
        "apify": bool(settings.apify_api_token),
        "any": False,
    }
    status["any"] = any(value for key, value in status.items() if key != "any")
    _logger.debug(f"SERVICES_STATUS | {status}")
    return status
