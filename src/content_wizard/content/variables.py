"""User personalization variables.

Variables (tone, niche, audience pains, forbidden terms...) are read from
a profile file and injected at the end of generation prompts.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from pydantic import Field

from .models import WizardModel

_logger = logging.getLogger("content_wizard.variables")

SEPARATOR = "═" * 39

VARIABLE_LABELS: dict[str, str] = {
    "tone": "Tom de Voz",
    "brandVoice": "Voz da Marca",
    "niche": "Nichos de Atuação",
    "targetAudience": "Público-Alvo",
    "audienceFears": "Medos e Dores",
    "audienceDesires": "Desejos e Aspirações",
    "negativeTerms": "Termos Proibidos",
    "differentiators": "Diferenciais",
    "contentGoals": "Objetivos do Conteúdo",
    "preferredCTAs": "CTAs Preferidos",
}


class UserVariables(WizardModel):
    """Personalization values; every field is optional free text."""

    tone: str | None = None
    brand_voice: str | None = Field(None, alias="brandVoice")
    niche: str | None = None
    target_audience: str | None = Field(None, alias="targetAudience")
    audience_fears: str | None = Field(None, alias="audienceFears")
    audience_desires: str | None = Field(None, alias="audienceDesires")
    negative_terms: str | None = Field(None, alias="negativeTerms")
    differentiators: str | None = None
    content_goals: str | None = Field(None, alias="contentGoals")
    preferred_ctas: str | None = Field(None, alias="preferredCTAs")

    def filled(self) -> dict[str, str]:
        """Non-blank values keyed by wire name, in label order."""
        values = self.model_dump(by_alias=True)
        return {
            key: values[key].strip()
            for key in VARIABLE_LABELS
            if isinstance(values.get(key), str) and values[key].strip()
        }


@dataclass
class FormattedVariables:
    """Prompt-ready rendering of user variables."""

    has_variables: bool
    context: str = ""
    negative_terms: list[str] = field(default_factory=list)


def load_user_variables(path: Path | None) -> UserVariables:
    """Load variables from a YAML or JSON profile file.

    A missing path or file yields empty variables.
    """
    if path is None or not path.exists():
        return UserVariables()

    with open(path, encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)

    # Profiles may nest the block under "variables"
    if isinstance(data, dict) and isinstance(data.get("variables"), dict):
        data = data["variables"]

    _logger.debug(f"Loaded user variables from {path}")
    return UserVariables.model_validate(data or {})


def get_negative_terms_array(variables: UserVariables) -> list[str]:
    """Comma-separated forbidden terms, trimmed and lowercased."""
    raw = variables.negative_terms or ""
    return [term.strip().lower() for term in raw.split(",") if term.strip()]


def format_variables_for_prompt(variables: UserVariables) -> FormattedVariables:
    """Render filled variables as a prompt block.

    Forbidden terms are returned separately and left out of the block.
    """
    filled = variables.filled()
    if not filled:
        return FormattedVariables(has_variables=False)

    lines = [
        SEPARATOR,
        "VARIÁVEIS DE PERSONALIZAÇÃO DO USUÁRIO",
        SEPARATOR,
        "",
        "Use as informações abaixo para personalizar o conteúdo:",
    ]
    for key, value in filled.items():
        if key == "negativeTerms":
            continue
        lines.append(f"• {VARIABLE_LABELS[key]}: {value}")
    lines.append("")
    lines.append(SEPARATOR)

    return FormattedVariables(
        has_variables=True,
        context="\n".join(lines),
        negative_terms=get_negative_terms_array(variables),
    )


def enhance_prompt_with_variables(prompt: str, variables: UserVariables) -> str:
    """Append the variables block to a prompt (unchanged when none are set)."""
    formatted = format_variables_for_prompt(variables)
    if not formatted.has_variables:
        return prompt
    return f"{prompt}\n\n{formatted.context}"


def check_for_negative_terms(text: str, variables: UserVariables) -> list[str]:
    """Forbidden terms that appear in text (case-insensitive substring match)."""
    lowered = text.lower()
    return [term for term in get_negative_terms_array(variables) if term in lowered]
