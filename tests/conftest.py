"""Shared test fixtures and configuration.

Provides mocks and fixtures for testing the content wizard components.
All fixtures follow the pattern of returning async-compatible mocks that
can be used with the async/await syntax.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest

from content_wizard.content.models import NarrativeOption
from content_wizard.providers.config import WizardConfig, WizardSettings


def words(count: int, word: str = "palavra") -> str:
    """Text with exactly ``count`` whitespace-separated words."""
    return " ".join([word] * count)


@pytest.fixture
def settings(tmp_path: Path) -> WizardSettings:
    """Settings with a fake OpenRouter key and temporary directories."""
    return WizardSettings(
        _env_file=None,
        openrouter_api_key="test-key",
        apify_api_token=None,
        wizard_default_model="openai/gpt-4.1",
        knowledge_dir=tmp_path / "knowledge",
        wizards_dir=tmp_path / "wizards",
        profile_file=None,
    )


@pytest.fixture
def wizard_config() -> WizardConfig:
    """Configuration without task overrides."""
    return WizardConfig()


@pytest.fixture
def mock_chat_client() -> AsyncMock:
    """Create a mock chat client.

    Returns:
        AsyncMock with ``chat`` and ``is_configured`` like OpenRouterClient.
    """
    client = AsyncMock()
    client.is_configured = True
    client.chat.return_value = "{}"
    return client


@pytest.fixture
def valid_carousel() -> dict[str, Any]:
    """A carousel response that satisfies every contract limit."""
    return {
        "throughline": "Produtividade real nasce de menos tarefas, não de mais horas",
        "valor_central": "Como cortar metade da lista sem perder resultado",
        "capa": {"titulo": "Sua lista te engana", "subtitulo": "E o problema não é disciplina"},
        "slides": [
            {
                "numero": 1,
                "tipo": "problema",
                "titulo": "Lista longa, dia curto",
                "corpo": "Você termina o dia cansado e com a sensação de que nada importante andou.",
                "conexao_proximo": "E isso tem explicação.",
            },
            {
                "numero": 2,
                "tipo": "conceito",
                "titulo": "Tarefa não é prioridade",
                "corpo": "Prioridade é o que muda o resultado. O resto é manutenção.",
                "conexao_proximo": "Então como separar?",
            },
            {
                "numero": 3,
                "tipo": "cta",
                "titulo": "Corte três itens hoje",
                "corpo": "Comenta QUERO que eu te mando o método completo.",
                "conexao_proximo": "",
            },
        ],
        "legenda": words(250),
        "hashtags": ["#produtividade", "#foco"],
    }


@pytest.fixture
def narratives_payload() -> dict[str, Any]:
    """LLM response with one narrative per tribal angle."""
    return {
        "narratives": [
            {
                "id": f"narrative-{index}",
                "title": f"Narrativa {angle}",
                "description": f"Descrição do ângulo {angle}",
                "angle": angle,
                "hook": f"Hook {angle}",
                "core_belief": "Menos é mais",
                "status_quo_challenged": "Trabalhar mais horas",
            }
            for index, angle in enumerate(
                ["herege", "visionario", "tradutor", "testemunha"], start=1
            )
        ]
    }


@pytest.fixture
def narrative() -> NarrativeOption:
    return NarrativeOption(
        id="narrative-3",
        title="O método das três perguntas",
        description="Transforma priorização em um checklist simples",
        angle="tradutor",
        hook="Três perguntas antes de qualquer tarefa",
    )


@pytest.fixture
def as_json():
    """Serialize a payload the way an LLM returns it."""

    def _dump(payload: Any) -> str:
        return json.dumps(payload, ensure_ascii=False)

    return _dump


@pytest.fixture
def mock_progress_callback() -> AsyncMock:
    """Create a mock progress callback.

    Returns:
        AsyncMock that records all progress updates.
    """
    callback = AsyncMock()
    callback.updates = []

    async def record_update(progress):
        callback.updates.append(progress)

    callback.side_effect = record_update
    return callback
