"""Tests for research synthesis with a mocked chat client."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from content_wizard.content.models import SearchResult, SearchSource
from content_wizard.providers.openrouter import NOT_CONFIGURED_MESSAGE, OpenRouterError
from content_wizard.research.search import run_research
from content_wizard.research.synthesizer import (
    MAX_RESEARCH_RESULTS,
    SynthesizedResearch,
    build_synthesizer_user_prompt,
    format_research_for_synthesizer,
    format_synthesized_research_for_prompt,
    synthesize_research,
)


@pytest.fixture
def results() -> list[SearchResult]:
    return [
        SearchResult(query="produtividade freelancer", sources=[
            SearchSource(title="Estudo", url="https://example.com/estudo", snippet="62% trabalham à noite"),
            SearchSource(title="Guia", url="https://example.com/guia", snippet="x" * 600),
        ]),
        SearchResult(query="lista de tarefas", sources=[]),
    ]


@pytest.fixture
def synthesis_payload() -> dict[str, Any]:
    return {
        "resumo_executivo": "Freelancers trabalham mais horas e entregam menos.",
        "narrative_suggestion": "Mostrar que cortar tarefas aumenta a renda.",
        "concrete_data": [
            {"dado": "62% trabalham à noite", "fonte": "Estudo", "uso_sugerido": "Abertura"},
            "solto",
        ],
        "real_examples": [{"example": "Ana cortou 3 clientes", "context": "Designer", "learning": "Menos é mais"}],
        "errors_risks": [{"erro": "Aceitar todo job", "consequencia": "Burnout", "como_evitar": None}],
        "frameworks_metodos": [{"nome": "Regra 3-1", "descricao": "Prioriza", "passos": "listar, cortar"}],
        "hooks": [{"gancho": "Sua lista te engana", "tipo": "confronto", "potencial_viral": 9}],
        "sources": ["https://example.com/estudo", 42],
    }


class TestSynthesizedResearch:

    def test_lenient_parsing(self, synthesis_payload):
        synthesized = SynthesizedResearch.model_validate(synthesis_payload)

        assert synthesized.summary.startswith("Freelancers")
        assert len(synthesized.concrete_data) == 1
        assert synthesized.real_examples[0].exemplo == "Ana cortou 3 clientes"
        assert synthesized.errors_risks[0].como_evitar == ""
        assert synthesized.frameworks_metodos[0].problema_que_resolve == "Prioriza"
        assert synthesized.frameworks_metodos[0].passos == ["listar", "cortar"]
        assert synthesized.hooks[0].potencial_viral == "9"
        assert synthesized.sources == ["https://example.com/estudo"]
        assert synthesized.is_empty is False

    def test_empty(self):
        synthesized = SynthesizedResearch.model_validate({"queries": ["foco"]})

        assert synthesized.is_empty is True
        assert format_synthesized_research_for_prompt(synthesized) == ""

    def test_prompt_sections(self, synthesis_payload):
        text = format_synthesized_research_for_prompt(
            SynthesizedResearch.model_validate(synthesis_payload)
        )

        assert text.startswith("## RESUMO DA PESQUISA\nFreelancers")
        assert "## DADOS CONCRETOS\n1. 62% trabalham à noite\n   Fonte: Estudo" in text
        assert "## EXEMPLOS REAIS\n1. Ana cortou 3 clientes" in text
        assert "   Passos: listar -> cortar" in text
        assert '## GANCHOS SUGERIDOS\n1. "Sua lista te engana"' in text


class TestPrompts:

    def test_research_blocks(self, results):
        text = format_research_for_synthesizer(results)

        assert text.startswith("[RESULTADO 1]\nQuery: produtividade freelancer\nTítulo: Estudo")
        assert "[RESULTADO 2]" in text
        assert "x" * 500 + "..." in text
        assert "lista de tarefas" not in text

    def test_research_blocks_are_capped(self):
        sources = [SearchSource(title=f"T{i}", url=f"https://e.com/{i}") for i in range(20)]

        text = format_research_for_synthesizer([SearchResult(query="q", sources=sources)])

        assert text.count("[RESULTADO") == MAX_RESEARCH_RESULTS

    def test_user_prompt(self):
        prompt = build_synthesizer_user_prompt(
            "Produtividade real", "PESQUISA", 2, target_audience="Freelancers",
            extracted_content="a" * 2500,
        )

        assert "Tema: Produtividade real" in prompt
        assert "Nicho: geral" in prompt
        assert "Objetivo: engajamento" in prompt
        assert "Público-alvo: Freelancers" in prompt
        assert "PESQUISA BRUTA (2 resultados):" in prompt
        assert "...(truncado, total: 2500 caracteres)" in prompt


class TestSynthesizeResearch:

    @pytest.mark.asyncio
    async def test_success(self, mock_chat_client, settings, results, synthesis_payload, as_json):
        mock_chat_client.chat.return_value = as_json(synthesis_payload)

        result = await synthesize_research(
            mock_chat_client, results, topic="Produtividade real", niche="Carreira", settings=settings
        )

        assert result.is_success()
        assert result.data.hooks[0].gancho == "Sua lista te engana"
        kwargs = mock_chat_client.chat.call_args.kwargs
        assert kwargs["json_mode"] is True
        assert kwargs["max_retries"] == 2
        assert kwargs["temperature"] == 0.3
        assert kwargs["model"] == "openai/gpt-4.1"
        user = mock_chat_client.chat.call_args.args[0][1]["content"]
        assert "Nicho: Carreira" in user

    @pytest.mark.asyncio
    async def test_synthesizer_model_setting(self, mock_chat_client, settings, results, as_json):
        mock_chat_client.chat.return_value = as_json({})
        settings.synthesizer_default_model = "openai/gpt-4.1-mini"

        await synthesize_research(mock_chat_client, results, topic="Foco", settings=settings)

        assert mock_chat_client.chat.call_args.kwargs["model"] == "openai/gpt-4.1-mini"

    @pytest.mark.asyncio
    async def test_no_results(self, mock_chat_client, settings):
        result = await synthesize_research(
            mock_chat_client, [SearchResult(query="q")], topic="Foco", settings=settings
        )

        assert result.error == "No research results provided for synthesis. Cannot proceed."
        mock_chat_client.chat.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_not_configured(self, mock_chat_client, settings, results):
        mock_chat_client.is_configured = False

        result = await synthesize_research(mock_chat_client, results, topic="Foco", settings=settings)

        assert result.error == NOT_CONFIGURED_MESSAGE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response, side_effect", [
        ("sem json", None),
        ('["lista"]', None),
        (None, OpenRouterError("503 Service Unavailable", status_code=503)),
    ])
    async def test_failures(self, mock_chat_client, settings, results, response, side_effect):
        mock_chat_client.chat.return_value = response
        mock_chat_client.chat.side_effect = side_effect

        result = await synthesize_research(mock_chat_client, results, topic="Foco", settings=settings)

        assert result.is_failure()
        assert result.error.startswith("Failed to synthesize research: ")


class TestRunResearchSynthesis:

    @pytest.fixture
    def searcher(self) -> MagicMock:
        searcher = MagicMock()
        searcher.parallel_search = AsyncMock(return_value=[
            SearchResult(query="foco", sources=[SearchSource(title="A", url="https://a.com")])
        ])
        return searcher

    @pytest.mark.asyncio
    async def test_synthesis_is_appended(self, mock_chat_client, searcher, synthesis_payload, as_json):
        mock_chat_client.chat.side_effect = ['{"queries": ["foco"]}', as_json(synthesis_payload)]

        result = await run_research(mock_chat_client, "Foco", searcher, extracted_content="Artigo")

        assert result.data.startswith("## foco\n- A (https://a.com)\n\n## RESUMO DA PESQUISA")
        synthesis_user = mock_chat_client.chat.call_args.args[0][1]["content"]
        assert "CONTEÚDO EXTRAÍDO DA URL:" in synthesis_user

    @pytest.mark.asyncio
    async def test_failed_synthesis_keeps_raw_research(self, mock_chat_client, searcher):
        mock_chat_client.chat.side_effect = ['{"queries": ["foco"]}', OpenRouterError("boom")]

        result = await run_research(mock_chat_client, "Foco", searcher)

        assert result.data == "## foco\n- A (https://a.com)"

    @pytest.mark.asyncio
    async def test_synthesis_can_be_disabled(self, mock_chat_client, searcher):
        mock_chat_client.chat.return_value = '{"queries": ["foco"]}'

        result = await run_research(mock_chat_client, "Foco", searcher, synthesize=False)

        assert result.data == "## foco\n- A (https://a.com)"
        assert mock_chat_client.chat.await_count == 1
