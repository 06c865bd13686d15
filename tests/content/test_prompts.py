"""Tests for the content prompt builders and JSON extraction."""

from __future__ import annotations

import pytest

from content_wizard.constants import ContentType, NarrativeAngle
from content_wizard.content.prompts import (
    DEFAULT_CAROUSEL_CTA,
    PromptParams,
    extract_json_from_response,
    get_carousel_prompt,
    get_content_prompt,
    get_narratives_system_prompt,
    get_refactor_instructions,
)


@pytest.fixture
def params() -> PromptParams:
    return PromptParams(
        content_type=ContentType.CAROUSEL,
        narrative_angle=NarrativeAngle.HEREGE,
        narrative_title="Pare de planejar a semana",
        narrative_description="Planejamento excessivo vira procrastinação",
        theme="Produtividade",
        target_audience="Freelancers",
    )


class TestNarrativesPrompt:

    def test_lists_every_angle(self):
        prompt = get_narratives_system_prompt(ContentType.CAROUSEL, theme="Foco")

        for angle in NarrativeAngle:
            assert angle.value in prompt
        assert "Tema: Foco" in prompt

    def test_optional_sections_only_when_given(self):
        bare = get_narratives_system_prompt("text", theme="Foco")
        full = get_narratives_system_prompt(
            "text",
            theme="Foco",
            extracted_content="Transcrição do vídeo",
            research_data="Fontes da pesquisa",
            custom_instructions="Use humor",
        )

        assert "CONTEÚDO DE REFERÊNCIA" not in bare
        assert "CONTEÚDO DE REFERÊNCIA:\nTranscrição do vídeo" in full
        assert "PESQUISA:\nFontes da pesquisa" in full
        assert "INSTRUÇÕES ADICIONAIS:\nUse humor" in full

    def test_video_duration_line(self):
        prompt = get_narratives_system_prompt("video", theme="Foco", video_duration="5-10min")

        assert "Duração do vídeo: 5-10min" in prompt


class TestContentPrompt:

    def test_carousel_contract_numbers(self, params):
        prompt = get_carousel_prompt(params)

        assert "no máximo 6 palavras" in prompt
        assert "no máximo 130 caracteres" in prompt
        assert "entre 200 e 400 palavras" in prompt

    def test_carousel_defaults(self, params):
        prompt = get_carousel_prompt(params)

        assert "10 slides" in prompt
        assert DEFAULT_CAROUSEL_CTA in prompt

    @pytest.mark.parametrize("slides, marker", [(4, "ESTRUTURA PARA 4 SLIDES"), (6, "ESTRUTURA PARA 6 SLIDES"), (8, "3 ATOS")])
    def test_carousel_structure_scales(self, params, slides, marker):
        params.number_of_slides = slides

        assert marker in get_carousel_prompt(params)

    def test_dispatch_by_content_type(self, params):
        params.content_type = ContentType.IMAGE
        assert '"imagePrompt"' in get_content_prompt(params)

        params.content_type = ContentType.VIDEO
        assert '"script"' in get_content_prompt(params)

        params.content_type = ContentType.TEXT
        assert '"content"' in get_content_prompt(params)

    def test_extras(self, params):
        params.negative_terms = ["hack", "milagre"]
        params.rag_context = "CONTEXTO DA BASE"
        params.custom_instructions = "Sem emojis"

        prompt = get_content_prompt(params)

        assert "TERMOS PROIBIDOS" in prompt
        assert "- milagre" in prompt
        assert "CONTEXTO DA BASE" in prompt
        assert "Sem emojis" in prompt

    def test_narrative_block(self, params):
        params.core_belief = "Menos é mais"

        prompt = get_content_prompt(params)

        assert "Título: Pare de planejar a semana" in prompt
        assert "Crença central: Menos é mais" in prompt
        assert "Hook sugerido" not in prompt

    def test_refactor_instructions(self):
        block = get_refactor_instructions("Mais curto", '{"caption": "x"}')

        assert "FEEDBACK DO USUÁRIO:\nMais curto" in block
        assert 'VERSÃO ATUAL:\n{"caption": "x"}' in block
        assert "VERSÃO ATUAL" not in get_refactor_instructions("Mais curto")


class TestExtractJson:

    def test_plain_object(self):
        assert extract_json_from_response('{"a": 1}') == {"a": 1}

    def test_fenced_with_chatter(self):
        text = 'Claro! Aqui está:\n```json\n{"narratives": [{"id": "1"}]}\n```\nBom trabalho.'

        assert extract_json_from_response(text) == {"narratives": [{"id": "1"}]}

    def test_no_braces(self):
        with pytest.raises(ValueError, match="No JSON found"):
            extract_json_from_response("sem json aqui")

    def test_invalid_json(self):
        with pytest.raises(ValueError):
            extract_json_from_response("{not: valid}")
