"""Tests for video prompt builders."""

from __future__ import annotations

from content_wizard.constants import NarrativeAngle, VideoDuration
from content_wizard.video.models import (
    BrandContext,
    RoteiroContext,
    ThumbnailStyle,
    VideoScriptInput,
    VideoThumbnailInput,
    VideoTitlesInput,
    YouTubeSEOInput,
)
from content_wizard.video.prompts import (
    LONG_FORM_SCRIPT_MODEL,
    SHORT_FORM_SCRIPT_MODEL,
    get_model_for_duration,
    get_thumbnail_user_prompt,
    get_video_script_user_prompt,
    get_video_titles_user_prompt,
    get_youtube_seo_user_prompt,
)


def test_model_for_duration():
    assert get_model_for_duration(VideoDuration.SHORT) == SHORT_FORM_SCRIPT_MODEL
    assert get_model_for_duration("5-10min") == SHORT_FORM_SCRIPT_MODEL
    assert get_model_for_duration(VideoDuration.LONG) == LONG_FORM_SCRIPT_MODEL
    assert get_model_for_duration("+30min") == LONG_FORM_SCRIPT_MODEL


class TestTitlesPrompt:

    def test_without_context(self):
        prompt = get_video_titles_user_prompt(VideoTitlesInput(
            narrative_angle=NarrativeAngle.HEREGE,
            narrative_title="Listas mentem",
            narrative_description="d",
        ))

        assert "<angulo>herege</angulo>" in prompt
        assert "<contexto_do_roteiro>" not in prompt
        assert "Isso é sobre mim" in prompt

    def test_with_script_and_brand(self):
        prompt = get_video_titles_user_prompt(VideoTitlesInput(
            narrative_angle=NarrativeAngle.HEREGE,
            narrative_title="Listas mentem",
            narrative_description="d",
            roteiro_context=RoteiroContext(valor_central="Cortar tarefas"),
            brand_context=BrandContext(forbidden_terms=["hack"]),
        ))

        assert "- Valor Central: Cortar tarefas" in prompt
        assert "VALOR CENTRAL" in prompt
        assert "CRÍTICO: NUNCA usar os termos proibidos: hack" in prompt


def test_seo_prompt():
    prompt = get_youtube_seo_user_prompt(YouTubeSEOInput(
        thumbnail_title="PARE",
        theme="Produtividade",
        target_audience="Freelancers",
        primary_keyword="produtividade",
        secondary_keywords=["foco", "tempo"],
        roteiro_context=RoteiroContext(topicos=["Listas", "Cortes"]),
    ))

    assert "**Primary Keyword:** produtividade" in prompt
    assert "**Search Intent:** informational" in prompt
    assert "- foco\n- tempo" in prompt
    assert "  2. Cortes" in prompt
    assert "**Brand Context:**" not in prompt


def test_script_prompt():
    prompt = get_video_script_user_prompt(VideoScriptInput(
        narrative_angle=NarrativeAngle.TESTEMUNHA,
        narrative_title="Eu também",
        narrative_description="d",
        duration=VideoDuration.EXTENDED,
        negative_terms=["guru"],
    ))

    assert "**Duration:** +30min" in prompt
    assert "**Negative Terms:** guru" in prompt
    assert "**Theme:**" not in prompt


def test_thumbnail_prompt_truncates_reference():
    prompt = get_thumbnail_user_prompt(VideoThumbnailInput(
        thumbnail_title="PARE",
        estilo=ThumbnailStyle.TECH,
        contexto_tematico="IA",
        referencia_imagem_1="data:image/png;base64," + "A" * 500,
        variacao_index=2,
    ))

    assert "<estilo>tech</estilo>" in prompt
    assert "- Paleta de cores: cyan, purple, dark" in prompt
    assert "Variação solicitada: 3 de 5" in prompt
    assert "A" * 500 not in prompt
    assert "(truncated, use full base64 in generation)" in prompt
    assert "Use a foto fornecida" in prompt
