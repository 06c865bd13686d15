"""Models for the long-form video services (titles, SEO, script, thumbnail)."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import ConfigDict, Field

from ..constants import NarrativeAngle, VideoDuration
from ..content.models import NarrativeOption, WizardModel


class ThumbnailStyle(str, Enum):
    """Visual styles for thumbnail prompts."""

    PROFISSIONAL = "profissional"
    MINIMALISTA = "minimalista"
    MODERNO = "moderno"
    ENERGETICO = "energético"
    EDUCACIONAL = "educacional"
    PROVOCATIVO = "provocativo"
    INSPIRADOR = "inspirador"
    TECH = "tech"


class LenientModel(WizardModel):
    """Keeps keys the LLM adds beyond the documented shape."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")


# =============================================================================
# SHARED CONTEXT
# =============================================================================

class RoteiroContext(WizardModel):
    """Facts lifted from a generated script to keep titles and SEO aligned."""

    valor_central: str | None = Field(None, alias="valorCentral")
    hook_texto: str | None = Field(None, alias="hookTexto")
    thumbnail_titulo: str | None = Field(None, alias="thumbnailTitulo")
    thumbnail_estilo: str | None = Field(None, alias="thumbnailEstilo")
    topicos: list[str] = Field(default_factory=list)
    duracao: str | None = None


class BrandContext(WizardModel):
    voice_tone: str | None = Field(None, alias="voiceTone")
    brand_voice: str | None = Field(None, alias="brandVoice")
    channel_name: str | None = Field(None, alias="channelName")
    target_audience: str | None = Field(None, alias="targetAudience")
    preferred_ctas: str | None = Field(None, alias="preferredCTAs")
    fears_and_pains: list[str] = Field(default_factory=list, alias="fearsAndPains")
    desires_and_aspirations: list[str] = Field(default_factory=list, alias="desiresAndAspirations")
    forbidden_terms: list[str] = Field(default_factory=list, alias="forbiddenTerms")


# =============================================================================
# TITLES
# =============================================================================

class VideoTitleOption(WizardModel):
    id: str
    title: str
    hook_factor: int = 50
    reason: str = ""
    word_count: int | None = None
    formula_used: str | None = None
    triggers: list[str] | None = None
    tribal_angle: str | None = None


class VideoTitlesInput(WizardModel):
    narrative_angle: NarrativeAngle = Field(alias="narrativeAngle")
    narrative_title: str = Field(alias="narrativeTitle")
    narrative_description: str = Field(alias="narrativeDescription")
    theme: str | None = None
    target_audience: str | None = Field(None, alias="targetAudience")
    objective: str | None = None
    roteiro_context: RoteiroContext | None = Field(None, alias="roteiroContext")
    brand_context: BrandContext | None = Field(None, alias="brandContext")

    @classmethod
    def from_narrative(cls, narrative: NarrativeOption, **kwargs: Any) -> VideoTitlesInput:
        return cls(
            narrative_angle=narrative.angle,
            narrative_title=narrative.title,
            narrative_description=narrative.description,
            **kwargs,
        )


# =============================================================================
# YOUTUBE SEO
# =============================================================================

class YouTubeSEOInput(WizardModel):
    thumbnail_title: str = Field(alias="thumbnailTitle")
    theme: str
    target_audience: str = Field(alias="targetAudience")
    primary_keyword: str = Field(alias="primaryKeyword")
    secondary_keywords: list[str] = Field(default_factory=list, alias="secondaryKeywords")
    search_intent: Literal["informational", "transactional", "navigational"] = Field(
        "informational", alias="searchIntent"
    )
    objective: str | None = None
    niche: str | None = None
    narrative_angle: NarrativeAngle | None = Field(None, alias="narrativeAngle")
    narrative_title: str | None = Field(None, alias="narrativeTitle")
    narrative_description: str | None = Field(None, alias="narrativeDescription")
    roteiro_context: RoteiroContext = Field(default_factory=RoteiroContext, alias="roteiroContext")
    brand: BrandContext | None = None


class SEOTitle(LenientModel):
    principal: str = ""
    caracteres: int = 0
    formula_usada: str = ""
    keyword_position: str = ""
    variacoes: list[str] = Field(default_factory=list)


class SEODescription(LenientModel):
    above_the_fold: str = ""
    corpo_completo: str = ""
    caracteres_total: int = 0
    estrutura: dict[str, Any] = Field(default_factory=dict)


class SEOTags(LenientModel):
    lista_ordenada: list[str] = Field(default_factory=list)
    caracteres_total: int = 0
    estrategia: str = ""


class SEOHashtags(LenientModel):
    acima_titulo: list[str] = Field(default_factory=list)
    na_descricao: list[str] = Field(default_factory=list)


class YouTubeSEOOutput(LenientModel):
    titulo: SEOTitle
    descricao: SEODescription
    tags: SEOTags
    hashtags: SEOHashtags = Field(default_factory=SEOHashtags)
    seo_analysis: dict[str, Any] = Field(default_factory=dict)
    engagement_hooks: dict[str, Any] = Field(default_factory=dict)


# =============================================================================
# SCRIPT
# =============================================================================

class VideoScriptInput(WizardModel):
    narrative_angle: NarrativeAngle = Field(alias="narrativeAngle")
    narrative_title: str = Field(alias="narrativeTitle")
    narrative_description: str = Field(alias="narrativeDescription")
    duration: VideoDuration = VideoDuration.MEDIUM
    intention: str | None = None
    theme: str | None = None
    target_audience: str | None = Field(None, alias="targetAudience")
    objective: str | None = None
    cta: str | None = None
    negative_terms: list[str] = Field(default_factory=list, alias="negativeTerms")
    rag_context: str | None = Field(None, alias="ragContext")
    narrative_hook: str | None = Field(None, alias="narrativeHook")
    core_belief: str | None = Field(None, alias="coreBelief")
    status_quo_challenged: str | None = Field(None, alias="statusQuoChallenged")
    selected_title: str | None = Field(None, alias="selectedTitle")

    @classmethod
    def from_narrative(cls, narrative: NarrativeOption, **kwargs: Any) -> VideoScriptInput:
        return cls(
            narrative_angle=narrative.angle,
            narrative_title=narrative.title,
            narrative_description=narrative.description,
            narrative_hook=narrative.hook,
            core_belief=narrative.core_belief,
            status_quo_challenged=narrative.status_quo_challenged,
            **kwargs,
        )


class VideoScriptRefactorInput(VideoScriptInput):
    current_script: str = Field(alias="currentScript")
    refactor_instructions: str = Field(alias="refactorInstructions")


# =============================================================================
# THUMBNAIL
# =============================================================================

class VideoThumbnailInput(WizardModel):
    thumbnail_title: str = Field(alias="thumbnailTitle")
    estilo: ThumbnailStyle = ThumbnailStyle.PROFISSIONAL
    contexto_tematico: str = Field(alias="contextoTematico")
    expressao: str | None = None
    referencia_imagem_1: str | None = Field(None, alias="referenciaImagem1")
    referencia_imagem_2: str | None = Field(None, alias="referenciaImagem2")
    variacao_index: int = Field(0, alias="variacaoIndex")


class ThumbnailSpecs(LenientModel):
    texto: str = ""
    cor_texto: str = ""
    cor_fundo: str = ""
    posicao_texto: str = ""
    expressao: str = ""


class ThumbnailPromptOutput(LenientModel):
    prompt: str
    negative_prompt: str = ""
    especificacoes: ThumbnailSpecs
    variacoes: list[str] = Field(default_factory=list)
