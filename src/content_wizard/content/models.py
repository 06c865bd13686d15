"""Data models for wizard content generation.

Field aliases keep the camelCase / Portuguese keys the LLM produces and
sessions store on disk. Python code uses the snake_case attribute names.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..constants import ContentType, NarrativeAngle, SlideType, VideoDuration


def to_string_list(value: Any) -> list[str]:
    """Hashtags and keywords arrive as a list or a comma-separated string."""
    if isinstance(value, list):
        return [str(v) for v in value]
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return []


class WizardModel(BaseModel):
    """Base model: accepts both aliases and attribute names, ignores unknown keys."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_json_dict(self) -> dict[str, Any]:
        """Dump using wire names, dropping unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# NARRATIVES
# =============================================================================

class NarrativeOption(WizardModel):
    """One LLM-proposed narrative approach."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str
    title: str
    description: str
    angle: NarrativeAngle

    hook: str | None = None
    core_belief: str | None = None
    status_quo_challenged: str | None = None

    # Legacy fields some models still return
    viewpoint: str | None = None
    why_use: str | None = Field(None, alias="whyUse")
    impact: str | None = None
    tone: str | None = None
    keywords: list[str] | None = None
    differentiation: str | None = None
    risks: str | None = None

    @field_validator("keywords", mode="before")
    @classmethod
    def _split_keywords(cls, value: Any) -> list[str] | None:
        return None if value is None else to_string_list(value)


# =============================================================================
# CAROUSEL
# =============================================================================

class GeneratedSlide(WizardModel):
    """Slide as stored in GeneratedContent."""

    title: str
    content: str
    image_prompt: str | None = Field(None, alias="imagePrompt")
    image_url: str | None = Field(None, alias="imageUrl")
    numero: int | None = None
    acao: str | None = None


class CarouselCover(WizardModel):
    titulo: str
    subtitulo: str


class CarouselSlide(WizardModel):
    numero: int | None = None
    tipo: SlideType
    titulo: str
    corpo: str
    conexao_proximo: str | None = None


class ZoryonCarousel(WizardModel):
    """Validated carousel contract.

    Produced only by content.validation.validate_carousel_response, which
    enforces the length and word-count limits before construction.
    """

    throughline: str
    valor_central: str
    capa: CarouselCover
    slides: list[CarouselSlide]
    legenda: str


# =============================================================================
# VIDEO SCRIPT
# =============================================================================

# Section and hook types are kept as plain strings: models sometimes return
# accented variants and the script is still usable.

class VideoScriptMeta(WizardModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    duracao_estimada: str = ""
    angulo_tribal: str = ""
    valor_central: str = ""
    transformacao_prometida: str | None = None


class VideoThumbnailSpec(WizardModel):
    titulo: str = ""
    expressao: str = ""
    texto_overlay: str = ""
    estilo: str = ""
    cores_sugeridas: str | None = None


class ScriptHook(WizardModel):
    texto: str = ""
    tipo: str = ""
    nota_gravacao: str = ""


class DevelopmentSection(WizardModel):
    numero: int = 0
    tipo: str = ""
    topico: str = ""
    insight: str = ""
    exemplo: str | None = None
    transicao: str = ""
    nota_gravacao: str = ""


class ScriptCTA(WizardModel):
    texto: str = ""
    proximo_passo: str = ""
    nota_gravacao: str = ""


class ScriptBody(WizardModel):
    hook: ScriptHook = Field(default_factory=ScriptHook)
    desenvolvimento: list[DevelopmentSection] = Field(default_factory=list)
    cta: ScriptCTA = Field(default_factory=ScriptCTA)


class ProductionNotes(WizardModel):
    tom_geral: str = ""
    ritmo: str = ""
    visuais_chave: list[str] = Field(default_factory=list)
    musica_mood: str = ""


class VideoScriptStructured(WizardModel):
    """Structured long-form video script."""

    meta: VideoScriptMeta
    thumbnail: VideoThumbnailSpec
    roteiro: ScriptBody
    notas_producao: ProductionNotes = Field(default_factory=ProductionNotes)
    caption: str = ""
    hashtags: list[str] = Field(default_factory=list)


# =============================================================================
# GENERATED CONTENT
# =============================================================================

class RagSource(WizardModel):
    id: str
    title: str


class ThumbnailInfo(WizardModel):
    image_url: str | None = Field(None, alias="imageUrl")
    prompt_used: str | None = Field(None, alias="promptUsed")
    method: Literal["ai", "html-template", "none"] = "none"
    suggestions: dict[str, Any] | None = None


class ContentMetadata(WizardModel):
    narrative_id: str = Field(alias="narrativeId")
    narrative_title: str = Field(alias="narrativeTitle")
    narrative_angle: NarrativeAngle = Field(alias="narrativeAngle")
    model: str
    generated_at: str = Field(
        default_factory=lambda: datetime.now().isoformat(), alias="generatedAt"
    )
    rag_used: bool = Field(False, alias="ragUsed")
    rag_sources: list[RagSource] | None = Field(None, alias="ragSources")
    throughline: str | None = None
    valor_central: str | None = None
    image_prompt: str | None = Field(None, alias="imagePrompt")
    duration: VideoDuration | None = None
    intention: str | None = None


class GeneratedContent(WizardModel):
    """Draft produced for the selected narrative."""

    type: ContentType
    slides: list[GeneratedSlide] | None = None
    carousel: ZoryonCarousel | None = None
    caption: str | None = None
    hashtags: list[str] | None = None
    cta: str | None = None
    script: str | VideoScriptStructured | None = None
    thumbnail: ThumbnailInfo | None = None
    metadata: ContentMetadata


# =============================================================================
# RAG
# =============================================================================

class RagConfig(WizardModel):
    mode: Literal["auto", "manual"] | None = None
    threshold: float | None = None
    max_chunks: int | None = Field(None, alias="maxChunks")
    documents: list[str] | None = None
    collections: list[str] | None = None


class RagResult(WizardModel):
    context: str
    sources: list[RagSource] = Field(default_factory=list)
    tokens_used: int = Field(0, alias="tokensUsed")
    chunks_included: int = Field(0, alias="chunksIncluded")


# =============================================================================
# TRANSCRIPTION
# =============================================================================

class TranscriptionMetadata(WizardModel):
    video_id: str | None = Field(None, alias="videoId")
    title: str | None = None
    description: str | None = None
    thumbnail_url: str | None = Field(None, alias="thumbnailUrl")
    duration: int | None = None
    channel_name: str | None = Field(None, alias="channelName")
    language: str | None = None


class VideoTranscription(WizardModel):
    source_url: str = Field(alias="sourceUrl")
    transcription: str
    metadata: TranscriptionMetadata | None = None


# =============================================================================
# WIZARD INPUTS
# =============================================================================

class ProcessingProgress(WizardModel):
    step: Literal["extraction", "transcription", "research", "narratives", "rag", "generation"]
    message: str
    percentage: int = 0


class WizardInputData(WizardModel):
    content_type: ContentType = Field(alias="contentType")
    number_of_slides: int | None = Field(None, alias="numberOfSlides")
    model: str | None = None
    theme: str | None = None
    context: str | None = None
    objective: str | None = None
    cta: str | None = None
    target_audience: str | None = Field(None, alias="targetAudience")
    negative_terms: list[str] | None = Field(None, alias="negativeTerms")


class WizardNarrativesInput(WizardInputData):
    reference_url: str | None = Field(None, alias="referenceUrl")
    reference_video_url: str | None = Field(None, alias="referenceVideoUrl")
    extracted_content: str | None = Field(None, alias="extractedContent")
    research_data: str | None = Field(None, alias="researchData")
    video_duration: VideoDuration | None = Field(None, alias="videoDuration")
    custom_instructions: str | None = Field(None, alias="customInstructions")


class WizardGenerationInput(WizardInputData):
    selected_narrative: NarrativeOption = Field(alias="selectedNarrative")
    rag_context: str | None = Field(None, alias="ragContext")
    rag_sources: list[RagSource] | None = Field(None, alias="ragSources")
    custom_instructions: str | None = Field(None, alias="customInstructions")
    video_duration: VideoDuration | None = Field(None, alias="videoDuration")
    video_intention: str | None = Field(None, alias="videoIntention")
    refactor_feedback: str | None = Field(None, alias="refactorFeedback")
    current_content: str | None = Field(None, alias="currentContent")


# =============================================================================
# REFERENCES AND RESEARCH
# =============================================================================

class ExtractedContent(WizardModel):
    source_url: str = Field(alias="sourceUrl")
    content: str
    title: str | None = None
    author: str | None = None
    publish_date: str | None = Field(None, alias="publishDate")


class SearchSource(WizardModel):
    title: str
    url: str
    snippet: str = ""


class SearchResult(WizardModel):
    query: str
    answer: str = ""
    sources: list[SearchSource] = Field(default_factory=list)
