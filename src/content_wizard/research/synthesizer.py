"""Research synthesis: condenses raw web research into structured insights.

The planner/search step yields snippets; this step asks the LLM to turn
them into concrete data, real examples, risks, frameworks and hooks that
the narratives prompt can use directly. Synthesis is optional: callers
keep the raw research block when it fails.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import AliasChoices, ConfigDict, Field, ValidationInfo, field_validator

from ..constants import ChatClient
from ..content.models import SearchResult, WizardModel, to_string_list
from ..content.prompts import extract_json_from_response
from ..providers.config import WizardSettings, get_settings
from ..providers.openrouter import NOT_CONFIGURED_MESSAGE
from ..results import ServiceResult

_logger = logging.getLogger("ai_calls")

MAX_RETRIES = 2
MAX_RESEARCH_RESULTS = 15
MAX_EXTRACTED_CHARS = 2000
SNIPPET_CHARS = 500

_RULE = "=" * 70


# =============================================================================
# MODELS
# =============================================================================

class _SynthesisModel(WizardModel):
    """Lenient base: numbers become strings, nulls become empty strings."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    @field_validator("*", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and cls.model_fields[info.field_name].annotation is str:
            return ""
        return value


class ConcreteData(_SynthesisModel):
    dado: str = Field("", validation_alias=AliasChoices("dado", "data"))
    fonte: str = Field("", validation_alias=AliasChoices("fonte", "source"))
    uso_sugerido: str = Field("", validation_alias=AliasChoices("uso_sugerido", "suggested_use"))


class RealExample(_SynthesisModel):
    exemplo: str = Field("", validation_alias=AliasChoices("exemplo", "example"))
    contexto: str = Field("", validation_alias=AliasChoices("contexto", "context"))
    aprendizado: str = Field("", validation_alias=AliasChoices("aprendizado", "learning"))


class ErrorRisk(_SynthesisModel):
    erro: str = Field("", validation_alias=AliasChoices("erro", "error"))
    consequencia: str = Field("", validation_alias=AliasChoices("consequencia", "consequence"))
    como_evitar: str = Field("", validation_alias=AliasChoices("como_evitar", "how_to_avoid"))


class MethodFramework(_SynthesisModel):
    nome: str = Field("", validation_alias=AliasChoices("nome", "name"))
    problema_que_resolve: str = Field(
        "", validation_alias=AliasChoices("problema_que_resolve", "problem_solves", "descricao", "description")
    )
    passos: list[str] = Field(default_factory=list, validation_alias=AliasChoices("passos", "steps"))
    exemplo_aplicacao: str = Field(
        "", validation_alias=AliasChoices("exemplo_aplicacao", "application_example")
    )

    @field_validator("passos", mode="before")
    @classmethod
    def _split_steps(cls, value: Any) -> list[str]:
        return to_string_list(value)


class ResearchHook(_SynthesisModel):
    gancho: str = Field("", validation_alias=AliasChoices("gancho", "hook"))
    tipo: str = Field("", validation_alias=AliasChoices("tipo", "type"))
    potencial_viral: str = Field("", validation_alias=AliasChoices("potencial_viral", "viral_potential"))


class SynthesizedResearch(_SynthesisModel):
    """Structured research insights for content creation."""

    summary: str = Field("", validation_alias=AliasChoices("resumo_executivo", "summary"))
    narrative_suggestion: str = Field(
        "", validation_alias=AliasChoices("narrative_suggestion", "sugestao_narrativa")
    )
    concrete_data: list[ConcreteData] = Field(default_factory=list)
    real_examples: list[RealExample] = Field(default_factory=list)
    errors_risks: list[ErrorRisk] = Field(default_factory=list)
    frameworks_metodos: list[MethodFramework] = Field(default_factory=list)
    hooks: list[ResearchHook] = Field(default_factory=list)
    sources: list[str] = Field(default_factory=list)

    @field_validator(
        "concrete_data", "real_examples", "errors_risks", "frameworks_metodos", "hooks", mode="before"
    )
    @classmethod
    def _objects_only(cls, value: Any) -> list[dict[str, Any]]:
        """Models sometimes mix bare strings into these arrays; keep the objects."""
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, dict)]

    @field_validator("sources", mode="before")
    @classmethod
    def _strings_only(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, str)]

    @property
    def is_empty(self) -> bool:
        return not (
            self.summary
            or self.narrative_suggestion
            or self.concrete_data
            or self.real_examples
            or self.errors_risks
            or self.frameworks_metodos
            or self.hooks
        )


# =============================================================================
# PROMPTS
# =============================================================================

SYNTHESIZER_SYSTEM_PROMPT = """Você é um SINTETIZADOR DE PESQUISA especializado em extrair INSIGHTS ACIONÁVEIS para criação de conteúdo viral.

## SUA MISSÃO
Transformar dados brutos de pesquisa em insumos densos e organizados para criar conteúdo com narrativa conectada.

## O QUE EXTRAIR
1. resumo_executivo: resumo da pesquisa em 2-3 frases
2. narrative_suggestion: abordagem narrativa sugerida pelos achados
3. concrete_data: números, métricas e benchmarks (dado, fonte, uso_sugerido)
4. real_examples: casos reais, empresas e histórias (exemplo, contexto, aprendizado)
5. errors_risks: erros comuns a evitar (erro, consequencia, como_evitar)
6. frameworks_metodos: processos validados (nome, problema_que_resolve, passos, exemplo_aplicacao)
7. hooks: aberturas de impacto (gancho, tipo, potencial_viral)
8. sources: URLs das fontes principais (máx 5)

## REGRAS
- Use SOMENTE o que está na pesquisa. NÃO INVENTE DADOS.
- Campo sem dados: array vazio [] ou string vazia "".
- Responda APENAS com um objeto JSON com as chaves acima."""


def format_research_for_synthesizer(results: list[SearchResult]) -> str:
    """One numbered block per source, capped at MAX_RESEARCH_RESULTS."""
    blocks: list[str] = []
    for result in results:
        for source in result.sources:
            if len(blocks) >= MAX_RESEARCH_RESULTS:
                break
            snippet = source.snippet or "N/A"
            if len(snippet) > SNIPPET_CHARS:
                snippet = snippet[:SNIPPET_CHARS] + "..."
            blocks.append(
                f"[RESULTADO {len(blocks) + 1}]\n"
                f"Query: {result.query}\n"
                f"Título: {source.title}\n"
                f"URL: {source.url}\n"
                f"Conteúdo: {snippet}\n"
                "---"
            )
    return "\n\n".join(blocks)


def build_synthesizer_user_prompt(
    topic: str,
    research: str,
    count: int,
    niche: str | None = None,
    objective: str | None = None,
    target_audience: str | None = None,
    tone: str | None = None,
    extracted_content: str | None = None,
) -> str:
    """User prompt with the content brief, the raw research and any extracted reference."""
    lines = [
        "Sintetize os seguintes dados de pesquisa em insights acionáveis para criação de conteúdo viral.",
        "",
        "CONTEXTO DO CONTEÚDO:",
        f"Tema: {topic}",
        f"Nicho: {niche or 'geral'}",
        f"Objetivo: {objective or 'engajamento'}",
    ]
    if target_audience:
        lines.append(f"Público-alvo: {target_audience}")
    if tone:
        lines.append(f"Tom desejado: {tone}")

    lines += ["", _RULE, f"PESQUISA BRUTA ({count} resultados):", _RULE, research]

    if extracted_content:
        excerpt = extracted_content[:MAX_EXTRACTED_CHARS]
        if len(extracted_content) > MAX_EXTRACTED_CHARS:
            excerpt += f"\n...(truncado, total: {len(extracted_content)} caracteres)"
        lines += ["", _RULE, "CONTEÚDO EXTRAÍDO DA URL:", _RULE, excerpt]

    lines += [
        "",
        "IMPORTANTE: Se um campo não tiver dados na pesquisa, retorne array vazio [] "
        'ou string vazia "". NÃO INVENTE DADOS.',
    ]
    return "\n".join(lines)


# =============================================================================
# SERVICE
# =============================================================================

async def synthesize_research(
    client: ChatClient,
    results: list[SearchResult],
    *,
    topic: str,
    niche: str | None = None,
    objective: str | None = None,
    target_audience: str | None = None,
    tone: str | None = None,
    extracted_content: str | None = None,
    model: str | None = None,
    settings: WizardSettings | None = None,
) -> ServiceResult[SynthesizedResearch]:
    """Condense search results into SynthesizedResearch.

    Args:
        client: Chat client.
        results: Output of WebSearcher.parallel_search.
        topic: Content theme.
        model: Model override. Defaults to SYNTHESIZER_DEFAULT_MODEL, then
            the wizard default model.

    Returns:
        ok(SynthesizedResearch), or fail(message) when the client is not
        configured, there is nothing to synthesize, or the call fails.
    """
    if not client.is_configured:
        return ServiceResult.fail(NOT_CONFIGURED_MESSAGE)

    count = min(sum(len(r.sources) for r in results), MAX_RESEARCH_RESULTS)
    if count == 0:
        return ServiceResult.fail("No research results provided for synthesis. Cannot proceed.")

    settings = settings or get_settings()
    model = model or settings.synthesizer_default_model or settings.default_model
    user_prompt = build_synthesizer_user_prompt(
        topic,
        format_research_for_synthesizer(results),
        count,
        niche=niche,
        objective=objective,
        target_audience=target_audience,
        tone=tone,
        extracted_content=extracted_content,
    )

    try:
        response = await client.chat(
            [
                {"role": "system", "content": SYNTHESIZER_SYSTEM_PROMPT},
                {"role": "user", "content": user_prompt},
            ],
            model=model,
            temperature=0.3,
            json_mode=True,
            task="research_synthesis",
            max_retries=MAX_RETRIES,
        )
        parsed = extract_json_from_response(response)
        if not isinstance(parsed, dict):
            raise ValueError("Invalid response: not an object")
        synthesized = SynthesizedResearch.model_validate(parsed)
    except Exception as e:
        _logger.warning(f"RESEARCH_SYNTHESIS_ERROR | model:{model} | error:{e}")
        return ServiceResult.fail(f"Failed to synthesize research: {e}")

    _logger.info(
        f"RESEARCH_SYNTHESIS | model:{model} | results:{count} | "
        f"data:{len(synthesized.concrete_data)} | examples:{len(synthesized.real_examples)} | "
        f"frameworks:{len(synthesized.frameworks_metodos)} | hooks:{len(synthesized.hooks)}"
    )
    return ServiceResult.ok(synthesized)


def format_synthesized_research_for_prompt(synthesized: SynthesizedResearch) -> str:
    """Render synthesized research as sections for the narratives prompt."""
    sections: list[str] = []

    if synthesized.summary:
        sections.append(f"## RESUMO DA PESQUISA\n{synthesized.summary}\n")
    if synthesized.narrative_suggestion:
        sections.append(f"## SUGESTÃO DE NARRATIVA\n{synthesized.narrative_suggestion}\n")

    def _section(title: str, lines: list[str]) -> None:
        if lines:
            sections.append("\n".join([f"## {title}", *lines, ""]))

    lines: list[str] = []
    for i, item in enumerate(synthesized.concrete_data, start=1):
        lines.append(f"{i}. {item.dado}")
        if item.fonte:
            lines.append(f"   Fonte: {item.fonte}")
        if item.uso_sugerido:
            lines.append(f"   Uso sugerido: {item.uso_sugerido}")
    _section("DADOS CONCRETOS", lines)

    lines = []
    for i, item in enumerate(synthesized.real_examples, start=1):
        lines.append(f"{i}. {item.exemplo}")
        if item.contexto:
            lines.append(f"   Contexto: {item.contexto}")
        if item.aprendizado:
            lines.append(f"   Lição: {item.aprendizado}")
    _section("EXEMPLOS REAIS", lines)

    lines = []
    for i, item in enumerate(synthesized.errors_risks, start=1):
        lines.append(f"{i}. {item.erro}")
        if item.consequencia:
            lines.append(f"   Consequência: {item.consequencia}")
        if item.como_evitar:
            lines.append(f"   Como evitar: {item.como_evitar}")
    _section("ERROS E RISCOS A EVITAR", lines)

    lines = []
    for i, item in enumerate(synthesized.frameworks_metodos, start=1):
        lines.append(f"{i}. {item.nome}")
        if item.problema_que_resolve:
            lines.append(f"   Resolve: {item.problema_que_resolve}")
        if item.passos:
            lines.append(f"   Passos: {' -> '.join(item.passos)}")
        if item.exemplo_aplicacao:
            lines.append(f"   Exemplo: {item.exemplo_aplicacao}")
    _section("FRAMEWORKS E MÉTODOS", lines)

    lines = []
    for i, item in enumerate(synthesized.hooks, start=1):
        lines.append(f'{i}. "{item.gancho}"')
        if item.tipo:
            lines.append(f"   Tipo: {item.tipo}")
    _section("GANCHOS SUGERIDOS", lines)

    return "\n".join(sections).strip()
