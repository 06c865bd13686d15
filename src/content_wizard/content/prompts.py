"""Prompt builders for the content wizard.

Every function here is pure: it renders a Portuguese instruction string
from typed parameters. Missing optional values render as empty strings
or drop their section.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable

from ..constants import (
    CAROUSEL_BODY_MAX_CHARS,
    CAROUSEL_CAPTION_MAX_WORDS,
    CAROUSEL_CAPTION_MIN_WORDS,
    CAROUSEL_DEFAULT_SLIDES,
    CAROUSEL_TITLE_MAX_WORDS,
    NARRATIVES_COUNT,
    ContentType,
    NarrativeAngle,
    SlideType,
)

DEFAULT_CAROUSEL_CTA = "Comenta QUERO aqui embaixo que eu te mando o link no direct."
DEFAULT_TEXT_CTA = "Link na bio"
DEFAULT_IMAGE_CTA = "Salva esse post pra consultar depois."
DEFAULT_VIDEO_CTA = "Salva esse vídeo e compartilha com quem precisa ver."

ANGLE_DESCRIPTIONS: dict[NarrativeAngle, str] = {
    NarrativeAngle.HEREGE: "Herege: desafia uma crença aceita no nicho e mostra o custo de segui-la",
    NarrativeAngle.VISIONARIO: "Visionário: mostra para onde o nicho está indo e quem vai ficar para trás",
    NarrativeAngle.TRADUTOR: "Tradutor: transforma algo complexo em passos simples e aplicáveis",
    NarrativeAngle.TESTEMUNHA: "Testemunha: fala a partir da experiência vivida, com erros e aprendizados reais",
}

CONTENT_TYPE_NAMES: dict[ContentType, str] = {
    ContentType.TEXT: "Post de Texto",
    ContentType.IMAGE: "Post de Imagem",
    ContentType.CAROUSEL: "Carrossel",
    ContentType.VIDEO: "Vídeo Curto",
}


@dataclass
class PromptParams:
    """Inputs shared by the content prompt builders."""

    content_type: ContentType = ContentType.TEXT
    narrative_angle: NarrativeAngle = NarrativeAngle.TRADUTOR
    narrative_title: str = ""
    narrative_description: str = ""
    narrative_hook: str | None = None
    core_belief: str | None = None
    status_quo_challenged: str | None = None
    theme: str | None = None
    target_audience: str | None = None
    objective: str | None = None
    cta: str | None = None
    number_of_slides: int | None = None
    negative_terms: list[str] = field(default_factory=list)
    rag_context: str | None = None
    custom_instructions: str | None = None


def get_angle_description(angle: NarrativeAngle | str) -> str:
    """Human description of a tribal angle."""
    return ANGLE_DESCRIPTIONS[NarrativeAngle(angle)]


def get_content_type_name(content_type: ContentType | str) -> str:
    """Display name of a content type."""
    return CONTENT_TYPE_NAMES[ContentType(content_type)]


def _optional_line(label: str, value: str | None) -> str:
    return f"{label}: {value}\n" if value else ""


def _negative_terms_block(terms: list[str]) -> str:
    if not terms:
        return ""
    return (
        "\nTERMOS PROIBIDOS (nunca use, nem em variações):\n"
        + "\n".join(f"- {term}" for term in terms)
        + "\n"
    )


def _narrative_block(params: PromptParams) -> str:
    return (
        "NARRATIVA ESCOLHIDA:\n"
        f"Ângulo: {get_angle_description(params.narrative_angle)}\n"
        f"Título: {params.narrative_title}\n"
        f"Descrição: {params.narrative_description}\n"
        + _optional_line("Hook sugerido", params.narrative_hook)
        + _optional_line("Crença central", params.core_belief)
        + _optional_line("Status quo desafiado", params.status_quo_challenged)
    )


def _briefing_block(params: PromptParams) -> str:
    block = (
        _optional_line("Tema", params.theme)
        + _optional_line("Público-alvo", params.target_audience)
        + _optional_line("Objetivo", params.objective)
    )
    return f"BRIEFING:\n{block}" if block else ""


def _extras_block(params: PromptParams) -> str:
    parts = []
    if params.rag_context:
        parts.append(f"\n{params.rag_context}\n")
    if params.custom_instructions:
        parts.append(f"\nINSTRUÇÕES ADICIONAIS DO USUÁRIO:\n{params.custom_instructions}\n")
    parts.append(_negative_terms_block(params.negative_terms))
    return "".join(parts)


# =============================================================================
# RESEARCH
# =============================================================================

def get_research_planner_prompt(
    theme: str,
    niche: str | None = None,
    objective: str | None = None,
    target_audience: str | None = None,
    number_of_slides: int | None = None,
    cta: str | None = None,
) -> str:
    """Prompt that plans seven web-search queries in three layers."""
    slides = number_of_slides or CAROUSEL_DEFAULT_SLIDES
    return f"""# PLANEJADOR DE PESQUISA

## PAPEL
Você planeja pesquisas web profundas para criação de conteúdo no Instagram Brasil.

## OBJETIVO
Gerar queries que tragam DADOS CONCRETOS, EXEMPLOS REAIS, ERROS DOCUMENTADOS,
FRAMEWORKS EXISTENTES e TENDÊNCIAS RECENTES sobre o tema.

## CAMADAS
### CAMADA 1 (FUNDAÇÃO): 2 queries
- visão geral do tema
- estado atual e tendências

### CAMADA 2 (PROFUNDIDADE): 3 queries
- erros comuns e o que evitar
- casos reais
- métricas, benchmarks e dados

### CAMADA 3 (DIFERENCIAÇÃO): 2 queries
- ângulo contraintuitivo
- ferramentas e implementação

## REGRAS
1. Queries em PT-BR, exceto termos técnicos
2. Pelo menos 1 query em inglês para benchmarks internacionais
3. Máximo de 10 palavras por query, sem caracteres especiais
4. Nada de queries genéricas do tipo "o que é X"

BRIEFING:
Tema: {theme}
Nicho: {niche or "(não informado)"}
Objetivo: {objective or "(não informado)"}
Público: {target_audience or "Brasileiros no Instagram"}
Formato: Carrossel de {slides} slides
CTA desejado: {cta or "(não informado)"}

Retorne APENAS JSON no formato:
{{"queries": [{{"camada": 1, "query": "...", "idioma": "pt"}}], "time_window": "..."}}
Exatamente 7 queries."""


# =============================================================================
# NARRATIVES
# =============================================================================

def get_narratives_system_prompt(
    content_type: ContentType | str,
    theme: str | None = None,
    context: str | None = None,
    objective: str | None = None,
    target_audience: str | None = None,
    cta: str | None = None,
    extracted_content: str | None = None,
    research_data: str | None = None,
    custom_instructions: str | None = None,
    number_of_slides: int | None = None,
    video_duration: str | None = None,
) -> str:
    """System prompt asking for one narrative per tribal angle."""
    angles = "\n".join(f"- {a.value}: {get_angle_description(a)}" for a in NarrativeAngle)
    type_name = get_content_type_name(content_type)

    briefing = (
        _optional_line("Tema", theme)
        + _optional_line("Contexto", context)
        + _optional_line("Objetivo", objective)
        + _optional_line("Público-alvo", target_audience)
        + _optional_line("CTA desejado", cta)
        + (_optional_line("Quantidade de slides", str(number_of_slides)) if number_of_slides else "")
        + _optional_line("Duração do vídeo", video_duration)
    )

    sections = [
        f"""Você é um estrategista de conteúdo tribal para redes sociais.
Sua tarefa é propor {NARRATIVES_COUNT} narrativas diferentes para um {type_name}.

Conteúdo tribal não agrada a todos: ele une quem pensa igual e afasta quem não faz parte.
Cada narrativa deve partir de um ângulo diferente:
{angles}

BRIEFING:
{briefing or "(sem briefing detalhado)"}"""
    ]

    if extracted_content:
        sections.append(f"CONTEÚDO DE REFERÊNCIA:\n{extracted_content}")
    if research_data:
        sections.append(f"PESQUISA:\n{research_data}")
    if custom_instructions:
        sections.append(f"INSTRUÇÕES ADICIONAIS:\n{custom_instructions}")

    sections.append(
        f"""REGRAS:
1. Exatamente {NARRATIVES_COUNT} narrativas, uma para cada ângulo ({", ".join(a.value for a in NarrativeAngle)})
2. Cada narrativa precisa de um hook que pare o scroll
3. core_belief é a crença que une a tribo
4. status_quo_challenged é o que a narrativa contesta
5. Títulos curtos e específicos, sem clichês

Retorne APENAS JSON válido no formato:
{{
  "narratives": [
    {{
      "id": "narrative-1",
      "title": "...",
      "description": "...",
      "angle": "herege",
      "hook": "...",
      "core_belief": "...",
      "status_quo_challenged": "..."
    }}
  ]
}}"""
    )
    return "\n\n".join(sections)


# =============================================================================
# CAROUSEL
# =============================================================================

def _carousel_structure(slides: int) -> str:
    """Slide-by-slide structure scaled to the carousel length."""
    if slides <= 4:
        return f"""ESTRUTURA PARA {slides} SLIDES:
- Slide 1: Problema ou tensão central (tipo "problema")
- Slides 2-{max(slides - 1, 2)}: Conceito ou passo principal
- Slide {slides}: CTA (tipo "cta")
Com poucos slides, cada um carrega uma ideia completa."""
    if slides <= 6:
        return f"""ESTRUTURA PARA {slides} SLIDES:
- Slide 1: Problema
- Slide 2: Conceito que muda a leitura do problema
- Slides 3-{slides - 2}: Desenvolvimento com progressão
- Slide {slides - 1}: Síntese
- Slide {slides}: CTA
Use PROGRESSÃO ACUMULATIVA: cada slide adiciona uma camada à throughline."""
    return f"""ESTRUTURA PARA {slides} SLIDES (3 ATOS):
- ATO 1 (Slides 1-2): Problema e conceito
- ATO 2 (Slides 3-{slides - 3}): Desenvolvimento progressivo, cada slide constrói sobre o anterior
- Slide {slides - 2}: Síntese ou checklist que consolida tudo
- Slide {slides - 1}: Reflexão humana
- Slide {slides}: CTA com direção clara
Cada slide do ATO 2 começa referenciando o anterior e termina abrindo o próximo."""


def get_carousel_prompt(params: PromptParams) -> str:
    """System prompt for a carousel draft."""
    slides = params.number_of_slides or CAROUSEL_DEFAULT_SLIDES
    cta = params.cta or DEFAULT_CAROUSEL_CTA
    valid_types = ", ".join(t.value for t in SlideType)

    return f"""Você é um copywriter de carrosséis tribais para Instagram.
Crie um carrossel de {slides} slides conectados por uma única THROUGHLINE.

{_narrative_block(params)}
{_briefing_block(params)}
{_carousel_structure(slides)}

CONTRATO DE SAÍDA (validado automaticamente, qualquer violação descarta o carrossel):
- throughline: a ideia única que conecta todos os slides (obrigatório)
- valor_central: o que a pessoa aprende ou ganha (obrigatório)
- capa.titulo e capa.subtitulo: não vazios
- slides[].tipo: um de {valid_types}
- slides[].titulo: no máximo {CAROUSEL_TITLE_MAX_WORDS} palavras
- slides[].corpo: no máximo {CAROUSEL_BODY_MAX_CHARS} caracteres
- slides[].conexao_proximo: frase que puxa o próximo slide ("" no último)
- legenda: entre {CAROUSEL_CAPTION_MIN_WORDS} e {CAROUSEL_CAPTION_MAX_WORDS} palavras, termina com o CTA

CTA: {cta}
{_extras_block(params)}
Retorne APENAS JSON válido:
{{
  "throughline": "...",
  "valor_central": "...",
  "capa": {{"titulo": "...", "subtitulo": "..."}},
  "slides": [
    {{"numero": 1, "tipo": "problema", "titulo": "...", "corpo": "...", "conexao_proximo": "..."}}
  ],
  "legenda": "...",
  "hashtags": ["..."]
}}"""


# =============================================================================
# TEXT / IMAGE / VIDEO
# =============================================================================

def get_text_prompt(params: PromptParams) -> str:
    """System prompt for a text-only post."""
    cta = params.cta or DEFAULT_TEXT_CTA
    return f"""Você é um copywriter de posts de texto tribais para redes sociais.

{_narrative_block(params)}
{_briefing_block(params)}
REGRAS:
1. Primeira linha é o hook: curta, específica, para o scroll
2. Parágrafos de 1 a 3 linhas, com respiro entre eles
3. Uma única ideia central, defendida do começo ao fim
4. Feche com o CTA: {cta}
{_extras_block(params)}
Retorne APENAS JSON válido:
{{"content": "...", "hashtags": ["..."], "cta": "..."}}"""


def get_image_prompt(params: PromptParams) -> str:
    """System prompt for a single-image post."""
    cta = params.cta or DEFAULT_IMAGE_CTA
    return f"""Você cria posts de imagem única para Instagram: uma imagem forte e uma legenda tribal.

{_narrative_block(params)}
{_briefing_block(params)}
REGRAS DA IMAGEM:
1. imagePrompt em inglês, descrevendo cena, composição, luz e estilo
2. Texto na imagem só se for essencial (no máximo 6 palavras)
3. Formato retrato 4:5

REGRAS DA LEGENDA:
1. Começa com o hook usado na imagem
2. Traz um dado ou insight de destaque
3. Fecha com o CTA: {cta}
{_extras_block(params)}
Retorne APENAS JSON válido:
{{
  "imagePrompt": "...",
  "caption": "...",
  "hashtags": ["..."],
  "cta": "...",
  "hookUsado": "...",
  "dadoDestaque": "..."
}}"""


def get_video_prompt(params: PromptParams) -> str:
    """System prompt for a short-form video script."""
    cta = params.cta or DEFAULT_VIDEO_CTA
    return f"""Você roteiriza vídeos curtos (Reels/Shorts) tribais de 30 a 90 segundos.

{_narrative_block(params)}
{_briefing_block(params)}
REGRAS:
1. Os 3 primeiros segundos decidem tudo: hook visual e falado
2. Cada cena tem tempo, visual, áudio, texto na tela e direção
3. Marque os pontos de retenção (viradas que seguram a audiência)
4. Feche com o CTA: {cta}
{_extras_block(params)}
Retorne APENAS JSON válido:
{{
  "estrutura_usada": "...",
  "duracao_estimada": "...",
  "script": [
    {{"time": "0-3s", "visual": "...", "audio": "...", "text": "...", "direcao": "..."}}
  ],
  "caption": "...",
  "hashtags": ["..."],
  "cta": "...",
  "hook_tipo": "...",
  "pontos_retencao": ["..."]
}}"""


_CONTENT_PROMPTS: dict[ContentType, Callable[[PromptParams], str]] = {
    ContentType.CAROUSEL: get_carousel_prompt,
    ContentType.TEXT: get_text_prompt,
    ContentType.IMAGE: get_image_prompt,
    ContentType.VIDEO: get_video_prompt,
}


def get_content_prompt(params: PromptParams) -> str:
    """Dispatch to the builder for params.content_type (text when unknown)."""
    try:
        builder = _CONTENT_PROMPTS[ContentType(params.content_type)]
    except ValueError:
        builder = get_text_prompt
    return builder(params)


def get_refactor_instructions(feedback: str, current_content: str | None = None) -> str:
    """Block appended to a content prompt when the user asks for changes."""
    block = f"""
REFATORAÇÃO SOLICITADA:
O usuário já recebeu uma versão e pediu ajustes. Preserve o que funciona
(ângulo, throughline, tom) e implemente exatamente o que foi pedido.

FEEDBACK DO USUÁRIO:
{feedback}
"""
    if current_content:
        block += f"\nVERSÃO ATUAL:\n{current_content}\n"
    return block


# =============================================================================
# RESPONSE PARSING
# =============================================================================

def extract_json_from_response(text: str) -> Any:
    """Parse the JSON object embedded in an LLM response.

    Takes the span from the first "{" to the last "}", which tolerates
    markdown fences and chatter around the payload.

    Raises:
        ValueError: No braces in the text, or the span is not valid JSON.
    """
    first = text.find("{")
    last = text.rfind("}")
    if first == -1 or last == -1 or last < first:
        raise ValueError("No JSON found in response")
    return json.loads(text[first:last + 1])
