"""Prompt builders for the long-form video services.

Pure functions: every builder takes a typed input and returns the prompt
string. System prompts are constants, user prompts carry the variables.
"""

from __future__ import annotations

from ..constants import VideoDuration
from .models import (
    BrandContext,
    ThumbnailStyle,
    VideoScriptInput,
    VideoScriptRefactorInput,
    VideoThumbnailInput,
    VideoTitlesInput,
    YouTubeSEOInput,
)

LONG_FORM_SCRIPT_MODEL = "anthropic/claude-haiku-4.5"
SHORT_FORM_SCRIPT_MODEL = "google/gemini-3-flash-preview"

# "descriptors | palette | background"
STYLE_DESCRIPTORS: dict[ThumbnailStyle, str] = {
    ThumbnailStyle.PROFISSIONAL: "professional photography, clean, business | navy, white, gold | solid dark, gradient",
    ThumbnailStyle.MINIMALISTA: "minimal, clean, simple | black, white, accent | solid single color",
    ThumbnailStyle.MODERNO: "contemporary, vibrant, bold | bright gradients | gradient, geometric",
    ThumbnailStyle.ENERGETICO: "dynamic, high contrast, punchy | orange, yellow, red | energetic gradient",
    ThumbnailStyle.EDUCACIONAL: "friendly, approachable, clear | blue, green, white | soft solid",
    ThumbnailStyle.PROVOCATIVO: "bold, dramatic, intense | red, black, white | dark dramatic",
    ThumbnailStyle.INSPIRADOR: "warm, uplifting, hopeful | gold, orange, cream | warm gradient",
    ThumbnailStyle.TECH: "futuristic, sleek, modern | cyan, purple, dark | dark with glow",
}

BASE64_PREVIEW_CHARS = 100


def get_model_for_duration(duration: VideoDuration | str) -> str:
    """Long videos (+10min, +30min) use the stronger model."""
    if VideoDuration(duration).is_long_form:
        return LONG_FORM_SCRIPT_MODEL
    return SHORT_FORM_SCRIPT_MODEL


def _brand_lines(brand: BrandContext | None) -> list[str]:
    if brand is None:
        return []
    lines = []
    if brand.voice_tone:
        lines.append(f"- Tom da Voz: {brand.voice_tone}")
    if brand.fears_and_pains:
        lines.append(f"- Dores e Medos: {', '.join(brand.fears_and_pains)}")
    if brand.desires_and_aspirations:
        lines.append(f"- Desejos e Aspirações: {', '.join(brand.desires_and_aspirations)}")
    if brand.forbidden_terms:
        lines.append(f"- Termos Proibidos: {', '.join(brand.forbidden_terms)} (NUNCA usar)")
    return lines


# =============================================================================
# TITLES
# =============================================================================

VIDEO_TITLES_SYSTEM_PROMPT = """<system_prompt id="video-titles-generator">
<identity>
You are a YouTube thumbnail title specialist with expertise in behavioral
psychology, tribal marketing and high-CTR copywriting.
</identity>

<core_mission>
Generate thumbnail titles that:
1. CREATE an irresistible curiosity gap
2. TRIGGER tribal identity recognition
3. PROMISE a specific transformation
4. FIT thumbnail constraints (readable at 200px)
5. ALIGN with the video's core value
</core_mission>

## PSYCHOLOGICAL TRIGGERS (use at least 2 per title)
CURIOSITY GAP, FEAR OF MISSING OUT, CONTRARIAN, SPECIFICITY, IDENTITY,
REVELATION, TRANSFORMATION, AUTHORITY CHALLENGE, URGENCY, SOCIAL PROOF

## TRIBAL ANGLES
- HEREGE: "A MENTIRA DE [crença comum]" / "POR QUE [conselho popular] NÃO FUNCIONA"
- VISIONÁRIO: "COMO [resultado] EM [tempo]" / "O FUTURO DE [tema]"
- TRADUTOR: "O QUE NINGUÉM EXPLICA SOBRE [tema]" / "[Tema] EXPLICADO EM [tempo]"
- TESTEMUNHA: "EU [erro] ANTES DISSO" / "COMO EU [transformação]"

## ABSOLUTE RULES
1. MAX 6 WORDS (ideal: 4-5)
2. ALL CAPS
3. CONCRETE LANGUAGE ("DINHEIRO" > "RECURSOS")
4. OPEN LOOP: create curiosity, never give the answer away
5. FRONT-LOAD VALUE: most important word first
6. Never use generic titles, empty words ("INCRÍVEL"), weak questions
   ("VOCÊ SABIA?") or the brand's forbidden terms

## OUTPUT FORMAT
{
  "titles": [
    {
      "title": "TÍTULO EM CAPS",
      "word_count": 4,
      "formula_used": "POR QUE + [GRUPO] + [AÇÃO CONTRÁRIA]",
      "triggers": ["CURIOSITY GAP", "CONTRARIAN"],
      "tribal_angle": "HEREGE",
      "hook_factor": 92,
      "reason": "Explicação de 1 linha do porquê funciona"
    }
  ],
  "recommended": 0,
  "recommendation_reason": "Por que este é o melhor para o contexto"
}

hook_factor (0-100): curiosity gap 25%, tribal alignment 20%, word economy
15%, specificity 15%, value promise 15%, visual readability 10%.

IMPORTANTE:
- Gere EXATAMENTE 5 opções distintas
- Cada título deve ter um estilo diferente
- Retorne APENAS o JSON, sem explicações
</system_prompt>"""


def get_video_titles_user_prompt(data: VideoTitlesInput) -> str:
    parts = [
        "<entrada>",
        "",
        "<narrativa_selecionada>",
        f"  <angulo>{data.narrative_angle.value}</angulo>",
        f"  <titulo>{data.narrative_title}</titulo>",
        f"  <descricao>{data.narrative_description}</descricao>",
        "</narrativa_selecionada>",
    ]
    if data.theme:
        parts.append(f"<tema_principal>{data.theme}</tema_principal>")
    if data.target_audience:
        parts.append(f"<publico_alvo>{data.target_audience}</publico_alvo>")
    if data.objective:
        parts.append(f"<objetivo>{data.objective}</objetivo>")

    ctx = data.roteiro_context
    if ctx:
        parts += ["", "<contexto_do_roteiro>", "O roteiro gerado fornece contexto importante:"]
        if ctx.valor_central:
            parts.append(f"- Valor Central: {ctx.valor_central}")
        if ctx.hook_texto:
            parts.append(f"- Hook Usado: {ctx.hook_texto}")
        if ctx.thumbnail_titulo:
            parts.append(f"- Título Sugerido: {ctx.thumbnail_titulo}")
        if ctx.thumbnail_estilo:
            parts.append(f"- Estilo Visual: {ctx.thumbnail_estilo}")
        parts.append("</contexto_do_roteiro>")

    brand_lines = _brand_lines(data.brand_context)
    if brand_lines:
        parts += ["", "<contexto_da_marca>", *brand_lines, "</contexto_da_marca>"]

    parts += ["", "</entrada>", "", "<instrucoes>"]
    parts.append("Gere 5 opções de título para thumbnail seguindo as diretrizes do system prompt.")
    if ctx:
        parts.append(
            "IMPORTANTE: Os títulos devem destacar o VALOR CENTRAL que o público vai aprender. "
            "Use o contexto do roteiro para refletir o conteúdo real do vídeo."
        )
    else:
        parts.append(
            'Os títulos devem fazer a pessoa pensar: "Isso é sobre mim", '
            'não "Me enganaram com clickbait".'
        )
    if data.brand_context and data.brand_context.forbidden_terms:
        parts.append(f"CRÍTICO: NUNCA usar os termos proibidos: {', '.join(data.brand_context.forbidden_terms)}")
    parts += ["</instrucoes>", "", "Retorne APENAS o JSON com 5 títulos."]
    return "\n".join(parts)


# =============================================================================
# YOUTUBE SEO
# =============================================================================

YOUTUBE_SEO_SYSTEM_PROMPT = """# SYSTEM PROMPT - YOUTUBE SEO CONTENT GENERATOR

<identity>
You are a YouTube SEO specialist. YouTube SEO balances the ALGORITHM
(searchability) and the HUMAN (clickability).
</identity>

<core_mission>
Generate YouTube metadata that ranks in YouTube and Google search, converts
impressions into clicks, drives comments and shares, and matches the brand
voice and the real value of the video.
</core_mission>

## LIMITS
- Title: 100 chars (70 visible), primary keyword in the first 40
- Description: first 150 chars above the fold, 5000 chars total
- Tags: 10-15 tags, 500 chars total
- Hashtags: 3-5 above the title, 2-3 in the description
- Timestamps when the video is longer than 5 minutes

## OUTPUT FORMAT
{
  "titulo": {
    "principal": "...",
    "caracteres": 0,
    "formula_usada": "...",
    "keyword_position": "...",
    "variacoes": ["...", "..."]
  },
  "descricao": {
    "above_the_fold": "...",
    "corpo_completo": "...",
    "caracteres_total": 0,
    "estrutura": {
      "hook": "...", "valor": "...", "contexto": "...", "timestamps": "...",
      "cta_engagement": "...", "cta_subscribe": "...", "links_relacionados": "...",
      "recursos": "...", "hashtags": "...", "keyword_block": "..."
    }
  },
  "tags": {"lista_ordenada": ["..."], "caracteres_total": 0, "estrategia": "..."},
  "hashtags": {"acima_titulo": ["#..."], "na_descricao": ["#..."]},
  "seo_analysis": {
    "primary_keyword": "...", "keyword_density_titulo": "...",
    "keyword_density_descricao": "...", "search_intent_match": "...",
    "estimated_search_volume": "...", "competition_level": "...",
    "ranking_potential": "..."
  },
  "engagement_hooks": {
    "comment_question": "...", "controversy_angle": "...", "share_trigger": "..."
  }
}

RETURN ONLY THE JSON. NO ADDITIONAL TEXT."""


def get_youtube_seo_user_prompt(data: YouTubeSEOInput) -> str:
    parts = [
        "## INPUT VARIABLES",
        "",
        f"**Thumbnail Title (selected):** {data.thumbnail_title}",
        f"**Theme:** {data.theme}",
        f"**Target Audience:** {data.target_audience}",
        f"**Primary Keyword:** {data.primary_keyword}",
        f"**Search Intent:** {data.search_intent}",
    ]
    if data.niche:
        parts.append(f"**Niche:** {data.niche}")
    if data.objective:
        parts.append(f"**Objective:** {data.objective}")

    if data.narrative_angle or data.narrative_title or data.narrative_description:
        parts += ["", "**Narrative Context:**"]
        if data.narrative_angle:
            parts.append(f"- Angle: {data.narrative_angle.value}")
        if data.narrative_title:
            parts.append(f"- Narrative Title: {data.narrative_title}")
        if data.narrative_description:
            parts.append(f"- Narrative Description: {data.narrative_description}")

    if data.secondary_keywords:
        parts += ["", "**Secondary Keywords:**"]
        parts += [f"- {kw}" for kw in data.secondary_keywords]

    ctx = data.roteiro_context
    parts += ["", "**Script Context:**"]
    if ctx.valor_central:
        parts.append(f"- Core Value: {ctx.valor_central}")
    if ctx.hook_texto:
        parts.append(f"- Hook: {ctx.hook_texto}")
    if ctx.topicos:
        parts.append("- Topics Covered:")
        parts += [f"  {i}. {topic}" for i, topic in enumerate(ctx.topicos, start=1)]
    if ctx.duracao:
        parts.append(f"- Duration: {ctx.duracao}")

    brand = data.brand
    if brand:
        parts += ["", "**Brand Context:**"]
        if brand.voice_tone:
            parts.append(f"- Voice Tone: {brand.voice_tone}")
        if brand.brand_voice:
            parts.append(f"- Brand Voice: {brand.brand_voice}")
        if brand.channel_name:
            parts.append(f"- Channel Name: {brand.channel_name}")
        if brand.target_audience:
            parts.append(f"- Target Audience (from brand): {brand.target_audience}")
        if brand.preferred_ctas:
            parts.append(f"- Preferred CTAs: {brand.preferred_ctas}")
        if brand.forbidden_terms:
            parts.append(f"- Forbidden Terms: {', '.join(brand.forbidden_terms)}")

    parts += [
        "",
        "## REQUIREMENTS",
        "",
        "1. Generate YouTube-optimized title (max 70 chars visible, keyword in first 40)",
        "2. Create compelling above-the-fold description (first 150 chars)",
        "3. Include timestamps if duration >5 minutes",
        "4. Generate 10-15 optimized tags (max 500 chars total)",
        "5. Select 3-5 hashtags for above title, 2-3 for description",
        "6. Include engagement hooks (comment question, controversy angle, share trigger)",
        "7. Match brand voice tone if provided",
        "8. Avoid forbidden terms if specified",
        "",
        "Generate complete YouTube SEO metadata in JSON format.",
    ]
    return "\n".join(parts)


# =============================================================================
# SCRIPT
# =============================================================================

_DURATION_GUIDE = {
    VideoDuration.SHORT: "3 a 4 seções de desenvolvimento, ritmo rápido",
    VideoDuration.MEDIUM: "4 a 6 seções de desenvolvimento, um exemplo concreto por seção",
    VideoDuration.LONG: "6 a 8 seções de desenvolvimento, com histórias e dados",
    VideoDuration.EXTENDED: "8 a 12 seções de desenvolvimento, aprofundando cada ponto",
}


def get_video_script_system_prompt(data: VideoScriptInput) -> str:
    """System prompt for a structured tribal video script."""
    negative = ", ".join(data.negative_terms) if data.negative_terms else "N/A"
    optional = "\n".join(
        line
        for line in (
            f"<tema>{data.theme}</tema>" if data.theme else "",
            f"<publico>{data.target_audience}</publico>" if data.target_audience else "",
            f"<objetivo>{data.objective}</objetivo>" if data.objective else "",
            f"<intencao>{data.intention}</intencao>" if data.intention else "",
            f"<hook_narrativa>{data.narrative_hook}</hook_narrativa>" if data.narrative_hook else "",
            f"<crenca_central>{data.core_belief}</crenca_central>" if data.core_belief else "",
            f"<status_quo>{data.status_quo_challenged}</status_quo>" if data.status_quo_challenged else "",
            f"<titulo_escolhido>{data.selected_title}</titulo_escolhido>" if data.selected_title else "",
        )
        if line
    )
    rag = f"\n<contexto_adicional>\n{data.rag_context}\n</contexto_adicional>\n" if data.rag_context else ""

    return f"""<prompt id="video-script-tribal">
<identidade>
Você é um roteirista de vídeos TRIBAIS para YouTube. Seu roteiro une quem
pensa igual em torno de uma crença e entrega valor real em cada seção.
</identidade>

<narrativa>
<angulo>{data.narrative_angle.value}</angulo>
<titulo>{data.narrative_title}</titulo>
<descricao>{data.narrative_description}</descricao>
{optional}
</narrativa>

<parametros>
<duracao>{data.duration.value}</duracao>
<estrutura_sugerida>{_DURATION_GUIDE[data.duration]}</estrutura_sugerida>
<cta>{data.cta or "Inscreva-se no canal para o próximo vídeo da série."}</cta>
<termos_proibidos>{negative}</termos_proibidos>
</parametros>
{rag}
<regras>
1. Hook nos primeiros 10 segundos, de um destes tipos: reconhecimento, provocacao, promessa, pergunta
2. Cada seção de desenvolvimento tem tipo (problema, conceito, passo, exemplo, erro, contraste, sintese, cta)
3. Cada seção tem insight próprio e transição para a próxima
4. Notas de gravação em todas as partes (tom, pausas, ênfases)
5. Thumbnail com título de no máximo 6 palavras que cria curiosidade
6. Caption com no mínimo 200 palavras, incluindo uma seção "Na prática"
7. Nunca use os termos proibidos
</regras>

<formato_saida>
Retorne APENAS JSON válido:
{{
  "meta": {{"duracao_estimada": "...", "angulo_tribal": "...", "valor_central": "...", "transformacao_prometida": "..."}},
  "thumbnail": {{"titulo": "...", "expressao": "...", "texto_overlay": "...", "estilo": "...", "cores_sugeridas": "..."}},
  "roteiro": {{
    "hook": {{"texto": "...", "tipo": "provocacao", "nota_gravacao": "..."}},
    "desenvolvimento": [
      {{"numero": 1, "tipo": "problema", "topico": "...", "insight": "...", "exemplo": "...", "transicao": "...", "nota_gravacao": "..."}}
    ],
    "cta": {{"texto": "...", "proximo_passo": "...", "nota_gravacao": "..."}}
  }},
  "notas_producao": {{"tom_geral": "...", "ritmo": "...", "visuais_chave": ["..."], "musica_mood": "..."}},
  "caption": "...",
  "hashtags": ["#..."]
}}
</formato_saida>
</prompt>"""


def get_video_script_user_prompt(data: VideoScriptInput) -> str:
    parts = [
        "## INPUT VARIABLES",
        "",
        f"**Narrative Angle:** {data.narrative_angle.value}",
        f"**Narrative Title:** {data.narrative_title}",
        f"**Narrative Description:** {data.narrative_description}",
        f"**Duration:** {data.duration.value}",
    ]
    if data.theme:
        parts.append(f"**Theme:** {data.theme}")
    if data.target_audience:
        parts.append(f"**Target Audience:** {data.target_audience}")
    if data.objective:
        parts.append(f"**Objective:** {data.objective}")
    if data.intention:
        parts.append(f"**Intention:** {data.intention}")
    if data.cta:
        parts.append(f"**CTA:** {data.cta}")
    if data.selected_title:
        parts.append(f"**Selected Title:** {data.selected_title}")
    if data.negative_terms:
        parts.append(f"**Negative Terms:** {', '.join(data.negative_terms)}")

    parts += [
        "",
        "## REQUIREMENTS",
        "",
        "1. Generate complete video script following the tribal philosophy",
        f"2. Adapt content depth for selected duration: {data.duration.value}",
        "3. Include all required sections (hook, development, CTA)",
        "4. Each development section must have a defined type",
        "5. Include thumbnail suggestions with curiosity-creating title",
        '6. Generate caption with minimum 200 words including "Na prática" section',
        "7. Return valid JSON only",
    ]
    return "\n".join(parts)


def get_video_script_refactor_system_prompt(data: VideoScriptRefactorInput) -> str:
    negative = ", ".join(data.negative_terms) if data.negative_terms else "N/A"
    return f"""<prompt id="video-script-refactor">
<identidade>
Você refina roteiros de vídeo TRIBAIS do YouTube. Seu trabalho é um
BISTURI, não um machado: preserve o que funciona e implemente exatamente o
que o usuário pediu.
</identidade>

<preserve_sempre>
1. O ÂNGULO TRIBAL
2. A THROUGHLINE
3. A CRENÇA CENTRAL
4. O TOM AUTÊNTICO
5. AS NOTAS DE GRAVAÇÃO
</preserve_sempre>

<cuidados>
- Encurtar significa remover redundância, não profundidade
- Alongar significa adicionar valor, não encher linguiça
- Mais exemplos significa histórias específicas, não genéricas
</cuidados>

<entrada>
<feedback_usuario>{data.refactor_instructions}</feedback_usuario>
<contexto_narrativa>
  <angulo>{data.narrative_angle.value}</angulo>
  <titulo>{data.narrative_title}</titulo>
  <crenca_central>{data.core_belief or ""}</crenca_central>
  <status_quo>{data.status_quo_challenged or ""}</status_quo>
</contexto_narrativa>
<parametros>
  <duracao_alvo>{data.duration.value}</duracao_alvo>
  <tema>{data.theme or ""}</tema>
  <publico>{data.target_audience or ""}</publico>
  <termos_proibidos>{negative}</termos_proibidos>
  <ctas_preferidos>{data.cta or ""}</ctas_preferidos>
</parametros>
<pesquisa_disponivel>{data.rag_context or "Não disponível"}</pesquisa_disponivel>
<roteiro_atual>
{data.current_script}
</roteiro_atual>
</entrada>

<formato_saida>
Retorne o JSON no mesmo formato do roteiro original, com um bloco extra
"refactor_metadata": {{"feedback_original": "...", "refactor_notes": "...", "mudancas_principais": ["..."]}}
</formato_saida>
</prompt>"""


def get_video_script_refactor_user_prompt(data: VideoScriptRefactorInput) -> str:
    return "\n".join([
        "## REFACTOR REQUEST",
        "",
        f"**User Feedback:** {data.refactor_instructions}",
        "",
        "**Current Script Context:**",
        f"- Angle: {data.narrative_angle.value}",
        f"- Title: {data.narrative_title}",
        f"- Duration: {data.duration.value}",
        f"- Theme: {data.theme or '(not specified)'}",
        f"- Target Audience: {data.target_audience or '(not specified)'}",
        "",
        "**CURRENT SCRIPT (JSON):**",
        "```",
        data.current_script,
        "```",
        "",
        "## REFACTORING INSTRUCTIONS",
        "",
        "1. Address the specific improvement requested",
        "2. Maintain the tribal angle and core message",
        f"3. Keep the estimated duration consistent with {data.duration.value}",
        "4. Preserve what already works well",
        "5. Return complete valid JSON in the same format",
    ])


# =============================================================================
# THUMBNAIL
# =============================================================================

THUMBNAIL_SYSTEM_PROMPT = """<system_prompt id="thumbnail-prompt">
<identidade>
Você é um especialista em thumbnails de YouTube de ALTO CTR. Você gera
prompts para modelos de imagem que criam thumbnails que geram curiosidade
sem ser clickbait, são legíveis em 200px de largura, têm texto com alto
contraste e usam o formato 16:9 horizontal.
</identidade>

<regras_absolutas>
1. Texto: máximo 4-6 palavras, BOLD, legível em miniatura
2. Contraste: texto SEMPRE legível sobre o fundo
3. Composição: sujeito principal + texto + fundo simples
4. Safe zone: nada cortado nas bordas (margem 10%)
5. Formato: 16:9 horizontal SEMPRE
</regras_absolutas>

<estrutura_prompt>
LINHA 1: "YouTube thumbnail, 1280x720, 16:9 horizontal, [estilo_base]"
LINHA 2: "[descrição pessoa/objeto], [pose], [expressão], [vestuário]"
LINHA 3: "bold text overlay '[TEXTO]' in [cor] [tipografia], [posição], high contrast, readable at small size"
LINHA 4: "[tipo fundo] background, [cores], [elementos extras]"
LINHA 5: "[tipo iluminação], [atmosfera], [extras visuais]"
</estrutura_prompt>

<formato_saida>
Retorne APENAS JSON válido:
{
  "prompt": "[prompt completo, 5 linhas estruturadas]",
  "negative_prompt": "blurry text, illegible typography, misspelled words, text cut off at edges, watermark, low quality, vertical format, cluttered composition",
  "especificacoes": {
    "texto": "[texto exato da thumbnail]",
    "cor_texto": "[hex]",
    "cor_fundo": "[hex]",
    "posicao_texto": "centro|terco_superior|terco_inferior",
    "expressao": "[expressão facial]"
  },
  "variacoes": ["Variação 1: ...", "Variação 2: ..."]
}
</formato_saida>
</system_prompt>"""


def _truncate_reference(data: str) -> str:
    return f"{data[:BASE64_PREVIEW_CHARS]}... (truncated, use full base64 in generation)"


def get_thumbnail_user_prompt(data: VideoThumbnailInput) -> str:
    style_info = STYLE_DESCRIPTORS.get(data.estilo, STYLE_DESCRIPTORS[ThumbnailStyle.PROFISSIONAL])
    descriptors, palette, background = (part.strip() for part in style_info.split("|"))
    title = data.thumbnail_title

    prompt = f"""<entradas>
<titulo_thumbnail>{title}</titulo_thumbnail>
<estilo>{data.estilo.value}</estilo>
<estilo_descritores>{style_info}</estilo_descritores>
<tema>{data.contexto_tematico}</tema>
<expressao_sugerida>{data.expressao or "confiante"}</expressao_sugerida>
<referencia_pessoa>{"SIM (foto fornecida em base64)" if data.referencia_imagem_1 else "NÃO (use pessoa genérica compatível)"}</referencia_pessoa>
<referencia_estilo>{"SIM (referência visual fornecida)" if data.referencia_imagem_2 else "NÃO"}</referencia_estilo>
</entradas>

<mapeamento_estilos>
- Descritores: {descriptors}
- Paleta de cores: {palette}
- Tipo de fundo: {background}
</mapeamento_estilos>

<regras_texto_thumbnail>
TEXTO: "{title}"
1. Máximo 6 palavras (ideal: 3-4), SEMPRE em CAPS
2. Fonte bold sans-serif
3. Fundo escuro: texto branco/amarelo. Fundo claro: texto preto/azul escuro
4. Posição: centro ou terço superior, com outline ou shadow
</regras_texto_thumbnail>

<variacao_index>
Variação solicitada: {data.variacao_index + 1} de 5
</variacao_index>"""

    if data.referencia_imagem_1:
        prompt += f"\n\n<referencia_pessoa_base64>\n{_truncate_reference(data.referencia_imagem_1)}\n</referencia_pessoa_base64>"
    if data.referencia_imagem_2:
        prompt += f"\n\n<referencia_estilo_base64>\n{_truncate_reference(data.referencia_imagem_2)}\n</referencia_estilo_base64>"

    person = (
        "Use a foto fornecida como referência principal para a pessoa"
        if data.referencia_imagem_1
        else "Use pessoa genérica compatível com o contexto"
    )
    prompt += f"""

<instrucoes_geracao>
1. Siga EXATAMENTE a estrutura de 5 linhas
2. Use o título "{title}" como texto overlay
3. Adapte o estilo "{data.estilo.value}" conforme os descritores
4. {person}
5. Garanta alto contraste entre texto e fundo
</instrucoes_geracao>

Retorne APENAS o JSON."""
    return prompt
