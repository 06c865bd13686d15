"""RAG context for wizard generation.

Best-effort enrichment: nothing here raises. When retrieval is off,
finds nothing or fails, callers get ``ServiceResult.ok(None)`` and the
wizard continues without knowledge-base context.
"""

from __future__ import annotations

import logging

from ..constants import (
    RAG_DEFAULT_MAX_CHUNKS,
    RAG_DEFAULT_MAX_TOKENS,
    RAG_DEFAULT_THRESHOLD,
    RagAssembler,
    RagMode,
    RagSourceDict,
    RagStatsDict,
)
from ..content.models import RagConfig, RagResult
from ..providers.config import get_settings
from ..results import ServiceResult
from .knowledge import KnowledgeBase

_logger = logging.getLogger("content_wizard.rag")

RAG_SEPARATOR = "═" * 63

# Module-level default backend
_default_assembler: RagAssembler | None = None


def get_default_assembler() -> RagAssembler:
    """Knowledge base rooted at settings.knowledge_dir."""
    global _default_assembler
    if _default_assembler is None:
        _default_assembler = KnowledgeBase(get_settings().knowledge_dir)
    return _default_assembler


def set_default_assembler(assembler: RagAssembler | None) -> None:
    """Replace the default backend (None resets to the knowledge base)."""
    global _default_assembler
    _default_assembler = assembler


async def generate_wizard_rag_context(
    query: str,
    config: RagConfig | None = None,
    assembler: RagAssembler | None = None,
) -> ServiceResult[RagResult]:
    """Retrieve knowledge-base context for a generation query.

    Args:
        query: Free-text query (usually theme plus narrative).
        config: Mode, threshold, chunk limit and optional selection.
            ``auto`` (or unset) searches everything. ``manual`` searches
            only the selected documents/collections and is skipped when
            nothing is selected.
        assembler: Retrieval backend. Defaults to the knowledge base.

    Returns:
        ok(RagResult) with context, or ok(None) when there is nothing to add.
    """
    config = config or RagConfig()
    try:
        has_selection = bool(config.documents or config.collections)
        if config.mode == RagMode.MANUAL.value and not has_selection:
            return ServiceResult.ok(None)

        backend = assembler or get_default_assembler()
        result = await backend.assemble(
            query,
            threshold=config.threshold if config.threshold is not None else RAG_DEFAULT_THRESHOLD,
            max_chunks=config.max_chunks if config.max_chunks is not None else RAG_DEFAULT_MAX_CHUNKS,
            max_tokens=RAG_DEFAULT_MAX_TOKENS,
            documents=config.documents or None,
            collections=config.collections or None,
        )

        if not result.context or result.chunks_included == 0:
            return ServiceResult.ok(None)

        _logger.info(
            f"RAG_CONTEXT | chunks:{result.chunks_included} | "
            f"tokens:{result.tokens_used} | sources:{len(result.sources)}"
        )
        return ServiceResult.ok(
            RagResult(
                context=result.context,
                sources=list(result.sources),
                tokens_used=result.tokens_used,
                chunks_included=result.chunks_included,
            )
        )
    except Exception as e:
        _logger.warning(f"RAG_ERROR | query:{query[:80]} | error:{e}")
        return ServiceResult.ok(None)


async def generate_wizard_rag_context_from_selection(
    query: str,
    config: RagConfig,
    assembler: RagAssembler | None = None,
) -> ServiceResult[RagResult]:
    """Retrieve context restricted to the documents/collections in config."""
    manual = config.model_copy(update={"mode": RagMode.MANUAL.value})
    return await generate_wizard_rag_context(query, manual, assembler)


async def is_wizard_rag_available(assembler: RagAssembler | None = None) -> bool:
    """Whether the backend has any indexed content. Never raises."""
    try:
        stats = await (assembler or get_default_assembler()).stats()
        return bool(stats["hasEmbeddedDocuments"])
    except Exception as e:
        _logger.debug(f"RAG availability check failed: {e}")
        return False


async def get_wizard_rag_stats(assembler: RagAssembler | None = None) -> RagStatsDict | None:
    """Document and chunk counts, or None when unavailable."""
    try:
        stats = await (assembler or get_default_assembler()).stats()
        return {
            "totalDocuments": int(stats["totalDocuments"]),
            "totalChunks": int(stats["totalChunks"]),
            "hasEmbeddedDocuments": bool(stats["hasEmbeddedDocuments"]),
        }
    except Exception as e:
        _logger.debug(f"RAG stats failed: {e}")
        return None


def format_rag_for_prompt(rag_result: RagResult | None) -> str:
    """Render a RAG result as a prompt block ("" when empty)."""
    if rag_result is None or not rag_result.context:
        return ""

    parts = [
        RAG_SEPARATOR,
        "CONTEXTO ADICIONAL (Base de Conhecimento)",
        RAG_SEPARATOR,
        "",
    ]
    if rag_result.sources:
        parts.append("Fontes utilizadas:")
        parts.extend(f"  - {source.title}" for source in rag_result.sources)
        parts.append("")
    parts.append(rag_result.context)
    parts.append("")
    parts.append(RAG_SEPARATOR)
    return "\n".join(parts)


def format_rag_sources_for_metadata(rag_result: RagResult | None) -> list[RagSourceDict]:
    """Compact source list for content metadata."""
    if rag_result is None:
        return []
    return [{"id": s.id, "title": s.title} for s in rag_result.sources]
