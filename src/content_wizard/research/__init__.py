"""Best-effort enrichment: knowledge base RAG, YouTube transcripts, reference pages and web research."""

from .apify import (
    ApifyTranscriber,
    extract_youtube_video_id,
    format_transcription_for_prompt,
    get_youtube_thumbnail,
    is_apify_configured,
    is_youtube_url,
    transcribe_multiple_videos,
    transcribe_youtube,
)
from .extractor import ReferenceExtractor, format_extracted_for_prompt
from .knowledge import KnowledgeBase, KnowledgeDocument
from .rag import (
    format_rag_for_prompt,
    format_rag_sources_for_metadata,
    generate_wizard_rag_context,
    generate_wizard_rag_context_from_selection,
    get_default_assembler,
    get_wizard_rag_stats,
    is_wizard_rag_available,
    set_default_assembler,
)
from .search import (
    WebSearcher,
    format_research_for_prompt,
    is_research_available,
    plan_research_queries,
    run_research,
)
from .synthesizer import (
    SynthesizedResearch,
    format_synthesized_research_for_prompt,
    synthesize_research,
)

__all__ = [
    # Transcription
    "ApifyTranscriber",
    "extract_youtube_video_id",
    "format_transcription_for_prompt",
    "get_youtube_thumbnail",
    "is_apify_configured",
    "is_youtube_url",
    "transcribe_multiple_videos",
    "transcribe_youtube",
    # Reference extraction
    "ReferenceExtractor",
    "format_extracted_for_prompt",
    # RAG
    "KnowledgeBase",
    "KnowledgeDocument",
    "format_rag_for_prompt",
    "format_rag_sources_for_metadata",
    "generate_wizard_rag_context",
    "generate_wizard_rag_context_from_selection",
    "get_default_assembler",
    "get_wizard_rag_stats",
    "is_wizard_rag_available",
    "set_default_assembler",
    # Web research
    "WebSearcher",
    "format_research_for_prompt",
    "is_research_available",
    "plan_research_queries",
    "run_research",
    # Research synthesis
    "SynthesizedResearch",
    "format_synthesized_research_for_prompt",
    "synthesize_research",
]
