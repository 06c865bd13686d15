"""Limit constants for the content wizard.

This module contains all limits and constraints:
- Carousel contract limits enforced on LLM output
- Retry and timeout settings for OpenRouter and Apify
- RAG retrieval defaults

AI CONTEXT:
-----------
The carousel limits are part of the output contract the prompts describe
to the model. The validator enforces the same numbers, so changing one
side without the other makes every generation fail validation.

MODIFICATION GUIDE:
------------------
- CAROUSEL_* limits: Update prompts.py together with these values
- RETRY_* settings: Delays are 2 ** attempt seconds
- RAG_* defaults: Used when a RagConfig leaves a field unset
"""

from typing import Final

# =============================================================================
# CAROUSEL CONTRACT
# =============================================================================

CAROUSEL_TITLE_MAX_WORDS: Final[int] = 6
"""Maximum words in a slide title (titulo)."""

CAROUSEL_BODY_MAX_CHARS: Final[int] = 130
"""Maximum characters in a slide body (corpo)."""

CAROUSEL_CAPTION_MIN_WORDS: Final[int] = 200
"""Minimum words in the carousel caption (legenda)."""

CAROUSEL_CAPTION_MAX_WORDS: Final[int] = 400
"""Maximum words in the carousel caption (legenda)."""

CAROUSEL_DEFAULT_SLIDES: Final[int] = 10
"""Slides requested when the user does not choose a number."""


# =============================================================================
# NARRATIVES
# =============================================================================

NARRATIVES_COUNT: Final[int] = 4
"""Narrative options generated per request (one per tribal angle)."""


# =============================================================================
# LLM CALLS
# =============================================================================

WIZARD_MAX_RETRIES: Final[int] = 2
"""Extra attempts after the first failed LLM call."""

WIZARD_DEFAULT_TIMEOUT: Final[float] = 60.0
"""Request timeout in seconds for wizard LLM calls."""

VIDEO_SERVICE_MAX_RETRIES: Final[int] = 3
"""Extra attempts for title and thumbnail generation."""

VIDEO_SCRIPT_MAX_TOKENS: Final[int] = 6000
"""Token ceiling for video script generation and refactor."""

YOUTUBE_SEO_MAX_TOKENS: Final[int] = 4000
"""Token ceiling for YouTube SEO metadata generation."""

VIDEO_TITLES_COUNT: Final[int] = 5
"""Title options kept from a titles generation response."""


# =============================================================================
# APIFY
# =============================================================================

APIFY_POLL_INTERVAL_SECONDS: Final[float] = 2.0
"""Seconds between actor run status checks."""

APIFY_RUN_TIMEOUT_SECONDS: Final[float] = 120.0
"""Maximum seconds to wait for a transcript run."""

APIFY_BATCH_DELAY_SECONDS: Final[float] = 0.5
"""Pause between sequential transcriptions."""


# =============================================================================
# RAG DEFAULTS
# =============================================================================

RAG_DEFAULT_THRESHOLD: Final[float] = 0.5
"""Minimum relevance score for a chunk to be included."""

RAG_DEFAULT_MAX_CHUNKS: Final[int] = 15
"""Maximum chunks assembled into a context."""

RAG_DEFAULT_MAX_TOKENS: Final[int] = 3000
"""Token budget for assembled RAG context."""

RAG_CHUNK_SIZE_WORDS: Final[int] = 180
"""Words per chunk when indexing knowledge documents."""
