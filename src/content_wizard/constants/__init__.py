"""Global constants package for the content wizard.

PACKAGE STRUCTURE:
-----------------
- limits.py   : Carousel contract, retry/timeouts, RAG defaults
- status.py   : Content, angle, slide, video and wizard enums
- types.py    : Type aliases, TypedDicts, protocols

USAGE EXAMPLES:
--------------
    from content_wizard.constants import CAROUSEL_BODY_MAX_CHARS
    from content_wizard.constants import ContentType, NarrativeAngle
    from content_wizard.constants import RagAssembler
"""

from .limits import (
    APIFY_BATCH_DELAY_SECONDS,
    APIFY_POLL_INTERVAL_SECONDS,
    APIFY_RUN_TIMEOUT_SECONDS,
    CAROUSEL_BODY_MAX_CHARS,
    CAROUSEL_CAPTION_MAX_WORDS,
    CAROUSEL_CAPTION_MIN_WORDS,
    CAROUSEL_DEFAULT_SLIDES,
    CAROUSEL_TITLE_MAX_WORDS,
    NARRATIVES_COUNT,
    RAG_CHUNK_SIZE_WORDS,
    RAG_DEFAULT_MAX_CHUNKS,
    RAG_DEFAULT_MAX_TOKENS,
    RAG_DEFAULT_THRESHOLD,
    VIDEO_SCRIPT_MAX_TOKENS,
    VIDEO_SERVICE_MAX_RETRIES,
    VIDEO_TITLES_COUNT,
    WIZARD_DEFAULT_TIMEOUT,
    WIZARD_MAX_RETRIES,
    YOUTUBE_SEO_MAX_TOKENS,
)
from .status import (
    ApifyRunStatus,
    ContentType,
    DevelopmentSectionType,
    HookType,
    NarrativeAngle,
    RagMode,
    SlideType,
    VideoDuration,
    WizardStep,
)
from .types import (
    JSON,
    ChatClient,
    ChatMessage,
    PathLike,
    ProgressCallback,
    RagAssembler,
    RagSourceDict,
    RagStatsDict,
    ServicesStatusDict,
)

__all__ = [
    # limits
    "APIFY_BATCH_DELAY_SECONDS",
    "APIFY_POLL_INTERVAL_SECONDS",
    "APIFY_RUN_TIMEOUT_SECONDS",
    "CAROUSEL_BODY_MAX_CHARS",
    "CAROUSEL_CAPTION_MAX_WORDS",
    "CAROUSEL_CAPTION_MIN_WORDS",
    "CAROUSEL_DEFAULT_SLIDES",
    "CAROUSEL_TITLE_MAX_WORDS",
    "NARRATIVES_COUNT",
    "RAG_CHUNK_SIZE_WORDS",
    "RAG_DEFAULT_MAX_CHUNKS",
    "RAG_DEFAULT_MAX_TOKENS",
    "RAG_DEFAULT_THRESHOLD",
    "VIDEO_SCRIPT_MAX_TOKENS",
    "VIDEO_SERVICE_MAX_RETRIES",
    "VIDEO_TITLES_COUNT",
    "WIZARD_DEFAULT_TIMEOUT",
    "WIZARD_MAX_RETRIES",
    "YOUTUBE_SEO_MAX_TOKENS",
    # status
    "ApifyRunStatus",
    "ContentType",
    "DevelopmentSectionType",
    "HookType",
    "NarrativeAngle",
    "RagMode",
    "SlideType",
    "VideoDuration",
    "WizardStep",
    # types
    "JSON",
    "ChatClient",
    "ChatMessage",
    "PathLike",
    "ProgressCallback",
    "RagAssembler",
    "RagSourceDict",
    "RagStatsDict",
    "ServicesStatusDict",
]
