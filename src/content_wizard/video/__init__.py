"""Long-form video services: thumbnail titles, YouTube SEO, scripts and thumbnail prompts."""

from .generator import (
    VideoGenerator,
    generate_video_script,
    generate_video_thumbnail,
    generate_video_titles,
    generate_youtube_seo,
    refactor_video_script,
)
from .models import (
    BrandContext,
    RoteiroContext,
    ThumbnailPromptOutput,
    ThumbnailStyle,
    VideoScriptInput,
    VideoScriptRefactorInput,
    VideoThumbnailInput,
    VideoTitleOption,
    VideoTitlesInput,
    YouTubeSEOInput,
    YouTubeSEOOutput,
)
from .prompts import STYLE_DESCRIPTORS, get_model_for_duration

__all__ = [
    "BrandContext",
    "RoteiroContext",
    "STYLE_DESCRIPTORS",
    "ThumbnailPromptOutput",
    "ThumbnailStyle",
    "VideoGenerator",
    "VideoScriptInput",
    "VideoScriptRefactorInput",
    "VideoThumbnailInput",
    "VideoTitleOption",
    "VideoTitlesInput",
    "YouTubeSEOInput",
    "YouTubeSEOOutput",
    "generate_video_script",
    "generate_video_thumbnail",
    "generate_video_titles",
    "generate_youtube_seo",
    "get_model_for_duration",
    "refactor_video_script",
]
