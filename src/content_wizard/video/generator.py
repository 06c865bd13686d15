"""Video services: thumbnail titles, YouTube SEO, scripts and thumbnail prompts."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from ..constants import (
    VIDEO_SCRIPT_MAX_TOKENS,
    VIDEO_SERVICE_MAX_RETRIES,
    VIDEO_TITLES_COUNT,
    YOUTUBE_SEO_MAX_TOKENS,
    ChatClient,
)
from ..content.models import VideoScriptStructured
from ..content.validation import ValidationError, validate_video_script_response
from ..providers.config import WizardConfig, get_wizard_config
from ..providers.openrouter import (
    NOT_CONFIGURED_MESSAGE,
    OpenRouterEmptyResponseError,
    OpenRouterError,
    get_openrouter_client,
)
from ..results import ServiceResult
from .models import (
    ThumbnailPromptOutput,
    VideoScriptInput,
    VideoScriptRefactorInput,
    VideoThumbnailInput,
    VideoTitleOption,
    VideoTitlesInput,
    YouTubeSEOInput,
    YouTubeSEOOutput,
)
from .prompts import (
    THUMBNAIL_SYSTEM_PROMPT,
    VIDEO_TITLES_SYSTEM_PROMPT,
    YOUTUBE_SEO_SYSTEM_PROMPT,
    get_model_for_duration,
    get_thumbnail_user_prompt,
    get_video_script_refactor_system_prompt,
    get_video_script_refactor_user_prompt,
    get_video_script_system_prompt,
    get_video_script_user_prompt,
    get_video_titles_user_prompt,
    get_youtube_seo_user_prompt,
)

_logger = logging.getLogger("ai_calls")

VIDEO_TITLES_MODEL = "google/gemini-3-flash-preview"
YOUTUBE_SEO_MODEL = "openai/gpt-4.1-mini"
THUMBNAIL_PROMPT_MODEL = "openai/gpt-4.1"

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def _match_json(text: str) -> Any | None:
    """Greedy {...} match; None when the text has no object."""
    match = _JSON_OBJECT_RE.search(text)
    if not match:
        return None
    return json.loads(match.group(0))


def _title_option(index: int, item: Any) -> VideoTitleOption:
    item = item if isinstance(item, dict) else {}
    return VideoTitleOption(
        id=f"title-{index}",
        title=str(item.get("title") or ""),
        hook_factor=round(float(item.get("hook_factor") or 50)),
        reason=str(item.get("reason") or ""),
        word_count=item.get("word_count") or None,
        formula_used=item.get("formula_used") or None,
        triggers=item.get("triggers") or None,
        tribal_angle=item.get("tribal_angle") or None,
    )


class VideoGenerator:
    """LLM services for long-form video.

    Titles and thumbnail prompts retry transient errors; SEO and scripts
    make a single JSON-mode call.

    Usage:
        generator = VideoGenerator()
        titles = await generator.generate_titles(VideoTitlesInput.from_narrative(narrative))
        script = await generator.generate_script(VideoScriptInput.from_narrative(narrative))
    """

    def __init__(self, client: ChatClient | None = None, config: WizardConfig | None = None):
        self.client = client or get_openrouter_client()
        self.config = config or get_wizard_config()

    async def _call(
        self,
        task: str,
        model: str,
        system: str,
        user: str,
        temperature: float,
        *,
        max_tokens: int | None = None,
        json_mode: bool = False,
        max_retries: int = 0,
    ) -> str:
        return await self.client.chat(
            [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            model=self.config.model_for(task, model),
            temperature=self.config.temperature_for(task, temperature),
            max_tokens=self.config.max_tokens_for(task, max_tokens),
            json_mode=json_mode,
            task=task,
            max_retries=max_retries,
        )

    # =========================================================================
    # TITLES
    # =========================================================================

    async def generate_titles(self, data: VideoTitlesInput) -> ServiceResult[list[VideoTitleOption]]:
        """Five thumbnail title options for the selected narrative."""
        try:
            text = await self._call(
                "video_titles",
                VIDEO_TITLES_MODEL,
                VIDEO_TITLES_SYSTEM_PROMPT,
                get_video_titles_user_prompt(data),
                temperature=0.8,
                max_retries=VIDEO_SERVICE_MAX_RETRIES,
            )
            parsed = _match_json(text)
        except Exception as e:
            _logger.error(f"VIDEO_TITLES_ERROR | error:{e}")
            return ServiceResult.fail(str(e))

        if parsed is None:
            return ServiceResult.fail("Invalid JSON response from LLM")
        if not isinstance(parsed, dict) or not isinstance(parsed.get("titles"), list):
            return ServiceResult.fail("Invalid response format: missing titles array")

        try:
            titles = [
                _title_option(index, item)
                for index, item in enumerate(parsed["titles"][:VIDEO_TITLES_COUNT], start=1)
            ]
        except (TypeError, ValueError) as e:
            return ServiceResult.fail(f"Invalid response format: {e}")
        return ServiceResult.ok(titles)

    # =========================================================================
    # YOUTUBE SEO
    # =========================================================================

    async def generate_youtube_seo(self, data: YouTubeSEOInput) -> ServiceResult[YouTubeSEOOutput]:
        """Title, description, tags and hashtags for a YouTube upload."""
        if not self.client.is_configured:
            return ServiceResult.fail(NOT_CONFIGURED_MESSAGE)

        _logger.info(f"YOUTUBE_SEO | keyword:{data.primary_keyword}")
        try:
            text = await self._call(
                "youtube_seo",
                YOUTUBE_SEO_MODEL,
                YOUTUBE_SEO_SYSTEM_PROMPT,
                get_youtube_seo_user_prompt(data),
                temperature=0.7,
                max_tokens=YOUTUBE_SEO_MAX_TOKENS,
                json_mode=True,
            )
        except OpenRouterEmptyResponseError:
            return ServiceResult.fail("No content in YouTube SEO generation response")
        except OpenRouterError as e:
            if e.status_code is not None:
                return ServiceResult.fail(f"YouTube SEO generation failed: {e}")
            return ServiceResult.fail(str(e))

        try:
            parsed = json.loads(text)
        except ValueError as e:
            return ServiceResult.fail(str(e))

        if not isinstance(parsed, dict) or not all(parsed.get(k) for k in ("titulo", "descricao", "tags")):
            _logger.error("YOUTUBE_SEO_ERROR | invalid response structure")
            return ServiceResult.fail("Invalid YouTube SEO response structure")

        try:
            seo = YouTubeSEOOutput.model_validate(parsed)
        except ValueError as e:
            return ServiceResult.fail(f"Invalid YouTube SEO response structure: {e}")

        _logger.info(
            f"YOUTUBE_SEO | title:{seo.titulo.principal} | "
            f"description:{seo.descricao.caracteres_total} chars | tags:{len(seo.tags.lista_ordenada)}"
        )
        return ServiceResult.ok(seo)

    # =========================================================================
    # SCRIPT
    # =========================================================================

    async def _script_call(
        self, task: str, label: str, model: str, system: str, user: str, temperature: float
    ) -> ServiceResult[VideoScriptStructured]:
        """Shared body of generate_script and refactor_script.

        label names the operation in error messages ("generation", "refactoring").
        """
        if not self.client.is_configured:
            return ServiceResult.fail(NOT_CONFIGURED_MESSAGE)

        try:
            text = await self._call(
                task, model, system, user,
                temperature=temperature,
                max_tokens=VIDEO_SCRIPT_MAX_TOKENS,
                json_mode=True,
            )
        except OpenRouterEmptyResponseError:
            return ServiceResult.fail(f"No content in video script {label} response")
        except OpenRouterError as e:
            if e.status_code is not None:
                return ServiceResult.fail(f"Video script {label} failed: {e}")
            return ServiceResult.fail(str(e))

        try:
            parsed = json.loads(text)
        except ValueError as e:
            return ServiceResult.fail(str(e))

        structure = "Invalid video script response structure" if task == "video_script" else (
            "Invalid video script refactor response structure"
        )
        if not isinstance(parsed, dict) or not all(parsed.get(k) for k in ("meta", "roteiro", "thumbnail")):
            _logger.error(f"VIDEO_SCRIPT_ERROR | task:{task} | invalid response structure")
            return ServiceResult.fail(structure)

        try:
            script = validate_video_script_response(parsed)
        except ValidationError as e:
            _logger.error(f"VIDEO_SCRIPT_ERROR | task:{task} | field:{e.field} | {e.message}")
            return ServiceResult.fail(f"{structure}: {e.message}")

        _logger.info(
            f"VIDEO_SCRIPT | task:{task} | duration:{script.meta.duracao_estimada} | "
            f"sections:{len(script.roteiro.desenvolvimento)}"
        )
        return ServiceResult.ok(script)

    async def generate_script(self, data: VideoScriptInput) -> ServiceResult[VideoScriptStructured]:
        """Structured script for the selected narrative and duration."""
        return await self._script_call(
            "video_script",
            "generation",
            get_model_for_duration(data.duration),
            get_video_script_system_prompt(data),
            get_video_script_user_prompt(data),
            temperature=0.7,
        )

    async def refactor_script(self, data: VideoScriptRefactorInput) -> ServiceResult[VideoScriptStructured]:
        """Rework an existing script according to the user's feedback."""
        _logger.info(f"VIDEO_SCRIPT_REFACTOR | instructions:{data.refactor_instructions[:120]}")
        return await self._script_call(
            "video_script_refactor",
            "refactoring",
            get_model_for_duration(data.duration),
            get_video_script_refactor_system_prompt(data),
            get_video_script_refactor_user_prompt(data),
            temperature=0.8,
        )

    # =========================================================================
    # THUMBNAIL
    # =========================================================================

    async def generate_thumbnail_prompt(
        self, data: VideoThumbnailInput
    ) -> ServiceResult[ThumbnailPromptOutput]:
        """Image-model prompt for a 16:9 thumbnail in the chosen style."""
        try:
            text = await self._call(
                "video_thumbnail",
                THUMBNAIL_PROMPT_MODEL,
                THUMBNAIL_SYSTEM_PROMPT,
                get_thumbnail_user_prompt(data),
                temperature=0.7,
                max_retries=VIDEO_SERVICE_MAX_RETRIES,
            )
            parsed = _match_json(text)
        except Exception as e:
            _logger.error(f"VIDEO_THUMBNAIL_ERROR | error:{e}")
            return ServiceResult.fail(str(e))

        if parsed is None:
            return ServiceResult.fail("Invalid JSON response from LLM")
        if not isinstance(parsed, dict) or not parsed.get("prompt") or not parsed.get("especificacoes"):
            return ServiceResult.fail("Invalid response format: missing required fields")

        try:
            return ServiceResult.ok(ThumbnailPromptOutput.model_validate(parsed))
        except ValueError as e:
            return ServiceResult.fail(f"Invalid response format: {e}")


# Module-level convenience functions

async def generate_video_titles(
    data: VideoTitlesInput, client: ChatClient | None = None
) -> ServiceResult[list[VideoTitleOption]]:
    return await VideoGenerator(client).generate_titles(data)


async def generate_youtube_seo(
    data: YouTubeSEOInput, client: ChatClient | None = None
) -> ServiceResult[YouTubeSEOOutput]:
    return await VideoGenerator(client).generate_youtube_seo(data)


async def generate_video_script(
    data: VideoScriptInput, client: ChatClient | None = None
) -> ServiceResult[VideoScriptStructured]:
    return await VideoGenerator(client).generate_script(data)


async def refactor_video_script(
    data: VideoScriptRefactorInput, client: ChatClient | None = None
) -> ServiceResult[VideoScriptStructured]:
    return await VideoGenerator(client).refactor_script(data)


async def generate_video_thumbnail(
    data: VideoThumbnailInput, client: ChatClient | None = None
) -> ServiceResult[ThumbnailPromptOutput]:
    return await VideoGenerator(client).generate_thumbnail_prompt(data)
