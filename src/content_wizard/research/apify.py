"""YouTube transcription through the Apify transcript actor.

Transcripts enrich narrative generation but are never required: missing
credentials, actor failures and timeouts all resolve to ``ok(None)``.
Only a URL that is not a YouTube video is reported as a failure.
"""

from __future__ import annotations

import asyncio
import logging
import re
import time
from typing import Any, Awaitable, Callable
from urllib.parse import parse_qs, urlparse

import httpx

from ..constants import (
    APIFY_BATCH_DELAY_SECONDS,
    APIFY_POLL_INTERVAL_SECONDS,
    APIFY_RUN_TIMEOUT_SECONDS,
    ApifyRunStatus,
)
from ..content.models import TranscriptionMetadata, VideoTranscription
from ..providers.config import get_settings
from ..results import ServiceResult

_logger = logging.getLogger("content_wizard.apify")

APIFY_API_URL = "https://api.apify.com/v2/acts"
YOUTUBE_TRANSCRIPT_ACTOR_ID = "apify~youtube-transcript"

_VIDEO_ID_RE = re.compile(r"^[a-zA-Z0-9_-]{11}$")
_EMBED_RE = re.compile(r"^/embed/([a-zA-Z0-9_-]{11})")
_SHORTS_RE = re.compile(r"^/shorts/([a-zA-Z0-9_-]{11})")


# =============================================================================
# URL HELPERS
# =============================================================================

def extract_youtube_video_id(url: str) -> str | None:
    """Extract the 11-character video id from a YouTube URL.

    Supports watch?v=, youtu.be/, /embed/ and /shorts/ URLs, and a bare id.
    Returns None for anything else.
    """
    if _VIDEO_ID_RE.match(url):
        return url

    try:
        parsed = urlparse(url)
    except ValueError:
        return None

    host = (parsed.hostname or "").lower()

    if host == "youtu.be":
        video_id = parsed.path.lstrip("/").split("/")[0]
        return video_id if _VIDEO_ID_RE.match(video_id) else None

    if host == "youtube.com" or host.endswith(".youtube.com"):
        watch = parse_qs(parsed.query).get("v")
        if watch:
            return watch[0] if _VIDEO_ID_RE.match(watch[0]) else None
        for pattern in (_EMBED_RE, _SHORTS_RE):
            match = pattern.match(parsed.path)
            if match:
                return match.group(1)

    return None


def is_youtube_url(url: str) -> bool:
    return extract_youtube_video_id(url) is not None


def get_youtube_thumbnail(video_id: str) -> str:
    """High-resolution thumbnail URL for a video id."""
    return f"https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"


def format_transcription_for_prompt(transcription: VideoTranscription, max_chars: int = 8000) -> str:
    """Render a transcription as reference content for the narratives prompt."""
    lines = [f"VÍDEO DE REFERÊNCIA: {transcription.source_url}"]
    meta = transcription.metadata
    if meta and meta.title:
        lines.append(f"Título: {meta.title}")
    if meta and meta.duration:
        lines.append(f"Duração: {meta.duration // 60}min{meta.duration % 60:02d}s")
    text = transcription.transcription
    if len(text) > max_chars:
        text = text[:max_chars] + "..."
    lines.append("")
    lines.append("Transcrição:")
    lines.append(text)
    return "\n".join(lines)


def is_apify_configured() -> bool:
    return bool(get_settings().apify_api_token)


# =============================================================================
# CLIENT
# =============================================================================

def _join_text(value: Any) -> str:
    """Transcript field is either a string or a list of {text} segments."""
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return " ".join(
            (segment.get("text") or "") for segment in value if isinstance(segment, dict)
        ).strip()
    return ""


class ApifyTranscriber:
    """Apify YouTube transcript client.

    Usage:
        transcriber = ApifyTranscriber()
        result = await transcriber.transcribe("https://youtu.be/dQw4w9WgXcQ")
        if result.success and result.data:
            print(result.data.transcription)
    """

    def __init__(
        self,
        token: str | None = None,
        timeout: float = 30.0,
        poll_interval: float = APIFY_POLL_INTERVAL_SECONDS,
        run_timeout: float = APIFY_RUN_TIMEOUT_SECONDS,
        http_client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize the transcriber.

        Args:
            token: Apify API token. Defaults to APIFY_API_TOKEN.
            timeout: HTTP request timeout in seconds.
            poll_interval: Seconds between run status checks.
            run_timeout: Maximum seconds to wait for a run.
            http_client: Optional preconfigured httpx client.
            sleep: Coroutine used between polls.
        """
        self.token = token if token is not None else get_settings().apify_api_token
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.run_timeout = run_timeout
        self._http_client = http_client
        self._sleep = sleep

    @property
    def is_configured(self) -> bool:
        return bool(self.token)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    def _url(self, path: str) -> str:
        return f"{APIFY_API_URL}/{YOUTUBE_TRANSCRIPT_ACTOR_ID}{path}"

    async def transcribe(self, video_url: str) -> ServiceResult[VideoTranscription]:
        """Transcribe one video.

        Returns:
            ok(VideoTranscription), ok(None) when unavailable, or
            fail("Invalid YouTube URL: ...") for non-YouTube input.
        """
        if not self.is_configured:
            return ServiceResult.ok(None)

        video_id = extract_youtube_video_id(video_url)
        if not video_id:
            return ServiceResult.fail(f"Invalid YouTube URL: {video_url}")

        try:
            item = await self._run_actor(video_id)
        except Exception as e:
            _logger.warning(f"APIFY_ERROR | video:{video_id} | error:{e}")
            return ServiceResult.ok(None)

        if item is None:
            return ServiceResult.ok(None)

        text = _join_text(item.get("transcript")) or _join_text(item.get("subtitles"))
        if not text:
            _logger.info(f"APIFY_EMPTY | video:{video_id}")
            return ServiceResult.ok(None)

        duration = item.get("duration")
        return ServiceResult.ok(
            VideoTranscription(
                source_url=f"https://www.youtube.com/watch?v={video_id}",
                transcription=text,
                metadata=TranscriptionMetadata(
                    video_id=video_id,
                    title=item.get("title"),
                    duration=int(duration) if isinstance(duration, (int, float)) else None,
                    thumbnail_url=item.get("thumbnailUrl") or item.get("thumbnail"),
                ),
            )
        )

    async def _run_actor(self, video_id: str) -> dict[str, Any] | None:
        """Start a run, wait for it and return the first dataset item."""
        client = await self._get_client()
        params = {"token": self.token}

        _logger.info(f"APIFY_RUN | actor:{YOUTUBE_TRANSCRIPT_ACTOR_ID} | video:{video_id}")
        response = await client.post(
            self._url("/runs"),
            params=params,
            json={
                "startUrls": [{"url": f"https://www.youtube.com/watch?v={video_id}"}],
                "language": "auto",
                "translate": "en",
                "getSubtitles": True,
                "includeTranscript": True,
            },
        )
        if response.status_code >= 400:
            _logger.warning(f"APIFY_ERROR | status:{response.status_code} {response.reason_phrase}")
            return None

        run_id = (response.json().get("data") or {}).get("id")
        if not run_id:
            return None

        if not await self._wait_for_run(run_id):
            return None

        response = await client.get(self._url(f"/runs/{run_id}/dataset/items"), params=params)
        if response.status_code >= 400:
            return None

        payload = response.json()
        items = payload.get("data") if isinstance(payload, dict) else payload
        if not items:
            return None
        return items[0]

    async def _wait_for_run(self, run_id: str) -> bool:
        """Poll run status until it succeeds, fails or times out."""
        client = await self._get_client()
        deadline = time.monotonic() + self.run_timeout

        while time.monotonic() < deadline:
            response = await client.get(self._url(f"/runs/{run_id}"), params={"token": self.token})
            if response.status_code >= 400:
                return False

            raw_status = (response.json().get("data") or {}).get("status")
            try:
                status = ApifyRunStatus(raw_status)
            except ValueError:
                status = ApifyRunStatus.RUNNING

            if status == ApifyRunStatus.SUCCEEDED:
                return True
            if status.is_failure:
                _logger.warning(f"APIFY_RUN_FAILED | run:{run_id} | status:{status.value}")
                return False

            await self._sleep(self.poll_interval)

        _logger.warning(f"APIFY_TIMEOUT | run:{run_id} | after:{self.run_timeout:.0f}s")
        return False

    async def transcribe_many(self, video_urls: list[str]) -> ServiceResult[list[VideoTranscription]]:
        """Transcribe videos one after another, skipping those without a transcript."""
        transcriptions: list[VideoTranscription] = []
        for index, url in enumerate(video_urls):
            if index:
                await self._sleep(APIFY_BATCH_DELAY_SECONDS)
            result = await self.transcribe(url)
            if result.success and result.data is not None:
                transcriptions.append(result.data)
        return ServiceResult.ok(transcriptions)


async def transcribe_youtube(
    video_url: str, transcriber: ApifyTranscriber | None = None
) -> ServiceResult[VideoTranscription]:
    """Transcribe one video with a default or given transcriber."""
    owned = transcriber is None
    transcriber = transcriber or ApifyTranscriber()
    try:
        return await transcriber.transcribe(video_url)
    finally:
        if owned:
            await transcriber.close()


async def transcribe_multiple_videos(
    video_urls: list[str], transcriber: ApifyTranscriber | None = None
) -> ServiceResult[list[VideoTranscription]]:
    """Transcribe several videos sequentially."""
    owned = transcriber is None
    transcriber = transcriber or ApifyTranscriber()
    try:
        return await transcriber.transcribe_many(video_urls)
    finally:
        if owned:
            await transcriber.close()
