"""Tests for the Apify transcription client."""

from __future__ import annotations

from unittest.mock import AsyncMock

import httpx
import pytest

from content_wizard.content.models import TranscriptionMetadata, VideoTranscription
from content_wizard.research.apify import (
    ApifyTranscriber,
    extract_youtube_video_id,
    format_transcription_for_prompt,
    get_youtube_thumbnail,
    is_youtube_url,
)
from content_wizard.results import ServiceResult

VIDEO_ID = "dQw4w9WgXcQ"


class TestVideoId:

    @pytest.mark.parametrize("url", [
        f"https://www.youtube.com/watch?v={VIDEO_ID}",
        f"https://youtube.com/watch?v={VIDEO_ID}&t=42",
        f"https://m.youtube.com/watch?v={VIDEO_ID}",
        f"https://youtu.be/{VIDEO_ID}",
        f"https://www.youtube.com/embed/{VIDEO_ID}",
        f"https://www.youtube.com/shorts/{VIDEO_ID}",
        VIDEO_ID,
    ])
    def test_supported_shapes(self, url):
        assert extract_youtube_video_id(url) == VIDEO_ID
        assert is_youtube_url(url)

    @pytest.mark.parametrize("url", [
        "https://vimeo.com/123456",
        "https://www.youtube.com/channel/abc",
        f"https://notyoutube.com/watch?v={VIDEO_ID}",
        f"https://youtube.com.evil.org/watch?v={VIDEO_ID}",
        "https://youtu.be/short",
        "https://www.youtube.com/watch?v=muito-longo-para-um-id",
        "not a url",
        "",
    ])
    def test_unsupported(self, url):
        assert extract_youtube_video_id(url) is None

    def test_thumbnail(self):
        assert get_youtube_thumbnail(VIDEO_ID) == f"https://img.youtube.com/vi/{VIDEO_ID}/maxresdefault.jpg"


def test_format_for_prompt():
    transcription = VideoTranscription(
        source_url=f"https://www.youtube.com/watch?v={VIDEO_ID}",
        transcription="x" * 20,
        metadata=TranscriptionMetadata(title="Aula", duration=125),
    )

    text = format_transcription_for_prompt(transcription, max_chars=10)

    assert text.startswith("VÍDEO DE REFERÊNCIA: https://www.youtube.com/watch?v=")
    assert "Título: Aula" in text
    assert "Duração: 2min05s" in text
    assert text.endswith("x" * 10 + "...")


def make_transcriber(statuses: list[str], items, run_status_code: int = 201):
    """Transcriber whose fake Apify API walks through the given run statuses."""
    queue = list(statuses)
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        calls.append(f"{request.method} {path}")
        assert request.url.params["token"] == "apify-token"
        if request.method == "POST":
            return httpx.Response(run_status_code, json={"data": {"id": "run-1"}})
        if path.endswith("/dataset/items"):
            return httpx.Response(200, json=items)
        return httpx.Response(200, json={"data": {"status": queue.pop(0)}})

    sleep = AsyncMock()
    transcriber = ApifyTranscriber(
        token="apify-token",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        sleep=sleep,
    )
    return transcriber, sleep, calls


class TestApifyTranscriber:

    @pytest.mark.asyncio
    async def test_not_configured_is_ok_none(self):
        transcriber = ApifyTranscriber(token="")

        result = await transcriber.transcribe(f"https://youtu.be/{VIDEO_ID}")

        assert result.is_success()
        assert result.data is None

    @pytest.mark.asyncio
    async def test_invalid_url_fails(self):
        transcriber, _, calls = make_transcriber([], [])

        result = await transcriber.transcribe("https://vimeo.com/1")

        assert result.error == "Invalid YouTube URL: https://vimeo.com/1"
        assert calls == []

    @pytest.mark.asyncio
    async def test_polls_until_succeeded(self):
        items = [{
            "title": "Aula",
            "duration": 300,
            "transcript": [{"text": "Olá"}, {"text": "mundo"}],
        }]
        transcriber, sleep, calls = make_transcriber(["READY", "RUNNING", "SUCCEEDED"], items)

        result = await transcriber.transcribe(f"https://youtu.be/{VIDEO_ID}")

        assert result.is_success()
        assert result.data.transcription == "Olá mundo"
        assert result.data.source_url == f"https://www.youtube.com/watch?v={VIDEO_ID}"
        assert result.data.metadata.video_id == VIDEO_ID
        assert result.data.metadata.duration == 300
        assert sleep.await_count == 2
        assert calls[0] == "POST /v2/acts/apify~youtube-transcript/runs"
        assert calls[-1] == "GET /v2/acts/apify~youtube-transcript/runs/run-1/dataset/items"

    @pytest.mark.asyncio
    async def test_wrapped_dataset_and_string_transcript(self):
        transcriber, _, _ = make_transcriber(["SUCCEEDED"], {"data": [{"transcript": "Texto corrido"}]})

        result = await transcriber.transcribe(VIDEO_ID)

        assert result.data.transcription == "Texto corrido"

    @pytest.mark.asyncio
    async def test_failed_run_is_ok_none(self):
        transcriber, _, calls = make_transcriber(["RUNNING", "FAILED"], [])

        result = await transcriber.transcribe(VIDEO_ID)

        assert result.is_success()
        assert result.data is None
        assert not any(c.endswith("/dataset/items") for c in calls)

    @pytest.mark.asyncio
    async def test_start_error_is_ok_none(self):
        transcriber, _, _ = make_transcriber([], [], run_status_code=402)

        result = await transcriber.transcribe(VIDEO_ID)

        assert result.is_success()
        assert result.data is None

    @pytest.mark.asyncio
    async def test_empty_transcript_is_ok_none(self):
        transcriber, _, _ = make_transcriber(["SUCCEEDED"], [{"transcript": []}])

        result = await transcriber.transcribe(VIDEO_ID)

        assert result.data is None

    @pytest.mark.asyncio
    async def test_timeout_is_ok_none(self):
        transcriber, _, _ = make_transcriber(["RUNNING"] * 5, [])
        transcriber.run_timeout = 0

        result = await transcriber.transcribe(VIDEO_ID)

        assert result.is_success()
        assert result.data is None

    @pytest.mark.asyncio
    async def test_transcribe_many_skips_missing(self):
        transcriber = ApifyTranscriber(token="apify-token", sleep=AsyncMock())
        transcriber.transcribe = AsyncMock(side_effect=[
            ServiceResult.ok(VideoTranscription(source_url="a", transcription="um")),
            ServiceResult.ok(None),
        ])

        result = await transcriber.transcribe_many(["a", "b"])

        assert [t.transcription for t in result.data] == ["um"]
