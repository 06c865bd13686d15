"""Tests for ReferenceExtractor."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import patch

import httpx
import pytest

from content_wizard.content.models import ExtractedContent
from content_wizard.research.extractor import ReferenceExtractor, format_extracted_for_prompt

HTML = "<html><head><title>Artigo</title></head><body><article><p>Texto</p></article></body></html>"


def make_extractor(status: int = 200, max_chars: int = 12000) -> ReferenceExtractor:
    transport = httpx.MockTransport(lambda request: httpx.Response(status, text=HTML))
    return ReferenceExtractor(http_client=httpx.AsyncClient(transport=transport), max_chars=max_chars)


class TestReferenceExtractor:

    @pytest.mark.asyncio
    async def test_extracts_text_and_metadata(self):
        metadata = SimpleNamespace(title="Artigo", author="Ana", date="2025-01-10")
        with patch("content_wizard.research.extractor.trafilatura.extract", return_value="Texto principal"), \
                patch("content_wizard.research.extractor.trafilatura.extract_metadata", return_value=metadata):
            result = await make_extractor().extract("https://example.com/artigo")

        assert result.is_success()
        assert result.data.content == "Texto principal"
        assert result.data.title == "Artigo"
        assert result.data.author == "Ana"
        assert result.data.publish_date == "2025-01-10"

    @pytest.mark.asyncio
    async def test_truncates_long_text(self):
        with patch("content_wizard.research.extractor.trafilatura.extract", return_value="a" * 50), \
                patch("content_wizard.research.extractor.trafilatura.extract_metadata", return_value=None):
            result = await make_extractor(max_chars=10).extract("https://example.com")

        assert result.data.content == "a" * 10 + "..."
        assert result.data.title is None

    @pytest.mark.asyncio
    async def test_http_error_is_ok_none(self):
        result = await make_extractor(status=404).extract("https://example.com/missing")

        assert result.is_success()
        assert result.data is None

    @pytest.mark.asyncio
    async def test_nothing_extracted_is_ok_none(self):
        with patch("content_wizard.research.extractor.trafilatura.extract", return_value=None), \
                patch("content_wizard.research.extractor.trafilatura.extract_metadata", return_value=None):
            result = await make_extractor().extract("https://example.com")

        assert result.data is None


def test_format_for_prompt():
    extracted = ExtractedContent(source_url="https://example.com/a", content="Corpo", title="Título")

    assert format_extracted_for_prompt(extracted) == (
        "ARTIGO DE REFERÊNCIA: https://example.com/a\nTítulo: Título\n\nCorpo"
    )
