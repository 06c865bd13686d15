"""Reference URL extraction using Trafilatura."""

from __future__ import annotations

import asyncio
import logging

import httpx
import trafilatura
from trafilatura.settings import use_config

from ..content.models import ExtractedContent
from ..results import ServiceResult

_logger = logging.getLogger("content_wizard.extractor")


class ReferenceExtractor:
    """Fetch a reference article and extract its main text.

    Best-effort like the other enrichment services: fetch or extraction
    problems resolve to ``ok(None)``.

    Usage:
        extractor = ReferenceExtractor()
        result = await extractor.extract("https://example.com/article")
    """

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str = "ContentWizard/0.1.0",
        http_client: httpx.AsyncClient | None = None,
        max_chars: int = 12000,
    ):
        """Initialize the extractor.

        Args:
            timeout: HTTP request timeout in seconds.
            user_agent: User agent string for requests.
            http_client: Optional preconfigured httpx client.
            max_chars: Extracted text is cut to this length.
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self.max_chars = max_chars

        self._trafilatura_config = use_config()
        self._trafilatura_config.set("DEFAULT", "EXTRACTION_TIMEOUT", "30")

        self._http_client = http_client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
                follow_redirects=True,
            )
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def extract(self, url: str) -> ServiceResult[ExtractedContent]:
        """Extract the main text of a page."""
        try:
            client = await self._get_client()
            response = await client.get(url)
            response.raise_for_status()
            html = response.text

            # trafilatura is synchronous
            text = await asyncio.to_thread(
                trafilatura.extract,
                html,
                include_comments=False,
                include_tables=False,
                include_images=False,
                include_links=False,
                output_format="txt",
                config=self._trafilatura_config,
            )
            metadata = await asyncio.to_thread(trafilatura.extract_metadata, html)
        except httpx.HTTPStatusError as e:
            _logger.warning(f"EXTRACT_ERROR | url:{url} | HTTP {e.response.status_code}")
            return ServiceResult.ok(None)
        except Exception as e:
            _logger.warning(f"EXTRACT_ERROR | url:{url} | error:{e}")
            return ServiceResult.ok(None)

        if not text:
            return ServiceResult.ok(None)

        if len(text) > self.max_chars:
            text = text[: self.max_chars] + "..."

        _logger.info(f"EXTRACT | url:{url} | chars:{len(text)}")
        return ServiceResult.ok(
            ExtractedContent(
                source_url=url,
                content=text,
                title=metadata.title if metadata else None,
                author=metadata.author if metadata else None,
                publish_date=metadata.date if metadata else None,
            )
        )


def format_extracted_for_prompt(extracted: ExtractedContent) -> str:
    """Render extracted content as reference material for prompts."""
    header = f"ARTIGO DE REFERÊNCIA: {extracted.source_url}"
    if extracted.title:
        header += f"\nTítulo: {extracted.title}"
    return f"{header}\n\n{extracted.content}"
