"""Web research for narrative generation using DuckDuckGo.

An LLM plans seven queries (see get_research_planner_prompt), the queries
run in parallel through DDGS and the snippets are condensed into a
research block for the narratives prompt. The synthesizer then adds
structured insights on top of that block.
"""

from __future__ import annotations

import asyncio
import logging
import time

from ddgs import DDGS

from ..constants import ChatClient
from ..content.models import SearchResult, SearchSource
from ..content.prompts import extract_json_from_response, get_research_planner_prompt
from ..providers.config import get_settings
from ..results import ServiceResult
from .synthesizer import format_synthesized_research_for_prompt, synthesize_research

_logger = logging.getLogger("ai_calls")

RESEARCH_PLANNER_MODEL = "openai/gpt-4.1-mini"
MAX_QUERIES = 7


class WebSearcher:
    """DuckDuckGo web search with parallel query support.

    Usage:
        searcher = WebSearcher()
        results = await searcher.parallel_search(["ia generativa varejo", "..."])
    """

    def __init__(self, timeout: int = 10, max_results_per_query: int = 5):
        """Initialize the web searcher.

        Args:
            timeout: Timeout per search in seconds.
            max_results_per_query: Max results per query.
        """
        self.timeout = timeout
        self.max_results_per_query = max_results_per_query

    def _ddgs_search_sync(self, query: str, max_results: int) -> list[dict]:
        """Synchronous DuckDuckGo web search."""
        with DDGS(timeout=self.timeout) as ddgs:
            return list(ddgs.text(query, max_results=max_results))

    async def search(self, query: str, max_results: int | None = None) -> SearchResult:
        """Execute a single web search; failures give an empty result."""
        max_results = max_results or self.max_results_per_query
        start_time = time.time()
        try:
            raw = await asyncio.to_thread(self._ddgs_search_sync, query, max_results)
        except Exception as e:
            _logger.error(f"WEB_SEARCH_ERROR | query:{query[:50]} | error:{e}")
            return SearchResult(query=query)

        duration_ms = int((time.time() - start_time) * 1000)
        sources = [
            SearchSource(
                title=r.get("title", "Unknown"),
                url=r.get("href", ""),
                snippet=(r.get("body") or "")[:300],
            )
            for r in raw
            if r.get("href")
        ]
        _logger.info(f"WEB_SEARCH | query:{query[:50]} | results:{len(sources)} | {duration_ms}ms")
        return SearchResult(query=query, sources=sources)

    async def parallel_search(self, queries: list[str]) -> list[SearchResult]:
        """Run queries concurrently and drop duplicate URLs across them."""
        results = await asyncio.gather(*(self.search(q) for q in queries))

        seen: set[str] = set()
        for result in results:
            unique = [s for s in result.sources if s.url not in seen]
            seen.update(s.url for s in unique)
            result.sources = unique
        return list(results)


async def plan_research_queries(
    client: ChatClient,
    theme: str,
    niche: str | None = None,
    objective: str | None = None,
    target_audience: str | None = None,
    number_of_slides: int | None = None,
    cta: str | None = None,
) -> list[str]:
    """Ask the LLM for search queries; raises on LLM or parse errors."""
    prompt = get_research_planner_prompt(
        theme,
        niche=niche,
        objective=objective,
        target_audience=target_audience,
        number_of_slides=number_of_slides,
        cta=cta,
    )
    response = await client.chat(
        [
            {"role": "system", "content": prompt},
            {"role": "user", "content": "Gere o plano de pesquisa."},
        ],
        model=RESEARCH_PLANNER_MODEL,
        temperature=0.4,
        json_mode=True,
        task="research_planner",
        max_retries=1,
    )
    data = extract_json_from_response(response)
    queries: list[str] = []
    for item in data.get("queries", []):
        query = item.get("query") if isinstance(item, dict) else item
        if isinstance(query, str) and query.strip():
            queries.append(query.strip())
    return queries[:MAX_QUERIES]


def format_research_for_prompt(results: list[SearchResult], max_sources: int = 15) -> str:
    """Condense search results into a research block."""
    lines: list[str] = []
    count = 0
    for result in results:
        if not result.sources:
            continue
        lines.append(f"## {result.query}")
        for source in result.sources:
            if count >= max_sources:
                break
            lines.append(f"- {source.title} ({source.url})")
            if source.snippet:
                lines.append(f"  {source.snippet}")
            count += 1
        lines.append("")
    return "\n".join(lines).strip()


async def run_research(
    client: ChatClient,
    theme: str,
    searcher: WebSearcher | None = None,
    *,
    synthesize: bool = True,
    extracted_content: str | None = None,
    **brief: str | int | None,
) -> ServiceResult[str]:
    """Plan, search, synthesize and format research for a theme.

    The raw research block is always kept; synthesized insights are
    appended when synthesis succeeds. Best-effort: any failure before
    the search resolves to ok(None).
    """
    if not theme:
        return ServiceResult.ok(None)
    try:
        queries = await plan_research_queries(client, theme, **brief)
        if not queries:
            return ServiceResult.ok(None)
        results = await (searcher or WebSearcher()).parallel_search(queries)
        research = format_research_for_prompt(results)
    except Exception as e:
        _logger.warning(f"RESEARCH_ERROR | theme:{theme[:50]} | error:{e}")
        return ServiceResult.ok(None)

    if research and synthesize:
        synthesized = await synthesize_research(
            client,
            results,
            topic=theme,
            niche=brief.get("niche"),
            objective=brief.get("objective"),
            target_audience=brief.get("target_audience"),
            extracted_content=extracted_content,
        )
        if synthesized.is_success() and not synthesized.data.is_empty:
            research = f"{research}\n\n{format_synthesized_research_for_prompt(synthesized.data)}"

    return ServiceResult.ok(research or None)


def is_research_available() -> bool:
    """Research needs the planner LLM."""
    return bool(get_settings().openrouter_api_key)
