"""Type definitions for the content wizard.

This module contains type aliases, TypedDicts and protocols:
- Type aliases for JSON payloads and chat messages
- TypedDicts for small dict results returned to callers
- Protocol classes for pluggable backends (chat client, RAG assembler)

AI CONTEXT:
-----------
Services depend on these protocols rather than concrete classes so tests
can pass in-memory fakes and callers can plug a different retrieval
backend without touching the wizard code.

MODIFICATION GUIDE:
------------------
- Add new types at the end of relevant sections
- Use TypedDict for dict-like structures with known keys
- Use Protocol for interface definitions
"""

from __future__ import annotations

from pathlib import Path
from typing import (
    Any,
    Awaitable,
    Callable,
    Protocol,
    TypeAlias,
    TypedDict,
    Union,
    runtime_checkable,
)


# =============================================================================
# BASIC TYPE ALIASES
# =============================================================================

JSON: TypeAlias = dict[str, Any]
"""Generic JSON object type."""

PathLike: TypeAlias = Union[str, Path]
"""Path-like type (string or Path object)."""

ChatMessage: TypeAlias = dict[str, str]
"""A single chat message: {"role": ..., "content": ...}."""

ProgressCallback: TypeAlias = Callable[[Any], Awaitable[None]]
"""Async callback receiving a ProcessingProgress update."""


# =============================================================================
# RESULT SHAPES
# =============================================================================

class RagSourceDict(TypedDict):
    """Source reference stored in content metadata."""

    id: str
    title: str


class RagStatsDict(TypedDict):
    """Knowledge base statistics."""

    totalDocuments: int
    totalChunks: int
    hasEmbeddedDocuments: bool


class ServicesStatusDict(TypedDict):
    """Availability of each external service."""

    llm: bool
    rag: bool
    firecrawl: bool
    tavily: bool
    apify: bool
    any: bool


# =============================================================================
# PROTOCOLS
# =============================================================================

@runtime_checkable
class ChatClient(Protocol):
    """Protocol for chat-completion clients.

    OpenRouterClient implements it; tests use AsyncMock instances.
    """

    @property
    def is_configured(self) -> bool:
        """Whether credentials are available."""
        ...

    async def chat(
        self,
        messages: list[ChatMessage],
        *,
        model: str,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        json_mode: bool = False,
        task: str = "chat",
        max_retries: int = 0,
    ) -> str:
        """Send messages and return the assistant text."""
        ...


@runtime_checkable
class RagAssembler(Protocol):
    """Protocol for RAG retrieval backends.

    Implementations rank stored chunks against a query and assemble the
    best ones into a single context string.
    """

    async def assemble(
        self,
        query: str,
        *,
        threshold: float,
        max_chunks: int,
        max_tokens: int,
        documents: list[str] | None = None,
        collections: list[str] | None = None,
    ) -> Any:
        """Return a RagResult-like object (context, sources, tokensUsed, chunksIncluded)."""
        ...

    async def stats(self) -> RagStatsDict:
        """Return document and chunk counts."""
        ...
