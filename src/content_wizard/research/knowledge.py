"""File-backed knowledge base used as the default RAG backend."""

from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path

from pydantic import BaseModel, Field

from ..constants import RAG_CHUNK_SIZE_WORDS, RagStatsDict
from ..content.models import RagResult, RagSource

_logger = logging.getLogger("content_wizard.knowledge")

_TOKEN_RE = re.compile(r"\w{3,}", re.UNICODE)
_HEADING_RE = re.compile(r"^#\s+(.+)$", re.MULTILINE)

DOCUMENT_SUFFIXES = (".md", ".txt")


class KnowledgeDocument(BaseModel):
    """A document split into fixed-size word chunks."""

    id: str
    title: str
    collection: str = ""
    chunks: list[str] = Field(default_factory=list)


def tokenize(text: str) -> set[str]:
    """Lowercased words of three or more characters."""
    return set(_TOKEN_RE.findall(text.lower()))


def chunk_text(text: str, size: int = RAG_CHUNK_SIZE_WORDS) -> list[str]:
    """Split text into chunks of at most size words."""
    words = text.split()
    return [" ".join(words[i:i + size]) for i in range(0, len(words), size)]


def estimate_tokens(text: str) -> int:
    """Rough token count (4 characters per token)."""
    return max(1, len(text) // 4)


class KnowledgeBase:
    """Knowledge base over a directory of markdown/text files.

    Layout:
        knowledge/
            brand-voice.md           # collection ""
            offers/
                mentoria.md          # collection "offers", id "offers/mentoria"

    Chunks are ranked by the share of query terms they contain, so a
    threshold of 0.5 keeps chunks that mention at least half the query.

    Usage:
        kb = KnowledgeBase(Path("knowledge"))
        result = await kb.assemble("tom de voz da marca", threshold=0.5,
                                   max_chunks=15, max_tokens=3000)
    """

    def __init__(self, root: Path):
        """Initialize knowledge base.

        Args:
            root: Directory containing the documents.
        """
        self.root = Path(root)
        self._documents: list[KnowledgeDocument] | None = None

    def _load_document(self, path: Path) -> KnowledgeDocument:
        text = path.read_text(encoding="utf-8")
        relative = path.relative_to(self.root)
        heading = _HEADING_RE.search(text)
        collection = relative.parent.as_posix()
        return KnowledgeDocument(
            id=relative.with_suffix("").as_posix(),
            title=heading.group(1).strip() if heading else path.stem,
            collection="" if collection == "." else collection,
            chunks=chunk_text(text),
        )

    def _scan(self) -> list[KnowledgeDocument]:
        """Read every document under root, skipping files that cannot be read."""
        documents: list[KnowledgeDocument] = []
        if not self.root.exists():
            return documents
        for path in sorted(self.root.rglob("*")):
            if not path.is_file() or path.suffix.lower() not in DOCUMENT_SUFFIXES:
                continue
            try:
                documents.append(self._load_document(path))
            except (UnicodeDecodeError, OSError) as e:
                _logger.warning(f"KNOWLEDGE_SKIP | file:{path} | error:{e}")
        _logger.debug(f"Indexed {len(documents)} documents from {self.root}")
        return documents

    @property
    def documents(self) -> list[KnowledgeDocument]:
        """Indexed documents, loading from disk if needed."""
        if self._documents is None:
            self._documents = self._scan()
        return self._documents

    async def load(self) -> list[KnowledgeDocument]:
        """Async variant of documents; the directory is read in a worker thread."""
        if self._documents is None:
            self._documents = await asyncio.to_thread(self._scan)
        return self._documents

    def reload(self) -> None:
        """Drop the in-memory index so the next access rereads the directory."""
        self._documents = None

    async def assemble(
        self,
        query: str,
        *,
        threshold: float,
        max_chunks: int,
        max_tokens: int,
        documents: list[str] | None = None,
        collections: list[str] | None = None,
    ) -> RagResult:
        """Rank chunks against query and assemble the best into a context."""
        query_terms = tokenize(query)
        candidates = await self.load()
        if documents:
            candidates = [d for d in candidates if d.id in documents]
        if collections:
            candidates = [d for d in candidates if d.collection in collections]

        scored: list[tuple[float, KnowledgeDocument, str]] = []
        if query_terms:
            for doc in candidates:
                for chunk in doc.chunks:
                    score = len(query_terms & tokenize(chunk)) / len(query_terms)
                    if score >= threshold:
                        scored.append((score, doc, chunk))
        scored.sort(key=lambda item: item[0], reverse=True)

        parts: list[str] = []
        sources: dict[str, RagSource] = {}
        tokens_used = 0
        for _score, doc, chunk in scored[:max_chunks]:
            tokens = estimate_tokens(chunk)
            if tokens_used + tokens > max_tokens:
                break
            parts.append(f"[{doc.title}]\n{chunk}")
            sources.setdefault(doc.id, RagSource(id=doc.id, title=doc.title))
            tokens_used += tokens

        return RagResult(
            context="\n\n---\n\n".join(parts),
            sources=list(sources.values()),
            tokens_used=tokens_used,
            chunks_included=len(parts),
        )

    async def stats(self) -> RagStatsDict:
        """Document and chunk counts."""
        documents = await self.load()
        total_chunks = sum(len(d.chunks) for d in documents)
        return {
            "totalDocuments": len(documents),
            "totalChunks": total_chunks,
            "hasEmbeddedDocuments": total_chunks > 0,
        }
