"""Wizard session storage.

Each wizard run is one JSON file holding the inputs, the narratives,
the selected narrative, the generated draft and the current step.

Storage structure:
    wizards/
        wizard_20251222_001.json
        wizard_20251222_002.json
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

from pydantic import Field

from ..constants import ContentType, PathLike, WizardStep
from .models import (
    GeneratedContent,
    NarrativeOption,
    RagConfig,
    WizardModel,
    WizardNarrativesInput,
)

_logger = logging.getLogger("content_wizard.store")


class RefactorEntry(WizardModel):
    feedback: str
    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat())


class WizardSession(WizardModel):
    """Persistent state of one wizard run."""

    id: str
    content_type: ContentType = Field(alias="contentType")
    step: WizardStep = WizardStep.INPUT
    created_at: str = Field(
        default_factory=lambda: datetime.now().isoformat(), alias="createdAt"
    )
    updated_at: str = Field(
        default_factory=lambda: datetime.now().isoformat(), alias="updatedAt"
    )

    inputs: WizardNarrativesInput
    rag_config: RagConfig | None = Field(None, alias="ragConfig")
    narratives: list[NarrativeOption] = Field(default_factory=list)
    selected_narrative: NarrativeOption | None = Field(None, alias="selectedNarrative")
    content: GeneratedContent | None = None
    refactors: list[RefactorEntry] = Field(default_factory=list)
    render_paths: list[str] = Field(default_factory=list, alias="renderPaths")
    last_error: str | None = Field(None, alias="lastError")


class WizardStore:
    """JSON file store for wizard sessions.

    Usage:
        store = WizardStore(Path("wizards"))
        session = store.create(WizardNarrativesInput(content_type="carousel", theme="..."))
        session.step = WizardStep.NARRATIVES
        store.save(session)
    """

    def __init__(self, root: PathLike):
        """Initialize the store.

        Args:
            root: Directory holding the session files.
        """
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, session_id: str) -> Path:
        return self.root / f"{session_id}.json"

    def _generate_session_id(self) -> str:
        """Generate unique session ID for today."""
        today = datetime.now().strftime("%Y%m%d")
        existing = list(self.root.glob(f"wizard_{today}_*.json"))
        seq = len(existing) + 1
        session_id = f"wizard_{today}_{seq:03d}"
        # Deleted sessions leave gaps in the sequence
        while self._path(session_id).exists():
            seq += 1
            session_id = f"wizard_{today}_{seq:03d}"
        return session_id

    def create(
        self, inputs: WizardNarrativesInput, rag_config: RagConfig | None = None
    ) -> WizardSession:
        """Create and persist a new session at the input step."""
        session = WizardSession(
            id=self._generate_session_id(),
            content_type=inputs.content_type,
            inputs=inputs,
            rag_config=rag_config,
        )
        self.save(session)
        _logger.debug(f"Created wizard session: {session.id}")
        return session

    def save(self, session: WizardSession) -> None:
        """Write session to disk, refreshing updated_at."""
        session.updated_at = datetime.now().isoformat()
        with open(self._path(session.id), "w", encoding="utf-8") as f:
            json.dump(session.to_json_dict(), f, indent=2, ensure_ascii=False)

    def load(self, session_id: str) -> WizardSession | None:
        """Load a session, or None if it does not exist."""
        path = self._path(session_id)
        if not path.exists():
            return None
        with open(path, encoding="utf-8") as f:
            return WizardSession.model_validate(json.load(f))

    def list_sessions(
        self, step: WizardStep | None = None, limit: int | None = None
    ) -> list[WizardSession]:
        """Sessions newest first, optionally filtered by step.

        Files that fail to parse are skipped with a warning.
        """
        sessions: list[WizardSession] = []
        for path in sorted(self.root.glob("wizard_*.json"), reverse=True):
            try:
                with open(path, encoding="utf-8") as f:
                    session = WizardSession.model_validate(json.load(f))
            except (OSError, ValueError) as e:
                _logger.warning(f"Skipping unreadable wizard session {path.name}: {e}")
                continue
            if step is not None and session.step != step:
                continue
            sessions.append(session)
            if limit is not None and len(sessions) >= limit:
                break
        return sessions

    def delete(self, session_id: str) -> bool:
        path = self._path(session_id)
        if not path.exists():
            return False
        path.unlink()
        return True
