"""Tests for wizard CLI commands and display helpers."""

from __future__ import annotations

from io import StringIO
from unittest.mock import patch

import pytest
from rich.console import Console
from typer.testing import CliRunner

from content_wizard.cli.app import app
from content_wizard.cli.video.display import show_titles
from content_wizard.cli.wizard.display import show_narratives, show_services_status
from content_wizard.constants import ContentType, WizardStep
from content_wizard.content.generator import parse_narratives, structure_generated_content
from content_wizard.content.models import WizardNarrativesInput
from content_wizard.content.store import WizardStore
from content_wizard.video.models import VideoTitleOption

runner = CliRunner()


@pytest.fixture
def mock_console() -> Console:
    """Create a Console that captures output without ANSI codes."""
    return Console(file=StringIO(), force_terminal=False, no_color=True, width=120)


@pytest.fixture
def cli_settings(settings):
    with patch("content_wizard.cli.wizard.commands.get_settings", return_value=settings):
        yield settings


@pytest.fixture
def store(cli_settings) -> WizardStore:
    return WizardStore(cli_settings.wizards_dir)


def _output(console: Console) -> str:
    return console.file.getvalue()


class TestDisplay:

    def test_services_status(self, mock_console):
        show_services_status(mock_console, {
            "llm": False, "rag": True, "firecrawl": True, "tavily": False, "apify": False, "any": True,
        })

        output = _output(mock_console)
        assert "Knowledge base" in output
        assert "Set OPENROUTER_API_KEY" in output

    def test_narratives(self, mock_console, narratives_payload):
        show_narratives(mock_console, parse_narratives(narratives_payload))

        output = _output(mock_console)
        assert "1. herege" in output
        assert "4. testemunha" in output
        assert "Menos é mais" in output

    def test_titles(self, mock_console):
        show_titles(mock_console, [VideoTitleOption(id="title-1", title="PARE DE FAZER LISTAS", hook_factor=91)])

        assert "PARE DE FAZER LISTAS" in _output(mock_console)


class TestCommands:

    def test_status(self):
        status = {"llm": True, "rag": True, "firecrawl": True, "tavily": True, "apify": False, "any": True}
        with patch("content_wizard.cli.wizard.commands.get_wizard_services_status", return_value=status):
            result = runner.invoke(app, ["status"])

        assert result.exit_code == 0
        assert "YouTube transcription" in result.output

    def test_models(self):
        with patch("content_wizard.cli.wizard.commands.get_wizard_default_model", return_value="openai/gpt-4.1"):
            result = runner.invoke(app, ["models"])

        assert result.exit_code == 0
        assert "openai/gpt-4.1" in result.output

    def test_sessions_empty(self, cli_settings):
        result = runner.invoke(app, ["sessions"])

        assert result.exit_code == 0
        assert "No wizard sessions found." in result.output

    def test_sessions_lists_saved(self, store):
        session = store.create(WizardNarrativesInput(content_type="text", theme="Foco"))

        result = runner.invoke(app, ["sessions"])

        assert result.exit_code == 0
        assert session.id in result.output

    def test_render_unknown_session(self, cli_settings):
        result = runner.invoke(app, ["render", "wizard_19990101_001"])

        assert result.exit_code == 1
        assert "Session not found" in result.output

    def test_render_wrong_step(self, store):
        session = store.create(WizardNarrativesInput(content_type="carousel", theme="Foco"))

        result = runner.invoke(app, ["render", session.id])

        assert result.exit_code == 1

    def test_render_unknown_theme(self, store):
        session = store.create(WizardNarrativesInput(content_type="carousel", theme="Foco"))

        result = runner.invoke(app, ["render", session.id, "--theme", "neon"])

        assert result.exit_code == 1
        assert "Unknown theme" in result.output

    def test_render_approved_carousel(self, store, narrative, valid_carousel, tmp_path):
        session = store.create(WizardNarrativesInput(content_type="carousel", theme="Foco"))
        session.selected_narrative = narrative
        session.content = structure_generated_content(valid_carousel, ContentType.CAROUSEL, narrative, "m")
        session.step = WizardStep.RENDER
        store.save(session)

        result = runner.invoke(app, ["render", session.id, "--output", str(tmp_path / "slides")])

        assert result.exit_code == 0
        assert sorted(p.name for p in (tmp_path / "slides").iterdir())[0] == "slide_01.jpg"
        assert store.load(session.id).step == WizardStep.COMPLETED

    def test_transcribe_without_token(self):
        with patch("content_wizard.cli.wizard.commands.ApifyTranscriber") as transcriber_cls:
            transcriber_cls.return_value.is_configured = False
            result = runner.invoke(app, ["transcribe", "https://youtu.be/dQw4w9WgXcQ"])

        assert result.exit_code == 1
        assert "APIFY_API_TOKEN" in result.output
