"""Typer app configuration and logging setup."""

from __future__ import annotations

import logging
import warnings
from pathlib import Path

import typer
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# httpx cleanup on interpreter exit
warnings.filterwarnings("ignore", message=".*Event loop is closed.*")
warnings.filterwarnings("ignore", category=ResourceWarning)

app = typer.Typer(
    name="content-wizard",
    help="AI content wizard for social media posts and YouTube videos",
    add_completion=False,
)


def register_commands() -> None:
    """Register all commands from feature modules."""
    from .wizard.commands import (
        generate,
        models,
        narratives,
        render,
        sessions,
        status,
        transcribe,
        wizard,
    )

    app.command(name="wizard")(wizard)
    app.command(name="narratives")(narratives)
    app.command(name="generate")(generate)
    app.command(name="render")(render)
    app.command(name="sessions")(sessions)
    app.command(name="transcribe")(transcribe)
    app.command(name="status")(status)
    app.command(name="models")(models)

    from .video.commands import video_script, video_seo, video_thumbnail, video_titles

    app.command(name="video-titles")(video_titles)
    app.command(name="video-script")(video_script)
    app.command(name="video-seo")(video_seo)
    app.command(name="video-thumbnail")(video_thumbnail)


def setup_logging(log_dir: Path | None = None) -> None:
    """Configure logging for CLI.

    - Keeps library loggers off the console
    - Writes LLM calls and wizard events to logs/ai_calls.log
    """
    log_dir = log_dir or Path.cwd() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(logging.CRITICAL)

    for logger_name in ["httpx", "httpcore", "trafilatura", "asyncio"]:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.WARNING)
        logger.propagate = False

    file_handler = logging.FileHandler(log_dir / "ai_calls.log", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(message)s")
    )

    # ai_calls: raw LLM traffic; content_wizard.*: wizard events
    for logger_name in ["ai_calls", "content_wizard"]:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        logger.handlers = [file_handler]


register_commands()


def main() -> None:
    """CLI entry point."""
    setup_logging()
    app()
