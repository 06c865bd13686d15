"""Wizard commands."""

from .commands import generate, models, narratives, render, sessions, status, transcribe, wizard

__all__ = ["generate", "models", "narratives", "render", "sessions", "status", "transcribe", "wizard"]
