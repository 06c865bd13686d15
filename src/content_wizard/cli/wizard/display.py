"""Display functions for wizard commands - pure functions for Rich output."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ...constants import ContentType, ServicesStatusDict
from ...content.models import GeneratedContent, NarrativeOption, VideoTranscription
from ...content.store import WizardSession
from ...design.theme import SLIDE_TYPE_LABELS

ANGLE_STYLES = {
    "herege": "red",
    "visionario": "magenta",
    "tradutor": "cyan",
    "testemunha": "green",
}

SERVICE_LABELS = {
    "llm": "LLM (OpenRouter)",
    "rag": "Knowledge base",
    "firecrawl": "Reference extraction",
    "tavily": "Web research",
    "apify": "YouTube transcription",
}


def show_wizard_header(console: Console, session: WizardSession) -> None:
    inputs = session.inputs
    console.print(Panel(
        f"[bold]{inputs.theme or '(sem tema)'}[/bold]\n"
        f"Type: [cyan]{session.content_type.value}[/cyan]\n"
        f"Session: [dim]{session.id}[/dim]",
        title="Content Wizard",
        border_style="cyan",
    ))


def show_narratives(console: Console, narratives: List[NarrativeOption]) -> None:
    """Display the narrative options as numbered panels."""
    if not narratives:
        console.print("[yellow]No narratives.[/yellow]")
        return

    for index, narrative in enumerate(narratives, start=1):
        style = ANGLE_STYLES.get(narrative.angle.value, "white")
        body = f"[bold]{narrative.title}[/bold]\n\n{narrative.description}"
        if narrative.hook:
            body += f"\n\n[dim]Hook:[/dim] {narrative.hook}"
        if narrative.core_belief:
            body += f"\n[dim]Crença:[/dim] {narrative.core_belief}"
        console.print(Panel(
            body,
            title=f"[{style}]{index}. {narrative.angle.value}[/{style}]",
            border_style=style,
        ))


def show_content(console: Console, content: GeneratedContent) -> None:
    """Display a generated draft according to its type."""
    if content.type == ContentType.CAROUSEL and content.carousel:
        carousel = content.carousel
        console.print(Panel(
            f"[bold]{carousel.capa.titulo}[/bold]\n{carousel.capa.subtitulo}",
            title="Capa",
            border_style="cyan",
        ))
        table = Table(title="Slides", show_lines=True)
        table.add_column("#", style="dim", width=3)
        table.add_column("Tipo", style="cyan")
        table.add_column("Título", style="bold")
        table.add_column("Corpo")
        for index, slide in enumerate(carousel.slides, start=1):
            table.add_row(
                str(slide.numero or index),
                SLIDE_TYPE_LABELS.get(slide.tipo, slide.tipo.value),
                slide.titulo,
                slide.corpo,
            )
        console.print(table)
        console.print(f"[dim]Throughline:[/dim] {carousel.throughline}")
    elif content.type == ContentType.IMAGE and content.metadata.image_prompt:
        console.print(Panel(content.metadata.image_prompt, title="Image prompt", border_style="magenta"))
    elif content.type == ContentType.VIDEO and content.script:
        script = content.script if isinstance(content.script, str) else json.dumps(
            content.script.to_json_dict(), ensure_ascii=False, indent=2
        )
        console.print(Panel(script, title="Roteiro", border_style="magenta"))

    if content.caption:
        console.print(Panel(content.caption, title="Legenda", border_style="green"))
    if content.hashtags:
        console.print(" ".join(f"[blue]{tag}[/blue]" for tag in content.hashtags))
    if content.metadata.rag_sources:
        sources = ", ".join(s.title for s in content.metadata.rag_sources)
        console.print(f"[dim]RAG sources: {sources}[/dim]")


def show_services_status(console: Console, status: ServicesStatusDict) -> None:
    table = Table(title="Services")
    table.add_column("Service", style="cyan")
    table.add_column("Available")

    for key, label in SERVICE_LABELS.items():
        table.add_row(label, "[green]yes[/green]" if status[key] else "[red]no[/red]")

    console.print(table)
    if not status["llm"]:
        console.print("[yellow]Set OPENROUTER_API_KEY to enable generation.[/yellow]")


def show_models(console: Console, models: List[str], default: str) -> None:
    table = Table(title="Wizard Models")
    table.add_column("Model", style="cyan")
    table.add_column("", style="green")
    for model in models:
        table.add_row(model, "default" if model == default else "")
    console.print(table)


def show_transcription(console: Console, transcription: VideoTranscription, preview_chars: int = 1500) -> None:
    metadata = transcription.metadata
    title = metadata.title if metadata and metadata.title else transcription.source_url
    text = transcription.transcription
    if len(text) > preview_chars:
        text = text[:preview_chars] + "..."
    console.print(Panel(
        f"{text}\n\n[dim]{len(transcription.transcription)} chars[/dim]",
        title=title,
        border_style="cyan",
    ))


def show_render_result(console: Console, paths: List[Path]) -> None:
    console.print(Panel(
        f"[bold green]{len(paths)} slide(s) rendered[/bold green]\n\n"
        + "\n".join(f"  [green]+[/green] {p}" for p in paths),
        title="Render Complete",
        border_style="green",
    ))


def show_sessions_table(console: Console, sessions: List[WizardSession]) -> None:
    if not sessions:
        console.print("[yellow]No wizard sessions found.[/yellow]")
        return

    table = Table(title="Wizard Sessions")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Type")
    table.add_column("Step", style="yellow")
    table.add_column("Theme", style="dim")
    table.add_column("Updated", style="dim")

    for session in sessions:
        theme = session.inputs.theme or ""
        table.add_row(
            session.id,
            session.content_type.value,
            session.step.value,
            theme[:40] + ("..." if len(theme) > 40 else ""),
            session.updated_at[:19],
        )

    console.print(table)


def show_session_saved(console: Console, session: WizardSession) -> None:
    console.print(f"[dim]Session saved: {session.id} ({session.step.value})[/dim]")
