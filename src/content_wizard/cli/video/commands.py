"""Video CLI commands - thumbnail titles, SEO, script and thumbnail prompt."""

from __future__ import annotations

import asyncio
import base64
import json
from pathlib import Path
from typing import Optional

import typer

from ...constants import NarrativeAngle, VideoDuration
from ...content.models import NarrativeOption
from ...content.store import WizardStore
from ...providers.config import get_settings
from ...providers.openrouter import get_openrouter_client
from ...results import ServiceResult
from ...video.generator import VideoGenerator
from ...video.models import (
    ThumbnailStyle,
    VideoScriptInput,
    VideoScriptRefactorInput,
    VideoThumbnailInput,
    VideoTitlesInput,
    YouTubeSEOInput,
)
from ..core.console import console, print_error, print_success
from .display import show_script, show_seo, show_thumbnail_prompt, show_titles


def _resolve_narrative(
    session_id: Optional[str],
    angle: Optional[NarrativeAngle],
    title: Optional[str],
    description: Optional[str],
) -> tuple[NarrativeOption, Optional[str]]:
    """Narrative and theme from a saved session or from explicit options."""
    if session_id:
        session = WizardStore(get_settings().wizards_dir).load(session_id)
        if session is None:
            print_error(f"Session not found: {session_id}")
            raise typer.Exit(1)
        if session.selected_narrative is None:
            print_error(f"Session {session_id} has no selected narrative")
            raise typer.Exit(1)
        return session.selected_narrative, session.inputs.theme

    if not (angle and title and description):
        print_error("Pass --session or all of --angle, --title and --description")
        raise typer.Exit(1)
    return NarrativeOption(id="cli", angle=angle, title=title, description=description), None


def _run(call) -> ServiceResult:
    """Run one generator call and close the shared client."""

    async def _main() -> ServiceResult:
        client = get_openrouter_client()
        try:
            return await call(VideoGenerator(client))
        finally:
            await client.close()

    result = asyncio.run(_main())
    if result.is_failure():
        print_error(result.error)
        raise typer.Exit(1)
    return result


def _write_json(path: Optional[Path], data: dict) -> None:
    if path is None:
        return
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    print_success(f"Saved: {path}")


def _encode_image(path: Optional[Path]) -> Optional[str]:
    if path is None:
        return None
    if not path.exists():
        print_error(f"Image not found: {path}")
        raise typer.Exit(1)
    suffix = path.suffix.lstrip(".").lower() or "png"
    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:image/{suffix};base64,{encoded}"


def video_titles(
    session: Optional[str] = typer.Option(None, "--session", help="Wizard session id"),
    angle: Optional[NarrativeAngle] = typer.Option(None, "--angle", help="Narrative angle"),
    title: Optional[str] = typer.Option(None, "--title", help="Narrative title"),
    description: Optional[str] = typer.Option(None, "--description", help="Narrative description"),
    theme: Optional[str] = typer.Option(None, "--theme", help="Video theme"),
    target_audience: Optional[str] = typer.Option(None, "--audience", help="Target audience"),
) -> None:
    """Suggest five thumbnail titles for a narrative."""
    narrative, session_theme = _resolve_narrative(session, angle, title, description)
    data = VideoTitlesInput.from_narrative(
        narrative, theme=theme or session_theme, target_audience=target_audience
    )
    result = _run(lambda generator: generator.generate_titles(data))
    show_titles(console, result.data)


def video_script(
    session: Optional[str] = typer.Option(None, "--session", help="Wizard session id"),
    angle: Optional[NarrativeAngle] = typer.Option(None, "--angle", help="Narrative angle"),
    title: Optional[str] = typer.Option(None, "--title", help="Narrative title"),
    description: Optional[str] = typer.Option(None, "--description", help="Narrative description"),
    duration: VideoDuration = typer.Option(VideoDuration.MEDIUM, "--duration", "-d", help="Duration bucket"),
    intention: Optional[str] = typer.Option(None, "--intention", help="What the video should achieve"),
    selected_title: Optional[str] = typer.Option(None, "--thumbnail-title", help="Chosen thumbnail title"),
    refactor: Optional[str] = typer.Option(None, "--refactor", "-r", help="Feedback to apply to --script-file"),
    script_file: Optional[Path] = typer.Option(None, "--script-file", help="Current script JSON (for --refactor)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the script JSON here"),
) -> None:
    """Write (or refactor) a structured video script."""
    narrative, theme = _resolve_narrative(session, angle, title, description)
    base = dict(duration=duration, intention=intention, theme=theme, selected_title=selected_title)

    if refactor:
        if script_file is None or not script_file.exists():
            print_error("--refactor needs an existing --script-file")
            raise typer.Exit(1)
        data = VideoScriptRefactorInput(
            narrative_angle=narrative.angle,
            narrative_title=narrative.title,
            narrative_description=narrative.description,
            current_script=script_file.read_text(encoding="utf-8"),
            refactor_instructions=refactor,
            **base,
        )
        result = _run(lambda generator: generator.refactor_script(data))
    else:
        script_input = VideoScriptInput.from_narrative(narrative, **base)
        result = _run(lambda generator: generator.generate_script(script_input))

    show_script(console, result.data)
    _write_json(output, result.data.to_json_dict())


def video_seo(
    thumbnail_title: str = typer.Option(..., "--thumbnail-title", help="Title shown on the thumbnail"),
    theme: str = typer.Option(..., "--theme", help="Video theme"),
    target_audience: str = typer.Option(..., "--audience", help="Target audience"),
    keyword: str = typer.Option(..., "--keyword", "-k", help="Primary keyword"),
    secondary: Optional[list[str]] = typer.Option(None, "--secondary", help="Secondary keyword (repeatable)"),
    niche: Optional[str] = typer.Option(None, "--niche", help="Channel niche"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the SEO JSON here"),
) -> None:
    """Generate YouTube title, description, tags and hashtags."""
    data = YouTubeSEOInput(
        thumbnail_title=thumbnail_title,
        theme=theme,
        target_audience=target_audience,
        primary_keyword=keyword,
        secondary_keywords=secondary or [],
        niche=niche,
    )
    result = _run(lambda generator: generator.generate_youtube_seo(data))
    show_seo(console, result.data)
    _write_json(output, result.data.model_dump(mode="json"))


def video_thumbnail(
    thumbnail_title: str = typer.Option(..., "--thumbnail-title", help="Text on the thumbnail"),
    context: str = typer.Option(..., "--context", help="Thematic context"),
    style: ThumbnailStyle = typer.Option(ThumbnailStyle.PROFISSIONAL, "--style", help="Visual style"),
    expression: Optional[str] = typer.Option(None, "--expression", help="Facial expression"),
    image_1: Optional[Path] = typer.Option(None, "--ref-image", help="Reference image"),
    image_2: Optional[Path] = typer.Option(None, "--ref-image-2", help="Second reference image"),
    variation: int = typer.Option(0, "--variation", help="Variation index"),
) -> None:
    """Build an image-model prompt for a 16:9 thumbnail."""
    data = VideoThumbnailInput(
        thumbnail_title=thumbnail_title,
        estilo=style,
        contexto_tematico=context,
        expressao=expression,
        referencia_imagem_1=_encode_image(image_1),
        referencia_imagem_2=_encode_image(image_2),
        variacao_index=variation,
    )
    result = _run(lambda generator: generator.generate_thumbnail_prompt(data))
    show_thumbnail_prompt(console, result.data)
