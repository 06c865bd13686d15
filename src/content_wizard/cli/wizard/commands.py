"""Wizard CLI commands - interactive flow and individual steps."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.prompt import Confirm, Prompt

from ...constants import ContentType, NarrativeAngle, VideoDuration, WizardStep
from ...content.generator import get_available_wizard_models, get_wizard_default_model
from ...content.models import ProcessingProgress, RagConfig, WizardNarrativesInput
from ...content.orchestrator import WizardOrchestrator, WizardStepError
from ...content.store import WizardSession, WizardStore
from ...providers.config import get_settings
from ...providers.openrouter import get_openrouter_client
from ...research.apify import ApifyTranscriber
from ...services.status import get_wizard_services_status
from ..core.console import console, print_error, print_info, print_progress, print_success, print_warning
from .display import (
    show_content,
    show_models,
    show_narratives,
    show_render_result,
    show_services_status,
    show_session_saved,
    show_sessions_table,
    show_transcription,
    show_wizard_header,
)


async def _print_progress(update: ProcessingProgress) -> None:
    print_progress(update.step, update.message, update.percentage)


def _build_orchestrator(research: bool = True) -> WizardOrchestrator:
    return WizardOrchestrator(
        client=get_openrouter_client(),
        progress_callback=_print_progress,
        research_enabled=research,
    )


async def _shutdown(orchestrator: WizardOrchestrator) -> None:
    await orchestrator.close()
    await orchestrator.client.close()


def _load_session(store: WizardStore, session_id: str) -> WizardSession:
    session = store.load(session_id)
    if session is None:
        print_error(f"Session not found: {session_id}", {"dir": str(store.root)})
        raise typer.Exit(1)
    return session


def _rag_config(rag_mode: Optional[str], rag_docs: Optional[list[str]]) -> Optional[RagConfig]:
    if rag_mode is None and not rag_docs:
        return None
    return RagConfig(mode=rag_mode or ("manual" if rag_docs else "auto"), documents=rag_docs or None)


def _render_session(orchestrator: WizardOrchestrator, session: WizardSession, output_dir: Optional[Path]) -> None:
    result = orchestrator.render(session, output_dir)
    if result.is_failure():
        print_error(result.error)
        raise typer.Exit(1)
    show_render_result(console, result.data)


# =============================================================================
# INTERACTIVE WIZARD
# =============================================================================

async def _choose_narrative(orchestrator: WizardOrchestrator, session: WizardSession) -> bool:
    """Narrative selection loop. Returns False when the user quits."""
    while True:
        show_narratives(console, session.narratives)
        answer = Prompt.ask(
            "Narrativa [1-4], [bold]r N[/bold] para regenerar, [bold]q[/bold] para sair",
            default="1",
        ).strip().lower()

        if answer == "q":
            return False
        if answer.startswith("r"):
            try:
                index = int(answer[1:].strip()) - 1
            except ValueError:
                print_warning("Use 'r' seguido do número da narrativa, ex: r 2")
                continue
            result = await orchestrator.regenerate_narrative(session, index)
            if result.is_failure():
                print_error(result.error)
            continue
        if answer.isdigit() and 1 <= int(answer) <= len(session.narratives):
            narrative = orchestrator.select_narrative(session, int(answer) - 1)
            print_success(f"Narrativa selecionada: {narrative.title}")
            return True
        print_warning(f"Opção inválida: {answer}")


async def _review_loop(orchestrator: WizardOrchestrator, session: WizardSession, model: Optional[str]) -> bool:
    """Approve/refactor loop. Returns True once the draft is approved."""
    while True:
        show_content(console, session.content)
        action = Prompt.ask(
            "[bold]a[/bold]provar, [bold]r[/bold]efatorar, [bold]g[/bold]erar de novo, [bold]q[/bold] sair",
            choices=["a", "r", "g", "q"],
            default="a",
        )
        if action == "q":
            return False
        if action == "a":
            orchestrator.approve(session)
            return True

        if action == "r":
            feedback = Prompt.ask("O que mudar?")
            result = await orchestrator.refactor_content(session, feedback, model)
        else:
            result = await orchestrator.generate_content(session, model)
        if result.is_failure():
            print_error(result.error)


async def _run_wizard(
    orchestrator: WizardOrchestrator,
    inputs: WizardNarrativesInput,
    rag_config: Optional[RagConfig],
    model: Optional[str],
    output_dir: Optional[Path],
) -> None:
    session = await orchestrator.start(inputs, rag_config)
    show_wizard_header(console, session)

    await orchestrator.prepare_references(session)
    result = await orchestrator.generate_narratives(session, model)
    if result.is_failure():
        print_error(result.error)
        raise typer.Exit(1)

    while True:
        if not await _choose_narrative(orchestrator, session):
            show_session_saved(console, session)
            return

        result = await orchestrator.generate_content(session, model)
        if result.is_success():
            break
        print_error(result.error)
        if not Confirm.ask("Escolher outra narrativa?", default=True):
            show_session_saved(console, session)
            raise typer.Exit(1)
        session.step = WizardStep.NARRATIVES

    if not await _review_loop(orchestrator, session, model):
        show_session_saved(console, session)
        return

    if session.step == WizardStep.RENDER and Confirm.ask("Renderizar os slides?", default=True):
        _render_session(orchestrator, session, output_dir)

    print_success("Conteúdo aprovado!")
    show_session_saved(console, session)


def wizard(
    content_type: ContentType = typer.Option(ContentType.CAROUSEL, "--type", "-t", help="Content type"),
    theme: Optional[str] = typer.Option(None, "--theme", help="Theme of the post"),
    context: Optional[str] = typer.Option(None, "--context", help="Extra context for the LLM"),
    objective: Optional[str] = typer.Option(None, "--objective", help="Goal of the post"),
    target_audience: Optional[str] = typer.Option(None, "--audience", help="Target audience"),
    cta: Optional[str] = typer.Option(None, "--cta", help="Call to action"),
    slides: Optional[int] = typer.Option(None, "--slides", "-s", help="Number of carousel slides"),
    reference_url: Optional[str] = typer.Option(None, "--reference", help="Reference article URL"),
    video_url: Optional[str] = typer.Option(None, "--video", help="Reference YouTube URL"),
    duration: Optional[VideoDuration] = typer.Option(None, "--duration", help="Video duration bucket"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="OpenRouter model id"),
    rag_mode: Optional[str] = typer.Option(None, "--rag-mode", help="auto or manual"),
    rag_docs: Optional[list[str]] = typer.Option(None, "--rag-doc", help="Knowledge document id (repeatable)"),
    research: bool = typer.Option(True, "--research/--no-research", help="Run web research first"),
    output_dir: Optional[Path] = typer.Option(None, "--output", "-o", help="Render output directory"),
) -> None:
    """Run the full wizard: narratives, generation, review and render."""
    if not get_wizard_services_status()["llm"]:
        print_error("OpenRouter API key not configured", {"env": "OPENROUTER_API_KEY"})
        raise typer.Exit(1)

    theme = theme or Prompt.ask("Tema")
    inputs = WizardNarrativesInput(
        content_type=content_type,
        theme=theme,
        context=context,
        objective=objective,
        target_audience=target_audience,
        cta=cta,
        number_of_slides=slides,
        reference_url=reference_url,
        reference_video_url=video_url,
        video_duration=duration,
        model=model,
    )

    async def _main() -> None:
        orchestrator = _build_orchestrator(research)
        try:
            await _run_wizard(orchestrator, inputs, _rag_config(rag_mode, rag_docs), model, output_dir)
        finally:
            await _shutdown(orchestrator)

    asyncio.run(_main())


# =============================================================================
# INDIVIDUAL STEPS
# =============================================================================

def narratives(
    theme: str = typer.Argument(..., help="Theme of the post"),
    content_type: ContentType = typer.Option(ContentType.CAROUSEL, "--type", "-t", help="Content type"),
    objective: Optional[str] = typer.Option(None, "--objective", help="Goal of the post"),
    target_audience: Optional[str] = typer.Option(None, "--audience", help="Target audience"),
    reference_url: Optional[str] = typer.Option(None, "--reference", help="Reference article URL"),
    video_url: Optional[str] = typer.Option(None, "--video", help="Reference YouTube URL"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="OpenRouter model id"),
    research: bool = typer.Option(False, "--research/--no-research", help="Run web research first"),
) -> None:
    """Generate the four narrative options and save them as a new session."""
    inputs = WizardNarrativesInput(
        content_type=content_type,
        theme=theme,
        objective=objective,
        target_audience=target_audience,
        reference_url=reference_url,
        reference_video_url=video_url,
    )

    async def _main() -> WizardSession:
        orchestrator = _build_orchestrator(research)
        try:
            session = await orchestrator.start(inputs)
            await orchestrator.prepare_references(session)
            result = await orchestrator.generate_narratives(session, model)
            if result.is_failure():
                print_error(result.error, {"session": session.id})
                raise typer.Exit(1)
            return session
        finally:
            await _shutdown(orchestrator)

    session = asyncio.run(_main())
    show_narratives(console, session.narratives)
    print_info(f"Next: content-wizard generate {session.id} --narrative N")


def generate(
    session_id: str = typer.Argument(..., help="Wizard session id"),
    narrative: Optional[str] = typer.Option(None, "--narrative", "-n", help="Narrative number or id"),
    angle: Optional[NarrativeAngle] = typer.Option(None, "--regenerate-angle", help="Regenerate the narrative with this angle first"),
    feedback: Optional[str] = typer.Option(None, "--refactor", "-r", help="Refactor the current draft with this feedback"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="OpenRouter model id"),
    approve: bool = typer.Option(False, "--approve", help="Approve the draft after generating"),
) -> None:
    """Generate, refactor or approve the draft of a saved session."""
    settings = get_settings()
    store = WizardStore(settings.wizards_dir)
    session = _load_session(store, session_id)

    async def _main() -> None:
        orchestrator = _build_orchestrator(research=False)
        orchestrator.store = store
        try:
            if feedback:
                result = await orchestrator.refactor_content(session, feedback, model)
            else:
                if narrative is not None:
                    choice: int | str = int(narrative) - 1 if narrative.isdigit() else narrative
                    if angle is not None and isinstance(choice, int):
                        regen = await orchestrator.regenerate_narrative(session, choice, angle, model)
                        if regen.is_failure():
                            print_error(regen.error)
                            raise typer.Exit(1)
                    orchestrator.select_narrative(session, choice)
                result = await orchestrator.generate_content(session, model)

            if result.is_failure():
                print_error(result.error, {"session": session.id})
                raise typer.Exit(1)
            show_content(console, result.data)
            if approve:
                orchestrator.approve(session)
        except (WizardStepError, KeyError, IndexError) as e:
            print_error(str(e))
            raise typer.Exit(1)
        finally:
            await _shutdown(orchestrator)

    asyncio.run(_main())
    show_session_saved(console, session)


def render(
    session_id: str = typer.Argument(..., help="Wizard session id"),
    output_dir: Optional[Path] = typer.Option(None, "--output", "-o", help="Output directory"),
    theme: str = typer.Option("default", "--theme", help="Slide theme"),
) -> None:
    """Render an approved carousel session to JPEG slides."""
    from ...design.renderer import CarouselRenderer
    from ...design.theme import get_theme

    settings = get_settings()
    store = WizardStore(settings.wizards_dir)
    session = _load_session(store, session_id)

    try:
        renderer = CarouselRenderer(theme=get_theme(theme))
    except KeyError as e:
        print_error(str(e))
        raise typer.Exit(1)

    orchestrator = WizardOrchestrator(store=store, settings=settings, renderer=renderer)
    try:
        _render_session(orchestrator, session, output_dir)
    except WizardStepError as e:
        print_error(str(e))
        raise typer.Exit(1)


def sessions(
    step: Optional[WizardStep] = typer.Option(None, "--step", help="Only sessions at this step"),
    limit: int = typer.Option(20, "--limit", "-l", help="Maximum sessions to show"),
) -> None:
    """List saved wizard sessions, newest first."""
    store = WizardStore(get_settings().wizards_dir)
    show_sessions_table(console, store.list_sessions(step=step, limit=limit))


def transcribe(
    url: str = typer.Argument(..., help="YouTube video URL"),
) -> None:
    """Fetch the transcript of a YouTube video through Apify."""
    transcriber = ApifyTranscriber()
    if not transcriber.is_configured:
        print_error("Apify API token not configured", {"env": "APIFY_API_TOKEN"})
        raise typer.Exit(1)

    async def _main():
        try:
            return await transcriber.transcribe(url)
        finally:
            await transcriber.close()

    result = asyncio.run(_main())
    if result.is_failure():
        print_error(result.error)
        raise typer.Exit(1)
    if result.data is None:
        print_warning("No transcript available for this video.")
        return
    show_transcription(console, result.data)


def status() -> None:
    """Show which services are available."""
    show_services_status(console, get_wizard_services_status())


def models() -> None:
    """List the models the wizard can use."""
    show_models(console, get_available_wizard_models(), get_wizard_default_model())
