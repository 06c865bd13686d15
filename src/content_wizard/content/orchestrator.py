"""Wizard orchestrator - drives one wizard session from inputs to renders.

Steps (WizardStep):
    INPUT -> NARRATIVES -> GENERATION -> APPROVAL -> RENDER -> COMPLETED

Enrichment (reference extraction, transcription, research, RAG) never
stops the flow. Generation failures leave the session on its current step
so the user can retry.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..constants import (
    ChatClient,
    ContentType,
    NarrativeAngle,
    ProgressCallback,
    RagAssembler,
    WizardStep,
)
from ..design.renderer import CarouselRenderer
from ..providers.config import WizardSettings, get_settings
from ..providers.openrouter import get_openrouter_client
from ..research.apify import (
    ApifyTranscriber,
    extract_youtube_video_id,
    format_transcription_for_prompt,
)
from ..research.extractor import ReferenceExtractor, format_extracted_for_prompt
from ..research.rag import (
    format_rag_for_prompt,
    format_rag_sources_for_metadata,
    generate_wizard_rag_context,
)
from ..research.search import WebSearcher, run_research
from ..results import ServiceResult
from .generator import ContentGenerator
from .models import (
    GeneratedContent,
    NarrativeOption,
    ProcessingProgress,
    RagConfig,
    RagSource,
    WizardGenerationInput,
    WizardNarrativesInput,
)
from .store import RefactorEntry, WizardSession, WizardStore
from .variables import UserVariables, load_user_variables

_logger = logging.getLogger("content_wizard.orchestrator")


class WizardStepError(Exception):
    """Operation called on a session that is not at the right step."""


class WizardOrchestrator:
    """Coordinates enrichment, generation, refactoring and rendering.

    Dependencies are created lazily from settings unless injected.

    Usage:
        orchestrator = WizardOrchestrator()
        session = await orchestrator.start(
            WizardNarrativesInput(content_type="carousel", theme="Produtividade real")
        )
        await orchestrator.prepare_references(session)
        narratives = await orchestrator.generate_narratives(session)
        orchestrator.select_narrative(session, 0)
        content = await orchestrator.generate_content(session)
        orchestrator.approve(session)
        paths = orchestrator.render(session)
    """

    def __init__(
        self,
        store: WizardStore | None = None,
        generator: ContentGenerator | None = None,
        client: ChatClient | None = None,
        settings: WizardSettings | None = None,
        variables: UserVariables | None = None,
        transcriber: ApifyTranscriber | None = None,
        extractor: ReferenceExtractor | None = None,
        searcher: WebSearcher | None = None,
        assembler: RagAssembler | None = None,
        renderer: CarouselRenderer | None = None,
        progress_callback: ProgressCallback | None = None,
        research_enabled: bool = True,
    ):
        """Initialize the orchestrator.

        Args:
            store: Session store. Defaults to settings.wizards_dir.
            generator: Content generator.
            client: Chat client shared by generator and research planner.
            settings: Wizard settings.
            variables: User variables. Loaded from settings.profile_file if None.
            transcriber: YouTube transcriber.
            extractor: Reference page extractor.
            searcher: Web searcher for research.
            assembler: RAG backend (default knowledge base when None).
            renderer: Carousel slide renderer.
            progress_callback: Async callback receiving ProcessingProgress.
            research_enabled: Run web research before narratives.
        """
        self.settings = settings or get_settings()
        self.store = store or WizardStore(self.settings.wizards_dir)

        if variables is None:
            variables = load_user_variables(self.settings.profile_file)
        self.variables = variables

        self.client = client or (generator.client if generator else get_openrouter_client())
        self.generator = generator or ContentGenerator(
            client=self.client, settings=self.settings, variables=variables
        )

        self._owns_transcriber = transcriber is None
        self._owns_extractor = extractor is None
        self.transcriber = transcriber or ApifyTranscriber(token=self.settings.apify_api_token)
        self.extractor = extractor or ReferenceExtractor()
        self.searcher = searcher or WebSearcher()
        self.assembler = assembler
        self.renderer = renderer or CarouselRenderer()
        self.progress_callback = progress_callback
        self.research_enabled = research_enabled

    async def close(self) -> None:
        """Close HTTP clients created by the orchestrator."""
        if self._owns_transcriber:
            await self.transcriber.close()
        if self._owns_extractor:
            await self.extractor.close()

    async def __aenter__(self) -> WizardOrchestrator:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def _emit_progress(self, step: str, message: str, percentage: int = 0) -> None:
        """Emit a progress event to the callback."""
        if self.progress_callback:
            await self.progress_callback(
                ProcessingProgress(step=step, message=message, percentage=percentage)
            )

    @staticmethod
    def _require_step(session: WizardSession, *steps: WizardStep) -> None:
        if session.step not in steps:
            allowed = ", ".join(s.value for s in steps)
            raise WizardStepError(
                f"Session {session.id} is at step '{session.step.value}', expected one of: {allowed}"
            )

    # =========================================================================
    # INPUTS AND ENRICHMENT
    # =========================================================================

    async def start(
        self, inputs: WizardNarrativesInput, rag_config: RagConfig | None = None
    ) -> WizardSession:
        """Create a new session from the wizard inputs."""
        session = self.store.create(inputs, rag_config)
        _logger.info(f"WIZARD_START | session:{session.id} | type:{inputs.content_type.value}")
        return session

    def resume(self, session_id: str) -> WizardSession | None:
        return self.store.load(session_id)

    async def prepare_references(self, session: WizardSession) -> WizardSession:
        """Fill extracted content and research data from the references.

        Video transcript and article text are appended to any extracted
        content already present, unless that content already holds them,
        so calling this again does not duplicate a source. Each source is
        optional and failures only log a warning.
        """
        self._require_step(session, WizardStep.INPUT, WizardStep.NARRATIVES)
        inputs = session.inputs
        existing = inputs.extracted_content or ""
        extracted: list[str] = [existing] if existing else []

        video_id = extract_youtube_video_id(inputs.reference_video_url or "")
        video_header = f"VÍDEO DE REFERÊNCIA: https://www.youtube.com/watch?v={video_id}"
        article_header = f"ARTIGO DE REFERÊNCIA: {inputs.reference_url}"

        if inputs.reference_video_url and not (video_id and video_header in existing):
            await self._emit_progress("transcription", "Transcrevendo vídeo de referência...", 10)
            result = await self.transcriber.transcribe(inputs.reference_video_url)
            if result.is_failure():
                _logger.warning(f"WIZARD_TRANSCRIPTION | session:{session.id} | {result.error}")
            elif result.data is not None:
                extracted.append(format_transcription_for_prompt(result.data))

        if inputs.reference_url and article_header not in existing:
            await self._emit_progress("extraction", "Extraindo conteúdo da referência...", 30)
            result = await self.extractor.extract(inputs.reference_url)
            if result.data is not None:
                extracted.append(format_extracted_for_prompt(result.data))

        research_data = inputs.research_data
        if self.research_enabled and inputs.theme and not research_data:
            await self._emit_progress("research", "Pesquisando o tema...", 50)
            result = await run_research(
                self.client,
                inputs.theme,
                searcher=self.searcher,
                extracted_content="\n\n".join(extracted) or None,
                niche=self.variables.niche,
                objective=inputs.objective,
                target_audience=inputs.target_audience,
                number_of_slides=inputs.number_of_slides,
                cta=inputs.cta,
            )
            research_data = result.data

        session.inputs = inputs.model_copy(update={
            "extracted_content": "\n\n".join(extracted) or None,
            "research_data": research_data,
        })
        self.store.save(session)
        return session

    # =========================================================================
    # NARRATIVES
    # =========================================================================

    async def generate_narratives(
        self, session: WizardSession, model: str | None = None
    ) -> ServiceResult[list[NarrativeOption]]:
        """Generate the four narrative options for the session."""
        self._require_step(session, WizardStep.INPUT, WizardStep.NARRATIVES)
        await self._emit_progress("narratives", "Gerando narrativas...", 70)

        result = await self.generator.generate_narratives(session.inputs, model)
        if result.is_failure():
            session.last_error = result.error
            self.store.save(session)
            return result

        session.narratives = result.data
        session.selected_narrative = None
        session.step = WizardStep.NARRATIVES
        session.last_error = None
        self.store.save(session)
        await self._emit_progress("narratives", "Narrativas prontas", 100)
        return result

    async def regenerate_narrative(
        self,
        session: WizardSession,
        index: int,
        angle: NarrativeAngle | None = None,
        model: str | None = None,
    ) -> ServiceResult[list[NarrativeOption]]:
        """Replace one narrative option, keeping its angle unless another is given."""
        self._require_step(session, WizardStep.NARRATIVES)
        if not 0 <= index < len(session.narratives):
            return ServiceResult.fail("Narrative index out of bounds")

        angle = angle or session.narratives[index].angle
        result = await self.generator.regenerate_narrative(
            session.inputs, session.narratives, index, angle, model
        )
        if result.is_success():
            session.narratives = result.data
            self.store.save(session)
        return result

    def select_narrative(self, session: WizardSession, choice: int | str) -> NarrativeOption:
        """Select a narrative by index or id.

        Raises:
            KeyError: No narrative with that id.
            IndexError: Index out of range.
        """
        self._require_step(session, WizardStep.NARRATIVES, WizardStep.GENERATION, WizardStep.APPROVAL)
        if isinstance(choice, int):
            narrative = session.narratives[choice]
        else:
            narrative = next((n for n in session.narratives if n.id == choice), None)
            if narrative is None:
                raise KeyError(f"No narrative with id '{choice}'")

        session.selected_narrative = narrative
        session.content = None
        session.step = WizardStep.GENERATION
        self.store.save(session)
        return narrative

    # =========================================================================
    # GENERATION
    # =========================================================================

    def _rag_query(self, session: WizardSession) -> str:
        narrative = session.selected_narrative
        parts = [session.inputs.theme, narrative.title, narrative.description]
        return " ".join(p for p in parts if p)

    async def build_generation_input(
        self, session: WizardSession, custom_instructions: str | None = None
    ) -> WizardGenerationInput:
        """Generation input for the selected narrative, with RAG context when available."""
        await self._emit_progress("rag", "Consultando base de conhecimento...", 20)
        rag = await generate_wizard_rag_context(
            self._rag_query(session), session.rag_config, self.assembler
        )

        inputs = session.inputs
        return WizardGenerationInput(
            content_type=inputs.content_type,
            number_of_slides=inputs.number_of_slides,
            model=inputs.model,
            theme=inputs.theme,
            context=inputs.context,
            objective=inputs.objective,
            cta=inputs.cta,
            target_audience=inputs.target_audience,
            negative_terms=inputs.negative_terms,
            selected_narrative=session.selected_narrative,
            rag_context=format_rag_for_prompt(rag.data) or None,
            rag_sources=[RagSource(**s) for s in format_rag_sources_for_metadata(rag.data)] or None,
            custom_instructions=custom_instructions or inputs.custom_instructions,
            video_duration=inputs.video_duration,
        )

    async def generate_content(
        self,
        session: WizardSession,
        model: str | None = None,
        custom_instructions: str | None = None,
    ) -> ServiceResult[GeneratedContent]:
        """Generate (or regenerate) the draft for the selected narrative."""
        self._require_step(session, WizardStep.GENERATION, WizardStep.APPROVAL)
        generation_input = await self.build_generation_input(session, custom_instructions)

        await self._emit_progress("generation", "Gerando conteúdo...", 50)
        result = await self.generator.generate_content(generation_input, model)
        return self._store_content(session, result)

    async def refactor_content(
        self, session: WizardSession, feedback: str, model: str | None = None
    ) -> ServiceResult[GeneratedContent]:
        """Regenerate the current draft applying written feedback."""
        self._require_step(session, WizardStep.APPROVAL)
        if session.content is None:
            return ServiceResult.fail("No content to refactor")

        generation_input = await self.build_generation_input(session)
        await self._emit_progress("generation", "Refatorando conteúdo...", 50)
        result = await self.generator.refactor_content(
            generation_input, session.content, feedback, model
        )
        if result.is_success():
            session.refactors.append(RefactorEntry(feedback=feedback))
        return self._store_content(session, result)

    def _store_content(
        self, session: WizardSession, result: ServiceResult[GeneratedContent]
    ) -> ServiceResult[GeneratedContent]:
        if result.is_failure():
            session.last_error = result.error
        else:
            session.content = result.data
            session.step = WizardStep.APPROVAL
            session.last_error = None
        self.store.save(session)
        return result

    # =========================================================================
    # APPROVAL AND RENDER
    # =========================================================================

    def approve(self, session: WizardSession) -> WizardSession:
        """Accept the draft. Carousels move on to rendering."""
        self._require_step(session, WizardStep.APPROVAL)
        if session.content and session.content.type == ContentType.CAROUSEL:
            session.step = WizardStep.RENDER
        else:
            session.step = WizardStep.COMPLETED
        self.store.save(session)
        _logger.info(f"WIZARD_APPROVED | session:{session.id} | next:{session.step.value}")
        return session

    def abandon(self, session: WizardSession) -> WizardSession:
        session.step = WizardStep.ABANDONED
        self.store.save(session)
        return session

    def render(self, session: WizardSession, output_dir: Path | None = None) -> ServiceResult[list[Path]]:
        """Render the approved carousel to JPEG slides.

        Defaults to <wizards_dir>/<session id>/.
        """
        self._require_step(session, WizardStep.RENDER, WizardStep.COMPLETED)
        carousel = session.content.carousel if session.content else None
        if carousel is None:
            return ServiceResult.fail("Only carousel content can be rendered")

        output_dir = output_dir or self.store.root / session.id
        try:
            paths = self.renderer.save(carousel, output_dir)
        except OSError as e:
            _logger.error(f"RENDER_ERROR | session:{session.id} | error:{e}")
            return ServiceResult.fail(f"Failed to render slides: {e}")

        session.render_paths = [str(p) for p in paths]
        session.step = WizardStep.COMPLETED
        self.store.save(session)
        return ServiceResult.ok(paths)
