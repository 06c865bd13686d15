"""Narrative and content generation through OpenRouter."""

from __future__ import annotations

import json
import logging
import time
from typing import Any

from ..constants import (
    NARRATIVES_COUNT,
    WIZARD_MAX_RETRIES,
    ChatClient,
    ContentType,
    NarrativeAngle,
)
from ..providers.config import WizardConfig, WizardSettings, get_settings, get_wizard_config
from ..providers.openrouter import NOT_CONFIGURED_MESSAGE, get_openrouter_client
from ..results import ServiceResult
from .models import (
    ContentMetadata,
    GeneratedContent,
    GeneratedSlide,
    NarrativeOption,
    WizardGenerationInput,
    WizardNarrativesInput,
    to_string_list,
)
from .prompts import (
    PromptParams,
    extract_json_from_response,
    get_content_prompt,
    get_narratives_system_prompt,
    get_refactor_instructions,
)
from .validation import ValidationError, log_validation_error, validate_carousel_response
from .variables import UserVariables, enhance_prompt_with_variables, get_negative_terms_array

_logger = logging.getLogger("ai_calls")

NARRATIVES_USER_MESSAGE = "Generate 4 narrative options for social media content."
REQUIRED_NARRATIVE_FIELDS = ("id", "title", "description", "angle")


def get_wizard_default_model(settings: WizardSettings | None = None) -> str:
    """WIZARD_DEFAULT_MODEL, then DEFAULT_TEXT_MODEL, then openai/gpt-4.1."""
    return (settings or get_settings()).default_model


def get_available_wizard_models(config: WizardConfig | None = None) -> list[str]:
    return list((config or get_wizard_config()).available_models)


def is_llm_service_available(settings: WizardSettings | None = None) -> bool:
    return bool((settings or get_settings()).openrouter_api_key)


def parse_narratives(data: Any, expected: int | None = NARRATIVES_COUNT) -> list[NarrativeOption]:
    """Validate the narratives payload.

    Args:
        data: Parsed LLM response.
        expected: Exact number of narratives required, with every angle
            present. None accepts any non-empty list.

    Raises:
        ValueError: Payload does not match the contract.
    """
    if not isinstance(data, dict) or not isinstance(data.get("narratives"), list):
        raise ValueError("Response missing 'narratives' array")

    items = data["narratives"]
    if expected is not None and len(items) != expected:
        raise ValueError(f"Expected {expected} narratives, got {len(items)}")
    if not items:
        raise ValueError("Response has no narratives")

    narratives = []
    for index, item in enumerate(items):
        if not isinstance(item, dict) or any(not item.get(f) for f in REQUIRED_NARRATIVE_FIELDS):
            raise ValueError(f"Narrative {index + 1} missing required fields (id, title, description, angle)")
        narratives.append(NarrativeOption.model_validate(item))

    if expected is not None:
        missing = set(NarrativeAngle) - {n.angle for n in narratives}
        if missing:
            names = ", ".join(sorted(a.value for a in missing))
            raise ValueError(f"Missing narrative angles: {names}")

    return narratives


def structure_generated_content(
    data: Any,
    content_type: ContentType,
    narrative: NarrativeOption,
    model: str,
    generation_input: WizardGenerationInput | None = None,
) -> GeneratedContent:
    """Turn a parsed LLM response into GeneratedContent.

    Raises:
        ValidationError: Carousel response breaks the carousel contract.
        ValueError: Required field missing for the other types.
    """
    if not isinstance(data, dict):
        raise ValueError("Invalid response: not an object")

    metadata = ContentMetadata(
        narrative_id=narrative.id,
        narrative_title=narrative.title,
        narrative_angle=narrative.angle,
        model=model,
        rag_used=bool(generation_input and generation_input.rag_context),
        rag_sources=generation_input.rag_sources if generation_input else None,
    )
    hashtags = to_string_list(data["hashtags"]) if data.get("hashtags") else None
    cta = str(data["cta"]) if data.get("cta") else None

    if content_type == ContentType.CAROUSEL:
        carousel = validate_carousel_response(data)
        metadata.throughline = carousel.throughline
        metadata.valor_central = carousel.valor_central
        return GeneratedContent(
            type=ContentType.CAROUSEL,
            carousel=carousel,
            slides=[
                GeneratedSlide(
                    title=slide.titulo,
                    content=slide.corpo,
                    numero=slide.numero or index + 1,
                    acao=slide.conexao_proximo or None,
                )
                for index, slide in enumerate(carousel.slides)
            ],
            caption=carousel.legenda,
            hashtags=hashtags,
            cta=cta,
            metadata=metadata,
        )

    if content_type == ContentType.TEXT:
        if not isinstance(data.get("content"), str):
            raise ValueError("Text response missing 'content' field")
        return GeneratedContent(
            type=ContentType.TEXT,
            caption=data["content"],
            hashtags=hashtags,
            cta=cta,
            metadata=metadata,
        )

    if content_type == ContentType.IMAGE:
        if not isinstance(data.get("imagePrompt"), str):
            raise ValueError("Image response missing 'imagePrompt' field")
        metadata.image_prompt = data["imagePrompt"]
        return GeneratedContent(
            type=ContentType.IMAGE,
            caption=str(data["caption"]) if data.get("caption") else None,
            hashtags=hashtags,
            cta=cta,
            metadata=metadata,
        )

    if content_type == ContentType.VIDEO:
        if "script" not in data:
            raise ValueError("Video response missing 'script' field")
        script = data["script"]
        if generation_input is not None:
            metadata.duration = generation_input.video_duration
            metadata.intention = generation_input.video_intention
        return GeneratedContent(
            type=ContentType.VIDEO,
            caption=str(data["caption"]) if data.get("caption") else None,
            hashtags=hashtags,
            cta=cta,
            script=script if isinstance(script, str) else json.dumps(script, ensure_ascii=False),
            metadata=metadata,
        )

    raise ValueError(f"Unsupported content type: {content_type}")


class ContentGenerator:
    """Generates narratives and drafts for the wizard.

    Usage:
        generator = ContentGenerator()
        narratives = await generator.generate_narratives(
            WizardNarrativesInput(content_type="carousel", theme="Produtividade")
        )
        content = await generator.generate_content(
            WizardGenerationInput(content_type="carousel", selected_narrative=narratives.data[0])
        )
    """

    def __init__(
        self,
        client: ChatClient | None = None,
        settings: WizardSettings | None = None,
        config: WizardConfig | None = None,
        variables: UserVariables | None = None,
    ):
        """Initialize the generator.

        Args:
            client: Chat client. Defaults to the shared OpenRouter client.
            settings: Wizard settings (default model).
            config: YAML configuration (per-task overrides).
            variables: User personalization variables appended to prompts.
        """
        self.settings = settings or get_settings()
        self.config = config or get_wizard_config()
        self.client = client or get_openrouter_client()
        self.variables = variables or UserVariables()

    def _resolve_model(self, task: str, model: str | None) -> str:
        return model or self.config.model_for(task, get_wizard_default_model(self.settings))

    async def _complete(self, task: str, model: str, system: str, user: str) -> Any:
        start_time = time.time()
        response = await self.client.chat(
            [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            model=model,
            temperature=self.config.temperature_for(task, 0.7),
            max_tokens=self.config.max_tokens_for(task, None),
            json_mode=True,
            task=task,
            max_retries=WIZARD_MAX_RETRIES,
        )
        _logger.debug(f"WIZARD_CALL | task:{task} | model:{model} | {time.time() - start_time:.2f}s")
        return extract_json_from_response(response)

    def _narratives_prompt(self, data: WizardNarrativesInput, custom_instructions: str | None) -> str:
        prompt = get_narratives_system_prompt(
            content_type=data.content_type,
            theme=data.theme,
            context=data.context,
            objective=data.objective,
            target_audience=data.target_audience,
            cta=data.cta,
            extracted_content=data.extracted_content,
            research_data=data.research_data,
            custom_instructions=custom_instructions,
            number_of_slides=data.number_of_slides,
            video_duration=data.video_duration.value if data.video_duration else None,
        )
        return enhance_prompt_with_variables(prompt, self.variables)

    async def generate_narratives(
        self, data: WizardNarrativesInput, model: str | None = None
    ) -> ServiceResult[list[NarrativeOption]]:
        """Generate one narrative option per tribal angle."""
        if not self.client.is_configured:
            return ServiceResult.fail(NOT_CONFIGURED_MESSAGE)

        model = self._resolve_model("narratives", model or data.model)
        try:
            system = self._narratives_prompt(data, data.custom_instructions)
            parsed = await self._complete("narratives", model, system, NARRATIVES_USER_MESSAGE)
            narratives = parse_narratives(parsed)
        except Exception as e:
            _logger.warning(f"NARRATIVES_ERROR | model:{model} | error:{e}")
            return ServiceResult.fail(f"Failed to generate narratives: {e}")

        _logger.info(f"NARRATIVES | model:{model} | count:{len(narratives)}")
        return ServiceResult.ok(narratives)

    async def regenerate_narrative(
        self,
        data: WizardNarrativesInput,
        narratives: list[NarrativeOption],
        index: int,
        angle: NarrativeAngle,
        model: str | None = None,
    ) -> ServiceResult[list[NarrativeOption]]:
        """Replace the narrative at index with a fresh one for angle.

        The other narratives are returned unchanged.
        """
        if not 0 <= index < len(narratives):
            return ServiceResult.fail("Narrative index out of bounds")
        if not self.client.is_configured:
            return ServiceResult.fail(NOT_CONFIGURED_MESSAGE)

        try:
            angle = NarrativeAngle(angle)
        except ValueError:
            return ServiceResult.fail(f"Invalid narrative angle: {angle}")

        model = self._resolve_model("narratives", model or data.model)
        instructions = (
            f'IMPORTANTE: Gere APENAS UMA narrativa com o ângulo "{angle.value}". '
            "Retorne o array narratives com exatamente 1 narrativa."
        )
        if data.custom_instructions:
            instructions = f"{data.custom_instructions}\n\n{instructions}"

        try:
            system = self._narratives_prompt(data, instructions)
            parsed = await self._complete("narratives", model, system, NARRATIVES_USER_MESSAGE)
            candidates = parse_narratives(parsed, expected=None)
        except Exception as e:
            _logger.warning(f"NARRATIVE_REGEN_ERROR | model:{model} | error:{e}")
            return ServiceResult.fail(f"Failed to regenerate narrative: {e}")

        chosen = next((n for n in candidates if n.angle == angle), candidates[0])
        replacement = chosen.model_copy(update={
            "id": f"regenerated-{angle.value}-{int(time.time() * 1000)}",
            "angle": angle,
        })
        updated = list(narratives)
        updated[index] = replacement
        return ServiceResult.ok(updated)

    def build_content_prompt(self, data: WizardGenerationInput) -> str:
        """System prompt for generate_content (exposed for previews)."""
        narrative = data.selected_narrative
        negative_terms = list(data.negative_terms or [])
        for term in get_negative_terms_array(self.variables):
            if term not in negative_terms:
                negative_terms.append(term)

        params = PromptParams(
            content_type=data.content_type,
            narrative_angle=narrative.angle,
            narrative_title=narrative.title,
            narrative_description=narrative.description,
            narrative_hook=narrative.hook,
            core_belief=narrative.core_belief,
            status_quo_challenged=narrative.status_quo_challenged,
            theme=data.theme,
            target_audience=data.target_audience,
            objective=data.objective,
            cta=data.cta,
            number_of_slides=data.number_of_slides,
            negative_terms=negative_terms,
            rag_context=data.rag_context,
            custom_instructions=data.custom_instructions,
        )
        prompt = get_content_prompt(params)
        if data.refactor_feedback:
            prompt += get_refactor_instructions(data.refactor_feedback, data.current_content)
        return enhance_prompt_with_variables(prompt, self.variables)

    async def generate_content(
        self, data: WizardGenerationInput, model: str | None = None
    ) -> ServiceResult[GeneratedContent]:
        """Generate the draft for the selected narrative."""
        if not self.client.is_configured:
            return ServiceResult.fail(NOT_CONFIGURED_MESSAGE)

        content_type = ContentType(data.content_type)
        task = f"content_{content_type.value}"
        model = self._resolve_model(task, model or data.model)
        user = f"Generate {content_type.value} content with the selected narrative approach."

        try:
            parsed = await self._complete(task, model, self.build_content_prompt(data), user)
            content = structure_generated_content(
                parsed, content_type, data.selected_narrative, model, data
            )
        except ValidationError as e:
            log_validation_error(e, context=task)
            return ServiceResult.fail(f"Failed to generate content: {e.message}")
        except Exception as e:
            _logger.warning(f"CONTENT_ERROR | task:{task} | model:{model} | error:{e}")
            return ServiceResult.fail(f"Failed to generate content: {e}")

        _logger.info(f"CONTENT | type:{content_type.value} | model:{model} | rag:{content.metadata.rag_used}")
        return ServiceResult.ok(content)

    async def refactor_content(
        self,
        data: WizardGenerationInput,
        current: GeneratedContent,
        feedback: str,
        model: str | None = None,
    ) -> ServiceResult[GeneratedContent]:
        """Regenerate a draft applying the user's feedback."""
        current_json = json.dumps(
            current.to_json_dict(), ensure_ascii=False, indent=2
        )
        refactor_input = data.model_copy(update={
            "refactor_feedback": feedback,
            "current_content": current_json,
        })
        return await self.generate_content(refactor_input, model)


# Module-level convenience functions

async def generate_narratives(
    data: WizardNarrativesInput,
    model: str | None = None,
    client: ChatClient | None = None,
    variables: UserVariables | None = None,
) -> ServiceResult[list[NarrativeOption]]:
    return await ContentGenerator(client=client, variables=variables).generate_narratives(data, model)


async def generate_content(
    data: WizardGenerationInput,
    model: str | None = None,
    client: ChatClient | None = None,
    variables: UserVariables | None = None,
) -> ServiceResult[GeneratedContent]:
    return await ContentGenerator(client=client, variables=variables).generate_content(data, model)
