"""Content wizard core: models, prompts, validation, generation and sessions."""

from .generator import (
    ContentGenerator,
    generate_content,
    generate_narratives,
    get_available_wizard_models,
    get_wizard_default_model,
    is_llm_service_available,
    parse_narratives,
    structure_generated_content,
)
from .models import (
    GeneratedContent,
    GeneratedSlide,
    NarrativeOption,
    RagConfig,
    RagResult,
    VideoScriptStructured,
    WizardGenerationInput,
    WizardNarrativesInput,
    ZoryonCarousel,
)
from .orchestrator import WizardOrchestrator, WizardStepError
from .prompts import (
    PromptParams,
    extract_json_from_response,
    get_content_prompt,
    get_narratives_system_prompt,
    get_refactor_instructions,
)
from .store import RefactorEntry, WizardSession, WizardStore
from .validation import (
    ValidationError,
    safe_validate_carousel,
    validate_carousel_response,
    validate_video_script_response,
)
from .variables import (
    UserVariables,
    check_for_negative_terms,
    enhance_prompt_with_variables,
    get_negative_terms_array,
    load_user_variables,
)

__all__ = [
    # Generation
    "ContentGenerator",
    "generate_content",
    "generate_narratives",
    "get_available_wizard_models",
    "get_wizard_default_model",
    "is_llm_service_available",
    "parse_narratives",
    "structure_generated_content",
    # Models
    "GeneratedContent",
    "GeneratedSlide",
    "NarrativeOption",
    "RagConfig",
    "RagResult",
    "VideoScriptStructured",
    "WizardGenerationInput",
    "WizardNarrativesInput",
    "ZoryonCarousel",
    # Sessions
    "RefactorEntry",
    "WizardOrchestrator",
    "WizardSession",
    "WizardStepError",
    "WizardStore",
    # Prompts
    "PromptParams",
    "extract_json_from_response",
    "get_content_prompt",
    "get_narratives_system_prompt",
    "get_refactor_instructions",
    # Validation
    "ValidationError",
    "safe_validate_carousel",
    "validate_carousel_response",
    "validate_video_script_response",
    # Personalization
    "UserVariables",
    "check_for_negative_terms",
    "enhance_prompt_with_variables",
    "get_negative_terms_array",
    "load_user_variables",
]
