"""Enums for the content wizard.

This module contains all enumerations shared by prompts, validation and
the services:
- Content types and narrative angles
- Carousel slide and video section types
- Wizard step lifecycle
- External run states (Apify)

AI CONTEXT:
-----------
Enum values are the exact strings the LLM is asked to emit and that are
persisted in wizard sessions. They are Portuguese on purpose: the model
is prompted in Portuguese and must echo the same words back.

MODIFICATION GUIDE:
------------------
- Add new enum values at the END to maintain backwards compatibility
- Changing a value requires updating the matching prompt text
"""

from enum import Enum


# =============================================================================
# CONTENT
# =============================================================================

class ContentType(str, Enum):
    """Kind of post the wizard produces."""

    TEXT = "text"
    IMAGE = "image"
    CAROUSEL = "carousel"
    VIDEO = "video"


class NarrativeAngle(str, Enum):
    """Tribal stance a narrative option is written from."""

    HEREGE = "herege"
    """Challenges a common belief of the niche."""

    VISIONARIO = "visionario"
    """Shows where the niche is going."""

    TRADUTOR = "tradutor"
    """Makes something complex simple."""

    TESTEMUNHA = "testemunha"
    """Speaks from lived experience."""


class SlideType(str, Enum):
    """Allowed values for a carousel slide tipo."""

    PROBLEMA = "problema"
    CONCEITO = "conceito"
    PASSO = "passo"
    EXEMPLO = "exemplo"
    ERRO = "erro"
    SINTESE = "sintese"
    CTA = "cta"


# =============================================================================
# VIDEO
# =============================================================================

class VideoDuration(str, Enum):
    """Target length buckets for a video script."""

    SHORT = "2-5min"
    MEDIUM = "5-10min"
    LONG = "+10min"
    EXTENDED = "+30min"

    @property
    def is_long_form(self) -> bool:
        return self in (VideoDuration.LONG, VideoDuration.EXTENDED)


class HookType(str, Enum):
    """Opening technique of a video script."""

    RECONHECIMENTO = "reconhecimento"
    PROVOCACAO = "provocacao"
    PROMESSA = "promessa"
    PERGUNTA = "pergunta"


class DevelopmentSectionType(str, Enum):
    """Kind of section in the body of a video script."""

    PROBLEMA = "problema"
    CONCEITO = "conceito"
    PASSO = "passo"
    EXEMPLO = "exemplo"
    ERRO = "erro"
    CONTRASTE = "contraste"
    SINTESE = "sintese"
    CTA = "cta"


# =============================================================================
# WIZARD LIFECYCLE
# =============================================================================

class WizardStep(str, Enum):
    """Step a persisted wizard session is on.

    Workflow:
        INPUT -> NARRATIVES -> GENERATION -> APPROVAL -> RENDER -> COMPLETED
                                   ^            |
                                   +-- refactor-+
    """

    INPUT = "input"
    NARRATIVES = "narratives"
    GENERATION = "generation"
    APPROVAL = "approval"
    RENDER = "render"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class RagMode(str, Enum):
    """How documents are picked for RAG context."""

    AUTO = "auto"
    MANUAL = "manual"


class ApifyRunStatus(str, Enum):
    """Actor run states reported by the Apify API."""

    READY = "READY"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    ABORTED = "ABORTED"
    TIMED_OUT = "TIMED-OUT"

    @property
    def is_failure(self) -> bool:
        return self in (ApifyRunStatus.FAILED, ApifyRunStatus.ABORTED, ApifyRunStatus.TIMED_OUT)
