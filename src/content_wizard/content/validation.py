"""Validation of LLM responses against the carousel and video script contracts.

The checks run in a fixed order and stop at the first violation, so the
error always names the earliest broken field.
"""

from __future__ import annotations

import logging
from typing import Any

import pydantic

from ..constants import (
    CAROUSEL_BODY_MAX_CHARS,
    CAROUSEL_CAPTION_MAX_WORDS,
    CAROUSEL_CAPTION_MIN_WORDS,
    CAROUSEL_TITLE_MAX_WORDS,
    SlideType,
)
from ..results import ServiceResult
from .models import VideoScriptStructured, ZoryonCarousel

_logger = logging.getLogger("content_wizard.validation")

VALID_SLIDE_TYPES: tuple[str, ...] = tuple(t.value for t in SlideType)


class ValidationError(Exception):
    """Raised when an LLM response breaks the output contract."""

    def __init__(self, message: str, field: str, expected: str, received: str):
        super().__init__(message)
        self.message = message
        self.field = field
        self.expected = expected
        self.received = received

    def __repr__(self) -> str:
        return f"ValidationError(field={self.field!r}, expected={self.expected!r}, received={self.received!r})"


def count_words(text: str) -> int:
    """Count whitespace-separated words."""
    return len(text.split())


def _type_name(value: Any) -> str:
    if value is None:
        return "ausente"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _field_path(loc: tuple[Any, ...]) -> str:
    """Render a pydantic error location as 'slides[0].numero'."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "response"


def _model_validate(model: type[pydantic.BaseModel], response: dict[str, Any], context: str) -> Any:
    """Validate into model, raising the typed ValidationError on bad field types."""
    try:
        return model.model_validate(response)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        field = _field_path(first["loc"])
        received = first.get("input")
        raise ValidationError(
            f"Campo '{field}' inválido em {context}: {first['msg']}",
            field,
            first["type"],
            f"{_type_name(received)} ({received!r})",
        ) from e


def _require_text(obj: dict[str, Any], key: str, field: str, message: str) -> str:
    value = obj.get(key)
    if not isinstance(value, str):
        raise ValidationError(message, field, "string não-vazia", _type_name(value))
    if not value.strip():
        raise ValidationError(message, field, "string não-vazia", f'"{value}"')
    return value


# =============================================================================
# CAROUSEL
# =============================================================================

def validate_carousel_response(response: Any) -> ZoryonCarousel:
    """Validate a parsed carousel response.

    Args:
        response: Parsed JSON returned by the LLM.

    Returns:
        The response as a ZoryonCarousel.

    Raises:
        ValidationError: On the first field that breaks the contract.
    """
    if not isinstance(response, dict):
        raise ValidationError(
            "Resposta da IA não é um objeto válido",
            "response",
            "object with carousel structure",
            _type_name(response),
        )

    _require_text(
        response, "throughline", "throughline",
        "Campo 'throughline' está faltando ou inválido. A IA deve fornecer o fio condutor narrativo.",
    )
    _require_text(
        response, "valor_central", "valor_central",
        "Campo 'valor_central' está faltando ou inválido. A IA deve explicar o que a pessoa aprende.",
    )

    capa = response.get("capa")
    if not isinstance(capa, dict):
        raise ValidationError(
            "Campo 'capa' está faltando ou inválido.",
            "capa",
            "object with titulo and subtitulo",
            _type_name(capa),
        )
    _require_text(capa, "titulo", "capa.titulo", "Campo 'capa.titulo' está vazio ou inválido.")
    _require_text(capa, "subtitulo", "capa.subtitulo", "Campo 'capa.subtitulo' está vazio ou inválido.")

    slides = response.get("slides")
    if not isinstance(slides, list):
        raise ValidationError("Campo 'slides' não é um array.", "slides", "array", _type_name(slides))
    if not slides:
        raise ValidationError(
            "Array 'slides' está vazio. Deve ter pelo menos 1 slide.",
            "slides",
            "array com 1+ slides",
            "array vazio",
        )

    for index, slide in enumerate(slides):
        _validate_slide(slide, index)

    legenda = response.get("legenda")
    expected_words = f"{CAROUSEL_CAPTION_MIN_WORDS}-{CAROUSEL_CAPTION_MAX_WORDS} palavras"
    if not isinstance(legenda, str):
        raise ValidationError(
            "Campo 'legenda' está faltando ou inválido.",
            "legenda",
            f"string ({expected_words})",
            _type_name(legenda),
        )

    words = count_words(legenda)
    if words < CAROUSEL_CAPTION_MIN_WORDS:
        raise ValidationError(
            f"Campo 'legenda' tem {words} palavras, mas o mínimo é {CAROUSEL_CAPTION_MIN_WORDS}.",
            "legenda",
            expected_words,
            f"{words} palavras (muito curto)",
        )
    if words > CAROUSEL_CAPTION_MAX_WORDS:
        raise ValidationError(
            f"Campo 'legenda' tem {words} palavras, mas o máximo é {CAROUSEL_CAPTION_MAX_WORDS}.",
            "legenda",
            expected_words,
            f"{words} palavras (muito longo)",
        )

    return _model_validate(ZoryonCarousel, response, "carousel")


def _validate_slide(slide: Any, index: int) -> None:
    """Validate one slide; index is zero-based, messages are one-based."""
    position = index + 1
    path = f"slides[{index}]"

    if not isinstance(slide, dict):
        raise ValidationError(f"Slide {position} não é um objeto válido.", path, "object", _type_name(slide))

    expected_types = "um de: " + ", ".join(VALID_SLIDE_TYPES)
    tipo = slide.get("tipo")
    if not isinstance(tipo, str) or not tipo:
        raise ValidationError(
            f"Slide {position}: Campo 'tipo' está faltando. Cada slide deve ter um tipo.",
            f"{path}.tipo",
            expected_types,
            _type_name(tipo),
        )
    if tipo not in VALID_SLIDE_TYPES:
        raise ValidationError(
            f"Slide {position}: Tipo '{tipo}' é inválido. Deve ser um dos {len(VALID_SLIDE_TYPES)} tipos.",
            f"{path}.tipo",
            expected_types,
            tipo,
        )

    titulo = slide.get("titulo")
    expected_title = f"string não-vazia (até {CAROUSEL_TITLE_MAX_WORDS} palavras)"
    if not isinstance(titulo, str) or not titulo.strip():
        raise ValidationError(
            f"Slide {position}: Campo 'titulo' está vazio ou inválido.",
            f"{path}.titulo",
            expected_title,
            _type_name(titulo),
        )
    title_words = count_words(titulo)
    if title_words > CAROUSEL_TITLE_MAX_WORDS:
        raise ValidationError(
            f"Slide {position}: Campo 'titulo' tem {title_words} palavras, máximo {CAROUSEL_TITLE_MAX_WORDS}.",
            f"{path}.titulo",
            expected_title,
            f"{title_words} palavras",
        )

    corpo = slide.get("corpo")
    expected_body = f"string (até {CAROUSEL_BODY_MAX_CHARS} caracteres)"
    if not isinstance(corpo, str):
        raise ValidationError(
            f"Slide {position}: Campo 'corpo' está faltando.",
            f"{path}.corpo",
            expected_body,
            _type_name(corpo),
        )
    if len(corpo) > CAROUSEL_BODY_MAX_CHARS:
        raise ValidationError(
            f"Slide {position}: Campo 'corpo' tem {len(corpo)} caracteres, máximo {CAROUSEL_BODY_MAX_CHARS}.",
            f"{path}.corpo",
            expected_body,
            f"{len(corpo)} caracteres (muito longo)",
        )

    # Last slide may omit it
    if "conexao_proximo" in slide and not isinstance(slide["conexao_proximo"], str):
        raise ValidationError(
            f"Slide {position}: Campo 'conexao_proximo' deve ser string quando presente.",
            f"{path}.conexao_proximo",
            "string",
            _type_name(slide["conexao_proximo"]),
        )


def safe_validate_carousel(response: Any) -> ServiceResult[ZoryonCarousel]:
    """Validate without raising; returns fail(message) on violation."""
    try:
        return ServiceResult.ok(validate_carousel_response(response))
    except ValidationError as e:
        return ServiceResult.fail(e.message)


def log_validation_error(error: ValidationError, context: str = "carousel") -> None:
    """Log a validation failure with field, expected and received values."""
    _logger.warning(
        f"VALIDATION_ERROR | context:{context} | field:{error.field} | "
        f"expected:{error.expected} | received:{error.received} | message:{error.message}"
    )


# =============================================================================
# VIDEO SCRIPT
# =============================================================================

def validate_video_script_response(response: Any) -> VideoScriptStructured:
    """Validate a parsed video script response.

    Only presence of the main blocks is enforced; nested fields fall back
    to empty values.
    """
    if not isinstance(response, dict):
        raise ValidationError(
            "Resposta da IA não é um objeto válido",
            "response",
            "object with video script structure",
            _type_name(response),
        )

    for key in ("meta", "roteiro", "thumbnail"):
        if not isinstance(response.get(key), dict):
            raise ValidationError(
                f"Campo '{key}' está faltando ou inválido.",
                key,
                "object",
                _type_name(response.get(key)),
            )

    roteiro = response["roteiro"]
    if not isinstance(roteiro.get("hook"), dict):
        raise ValidationError(
            "Campo 'roteiro.hook' está faltando ou inválido.",
            "roteiro.hook",
            "object",
            _type_name(roteiro.get("hook")),
        )
    desenvolvimento = roteiro.get("desenvolvimento")
    if not isinstance(desenvolvimento, list) or not desenvolvimento:
        raise ValidationError(
            "Campo 'roteiro.desenvolvimento' deve ter pelo menos 1 seção.",
            "roteiro.desenvolvimento",
            "array com 1+ seções",
            _type_name(desenvolvimento),
        )
    if not isinstance(roteiro.get("cta"), dict):
        raise ValidationError(
            "Campo 'roteiro.cta' está faltando ou inválido.",
            "roteiro.cta",
            "object",
            _type_name(roteiro.get("cta")),
        )

    return _model_validate(VideoScriptStructured, response, "video script")
