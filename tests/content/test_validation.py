"""Tests for carousel and video script response validation."""

from __future__ import annotations

import copy

import pytest

from content_wizard.content.validation import (
    ValidationError,
    count_words,
    safe_validate_carousel,
    validate_carousel_response,
    validate_video_script_response,
)


def _words(count: int) -> str:
    return " ".join(["palavra"] * count)


class TestCarouselCaption:
    """Caption (legenda) word limits."""

    @pytest.mark.parametrize("count", [200, 400])
    def test_caption_at_limits_is_accepted(self, valid_carousel, count):
        valid_carousel["legenda"] = _words(count)

        carousel = validate_carousel_response(valid_carousel)

        assert count_words(carousel.legenda) == count

    def test_caption_below_minimum(self, valid_carousel):
        valid_carousel["legenda"] = _words(199)

        with pytest.raises(ValidationError) as exc_info:
            validate_carousel_response(valid_carousel)

        assert exc_info.value.field == "legenda"
        assert exc_info.value.received == "199 palavras (muito curto)"

    def test_caption_above_maximum(self, valid_carousel):
        valid_carousel["legenda"] = _words(401)

        with pytest.raises(ValidationError) as exc_info:
            validate_carousel_response(valid_carousel)

        assert exc_info.value.field == "legenda"
        assert "muito longo" in exc_info.value.received

    def test_caption_missing(self, valid_carousel):
        del valid_carousel["legenda"]

        with pytest.raises(ValidationError) as exc_info:
            validate_carousel_response(valid_carousel)

        assert exc_info.value.field == "legenda"
        assert exc_info.value.received == "ausente"


class TestCarouselSlides:
    """Per-slide checks."""

    def test_body_at_limit_is_accepted(self, valid_carousel):
        valid_carousel["slides"][0]["corpo"] = "x" * 130

        validate_carousel_response(valid_carousel)

    def test_body_over_limit(self, valid_carousel):
        valid_carousel["slides"][1]["corpo"] = "x" * 131

        with pytest.raises(ValidationError) as exc_info:
            validate_carousel_response(valid_carousel)

        assert exc_info.value.field == "slides[1].corpo"
        assert "131" in exc_info.value.message

    def test_title_with_seven_words(self, valid_carousel):
        valid_carousel["slides"][0]["titulo"] = "um dois três quatro cinco seis sete"

        with pytest.raises(ValidationError) as exc_info:
            validate_carousel_response(valid_carousel)

        assert exc_info.value.field == "slides[0].titulo"
        assert exc_info.value.received == "7 palavras"

    def test_title_with_six_words_is_accepted(self, valid_carousel):
        valid_carousel["slides"][0]["titulo"] = "um dois três quatro cinco seis"

        validate_carousel_response(valid_carousel)

    def test_invalid_slide_type(self, valid_carousel):
        valid_carousel["slides"][2]["tipo"] = "gancho"

        with pytest.raises(ValidationError) as exc_info:
            validate_carousel_response(valid_carousel)

        assert exc_info.value.field == "slides[2].tipo"
        assert exc_info.value.received == "gancho"
        assert "Slide 3" in exc_info.value.message

    def test_missing_slide_type(self, valid_carousel):
        del valid_carousel["slides"][0]["tipo"]

        with pytest.raises(ValidationError) as exc_info:
            validate_carousel_response(valid_carousel)

        assert exc_info.value.field == "slides[0].tipo"

    def test_empty_slides(self, valid_carousel):
        valid_carousel["slides"] = []

        with pytest.raises(ValidationError) as exc_info:
            validate_carousel_response(valid_carousel)

        assert exc_info.value.field == "slides"
        assert exc_info.value.received == "array vazio"

    def test_last_slide_may_omit_connection(self, valid_carousel):
        del valid_carousel["slides"][2]["conexao_proximo"]

        carousel = validate_carousel_response(valid_carousel)

        assert carousel.slides[2].conexao_proximo is None


class TestCarouselTopLevel:
    """Required top-level fields and check order."""

    @pytest.mark.parametrize("field", ["throughline", "valor_central"])
    def test_required_text_fields(self, valid_carousel, field):
        valid_carousel[field] = "   "

        with pytest.raises(ValidationError) as exc_info:
            validate_carousel_response(valid_carousel)

        assert exc_info.value.field == field

    def test_missing_cover_subtitle(self, valid_carousel):
        del valid_carousel["capa"]["subtitulo"]

        with pytest.raises(ValidationError) as exc_info:
            validate_carousel_response(valid_carousel)

        assert exc_info.value.field == "capa.subtitulo"

    def test_not_an_object(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_carousel_response(["not", "a", "carousel"])

        assert exc_info.value.field == "response"
        assert exc_info.value.received == "array"

    def test_first_violation_wins(self, valid_carousel):
        """A bad throughline is reported before a bad caption."""
        valid_carousel["throughline"] = ""
        valid_carousel["legenda"] = "curta"

        with pytest.raises(ValidationError) as exc_info:
            validate_carousel_response(valid_carousel)

        assert exc_info.value.field == "throughline"

    def test_safe_validate_returns_failure(self, valid_carousel):
        broken = copy.deepcopy(valid_carousel)
        broken["legenda"] = _words(10)

        assert safe_validate_carousel(valid_carousel).is_success()
        result = safe_validate_carousel(broken)
        assert result.is_failure()
        assert "legenda" in result.error


class TestVideoScript:
    """Video script structure checks."""

    @pytest.fixture
    def script(self) -> dict:
        return {
            "meta": {"duracao_estimada": "8min", "angulo_tribal": "herege", "valor_central": "Foco"},
            "thumbnail": {"titulo": "PARE DE PLANEJAR", "expressao": "séria", "texto_overlay": "", "estilo": "tech"},
            "roteiro": {
                "hook": {"texto": "Você planeja demais.", "tipo": "confronto", "nota_gravacao": "close"},
                "desenvolvimento": [
                    {"numero": 1, "tipo": "conceito", "topico": "Planejar vs fazer", "insight": "...", "transicao": "..."}
                ],
                "cta": {"texto": "Se inscreve", "proximo_passo": "Assista o próximo", "nota_gravacao": ""},
            },
        }

    def test_valid_script(self, script):
        result = validate_video_script_response(script)

        assert result.meta.duracao_estimada == "8min"
        assert result.roteiro.desenvolvimento[0].topico == "Planejar vs fazer"
        assert result.hashtags == []

    @pytest.mark.parametrize("field", ["meta", "roteiro", "thumbnail"])
    def test_missing_block(self, script, field):
        del script[field]

        with pytest.raises(ValidationError) as exc_info:
            validate_video_script_response(script)

        assert exc_info.value.field == field

    def test_empty_development(self, script):
        script["roteiro"]["desenvolvimento"] = []

        with pytest.raises(ValidationError) as exc_info:
            validate_video_script_response(script)

        assert exc_info.value.field == "roteiro.desenvolvimento"


class TestFieldTypes:
    """Wrong field types surface as the typed ValidationError."""

    def test_slide_number_not_an_integer(self, valid_carousel):
        valid_carousel["slides"][0]["numero"] = "primeiro"

        with pytest.raises(ValidationError) as exc_info:
            validate_carousel_response(valid_carousel)

        assert exc_info.value.field == "slides[0].numero"
        assert exc_info.value.expected == "int_parsing"
        assert exc_info.value.received == "string ('primeiro')"

    def test_safe_validate_reports_type_error(self, valid_carousel):
        valid_carousel["slides"][1]["numero"] = "segundo"

        result = safe_validate_carousel(valid_carousel)

        assert result.is_failure()
        assert "slides[1].numero" in result.error

    def test_script_section_number_not_an_integer(self):
        script = {
            "meta": {"duracao_estimada": 8},
            "thumbnail": {},
            "roteiro": {
                "hook": {"texto": "Pare."},
                "desenvolvimento": [{"numero": "primeiro", "topico": "Listas"}],
                "cta": {"texto": "Se inscreve"},
            },
        }

        with pytest.raises(ValidationError) as exc_info:
            validate_video_script_response(script)

        assert exc_info.value.field == "roteiro.desenvolvimento[0].numero"

    def test_numeric_duration_is_read_as_text(self):
        script = {
            "meta": {"duracao_estimada": 8},
            "thumbnail": {},
            "roteiro": {"hook": {}, "desenvolvimento": [{"numero": 1}], "cta": {}},
        }

        assert validate_video_script_response(script).meta.duracao_estimada == "8"
