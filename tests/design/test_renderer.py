"""Tests for the Pillow carousel renderer."""

from __future__ import annotations

from io import BytesIO

import pytest
from PIL import Image

from content_wizard.content.validation import validate_carousel_response
from content_wizard.design import THEMES, CarouselRenderer, get_theme


@pytest.fixture
def carousel(valid_carousel):
    return validate_carousel_response(valid_carousel)


class TestCarouselRenderer:

    def test_render_cover_and_slides(self, carousel):
        images = CarouselRenderer().render(carousel)

        assert len(images) == len(carousel.slides) + 1
        first = Image.open(BytesIO(images[0]))
        assert first.format == "JPEG"
        assert first.size == (1080, 1350)

    def test_save_numbers_files(self, carousel, tmp_path):
        paths = CarouselRenderer(get_theme("minimal")).save(carousel, tmp_path / "out")

        assert [p.name for p in paths] == ["slide_01.jpg", "slide_02.jpg", "slide_03.jpg", "slide_04.jpg"]
        assert all(p.stat().st_size > 0 for p in paths)

    def test_solid_background(self):
        renderer = CarouselRenderer(get_theme("minimal"))

        assert renderer._background().getpixel((10, 10)) == (0, 0, 0)

    def test_wrap_text_keeps_every_word(self):
        renderer = CarouselRenderer()
        font = renderer._get_font("Inter-Regular", 42)
        text = "Prioridade é o que muda o resultado e o resto é manutenção diária"

        lines = renderer.wrap_text(text, font, 300)

        assert len(lines) > 1
        assert " ".join(lines) == text

    def test_hex_to_rgb(self):
        assert CarouselRenderer._hex_to_rgb("#f97316") == (249, 115, 22)


def test_get_theme():
    assert get_theme("light") is THEMES["light"]
    with pytest.raises(KeyError, match="Unknown theme 'neon'"):
        get_theme("neon")
