"""Carousel slide renderer using Pillow."""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from ..constants import PathLike
from ..content.models import CarouselSlide, ZoryonCarousel
from .theme import SLIDE_TYPE_LABELS, SlideTheme

_logger = logging.getLogger("content_wizard.renderer")


class CarouselRenderer:
    """Render a validated carousel into portrait JPEG slides.

    The cover comes first, then one image per slide in order.

    Usage:
        renderer = CarouselRenderer()
        images = renderer.render(carousel)          # list of JPEG bytes
        paths = renderer.save(carousel, Path("out"))
    """

    # Default font paths - will try these in order
    FONT_PATHS = [
        # Windows
        "C:/Windows/Fonts/arialbd.ttf",
        "C:/Windows/Fonts/arial.ttf",
        # Linux
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        # macOS
        "/System/Library/Fonts/Helvetica.ttc",
        "/Library/Fonts/Arial.ttf",
    ]

    def __init__(self, theme: SlideTheme | None = None, fonts_dir: Path | None = None):
        """Initialize the renderer.

        Args:
            theme: Layout and colors. Defaults to the dark gradient theme.
            fonts_dir: Directory containing custom .ttf fonts.
        """
        self.theme = theme or SlideTheme()
        self.fonts_dir = fonts_dir
        self._font_cache: dict[tuple[str, int], ImageFont.FreeTypeFont | ImageFont.ImageFont] = {}

    @staticmethod
    def _hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
        hex_color = hex_color.lstrip("#")
        return tuple(int(hex_color[i:i + 2], 16) for i in (0, 2, 4))

    def _get_font(self, font_name: str, size: int):
        """Get a font, with caching."""
        cache_key = (font_name, size)
        if cache_key in self._font_cache:
            return self._font_cache[cache_key]

        font = None

        if self.fonts_dir:
            font_path = self.fonts_dir / f"{font_name}.ttf"
            if font_path.exists():
                font = ImageFont.truetype(str(font_path), size)

        if font is None:
            for path in [font_name, *self.FONT_PATHS]:
                try:
                    font = ImageFont.truetype(path, size)
                    break
                except OSError:
                    continue

        # Pillow >= 10.1 scales the bundled font
        if font is None:
            font = ImageFont.load_default(size=size)

        self._font_cache[cache_key] = font
        return font

    def _background(self) -> Image.Image:
        theme = self.theme
        if theme.background_type == "solid":
            return Image.new("RGB", (theme.width, theme.height), self._hex_to_rgb(theme.colors.background))

        img = Image.new("RGB", (theme.width, theme.height))
        draw = ImageDraw.Draw(img)
        r1, g1, b1 = self._hex_to_rgb(theme.colors.gradient_start)
        r2, g2, b2 = self._hex_to_rgb(theme.colors.gradient_end)
        for y in range(theme.height):
            t = y / theme.height
            color = (int(r1 + (r2 - r1) * t), int(g1 + (g2 - g1) * t), int(b1 + (b2 - b1) * t))
            draw.line([(0, y), (theme.width, y)], fill=color)
        return img

    def wrap_text(self, text: str, font, max_width: int) -> list[str]:
        """Wrap text to fit within max_width pixels."""
        lines: list[str] = []
        current: list[str] = []

        for word in text.split():
            candidate = " ".join(current + [word])
            bbox = font.getbbox(candidate)
            if bbox[2] - bbox[0] <= max_width or not current:
                current.append(word)
            else:
                lines.append(" ".join(current))
                current = [word]

        if current:
            lines.append(" ".join(current))
        return lines

    def _line_height(self, font) -> int:
        bbox = font.getbbox("Ay")
        return int((bbox[3] - bbox[1]) * self.theme.typography.line_height)

    def _draw_block(
        self, draw: ImageDraw.ImageDraw, lines: list[str], font, color: str, y: int, center: bool
    ) -> int:
        """Draw lines starting at y and return the y after the block."""
        theme = self.theme
        area_width = theme.width - theme.padding_x * 2
        step = self._line_height(font)
        for line in lines:
            if center:
                bbox = font.getbbox(line)
                x = theme.padding_x + (area_width - (bbox[2] - bbox[0])) // 2
            else:
                x = theme.padding_x
            draw.text((x, y), line, font=font, fill=self._hex_to_rgb(color))
            y += step
        return y

    def _draw_footer(self, draw: ImageDraw.ImageDraw, page: int, total: int) -> None:
        theme = self.theme
        font = self._get_font(theme.typography.body_font, theme.typography.label_size)
        y = theme.height - theme.padding_y // 2 - self._line_height(font)
        color = self._hex_to_rgb(theme.colors.text_secondary)

        if theme.handle:
            draw.text((theme.padding_x, y), theme.handle, font=font, fill=color)
        if theme.show_slide_number:
            label = f"{page}/{total}"
            bbox = font.getbbox(label)
            draw.text((theme.width - theme.padding_x - (bbox[2] - bbox[0]), y), label, font=font, fill=color)

    @staticmethod
    def _to_jpeg(img: Image.Image) -> bytes:
        output = BytesIO()
        img.save(output, format="JPEG", quality=95, optimize=True)
        return output.getvalue()

    def render_cover(self, carousel: ZoryonCarousel, total: int | None = None) -> bytes:
        """Cover slide: title and subtitle centered vertically."""
        theme = self.theme
        total = total or len(carousel.slides) + 1
        img = self._background()
        draw = ImageDraw.Draw(img)
        area_width = theme.width - theme.padding_x * 2

        title_font = self._get_font(theme.typography.heading_font, theme.typography.cover_title_size)
        subtitle_font = self._get_font(theme.typography.body_font, theme.typography.cover_subtitle_size)

        title = carousel.capa.titulo.upper() if theme.use_all_caps_cover else carousel.capa.titulo
        title_lines = self.wrap_text(title, title_font, area_width)
        subtitle_lines = self.wrap_text(carousel.capa.subtitulo, subtitle_font, area_width)

        gap = 48
        block_height = (
            len(title_lines) * self._line_height(title_font)
            + gap
            + len(subtitle_lines) * self._line_height(subtitle_font)
        )
        y = (theme.height - block_height) // 2
        y = self._draw_block(draw, title_lines, title_font, theme.colors.text_primary, y, center=True)
        self._draw_block(draw, subtitle_lines, subtitle_font, theme.colors.accent, y + gap, center=True)

        self._draw_footer(draw, 1, total)
        return self._to_jpeg(img)

    def render_slide(self, slide: CarouselSlide, page: int, total: int) -> bytes:
        """Content slide: type label, title, then body."""
        theme = self.theme
        img = self._background()
        draw = ImageDraw.Draw(img)
        area_width = theme.width - theme.padding_x * 2

        label_font = self._get_font(theme.typography.body_font, theme.typography.label_size)
        title_font = self._get_font(theme.typography.heading_font, theme.typography.title_size)
        body_font = self._get_font(theme.typography.body_font, theme.typography.body_size)

        label = SLIDE_TYPE_LABELS.get(slide.tipo, slide.tipo.value).upper()
        y = theme.padding_y
        y = self._draw_block(draw, [label], label_font, theme.colors.accent, y, center=False)
        y += 32
        y = self._draw_block(
            draw, self.wrap_text(slide.titulo, title_font, area_width),
            title_font, theme.colors.text_primary, y, center=False,
        )
        y += 40
        self._draw_block(
            draw, self.wrap_text(slide.corpo, body_font, area_width),
            body_font, theme.colors.text_secondary, y, center=False,
        )

        self._draw_footer(draw, page, total)
        return self._to_jpeg(img)

    def render(self, carousel: ZoryonCarousel) -> list[bytes]:
        """Render cover plus every slide as JPEG bytes."""
        total = len(carousel.slides) + 1
        images = [self.render_cover(carousel, total)]
        for index, slide in enumerate(carousel.slides, start=2):
            images.append(self.render_slide(slide, index, total))
        _logger.info(f"RENDER | slides:{total} | theme:{self.theme.name}")
        return images

    def save(self, carousel: ZoryonCarousel, output_dir: PathLike) -> list[Path]:
        """Render and write slide_01.jpg, slide_02.jpg, ... to output_dir."""
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        paths = []
        for index, data in enumerate(self.render(carousel), start=1):
            path = output_dir / f"slide_{index:02d}.jpg"
            path.write_bytes(data)
            paths.append(path)
        return paths
