"""Visual themes for carousel slide renders."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from ..constants import SlideType


@dataclass
class ColorScheme:
    """Color scheme for slides."""

    background: str = "#0a0a0f"
    text_primary: str = "#ffffff"
    text_secondary: str = "#a1a1aa"
    accent: str = "#f97316"

    # Gradient colors
    gradient_start: str = "#111827"
    gradient_end: str = "#1f2937"


@dataclass
class Typography:
    """Typography settings."""

    heading_font: str = "Inter-Bold"
    body_font: str = "Inter-Regular"

    cover_title_size: int = 80
    cover_subtitle_size: int = 40
    title_size: int = 64
    body_size: int = 42
    label_size: int = 28

    line_height: float = 1.3


@dataclass
class SlideTheme:
    """Portrait (4:5) layout used for every slide of a carousel."""

    name: str = "default"
    width: int = 1080
    height: int = 1350

    colors: ColorScheme = field(default_factory=ColorScheme)
    typography: Typography = field(default_factory=Typography)

    padding_x: int = 96
    padding_y: int = 120

    background_type: Literal["solid", "gradient"] = "gradient"
    use_all_caps_cover: bool = True
    show_slide_number: bool = True
    handle: str | None = None


SLIDE_TYPE_LABELS: dict[SlideType, str] = {
    SlideType.PROBLEMA: "O problema",
    SlideType.CONCEITO: "O conceito",
    SlideType.PASSO: "Passo",
    SlideType.EXEMPLO: "Na prática",
    SlideType.ERRO: "O erro comum",
    SlideType.SINTESE: "Em resumo",
    SlideType.CTA: "Próximo passo",
}


THEMES: dict[str, SlideTheme] = {
    "default": SlideTheme(),
    "light": SlideTheme(
        name="light",
        colors=ColorScheme(
            background="#fafaf9",
            text_primary="#0c0a09",
            text_secondary="#57534e",
            accent="#dc2626",
            gradient_start="#fafaf9",
            gradient_end="#e7e5e4",
        ),
    ),
    "minimal": SlideTheme(
        name="minimal",
        background_type="solid",
        use_all_caps_cover=False,
        colors=ColorScheme(background="#000000", accent="#ffffff"),
    ),
}


def get_theme(name: str) -> SlideTheme:
    """Theme by name.

    Raises:
        KeyError: Unknown theme name.
    """
    try:
        return THEMES[name]
    except KeyError:
        raise KeyError(f"Unknown theme '{name}'. Available: {', '.join(THEMES)}") from None
