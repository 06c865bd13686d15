"""Carousel slide rendering."""

from .renderer import CarouselRenderer
from .theme import THEMES, ColorScheme, SlideTheme, Typography, get_theme

__all__ = [
    "CarouselRenderer",
    "ColorScheme",
    "SlideTheme",
    "THEMES",
    "Typography",
    "get_theme",
]
