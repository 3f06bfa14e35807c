"""Theme definitions for architecture diagrams."""

from sdl_layout.themes.dark import DARK_THEME
from sdl_layout.themes.default import DEFAULT_THEME

THEMES = {
    "default": DEFAULT_THEME,
    "dark": DARK_THEME,
}

__all__ = ["THEMES", "DEFAULT_THEME", "DARK_THEME"]
