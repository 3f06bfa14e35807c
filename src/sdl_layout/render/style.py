"""Theme and style constants for architecture diagram rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from sdl_layout.layout.geometry import LayoutConfig


@dataclass(frozen=True)
class ColorSet:
    fill: str
    stroke: str
    text: str


@dataclass
class Theme:
    """Visual theme for an architecture diagram."""

    name: str
    background_color: str
    colors: dict[str, ColorSet]
    font_family: str
    font_mono: str
    title_color: str
    title_font_size: float = 18.0
    node_stroke_width: float = 1.5
    node_font_size: float = 12.0
    icon_size: float = 18.0
    edge_stroke_width: float = 1.5
    edge_opacity: float = 0.7
    arrow_size: float = 8.0
    # Dash patterns per protocol line style; None draws a solid line
    line_dashes: dict[str, str | None] = field(
        default_factory=lambda: {"solid": None, "dashed": "8,4", "dotted": "2,5"}
    )
    layout: LayoutConfig = field(default_factory=LayoutConfig)

    def color(self, hint: str) -> ColorSet:
        """Colour set for a hint, falling back to gray."""
        return self.colors.get(hint) or self.colors["gray"]
