"""SVG rendering for SDL architecture diagrams."""

from sdl_layout.render.svg import render_svg

__all__ = ["render_svg"]
