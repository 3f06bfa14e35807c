"""sdl-layout: layered layout and rendering for SDL architecture diagrams."""

__version__ = "0.1.0"
