"""Layered layout for SDL graphs: layers, ordering, geometry, routing."""

from sdl_layout.layout.engine import LayoutResult, compute_layout
from sdl_layout.layout.geometry import LayoutConfig
from sdl_layout.layout.session import LayoutSession

__all__ = ["LayoutConfig", "LayoutResult", "LayoutSession", "compute_layout"]
