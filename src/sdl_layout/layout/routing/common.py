"""Shared types and helper functions for edge routing."""

from __future__ import annotations

from dataclasses import dataclass

from sdl_layout.layout.geometry import LayoutConfig, NodeDims
from sdl_layout.parser.model import Edge, PortSide, Position, SdlGraph

Point = tuple[float, float]


@dataclass
class RoutedEdge:
    """A cubic connector between two node ports."""

    edge: Edge
    source_side: PortSide
    target_side: PortSide
    start: Point
    control1: Point
    control2: Point
    end: Point

    @property
    def source_port(self) -> float:
        return self.start[1]

    @property
    def target_port(self) -> float:
        return self.end[1]

    def points(self) -> list[Point]:
        return [self.start, self.control1, self.control2, self.end]

    def svg_path(self) -> str:
        (sx, sy), (c1x, c1y), (c2x, c2y), (tx, ty) = self.points()
        return f"M{sx:g},{sy:g} C{c1x:g},{c1y:g} {c2x:g},{c2y:g} {tx:g},{ty:g}"

    def midpoint(self) -> Point:
        return ((self.start[0] + self.end[0]) / 2, (self.start[1] + self.end[1]) / 2)


def endpoint_geometry(
    edge: Edge,
    graph: SdlGraph,
    positions: dict[str, Position],
    config: LayoutConfig,
) -> tuple[Position, NodeDims, Position, NodeDims] | None:
    """Positions and sizes of both endpoints, or None if either is missing."""
    src_pos = positions.get(edge.source)
    tgt_pos = positions.get(edge.target)
    src_node = graph.nodes.get(edge.source)
    tgt_node = graph.nodes.get(edge.target)
    if not (src_pos and tgt_pos and src_node and tgt_node):
        return None
    return (
        src_pos,
        config.dims(src_node.category),
        tgt_pos,
        config.dims(tgt_node.category),
    )
