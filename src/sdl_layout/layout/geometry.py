"""Coordinate mapping: layer/order to pixel positions, sized per shape."""

from __future__ import annotations

__all__ = [
    "DEFAULT_SHAPES",
    "LayoutConfig",
    "NodeDims",
    "SHAPE_FOR_KIND",
    "ShapeKind",
    "canvas_size",
    "node_dims",
    "resolve_positions",
    "shape_for",
]

from dataclasses import dataclass, field
from enum import Enum

from sdl_layout.layout.constants import (
    CYLINDER_SIZE,
    DIAMOND_SIZE,
    LAYER_SPACING_X,
    MARGIN,
    NODE_CORNER_RADIUS,
    NODE_HEIGHT,
    NODE_SPACING_Y,
    NODE_WIDTH,
    ORDERING_ROUNDS,
    PERSON_SIZE,
)
from sdl_layout.layout.ordering import OrderingResult
from sdl_layout.parser.model import NodeCategory, NodeKind, Position, SdlGraph


class ShapeKind(Enum):
    """Outline drawn for a node."""

    RECTANGLE = "rectangle"
    CYLINDER = "cylinder"
    DIAMOND = "diamond"
    PERSON = "person"


@dataclass(frozen=True)
class NodeDims:
    width: float
    height: float
    corner_radius: float = 0.0


SHAPE_FOR_KIND: dict[NodeKind, ShapeKind] = {
    NodeKind.DATABASE: ShapeKind.CYLINDER,
    NodeKind.CACHE: ShapeKind.CYLINDER,
    NodeKind.GATEWAY: ShapeKind.DIAMOND,
    NodeKind.LOAD_BALANCER: ShapeKind.DIAMOND,
    NodeKind.ACTOR: ShapeKind.PERSON,
}

DEFAULT_SHAPES: dict[ShapeKind, NodeDims] = {
    ShapeKind.RECTANGLE: NodeDims(NODE_WIDTH, NODE_HEIGHT, NODE_CORNER_RADIUS),
    ShapeKind.CYLINDER: NodeDims(*CYLINDER_SIZE),
    ShapeKind.DIAMOND: NodeDims(*DIAMOND_SIZE),
    ShapeKind.PERSON: NodeDims(*PERSON_SIZE),
}


@dataclass
class LayoutConfig:
    """Spacing and shape sizes for one layout pass."""

    layer_spacing_x: float = LAYER_SPACING_X
    node_spacing_y: float = NODE_SPACING_Y
    margin: float = MARGIN
    rounds: int = ORDERING_ROUNDS
    shapes: dict[ShapeKind, NodeDims] = field(
        default_factory=lambda: dict(DEFAULT_SHAPES)
    )

    def dims(self, category: NodeCategory) -> NodeDims:
        return node_dims(category, self.shapes)


def shape_for(category: NodeCategory) -> ShapeKind:
    return SHAPE_FOR_KIND.get(category.kind, ShapeKind.RECTANGLE)


def node_dims(
    category: NodeCategory,
    shapes: dict[ShapeKind, NodeDims] | None = None,
) -> NodeDims:
    """Return the box size for a node kind.

    Shapes missing from ``shapes`` fall back to the rectangle entry, then
    to the built-in rectangle size.
    """
    table = shapes if shapes is not None else DEFAULT_SHAPES
    dims = table.get(shape_for(category))
    if dims is None:
        dims = table.get(ShapeKind.RECTANGLE, DEFAULT_SHAPES[ShapeKind.RECTANGLE])
    return dims


def resolve_positions(
    ordering: OrderingResult,
    graph: SdlGraph,
    config: LayoutConfig | None = None,
) -> dict[str, Position]:
    """Assign top-left pixel coordinates from an ordering.

    x depends only on the layer index. y stacks nodes top to bottom in
    layer order, each taking its own height plus the vertical gap.
    Ordering entries that are not graph nodes are ignored.
    """
    config = config or LayoutConfig()
    positions: dict[str, Position] = {}

    for layer, order in zip(ordering.layer_indices, ordering.layers):
        x = config.margin + layer * config.layer_spacing_x
        y = config.margin
        for nid in order:
            node = graph.nodes.get(nid)
            if node is None:
                continue
            positions[nid] = Position(x=x, y=y, layer=layer)
            y += config.dims(node.category).height + config.node_spacing_y

    return positions


def canvas_size(
    positions: dict[str, Position],
    graph: SdlGraph,
    config: LayoutConfig | None = None,
) -> tuple[float, float]:
    """Canvas (width, height): furthest node extent plus margin on both sides."""
    config = config or LayoutConfig()
    max_x = 0.0
    max_y = 0.0
    for nid, pos in positions.items():
        node = graph.nodes.get(nid)
        if node is None:
            continue
        dims = config.dims(node.category)
        max_x = max(max_x, pos.x + dims.width)
        max_y = max(max_y, pos.y + dims.height)
    return (max_x + config.margin * 2, max_y + config.margin * 2)
