"""Edge routing: cubic connectors between spread ports.

Routing only reads current positions; it never reorders layers, so it is
cheap enough to re-run on every drag move.
"""

from __future__ import annotations

import logging

from sdl_layout.layout.constants import CURVE_FACTOR, MIN_CURVE_REACH
from sdl_layout.layout.geometry import LayoutConfig, NodeDims
from sdl_layout.layout.routing.common import RoutedEdge, endpoint_geometry
from sdl_layout.layout.routing.ports import assign_ports, edge_sides
from sdl_layout.parser.model import Edge, PortSide, Position, SdlGraph

logger = logging.getLogger(__name__)


def route_edge(
    edge: Edge,
    src_pos: Position,
    src_dims: NodeDims,
    tgt_pos: Position,
    tgt_dims: NodeDims,
    source_port: float | None = None,
    target_port: float | None = None,
    curve_factor: float = CURVE_FACTOR,
    min_reach: float = MIN_CURVE_REACH,
) -> RoutedEdge:
    """Route one edge as a cubic curve.

    Ports default to the vertical midpoint of each node. Control points
    extend horizontally from each end, away from the node, by
    ``max(|dx| * curve_factor, min_reach)``.
    """
    src_side, tgt_side = edge_sides(src_pos, src_dims, tgt_pos, tgt_dims)
    to_right = src_side is PortSide.RIGHT

    sy = source_port if source_port is not None else src_pos.y + src_dims.height / 2
    ty = target_port if target_port is not None else tgt_pos.y + tgt_dims.height / 2
    sx = src_pos.x + src_dims.width if to_right else src_pos.x
    tx = tgt_pos.x if to_right else tgt_pos.x + tgt_dims.width

    reach = max(abs(tx - sx) * curve_factor, min_reach)
    direction = 1.0 if to_right else -1.0

    return RoutedEdge(
        edge=edge,
        source_side=src_side,
        target_side=tgt_side,
        start=(sx, sy),
        control1=(sx + direction * reach, sy),
        control2=(tx - direction * reach, ty),
        end=(tx, ty),
    )


def route_edges(
    graph: SdlGraph,
    positions: dict[str, Position],
    config: LayoutConfig | None = None,
    ports: dict[str, dict[str, float]] | None = None,
) -> list[RoutedEdge]:
    """Route every edge whose endpoints are both positioned.

    Ports are computed from ``positions`` unless given. Dangling edges
    are skipped; self-loops have no assigned ports and use midpoints.
    """
    config = config or LayoutConfig()
    if ports is None:
        ports = assign_ports(graph, positions, config)

    routes: list[RoutedEdge] = []
    for edge in graph.edges:
        geom = endpoint_geometry(edge, graph, positions, config)
        if geom is None:
            continue
        edge_ports = ports.get(edge.id, {})
        routes.append(route_edge(
            edge,
            *geom,
            source_port=edge_ports.get(edge.source),
            target_port=edge_ports.get(edge.target),
        ))

    logger.debug("Routed %d of %d edges", len(routes), len(graph.edges))
    return routes
