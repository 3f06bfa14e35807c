"""Layout coordinator: combines layer assignment, ordering, and coordinate mapping.

One call is one synchronous pass with no suspension points. Routing is
kept separate so it can be re-run from live positions during dragging
without repeating the ordering work.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sdl_layout.layout.geometry import LayoutConfig, canvas_size, resolve_positions
from sdl_layout.layout.ordering import OrderingResult, order_layers
from sdl_layout.layout.persistence import (
    SavedLayout,
    applicable_overrides,
    layout_key,
    merge_layout,
)
from sdl_layout.layout.routing import RoutedEdge, assign_ports, route_edges
from sdl_layout.parser.model import Position, SdlGraph

logger = logging.getLogger(__name__)


@dataclass
class LayoutResult:
    """Output of one layout pass."""

    positions: dict[str, Position]
    ordering: OrderingResult
    canvas_width: float
    canvas_height: float
    key: str
    overrides_applied: int = 0

    def ports(
        self, graph: SdlGraph, config: LayoutConfig | None = None
    ) -> dict[str, dict[str, float]]:
        return assign_ports(graph, self.positions, config)

    def routes(
        self, graph: SdlGraph, config: LayoutConfig | None = None
    ) -> list[RoutedEdge]:
        return route_edges(graph, self.positions, config)


def compute_layout(
    graph: SdlGraph,
    config: LayoutConfig | None = None,
    saved: SavedLayout | None = None,
) -> LayoutResult:
    """Compute positions for all nodes in the graph.

    ``saved`` is a record already fetched for this graph's node-set key;
    its x/y override the computed ones. The canvas size is measured
    after the overlay.
    """
    config = config or LayoutConfig()

    ordering = order_layers(graph, rounds=config.rounds)
    positions = resolve_positions(ordering, graph, config)

    applied = len(applicable_overrides(positions, saved))
    if applied:
        positions = merge_layout(positions, saved)

    width, height = canvas_size(positions, graph, config)
    logger.debug(
        "Layout: %d nodes in %d layers, %d crossings, canvas %.0fx%.0f",
        len(positions), len(ordering.layers), ordering.crossings, width, height,
    )
    return LayoutResult(
        positions=positions,
        ordering=ordering,
        canvas_width=width,
        canvas_height=height,
        key=layout_key(graph.nodes),
        overrides_applied=applied,
    )
