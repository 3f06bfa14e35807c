"""Port spreading: distinct attachment points for edges sharing a node side."""

from __future__ import annotations

import logging
from collections import defaultdict

from sdl_layout.layout.constants import PORT_PAD_FRACTION
from sdl_layout.layout.geometry import LayoutConfig, NodeDims
from sdl_layout.layout.routing.common import endpoint_geometry
from sdl_layout.parser.model import PortSide, Position, SdlGraph

logger = logging.getLogger(__name__)


def edge_sides(
    src_pos: Position,
    src_dims: NodeDims,
    tgt_pos: Position,
    tgt_dims: NodeDims,
) -> tuple[PortSide, PortSide]:
    """Return (source side, target side) from live node centres.

    Uses current x coordinates rather than layer indices so that a node
    dragged across the canvas still gets sensible left/right attachment.
    """
    to_right = src_pos.x + src_dims.width / 2 <= tgt_pos.x + tgt_dims.width / 2
    if to_right:
        return PortSide.RIGHT, PortSide.LEFT
    return PortSide.LEFT, PortSide.RIGHT


def spread_offsets(
    count: int,
    height: float,
    pad_fraction: float = PORT_PAD_FRACTION,
) -> list[float]:
    """Offsets from the node top for ``count`` ports on one side.

    A single port sits at the vertical midpoint; several are spread evenly
    from ``pad_fraction`` to ``1 - pad_fraction`` of the height.
    """
    if count <= 0:
        return []
    if count == 1:
        return [height / 2]
    pad = height * pad_fraction
    return [pad + (i / (count - 1)) * (height - pad * 2) for i in range(count)]


def assign_ports(
    graph: SdlGraph,
    positions: dict[str, Position],
    config: LayoutConfig | None = None,
) -> dict[str, dict[str, float]]:
    """Assign absolute port y coordinates to both ends of every edge.

    Returns edge_id -> {node_id: y}. Edges are grouped by (node, side) in
    edge-list order. Edges with a missing endpoint are skipped. Self-loops
    take no port slot; they attach at the node midpoint.
    """
    config = config or LayoutConfig()
    groups: dict[tuple[str, PortSide], list[str]] = defaultdict(list)

    for edge in graph.edges:
        if edge.source == edge.target:
            continue
        geom = endpoint_geometry(edge, graph, positions, config)
        if geom is None:
            logger.debug("Skipping dangling edge %s (%s -> %s)",
                         edge.id, edge.source, edge.target)
            continue
        src_side, tgt_side = edge_sides(*geom)
        groups[(edge.source, src_side)].append(edge.id)
        groups[(edge.target, tgt_side)].append(edge.id)

    ports: dict[str, dict[str, float]] = defaultdict(dict)
    for (nid, _side), edge_ids in groups.items():
        pos = positions[nid]
        height = config.dims(graph.nodes[nid].category).height
        for eid, offset in zip(edge_ids, spread_offsets(len(edge_ids), height)):
            ports[eid][nid] = pos.y + offset

    return dict(ports)
