"""Within-layer ordering by iterated barycenter sweeps.

Nodes keep the layer given by the kind table; only their vertical order
inside a layer changes. Each round sweeps forward (ordering layer i by
its neighbors in layer i-1) and then backward (layer i by layer i+1),
counts crossings between adjacent layers, and remembers the best ordering
seen. Exact crossing minimization is NP-hard for more than two layers, so
the result is the lowest-crossing ordering observed, not a proven optimum.
"""

from __future__ import annotations

__all__ = [
    "OrderingResult",
    "barycenter_sort",
    "build_adjacency",
    "count_crossings",
    "order_layers",
    "total_crossings",
]

import logging
from dataclasses import dataclass, field
from itertools import combinations

import networkx as nx

from sdl_layout.layout.constants import ORDERING_ROUNDS, UNPLACED_BARYCENTER
from sdl_layout.layout.layers import group_layers
from sdl_layout.parser.model import Edge, SdlGraph

logger = logging.getLogger(__name__)


@dataclass
class OrderingResult:
    """Best ordering found by order_layers().

    ``layers[i]`` is the top-to-bottom node order of the layer whose
    index is ``layer_indices[i]``. Empty layers are not represented.
    """

    layers: list[list[str]]
    layer_indices: list[int]
    crossings: int
    history: list[int] = field(default_factory=list)

    def layer_of(self) -> dict[str, int]:
        """Map each node id to its layer index."""
        return {
            nid: layer
            for layer, order in zip(self.layer_indices, self.layers)
            for nid in order
        }

    def as_dict(self) -> dict[int, list[str]]:
        return dict(zip(self.layer_indices, (list(o) for o in self.layers)))


def build_adjacency(graph: SdlGraph) -> nx.Graph:
    """Undirected adjacency over known nodes.

    Direction only matters for arrowheads, so source and target are
    recorded as mutual neighbors. Edges naming unknown nodes are dropped.
    """
    G = nx.Graph()
    G.add_nodes_from(graph.nodes)
    for edge in graph.edges:
        if edge.source in graph.nodes and edge.target in graph.nodes:
            G.add_edge(edge.source, edge.target)
    return G


def barycenter_sort(
    layer: list[str],
    adjacency: nx.Graph,
    fixed_positions: dict[str, int],
    previous_keys: dict[str, float] | None = None,
) -> list[str]:
    """Stable-sort a layer by mean index of neighbors in the fixed layer.

    A node with no neighbor in ``fixed_positions`` keeps the key it had
    in the previous sweep (from ``previous_keys``), or
    UNPLACED_BARYCENTER the first time it is seen. ``previous_keys`` is
    updated in place with the key used for every node.

    ``order_layers`` shares one ``previous_keys`` dict across forward
    and backward sweeps. A node whose only neighbours sit on the other
    side of the layer is neighbourless in every other sweep; resetting
    it to UNPLACED_BARYCENTER each time would push it to the bottom and
    undo the slot the opposite sweep just gave it. Reusing the last key
    keeps it there, and a node with no neighbours at all still sinks
    below every placed node.
    """
    if previous_keys is None:
        previous_keys = {}

    keys: dict[str, float] = {}
    for nid in layer:
        neighbors = [
            n for n in adjacency.neighbors(nid) if n in fixed_positions
        ] if nid in adjacency else []
        if neighbors:
            keys[nid] = sum(fixed_positions[n] for n in neighbors) / len(neighbors)
        else:
            keys[nid] = previous_keys.get(nid, UNPLACED_BARYCENTER)

    previous_keys.update(keys)
    return sorted(layer, key=lambda nid: keys[nid])


def _spanning_pairs(
    pos_a: dict[str, int],
    pos_b: dict[str, int],
    edges: list[Edge],
) -> list[tuple[int, int]]:
    """(rank in A, rank in B) for every edge joining the two layers."""
    pairs: list[tuple[int, int]] = []
    for edge in edges:
        if edge.source in pos_a and edge.target in pos_b:
            pairs.append((pos_a[edge.source], pos_b[edge.target]))
        elif edge.target in pos_a and edge.source in pos_b:
            pairs.append((pos_a[edge.target], pos_b[edge.source]))
    return pairs


def count_crossings(
    layer_a: list[str],
    layer_b: list[str],
    edges: list[Edge],
) -> int:
    """Count edge crossings between two adjacent layers.

    Two edges spanning the layers cross iff the order of their endpoints
    in layer A is the reverse of their order in layer B. Edges sharing an
    endpoint do not cross.
    """
    pos_a = {nid: i for i, nid in enumerate(layer_a)}
    pos_b = {nid: i for i, nid in enumerate(layer_b)}
    pairs = _spanning_pairs(pos_a, pos_b, edges)
    return sum(
        1
        for (a1, b1), (a2, b2) in combinations(pairs, 2)
        if (a1 - a2) * (b1 - b2) < 0
    )


def total_crossings(layers: list[list[str]], edges: list[Edge]) -> int:
    """Sum of crossings over every adjacent layer pair."""
    return sum(
        count_crossings(layers[i], layers[i + 1], edges)
        for i in range(len(layers) - 1)
    )


def order_layers(graph: SdlGraph, rounds: int = ORDERING_ROUNDS) -> OrderingResult:
    """Order nodes within their layers to reduce edge crossings.

    Runs ``rounds`` forward+backward barycenter sweeps and returns the
    ordering with the fewest crossings. On ties the earliest round wins.
    With ``rounds == 0`` the definition-order layers are returned as is.
    """
    grouped = group_layers(graph)
    layer_indices = list(grouped)
    layers = [list(order) for order in grouped.values()]

    adjacency = build_adjacency(graph)
    edges = [
        e for e in graph.edges if e.source in graph.nodes and e.target in graph.nodes
    ]

    best = [list(order) for order in layers]
    best_crossings = total_crossings(best, edges) if rounds <= 0 else None
    history: list[int] = []
    previous_keys: dict[str, float] = {}

    for round_idx in range(rounds):
        # Forward sweep
        for i in range(1, len(layers)):
            fixed = {nid: j for j, nid in enumerate(layers[i - 1])}
            layers[i] = barycenter_sort(layers[i], adjacency, fixed, previous_keys)

        # Backward sweep
        for i in range(len(layers) - 2, -1, -1):
            fixed = {nid: j for j, nid in enumerate(layers[i + 1])}
            layers[i] = barycenter_sort(layers[i], adjacency, fixed, previous_keys)

        crossings = total_crossings(layers, edges)
        history.append(crossings)
        logger.debug("Ordering round %d: %d crossings", round_idx, crossings)

        if best_crossings is None or crossings < best_crossings:
            best_crossings = crossings
            best = [list(order) for order in layers]

    logger.debug(
        "Best ordering: %d crossings over %d layers", best_crossings, len(best)
    )
    return OrderingResult(
        layers=best,
        layer_indices=layer_indices,
        crossings=best_crossings or 0,
        history=history,
    )
