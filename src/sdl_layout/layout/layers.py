"""Layer assignment for architecture layout (X-coordinate columns).

Layers come from a fixed kind table rather than from the edge structure:
clients on the left, then edge/ingress, compute, messaging, storage and
finally third-party APIs. Unknown kinds land in the compute layer.
"""

from __future__ import annotations

__all__ = ["LAYER_ORDER", "assign_layer", "group_layers"]

from collections import defaultdict

from sdl_layout.layout.constants import DEFAULT_LAYER
from sdl_layout.parser.model import NodeCategory, NodeKind, SdlGraph

LAYER_ORDER: list[list[NodeKind]] = [
    [NodeKind.ACTOR, NodeKind.FRONTEND, NodeKind.MOBILE_APP, NodeKind.CLI],
    [NodeKind.CDN, NodeKind.LOAD_BALANCER, NodeKind.GATEWAY],
    [
        NodeKind.IDENTITY_PROVIDER,
        NodeKind.MICROSERVICE,
        NodeKind.MONOLITH,
        NodeKind.SERVERLESS_FUNCTION,
        NodeKind.SCHEDULER,
        NodeKind.DATA_PIPELINE,
        NodeKind.ML_MODEL,
    ],
    [NodeKind.MESSAGE_BROKER, NodeKind.MESSAGE_QUEUE],
    [NodeKind.DATABASE, NodeKind.CACHE, NodeKind.OBJECT_STORAGE],
    [NodeKind.EXTERNAL_API],
]

_LAYER_OF: dict[NodeKind, int] = {
    kind: i for i, kinds in enumerate(LAYER_ORDER) for kind in kinds
}


def assign_layer(category: NodeCategory | NodeKind | str) -> int:
    """Return the layer index for a node kind.

    Accepts a parsed category, a bare kind, or the raw kind string.
    Kinds not in LAYER_ORDER (including custom ones) map to DEFAULT_LAYER.
    """
    if isinstance(category, str):
        category = NodeCategory.parse(category)
    kind = category.kind if isinstance(category, NodeCategory) else category
    return _LAYER_OF.get(kind, DEFAULT_LAYER)


def group_layers(graph: SdlGraph) -> dict[int, list[str]]:
    """Group node ids by layer, keeping node definition order.

    Returns a dict ordered by ascending layer index; only occupied layers
    appear.
    """
    groups: dict[int, list[str]] = defaultdict(list)
    for nid, node in graph.nodes.items():
        groups[assign_layer(node.category)].append(nid)
    return {layer: groups[layer] for layer in sorted(groups)}
