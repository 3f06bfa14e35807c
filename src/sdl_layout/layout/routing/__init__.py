"""Edge routing subpackage for architecture layout.

Public API:
- route_edges: Route every edge from current positions
- route_edge: Route a single edge given its ports
- RoutedEdge: Routed cubic connector dataclass
- assign_ports: Per-edge, per-endpoint port spreading
- edge_sides: Left/right side selection from live coordinates
"""

from sdl_layout.layout.routing.common import RoutedEdge
from sdl_layout.layout.routing.core import route_edge, route_edges
from sdl_layout.layout.routing.ports import assign_ports, edge_sides

__all__ = [
    "RoutedEdge",
    "assign_ports",
    "edge_sides",
    "route_edge",
    "route_edges",
]
