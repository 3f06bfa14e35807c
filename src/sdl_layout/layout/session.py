"""Interactive position store: load, drag, persist.

A LayoutSession owns the live positions for one graph. Only one node can
be dragged at a time. Moving it updates that node's position and
re-routes edges from the new coordinates; it never re-runs ordering.
Saved positions are fetched asynchronously; a fetch that completes after
a drag has started, or after the graph was replaced, is discarded rather
than applied underneath the user.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from sdl_layout.layout.engine import LayoutResult, compute_layout
from sdl_layout.layout.geometry import LayoutConfig, canvas_size
from sdl_layout.layout.persistence import (
    LayoutStore,
    applicable_overrides,
    layout_key,
    load_saved_layout,
    merge_layout,
    reset_layout,
    save_layout,
)
from sdl_layout.layout.routing import RoutedEdge, assign_ports, route_edges
from sdl_layout.parser.model import Position, SdlGraph

logger = logging.getLogger(__name__)


class DragStateError(RuntimeError):
    """Raised on drag calls that do not fit the current gesture state."""


@dataclass
class _Drag:
    node_id: str
    start_x: float
    start_y: float
    orig_x: float
    orig_y: float


class LayoutSession:
    """Live positions for one graph, with a single-writer drag gesture."""

    def __init__(
        self,
        graph: SdlGraph,
        store: LayoutStore | None = None,
        config: LayoutConfig | None = None,
    ) -> None:
        self.graph = graph
        self.store = store
        self.config = config or LayoutConfig()
        self.layout_saved = False
        self.last_result: LayoutResult | None = None
        self._positions: dict[str, Position] = {}
        self._generation = 0
        self._drag: _Drag | None = None

    @property
    def key(self) -> str:
        return layout_key(self.graph.nodes)

    @property
    def dragging(self) -> str | None:
        """Id of the node owned by the active drag, if any."""
        return self._drag.node_id if self._drag else None

    def snapshot(self) -> dict[str, Position]:
        """A consistent copy of the current positions."""
        return {nid: replace(pos) for nid, pos in self._positions.items()}

    def compute(self) -> LayoutResult:
        """Run a fresh layout pass and show it (no saved overlay)."""
        if self._drag is not None:
            raise DragStateError("Cannot relayout while a node is being dragged")
        result = compute_layout(self.graph, self.config)
        self.last_result = result
        self._positions = dict(result.positions)
        self.layout_saved = False
        return result

    async def load(self) -> bool:
        """Compute the layout, then overlay the saved record if one exists.

        The computed layout is shown immediately. Returns True when saved
        positions were applied; False on a key miss, when there is no
        store, when the record holds nothing usable for these nodes, or
        when the fetch was superseded while awaiting it.
        """
        self.compute()
        if self.store is None:
            return False

        generation = self._generation
        node_ids = list(self.graph.nodes)
        saved = await load_saved_layout(self.store, node_ids)

        if generation != self._generation:
            logger.debug("Discarding superseded saved-layout fetch")
            return False
        if not applicable_overrides(self._positions, saved):
            return False

        self._positions = merge_layout(self._positions, saved)
        self.layout_saved = True
        return True

    def replace_graph(self, graph: SdlGraph) -> bool:
        """Swap in an edited graph.

        Returns True when the node set changed, which clears positions and
        requires load()/compute(). Edge-only edits keep positions.
        Any in-flight fetch for the previous graph is superseded.
        """
        self._generation += 1
        changed = layout_key(graph.nodes) != self.key
        self.graph = graph
        if changed:
            if self._drag is not None:
                logger.debug("Node set changed mid-drag; dropping drag of %s",
                             self._drag.node_id)
                self._drag = None
            self._positions = {}
            self.layout_saved = False
        return changed

    def begin_drag(self, node_id: str, pointer_x: float, pointer_y: float) -> None:
        """Take ownership of ``node_id`` for a drag gesture."""
        if self._drag is not None:
            raise DragStateError(f"Already dragging '{self._drag.node_id}'")
        pos = self._positions.get(node_id)
        if pos is None:
            raise KeyError(node_id)
        self._generation += 1
        self._drag = _Drag(node_id, pointer_x, pointer_y, pos.x, pos.y)

    def drag_to(self, pointer_x: float, pointer_y: float) -> list[RoutedEdge]:
        """Move the dragged node with the pointer and return fresh routes."""
        drag = self._drag
        if drag is None:
            raise DragStateError("No drag in progress")
        old = self._positions[drag.node_id]
        self._positions[drag.node_id] = Position(
            x=drag.orig_x + (pointer_x - drag.start_x),
            y=drag.orig_y + (pointer_y - drag.start_y),
            layer=old.layer,
        )
        return self.routes()

    def cancel_drag(self) -> None:
        """Abandon the gesture and put the node back."""
        drag = self._drag
        if drag is None:
            return
        old = self._positions[drag.node_id]
        self._positions[drag.node_id] = Position(drag.orig_x, drag.orig_y, old.layer)
        self._drag = None

    async def end_drag(self) -> str | None:
        """Finish the gesture and persist x/y for every node.

        Returns the key written, or None without a store.
        """
        if self._drag is None:
            raise DragStateError("No drag in progress")
        self._drag = None
        if self.store is None:
            return None
        positions = self.snapshot()
        key = await save_layout(self.store, list(self.graph.nodes), positions)
        self.layout_saved = True
        return key

    async def reset(self) -> LayoutResult:
        """Forget the saved record and show a fresh computed layout."""
        if self._drag is not None:
            raise DragStateError("Cannot reset while a node is being dragged")
        self._generation += 1
        if self.store is not None:
            await reset_layout(self.store, list(self.graph.nodes))
        return self.compute()

    def ports(self) -> dict[str, dict[str, float]]:
        return assign_ports(self.graph, self._positions, self.config)

    def routes(self) -> list[RoutedEdge]:
        return route_edges(self.graph, self._positions, self.config)

    def canvas_size(self) -> tuple[float, float]:
        return canvas_size(self._positions, self.graph, self.config)
