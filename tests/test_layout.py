"""Tests for layer assignment, ordering, and coordinate resolution."""

from pathlib import Path

import networkx as nx
import pytest

from sdl_layout.layout import LayoutConfig, compute_layout
from sdl_layout.layout.constants import DEFAULT_LAYER, UNPLACED_BARYCENTER
from sdl_layout.layout.geometry import NodeDims, canvas_size, node_dims
from sdl_layout.layout.layers import assign_layer, group_layers
from sdl_layout.layout.ordering import (
    barycenter_sort,
    build_adjacency,
    count_crossings,
    order_layers,
    total_crossings,
)
from sdl_layout.parser import load_example_dir, parse_sdl
from sdl_layout.parser.model import NodeCategory, NodeKind, SdlGraph

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"


def _graph(nodes, edges=()):
    return parse_sdl(
        [{"id": nid, "kind": kind} for nid, kind in nodes],
        [
            {"id": f"{s}-{t}", "source": s, "target": t, "protocol": "rest"}
            for s, t in edges
        ],
    )


def _make_crossed_graph():
    """Two clients wired to two gateways in crossed definition order."""
    return _graph(
        [("a1", "frontend"), ("a2", "frontend"), ("g1", "gateway"), ("g2", "gateway")],
        [("a1", "g2"), ("a2", "g1")],
    )


def _make_fan_graph():
    """A -> B and A -> C, with B and C sharing a layer."""
    return _graph(
        [("a", "frontend"), ("b", "cdn"), ("c", "cdn")],
        [("a", "b"), ("a", "c")],
    )


# --- Layers ---


@pytest.mark.parametrize(
    "kind,layer",
    [
        ("actor", 0), ("frontend", 0), ("mobile-app", 0), ("cli", 0),
        ("cdn", 1), ("load-balancer", 1), ("gateway", 1),
        ("identity-provider", 2), ("microservice", 2), ("monolith", 2),
        ("serverless-function", 2), ("scheduler", 2), ("data-pipeline", 2),
        ("ml-model", 2),
        ("message-broker", 3), ("message-queue", 3),
        ("database", 4), ("cache", 4), ("object-storage", 4),
        ("external-api", 5),
    ],
)
def test_assign_layer_table(kind, layer):
    assert assign_layer(kind) == layer


def test_assign_layer_unknown_kind_defaults():
    assert assign_layer("quantum-oracle") == DEFAULT_LAYER
    assert assign_layer(NodeKind.CUSTOM) == DEFAULT_LAYER
    assert assign_layer(NodeCategory.parse("")) == DEFAULT_LAYER


def test_group_layers_keeps_definition_order():
    graph = _graph([
        ("db", "database"), ("svc2", "microservice"), ("ui", "frontend"),
        ("svc1", "microservice"),
    ])
    assert group_layers(graph) == {0: ["ui"], 2: ["svc2", "svc1"], 4: ["db"]}


def test_layers_match_kind_table():
    """Ordering and geometry never move a node out of its kind's layer."""
    graph = load_example_dir(EXAMPLES_DIR / "ecommerce-checkout")
    result = compute_layout(graph)
    for nid, node in graph.nodes.items():
        assert result.positions[nid].layer == assign_layer(node.category)
    assert result.ordering.layer_of() == {
        nid: pos.layer for nid, pos in result.positions.items()
    }


# --- Crossings ---


def test_count_crossings_inverted_pair():
    graph = _make_crossed_graph()
    assert count_crossings(["a1", "a2"], ["g1", "g2"], graph.edges) == 1
    assert count_crossings(["a1", "a2"], ["g2", "g1"], graph.edges) == 0


def test_count_crossings_ignores_direction():
    graph = _graph(
        [("a1", "frontend"), ("a2", "frontend"), ("g1", "gateway"), ("g2", "gateway")],
        [("g2", "a1"), ("a2", "g1")],
    )
    assert count_crossings(["a1", "a2"], ["g1", "g2"], graph.edges) == 1


def test_count_crossings_shared_endpoint():
    graph = _make_fan_graph()
    assert count_crossings(["a"], ["c", "b"], graph.edges) == 0


def test_total_crossings_empty():
    assert total_crossings([], []) == 0
    assert total_crossings([["a"]], []) == 0


# --- Barycenter ---


def test_barycenter_sort_by_neighbor_mean():
    adjacency = nx.Graph([("x", "f0"), ("x", "f2"), ("y", "f0")])
    fixed = {"f0": 0, "f1": 1, "f2": 2}
    assert barycenter_sort(["x", "y"], adjacency, fixed) == ["y", "x"]


def test_barycenter_sort_unplaced_node_keeps_previous_key():
    adjacency = nx.Graph([("y", "f0")])
    adjacency.add_node("x")
    fixed = {"f0": 0}

    keys: dict[str, float] = {}
    assert barycenter_sort(["x", "y"], adjacency, fixed, keys) == ["y", "x"]
    assert keys["x"] == UNPLACED_BARYCENTER

    keys["x"] = -1.0
    assert barycenter_sort(["x", "y"], adjacency, fixed, keys) == ["x", "y"]


def test_barycenter_sort_key_survives_opposite_sweep():
    # x only touches the left layer, y only the right one.
    adjacency = nx.Graph([("x", "l0"), ("y", "r1")])
    keys: dict[str, float] = {}

    assert barycenter_sort(["y", "x"], adjacency, {"l0": 0}, keys) == ["x", "y"]
    # Sweeping against the right layer, x has no neighbour but keeps 0.
    assert barycenter_sort(["x", "y"], adjacency, {"r0": 0, "r1": 1}, keys) == ["x", "y"]
    assert keys == {"x": 0, "y": 1}


def test_barycenter_sort_is_stable():
    adjacency = nx.Graph([("x", "f0"), ("y", "f0")])
    fixed = {"f0": 0}
    assert barycenter_sort(["y", "x"], adjacency, fixed) == ["y", "x"]


def test_build_adjacency_drops_dangling():
    graph = _graph([("a", "frontend")], [("a", "ghost")])
    adjacency = build_adjacency(graph)
    assert list(adjacency.nodes) == ["a"]
    assert adjacency.number_of_edges() == 0


# --- Ordering ---


def test_order_layers_removes_crossing():
    graph = _make_crossed_graph()
    result = order_layers(graph)
    assert result.crossings == 0
    assert result.as_dict() == {0: ["a1", "a2"], 1: ["g2", "g1"]}


def test_order_layers_zero_rounds_keeps_definition_order():
    graph = _make_crossed_graph()
    result = order_layers(graph, rounds=0)
    assert result.layers == [["a1", "a2"], ["g1", "g2"]]
    assert result.crossings == 1
    assert result.history == []


def test_order_layers_keeps_best_round():
    graph = load_example_dir(EXAMPLES_DIR / "ecommerce-checkout")
    result = order_layers(graph)
    assert len(result.history) == 4
    assert result.crossings == min(result.history)
    assert result.crossings == total_crossings(result.layers, graph.edges)


def test_order_layers_is_deterministic():
    graph = load_example_dir(EXAMPLES_DIR / "ecommerce-checkout")
    first = order_layers(graph)
    second = order_layers(graph)
    assert first.layers == second.layers
    assert first.history == second.history


def test_order_layers_ignores_dangling_edges():
    graph = _graph([("a", "frontend"), ("b", "gateway")], [("a", "b"), ("b", "ghost")])
    result = order_layers(graph)
    assert result.layers == [["a"], ["b"]]
    assert result.crossings == 0


# --- Geometry ---


def test_node_dims_per_shape():
    assert node_dims(NodeCategory.parse("microservice")) == NodeDims(150, 62, 8)
    assert node_dims(NodeCategory.parse("database")) == NodeDims(136, 68)
    assert node_dims(NodeCategory.parse("gateway")) == NodeDims(76, 76)
    assert node_dims(NodeCategory.parse("actor")) == NodeDims(58, 76)
    assert node_dims(NodeCategory.parse("risk-engine")) == NodeDims(150, 62, 8)


def test_fan_out_positions():
    result = compute_layout(_make_fan_graph())
    a, b, c = (result.positions[n] for n in ("a", "b", "c"))

    assert (a.x, a.y) == (52, 52)
    assert b.x == c.x == 52 + 210
    assert sorted([b.y, c.y]) == [52, 52 + 62 + 90]


def test_canvas_size_covers_every_node():
    result = compute_layout(_make_fan_graph())
    assert result.canvas_width == 52 + 210 + 150 + 2 * 52
    assert result.canvas_height == 52 + 62 + 90 + 62 + 2 * 52


def test_empty_graph():
    result = compute_layout(SdlGraph())
    assert result.positions == {}
    assert result.ordering.layers == []
    assert (result.canvas_width, result.canvas_height) == (104, 104)


def test_custom_spacing():
    config = LayoutConfig(layer_spacing_x=300, node_spacing_y=20, margin=10)
    result = compute_layout(_make_fan_graph(), config)
    assert result.positions["b"].x == 310
    ys = sorted(result.positions[n].y for n in ("b", "c"))
    assert ys == [10, 10 + 62 + 20]


def test_canvas_size_ignores_unknown_ids():
    graph = _make_fan_graph()
    positions = compute_layout(graph).positions
    positions["ghost"] = positions["a"]
    assert canvas_size(positions, graph) == (516, 370)


def test_compute_layout_is_deterministic():
    graph = load_example_dir(EXAMPLES_DIR / "ecommerce-checkout")
    assert compute_layout(graph).positions == compute_layout(graph).positions
