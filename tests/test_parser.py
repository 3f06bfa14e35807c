"""Tests for the SDL loader and graph model."""

import json
from pathlib import Path

import pytest

from sdl_layout.parser import SdlParseError, load_example_dir, parse_sdl, validate_graph
from sdl_layout.parser.model import NodeKind, ProtocolKind

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"
CHECKOUT_DIR = EXAMPLES_DIR / "ecommerce-checkout"


def _write_example(path, nodes, edges):
    path.mkdir(parents=True, exist_ok=True)
    (path / "nodes.json").write_text(json.dumps(nodes))
    (path / "edges.json").write_text(json.dumps(edges))
    return path


def test_known_kind_parses_to_enum():
    graph = parse_sdl([{"id": "db", "kind": "database", "label": "DB"}], [])
    node = graph.nodes["db"]
    assert node.category.kind is NodeKind.DATABASE
    assert not node.category.is_custom


def test_custom_kind_keeps_tag():
    graph = parse_sdl([{"id": "x", "kind": "quantum-oracle"}], [])
    category = graph.nodes["x"].category
    assert category.kind is NodeKind.CUSTOM
    assert category.tag == "quantum-oracle"
    assert str(category) == "quantum-oracle"


def test_label_defaults_to_id():
    graph = parse_sdl([{"id": "svc", "kind": "microservice"}], [])
    assert graph.nodes["svc"].label == "svc"


def test_edge_protocol_and_direction():
    graph = parse_sdl(
        [{"id": "a", "kind": "microservice"}, {"id": "b", "kind": "message-broker"}],
        [
            {"id": "e1", "source": "a", "target": "b", "protocol": "kafka",
             "direction": "bidirectional"},
            {"id": "e2", "source": "a", "target": "b", "protocol": "carrier-pigeon"},
        ],
    )
    e1, e2 = graph.edges
    assert e1.protocol.kind is ProtocolKind.KAFKA
    assert e1.bidirectional
    assert e2.protocol.kind is ProtocolKind.CUSTOM
    assert e2.protocol.tag == "carrier-pigeon"
    assert not e2.bidirectional


def test_duplicate_node_id_rejected():
    with pytest.raises(SdlParseError, match="duplicate node id 'a'"):
        parse_sdl([{"id": "a", "kind": "cli"}, {"id": "a", "kind": "cdn"}], [])


def test_node_without_id_rejected():
    with pytest.raises(SdlParseError, match=r"nodes\[0\]"):
        parse_sdl([{"kind": "cli"}], [])


def test_non_string_kind_rejected():
    with pytest.raises(SdlParseError, match=r"nodes\[0\]: 'kind' must be a string"):
        parse_sdl([{"id": "a", "kind": 5}], [])


def test_non_string_protocol_rejected():
    with pytest.raises(SdlParseError, match=r"edges\[0\]: 'protocol' must be a string"):
        parse_sdl(
            [{"id": "a", "kind": "cli"}, {"id": "b", "kind": "cdn"}],
            [{"id": "e", "source": "a", "target": "b", "protocol": 7}],
        )


@pytest.mark.parametrize("flow, message", [
    ({"id": "f", "steps": ["oops"]}, r"flows\[0\]\.steps\[0\] must be an object"),
    ({"id": "f", "steps": "x"}, r"flows\[0\]: 'steps' must be an array"),
    ({"id": "f", "steps": [{"actor": 5}]}, r"flows\[0\]\.steps\[0\]: 'actor' must be a string"),
    ({"id": "f", "trigger": ["t"]}, r"flows\[0\]: 'trigger' must be a string"),
])
def test_malformed_flow_rejected(flow, message):
    with pytest.raises(SdlParseError, match=message):
        parse_sdl([{"id": "a", "kind": "cli"}], [], flows=[flow])


def test_dangling_edge_is_loaded():
    """Referential integrity is reported by validate_graph, not the loader."""
    graph = parse_sdl(
        [{"id": "a", "kind": "cli"}],
        [{"id": "e", "source": "a", "target": "ghost", "protocol": "rest"}],
    )
    assert len(graph.edges) == 1
    assert graph.dangling_edges() == graph.edges


def test_load_example_dir():
    graph = load_example_dir(CHECKOUT_DIR)
    assert graph.title == "Ecommerce Checkout"
    assert len(graph.nodes) == 11
    assert len(graph.edges) == 11
    assert len(graph.triggers) == 1
    assert len(graph.flows) == 1
    assert len(graph.flows[0].steps) == 6
    assert graph.nodes["orders"].responsibilities == [
        "Create orders", "Track order status",
    ]


def test_load_example_dir_optional_files(tmp_path):
    path = _write_example(tmp_path / "tiny-app", [{"id": "a", "kind": "cli"}], [])
    graph = load_example_dir(path)
    assert graph.title == "Tiny App"
    assert graph.triggers == {}
    assert graph.flows == []


def test_load_example_dir_missing_edges(tmp_path):
    (tmp_path / "nodes.json").write_text("[]")
    with pytest.raises(SdlParseError, match="edges.json"):
        load_example_dir(tmp_path)


def test_load_example_dir_bad_json(tmp_path):
    (tmp_path / "nodes.json").write_text("[{")
    (tmp_path / "edges.json").write_text("[]")
    with pytest.raises(SdlParseError, match="Failed to parse nodes.json"):
        load_example_dir(tmp_path)


def test_load_example_dir_not_an_array(tmp_path):
    (tmp_path / "nodes.json").write_text('{"id": "a"}')
    (tmp_path / "edges.json").write_text("[]")
    with pytest.raises(SdlParseError, match="JSON array"):
        load_example_dir(tmp_path)


def test_validate_example_is_clean():
    assert validate_graph(load_example_dir(CHECKOUT_DIR)) == []


def test_validate_reports_broken_references():
    graph = parse_sdl(
        [{"id": "a", "kind": "cli"}, {"id": "b", "kind": "microservice"}],
        [
            {"id": "e1", "source": "a", "target": "b", "protocol": "rest"},
            {"id": "e1", "source": "a", "target": "ghost", "protocol": "rest"},
        ],
        flows=[{
            "id": "f", "trigger": "nope",
            "steps": [{"id": "1", "actor": "zed", "via": "e9"}],
        }],
    )
    errors = validate_graph(graph)
    assert "Duplicate edge id 'e1'" in errors
    assert "Edge 'e1' references unknown node 'ghost'" in errors
    assert "Flow 'f' references unknown trigger 'nope'" in errors
    assert any("unknown actor 'zed'" in e for e in errors)
    assert any("unknown edge 'e9'" in e for e in errors)
