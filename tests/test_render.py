"""Tests for SVG rendering."""

import xml.etree.ElementTree as ET
from pathlib import Path

from sdl_layout.layout import compute_layout
from sdl_layout.parser import load_example_dir, parse_sdl
from sdl_layout.parser.model import Position, SdlGraph
from sdl_layout.render import render_svg
from sdl_layout.render.hints import node_hint, protocol_hint
from sdl_layout.themes import DARK_THEME, DEFAULT_THEME, THEMES

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"
SVG_NS = "{http://www.w3.org/2000/svg}"


def _checkout():
    return load_example_dir(EXAMPLES_DIR / "ecommerce-checkout")


def _groups(root, css_class):
    return [g for g in root.iter(f"{SVG_NS}g") if g.get("class") == css_class]


def test_render_produces_valid_svg():
    svg = render_svg(_checkout(), DEFAULT_THEME)
    root = ET.fromstring(svg)
    assert root.tag == f"{SVG_NS}svg"


def test_render_one_group_per_node_and_edge():
    graph = _checkout()
    root = ET.fromstring(render_svg(graph, DEFAULT_THEME))

    nodes = _groups(root, "sdl-node")
    edges = _groups(root, "sdl-edge")
    assert sorted(g.get("data-id") for g in nodes) == sorted(graph.nodes)
    assert [g.get("data-id") for g in edges] == [e.id for e in graph.edges]


def test_render_contains_labels_and_title():
    svg = render_svg(_checkout(), DEFAULT_THEME)
    assert "Ecommerce Checkout" in svg
    assert "Order Service" in svg
    assert "risk-engine" in svg


def test_render_without_title():
    svg = render_svg(_checkout(), DEFAULT_THEME, show_title=False)
    assert "Ecommerce Checkout" not in svg


def test_canvas_matches_layout():
    graph = _checkout()
    layout = compute_layout(graph)
    root = ET.fromstring(render_svg(graph, DEFAULT_THEME, layout=layout))
    assert root.get("width") == str(int(round(layout.canvas_width)))
    assert root.get("height") == str(int(round(layout.canvas_height)))


def test_render_uses_given_positions():
    graph = parse_sdl([{"id": "a", "kind": "microservice", "label": "Alpha"}], [])
    layout = compute_layout(graph)
    layout.positions["a"] = Position(400, 300, layout.positions["a"].layer)
    root = ET.fromstring(render_svg(graph, DEFAULT_THEME, layout=layout))

    (node,) = _groups(root, "sdl-node")
    rect = node.find(f"{SVG_NS}rect")
    assert (rect.get("x"), rect.get("y")) == ("400", "300")


def test_theme_background():
    graph = _checkout()
    assert 'fill="#0d1117"' in render_svg(graph, DARK_THEME)
    assert 'fill="#ffffff"' in render_svg(graph, DEFAULT_THEME)
    assert set(THEMES) == {"default", "dark"}


def test_bidirectional_edge_has_both_markers():
    root = ET.fromstring(render_svg(_checkout(), DEFAULT_THEME))
    edges = {g.get("data-id"): g for g in _groups(root, "sdl-edge")}

    two_way = edges["e-payments-events"].find(f"{SVG_NS}path")
    one_way = edges["e-gw-orders"].find(f"{SVG_NS}path")
    assert two_way.get("marker-start") and two_way.get("marker-end")
    assert one_way.get("marker-start") is None
    assert one_way.get("marker-end")


def test_dashed_protocol_lines():
    root = ET.fromstring(render_svg(_checkout(), DEFAULT_THEME))
    edges = {g.get("data-id"): g for g in _groups(root, "sdl-edge")}

    kafka = edges["e-orders-events"].find(f"{SVG_NS}path")
    rest = edges["e-gw-orders"].find(f"{SVG_NS}path")
    assert kafka.get("stroke-dasharray") == "8,4"
    assert rest.get("stroke-dasharray") is None


def test_shapes_follow_kind():
    root = ET.fromstring(render_svg(_checkout(), DEFAULT_THEME))
    nodes = {g.get("data-id"): g for g in _groups(root, "sdl-node")}

    assert nodes["orders-db"].find(f"{SVG_NS}ellipse") is not None
    assert nodes["shopper"].find(f"{SVG_NS}circle") is not None
    assert nodes["api-gateway"].find(f"{SVG_NS}path") is not None
    assert nodes["orders"].get("data-kind") == "microservice"


def test_edge_label_falls_back_to_protocol():
    graph = parse_sdl(
        [{"id": "a", "kind": "microservice"}, {"id": "b", "kind": "cache"}],
        [
            {"id": "e1", "source": "a", "target": "b", "protocol": "database"},
            {"id": "e2", "source": "b", "target": "a", "protocol": "grpc",
             "label": "replicate"},
        ],
    )
    svg = render_svg(graph, DEFAULT_THEME)
    assert ">database<" in svg
    assert ">replicate<" in svg
    assert ">grpc<" not in svg


def test_custom_kinds_get_default_hints():
    graph = _checkout()
    hint = node_hint(graph.nodes["fraud-check"].category)
    assert hint.color == "gray"
    assert protocol_hint(graph.edges[0].protocol).line == "solid"


def test_render_empty_graph():
    root = ET.fromstring(render_svg(SdlGraph(), DEFAULT_THEME))
    assert root.get("width") == "104"
    assert _groups(root, "sdl-node") == []
