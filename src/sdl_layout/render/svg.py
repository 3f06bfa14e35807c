"""SVG generation for architecture diagrams using drawsvg."""

from __future__ import annotations

import drawsvg as draw

from sdl_layout.layout.engine import LayoutResult, compute_layout
from sdl_layout.layout.geometry import NodeDims, ShapeKind, shape_for
from sdl_layout.layout.routing import RoutedEdge, route_edges
from sdl_layout.parser.model import Node, Position, SdlGraph
from sdl_layout.render.constants import (
    CYLINDER_CAP_RY,
    EDGE_LABEL_FONT_SIZE,
    EDGE_LABEL_LIFT,
    ICON_OFFSET,
    KIND_CAPTION_FONT_SIZE,
    KIND_CAPTION_GAP,
    LABEL_OFFSET_NO_ICON,
    LABEL_OFFSET_WITH_ICON,
    PERSON_BODY_RATIO,
    PERSON_HEAD_RATIO,
    PERSON_LABEL_GAP,
    TITLE_Y,
)
from sdl_layout.render.hints import node_hint, protocol_hint
from sdl_layout.render.icons import render_icon
from sdl_layout.render.style import Theme


def render_svg(
    graph: SdlGraph,
    theme: Theme,
    layout: LayoutResult | None = None,
    show_title: bool = True,
) -> str:
    """Render an SDL graph to an SVG string.

    Uses ``layout`` when given (e.g. with saved positions already merged),
    otherwise computes one with the theme's layout config.
    """
    config = theme.layout
    if layout is None:
        layout = compute_layout(graph, config)
    positions = layout.positions

    width = int(round(layout.canvas_width))
    height = int(round(layout.canvas_height))
    d = draw.Drawing(width, height)

    d.append(draw.Rectangle(0, 0, width, height, fill=theme.background_color))

    if show_title and graph.title:
        d.append(draw.Text(
            graph.title,
            theme.title_font_size,
            config.margin, TITLE_Y,
            fill=theme.title_color,
            font_family=theme.font_family,
            font_weight="bold",
        ))

    routes = route_edges(graph, positions, config)
    edges_group = draw.Group(id="edges")
    _render_edges(edges_group, routes, theme)
    d.append(edges_group)

    nodes_group = draw.Group(id="nodes")
    for nid, node in graph.nodes.items():
        pos = positions.get(nid)
        if pos is None:
            continue
        _render_node(nodes_group, node, pos, config.dims(node.category), theme)
    d.append(nodes_group)

    return d.as_svg()


def _arrow_marker(color: str, size: float) -> draw.Marker:
    """Arrowhead with its tip at the path end; reversed at the path start."""
    marker = draw.Marker(
        -size, -size / 2, 0, size / 2,
        orient="auto-start-reverse",
        markerUnits="userSpaceOnUse",
    )
    marker.append(draw.Lines(-size, -size / 2, 0, 0, -size, size / 2,
                             close=True, fill=color))
    return marker


def _render_edges(
    parent: draw.Group,
    routes: list[RoutedEdge],
    theme: Theme,
) -> None:
    """Render routed edges as cubic paths with arrowheads and protocol labels."""
    markers: dict[str, draw.Marker] = {}

    for route in routes:
        edge = route.edge
        hint = protocol_hint(edge.protocol)
        colors = theme.color(hint.color)
        marker = markers.get(hint.color)
        if marker is None:
            marker = markers[hint.color] = _arrow_marker(colors.stroke, theme.arrow_size)

        extra = {}
        dash = theme.line_dashes.get(hint.line)
        if dash:
            extra["stroke_dasharray"] = dash
        if edge.bidirectional:
            extra["marker_start"] = marker

        group = draw.Group(
            class_="sdl-edge",
            data_id=edge.id,
            data_source=edge.source,
            data_target=edge.target,
        )
        (sx, sy), (c1x, c1y), (c2x, c2y), (tx, ty) = route.points()
        path = draw.Path(
            fill="none",
            stroke=colors.stroke,
            stroke_width=theme.edge_stroke_width,
            opacity=theme.edge_opacity,
            marker_end=marker,
            **extra,
        )
        path.M(sx, sy)
        path.C(c1x, c1y, c2x, c2y, tx, ty)
        group.append(path)

        mx, my = route.midpoint()
        group.append(draw.Text(
            edge.label or str(edge.protocol),
            EDGE_LABEL_FONT_SIZE,
            mx, my - EDGE_LABEL_LIFT,
            fill=colors.stroke,
            font_family=theme.font_mono,
            text_anchor="middle",
            opacity=0.7,
        ))
        parent.append(group)


def _render_node(
    parent: draw.Group,
    node: Node,
    pos: Position,
    dims: NodeDims,
    theme: Theme,
) -> None:
    """Render one node: outline by shape, icon, label and kind caption."""
    hint = node_hint(node.category)
    colors = theme.color(hint.color)
    shape = shape_for(node.category)
    w, h = dims.width, dims.height
    cx = pos.x + w / 2
    cy = pos.y + h / 2
    style = dict(
        fill=colors.fill,
        stroke=colors.stroke,
        stroke_width=theme.node_stroke_width,
    )

    group = draw.Group(
        class_="sdl-node",
        data_id=node.id,
        data_kind=str(node.category),
    )

    if shape is ShapeKind.CYLINDER:
        ry = CYLINDER_CAP_RY
        group.append(draw.Ellipse(cx, pos.y + ry, w / 2, ry, **style))
        group.append(draw.Rectangle(pos.x, pos.y + ry, w, h - ry,
                                    fill=colors.fill, stroke="none"))
        group.append(draw.Line(pos.x, pos.y + ry, pos.x, pos.y + h,
                               stroke=colors.stroke,
                               stroke_width=theme.node_stroke_width))
        group.append(draw.Line(pos.x + w, pos.y + ry, pos.x + w, pos.y + h,
                               stroke=colors.stroke,
                               stroke_width=theme.node_stroke_width))
        group.append(draw.Ellipse(cx, pos.y + h, w / 2, ry, **style))
    elif shape is ShapeKind.DIAMOND:
        group.append(draw.Lines(
            cx, pos.y,
            pos.x + w, cy,
            cx, pos.y + h,
            pos.x, cy,
            close=True,
            **style,
        ))
    elif shape is ShapeKind.PERSON:
        head_r = w * PERSON_HEAD_RATIO
        body_y = pos.y + head_r * 2.4
        half = w * PERSON_BODY_RATIO
        group.append(draw.Circle(cx, pos.y + head_r, head_r, **style))
        body = draw.Path(**style)
        body.M(cx - half, pos.y + h)
        body.Q(cx - half, body_y, cx, body_y)
        body.Q(cx + half, body_y, cx + half, pos.y + h)
        group.append(body)
    else:
        group.append(draw.Rectangle(
            pos.x, pos.y, w, h,
            rx=dims.corner_radius, ry=dims.corner_radius,
            **style,
        ))

    if shape is ShapeKind.PERSON:
        label_y = pos.y + h + PERSON_LABEL_GAP
        icon_y = pos.y + h * 0.3
    else:
        label_y = cy + (LABEL_OFFSET_WITH_ICON if hint.icon else LABEL_OFFSET_NO_ICON)
        icon_y = cy - ICON_OFFSET

    if hint.icon:
        render_icon(group, hint.icon, cx, icon_y, theme.icon_size, colors.text)

    group.append(draw.Text(
        node.label,
        theme.node_font_size,
        cx, label_y,
        fill=colors.text,
        font_family=theme.font_family,
        font_weight="600",
        text_anchor="middle",
    ))
    group.append(draw.Text(
        str(node.category),
        KIND_CAPTION_FONT_SIZE,
        cx, label_y + KIND_CAPTION_GAP,
        fill=colors.text,
        font_family=theme.font_mono,
        text_anchor="middle",
        opacity=0.6,
    ))
    parent.append(group)
