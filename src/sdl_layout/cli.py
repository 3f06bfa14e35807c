"""CLI for sdl-layout."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import replace
from pathlib import Path

import click

from sdl_layout import __version__
from sdl_layout.layout import compute_layout
from sdl_layout.layout.layers import group_layers
from sdl_layout.layout.persistence import (
    JsonFileLayoutStore,
    LayoutStoreError,
    load_saved_layout,
)
from sdl_layout.parser import SdlParseError, load_example_dir, validate_graph
from sdl_layout.parser.model import SdlGraph
from sdl_layout.render import render_svg
from sdl_layout.render.style import Theme
from sdl_layout.themes import THEMES

LAYOUT_STORE_NAME = "layout.json"


def _load(example_dir: Path, title: str | None = None) -> SdlGraph:
    try:
        return load_example_dir(example_dir, title=title)
    except SdlParseError as e:
        click.echo(f"Parse error: {e}", err=True)
        raise SystemExit(1)


def _load_saved(store_path: Path, graph: SdlGraph):
    store = JsonFileLayoutStore(store_path)
    try:
        return asyncio.run(load_saved_layout(store, graph.nodes))
    except LayoutStoreError as e:
        click.echo(f"Layout store error: {e}", err=True)
        raise SystemExit(1)


def _themed(theme_name: str, layer_spacing: float | None,
            node_spacing: float | None) -> Theme:
    theme = THEMES[theme_name]
    overrides = {}
    if layer_spacing is not None:
        overrides["layer_spacing_x"] = layer_spacing
    if node_spacing is not None:
        overrides["node_spacing_y"] = node_spacing
    if overrides:
        theme = replace(theme, layout=replace(theme.layout, **overrides))
    return theme


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """sdl-layout: Lay out and render SDL architecture diagrams."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("example_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output SVG file path. Defaults to <example-dir>/diagram.svg")
@click.option("--theme", type=click.Choice(list(THEMES.keys())), default="default",
              help="Visual theme (default: default)")
@click.option("--title", type=str, default=None,
              help="Diagram title. Defaults to the folder name")
@click.option("--layout-store", type=click.Path(dir_okay=False, path_type=Path),
              default=None,
              help="Saved-layout store. Defaults to <example-dir>/layout.json")
@click.option("--layer-spacing", type=float, default=None,
              help="Horizontal spacing between layers (default: 210)")
@click.option("--node-spacing", type=float, default=None,
              help="Vertical gap between nodes in a layer (default: 90)")
def render(
    example_dir: Path,
    output: Path | None,
    theme: str,
    title: str | None,
    layout_store: Path | None,
    layer_spacing: float | None,
    node_spacing: float | None,
) -> None:
    """Render an SDL example directory to SVG."""
    graph = _load(example_dir, title)
    theme_obj = _themed(theme, layer_spacing, node_spacing)

    saved = _load_saved(layout_store or example_dir / LAYOUT_STORE_NAME, graph)
    result = compute_layout(graph, theme_obj.layout, saved=saved)
    svg = render_svg(graph, theme_obj, layout=result)

    if output is None:
        output = example_dir / "diagram.svg"
    output.write_text(svg if svg.endswith("\n") else svg + "\n")

    click.echo(f"Rendered {len(graph.nodes)} nodes, "
               f"{len(graph.edges)} edges -> {output}")
    if result.overrides_applied:
        click.echo(f"Layout: loaded {result.overrides_applied} saved positions")


@cli.command()
@click.argument("example_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Write JSON here instead of stdout")
@click.option("--layout-store", type=click.Path(dir_okay=False, path_type=Path),
              default=None,
              help="Saved-layout store. Defaults to <example-dir>/layout.json")
def layout(example_dir: Path, output: Path | None, layout_store: Path | None) -> None:
    """Print computed positions, ports and canvas size as JSON."""
    graph = _load(example_dir)
    saved = _load_saved(layout_store or example_dir / LAYOUT_STORE_NAME, graph)
    result = compute_layout(graph, saved=saved)

    payload = {
        "key": result.key,
        "canvas": {"width": result.canvas_width, "height": result.canvas_height},
        "crossings": result.ordering.crossings,
        "layers": {str(k): v for k, v in result.ordering.as_dict().items()},
        "positions": {
            nid: {"x": p.x, "y": p.y, "layer": p.layer}
            for nid, p in result.positions.items()
        },
        "edges": [
            {
                "id": r.edge.id,
                "source_side": r.source_side.value,
                "target_side": r.target_side.value,
                "source_port": r.source_port,
                "target_port": r.target_port,
                "path": r.svg_path(),
            }
            for r in result.routes(graph)
        ],
    }
    text = json.dumps(payload, indent=2) + "\n"
    if output is None:
        click.echo(text, nl=False)
    else:
        output.write_text(text)
        click.echo(f"Wrote layout for {len(result.positions)} nodes -> {output}")


@cli.command()
@click.argument("example_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
def validate(example_dir: Path) -> None:
    """Check an SDL example directory for broken references."""
    graph = _load(example_dir)
    errors = validate_graph(graph)

    if errors:
        click.echo("Validation errors:", err=True)
        for err in errors:
            click.echo(f"  - {err}", err=True)
        raise SystemExit(1)

    click.echo(f"Valid: {len(graph.nodes)} nodes, "
               f"{len(graph.edges)} edges, "
               f"{len(graph.triggers)} triggers, "
               f"{len(graph.flows)} flows")


@cli.command()
@click.argument("example_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
def info(example_dir: Path) -> None:
    """Show information about an SDL example directory."""
    graph = _load(example_dir)

    click.echo(f"Title: {graph.title or '(none)'}")
    click.echo(f"Nodes: {len(graph.nodes)}")
    click.echo(f"Edges: {len(graph.edges)}")
    click.echo(f"Triggers: {len(graph.triggers)}")
    click.echo(f"Flows: {len(graph.flows)}")
    for flow in graph.flows:
        click.echo(f"  {flow.label}: {len(flow.steps)} steps")
    click.echo("Layers:")
    for layer, node_ids in group_layers(graph).items():
        click.echo(f"  [{layer}] {', '.join(node_ids)}")
