"""Loader for SDL example directories (nodes/edges/triggers/flows JSON)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from sdl_layout.parser.model import (
    Edge,
    EdgeProtocol,
    Flow,
    FlowStep,
    Node,
    NodeCategory,
    SdlGraph,
    Trigger,
)

logger = logging.getLogger(__name__)

NODES_FILE = "nodes.json"
EDGES_FILE = "edges.json"
TRIGGERS_FILE = "triggers.json"
FLOWS_FILE = "flows.json"


class SdlParseError(ValueError):
    """Raised when SDL input cannot be turned into a graph."""


def _title_from_dir(path: Path) -> str:
    return " ".join(word.capitalize() for word in path.name.replace("-", " ").split())


def _read_array(path: Path, required: bool = True) -> list[Any]:
    if not path.exists():
        if required:
            raise SdlParseError(f"Missing required file: {path.name}")
        return []
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SdlParseError(f"Failed to parse {path.name}: {e}") from e
    if not isinstance(data, list):
        raise SdlParseError(f"{path.name} must contain a JSON array")
    return data


def _require_id(item: Any, what: str, index: int) -> str:
    if not isinstance(item, dict):
        raise SdlParseError(f"{what}[{index}] must be an object")
    ident = item.get("id")
    if not isinstance(ident, str) or not ident:
        raise SdlParseError(f"{what}[{index}] is missing a string 'id'")
    return ident


def _optional_str(item: dict[str, Any], field: str, where: str) -> str | None:
    value = item.get(field)
    if value is not None and not isinstance(value, str):
        raise SdlParseError(f"{where}: '{field}' must be a string")
    return value


def _parse_steps(raw: dict[str, Any], where: str) -> list[FlowStep]:
    steps = raw.get("steps") or []
    if not isinstance(steps, list):
        raise SdlParseError(f"{where}: 'steps' must be an array")
    parsed = []
    for j, step in enumerate(steps):
        step_where = f"{where}.steps[{j}]"
        if not isinstance(step, dict):
            raise SdlParseError(f"{step_where} must be an object")
        parsed.append(FlowStep(
            id=str(step.get("id", j + 1)),
            actor=_optional_str(step, "actor", step_where) or "",
            action=_optional_str(step, "action", step_where) or "",
            via=_optional_str(step, "via", step_where),
        ))
    return parsed


def parse_sdl(
    nodes: list[dict[str, Any]],
    edges: list[dict[str, Any]],
    triggers: list[dict[str, Any]] | None = None,
    flows: list[dict[str, Any]] | None = None,
    title: str = "",
) -> SdlGraph:
    """Build an SdlGraph from decoded JSON arrays.

    Node ids must be unique. Edges are not checked against the node set;
    use validate_graph() for referential integrity.
    """
    graph = SdlGraph(title=title)

    for i, raw in enumerate(nodes):
        nid = _require_id(raw, "nodes", i)
        if nid in graph.nodes:
            raise SdlParseError(f"nodes[{i}]: duplicate node id '{nid}'")
        graph.add_node(Node(
            id=nid,
            category=NodeCategory.parse(_optional_str(raw, "kind", f"nodes[{i}]")),
            label=raw.get("label") or nid,
            description=raw.get("description", ""),
            responsibilities=list(raw.get("responsibilities") or []),
        ))

    for i, raw in enumerate(edges):
        eid = _require_id(raw, "edges", i)
        source = raw.get("source")
        target = raw.get("target")
        if not isinstance(source, str) or not isinstance(target, str):
            raise SdlParseError(f"edges[{i}] needs string 'source' and 'target'")
        graph.add_edge(Edge(
            id=eid,
            source=source,
            target=target,
            protocol=EdgeProtocol.parse(_optional_str(raw, "protocol", f"edges[{i}]")),
            bidirectional=raw.get("direction") == "bidirectional",
            label=raw.get("label", ""),
        ))

    for i, raw in enumerate(triggers or []):
        tid = _require_id(raw, "triggers", i)
        graph.add_trigger(Trigger(
            id=tid, label=raw.get("label") or tid, kind=raw.get("kind", "")
        ))

    for i, raw in enumerate(flows or []):
        fid = _require_id(raw, "flows", i)
        where = f"flows[{i}]"
        graph.add_flow(Flow(
            id=fid,
            label=raw.get("label") or fid,
            trigger=_optional_str(raw, "trigger", where) or "",
            steps=_parse_steps(raw, where),
        ))

    return graph


def load_example_dir(path: Path | str, title: str | None = None) -> SdlGraph:
    """Load an SDL example directory.

    nodes.json and edges.json are required; triggers.json and
    flows.json are optional.
    """
    directory = Path(path)
    if not directory.is_dir():
        raise SdlParseError(f"Not a directory: {directory}")

    graph = parse_sdl(
        _read_array(directory / NODES_FILE),
        _read_array(directory / EDGES_FILE),
        _read_array(directory / TRIGGERS_FILE, required=False),
        _read_array(directory / FLOWS_FILE, required=False),
        title=title or _title_from_dir(directory),
    )
    logger.debug(
        "Loaded %s: %d nodes, %d edges, %d flows",
        directory.name, len(graph.nodes), len(graph.edges), len(graph.flows),
    )
    return graph


def validate_graph(graph: SdlGraph) -> list[str]:
    """Return referential-integrity errors (empty list when valid)."""
    errors: list[str] = []

    seen_edges: set[str] = set()
    for edge in graph.edges:
        if edge.id in seen_edges:
            errors.append(f"Duplicate edge id '{edge.id}'")
        seen_edges.add(edge.id)
        for end in (edge.source, edge.target):
            if end not in graph.nodes:
                errors.append(f"Edge '{edge.id}' references unknown node '{end}'")

    for flow in graph.flows:
        if flow.trigger and flow.trigger not in graph.triggers:
            errors.append(
                f"Flow '{flow.id}' references unknown trigger '{flow.trigger}'"
            )
        for step in flow.steps:
            if step.actor and step.actor not in graph.nodes:
                errors.append(
                    f"Flow '{flow.id}' step {step.id} references unknown "
                    f"actor '{step.actor}'"
                )
            if step.via and step.via not in seen_edges:
                errors.append(
                    f"Flow '{flow.id}' step {step.id} references unknown "
                    f"edge '{step.via}'"
                )

    return errors
