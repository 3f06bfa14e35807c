"""Saved manual positions: node-set keys, merge, and key-value stores.

A saved record maps node id -> {"x", "y"} and is stored under a key
derived from the sorted set of node ids only. Edge or flow edits keep
the key; adding or removing a node changes it, so the old record is
simply not found and a fresh layout is used.
"""

from __future__ import annotations

__all__ = [
    "JsonFileLayoutStore",
    "LayoutStore",
    "LayoutStoreError",
    "MemoryLayoutStore",
    "applicable_overrides",
    "layout_key",
    "load_saved_layout",
    "merge_layout",
    "reset_layout",
    "save_layout",
    "snapshot_positions",
]

import asyncio
import hashlib
import json
import logging
import math
from collections.abc import Iterable
from dataclasses import replace
from pathlib import Path
from typing import Protocol

from sdl_layout.parser.model import Position

logger = logging.getLogger(__name__)

SavedLayout = dict[str, dict[str, float]]

KEY_PREFIX = "layout:"


class LayoutStoreError(RuntimeError):
    """Raised when a layout store cannot be read or written."""


class LayoutStore(Protocol):
    """Asynchronous key-value capability used to persist layouts."""

    async def get(self, key: str) -> SavedLayout | None: ...

    async def set(self, key: str, value: SavedLayout) -> None: ...

    async def delete(self, key: str) -> None: ...


def layout_key(node_ids: Iterable[str]) -> str:
    """Deterministic key for a node set (order and duplicates ignored)."""
    joined = "|".join(sorted(set(node_ids)))
    return KEY_PREFIX + hashlib.sha256(joined.encode("utf-8")).hexdigest()


def _coerce_entry(entry: object) -> tuple[float, float] | None:
    if not isinstance(entry, dict):
        return None
    x, y = entry.get("x"), entry.get("y")
    if isinstance(x, bool) or isinstance(y, bool):
        return None
    if not isinstance(x, (int, float)) or not isinstance(y, (int, float)):
        return None
    # json.loads accepts NaN and Infinity
    if not (math.isfinite(x) and math.isfinite(y)):
        return None
    return float(x), float(y)


def applicable_overrides(
    computed: dict[str, Position],
    saved: SavedLayout | None,
) -> dict[str, tuple[float, float]]:
    """Saved x/y for computed nodes that have a well-formed saved entry.

    A record that is not a mapping yields no overrides.
    """
    if not saved or not isinstance(saved, dict):
        return {}
    overrides: dict[str, tuple[float, float]] = {}
    for nid in computed:
        entry = _coerce_entry(saved.get(nid))
        if entry is not None:
            overrides[nid] = entry
    return overrides


def merge_layout(
    computed: dict[str, Position],
    saved: SavedLayout | None,
) -> dict[str, Position]:
    """Overlay saved x/y onto computed positions.

    Every computed node is kept; a node with a well-formed saved entry
    takes its x/y but keeps the computed layer. Saved entries for nodes
    not in ``computed`` are ignored. Returns new Position objects.
    """
    overrides = applicable_overrides(computed, saved)
    merged: dict[str, Position] = {}
    for nid, pos in computed.items():
        if nid in overrides:
            x, y = overrides[nid]
            merged[nid] = Position(x=x, y=y, layer=pos.layer)
        else:
            merged[nid] = replace(pos)
    if saved:
        logger.debug("Applied %d saved positions", len(overrides))
    return merged


def snapshot_positions(positions: dict[str, Position]) -> SavedLayout:
    """The persisted form of positions: x/y only."""
    return {nid: {"x": pos.x, "y": pos.y} for nid, pos in positions.items()}


class MemoryLayoutStore:
    """In-process store, mainly for tests and single-run tools."""

    def __init__(self) -> None:
        self._data: dict[str, SavedLayout] = {}

    async def get(self, key: str) -> SavedLayout | None:
        value = self._data.get(key)
        return json.loads(json.dumps(value)) if value is not None else None

    async def set(self, key: str, value: SavedLayout) -> None:
        self._data[key] = json.loads(json.dumps(value))

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


class JsonFileLayoutStore:
    """Store holding every saved record in one JSON file.

    The file maps key -> record. A missing file reads as empty. File I/O
    runs in a worker thread so callers on an event loop are not blocked.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._lock = asyncio.Lock()

    def _read_all(self) -> dict[str, SavedLayout]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise LayoutStoreError(f"Corrupt layout store {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise LayoutStoreError(f"Layout store {self.path} must hold a JSON object")
        return data

    def _write_all(self, data: dict[str, SavedLayout]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")
        tmp.replace(self.path)

    async def get(self, key: str) -> SavedLayout | None:
        data = await asyncio.to_thread(self._read_all)
        record = data.get(key)
        if record is not None and not isinstance(record, dict):
            raise LayoutStoreError(
                f"Layout record {key[:20]} in {self.path} must be a JSON object"
            )
        return record

    async def set(self, key: str, value: SavedLayout) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._read_all)
            data[key] = value
            await asyncio.to_thread(self._write_all, data)

    async def delete(self, key: str) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._read_all)
            if data.pop(key, None) is not None:
                await asyncio.to_thread(self._write_all, data)


async def load_saved_layout(
    store: LayoutStore, node_ids: Iterable[str]
) -> SavedLayout | None:
    """Fetch the saved record for a node set; None on a key miss."""
    key = layout_key(node_ids)
    saved = await store.get(key)
    logger.debug("Saved layout %s for %s", "hit" if saved else "miss", key[:20])
    return saved


async def save_layout(
    store: LayoutStore,
    node_ids: Iterable[str],
    positions: dict[str, Position],
) -> str:
    """Persist x/y for every position under the node-set key."""
    key = layout_key(node_ids)
    await store.set(key, snapshot_positions(positions))
    return key


async def reset_layout(store: LayoutStore, node_ids: Iterable[str]) -> None:
    await store.delete(layout_key(node_ids))
