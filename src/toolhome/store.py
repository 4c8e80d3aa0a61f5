# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""JSON persistence for per-node tool location overrides."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from .errors import KeyFormatError, StoreError
from .overrides import NodeToolOverrides

LOGGER = logging.getLogger(__name__)

STORE_VERSION: Final[int] = 1
_NODES_KEY: Final[str] = "nodes"


def load_overrides(path: Path) -> dict[str, NodeToolOverrides]:
    """Read the override sets stored in ``path`` keyed by node name.

    Args:
        path: JSON document written by :func:`save_overrides`.

    Returns:
        dict[str, NodeToolOverrides]: Override sets; empty when ``path`` is missing.

    Raises:
        StoreError: If the document is not valid JSON or has the wrong shape.
    """

    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise StoreError(f"tool location store {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, Mapping):
        raise StoreError(f"tool location store {path} must contain an object")
    version = data.get("version", STORE_VERSION)
    if version != STORE_VERSION:
        raise StoreError(f"tool location store {path} has unsupported version {version!r}")
    nodes = data.get(_NODES_KEY, {})
    if not isinstance(nodes, Mapping):
        raise StoreError(f"tool location store {path} has a malformed '{_NODES_KEY}' section")
    result: dict[str, NodeToolOverrides] = {}
    for node_name, entries in nodes.items():
        result[str(node_name)] = _parse_entries(path, str(node_name), entries)
    LOGGER.debug("Loaded tool locations for %d node(s) from %s", len(result), path)
    return result


def _parse_entries(path: Path, node_name: str, entries: Any) -> NodeToolOverrides:
    if not isinstance(entries, list):
        raise StoreError(f"{path}: overrides for node {node_name!r} must be a list")
    pairs: list[tuple[str, str]] = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            raise StoreError(f"{path}: override entry for node {node_name!r} must be an object")
        key = entry.get("key")
        home = entry.get("home")
        if not isinstance(key, str) or not isinstance(home, str):
            raise StoreError(f"{path}: override entry for node {node_name!r} needs string 'key' and 'home'")
        pairs.append((key, home))
    try:
        return NodeToolOverrides.from_pairs(pairs)
    except KeyFormatError as exc:
        raise StoreError(f"{path}: {exc}") from exc


def save_overrides(path: Path, overrides: Mapping[str, NodeToolOverrides]) -> None:
    """Write ``overrides`` to ``path`` replacing the previous document atomically.

    Args:
        path: Destination JSON document.
        overrides: Override sets keyed by node name.
    """

    payload = {
        "version": STORE_VERSION,
        _NODES_KEY: {
            node_name: [{"key": key, "home": home} for key, home in node_overrides.pairs()]
            for node_name, node_overrides in overrides.items()
        },
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2)
            handle.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    LOGGER.debug("Saved tool locations for %d node(s) to %s", len(overrides), path)


__all__ = ["STORE_VERSION", "load_overrides", "save_overrides"]
