# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Rendering helpers for tool location commands."""

from __future__ import annotations

from collections.abc import Sequence

from rich import box
from rich.table import Table

from ..environment import ToolEnvironment
from ..models import Node
from ..overrides import OverrideEntry, resolve_home


def build_installations_table(env: ToolEnvironment, node: Node | None = None) -> Table:
    """Return a rich table listing installations and their homes.

    Args:
        env: Environment providing the installations.
        node: Optional node whose effective homes should be shown.

    Returns:
        Table: Rich table instance ready for rendering.
    """

    title = "Installations" if node is None else f"Installations on {node.name}"
    table = Table(title=title, box=box.SIMPLE, expand=True)
    table.add_column("Key", style="bold", overflow="fold")
    table.add_column("Type", overflow="fold")
    table.add_column("Default Home", overflow="fold")
    if node is not None:
        table.add_column("Effective Home", overflow="fold")

    for key, installation in env.installations.items():
        row = [key, installation.descriptor.display_name, installation.home]
        if node is not None:
            row.append(resolve_home(node, installation, nodes=env.nodes, resolver=env.types))
        table.add_row(*row)
    return table


def build_overrides_table(node_name: str, entries: Sequence[OverrideEntry]) -> Table:
    """Return a rich table listing the overrides configured for ``node_name``.

    Args:
        node_name: Node whose overrides are listed.
        entries: Display rows produced by :func:`~toolhome.overrides.list_overrides`.

    Returns:
        Table: Rich table instance; stale rows are flagged in the status column.
    """

    table = Table(title=f"Tool Locations on {node_name}", box=box.SIMPLE, expand=True)
    table.add_column("Key", style="bold", overflow="fold")
    table.add_column("Home", overflow="fold")
    table.add_column("Type", overflow="fold")
    table.add_column("Status", overflow="fold")
    for entry in entries:
        status = "stale" if entry.stale else "ok"
        table.add_row(entry.key, entry.home, entry.display_name or "-", status)
    return table


__all__ = ["build_installations_table", "build_overrides_table"]
