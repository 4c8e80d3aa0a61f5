# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Commands that inspect and edit per-node tool locations."""

from __future__ import annotations

import typer

from ..environment import ToolEnvironment
from ..errors import ConfigurationError
from ..location import location_from_key
from ..overrides import NodeToolOverrides
from .rendering import build_overrides_table
from .shared import CLIState, get_state, load_environment, report, reporting_errors

overrides_app = typer.Typer(help="Inspect and edit per-node tool locations.", no_args_is_help=True)


def _editable_environment(ctx: typer.Context) -> tuple[CLIState, ToolEnvironment]:
    state = get_state(ctx)
    env = load_environment(state)
    if env.store_path is None:
        with reporting_errors(state):
            raise ConfigurationError("no 'store' configured; tool locations cannot be edited")
    return state, env


@overrides_app.command("list")
def list_command(
    ctx: typer.Context,
    node: str = typer.Argument(..., help="Node whose tool locations are listed."),
) -> None:
    """List the tool locations configured for a node."""
    state = get_state(ctx)
    env = load_environment(state)
    with reporting_errors(state):
        entries = env.describe_overrides(node)
    if not entries:
        report(state, "info", f"No tool locations configured for {node}.")
        return
    state.console().print(build_overrides_table(node, entries))
    for entry in entries:
        if entry.stale:
            report(state, "warn", f"{entry.key}: {entry.error}")


@overrides_app.command("set")
def set_command(
    ctx: typer.Context,
    node: str = typer.Argument(..., help="Node receiving the tool location."),
    key: str = typer.Argument(..., help="Installation key in TYPE@NAME form."),
    home: str = typer.Argument(..., help="Home directory of the tool on the node."),
) -> None:
    """Set the home of an installation on a node."""
    state, env = _editable_environment(ctx)
    with reporting_errors(state):
        replacement = location_from_key(key, home)
        current = env.nodes.get_overrides_for(env.nodes.get(node))
        locations = list(current or ())
        keys = [location.key() for location in locations]
        if key in keys:
            locations[keys.index(key)] = replacement
        else:
            locations.append(replacement)
        env.publish(node, NodeToolOverrides(locations))
    report(state, "ok", f"{key} on {node} now resolves to {home}")


@overrides_app.command("unset")
def unset_command(
    ctx: typer.Context,
    node: str = typer.Argument(..., help="Node losing the tool location."),
    key: str = typer.Argument(..., help="Installation key in TYPE@NAME form."),
) -> None:
    """Remove the tool location of an installation from a node."""
    state, env = _editable_environment(ctx)
    with reporting_errors(state):
        current = env.nodes.get_overrides_for(env.nodes.get(node))
        remaining = [location for location in current or () if location.key() != key]
        if current is None or len(remaining) == len(current):
            report(state, "warn", f"No tool location for {key} on {node}.")
            return
        env.publish(node, NodeToolOverrides(remaining))
    report(state, "ok", f"Removed {key} from {node}")


@overrides_app.command("clear")
def clear_command(
    ctx: typer.Context,
    node: str = typer.Argument(..., help="Node whose tool locations are removed."),
) -> None:
    """Remove every tool location from a node."""
    state, env = _editable_environment(ctx)
    with reporting_errors(state):
        env.publish(node, NodeToolOverrides(()))
    report(state, "ok", f"Cleared tool locations on {node}")


__all__ = ["overrides_app"]
