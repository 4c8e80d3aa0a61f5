# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of the ``resolve`` and ``installations`` commands."""

from __future__ import annotations

import typer

from .rendering import build_installations_table
from .shared import get_state, load_environment, reporting_errors


def resolve_command(
    ctx: typer.Context,
    node: str = typer.Argument(..., help="Node the tool will run on."),
    key: str = typer.Argument(..., help="Installation key in TYPE@NAME form."),
) -> None:
    """Print the home directory an installation has on a node."""
    state = get_state(ctx)
    env = load_environment(state)
    with reporting_errors(state):
        home = env.resolve(node, key)
    typer.echo(home)


def installations_command(
    ctx: typer.Context,
    node: str | None = typer.Option(
        None,
        "--node",
        "-n",
        help="Show effective homes on this node.",
    ),
) -> None:
    """List declared tool installations."""
    state = get_state(ctx)
    env = load_environment(state)
    with reporting_errors(state):
        target = env.nodes.get(node) if node is not None else None
    state.console().print(build_installations_table(env, target))


__all__ = ["installations_command", "resolve_command"]
