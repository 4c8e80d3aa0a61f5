# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Implementation of the ``check`` command."""

from __future__ import annotations

import typer

from ..environment import ToolEnvironment
from .shared import get_state, load_environment, report, section


def collect_problems(env: ToolEnvironment) -> list[str]:
    """Return human readable descriptions of questionable tool locations.

    Args:
        env: Environment to inspect.

    Returns:
        list[str]: One message per stale, dangling or misplaced override.
    """

    problems: list[str] = []
    for node in env.nodes.nodes():
        overrides = env.nodes.get_overrides_for(node)
        if overrides is None:
            continue
        stale = {location.key() for location in overrides.stale_entries(env.types)}
        for location in overrides:
            key = location.key()
            if key in stale:
                problems.append(f"{node.name}: {key} references unknown tool type {location.type_id!r}")
            elif key not in env.installations:
                problems.append(f"{node.name}: {key} does not match any installation")
    for name in env.orphaned:
        problems.append(f"{name}: node is not declared or cannot carry tool locations")
    return problems


def check_command(ctx: typer.Context) -> None:
    """Report stale or misplaced tool locations."""
    state = get_state(ctx)
    env = load_environment(state)
    problems = collect_problems(env)
    if not problems:
        report(state, "ok", "All tool locations resolve.")
        return
    section(state, "Tool location problems")
    for problem in problems:
        report(state, "warn", problem)
    raise typer.Exit(code=1)


__all__ = ["check_command", "collect_problems"]
