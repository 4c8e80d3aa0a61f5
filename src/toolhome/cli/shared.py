# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""State and helpers shared by the CLI commands."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final, Literal

import typer
from rich.console import Console
from rich.text import Text

from ..environment import ToolEnvironment
from ..errors import ToolHomeError

Level = Literal["info", "ok", "warn", "fail"]

# level -> (emoji prefix, colour)
_LEVELS: Final[dict[str, tuple[str, str]]] = {
    "info": ("ℹ️ ", "cyan"),
    "ok": ("✅ ", "green"),
    "warn": ("⚠️ ", "yellow"),
    "fail": ("❌ ", "red"),
}


@dataclass(slots=True)
class CLIState:
    """Global options captured by the application callback."""

    config_path: Path
    use_emoji: bool = True
    use_color: bool = True
    verbose: bool = False
    _console: Console | None = field(default=None, repr=False)

    def console(self) -> Console:
        """Return the console matching the presentation flags, creating it once."""

        if self._console is None:
            self._console = Console(
                no_color=not self.use_color,
                emoji=self.use_emoji,
                highlight=False,
                soft_wrap=True,
            )
        return self._console


def report(state: CLIState, level: Level, msg: str) -> None:
    """Print ``msg`` with the emoji prefix and colour of ``level``.

    The prefix is dropped under ``--no-emoji`` and the colour under ``--no-color``.
    """

    prefix, style = _LEVELS[level]
    text = Text(f"{prefix}{msg}" if state.use_emoji else msg)
    if state.use_color:
        text.stylize(style)
    state.console().print(text)


def section(state: CLIState, title: str) -> None:
    """Print a section header; a rule with colour, plain dashes without."""

    console = state.console()
    console.print()
    if state.use_color:
        console.rule(title)
    else:
        console.print(f"--- {title} ---")


def get_state(ctx: typer.Context) -> CLIState:
    """Return the :class:`CLIState` stored on ``ctx`` by the app callback."""

    state = ctx.find_object(CLIState)
    if state is None:  # pragma: no cover - callback always runs first
        raise typer.Exit(code=2)
    return state


@contextmanager
def reporting_errors(state: CLIState) -> Iterator[None]:
    """Convert :class:`ToolHomeError` into a red message and exit code 1."""

    try:
        yield
    except ToolHomeError as exc:
        report(state, "fail", str(exc))
        raise typer.Exit(code=1) from exc


def load_environment(state: CLIState) -> ToolEnvironment:
    """Load the environment described by the configured file.

    Raises:
        typer.Exit: With code 1 when the configuration cannot be loaded.
    """

    with reporting_errors(state):
        return ToolEnvironment.load(state.config_path)


__all__ = ["CLIState", "get_state", "load_environment", "report", "reporting_errors", "section"]
