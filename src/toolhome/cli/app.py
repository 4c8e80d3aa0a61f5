# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared options."""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from ..config import DEFAULT_CONFIG_FILENAME
from .check import check_command
from .overrides import overrides_app
from .resolve import installations_command, resolve_command
from .shared import CLIState

app = typer.Typer(
    help="Resolve node-specific tool installation homes.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main(
    ctx: typer.Context,
    config: Path = typer.Option(
        Path(DEFAULT_CONFIG_FILENAME),
        "--config",
        "-c",
        help="Controller configuration file.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    emoji: bool = typer.Option(True, "--emoji/--no-emoji", help="Toggle emoji in CLI output."),
    color: bool = typer.Option(True, "--color/--no-color", help="Toggle colour in CLI output."),
) -> None:
    """Capture global options for the subcommands."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = CLIState(config_path=config, use_emoji=emoji, use_color=color, verbose=verbose)


app.command("resolve")(resolve_command)
app.command("installations")(installations_command)
app.command("check")(check_command)
app.add_typer(overrides_app, name="overrides")

__all__ = ["app"]
