# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

from importlib import resources
from typing import Annotated

import typer

from .. import __version__
from ..logging import configure_diagnostics, fail
from ..settings import AppLayout, SettingsError, load_settings
from .commands import register_commands
from .shared import CLIState

app = typer.Typer(
    name="devcontainer.vim",
    help="devcontainer for vim.",
    add_completion=False,
    no_args_is_help=True,
)


def _read_resource(name: str) -> str:
    return resources.files("devcontainer_vim").joinpath("resources", name).read_text(encoding="utf-8")


LICENSE_OPTION = Annotated[bool, typer.Option("--license", "-l", help="Show licenses.", is_eager=True)]
VERSION_OPTION = Annotated[bool, typer.Option("--version", help="Show the version and exit.", is_eager=True)]
EMOJI_OPTION = Annotated[bool, typer.Option("--emoji/--no-emoji", help="Toggle emoji in CLI output.")]
DEBUG_OPTION = Annotated[bool, typer.Option("--debug", help="Log cache, download and subprocess details.")]


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    show_license: LICENSE_OPTION = False,
    show_version: VERSION_OPTION = False,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Launch development containers with Vim pre-installed."""

    if show_license:
        typer.echo(_read_resource("LICENSE"))
        typer.echo()
        typer.echo(_read_resource("NOTICE"))
        raise typer.Exit(code=0)
    if show_version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    configure_diagnostics(debug=debug)
    try:
        settings = load_settings()
    except SettingsError as exc:
        fail(str(exc), use_emoji=emoji)
        raise typer.Exit(code=1) from exc
    layout = AppLayout.from_settings(settings).ensure()
    ctx.obj = CLIState(settings=settings, layout=layout, use_emoji=emoji)


register_commands(app)


def main() -> None:
    """Console-script entry point."""

    app(prog_name="devcontainer.vim")


__all__ = ["app", "main"]
