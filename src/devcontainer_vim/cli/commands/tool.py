# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Commands managing the tool cache."""

from __future__ import annotations

import shutil
from typing import Annotated

import typer

from ...logging import ok
from ...tools import TOOL_NAMES, install_tools
from ..shared import build_tool_registry, exit_on_error, get_state

tool_app = typer.Typer(help="Manage the tools downloaded by devcontainer.vim.", no_args_is_help=True)

NAMES_ARGUMENT = Annotated[
    list[str] | None,
    typer.Argument(help=f"Tools to download ({', '.join(TOOL_NAMES)}). Defaults to every tool built for this platform."),
]
OVERRIDE_OPTION = Annotated[
    bool,
    typer.Option("--override/--no-override", help="Replace tools that are already cached."),
]


@tool_app.command("download")
def download_command(ctx: typer.Context, names: NAMES_ARGUMENT = None, override: OVERRIDE_OPTION = True) -> None:
    """Download tools into the cache, replacing cached copies by default."""

    state = get_state(ctx)
    unknown = sorted(set(names or ()) - set(TOOL_NAMES))
    if unknown:
        state.fail(f"Unknown tool(s): {', '.join(unknown)}. Choose from {', '.join(TOOL_NAMES)}.")
        raise typer.Exit(code=2)
    with exit_on_error(state):
        registry = build_tool_registry(state.settings)
        paths = install_tools(registry, state.layout.bin_dir, names or registry.names, override=override)
    for name, path in paths.items():
        ok(f"{name}: {path}", use_emoji=state.use_emoji)


def clean_command(ctx: typer.Context) -> None:
    """Remove downloaded tools and merged configuration files."""

    state = get_state(ctx)
    cache_dir = state.layout.cache_dir
    if cache_dir.exists():
        shutil.rmtree(cache_dir)
        state.info(f"Removed `{cache_dir}`")
    else:
        state.info(f"Nothing to remove at `{cache_dir}`")


def register(app: typer.Typer) -> None:
    """Register the tool cache commands with ``app``."""

    app.add_typer(tool_app, name="tool")
    app.command("clean")(clean_command)


__all__ = ["register"]
