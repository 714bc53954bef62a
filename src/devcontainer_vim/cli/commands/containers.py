# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Commands that launch, start and tear down containers."""

from __future__ import annotations

import typer

from ... import launch
from ...devcontainer import create_config_file, normalize_workspace_folder, remove_config_slot
from ...errors import LaunchError
from ...process_utils import is_command_available
from ...tools import DEVCONTAINER, VIM, install_devcontainer_tools, install_down_tools, install_run_tools, install_start_tools
from ..shared import PASSTHROUGH_SETTINGS, build_tool_registry, exit_on_error, get_state


def run_command(ctx: typer.Context) -> None:
    """Run a container with `docker run` and open Vim in it."""

    state = get_state(ctx)
    with exit_on_error(state):
        registry = build_tool_registry(state.settings)
        paths = install_run_tools(registry, state.layout.bin_dir)
        if not is_command_available(launch.DOCKER):
            raise LaunchError("docker not found.")
        code = launch.run_container(ctx.args, paths[VIM])
    raise typer.Exit(code=code)


def start_command(ctx: typer.Context) -> None:
    """Run `devcontainer up` and `devcontainer exec` with Vim."""

    state = get_state(ctx)
    with exit_on_error(state):
        _, workspace_arg = launch.split_workspace_folder(ctx.args)
        workspace_folder = normalize_workspace_folder(workspace_arg)
        registry = build_tool_registry(state.settings)
        paths = install_start_tools(registry, state.layout.bin_dir)
        config_file = create_config_file(paths[DEVCONTAINER], workspace_folder, state.layout.app_config_dir)
        state.info(f"Use configuration file: `{config_file}`")
        code = launch.start_devcontainer(ctx.args, paths[DEVCONTAINER], paths[VIM], config_file)
    raise typer.Exit(code=code)


def down_command(ctx: typer.Context) -> None:
    """Stop and remove the devcontainer of a workspace."""

    state = get_state(ctx)
    with exit_on_error(state):
        _, workspace_arg = launch.split_workspace_folder(ctx.args)
        workspace_folder = normalize_workspace_folder(workspace_arg)
        registry = build_tool_registry(state.settings)
        paths = install_down_tools(registry, state.layout.bin_dir)
        launch.down_devcontainer(ctx.args, paths[DEVCONTAINER])
        if remove_config_slot(state.layout.app_config_dir, workspace_folder):
            state.info(f"Removed configuration for `{workspace_folder}`")
        else:
            state.warn(f"No stored configuration for `{workspace_folder}`")


def devcontainer_command(ctx: typer.Context) -> None:
    """Run the devcontainer CLI with the given arguments."""

    state = get_state(ctx)
    with exit_on_error(state):
        registry = build_tool_registry(state.settings)
        paths = install_devcontainer_tools(registry, state.layout.bin_dir)
        code = launch.passthrough_devcontainer(ctx.args, paths[DEVCONTAINER])
    raise typer.Exit(code=code)


def register(app: typer.Typer) -> None:
    """Register the container commands with ``app``."""

    app.command("run", context_settings=PASSTHROUGH_SETTINGS)(run_command)
    app.command("start", context_settings=PASSTHROUGH_SETTINGS)(start_command)
    app.command("down", context_settings=PASSTHROUGH_SETTINGS)(down_command)
    app.command("devcontainer", context_settings=PASSTHROUGH_SETTINGS)(devcontainer_command)


__all__ = ["register"]
