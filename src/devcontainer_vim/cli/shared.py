# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (state, errors, registry wiring)."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Final

import typer

from ..errors import DevcontainerVimError, ToolInstallError
from ..logging import fail, info, warn
from ..settings import AppLayout, AppSettings
from ..tools import ReleaseResolver, ToolRegistry, build_registry
from ..tools.provisioner import make_simple_installer

PASSTHROUGH_SETTINGS: Final[dict[str, bool]] = {
    "allow_extra_args": True,
    "ignore_unknown_options": True,
    "help_option_names": [],
}


@dataclass(slots=True)
class CLIState:
    """Per-invocation objects shared by every command through ``ctx.obj``."""

    settings: AppSettings
    layout: AppLayout
    use_emoji: bool

    def info(self, message: str) -> None:
        info(message, use_emoji=self.use_emoji)

    def warn(self, message: str) -> None:
        warn(message, use_emoji=self.use_emoji)

    def fail(self, message: str) -> None:
        fail(message, use_emoji=self.use_emoji)


def get_state(ctx: typer.Context) -> CLIState:
    """Return the :class:`CLIState` installed by the application callback."""

    state = ctx.find_root().obj
    if not isinstance(state, CLIState):  # pragma: no cover - guarded by the callback
        raise RuntimeError("CLI state has not been initialised")
    return state


def build_tool_registry(settings: AppSettings) -> ToolRegistry:
    """Build the host tool registry using the transport settings of *settings*."""

    resolver = ReleaseResolver(api_url=settings.github_api_url, timeout=settings.http_timeout)
    return build_registry(resolver, installer=make_simple_installer(timeout=settings.http_timeout))


@contextmanager
def exit_on_error(state: CLIState) -> Iterator[None]:
    """Report domain failures on the console and exit with status 1."""

    try:
        yield
    except ToolInstallError as exc:
        for name, path in exc.partial.items():
            state.info(f"{name} is available at {path}")
        state.fail(f"Installation of {exc.tool} failed: {exc.cause}")
        raise typer.Exit(code=1) from exc
    except DevcontainerVimError as exc:
        state.fail(str(exc))
        raise typer.Exit(code=1) from exc


__all__ = ["CLIState", "PASSTHROUGH_SETTINGS", "build_tool_registry", "exit_on_error", "get_state"]
