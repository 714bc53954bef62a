# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Immutable registry of provisionable tools and the tool sets each command needs."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from ..cache import memoize
from ..errors import DevcontainerVimError, ToolInstallError
from . import provisioner
from .models import Installer, TagLookup, ToolDescriptor, ToolPaths
from .platforms import (
    DEVCONTAINER,
    TOOL_NAMES,
    VIM,
    UnsupportedPlatformError,
    host_platform,
    select_variant,
)
from .releases import ReleaseResolver

LOGGER = logging.getLogger(__name__)

RUN_TOOLS: tuple[str, ...] = (VIM,)
START_TOOLS: tuple[str, ...] = (VIM, DEVCONTAINER)
DOWN_TOOLS: tuple[str, ...] = (DEVCONTAINER,)
DEVCONTAINER_TOOLS: tuple[str, ...] = (DEVCONTAINER,)


@dataclass(frozen=True, slots=True)
class ToolRegistry:
    """Read-only lookup of tool descriptors keyed by tool name.

    Tools without a build for the host platform are listed in ``unsupported``
    and only fail when a command asks for them.
    """

    descriptors: Mapping[str, ToolDescriptor]
    unsupported: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "descriptors", MappingProxyType(dict(self.descriptors)))
        object.__setattr__(self, "unsupported", MappingProxyType(dict(self.unsupported)))

    def __getitem__(self, name: str) -> ToolDescriptor:
        if name in self.unsupported:
            raise UnsupportedPlatformError(self.unsupported[name])
        try:
            return self.descriptors[name]
        except KeyError:
            known = ", ".join(self.descriptors)
            raise KeyError(f"Unknown tool '{name}'. Known tools: {known}") from None

    def __iter__(self) -> Iterator[str]:
        return iter(self.descriptors)

    def __len__(self) -> int:
        return len(self.descriptors)

    @property
    def names(self) -> tuple[str, ...]:
        """Tools with a build for the host platform."""

        return tuple(self.descriptors)


def build_registry(
    resolver: ReleaseResolver | None = None,
    *,
    system: str | None = None,
    machine: str | None = None,
    lookup_tag: TagLookup | None = None,
    installer: Installer | None = None,
) -> ToolRegistry:
    """Construct the registry for the host platform.

    Tag lookups are memoized for the lifetime of the returned registry, so a
    tool resolved twice in one invocation costs a single request.

    Args:
        resolver: Release index client used when ``lookup_tag`` is not given.
        system: Operating system override, defaults to the host.
        machine: CPU architecture override, defaults to the host.
        lookup_tag: ``(owner, repo) -> tag`` function replacing the resolver.
        installer: ``(url, path) -> path`` strategy, defaults to a plain download.

    Returns:
        ToolRegistry: Descriptors for every tool built for the platform; the
            remaining tools raise :class:`UnsupportedPlatformError` on lookup.
    """

    host_system, host_machine = host_platform(system, machine)
    if lookup_tag is None:
        lookup_tag = (resolver or ReleaseResolver()).latest_tag
    cached_lookup = memoize()(lookup_tag)
    install_strategy = installer or provisioner.make_simple_installer()

    descriptors: dict[str, ToolDescriptor] = {}
    unsupported: dict[str, str] = {}
    for name in TOOL_NAMES:
        try:
            variant = select_variant(name, host_system, host_machine)
        except UnsupportedPlatformError as exc:
            LOGGER.debug("%s", exc)
            unsupported[name] = str(exc)
            continue
        descriptors[name] = ToolDescriptor(
            name=name,
            file_name=variant.file_name,
            owner=variant.owner,
            repo=variant.repo,
            url_pattern=variant.url_pattern,
            lookup_tag=cached_lookup,
            installer=install_strategy,
        )
    return ToolRegistry(descriptors, unsupported)


def install_tools(
    registry: ToolRegistry,
    install_dir: Path,
    names: Iterable[str],
    *,
    override: bool = False,
) -> ToolPaths:
    """Install *names* in order, stopping at the first failure.

    Raises:
        ToolInstallError: Wraps the first failure together with the paths of
            the tools installed before it.
    """

    paths: dict[str, Path] = {}
    for name in names:
        try:
            paths[name] = provisioner.install(registry[name], install_dir, override)
        except DevcontainerVimError as exc:
            LOGGER.debug("installing %s failed: %s", name, exc)
            raise ToolInstallError(name, paths, exc) from exc
    return paths


def install_run_tools(registry: ToolRegistry, install_dir: Path) -> ToolPaths:
    """Tools needed to run a bare container with the editor."""

    return install_tools(registry, install_dir, RUN_TOOLS)


def install_start_tools(registry: ToolRegistry, install_dir: Path) -> ToolPaths:
    """Tools needed to start a devcontainer with the editor."""

    return install_tools(registry, install_dir, START_TOOLS)


def install_down_tools(registry: ToolRegistry, install_dir: Path) -> ToolPaths:
    """Tools needed to tear a devcontainer down."""

    return install_tools(registry, install_dir, DOWN_TOOLS)


def install_devcontainer_tools(registry: ToolRegistry, install_dir: Path) -> ToolPaths:
    return install_tools(registry, install_dir, DEVCONTAINER_TOOLS)


__all__ = [
    "DEVCONTAINER_TOOLS",
    "DOWN_TOOLS",
    "RUN_TOOLS",
    "START_TOOLS",
    "ToolRegistry",
    "build_registry",
    "install_devcontainer_tools",
    "install_down_tools",
    "install_run_tools",
    "install_start_tools",
    "install_tools",
]
