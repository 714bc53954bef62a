# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-platform file names and download URL patterns of the provisioned tools.

The editor runs inside the (Linux) container, so its variant follows the CPU
architecture only; the devcontainer CLI and the port forwarder run on the host
and follow both operating system and architecture.
"""

from __future__ import annotations

import platform
from dataclasses import dataclass
from typing import Final

from ..errors import DevcontainerVimError

VIM: Final[str] = "vim"
DEVCONTAINER: Final[str] = "devcontainer"
PORT_FORWARDER: Final[str] = "port-forwarder"

TOOL_NAMES: Final[tuple[str, ...]] = (VIM, DEVCONTAINER, PORT_FORWARDER)

ARCH_ALIASES: Final[dict[str, str]] = {
    "amd64": "x86_64",
    "x86_64": "x86_64",
    "x64": "x86_64",
    "arm64": "aarch64",
    "aarch64": "aarch64",
}


@dataclass(frozen=True, slots=True)
class ToolVariant:
    """Cache file name, release coordinates and URL pattern of one platform build."""

    file_name: str
    owner: str
    repo: str
    url_pattern: str


class UnsupportedPlatformError(DevcontainerVimError):
    """Raised when no build of a tool exists for the host platform."""


# Keys are ``(system, machine)``; ``"*"`` matches any operating system.
VARIANTS: Final[dict[str, dict[tuple[str, str], ToolVariant]]] = {
    VIM: {
        ("*", "x86_64"): ToolVariant(
            "vim",
            "vim",
            "vim-appimage",
            "https://github.com/vim/vim-appimage/releases/download/{{ .TagName }}/Vim-{{ .TagName }}.glibc2.29-x86_64.AppImage",
        ),
        ("*", "aarch64"): ToolVariant(
            "vim-static.tar.gz",
            "mikoto2000",
            "vim-static",
            "https://github.com/mikoto2000/vim-static/releases/download/{{ .TagName }}/vim-{{ .TagName }}-aarch64.tar.gz",
        ),
    },
    DEVCONTAINER: {
        ("linux", "x86_64"): ToolVariant(
            "devcontainer",
            "mikoto2000",
            "devcontainers-cli",
            "https://github.com/mikoto2000/devcontainers-cli/releases/download/{{ .TagName }}/devcontainer-linux-x64",
        ),
        ("linux", "aarch64"): ToolVariant(
            "devcontainer",
            "mikoto2000",
            "devcontainers-cli",
            "https://github.com/mikoto2000/devcontainers-cli/releases/download/{{ .TagName }}/devcontainer-linux-arm64",
        ),
        ("darwin", "x86_64"): ToolVariant(
            "devcontainer",
            "mikoto2000",
            "devcontainers-cli",
            "https://github.com/mikoto2000/devcontainers-cli/releases/download/{{ .TagName }}/devcontainer-macos-x64",
        ),
        ("darwin", "aarch64"): ToolVariant(
            "devcontainer",
            "mikoto2000",
            "devcontainers-cli",
            "https://github.com/mikoto2000/devcontainers-cli/releases/download/{{ .TagName }}/devcontainer-macos-arm64",
        ),
        ("windows", "x86_64"): ToolVariant(
            "devcontainer.exe",
            "mikoto2000",
            "devcontainers-cli",
            "https://github.com/mikoto2000/devcontainers-cli/releases/download/{{ .TagName }}/devcontainer-windows-x64.exe",
        ),
    },
    PORT_FORWARDER: {
        ("linux", "x86_64"): ToolVariant(
            "port-forwarder",
            "mikoto2000",
            "port-forwarder",
            "https://github.com/mikoto2000/port-forwarder/releases/download/{{ .TagName }}/port-forwarder-linux-amd64",
        ),
        ("linux", "aarch64"): ToolVariant(
            "port-forwarder",
            "mikoto2000",
            "port-forwarder",
            "https://github.com/mikoto2000/port-forwarder/releases/download/{{ .TagName }}/port-forwarder-linux-arm64",
        ),
        ("darwin", "x86_64"): ToolVariant(
            "port-forwarder",
            "mikoto2000",
            "port-forwarder",
            "https://github.com/mikoto2000/port-forwarder/releases/download/{{ .TagName }}/port-forwarder-darwin-amd64",
        ),
        ("darwin", "aarch64"): ToolVariant(
            "port-forwarder",
            "mikoto2000",
            "port-forwarder",
            "https://github.com/mikoto2000/port-forwarder/releases/download/{{ .TagName }}/port-forwarder-darwin-arm64",
        ),
        ("windows", "x86_64"): ToolVariant(
            "port-forwarder.exe",
            "mikoto2000",
            "port-forwarder",
            "https://github.com/mikoto2000/port-forwarder/releases/download/{{ .TagName }}/port-forwarder-windows-amd64.exe",
        ),
    },
}


def host_platform(system: str | None = None, machine: str | None = None) -> tuple[str, str]:
    """Return the normalised ``(system, machine)`` pair for the host."""

    raw_system = (system or platform.system()).lower()
    raw_machine = (machine or platform.machine()).lower()
    return raw_system, ARCH_ALIASES.get(raw_machine, raw_machine)


def select_variant(tool: str, system: str, machine: str) -> ToolVariant:
    """Return the build of *tool* matching the normalised host platform.

    Raises:
        UnsupportedPlatformError: If *tool* has no build for the platform.
    """

    variants = VARIANTS[tool]
    variant = variants.get((system, machine)) or variants.get(("*", machine))
    if variant is None:
        raise UnsupportedPlatformError(f"{tool} is not available for {system}-{machine}")
    return variant


__all__ = [
    "DEVCONTAINER",
    "PORT_FORWARDER",
    "TOOL_NAMES",
    "ToolVariant",
    "UnsupportedPlatformError",
    "VARIANTS",
    "VIM",
    "host_platform",
    "select_variant",
]
