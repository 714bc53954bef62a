# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Public exports for tool provisioning."""

from __future__ import annotations

from .models import CachedBinary, ToolDescriptor
from .platforms import DEVCONTAINER, PORT_FORWARDER, TOOL_NAMES, VIM, UnsupportedPlatformError
from .provisioner import install
from .registry import (
    ToolRegistry,
    build_registry,
    install_devcontainer_tools,
    install_down_tools,
    install_run_tools,
    install_start_tools,
    install_tools,
)
from .releases import ReleaseResolver
from .templates import expand, expand_tag

__all__ = [
    "CachedBinary",
    "DEVCONTAINER",
    "PORT_FORWARDER",
    "ReleaseResolver",
    "TOOL_NAMES",
    "ToolDescriptor",
    "ToolRegistry",
    "UnsupportedPlatformError",
    "VIM",
    "build_registry",
    "expand",
    "expand_tag",
    "install",
    "install_devcontainer_tools",
    "install_down_tools",
    "install_run_tools",
    "install_start_tools",
    "install_tools",
]
