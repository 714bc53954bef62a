# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Error taxonomy shared by tool provisioning and configuration helpers."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path


class DevcontainerVimError(RuntimeError):
    """Base class for failures the CLI reports and converts into a non-zero exit."""


class ReleaseLookupError(DevcontainerVimError):
    """Raised when the upstream release index cannot report a latest tag."""

    def __init__(self, owner: str, repo: str, reason: str) -> None:
        super().__init__(f"Unable to resolve the latest release of {owner}/{repo}: {reason}")
        self.owner = owner
        self.repo = repo
        self.reason = reason


class TemplateError(DevcontainerVimError):
    """Raised when a download URL pattern cannot be expanded."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid URL pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class DownloadError(DevcontainerVimError):
    """Raised when a binary download fails.

    ``path`` points at the destination, which may hold a partially written file.
    """

    def __init__(self, url: str, path: Path, reason: str) -> None:
        super().__init__(f"Failed to download {url} to {path}: {reason}")
        self.url = url
        self.path = path
        self.reason = reason


class PermissionGrantError(DevcontainerVimError):
    """Raised when the executable bit cannot be set on a downloaded binary."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to grant execute permission on {path}: {reason}")
        self.path = path
        self.reason = reason


READ_CONFIGURATION_REMEDIATION = (
    "Make sure a devcontainer.json exists for the workspace and that the docker engine is running."
)


class ReadConfigurationError(DevcontainerVimError):
    """Raised when ``devcontainer read-configuration`` yields no usable config path.

    The message is user-facing and always ends with a remediation hint.
    """

    def __init__(self, detail: str, *, remediation: str = READ_CONFIGURATION_REMEDIATION) -> None:
        super().__init__(f"{detail} {remediation}")
        self.detail = detail
        self.remediation = remediation


class MergeError(DevcontainerVimError):
    """Raised when a configuration file taking part in a merge is not a JSON object."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to merge configuration file {path}: {reason}")
        self.path = path
        self.reason = reason


class ToolInstallError(DevcontainerVimError):
    """Raised by composite installs; carries the tool that failed and the paths resolved before it."""

    def __init__(self, tool: str, partial: Mapping[str, Path], cause: Exception) -> None:
        super().__init__(f"Failed to install {tool}: {cause}")
        self.tool = tool
        self.partial = dict(partial)
        self.cause = cause


class LaunchError(DevcontainerVimError):
    """Raised when the container engine or devcontainer CLI rejects a launch step."""


__all__ = [
    "DevcontainerVimError",
    "DownloadError",
    "LaunchError",
    "MergeError",
    "PermissionGrantError",
    "READ_CONFIGURATION_REMEDIATION",
    "ReadConfigurationError",
    "ReleaseLookupError",
    "TemplateError",
    "ToolInstallError",
]
