# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolution of the effective ``devcontainer.json`` through ``read-configuration``."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import ReadConfigurationError
from ..process_utils import SubprocessExecutionError, run_command

LOGGER = logging.getLogger(__name__)


class ConfigFilePath(BaseModel):
    """URI-like record naming the configuration file on disk."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    fs_path: str = Field(alias="fsPath", min_length=1)


class Configuration(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    config_file_path: ConfigFilePath = Field(alias="configFilePath")


class ReadConfigurationResult(BaseModel):
    """Output schema of ``devcontainer read-configuration``.

    Example::

        {
          "configuration": {
            "name": "development environment",
            "dockerComposeFile": ["../docker-compose.yaml"],
            "service": "app",
            "workspaceFolder": "/work",
            "configFilePath": {
              "$mid": 1,
              "fsPath": "/home/user/project/.devcontainer/devcontainer.json",
              "path": "/home/user/project/.devcontainer/devcontainer.json",
              "scheme": "vscode-fileHost"
            }
          },
          "workspace": {"workspaceFolder": "/work"}
        }

    Only ``configuration.configFilePath.fsPath`` is interpreted; every other
    field is retained untouched.
    """

    model_config = ConfigDict(extra="allow")

    configuration: Configuration


def get_config_file_path(output: str | bytes) -> Path:
    """Extract ``configuration.configFilePath.fsPath`` from command output.

    Raises:
        ReadConfigurationError: If *output* is not JSON or lacks the field.
    """

    try:
        result = ReadConfigurationResult.model_validate_json(output)
    except ValidationError as exc:
        LOGGER.debug("read-configuration output rejected: %s", exc)
        raise ReadConfigurationError(
            "Failed to parse the output of `devcontainer read-configuration`."
        ) from exc
    return Path(result.configuration.config_file_path.fs_path)


def resolve_config_file_path(devcontainer_path: Path, workspace_folder: str | Path) -> Path:
    """Ask the devcontainer CLI which configuration file applies to *workspace_folder*.

    Args:
        devcontainer_path: Path of the devcontainer CLI binary.
        workspace_folder: Project directory opened in the container.

    Returns:
        Path: Absolute path of the effective ``devcontainer.json``.

    Raises:
        ReadConfigurationError: If the command fails or its output is unusable.
    """

    try:
        completed = run_command(
            [str(devcontainer_path), "read-configuration", "--workspace-folder", str(workspace_folder)],
            capture_output=True,
        )
    except SubprocessExecutionError as exc:
        raise ReadConfigurationError(
            f"`devcontainer read-configuration` exited with status {exc.returncode}."
        ) from exc
    except OSError as exc:
        raise ReadConfigurationError(f"Unable to run {devcontainer_path}: {exc}.") from exc
    return get_config_file_path(completed.stdout)


__all__ = [
    "ConfigFilePath",
    "Configuration",
    "ReadConfigurationResult",
    "get_config_file_path",
    "resolve_config_file_path",
]
