# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Container launch steps driving ``docker`` and the devcontainer CLI."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import LaunchError
from .process_utils import SubprocessExecutionError, run_command

LOGGER = logging.getLogger(__name__)

DOCKER: Final[str] = "docker"
VIM_FLAG_COMMAND: Final[str] = "let g:devcontainer_vim = v:true"
TARBALL_SUFFIX: Final[str] = ".tar.gz"


class UpResult(BaseModel):
    """Subset of the JSON document printed by ``devcontainer up``."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    outcome: str
    container_id: str = Field(alias="containerId", min_length=1)


def split_workspace_folder(args: Sequence[str]) -> tuple[list[str], str]:
    """Split CLI arguments into leading options and the trailing workspace folder."""

    if not args:
        raise LaunchError("A workspace folder must be given as the last argument.")
    return list(args[:-1]), args[-1]


def vim_command(vim_file_name: str) -> list[str]:
    """Return the in-container command that starts the editor copied to ``/``."""

    if vim_file_name.endswith(TARBALL_SUFFIX):
        script = (
            f"cd ~; tar zxf /{vim_file_name} > /dev/null; rm -rf ~/vim-static; "
            f"mv $(ls -d ~/vim-*-aarch64) ~/vim-static; "
            f'~/vim-static/AppRun --cmd "{VIM_FLAG_COMMAND}"'
        )
        return ["sh", "-c", script]
    return [f"/{vim_file_name}", "--appimage-extract-and-run", "--cmd", VIM_FLAG_COMMAND]


def _checked(args: Sequence[str], *, capture_output: bool = False) -> str:
    try:
        completed = run_command(list(args), capture_output=capture_output)
    except SubprocessExecutionError as exc:
        raise LaunchError(str(exc)) from exc
    except OSError as exc:
        raise LaunchError(f"Unable to run {args[0]}: {exc}") from exc
    return completed.stdout.strip() if capture_output and completed.stdout else ""


def _interactive(args: Sequence[str]) -> int:
    try:
        return run_command(list(args), check=False).returncode
    except OSError as exc:
        raise LaunchError(f"Unable to run {args[0]}: {exc}") from exc


def copy_into_container(container_id: str, source: Path) -> None:
    _checked([DOCKER, "cp", str(source), f"{container_id}:/{source.name}"])


def stop_container(container_id: str) -> None:
    """Stop *container_id*, logging rather than raising on failure."""

    try:
        completed = run_command([DOCKER, "stop", container_id], check=False, capture_output=True)
    except OSError as exc:
        LOGGER.warning("Unable to stop container %s: %s", container_id, exc)
        return
    if completed.returncode != 0:
        LOGGER.warning(
            "`docker stop %s` exited with status %s: %s",
            container_id,
            completed.returncode,
            (completed.stderr or "").strip() or "<none>",
        )


def run_container(docker_args: Sequence[str], vim_path: Path) -> int:
    """Start a container with ``docker run``, open the editor in it, then stop it.

    Returns:
        int: Exit status of the editor session.
    """

    container_id = _checked([DOCKER, "run", "-d", *docker_args], capture_output=True)
    if not container_id:
        raise LaunchError("`docker run` did not report a container id.")
    LOGGER.debug("started container id=%s", container_id)
    try:
        copy_into_container(container_id, vim_path)
        return _interactive([DOCKER, "exec", "-it", container_id, *vim_command(vim_path.name)])
    finally:
        stop_container(container_id)


def parse_up_result(output: str) -> UpResult:
    """Parse the last JSON line printed by ``devcontainer up``."""

    lines = [line for line in output.splitlines() if line.strip()]
    if not lines:
        raise LaunchError("`devcontainer up` produced no output.")
    try:
        result = UpResult.model_validate_json(lines[-1])
    except ValidationError as exc:
        raise LaunchError("Unable to parse the output of `devcontainer up`.") from exc
    if result.outcome != "success":
        raise LaunchError(f"`devcontainer up` finished with outcome {result.outcome!r}.")
    return result


def start_devcontainer(
    args: Sequence[str],
    devcontainer_path: Path,
    vim_path: Path,
    config_file_path: Path,
) -> int:
    """Bring the devcontainer up with the merged configuration and open the editor in it.

    Args:
        args: devcontainer options followed by the workspace folder.
        devcontainer_path: Provisioned devcontainer CLI.
        vim_path: Provisioned editor binary.
        config_file_path: Merged configuration from the materializer.

    Returns:
        int: Exit status of the editor session.
    """

    options, workspace_folder = split_workspace_folder(args)
    output = _checked(
        [
            str(devcontainer_path),
            "up",
            "--override-config",
            str(config_file_path),
            *options,
            "--workspace-folder",
            workspace_folder,
        ],
        capture_output=True,
    )
    result = parse_up_result(output)
    copy_into_container(result.container_id, vim_path)
    return _interactive(
        [
            str(devcontainer_path),
            "exec",
            "--container-id",
            result.container_id,
            "--workspace-folder",
            workspace_folder,
            *vim_command(vim_path.name),
        ]
    )


def down_devcontainer(args: Sequence[str], devcontainer_path: Path) -> None:
    """Stop and remove the devcontainer of the trailing workspace folder."""

    options, workspace_folder = split_workspace_folder(args)
    _checked([str(devcontainer_path), "down", *options, "--workspace-folder", workspace_folder])


def passthrough_devcontainer(args: Sequence[str], devcontainer_path: Path) -> int:
    """Run the devcontainer CLI with *args* unchanged."""

    return _interactive([str(devcontainer_path), *args])


__all__ = [
    "UpResult",
    "down_devcontainer",
    "parse_up_result",
    "passthrough_devcontainer",
    "run_container",
    "split_workspace_folder",
    "start_devcontainer",
    "stop_container",
    "vim_command",
]
