# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-workspace merged configuration files handed to the devcontainer CLI.

Each workspace owns one slot directory under the application config store,
named after the MD5 digest of the absolute workspace folder path. The slot
holds a copy of the effective ``devcontainer.json`` with the top-level keys
of the sibling ``*.vim.json`` file laid over it. Both files may use the
comments and trailing commas of the devcontainer JSON dialect; merged output
is strict JSON.
"""

from __future__ import annotations

import hashlib
import json
import logging
import shutil
from pathlib import Path
from typing import Any, Final

import json5

from ..errors import MergeError
from .configuration import resolve_config_file_path

LOGGER = logging.getLogger(__name__)

ADDITIONAL_CONFIG_SUFFIX: Final[str] = ".vim.json"


def normalize_workspace_folder(workspace_folder: str | Path) -> Path:
    """Return the absolute, symlink-free form of *workspace_folder*."""

    return Path(workspace_folder).expanduser().resolve()


def workspace_slot(workspace_folder: str | Path) -> str:
    """Return the deterministic slot name of *workspace_folder*.

    Relative paths resolve against the current directory, so ``.`` in two
    projects names two slots while ``/p`` and ``/p/`` name one.
    """

    # Bandit: MD5 names a cache directory; it is not a security boundary.
    return hashlib.md5(str(normalize_workspace_folder(workspace_folder)).encode("utf-8")).hexdigest()  # nosec B324


def config_slot_dir(app_config_dir: Path, workspace_folder: str | Path) -> Path:
    return app_config_dir / workspace_slot(workspace_folder)


def additional_config_path(config_file_path: Path) -> Path:
    """Return the ``*.vim.json`` sibling of *config_file_path*."""

    return config_file_path.with_name(config_file_path.stem + ADDITIONAL_CONFIG_SUFFIX)


def _load_object(path: Path, raw: bytes) -> dict[str, Any]:
    try:
        data = json5.loads(raw.decode("utf-8-sig"))
    except ValueError as exc:
        raise MergeError(path, f"invalid JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise MergeError(path, "top-level value must be a JSON object")
    return data


def merge_configs(base: dict[str, Any], additional: dict[str, Any]) -> dict[str, Any]:
    """Lay the top-level keys of *additional* over *base* (no deep merge)."""

    return {**base, **additional}


def materialize(
    app_config_dir: Path,
    workspace_folder: str | Path,
    config_file_path: Path,
    additional_config_file_path: Path,
) -> Path:
    """Write the merged configuration for *workspace_folder* and return its path.

    Re-running with identical inputs rewrites identical bytes to the same path.

    Args:
        app_config_dir: Root of the per-workspace configuration slots.
        workspace_folder: Workspace the configuration belongs to.
        config_file_path: Effective ``devcontainer.json``; must exist.
        additional_config_file_path: Optional overrides; ignored when absent.

    Returns:
        Path: Absolute path of the written file.

    Raises:
        OSError: If the devcontainer configuration cannot be read or the slot written.
        MergeError: If a file taking part in a merge is not a JSON object.
    """

    target_dir = config_slot_dir(app_config_dir, workspace_folder)
    target = (target_dir / config_file_path.name).absolute()
    raw = config_file_path.read_bytes()

    if additional_config_file_path.is_file():
        LOGGER.debug("merging %s over %s", additional_config_file_path, config_file_path)
        base = _load_object(config_file_path, raw)
        additional = _load_object(additional_config_file_path, additional_config_file_path.read_bytes())
        merged = merge_configs(base, additional)
        content = (json.dumps(merged, indent=2, ensure_ascii=False) + "\n").encode("utf-8")
    else:
        content = raw

    target_dir.mkdir(parents=True, exist_ok=True)
    target.write_bytes(content)
    return target


def create_config_file(devcontainer_path: Path, workspace_folder: str | Path, app_config_dir: Path) -> Path:
    """Resolve the workspace configuration and materialize it with its ``.vim.json`` overrides."""

    config_file_path = resolve_config_file_path(devcontainer_path, workspace_folder)
    return materialize(
        app_config_dir,
        workspace_folder,
        config_file_path,
        additional_config_path(config_file_path),
    )


def remove_config_slot(app_config_dir: Path, workspace_folder: str | Path) -> bool:
    """Delete the slot directory of *workspace_folder*; return whether it existed."""

    slot = config_slot_dir(app_config_dir, workspace_folder)
    if not slot.exists():
        return False
    shutil.rmtree(slot)
    return True


__all__ = [
    "ADDITIONAL_CONFIG_SUFFIX",
    "additional_config_path",
    "config_slot_dir",
    "create_config_file",
    "materialize",
    "merge_configs",
    "normalize_workspace_folder",
    "remove_config_slot",
    "workspace_slot",
]
