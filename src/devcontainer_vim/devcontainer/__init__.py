# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Devcontainer configuration resolution and per-workspace materialization."""

from __future__ import annotations

from .configuration import ReadConfigurationResult, get_config_file_path, resolve_config_file_path
from .materializer import (
    additional_config_path,
    config_slot_dir,
    create_config_file,
    materialize,
    merge_configs,
    normalize_workspace_folder,
    remove_config_slot,
    workspace_slot,
)

__all__ = [
    "ReadConfigurationResult",
    "additional_config_path",
    "config_slot_dir",
    "create_config_file",
    "get_config_file_path",
    "materialize",
    "merge_configs",
    "normalize_workspace_folder",
    "remove_config_slot",
    "resolve_config_file_path",
    "workspace_slot",
]
