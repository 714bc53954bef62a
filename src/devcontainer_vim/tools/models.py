# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data structures describing externally sourced executables."""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path

from .templates import expand_tag

TagLookup = Callable[[str, str], str]
Installer = Callable[[str, Path], Path]


@dataclass(frozen=True, slots=True)
class ToolDescriptor:
    """Static metadata plus behaviour describing one downloadable executable.

    ``file_name`` is stable across versions, so the cache holds one copy per
    tool and upgrading overwrites it in place.
    """

    name: str
    file_name: str
    owner: str
    repo: str
    url_pattern: str
    lookup_tag: TagLookup
    installer: Installer

    def resolve_download_url(self) -> str:
        """Return the download URL of the latest upstream release."""

        return expand_tag(self.url_pattern, self.lookup_tag(self.owner, self.repo))

    def install(self, url: str, dest_path: Path) -> Path:
        return self.installer(url, dest_path)


@dataclass(frozen=True, slots=True)
class CachedBinary:
    """Snapshot of a tool's cache slot on disk."""

    path: Path
    exists: bool
    executable: bool

    @classmethod
    def inspect(cls, path: Path) -> CachedBinary:
        exists = path.is_file()
        return cls(path=path, exists=exists, executable=exists and os.access(path, os.X_OK))


ToolPaths = Mapping[str, Path]


__all__ = ["CachedBinary", "Installer", "TagLookup", "ToolDescriptor", "ToolPaths"]
