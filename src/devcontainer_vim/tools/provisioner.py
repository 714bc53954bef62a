# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Download, cache and mark executable the binaries described by tool descriptors."""

from __future__ import annotations

import logging
import os
import shutil
import stat
import urllib.error
import urllib.request
from functools import partial
from pathlib import Path

from ..errors import DownloadError, PermissionGrantError
from ..settings import DEFAULT_HTTP_TIMEOUT
from .models import CachedBinary, Installer, ToolDescriptor
from .releases import Opener

LOGGER = logging.getLogger(__name__)

_EXECUTE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH
_SUPPORTS_CHMOD = os.name != "nt"


def install(descriptor: ToolDescriptor, install_dir: Path, override: bool = False) -> Path:
    """Return the cached binary for *descriptor*, downloading it when required.

    An existing file is reused as-is unless ``override`` is set; its executable
    bit is trusted to persist from the install that created it.

    Args:
        descriptor: Tool to provision.
        install_dir: Cache directory holding one file per tool.
        override: Re-download even when a cached copy exists.

    Returns:
        Path: Location of the executable.

    Raises:
        ReleaseLookupError: If the latest upstream tag cannot be resolved.
        TemplateError: If the descriptor's URL pattern is malformed.
        DownloadError: If fetching or writing the binary fails.
        PermissionGrantError: If the executable bit cannot be set.
    """

    cached = CachedBinary.inspect(install_dir / descriptor.file_name)
    if cached.exists and not override:
        LOGGER.debug("%s already exists (executable=%s), using cached copy", cached.path, cached.executable)
        return cached.path
    return descriptor.install(descriptor.resolve_download_url(), cached.path)


def download(url: str, dest_path: Path, *, opener: Opener | None = None, timeout: float = DEFAULT_HTTP_TIMEOUT) -> None:
    """Stream *url* into *dest_path*, replacing any existing file."""

    opener = opener or urllib.request.urlopen
    LOGGER.info("Downloading %s from %s", dest_path.name, url)
    try:
        with opener(url, timeout=timeout) as response:
            status = getattr(response, "status", 200)
            if not 200 <= status < 300:
                raise DownloadError(url, dest_path, f"HTTP {status}")
            with dest_path.open("wb") as handle:
                shutil.copyfileobj(response, handle)
    except urllib.error.HTTPError as exc:
        raise DownloadError(url, dest_path, f"HTTP {exc.code}") from exc
    except (urllib.error.URLError, OSError) as exc:
        raise DownloadError(url, dest_path, str(exc)) from exc


def add_execute_permission(path: Path) -> None:
    """Grant execute permission on *path*; a no-op where chmod has no meaning."""

    if not _SUPPORTS_CHMOD:
        return
    try:
        path.chmod(path.stat().st_mode | _EXECUTE_BITS)
    except OSError as exc:
        raise PermissionGrantError(path, str(exc)) from exc


def simple_install(
    url: str,
    file_path: Path,
    *,
    opener: Opener | None = None,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
) -> Path:
    """Install a tool that is a single downloadable executable."""

    download(url, file_path, opener=opener, timeout=timeout)
    add_execute_permission(file_path)
    return file_path


def make_simple_installer(*, opener: Opener | None = None, timeout: float = DEFAULT_HTTP_TIMEOUT) -> Installer:
    """Bind transport settings into a ``(url, path) -> path`` installer."""

    return partial(simple_install, opener=opener, timeout=timeout)


__all__ = [
    "add_execute_permission",
    "download",
    "install",
    "make_simple_installer",
    "simple_install",
]
