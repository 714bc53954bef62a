# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import io
from collections.abc import Callable
from pathlib import Path

import pytest


class FakeResponse(io.BytesIO):
    """In-memory stand-in for the object returned by ``urllib.request.urlopen``."""

    def __init__(self, body: bytes, status: int = 200) -> None:
        super().__init__(body)
        self.status = status


@pytest.fixture
def fake_response() -> Callable[..., FakeResponse]:
    return FakeResponse


@pytest.fixture
def isolated_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> tuple[Path, Path]:
    """Point the application cache and config roots at ``tmp_path``."""

    cache_dir = tmp_path / "cache"
    config_dir = tmp_path / "config"
    monkeypatch.setenv("DEVCONTAINER_VIM_CACHE_DIR", str(cache_dir))
    monkeypatch.setenv("DEVCONTAINER_VIM_CONFIG_DIR", str(config_dir))
    return cache_dir, config_dir
