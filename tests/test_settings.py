# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for settings resolution and the directory layout."""

from __future__ import annotations

from pathlib import Path

import pytest

from devcontainer_vim.settings import (
    APP_NAME,
    AppLayout,
    SettingsError,
    load_settings,
    user_cache_dir,
    user_config_dir,
)


def test_load_settings_honours_overrides(tmp_path: Path) -> None:
    settings = load_settings(
        {
            "DEVCONTAINER_VIM_CACHE_DIR": str(tmp_path / "cache"),
            "DEVCONTAINER_VIM_CONFIG_DIR": str(tmp_path / "config"),
            "DEVCONTAINER_VIM_GITHUB_API": "https://ghe.example.com/api/v3/",
            "DEVCONTAINER_VIM_HTTP_TIMEOUT": "5",
        }
    )

    assert settings.cache_dir == tmp_path / "cache"
    assert settings.config_dir == tmp_path / "config"
    assert settings.github_api_url == "https://ghe.example.com/api/v3"
    assert settings.http_timeout == 5.0


def test_load_settings_defaults_to_xdg_directories(tmp_path: Path) -> None:
    env = {"XDG_CACHE_HOME": str(tmp_path / "xc"), "XDG_CONFIG_HOME": str(tmp_path / "xf")}

    assert user_cache_dir(env, system="Linux") == tmp_path / "xc"
    assert user_config_dir(env, system="Linux") == tmp_path / "xf"
    assert user_cache_dir({}, system="Linux") == Path.home() / ".cache"
    assert user_config_dir({"APPDATA": str(tmp_path)}, system="Windows") == tmp_path


@pytest.mark.parametrize("timeout", ["0", "-1", "soon"])
def test_load_settings_rejects_invalid_timeout(tmp_path: Path, timeout: str) -> None:
    with pytest.raises(SettingsError):
        load_settings({"DEVCONTAINER_VIM_CACHE_DIR": str(tmp_path), "DEVCONTAINER_VIM_HTTP_TIMEOUT": timeout})


def test_layout_ensure_creates_directories(tmp_path: Path) -> None:
    settings = load_settings(
        {"DEVCONTAINER_VIM_CACHE_DIR": str(tmp_path / "cache"), "DEVCONTAINER_VIM_CONFIG_DIR": str(tmp_path / "cfg")}
    )

    layout = AppLayout.from_settings(settings).ensure()

    assert layout.bin_dir == tmp_path / "cache" / "bin"
    assert layout.app_config_dir == tmp_path / "cache" / "config"
    assert all(directory.is_dir() for directory in layout.directories())
    assert layout.ensure() == layout


def test_default_directories_are_named_after_the_application(tmp_path: Path) -> None:
    settings = load_settings({"XDG_CACHE_HOME": str(tmp_path / "xc"), "XDG_CONFIG_HOME": str(tmp_path / "xf")})

    assert settings.cache_dir.name == APP_NAME
    assert settings.config_dir.name == APP_NAME
