# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Runtime settings and the on-disk directory layout of the application."""

from __future__ import annotations

import os
import platform
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

APP_NAME: Final[str] = "devcontainer.vim"
BIN_SUBDIR: Final[str] = "bin"
CONFIG_SUBDIR: Final[str] = "config"
DEFAULT_GITHUB_API_URL: Final[str] = "https://api.github.com"
DEFAULT_HTTP_TIMEOUT: Final[float] = 60.0

CACHE_DIR_ENV: Final[str] = "DEVCONTAINER_VIM_CACHE_DIR"
CONFIG_DIR_ENV: Final[str] = "DEVCONTAINER_VIM_CONFIG_DIR"
GITHUB_API_ENV: Final[str] = "DEVCONTAINER_VIM_GITHUB_API"
HTTP_TIMEOUT_ENV: Final[str] = "DEVCONTAINER_VIM_HTTP_TIMEOUT"


def user_cache_dir(env: Mapping[str, str] | None = None, *, system: str | None = None) -> Path:
    """Return the per-user cache root for the current platform."""

    env = os.environ if env is None else env
    system = (system or platform.system()).lower()
    if system == "windows":
        return Path(env.get("LOCALAPPDATA") or Path.home() / "AppData" / "Local")
    if system == "darwin":
        return Path.home() / "Library" / "Caches"
    xdg = env.get("XDG_CACHE_HOME")
    return Path(xdg) if xdg else Path.home() / ".cache"


def user_config_dir(env: Mapping[str, str] | None = None, *, system: str | None = None) -> Path:
    """Return the per-user configuration root for the current platform."""

    env = os.environ if env is None else env
    system = (system or platform.system()).lower()
    if system == "windows":
        return Path(env.get("APPDATA") or Path.home() / "AppData" / "Roaming")
    if system == "darwin":
        return Path.home() / "Library" / "Application Support"
    xdg = env.get("XDG_CONFIG_HOME")
    return Path(xdg) if xdg else Path.home() / ".config"


class AppSettings(BaseModel):
    """Resolved settings for one invocation of the CLI."""

    model_config = ConfigDict(frozen=True)

    cache_dir: Path
    config_dir: Path
    github_api_url: str = DEFAULT_GITHUB_API_URL
    http_timeout: float = Field(default=DEFAULT_HTTP_TIMEOUT, gt=0)

    @field_validator("github_api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class SettingsError(ValueError):
    """Raised when environment overrides cannot be turned into settings."""


def load_settings(env: Mapping[str, str] | None = None) -> AppSettings:
    """Build :class:`AppSettings` from environment overrides and platform defaults.

    Args:
        env: Environment mapping to read; defaults to :data:`os.environ`.

    Returns:
        AppSettings: Validated settings.

    Raises:
        SettingsError: If an override holds an invalid value.
    """

    env = os.environ if env is None else env
    payload: dict[str, object] = {
        "cache_dir": Path(env[CACHE_DIR_ENV]).expanduser()
        if env.get(CACHE_DIR_ENV)
        else user_cache_dir(env) / APP_NAME,
        "config_dir": Path(env[CONFIG_DIR_ENV]).expanduser()
        if env.get(CONFIG_DIR_ENV)
        else user_config_dir(env) / APP_NAME,
    }
    if env.get(GITHUB_API_ENV):
        payload["github_api_url"] = env[GITHUB_API_ENV]
    if env.get(HTTP_TIMEOUT_ENV):
        payload["http_timeout"] = env[HTTP_TIMEOUT_ENV]
    try:
        return AppSettings.model_validate(payload)
    except ValidationError as exc:
        raise SettingsError(f"Invalid devcontainer.vim settings: {exc}") from exc


@dataclass(frozen=True, slots=True)
class AppLayout:
    """Filesystem layout of the tool cache and the merged configuration store."""

    cache_dir: Path
    config_dir: Path

    @property
    def bin_dir(self) -> Path:
        """Directory holding one cached binary per tool."""

        return self.cache_dir / BIN_SUBDIR

    @property
    def app_config_dir(self) -> Path:
        """Directory holding one merged configuration slot per workspace."""

        return self.cache_dir / CONFIG_SUBDIR

    def directories(self) -> tuple[Path, ...]:
        return (self.config_dir, self.cache_dir, self.bin_dir, self.app_config_dir)

    def ensure(self) -> AppLayout:
        """Create every layout directory that does not exist yet."""

        for directory in self.directories():
            directory.mkdir(parents=True, exist_ok=True)
        return self

    @classmethod
    def from_settings(cls, settings: AppSettings) -> AppLayout:
        return cls(cache_dir=settings.cache_dir, config_dir=settings.config_dir)


__all__ = [
    "APP_NAME",
    "AppLayout",
    "AppSettings",
    "SettingsError",
    "load_settings",
    "user_cache_dir",
    "user_config_dir",
]
