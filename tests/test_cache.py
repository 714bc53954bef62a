# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for in-process memoization."""

from __future__ import annotations

import pytest

from devcontainer_vim.cache import CacheInfo, memoize


def test_memoize_returns_cached_results() -> None:
    calls: list[tuple[str, str]] = []

    @memoize()
    def lookup(owner: str, repo: str) -> str:
        calls.append((owner, repo))
        return f"{owner}/{repo}@v1"

    assert lookup("vim", "vim-appimage") == "vim/vim-appimage@v1"
    assert lookup("vim", "vim-appimage") == "vim/vim-appimage@v1"
    assert lookup("mikoto2000", "port-forwarder") == "mikoto2000/port-forwarder@v1"
    assert calls == [("vim", "vim-appimage"), ("mikoto2000", "port-forwarder")]
    assert lookup.cache_metadata() == CacheInfo(current_size=2, hits=1, maxsize=None)  # type: ignore[attr-defined]


def test_memoize_evicts_least_recently_used() -> None:
    calls: list[int] = []

    @memoize(maxsize=1)
    def square(value: int) -> int:
        calls.append(value)
        return value * value

    square(2)
    square(3)
    square(2)

    assert calls == [2, 3, 2]


def test_memoize_cache_clear() -> None:
    calls: list[int] = []

    @memoize()
    def ident(value: int) -> int:
        calls.append(value)
        return value

    ident(1)
    ident.cache_clear()  # type: ignore[attr-defined]
    ident(1)

    assert calls == [1, 1]


def test_memoize_rejects_unhashable_arguments() -> None:
    @memoize()
    def size(values: list[int]) -> int:
        return len(values)

    with pytest.raises(TypeError, match="hashable"):
        size([1, 2])
