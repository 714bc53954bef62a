# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for download URL pattern expansion."""

from __future__ import annotations

import pytest

from devcontainer_vim.errors import TemplateError
from devcontainer_vim.tools.templates import expand, expand_tag


def test_expand_substitutes_every_occurrence() -> None:
    pattern = "https://example.com/download/{{.TagName}}/x-{{.TagName}}.tar"

    assert expand(pattern, {"TagName": "v1.2.3"}) == "https://example.com/download/v1.2.3/x-v1.2.3.tar"


def test_expand_tag_accepts_spaced_placeholders() -> None:
    pattern = "https://github.com/vim/vim-appimage/releases/download/{{ .TagName }}/Vim-{{ .TagName }}.AppImage"

    assert (
        expand_tag(pattern, "v9.1.0")
        == "https://github.com/vim/vim-appimage/releases/download/v9.1.0/Vim-v9.1.0.AppImage"
    )


def test_expand_without_placeholders_is_identity() -> None:
    assert expand("https://example.com/static", {"TagName": "v1"}) == "https://example.com/static"


@pytest.mark.parametrize(
    "pattern",
    [
        "https://example.com/{{ .TagName }",
        "https://example.com/{{ .TagName }}/}}",
        "https://example.com/{{ TagName }}",
        "https://example.com/{{ .Tag Name }}",
        "https://example.com/{{ .Version }}",
    ],
)
def test_expand_rejects_malformed_patterns(pattern: str) -> None:
    with pytest.raises(TemplateError) as excinfo:
        expand(pattern, {"TagName": "v1"})

    assert excinfo.value.pattern == pattern
