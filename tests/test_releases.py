# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the latest-release lookup."""

from __future__ import annotations

import json
import urllib.error
import urllib.request

import pytest

from devcontainer_vim.errors import ReleaseLookupError
from devcontainer_vim.tools.releases import ReleaseResolver


def test_latest_tag_reads_tag_name(fake_response) -> None:
    requests: list[tuple[urllib.request.Request, float]] = []

    def opener(request, timeout):
        requests.append((request, timeout))
        return fake_response(json.dumps({"tag_name": "v9.1.0", "name": "Vim 9.1"}).encode())

    resolver = ReleaseResolver(api_url="https://api.example.com/", timeout=5, opener=opener)

    assert resolver.latest_tag("vim", "vim-appimage") == "v9.1.0"
    assert len(requests) == 1
    request, timeout = requests[0]
    assert request.full_url == "https://api.example.com/repos/vim/vim-appimage/releases/latest"
    assert timeout == 5


def test_latest_tag_is_not_cached_between_calls(fake_response) -> None:
    tags = iter(["v1", "v2"])
    calls: list[str] = []

    def opener(request, timeout):
        calls.append(request.full_url)
        return fake_response(json.dumps({"tag_name": next(tags)}).encode())

    resolver = ReleaseResolver(opener=opener)

    assert resolver.latest_tag("o", "r") == "v1"
    assert resolver.latest_tag("o", "r") == "v2"
    assert len(calls) == 2


def test_latest_tag_reports_http_errors() -> None:
    def opener(request, timeout):
        raise urllib.error.HTTPError(request.full_url, 404, "Not Found", hdrs=None, fp=None)

    resolver = ReleaseResolver(opener=opener)

    with pytest.raises(ReleaseLookupError) as excinfo:
        resolver.latest_tag("mikoto2000", "missing")

    assert excinfo.value.owner == "mikoto2000"
    assert excinfo.value.repo == "missing"
    assert "HTTP 404" in str(excinfo.value)


def test_latest_tag_reports_unreachable_index() -> None:
    def opener(request, timeout):
        raise urllib.error.URLError("name resolution failed")

    with pytest.raises(ReleaseLookupError, match="unreachable"):
        ReleaseResolver(opener=opener).latest_tag("o", "r")


def test_latest_tag_rejects_non_success_status(fake_response) -> None:
    resolver = ReleaseResolver(opener=lambda request, timeout: fake_response(b"{}", status=204))

    with pytest.raises(ReleaseLookupError, match="HTTP 204"):
        resolver.latest_tag("o", "r")


@pytest.mark.parametrize("body", [b"not json", b"[]", b"{}", b'{"tag_name": ""}', b'{"tag_name": 3}'])
def test_latest_tag_requires_tag_name(fake_response, body: bytes) -> None:
    resolver = ReleaseResolver(opener=lambda request, timeout: fake_response(body))

    with pytest.raises(ReleaseLookupError):
        resolver.latest_tag("o", "r")
