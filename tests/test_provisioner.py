# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for binary download and cache reuse."""

from __future__ import annotations

import os
import stat
import urllib.error
from pathlib import Path

import pytest

from devcontainer_vim.errors import DownloadError, PermissionGrantError, ReleaseLookupError
from devcontainer_vim.tools import provisioner
from devcontainer_vim.tools.models import CachedBinary, ToolDescriptor
from devcontainer_vim.tools.provisioner import add_execute_permission, install, make_simple_installer

PATTERN = "https://example.com/download/{{ .TagName }}/tool-{{ .TagName }}"


class Recorder:
    """Count tag lookups and downloads performed through a descriptor."""

    def __init__(self, fake_response, *, body: bytes = b"#!/bin/sh\necho tool\n", status: int = 200) -> None:
        self.lookups: list[tuple[str, str]] = []
        self.downloads: list[str] = []
        self._fake_response = fake_response
        self._body = body
        self._status = status

    def lookup_tag(self, owner: str, repo: str) -> str:
        self.lookups.append((owner, repo))
        return "v1.0.0"

    def opener(self, url: str, timeout: float):
        self.downloads.append(url)
        return self._fake_response(self._body, status=self._status)

    def descriptor(self, file_name: str = "tool") -> ToolDescriptor:
        return ToolDescriptor(
            name="tool",
            file_name=file_name,
            owner="owner",
            repo="repo",
            url_pattern=PATTERN,
            lookup_tag=self.lookup_tag,
            installer=make_simple_installer(opener=self.opener),
        )


def test_install_reuses_cached_file_without_network(tmp_path: Path, fake_response) -> None:
    recorder = Recorder(fake_response)
    cached = tmp_path / "tool"
    cached.write_bytes(b"old build")

    path = install(recorder.descriptor(), tmp_path, override=False)

    assert path == cached
    assert recorder.lookups == []
    assert recorder.downloads == []
    assert cached.read_bytes() == b"old build"


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_install_trusts_cached_file_without_rechecking_permissions(
    tmp_path: Path, fake_response, caplog: pytest.LogCaptureFixture
) -> None:
    recorder = Recorder(fake_response)
    cached = tmp_path / "tool"
    cached.write_bytes(b"old build")
    cached.chmod(0o644)
    caplog.set_level("DEBUG", logger="devcontainer_vim.tools.provisioner")

    path = install(recorder.descriptor(), tmp_path)

    assert path == cached
    assert recorder.downloads == []
    assert not os.access(cached, os.X_OK)
    assert "executable=False" in caplog.text


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_install_downloads_missing_file_and_marks_it_executable(tmp_path: Path, fake_response) -> None:
    recorder = Recorder(fake_response)

    path = install(recorder.descriptor(), tmp_path)

    assert path == tmp_path / "tool"
    assert recorder.lookups == [("owner", "repo")]
    assert recorder.downloads == ["https://example.com/download/v1.0.0/tool-v1.0.0"]
    assert path.read_bytes() == b"#!/bin/sh\necho tool\n"
    assert path.stat().st_mode & stat.S_IXUSR
    assert CachedBinary.inspect(path) == CachedBinary(path=path, exists=True, executable=True)


def test_install_override_replaces_cached_file(tmp_path: Path, fake_response) -> None:
    recorder = Recorder(fake_response, body=b"new build")
    (tmp_path / "tool").write_bytes(b"old build")

    path = install(recorder.descriptor(), tmp_path, override=True)

    assert path.read_bytes() == b"new build"
    assert len(recorder.downloads) == 1


def test_install_reports_destination_on_http_failure(tmp_path: Path, fake_response) -> None:
    recorder = Recorder(fake_response, status=500)

    with pytest.raises(DownloadError) as excinfo:
        install(recorder.descriptor(), tmp_path)

    assert excinfo.value.path == tmp_path / "tool"
    assert excinfo.value.url == "https://example.com/download/v1.0.0/tool-v1.0.0"


def test_install_reports_unreachable_download(tmp_path: Path) -> None:
    def opener(url: str, timeout: float):
        raise urllib.error.URLError("connection refused")

    descriptor = ToolDescriptor(
        name="tool",
        file_name="tool",
        owner="owner",
        repo="repo",
        url_pattern=PATTERN,
        lookup_tag=lambda owner, repo: "v2",
        installer=make_simple_installer(opener=opener),
    )

    with pytest.raises(DownloadError, match="connection refused"):
        install(descriptor, tmp_path)


def test_install_reports_missing_install_dir(tmp_path: Path, fake_response) -> None:
    recorder = Recorder(fake_response)

    with pytest.raises(DownloadError) as excinfo:
        install(recorder.descriptor(), tmp_path / "missing")

    assert excinfo.value.path == tmp_path / "missing" / "tool"


def test_install_propagates_release_lookup_failures(tmp_path: Path) -> None:
    def lookup_tag(owner: str, repo: str) -> str:
        raise ReleaseLookupError(owner, repo, "offline")

    descriptor = ToolDescriptor(
        name="tool",
        file_name="tool",
        owner="owner",
        repo="repo",
        url_pattern=PATTERN,
        lookup_tag=lookup_tag,
        installer=lambda url, path: path,
    )

    with pytest.raises(ReleaseLookupError):
        install(descriptor, tmp_path)
    assert not (tmp_path / "tool").exists()


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_add_execute_permission_wraps_os_errors(tmp_path: Path) -> None:
    with pytest.raises(PermissionGrantError) as excinfo:
        add_execute_permission(tmp_path / "absent")

    assert excinfo.value.path == tmp_path / "absent"


def test_add_execute_permission_is_a_no_op_on_windows(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(provisioner, "_SUPPORTS_CHMOD", False)

    add_execute_permission(tmp_path / "absent")
