# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lookup of the latest published release tag on GitHub."""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from collections.abc import Callable
from typing import Any, Final

from .. import __version__
from ..errors import ReleaseLookupError
from ..settings import DEFAULT_GITHUB_API_URL, DEFAULT_HTTP_TIMEOUT

LOGGER = logging.getLogger(__name__)

ACCEPT_HEADER: Final[str] = "application/vnd.github+json"

Opener = Callable[..., Any]


class ReleaseResolver:
    """Query the release index for the tag of the latest published release.

    Every call performs exactly one HTTP request; tags are never cached here so
    each run picks up whatever upstream currently reports as latest.
    """

    def __init__(
        self,
        *,
        api_url: str = DEFAULT_GITHUB_API_URL,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        opener: Opener | None = None,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._opener: Opener = opener or urllib.request.urlopen

    def release_url(self, owner: str, repo: str) -> str:
        return f"{self._api_url}/repos/{owner}/{repo}/releases/latest"

    def latest_tag(self, owner: str, repo: str) -> str:
        """Return the ``tag_name`` of the latest release of ``owner/repo``.

        Raises:
            ReleaseLookupError: If the index is unreachable, answers with a
                non-2xx status, or the payload carries no tag name.
        """

        url = self.release_url(owner, repo)
        request = urllib.request.Request(
            url,
            headers={"Accept": ACCEPT_HEADER, "User-Agent": f"devcontainer.vim/{__version__}"},
        )
        LOGGER.debug("resolving latest release url=%s", url)
        try:
            with self._opener(request, timeout=self._timeout) as response:
                status = getattr(response, "status", 200)
                if not 200 <= status < 300:
                    raise ReleaseLookupError(owner, repo, f"HTTP {status} from {url}")
                body = response.read()
        except urllib.error.HTTPError as exc:
            raise ReleaseLookupError(owner, repo, f"HTTP {exc.code} from {url}") from exc
        except (urllib.error.URLError, OSError) as exc:
            raise ReleaseLookupError(owner, repo, f"{url} is unreachable ({exc})") from exc

        try:
            payload = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ReleaseLookupError(owner, repo, "release metadata is not valid JSON") from exc

        tag = payload.get("tag_name") if isinstance(payload, dict) else None
        if not isinstance(tag, str) or not tag:
            raise ReleaseLookupError(owner, repo, "release metadata has no tag_name")
        LOGGER.debug("latest release of %s/%s is %s", owner, repo, tag)
        return tag


__all__ = ["ReleaseResolver"]
