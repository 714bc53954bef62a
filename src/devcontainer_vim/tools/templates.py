# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Expansion of download URL patterns such as ``.../{{ .TagName }}/vim``."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Final

from ..errors import TemplateError

TAG_NAME_FIELD: Final[str] = "TagName"

_ACTION = re.compile(r"\{\{(.*?)\}\}")
_FIELD = re.compile(r"\s*\.([A-Za-z_][A-Za-z0-9_]*)\s*")


def expand(pattern: str, params: Mapping[str, str]) -> str:
    """Substitute every ``{{ .Field }}`` placeholder in *pattern*.

    Args:
        pattern: URL pattern containing one or more placeholders.
        params: Values keyed by field name, e.g. ``{"TagName": "v9.1.0"}``.

    Returns:
        str: The concrete URL.

    Raises:
        TemplateError: If the pattern has unbalanced braces, a placeholder that
            is not a field reference, or a field without a value.
    """

    remainder = _ACTION.sub("", pattern)
    if "{{" in remainder or "}}" in remainder:
        raise TemplateError(pattern, "unbalanced placeholder braces")

    pieces: list[str] = []
    cursor = 0
    for match in _ACTION.finditer(pattern):
        field = _FIELD.fullmatch(match.group(1))
        if field is None:
            raise TemplateError(pattern, f"unsupported placeholder {match.group(0)!r}")
        name = field.group(1)
        if name not in params:
            raise TemplateError(pattern, f"no value supplied for field {name!r}")
        pieces.append(pattern[cursor : match.start()])
        pieces.append(params[name])
        cursor = match.end()
    pieces.append(pattern[cursor:])
    return "".join(pieces)


def expand_tag(pattern: str, tag_name: str) -> str:
    """Expand *pattern* with the release tag bound to ``TagName``."""

    return expand(pattern, {TAG_NAME_FIELD: tag_name})


__all__ = ["TAG_NAME_FIELD", "expand", "expand_tag"]
