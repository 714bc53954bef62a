# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""In-process memoization helpers.

Results live for the lifetime of the interpreter only; nothing is persisted,
so every new invocation of the CLI resolves upstream state afresh.
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Callable, Hashable, Mapping
from dataclasses import dataclass
from functools import partial, update_wrapper
from typing import Final, Generic, ParamSpec, TypeVar, cast

P = ParamSpec("P")
R = TypeVar("R")

CacheKey = Hashable


@dataclass(frozen=True, slots=True)
class CacheInfo:
    """Describe cache state metadata.

    Attributes:
        current_size: Number of cached entries currently stored.
        hits: Number of cache hits that have occurred.
        maxsize: Configured maximum cache capacity, ``None`` when unbounded.
    """

    current_size: int
    hits: int
    maxsize: int | None


def _build_cache_key(args: tuple[object, ...], kwargs: Mapping[str, object]) -> CacheKey:
    for index, value in enumerate(args):
        if not isinstance(value, Hashable):
            raise TypeError(f"positional argument {index} must be hashable to participate in caching")
    for key, value in kwargs.items():
        if not isinstance(value, Hashable):
            raise TypeError(f"keyword argument '{key}' must be hashable to participate in caching")
    if not kwargs:
        return args
    return args + (tuple(sorted(kwargs.items())),)


class _MemoizedCallable(Generic[P, R]):
    """Optional-size LRU cache for callables."""

    def __init__(self, func: Callable[P, R], maxsize: int | None) -> None:
        self._func = func
        self._maxsize = maxsize
        self._store: OrderedDict[CacheKey, R] = OrderedDict()
        self._hits = 0
        update_wrapper(self, func)

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> R:
        cache_key = _build_cache_key(args, kwargs)
        if cache_key in self._store:
            self._store.move_to_end(cache_key)
            self._hits += 1
            return self._store[cache_key]
        result = self._func(*args, **kwargs)
        self._store[cache_key] = result
        if self._maxsize is not None and len(self._store) > self._maxsize:
            self._store.popitem(last=False)
        return result

    def cache_clear(self) -> None:
        """Reset cached entries and hit tracking."""

        self._store.clear()
        self._hits = 0

    def cache_metadata(self) -> CacheInfo:
        """Return cache metadata including hits."""

        return CacheInfo(current_size=len(self._store), hits=self._hits, maxsize=self._maxsize)


def memoize(maxsize: int | None = None) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Return a decorator implementing an optional-size LRU cache.

    Args:
        maxsize: Maximum number of entries to retain. ``None`` disables the cap.

    Returns:
        Callable[[Callable[P, R]], Callable[P, R]]: Decorator preserving cache helpers.
    """

    decorator = partial(_apply_memoize, maxsize=maxsize)
    return cast(Callable[[Callable[P, R]], Callable[P, R]], decorator)


def _apply_memoize(func: Callable[P, R], *, maxsize: int | None) -> Callable[P, R]:
    return cast(Callable[P, R], _MemoizedCallable(func, maxsize))


__all__: Final = ["CacheInfo", "memoize"]
