"""Single-flight memoization cache owned by a single container."""

from __future__ import annotations

import asyncio
import inspect
import logging
import threading
from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")

logger = logging.getLogger("ContextContainer")


class _ScopeKey:
    """Hashes and compares the wrapped scope by identity only."""

    __slots__ = ("scope",)

    def __init__(self, scope: object) -> None:
        self.scope = scope

    def __hash__(self) -> int:
        return id(self.scope)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, _ScopeKey) and other.scope is self.scope


class _Claim:
    """A key whose computation is currently running on some thread."""

    __slots__ = ("owner", "done")

    def __init__(self) -> None:
        self.owner = threading.get_ident()
        self.done = threading.Event()


def _shareable(value: Any) -> Any:
    """Turn a bare coroutine into a task so every caller can await it.

    A coroutine object can be awaited only once; a task can be awaited by
    any number of callers and keeps its outcome.
    """
    if not inspect.iscoroutine(value):
        return value
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        return value
    return loop.create_task(value)


class MemoizationCache:
    """Caches computed values per ``(scope, key)`` for one container.

    The value returned by ``fn`` is stored before :meth:`memoize` returns,
    so a pending awaitable is visible to later callers before it settles.
    Threads racing on the same key wait for the thread that claimed it.
    """

    __slots__ = ("_values", "_claims", "_lock")

    def __init__(self) -> None:
        self._values: dict[tuple[_ScopeKey, str], Any] = {}
        self._claims: dict[tuple[_ScopeKey, str], _Claim] = {}
        self._lock = threading.Lock()

    def memoize(self, scope: object, key: str, fn: Callable[[], T]) -> T:
        if not isinstance(key, str):
            raise TypeError(f"memoize() key must be str, got {type(key).__name__}")
        cache_key = (_ScopeKey(scope), key)

        while True:
            with self._lock:
                if cache_key in self._values:
                    return self._values[cache_key]
                claim = self._claims.get(cache_key)
                if claim is None:
                    claim = _Claim()
                    self._claims[cache_key] = claim
                    break
            if claim.owner == threading.get_ident():
                raise RecursionError(
                    f"memoize() re-entered for key {key!r} while computing it"
                )
            # Another thread is computing this key; retry once it finishes.
            claim.done.wait()

        logger.debug("Memo miss for %r in scope %r", key, scope)
        try:
            value = _shareable(fn())
        except BaseException:
            with self._lock:
                del self._claims[cache_key]
            claim.done.set()
            raise

        with self._lock:
            self._values[cache_key] = value
            del self._claims[cache_key]
        claim.done.set()
        return value

    def __len__(self) -> int:
        return len(self._values)
