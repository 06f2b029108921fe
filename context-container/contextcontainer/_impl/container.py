"""Concrete context container and its factory."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from typing import Any, TypeVar

from .._internal.config import get_config
from ..core.models import PluginReference, PluginSpec
from ..core.singleton import ContextualSingleton
from .memo import MemoizationCache
from .plugins import PluginCollection
from .singletons import SingletonRegistry

T = TypeVar("T")
S = TypeVar("S", bound=ContextualSingleton)

logger = logging.getLogger("ContextContainer")


class ContextContainerImpl:
    """Per-job container delegating to its three registries."""

    __slots__ = ("_plugins", "_singletons", "_memo", "_timestamp")

    def __init__(self, plugins: PluginCollection, timestamp: datetime) -> None:
        self._plugins = plugins
        self._singletons = SingletonRegistry()
        self._memo = MemoizationCache()
        self._timestamp = timestamp

    def get_plugin(self, ref: PluginReference[T]) -> T:
        return self._plugins.get(ref)

    def get_singleton(self, singleton_class: type[S]) -> S:
        return self._singletons.get(singleton_class)

    def memoize(self, scope: object, key: str, fn: Callable[[], T]) -> T:
        return self._memo.memoize(scope, key, fn)

    @property
    def timestamp(self) -> datetime:
        return self._timestamp

    def __repr__(self) -> str:
        return (
            f"<ContextContainer timestamp={self._timestamp.isoformat()} "
            f"plugins={len(self._plugins)}>"
        )


def create_container(
    plugins: Iterable[PluginSpec[Any]] = (),
    timestamp: datetime | None = None,
) -> ContextContainerImpl:
    """Build a fresh container from *plugins*.

    The timestamp defaults to the configured fixed timestamp, then to the
    current UTC time.
    """
    if timestamp is None:
        timestamp = get_config().fixed_timestamp or datetime.now(timezone.utc)
    container = ContextContainerImpl(PluginCollection(plugins), timestamp)
    logger.debug("Created %r", container)
    return container
