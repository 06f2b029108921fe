"""Identity-keyed plugin registry owned by a single container."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, TypeVar, cast

from ..core.errors import PluginNotRegisteredError
from ..core.models import PluginReference, PluginSpec

T = TypeVar("T")

logger = logging.getLogger("ContextContainer")


class PluginCollection:
    """Immutable mapping of plugin references to implementations.

    PluginReference compares by identity, so a plain dict keyed by the
    reference object is identity-keyed.
    """

    __slots__ = ("_plugins",)

    def __init__(self, plugins: Iterable[PluginSpec[Any]] = ()) -> None:
        collected: dict[PluginReference[Any], Any] = {}
        for spec in plugins:
            if not isinstance(spec.reference, PluginReference):
                raise TypeError(f"Expected PluginReference, got {type(spec.reference).__name__}")
            if spec.reference in collected:
                # Last one wins
                logger.debug("Overwriting implementation for %r", spec.reference)
            collected[spec.reference] = spec.implementation
        self._plugins = collected

    def get(self, ref: PluginReference[T]) -> T:
        try:
            return cast(T, self._plugins[ref])
        except KeyError:
            raise PluginNotRegisteredError(ref) from None

    def references(self) -> list[PluginReference[Any]]:
        return list(self._plugins)

    def __contains__(self, ref: object) -> bool:
        return ref in self._plugins

    def __len__(self) -> int:
        return len(self._plugins)
