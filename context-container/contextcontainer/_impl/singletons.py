"""Lazily-populated registry of contextual singletons."""

from __future__ import annotations

import logging
import threading
from typing import TypeVar

from ..core.singleton import ContextualSingleton
from .proof import issue_proof

S = TypeVar("S", bound=ContextualSingleton)

logger = logging.getLogger("ContextContainer")


class SingletonRegistry:
    """Maps singleton classes to their single instance within one container."""

    __slots__ = ("_instances", "_lock")

    def __init__(self) -> None:
        self._instances: dict[type[ContextualSingleton], ContextualSingleton] = {}
        self._lock = threading.RLock()

    def get(self, singleton_class: type[S]) -> S:
        if not (
            isinstance(singleton_class, type)
            and issubclass(singleton_class, ContextualSingleton)
        ):
            raise TypeError(
                f"{singleton_class!r} is not a ContextualSingleton subclass"
            )
        with self._lock:
            instance = self._instances.get(singleton_class)
            if instance is None:
                instance = singleton_class(issue_proof())
                self._instances[singleton_class] = instance
                logger.debug("Created singleton %s", singleton_class.__qualname__)
        return instance  # type: ignore[return-value]

    def __contains__(self, singleton_class: object) -> bool:
        return singleton_class in self._instances
