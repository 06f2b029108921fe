"""Exceptions raised by the context container."""

from __future__ import annotations

from typing import Any


class ContextContainerError(Exception):
    """Base class for all context container errors."""


class PluginNotRegisteredError(ContextContainerError, LookupError):
    """Raised when a plugin reference has no implementation in a container."""

    def __init__(self, reference: Any) -> None:
        self.reference = reference
        super().__init__(f"Plugin not registered: {reference!r}")


class ConstructionIntegrityError(ContextContainerError, RuntimeError):
    """Raised when a contextual singleton is constructed outside a container.

    This always indicates a programming error: singletons must be obtained
    with ``cc.get_singleton(SingletonClass)``.
    """

    def __init__(self, cls: type | None = None) -> None:
        self.cls = cls
        target = cls.__name__ if cls is not None else "ContextualSingleton"
        super().__init__(
            f"Attempted to construct {target} directly; "
            "use cc.get_singleton() instead"
        )


__all__ = [
    "ConstructionIntegrityError",
    "ContextContainerError",
    "PluginNotRegisteredError",
]
