"""Plugin references and plugin specs."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Generic, NoReturn, TypeVar

T = TypeVar("T")

_reference_ids = itertools.count(1)


@dataclass(frozen=True, eq=False)
class PluginReference(Generic[T]):
    """Opaque identity for a plugin interface ``T``.

    Do not construct this class directly, use :func:`create_plugin_reference`.
    Two references are equal only if they are the same object, even when they
    share a type parameter or a name.
    """

    name: str | None = None
    _id: int = field(default_factory=lambda: next(_reference_ids), repr=False)

    def type_spec(self, plugin: T) -> NoReturn:
        """Static marker for the plugin type; never call it."""
        raise TypeError("PluginReference.type_spec() is a typing marker; do not call it")

    def __repr__(self) -> str:
        label = self.name or f"#{self._id}"
        return f"<PluginReference {label}>"


@dataclass(frozen=True)
class PluginSpec(Generic[T]):
    """An implementation bound to a plugin reference, supplied at container creation."""

    reference: PluginReference[T]
    implementation: T


def create_plugin_reference(name: str | None = None) -> PluginReference[T]:
    """Create a fresh, globally unique plugin reference.

    Typical usage::

        class Serializer(Protocol):
            def serialize(self, obj: object) -> str: ...

        SerializerPlugin: PluginReference[Serializer] = create_plugin_reference("serializer")

        cc = ContainerFactory.create([PluginSpec(SerializerPlugin, JsonSerializer())])
        cc.get_plugin(SerializerPlugin).serialize(data)
    """
    return PluginReference(name=name)


__all__ = [
    "PluginReference",
    "PluginSpec",
    "create_plugin_reference",
]
