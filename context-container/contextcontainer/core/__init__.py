"""Core components of the context container."""

from .errors import ConstructionIntegrityError, ContextContainerError, PluginNotRegisteredError
from .models import PluginReference, PluginSpec, create_plugin_reference
from .singleton import ContextualSingleton
from .api import CC, ContainerFactory, ContextContainer, create_container

__all__ = [
    "CC",
    "ConstructionIntegrityError",
    "ContainerFactory",
    "ContextContainer",
    "ContextContainerError",
    "ContextualSingleton",
    "PluginNotRegisteredError",
    "PluginReference",
    "PluginSpec",
    "create_container",
    "create_plugin_reference",
]
