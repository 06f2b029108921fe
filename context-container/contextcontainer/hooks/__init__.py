"""Hook system for context container integrations."""

from .manager import ContextContainerPluginManager, get_plugin_manager, reset_plugin_manager
from .specs import ContextContainerHookSpecs, hookimpl, hookspec

__all__ = [
    "hookspec",
    "hookimpl",
    "ContextContainerHookSpecs",
    "get_plugin_manager",
    "ContextContainerPluginManager",
    "reset_plugin_manager",
]
