"""Process-wide pluggy plugin manager."""

from __future__ import annotations

import pluggy

from .specs import ContextContainerHookSpecs

PROJECT_NAME = "contextcontainer"


class ContextContainerPluginManager(pluggy.PluginManager):
    def __init__(self) -> None:
        super().__init__(PROJECT_NAME)
        self.add_hookspecs(ContextContainerHookSpecs)


_plugin_manager: ContextContainerPluginManager | None = None


def get_plugin_manager() -> ContextContainerPluginManager:
    """Return the shared plugin manager, creating it on first use."""
    global _plugin_manager
    if _plugin_manager is None:
        _plugin_manager = ContextContainerPluginManager()
        _plugin_manager.load_setuptools_entrypoints(PROJECT_NAME)
    return _plugin_manager


def reset_plugin_manager() -> None:
    """Drop the shared plugin manager and every registered plugin."""
    global _plugin_manager
    _plugin_manager = None
