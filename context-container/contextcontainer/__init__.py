"""Context Container - per-job plugins, singletons, memoization and timestamp."""

from __future__ import annotations

# Public API facade
from contextcontainer.core.api import (
    CC,
    ContainerFactory,
    ContextContainer,
    create_container,
)
from contextcontainer.core.errors import (
    ConstructionIntegrityError,
    ContextContainerError,
    PluginNotRegisteredError,
)
from contextcontainer.core.models import (
    PluginReference,
    PluginSpec,
    create_plugin_reference,
)
from contextcontainer.core.singleton import ContextualSingleton

# Integration points
from contextcontainer.hooks import get_plugin_manager, hookimpl
from contextcontainer.runtime import async_job, job, run_job

# Version info
__version__ = "1.0.1"

# Public API
__all__ = [
    # Version
    "__version__",
    # Container
    "CC",
    "ContainerFactory",
    "ContextContainer",
    "create_container",
    # Plugins and singletons
    "ContextualSingleton",
    "PluginReference",
    "PluginSpec",
    "create_plugin_reference",
    # Errors
    "ConstructionIntegrityError",
    "ContextContainerError",
    "PluginNotRegisteredError",
    # Jobs and hooks
    "async_job",
    "get_plugin_manager",
    "hookimpl",
    "job",
    "run_job",
]
