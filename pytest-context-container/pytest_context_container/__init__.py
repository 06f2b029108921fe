"""Pytest plugin providing per-test context containers."""

from .config import ContextContainerPluginConfig
from .plugin import ContextContainerPytestPlugin

__version__ = "1.0.1"

__all__ = [
    "ContextContainerPluginConfig",
    "ContextContainerPytestPlugin",
]
