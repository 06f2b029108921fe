"""Main pytest plugin providing a context container per test."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import replace
from datetime import datetime
from typing import Any

import pytest
from contextcontainer import ContextContainer, PluginSpec, job
from contextcontainer._internal.config import (
    ContainerConfig,
    get_config,
    parse_timestamp,
    set_config,
)

from .config import (
    ContextContainerPluginConfig,
    register_options,
    resolve_options,
    setup_pytest_ini_options,
)

logger = logging.getLogger("ContextContainerPytestPlugin")

MARKER_NAME = "cc_timestamp"


class ContextContainerPytestPlugin:
    """Holds resolved options for the ``cc`` fixture."""

    def __init__(self, config: ContextContainerPluginConfig):
        self.config = config
        self._previous_config: ContainerConfig | None = None

    def timestamp_for(self, item: pytest.Item) -> datetime | None:
        """Timestamp for *item*: the closest ``cc_timestamp`` marker, then the option."""
        marker = item.get_closest_marker(MARKER_NAME)
        if marker is not None:
            value = marker.args[0] if marker.args else marker.kwargs.get("timestamp")
            try:
                return parse_timestamp(value)
            except ValueError as e:
                raise pytest.UsageError(
                    f"{item.nodeid}: invalid {MARKER_NAME} marker value {value!r}"
                ) from e
        return self.config.timestamp

    def install(self) -> None:
        """Apply the hook setting to the process container configuration."""
        self._previous_config = get_config()
        set_config(replace(self._previous_config, enable_hooks=self.config.enable_hooks))

    def uninstall(self) -> None:
        set_config(self._previous_config)
        self._previous_config = None

    def pytest_report_header(self, config: pytest.Config) -> str | None:
        if self.config.timestamp is None:
            return None
        return f"contextcontainer: cc timestamp {self.config.timestamp.isoformat()}"


def _get_plugin(config: pytest.Config) -> ContextContainerPytestPlugin:
    plugin = getattr(config, "_contextcontainer", None)
    if plugin is None:
        plugin = ContextContainerPytestPlugin(ContextContainerPluginConfig())
    return plugin


@pytest.fixture
def cc_plugins() -> list[PluginSpec[Any]]:
    """Plugin specs registered in the ``cc`` container; override in conftest.py."""
    return []


@pytest.fixture
def cc(request: pytest.FixtureRequest, cc_plugins: list[PluginSpec[Any]]) -> Iterator[ContextContainer]:
    """A fresh context container for the current test."""
    plugin = _get_plugin(request.config)
    timestamp = plugin.timestamp_for(request.node)
    with job(name=request.node.nodeid, plugins=cc_plugins, timestamp=timestamp) as container:
        logger.debug("Created container for %s", request.node.nodeid)
        yield container


def pytest_addoption(parser: pytest.Parser) -> None:
    """Add command line options."""
    register_options(parser)
    setup_pytest_ini_options(parser)


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", f"{MARKER_NAME}(timestamp): fix the timestamp of the cc container"
    )

    _plugin_instance = ContextContainerPytestPlugin(resolve_options(config))
    _plugin_instance.install()
    config._contextcontainer = _plugin_instance
    config.pluginmanager.register(_plugin_instance, "contextcontainer_plugin")


def pytest_unconfigure(config: pytest.Config) -> None:
    plugin = getattr(config, "_contextcontainer", None)
    if plugin is not None:
        del config._contextcontainer
        plugin.uninstall()
        config.pluginmanager.unregister(plugin, "contextcontainer_plugin")
