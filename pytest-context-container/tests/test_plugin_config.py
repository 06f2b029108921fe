"""Tests for pytest-context-container configuration."""

import os
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from pytest_context_container.config import ContextContainerPluginConfig, resolve_options


class TestContextContainerPluginConfig:
    """Tests for ContextContainerPluginConfig class."""

    def test_default_config(self):
        config = ContextContainerPluginConfig()

        assert config.timestamp is None
        assert config.enable_hooks is True


class TestResolveOptions:
    """Tests for resolve_options function."""

    def setup_method(self):
        """Clear environment variables before each test."""
        self._saved_env = {}
        for var in ["CONTEXTCONTAINER_TIMESTAMP", "CONTEXTCONTAINER_DISABLE_HOOKS"]:
            if var in os.environ:
                self._saved_env[var] = os.environ.pop(var)

    def teardown_method(self):
        for var in ["CONTEXTCONTAINER_TIMESTAMP", "CONTEXTCONTAINER_DISABLE_HOOKS"]:
            os.environ.pop(var, None)
        os.environ.update(self._saved_env)

    def _make_config(self, cli=None, ini=None):
        cli = cli or {}
        ini = ini or {}
        config = Mock()
        config.getoption.side_effect = lambda name, default=None: cli.get(name, default)
        config.getini.side_effect = lambda name: ini.get(name, "")
        return config

    def test_defaults(self):
        resolved = resolve_options(self._make_config())

        assert resolved.timestamp is None
        assert resolved.enable_hooks is True

    def test_cli_options(self):
        config = self._make_config(
            cli={"cc_timestamp": "2021-01-01T00:00:00Z", "cc_disable_hooks": True}
        )

        resolved = resolve_options(config)

        assert resolved.timestamp == datetime(2021, 1, 1, tzinfo=timezone.utc)
        assert resolved.enable_hooks is False

    def test_environment_options(self):
        os.environ["CONTEXTCONTAINER_TIMESTAMP"] = "2022-02-02T00:00:00+00:00"
        os.environ["CONTEXTCONTAINER_DISABLE_HOOKS"] = "true"

        resolved = resolve_options(self._make_config())

        assert resolved.timestamp == datetime(2022, 2, 2, tzinfo=timezone.utc)
        assert resolved.enable_hooks is False

    def test_ini_options(self):
        config = self._make_config(
            ini={"cc_timestamp": "2023-03-03T00:00:00", "cc_disable_hooks": "false"}
        )

        resolved = resolve_options(config)

        assert resolved.timestamp == datetime(2023, 3, 3, tzinfo=timezone.utc)
        assert resolved.enable_hooks is True

    def test_priority_cli_over_env_over_ini(self):
        os.environ["CONTEXTCONTAINER_TIMESTAMP"] = "2022-02-02T00:00:00Z"
        config = self._make_config(
            cli={"cc_timestamp": "2021-01-01T00:00:00Z"},
            ini={"cc_timestamp": "2023-03-03T00:00:00Z"},
        )

        assert resolve_options(config).timestamp == datetime(2021, 1, 1, tzinfo=timezone.utc)

        config = self._make_config(ini={"cc_timestamp": "2023-03-03T00:00:00Z"})

        assert resolve_options(config).timestamp == datetime(2022, 2, 2, tzinfo=timezone.utc)

    def test_invalid_timestamp_is_a_usage_error(self):
        config = self._make_config(cli={"cc_timestamp": "not a date"})

        with pytest.raises(pytest.UsageError):
            resolve_options(config)
