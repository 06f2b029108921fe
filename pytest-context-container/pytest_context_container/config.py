"""Configuration system for the pytest-context-container plugin."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import pytest
from contextcontainer._internal.config import (
    DISABLE_HOOKS_ENV,
    TIMESTAMP_ENV,
    parse_bool,
    parse_timestamp,
)


@dataclass
class ContextContainerPluginConfig:
    """Configuration for the pytest-context-container plugin."""

    # Timestamp for every ``cc`` container unless a test marker overrides it
    timestamp: datetime | None = None

    # Feature flags
    enable_hooks: bool = True


def register_options(parser: pytest.Parser) -> None:
    """Register pytest command line options."""
    group = parser.getgroup("contextcontainer", "Context container fixtures")

    group.addoption(
        "--cc-timestamp",
        action="store",
        default=None,
        help="ISO 8601 timestamp used for every cc container (e.g. 2021-01-01T00:00:00Z)",
    )
    group.addoption(
        "--cc-disable-hooks",
        action="store_true",
        default=None,
        help="Do not call contextcontainer hooks when creating cc containers",
    )


def resolve_options(config: pytest.Config) -> ContextContainerPluginConfig:
    """Resolve configuration from CLI, environment, and pytest.ini.

    Priority: CLI > ENV > pytest.ini > defaults

    Raises:
        pytest.UsageError: if the configured timestamp is not ISO 8601
    """

    def get_option(name: str, env_name: str, ini_name: str, default: Any = None) -> Any:
        cli_value = config.getoption(name, default=None)
        if cli_value is not None:
            return cli_value

        env_value = os.getenv(env_name)
        if env_value is not None:
            return env_value

        ini_value = config.getini(ini_name)
        if ini_value:
            return ini_value

        return default

    raw_timestamp = get_option("cc_timestamp", TIMESTAMP_ENV, "cc_timestamp")
    try:
        timestamp = parse_timestamp(raw_timestamp)
    except ValueError as e:
        raise pytest.UsageError(f"Invalid cc timestamp {raw_timestamp!r}: {e}") from e

    return ContextContainerPluginConfig(
        timestamp=timestamp,
        enable_hooks=not parse_bool(
            get_option("cc_disable_hooks", DISABLE_HOOKS_ENV, "cc_disable_hooks", False)
        ),
    )


def setup_pytest_ini_options(parser: pytest.Parser) -> None:
    """Setup pytest.ini configuration options."""
    parser.addini("cc_timestamp", "ISO 8601 timestamp for cc containers")
    parser.addini("cc_disable_hooks", "Disable contextcontainer hooks", default="false")
