"""Process-level configuration for context containers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone

TIMESTAMP_ENV = "CONTEXTCONTAINER_TIMESTAMP"
DISABLE_HOOKS_ENV = "CONTEXTCONTAINER_DISABLE_HOOKS"


@dataclass(frozen=True)
class ContainerConfig:
    """Settings shared by every container created in this process."""

    # Used instead of the wall clock when no explicit timestamp is given
    fixed_timestamp: datetime | None = None

    # Job helpers skip the hook system entirely when False
    enable_hooks: bool = True


def parse_bool(value: str | bool | None) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return value.strip().lower() in ("true", "1", "yes", "on")


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """Parse an ISO 8601 timestamp; naive values are taken as UTC.

    Raises:
        ValueError: if *value* is not a valid ISO 8601 timestamp
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def load_config() -> ContainerConfig:
    """Build configuration from the environment."""
    return ContainerConfig(
        fixed_timestamp=parse_timestamp(os.getenv(TIMESTAMP_ENV)),
        enable_hooks=not parse_bool(os.getenv(DISABLE_HOOKS_ENV)),
    )


_config: ContainerConfig | None = None


def get_config() -> ContainerConfig:
    """Return the process configuration, loading it from the environment once."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: ContainerConfig | None) -> None:
    """Replace the process configuration; ``None`` reloads it on next access."""
    global _config
    _config = config


__all__ = [
    "ContainerConfig",
    "DISABLE_HOOKS_ENV",
    "TIMESTAMP_ENV",
    "get_config",
    "load_config",
    "parse_bool",
    "parse_timestamp",
    "set_config",
]
