"""Helpers for job runners: one container per job, lifecycle announced on hooks."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable, Iterable, Iterator
from contextlib import asynccontextmanager, contextmanager
from datetime import datetime
from typing import Any, TypeVar

from .._internal.config import get_config
from ..core.api import ContainerFactory, ContextContainer
from ..core.models import PluginSpec
from ..hooks.manager import ContextContainerPluginManager, get_plugin_manager

T = TypeVar("T")

logger = logging.getLogger("ContextContainerJobs")


def _collect_plugin_specs(
    pm: ContextContainerPluginManager | None, plugins: Iterable[PluginSpec[Any]]
) -> list[PluginSpec[Any]]:
    specs: list[PluginSpec[Any]] = []
    if pm is not None:
        # pluggy calls the most recently registered plugin first
        for contributed in reversed(pm.hook.contextcontainer_plugin_specs()):
            specs.extend(contributed or ())
    specs.extend(plugins)
    return specs


def _start(
    name: str | None,
    plugins: Iterable[PluginSpec[Any]],
    timestamp: datetime | None,
) -> tuple[ContextContainer, ContextContainerPluginManager | None]:
    pm = get_plugin_manager() if get_config().enable_hooks else None
    cc = ContainerFactory.create(_collect_plugin_specs(pm, plugins), timestamp)
    if pm is not None:
        pm.hook.contextcontainer_container_created(container=cc)
        pm.hook.contextcontainer_job_start(container=cc, name=name)
    logger.debug("Job %s started at %s", name or "<unnamed>", cc.timestamp.isoformat())
    return cc, pm


def _finish(
    pm: ContextContainerPluginManager | None,
    cc: ContextContainer,
    name: str | None,
    error: BaseException | None,
) -> None:
    if error is None:
        logger.debug("Job %s finished", name or "<unnamed>")
    else:
        logger.debug("Job %s failed", name or "<unnamed>", exc_info=error)
    if pm is not None:
        pm.hook.contextcontainer_job_finish(container=cc, name=name, error=error)


@contextmanager
def job(
    name: str | None = None,
    plugins: Iterable[PluginSpec[Any]] = (),
    timestamp: datetime | None = None,
) -> Iterator[ContextContainer]:
    """Run a block of code as one job with its own container.

    Plugin specs contributed through the ``contextcontainer_plugin_specs`` hook
    are registered first, so specs passed in *plugins* override them::

        with job("nightly-report", plugins=[PluginSpec(MailerPlugin, SmtpMailer())]) as cc:
            send_report(cc)

    The job's exception, if any, is reported to ``contextcontainer_job_finish``
    and re-raised unchanged.
    """
    cc, pm = _start(name, plugins, timestamp)
    error: BaseException | None = None
    try:
        yield cc
    except BaseException as exc:
        error = exc
        raise
    finally:
        _finish(pm, cc, name, error)


@asynccontextmanager
async def async_job(
    name: str | None = None,
    plugins: Iterable[PluginSpec[Any]] = (),
    timestamp: datetime | None = None,
) -> AsyncIterator[ContextContainer]:
    """Async counterpart of :func:`job`."""
    cc, pm = _start(name, plugins, timestamp)
    error: BaseException | None = None
    try:
        yield cc
    except BaseException as exc:
        error = exc
        raise
    finally:
        _finish(pm, cc, name, error)


def run_job(
    fn: Callable[..., T],
    *args: Any,
    name: str | None = None,
    plugins: Iterable[PluginSpec[Any]] = (),
    timestamp: datetime | None = None,
    **kwargs: Any,
) -> T:
    """Call ``fn(cc, *args, **kwargs)`` inside a fresh job and return its result."""
    with job(name=name, plugins=plugins, timestamp=timestamp) as cc:
        return fn(cc, *args, **kwargs)
