"""Public container interface and factory."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any, Protocol, TypeVar, runtime_checkable

from .._impl.container import create_container as _create_container
from .models import PluginReference, PluginSpec
from .singleton import ContextualSingleton

T = TypeVar("T")
S = TypeVar("S", bound=ContextualSingleton)


@runtime_checkable
class ContextContainer(Protocol):
    """Facilities shared by everything that runs during one job.

    A job is a web request, a script run, a task execution and so on. The job
    runner creates one container when the job starts and passes it explicitly
    to the code that needs it::

        cc = ContainerFactory.create([PluginSpec(DatabasePlugin, PostgresDatabase())])
        execute_program(cc, args)
    """

    def get_plugin(self, ref: PluginReference[T]) -> T:
        """Return the implementation registered for *ref* in this container.

        Application code depends on the reference (the interface) and never on
        the implementation chosen by the job runner::

            def do_something(cc: CC, data: object) -> str:
                return cc.get_plugin(SerializerPlugin).serialize(data)

        Raises:
            PluginNotRegisteredError: if no implementation was supplied for *ref*
        """
        ...

    def get_singleton(self, singleton_class: type[S]) -> S:
        """Return this container's instance of *singleton_class*, creating it on first use."""
        ...

    def memoize(self, scope: object, key: str, fn: Callable[[], T]) -> T:
        """Return the cached result for ``(scope, key)``, calling *fn* only on a miss.

        Values live as long as the container, so they are never shared between
        jobs and are discarded when the job ends. For short-lived jobs this is
        usually enough to avoid stale data. If the whole job runs with the same
        permissions, results that went through permission checks can be
        memoized too; be careful with resources the job itself modifies.

        *scope* namespaces the key and is compared by identity. Passing the
        calling class is the usual choice::

            class UserEmailPreferences:
                @classmethod
                async def load(cls, cc: CC, user_id: str) -> UserEmailPreferences:
                    row = await cc.memoize(
                        cls,
                        user_id,
                        lambda: cc.get_plugin(DatabasePlugin).load_email_preferences(user_id),
                    )
                    return cls(row)

        When *fn* returns a coroutine or future, the pending result is cached
        before anything awaits it, so concurrent callers share one computation
        and observe the same outcome. Exceptions raised synchronously by *fn*
        are not cached.
        """
        ...

    @property
    def timestamp(self) -> datetime:
        """Canonical time of the job.

        Use it wherever several writes in one job should agree on "now", e.g.
        as the ``updated_at`` of every row the job touches. Pass a timestamp to
        :meth:`ContainerFactory.create` to override the creation time. New
        per-job data of this kind belongs in a :class:`ContextualSingleton`,
        not on the container.
        """
        ...


CC = ContextContainer


class ContainerFactory:
    """Sole entry point for building context containers."""

    @staticmethod
    def create(
        plugins: Iterable[PluginSpec[Any]] = (),
        timestamp: datetime | None = None,
    ) -> ContextContainer:
        """Create the container for one job.

        Args:
            plugins: Plugin specs; a later spec for the same reference replaces an earlier one
            timestamp: Canonical job time (defaults to the configured or current UTC time)
        """
        return _create_container(plugins, timestamp)


create_container = ContainerFactory.create

__all__ = [
    "CC",
    "ContainerFactory",
    "ContextContainer",
    "create_container",
]
