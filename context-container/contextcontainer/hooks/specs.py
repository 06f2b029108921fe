"""Hook specifications for the context container plugin system."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pluggy import HookimplMarker, HookspecMarker

if TYPE_CHECKING:
    from ..core.api import ContextContainer
    from ..core.models import PluginSpec

hookspec = HookspecMarker("contextcontainer")
hookimpl = HookimplMarker("contextcontainer")


class ContextContainerHookSpecs:
    """Hook specifications for job runners and application integrations."""

    # ========== Container Assembly Hooks ==========

    @hookspec
    def contextcontainer_plugin_specs(self) -> list[PluginSpec[Any]]:
        """Contribute plugin specs to every container created by a job helper.

        Returns:
            Plugin specs to register; explicit specs passed to the job win
        """

    @hookspec
    def contextcontainer_container_created(self, container: ContextContainer) -> None:
        """Called right after a job helper creates a container.

        Args:
            container: The new container
        """

    # ========== Job Lifecycle Hooks ==========

    @hookspec
    def contextcontainer_job_start(
        self, container: ContextContainer, name: str | None
    ) -> None:
        """Called before the job body runs.

        Args:
            container: Container for the job
            name: Optional job name
        """

    @hookspec
    def contextcontainer_job_finish(
        self,
        container: ContextContainer,
        name: str | None,
        error: BaseException | None,
    ) -> None:
        """Called after the job body finishes, whether or not it failed.

        Args:
            container: Container for the job
            name: Optional job name
            error: Exception that ended the job, or None on success
        """
