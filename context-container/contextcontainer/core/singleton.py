"""Base class for per-container singletons."""

from __future__ import annotations

from typing import Any, TypeVar

from .._impl.proof import ProofOfBeingCalledByContextContainer
from .errors import ConstructionIntegrityError

S = TypeVar("S", bound="ContextualSingleton")


class ContextualSingleton:
    """A class with at most one instance per context container.

    The first ``cc.get_singleton(YourSingleton)`` creates the instance and
    stores it in the container; later calls return the same instance.

    Never construct a subclass directly. If the singleton needs data, give it
    an ``initialize``/``set_*`` method and call that after retrieval::

        class AuthenticatedViewer(ContextualSingleton):
            _viewer: Viewer | None = None

            def set(self, viewer: Viewer) -> None:
                if self._viewer is not None:
                    raise RuntimeError("Viewer already set")
                self._viewer = viewer

            def get(self) -> Viewer:
                if self._viewer is None:
                    raise RuntimeError("Viewer not set")
                return self._viewer

        cc.get_singleton(AuthenticatedViewer).set(authenticate(request))
        ...
        viewer = cc.get_singleton(AuthenticatedViewer).get()

    Subclasses that override ``__init__`` must accept the proof argument and
    pass it to ``super().__init__``.
    """

    def __new__(cls: type[S], proof: Any = None, *args: Any, **kwargs: Any) -> S:
        if not isinstance(proof, ProofOfBeingCalledByContextContainer):
            raise ConstructionIntegrityError(cls)
        proof.verify(cls)
        return super().__new__(cls)

    def __init__(self, proof: ProofOfBeingCalledByContextContainer) -> None:
        pass


__all__ = ["ContextualSingleton"]
