"""Capability token gating construction of contextual singletons."""

from __future__ import annotations

import secrets

from ..core.errors import ConstructionIntegrityError

# Generated once per process; never exported.
_TOKEN = secrets.token_bytes(32)


def assert_constructed_by_container(token: object, cls: type | None = None) -> None:
    """Raise ConstructionIntegrityError unless *token* is the process secret."""
    if not isinstance(token, bytes) or not secrets.compare_digest(token, _TOKEN):
        raise ConstructionIntegrityError(cls)


class ProofOfBeingCalledByContextContainer:
    """Proof object handed to ``ContextualSingleton.__new__``.

    Building one requires the process secret, so only the singleton registry
    can produce a valid instance.
    """

    __slots__ = ("_token",)

    def __init__(self, token: bytes) -> None:
        assert_constructed_by_container(token)
        self._token = token

    def verify(self, cls: type | None = None) -> None:
        assert_constructed_by_container(self._token, cls)


def issue_proof() -> ProofOfBeingCalledByContextContainer:
    return ProofOfBeingCalledByContextContainer(_TOKEN)
