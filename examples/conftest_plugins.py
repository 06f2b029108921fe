"""
Example conftest.py showing how to supply plugins to the ``cc`` fixture.

Save this as conftest.py in your test directory. Application code receives a
container and asks it for plugins; tests decide which implementations that
container holds.
"""

from __future__ import annotations

from typing import Protocol

import pytest
from contextcontainer import (
    CC,
    ContextualSingleton,
    PluginReference,
    PluginSpec,
    create_plugin_reference,
)

# --- Application side (normally lives in your package) ---


class Mailer(Protocol):
    def send(self, to: str, body: str) -> None: ...


MailerPlugin: PluginReference[Mailer] = create_plugin_reference("mailer")


class AuthenticatedViewer(ContextualSingleton):
    _user_id: str | None = None

    def set(self, user_id: str) -> None:
        if self._user_id is not None:
            raise RuntimeError("Viewer already set")
        self._user_id = user_id

    def get(self) -> str:
        if self._user_id is None:
            raise RuntimeError("Viewer not set")
        return self._user_id


def send_welcome(cc: CC) -> None:
    viewer = cc.get_singleton(AuthenticatedViewer).get()
    cc.get_plugin(MailerPlugin).send(viewer, f"Welcome! ({cc.timestamp.isoformat()})")


# --- Test side ---


class OutboxMailer:
    """Mailer that keeps messages in memory."""

    def __init__(self) -> None:
        self.outbox: list[tuple[str, str]] = []

    def send(self, to: str, body: str) -> None:
        self.outbox.append((to, body))


@pytest.fixture
def outbox_mailer() -> OutboxMailer:
    return OutboxMailer()


@pytest.fixture
def cc_plugins(outbox_mailer: OutboxMailer) -> list[PluginSpec[Mailer]]:
    """Every ``cc`` in this directory gets the in-memory mailer."""
    return [PluginSpec(MailerPlugin, outbox_mailer)]


# A test using the fixtures above:
#
#   @pytest.mark.cc_timestamp("2021-01-01T00:00:00Z")
#   def test_send_welcome(cc, outbox_mailer):
#       cc.get_singleton(AuthenticatedViewer).set("user-1")
#       send_welcome(cc)
#       assert outbox_mailer.outbox == [("user-1", "Welcome! (2021-01-01T00:00:00+00:00)")]
