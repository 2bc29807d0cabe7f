"""Pytest fixtures for the credit scrutiny test suite.

All tests are network-isolated - socket connections are blocked by default.
"""

from __future__ import annotations

import socket

import pytest

from credit_scrutiny.application.taxonomy_catalog import default_registry
from credit_scrutiny.domain.taxonomy import TaxonomyRegistry
from tests.fakes import InMemoryFileSystem
from tests.support.errors import NetworkIsolationError
from tests.support.taxonomy import make_small_registry

# =============================================================================
# Network Isolation - Block all socket connections in tests
# =============================================================================


def _blocked_socket_connect(self: socket.socket, *args: object, **kwargs: object) -> None:
    """Raise an error if any test tries to make a real network connection."""
    _ = (self, kwargs)
    raise NetworkIsolationError(str(args))


@pytest.fixture(autouse=True)
def block_network_access(monkeypatch: pytest.MonkeyPatch) -> None:
    """Block all network access in tests.

    The engine performs no I/O beyond reading reference data; any socket use is a bug.
    """
    monkeypatch.setattr(socket.socket, "connect", _blocked_socket_connect)


@pytest.fixture
def registry() -> TaxonomyRegistry:
    """The bundled Thai sector taxonomy."""
    return default_registry()


@pytest.fixture
def small_registry() -> TaxonomyRegistry:
    """A hand-built taxonomy with known ordering for lookup tests."""
    return make_small_registry()


@pytest.fixture
def in_memory_fs() -> InMemoryFileSystem:
    """Provide an in-memory filesystem for tests."""
    return InMemoryFileSystem()
