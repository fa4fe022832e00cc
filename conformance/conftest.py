"""Shared fixtures for storage access control conformance tests.

Provides the reference tree, a recording event collaborator and a
facade wired to both.
"""
from __future__ import annotations

from typing import Any

import pytest

from storage_access.control import StorageAccessControl
from storage_access.core.interfaces import InMemoryStorageEvents
from storage_access.core.types import StorageAccess

# ---------------------------------------------------------------------------
# Reference tree
# ---------------------------------------------------------------------------
REFERENCE_TREE: dict[str, Any] = {
    "a": {
        "b": StorageAccess.BINARY,
        "*": {"**/*": StorageAccess.ANY},
    },
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def events() -> InMemoryStorageEvents:
    return InMemoryStorageEvents()


@pytest.fixture()
def control(events: InMemoryStorageEvents) -> StorageAccessControl:
    control = StorageAccessControl(events)
    control.register(REFERENCE_TREE)
    return control


@pytest.fixture()
def bare_control(events: InMemoryStorageEvents) -> StorageAccessControl:
    """A facade with nothing registered."""
    return StorageAccessControl(events)
