"""Storage access control interfaces and in-memory implementations.

This module defines the *structural* interfaces (``typing.Protocol``)
for the collaborators the access-control engine talks to, plus a
lightweight in-memory event collaborator suitable for testing and local
development.

Every Protocol class is decorated with ``@runtime_checkable`` so that
``isinstance`` checks work at run-time in addition to static analysis.

In-memory implementations are **not** thread-safe.
"""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from storage_access.accessor.memory import (
    MemBinaryAccessor,
    MemJSONAccessor,
    MemoryBacking,
    MemTextAccessor,
)
from storage_access.core.types import StorageAccess

# ===================================================================
# Protocol (interface) definitions
# ===================================================================

@runtime_checkable
class Accessor(Protocol):
    """Capability object returned by a successful access.

    The engine never inspects accessors; it hands back whatever the
    event collaborator produced.
    """

    def read(self) -> Any:
        """Return the current contents of the storage."""
        ...

    def write(self, data: Any) -> None:
        """Replace the contents of the storage with *data*."""
        ...

    def exists(self) -> bool:
        """Return ``True`` if the storage holds any contents."""
        ...

    def erase(self) -> None:
        """Remove the storage contents."""
        ...


@runtime_checkable
class StorageAccessEvents(Protocol):
    """Callbacks invoked by the engine once validation has passed.

    Implemented by the storage backend.  Exceptions raised here
    propagate to the caller of the engine unmodified.
    """

    def on_access_dir(self, full_path: str) -> None:
        """Enter the directory *full_path*.

        Called once per ancestor segment, root first, on every access.
        The return value is ignored.
        """
        ...

    def on_access(self, full_path: str, access_type: int) -> Any:
        """Open the storage *full_path* and return its accessor."""
        ...

    def on_release(self, full_path: str) -> None:
        """Release the storage *full_path*."""
        ...

    def on_release_dir(self, full_path: str) -> None:
        """Release the directory *full_path*."""
        ...


# ===================================================================
# In-memory implementations (testing / development)
# ===================================================================

class InMemoryStorageEvents:
    """In-memory event collaborator for testing and development.

    Every callback is recorded in :attr:`calls` as a ``(hook, *args)``
    tuple, in invocation order.  ``on_access`` hands out an in-memory
    accessor chosen from the requested bits (JSON, then TEXT, then
    BINARY; anything else gets a binary accessor).  All accessors share
    one :class:`MemoryBacking`.
    """

    def __init__(self, backing: MemoryBacking | None = None) -> None:
        self.backing = backing if backing is not None else MemoryBacking()
        self.calls: list[tuple[Any, ...]] = []

    # -- inspection helpers (not part of the Protocol) -----------------

    def hooks(self) -> list[str]:
        """Return the hook names recorded so far (test helper)."""
        return [call[0] for call in self.calls]

    def clear(self) -> None:
        """Forget recorded calls (test helper)."""
        self.calls.clear()

    # -- Protocol implementation ---------------------------------------

    def on_access_dir(self, full_path: str) -> None:
        self.calls.append(("on_access_dir", full_path))

    def on_access(self, full_path: str, access_type: int) -> Any:
        self.calls.append(("on_access", full_path, access_type))
        if access_type & StorageAccess.JSON:
            return MemJSONAccessor(full_path, self.backing)
        if access_type & StorageAccess.TEXT:
            return MemTextAccessor(full_path, self.backing)
        return MemBinaryAccessor(full_path, self.backing)

    def on_release(self, full_path: str) -> None:
        self.calls.append(("on_release", full_path))

    def on_release_dir(self, full_path: str) -> None:
        self.calls.append(("on_release_dir", full_path))
