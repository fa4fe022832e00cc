"""Storage accessors.

Capability objects returned by a successful
:meth:`~storage_access.control.StorageAccessControl.access` call:

* **MemBinaryAccessor** -- raw bytes.
* **MemJSONAccessor** -- a JSON object with key-level helpers.
* **MemTextAccessor** -- text.
* **MemoryBacking** -- shared content store for the in-memory accessors.
"""
from __future__ import annotations

from storage_access.accessor.memory import (
    MemBinaryAccessor,
    MemJSONAccessor,
    MemoryBacking,
    MemTextAccessor,
)

__all__ = [
    "MemBinaryAccessor",
    "MemJSONAccessor",
    "MemTextAccessor",
    "MemoryBacking",
]
