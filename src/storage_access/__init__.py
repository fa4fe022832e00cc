"""Storage Access Control.

Grants or denies access to hierarchically named storages (identifiers of
colon-separated segments) using a declarative permission tree of leaf
bitmasks and nested directories, with ``*`` and ``**/*`` wildcards.

Layout
------
* :mod:`storage_access.control` -- the :class:`StorageAccessControl` facade.
* :mod:`storage_access.access` -- identifier parsing, bit model and tree
  resolution.
* :mod:`storage_access.accessor` -- in-memory accessors.
* ``storage_access.core`` -- shared types, errors, configuration and
  collaborator interfaces.
"""
from __future__ import annotations

__version__ = "1.0.0"

from storage_access.access import (
    AccessTypeAllocator,
    build_tree,
    compare_access_types,
    split_identifier,
)
from storage_access.accessor import (
    MemBinaryAccessor,
    MemJSONAccessor,
    MemoryBacking,
    MemTextAccessor,
)
from storage_access.control import StorageAccessControl
from storage_access.core.config import StorageAccessConfig
from storage_access.core.errors import (
    AccessDeniedError,
    AccessTypeExhausted,
    DirectoryAccessError,
    MalformedIdentifier,
    NotRegisteredError,
    StorageAccessError,
    error_from_code,
)
from storage_access.core.interfaces import (
    Accessor,
    InMemoryStorageEvents,
    StorageAccessEvents,
)
from storage_access.core.types import (
    DEEP_WILDCARD,
    NEXT_STORAGE_ACCESS_TYPE_BIT,
    WILDCARD,
    AccessComparison,
    Directory,
    Leaf,
    PathSegment,
    StorageAccess,
)

__all__ = [
    "__version__",
    # Facade
    "StorageAccessControl",
    "StorageAccessConfig",
    # Types
    "StorageAccess",
    "NEXT_STORAGE_ACCESS_TYPE_BIT",
    "WILDCARD",
    "DEEP_WILDCARD",
    "AccessComparison",
    "Directory",
    "Leaf",
    "PathSegment",
    # Resolution
    "AccessTypeAllocator",
    "build_tree",
    "compare_access_types",
    "split_identifier",
    # Errors
    "StorageAccessError",
    "NotRegisteredError",
    "DirectoryAccessError",
    "AccessDeniedError",
    "AccessTypeExhausted",
    "MalformedIdentifier",
    "error_from_code",
    # Collaborators
    "Accessor",
    "StorageAccessEvents",
    "InMemoryStorageEvents",
    "MemBinaryAccessor",
    "MemJSONAccessor",
    "MemTextAccessor",
    "MemoryBacking",
]
