"""Permission resolution.

This subpackage implements the resolution engine behind
:class:`~storage_access.control.StorageAccessControl`:

* **split_identifier** -- parsing of colon-separated identifiers into
  ``(name, full)`` segments.
* **compare_access_types** / **AccessTypeAllocator** -- the bit
  permission model.
* **build_tree** / **find_subtree** / **resolve_entry** /
  **check_file_accessible** -- access tree construction and resolution
  with ``exact -> * -> **/*`` precedence.
"""
from __future__ import annotations

from storage_access.access.bits import AccessTypeAllocator, compare_access_types
from storage_access.access.identifiers import DEFAULT_DELIMITER, split_identifier
from storage_access.access.tree import (
    build_tree,
    check_file_accessible,
    find_subtree,
    register_bit,
    resolve_entry,
)

__all__ = [
    "DEFAULT_DELIMITER",
    "AccessTypeAllocator",
    "build_tree",
    "check_file_accessible",
    "compare_access_types",
    "find_subtree",
    "register_bit",
    "resolve_entry",
    "split_identifier",
]
