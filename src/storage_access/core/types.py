"""Storage access control shared domain types.

This module defines the value types shared across the access-control
engine.

Key design decisions:
* ``StorageAccess`` is an ``enum.IntFlag`` so built-in kinds combine with
  ``|`` and compare equal to plain integers.  Kinds allocated at runtime
  are plain ``int`` bits above ``TEXT``.
* ``DIR`` lives outside ``ANY`` so that a leaf granting every kind never
  reads as a directory.
* The access tree is an explicit tagged variant (:class:`Leaf` |
  :class:`Directory`); resolution sites match on the node class instead
  of inspecting raw mapping values.
"""
from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import NamedTuple, TypeAlias

# ---------------------------------------------------------------------------
# Access bitmask
# ---------------------------------------------------------------------------

class StorageAccess(enum.IntFlag):
    """Reserved access bits.

    * ``NOTHING`` -- no access
    * ``BINARY`` / ``JSON`` / ``TEXT`` -- built-in access kinds
    * ``ANY`` -- every kind bit; also the allocation ceiling
    * ``DIR`` -- sentinel reported for directory nodes
    """

    NOTHING = 0
    BINARY = 1 << 0
    JSON = 1 << 1
    TEXT = 1 << 2
    ANY = (1 << 31) - 1
    DIR = 1 << 31


NEXT_STORAGE_ACCESS_TYPE_BIT = 1 << 3
"""First bit handed out by :meth:`AccessTypeAllocator.allocate`."""

BUILTIN_ACCESS_NAMES: dict[int, str] = {
    int(StorageAccess.BINARY): "BINARY",
    int(StorageAccess.JSON): "JSON",
    int(StorageAccess.TEXT): "TEXT",
}


# ---------------------------------------------------------------------------
# Access tree (tagged variant)
# ---------------------------------------------------------------------------

WILDCARD = "*"
"""Matches exactly one otherwise-unmatched segment at its level."""

DEEP_WILDCARD = "**/*"
"""Matches its level and every deeper unmatched segment."""


@dataclass(frozen=True, slots=True)
class Leaf:
    """A concrete storage: the bitmask of access kinds it allows."""

    bits: int


@dataclass(frozen=True, slots=True)
class Directory:
    """A nested level of the access tree."""

    entries: Mapping[str, Node] = field(default_factory=dict)

    def __contains__(self, name: object) -> bool:
        return name in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, name: str) -> Node | None:
        return self.entries.get(name)


Node: TypeAlias = "Leaf | Directory"

AccessTree: TypeAlias = "Mapping[str, int | AccessTree]"
"""Externally authored form of the tree: segment -> bitmask | mapping."""


# ---------------------------------------------------------------------------
# Identifier segments and comparison results
# ---------------------------------------------------------------------------

class PathSegment(NamedTuple):
    """One parsed identifier segment.

    ``full`` is the cumulative identifier up to and including ``name``.
    """

    name: str
    full: str


@dataclass(frozen=True, slots=True)
class AccessComparison:
    """Result of comparing a requested bitmask against an allowed one.

    Attributes
    ----------
    allowed:
        Requested bits the registered bitmask grants.
    denied:
        Requested bits the registered bitmask does not grant.
    """

    allowed: int
    denied: int

    @property
    def granted(self) -> bool:
        """``True`` when no requested bit was denied."""
        return self.denied == 0
