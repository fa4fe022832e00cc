"""Storage access control -- the main orchestrator.

This module implements :class:`StorageAccessControl`, the primary entry
point of the package.  It owns the active access tree and the access
type allocator, and sequences every operation so that validation always
completes before any event callback runs.

Pipeline for :meth:`StorageAccessControl.access`
------------------------------------------------

1. **Parse** -- split the identifier into ``(name, full)`` segments.
2. **Descend** -- every ancestor must resolve to a directory.
3. **Check** -- the final segment must resolve to a leaf granting every
   requested bit.
4. **Enter** -- ``on_access_dir`` for each ancestor, root first.
5. **Open** -- ``on_access`` for the final segment; its result is
   returned as the accessor.

Usage
-----
::

    from storage_access import StorageAccess, StorageAccessControl
    from storage_access.core.interfaces import InMemoryStorageEvents

    control = StorageAccessControl(InMemoryStorageEvents())
    control.register({"config": {"app": StorageAccess.JSON}})
    accessor = control.access("config:app", StorageAccess.JSON)
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from storage_access.access.bits import AccessTypeAllocator, compare_access_types
from storage_access.access.identifiers import split_identifier
from storage_access.access.tree import (
    access_denied,
    build_tree,
    check_file_accessible,
    find_subtree,
    register_bit,
    resolve_entry,
)
from storage_access.core.config import StorageAccessConfig
from storage_access.core.errors import DirectoryAccessError, StorageAccessError
from storage_access.core.types import Directory, PathSegment

if TYPE_CHECKING:
    from storage_access.core.interfaces import StorageAccessEvents
    from storage_access.core.types import Node

logger = logging.getLogger(__name__)


class StorageAccessControl:
    """Grants or denies access to storages described by an access tree.

    Parameters
    ----------
    events:
        Collaborator whose callbacks perform the actual directory entry,
        access and release work.
    config:
        Optional configuration; defaults to :class:`StorageAccessConfig`.

    Notes
    -----
    Instances are not thread-safe.  Callers that ``register`` while
    other threads ``access`` or ``release`` must serialise those calls.
    """

    def __init__(
        self,
        events: StorageAccessEvents,
        config: StorageAccessConfig | None = None,
    ) -> None:
        self._events = events
        self._config = config or StorageAccessConfig()
        self._allocator = AccessTypeAllocator(self._config.first_access_type_bit)
        self._tree: Directory = Directory()

    @property
    def config(self) -> StorageAccessConfig:
        return self._config

    @property
    def tree(self) -> Directory:
        """The currently registered access tree."""
        return self._tree

    # -- Registration -------------------------------------------------------

    def register(self, tree: Mapping[str, Any] | Directory) -> None:
        """Replace the active access tree with *tree*.

        Nothing from the previous tree survives the swap.
        """
        self._tree = build_tree(tree)
        logger.debug("Registered access tree with %d root entries", len(self._tree))

    def add_access_type(self, name: str | None = None) -> int:
        """Allocate a new access kind bit.

        Raises
        ------
        AccessTypeExhausted
            Once every bit below ``StorageAccess.ANY`` has been handed out.
        """
        bit = self._allocator.allocate(name)
        logger.debug("Allocated access type %s as bit %#x", name or "<unnamed>", bit)
        return bit

    def access_type_name(self, bits: int) -> str:
        """Render *bits* using built-in and allocated access type names."""
        return self._allocator.describe(bits)

    # -- Access -------------------------------------------------------------

    def access(self, identifier: str, access_type: int) -> Any:
        """Validate and open the storage *identifier* for *access_type*.

        Returns
        -------
        Any
            Whatever ``events.on_access`` returned (the accessor).

        Raises
        ------
        ValueError
            *access_type* is negative.
        NotRegisteredError
            A segment matches no entry.
        DirectoryAccessError
            An ancestor is a leaf, or the target is a directory.
        AccessDeniedError
            The target does not grant every bit of *access_type*.
        """
        _check_access_type(access_type)
        segments = self._split(identifier)
        *ancestors, target = segments

        subtree = self._descend(ancestors)
        try:
            check_file_accessible(
                target.name, subtree, access_type, self._allocator.describe
            )
        except StorageAccessError:
            self._log_decision("Access to", identifier, access_type, "rejected")
            raise

        for segment in ancestors:
            self._events.on_access_dir(segment.full)
        self._log_decision("Access to", identifier, access_type, "granted")
        return self._events.on_access(target.full, access_type)

    def release(self, identifier: str, access_type: int | None = None) -> None:
        """Release the storage *identifier*.

        When *access_type* is given it is re-checked against the currently
        registered bitmask before ``on_release`` is invoked.

        Raises
        ------
        ValueError
            *access_type* is negative.
        AccessDeniedError
            *access_type* is not fully granted; ``on_release`` is skipped.
        """
        if access_type is not None:
            _check_access_type(access_type)
        registered = self.get_register_bit(identifier)

        if access_type is not None:
            comparison = compare_access_types(registered, access_type)
            if not comparison.granted:
                self._log_decision("Release of", identifier, access_type, "rejected")
                raise access_denied(
                    identifier, registered, access_type, comparison, self._allocator.describe
                )
        self._events.on_release(identifier)

    def release_dir(self, identifier: str) -> None:
        """Release the directory *identifier*.

        Raises
        ------
        DirectoryAccessError
            *identifier* does not resolve to a directory.  A leaf whose
            bitmask happens to equal ``DIR`` is still a leaf.
        """
        node = self._resolve(identifier)
        if not isinstance(node, Directory):
            logger.debug("Directory release of '%s' rejected", identifier)
            raise DirectoryAccessError(
                f"Storage '{identifier}' is not directory.",
                details={"identifier": identifier, "registered": int(register_bit(node))},
            )
        self._events.on_release_dir(identifier)

    def get_register_bit(self, identifier: str) -> int:
        """Return the registered bitmask for *identifier*.

        Directories report ``StorageAccess.DIR`` and unmatched final
        segments ``StorageAccess.NOTHING``.  Only ancestor resolution
        failures raise.
        """
        return register_bit(self._resolve(identifier))

    # -- Internal helpers ---------------------------------------------------

    def _split(self, identifier: str) -> list[PathSegment]:
        return split_identifier(
            identifier,
            self._config.delimiter,
            strict=self._config.strict_identifiers,
        )

    def _descend(self, ancestors: list[PathSegment]) -> Directory:
        subtree = self._tree
        for segment in ancestors:
            subtree = find_subtree(segment.name, subtree)
        return subtree

    def _resolve(self, identifier: str) -> Node | None:
        *ancestors, target = self._split(identifier)
        return resolve_entry(target.name, self._descend(ancestors))

    def _log_decision(
        self, action: str, identifier: str, access_type: int, outcome: str
    ) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "%s '%s' (%s) %s",
                action,
                identifier,
                self.access_type_name(access_type),
                outcome,
            )


def _check_access_type(access_type: int) -> None:
    if access_type < 0:
        raise ValueError(f"access_type must be non-negative: {access_type}")
