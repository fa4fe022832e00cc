"""Access tree construction and resolution.

The access tree maps segment names to either a :class:`Leaf` (the
bitmask of access kinds a storage allows) or a nested
:class:`Directory`.  Two reserved keys apply at every level:

* ``*`` -- matches exactly one otherwise-unmatched segment.
* ``**/*`` -- matches this segment and keeps matching every deeper
  unmatched segment.

Lookup precedence at each level is **exact name -> ``*`` -> ``**/*``**.

Resolution comes in two shapes:

1. **Directory descent** (:func:`find_subtree`) for every segment but
   the last: the match must be a directory.  ``*`` is only considered
   when it is itself a directory.  A ``**/*`` match yields a synthetic
   one-entry directory so the rule persists to arbitrary depth.
2. **Leaf resolution** for the final segment, built on a single
   resolver (:func:`resolve_entry`):

   * :func:`register_bit` -- permissive; reports ``DIR`` / bits /
     ``NOTHING``.
   * :func:`check_file_accessible` -- enforcing; raises on directory,
     missing entry, or denied bits.
"""
from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from storage_access.access.bits import compare_access_types
from storage_access.core.errors import (
    AccessDeniedError,
    DirectoryAccessError,
    NotRegisteredError,
)
from storage_access.core.types import (
    DEEP_WILDCARD,
    WILDCARD,
    AccessComparison,
    Directory,
    Leaf,
    Node,
    StorageAccess,
)

# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def build_tree(tree: Mapping[str, Any] | Directory) -> Directory:
    """Convert an externally authored nested mapping into a :class:`Directory`.

    Integer values become :class:`Leaf` nodes and mappings become nested
    directories.  Already-built directories are copied level by level, so
    later changes to the caller's entry mappings never reach the result.

    Raises
    ------
    TypeError
        If a key is not a string, or a value is neither an integer nor
        a mapping.
    ValueError
        If a leaf bitmask is negative.
    """
    if isinstance(tree, Directory):
        tree = tree.entries
    if not isinstance(tree, Mapping):
        raise TypeError(f"Expected a mapping, got {type(tree).__name__}")
    return Directory({_check_key(key): _build_node(key, value) for key, value in tree.items()})


def _check_key(key: Any) -> str:
    if not isinstance(key, str):
        raise TypeError(f"Access tree keys must be str, got {type(key).__name__}")
    return key


def _build_node(key: str, value: Any) -> Node:
    if isinstance(value, Leaf):
        return value
    if isinstance(value, Directory):
        return build_tree(value)
    # bool is an int subclass but never a meaningful bitmask
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            raise ValueError(f"Access bitmask for '{key}' must be non-negative: {value}")
        return Leaf(int(value))
    if isinstance(value, Mapping):
        return build_tree(value)
    raise TypeError(
        f"Access tree entry '{key}' must be an int bitmask or a mapping, "
        f"got {type(value).__name__}"
    )


# ---------------------------------------------------------------------------
# Directory descent
# ---------------------------------------------------------------------------

def find_subtree(name: str, tree: Directory) -> Directory:
    """Descend from *tree* into the directory matching *name*.

    Raises
    ------
    DirectoryAccessError
        If *name* matches a leaf exactly.
    NotRegisteredError
        If neither *name*, a directory ``*``, nor ``**/*`` is present.
    """
    exact = tree.get(name)
    if exact is not None:
        if isinstance(exact, Leaf):
            raise DirectoryAccessError(
                f"Directory storage '{name}' is not accessible.",
                details={"segment": name},
            )
        return exact

    single = tree.get(WILDCARD)
    if isinstance(single, Directory):
        return single

    deep = tree.get(DEEP_WILDCARD)
    if deep is None:
        raise NotRegisteredError(
            f"Storage '{name}' is not registered.",
            details={"segment": name},
        )
    return Directory({DEEP_WILDCARD: deep})


# ---------------------------------------------------------------------------
# Leaf resolution
# ---------------------------------------------------------------------------

def resolve_entry(name: str, tree: Directory) -> Node | None:
    """Return the node *name* resolves to in *tree*, or ``None``."""
    for key in (name, WILDCARD, DEEP_WILDCARD):
        node = tree.get(key)
        if node is not None:
            return node
    return None


def register_bit(node: Node | None) -> int:
    """Report the effective bitmask of a resolved node.

    Directories report ``DIR`` and missing entries ``NOTHING``.
    """
    if node is None:
        return StorageAccess.NOTHING
    if isinstance(node, Directory):
        return StorageAccess.DIR
    return node.bits


def check_file_accessible(
    name: str,
    tree: Directory,
    access_type: int,
    describe: Callable[[int], str] | None = None,
) -> AccessComparison:
    """Require *name* to be a leaf in *tree* that grants *access_type*.

    Parameters
    ----------
    name:
        Final identifier segment.
    tree:
        Directory reached by descending the ancestor segments.
    access_type:
        Requested bitmask.
    describe:
        Optional renderer for denied bits used in the error message.

    Raises
    ------
    NotRegisteredError
        If nothing matches *name*.
    DirectoryAccessError
        If *name* resolves to a directory.
    AccessDeniedError
        If any requested bit is not granted.
    """
    node = resolve_entry(name, tree)
    if node is None:
        raise NotRegisteredError(
            f"Storage '{name}' is not registered.",
            details={"segment": name},
        )
    if isinstance(node, Directory):
        raise DirectoryAccessError(
            f"Storage '{name}' is directory.",
            details={"segment": name},
        )
    comparison = compare_access_types(node.bits, access_type)
    if not comparison.granted:
        raise access_denied(name, node.bits, access_type, comparison, describe)
    return comparison


def access_denied(
    identifier: str,
    registered: int,
    requested: int,
    comparison: AccessComparison,
    describe: Callable[[int], str] | None = None,
) -> AccessDeniedError:
    """Build the :class:`AccessDeniedError` for a failed comparison."""
    label = describe(comparison.denied) if describe is not None else "UNKNOWN"
    return AccessDeniedError(
        f"Storage '{identifier}' is not accessible. '{label}'",
        details={
            "identifier": identifier,
            "registered": int(registered),
            "requested": int(requested),
            "allowed": int(comparison.allowed),
            "denied": int(comparison.denied),
        },
    )
