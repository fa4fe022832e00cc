"""Storage identifier parsing.

An identifier is a list of segments joined by a delimiter, e.g.
``"config:app:settings"``.  Parsing yields one
:class:`~storage_access.core.types.PathSegment` per segment carrying
the bare name and the cumulative identifier up to that segment; the
cumulative form is what the event callbacks receive.

Splitting is permissive by default: empty segments produced by leading,
trailing or doubled delimiters are passed through unchanged and simply
fail to match anything but a wildcard.  Pass ``strict=True`` to reject
them instead.
"""
from __future__ import annotations

from storage_access.core.errors import MalformedIdentifier
from storage_access.core.types import PathSegment

DEFAULT_DELIMITER = ":"


def split_identifier(
    identifier: str,
    delimiter: str = DEFAULT_DELIMITER,
    *,
    strict: bool = False,
) -> list[PathSegment]:
    """Split *identifier* into ordered ``(name, full)`` segments.

    Parameters
    ----------
    identifier:
        The identifier to split.
    delimiter:
        Segment separator.
    strict:
        Reject identifiers containing an empty segment.

    Returns
    -------
    list[PathSegment]
        Always at least one segment (``""`` splits to ``[("", "")]``).

    Raises
    ------
    MalformedIdentifier
        If *strict* is set and a segment is empty.
    """
    names = identifier.split(delimiter)
    if strict and "" in names:
        raise MalformedIdentifier(
            f"Storage identifier '{identifier}' has an empty segment.",
            details={"identifier": identifier, "segment": names.index("")},
        )
    return [
        PathSegment(name, delimiter.join(names[: index + 1]))
        for index, name in enumerate(names)
    ]
