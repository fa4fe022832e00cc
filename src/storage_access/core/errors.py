"""Storage access control error hierarchy.

Every failure the access-control engine can raise is represented as a
concrete exception class carrying a stable error code.

Hierarchy
---------
::

    StorageAccessError              SA-E000
    +-- NotRegisteredError          SA-E100
    +-- DirectoryAccessError        SA-E101
    +-- AccessDeniedError           SA-E102
    +-- AccessTypeExhausted         SA-E103
    +-- MalformedIdentifier         SA-E104

Usage
-----
Raise concrete subclasses directly::

    raise NotRegisteredError("FSStorage 'config' is not registered.")

Catch everything the engine raises::

    try:
        control.access("config:app", StorageAccess.JSON)
    except StorageAccessError as exc:
        report(exc.to_dict())
"""
from __future__ import annotations

from typing import Any

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

class StorageAccessError(Exception):
    """Base exception for all storage access control errors.

    Attributes
    ----------
    code : str
        Error code, e.g. ``"SA-E100"``.
    message : str
        Human-readable description.
    details : dict[str, Any]
        Machine-readable context specific to the error instance.
    resolution : str
        Suggested action for the caller.
    """

    code: str = "SA-E000"
    message: str = "Storage access error"
    resolution: str = ""

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        resolution: str | None = None,
    ) -> None:
        self.details: dict[str, Any] = details or {}
        if message is not None:
            self.message = message
        if resolution is not None:
            self.resolution = resolution
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialise the error to a plain error payload."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            payload["detail"] = self.details
        if self.resolution:
            payload["resolution"] = self.resolution
        return {"error": payload}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


# ===================================================================
# Concrete errors
# ===================================================================

class NotRegisteredError(StorageAccessError):
    """SA-E100 -- No exact, ``*`` or ``**/*`` entry matches a segment."""

    code = "SA-E100"
    message = "Storage is not registered"
    resolution = (
        "Register the path (or a covering wildcard) in the access tree."
    )


class DirectoryAccessError(StorageAccessError):
    """SA-E101 -- A segment resolved to the wrong node kind.

    Raised when an intermediate segment is a leaf, when the final
    segment is a directory, or when ``release_dir`` targets something
    that is not a directory.
    """

    code = "SA-E101"
    message = "Storage node kind does not match the requested operation"
    resolution = (
        "Use access/release for leaf storages and release_dir for "
        "directories."
    )


class AccessDeniedError(StorageAccessError):
    """SA-E102 -- The registered bitmask does not cover the request."""

    code = "SA-E102"
    message = "Storage is not accessible with the requested access type"
    resolution = (
        "Request only access types granted by the access tree, or "
        "widen the registered bitmask."
    )


class AccessTypeExhausted(StorageAccessError):
    """SA-E103 -- No free bit is left for a new access type."""

    code = "SA-E103"
    message = "Max access type reached"
    resolution = "Reuse an existing access type."


class MalformedIdentifier(StorageAccessError):
    """SA-E104 -- The identifier contains an empty segment (strict mode)."""

    code = "SA-E104"
    message = "Storage identifier is malformed"
    resolution = (
        "Remove leading, trailing or doubled delimiters from the "
        "identifier."
    )


# ===================================================================
# Code lookup
# ===================================================================

_CODE_MAP: dict[str, type[StorageAccessError]] = {
    cls.code: cls
    for cls in [
        StorageAccessError,
        NotRegisteredError,
        DirectoryAccessError,
        AccessDeniedError,
        AccessTypeExhausted,
        MalformedIdentifier,
    ]
}


def error_from_code(code: str, message: str | None = None) -> StorageAccessError:
    """Instantiate the correct exception class for an error code.

    Parameters
    ----------
    code:
        An error code such as ``"SA-E102"``.
    message:
        Optional override for the default error message.

    Raises
    ------
    KeyError
        If *code* is not a recognised error code.
    """
    cls = _CODE_MAP[code]
    return cls(message) if message else cls()
