"""In-memory storage accessors.

Accessors are the capability objects handed back by a successful
``access`` call.  The implementations here keep their contents in a
:class:`MemoryBacking` keyed by the full storage identifier, so two
accessors opened over the same identifier observe each other's writes.

These are intended for testing and local development.  They are NOT
thread-safe.
"""
from __future__ import annotations

import copy
import json
from typing import Any


class MemoryBacking:
    """Shared in-memory content store keyed by full identifier."""

    def __init__(self) -> None:
        self._contents: dict[str, Any] = {}

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._contents

    def load(self, identifier: str, default: Any = None) -> Any:
        return self._contents.get(identifier, default)

    def store(self, identifier: str, value: Any) -> None:
        self._contents[identifier] = value

    def discard(self, identifier: str) -> None:
        self._contents.pop(identifier, None)


class _MemAccessor:
    """Common plumbing for the in-memory accessors."""

    __slots__ = ("_backing", "_identifier")

    def __init__(self, identifier: str, backing: MemoryBacking | None = None) -> None:
        self._identifier = identifier
        self._backing = backing if backing is not None else MemoryBacking()

    @property
    def identifier(self) -> str:
        return self._identifier

    def exists(self) -> bool:
        return self._identifier in self._backing

    def erase(self) -> None:
        self._backing.discard(self._identifier)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._identifier!r})"


class MemBinaryAccessor(_MemAccessor):
    """Reads and writes raw bytes."""

    __slots__ = ()

    def read(self) -> bytes:
        return self._backing.load(self._identifier, b"")

    def write(self, data: bytes | bytearray) -> None:
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError(f"Expected bytes, got {type(data).__name__}")
        self._backing.store(self._identifier, bytes(data))


class MemTextAccessor(_MemAccessor):
    """Reads and writes text."""

    __slots__ = ()

    def read(self) -> str:
        return self._backing.load(self._identifier, "")

    def write(self, data: str) -> None:
        if not isinstance(data, str):
            raise TypeError(f"Expected str, got {type(data).__name__}")
        self._backing.store(self._identifier, data)


class MemJSONAccessor(_MemAccessor):
    """Reads and writes a JSON object.

    Written data must be JSON-serialisable; it is round-tripped through
    :mod:`json` so callers never share mutable state with the backing.
    """

    __slots__ = ()

    def read(self) -> dict[str, Any]:
        return copy.deepcopy(self._backing.load(self._identifier, {}))

    def write(self, data: dict[str, Any]) -> None:
        if not isinstance(data, dict):
            raise TypeError(f"Expected dict, got {type(data).__name__}")
        self._backing.store(self._identifier, json.loads(json.dumps(data)))

    def get(self, key: str, default: Any = None) -> Any:
        return self.read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self.read()
        data[key] = value
        self.write(data)
