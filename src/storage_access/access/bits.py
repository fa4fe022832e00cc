"""Access bitmask comparison and access-type allocation.

Access kinds are single bits.  A registered leaf grants the union of
its bits; a request is granted only when every requested bit is
granted.  New kinds are handed out at runtime by doubling from the
lowest unused bit until the ``ANY`` ceiling is reached.
"""
from __future__ import annotations

from storage_access.core.errors import AccessTypeExhausted
from storage_access.core.types import (
    BUILTIN_ACCESS_NAMES,
    NEXT_STORAGE_ACCESS_TYPE_BIT,
    AccessComparison,
    StorageAccess,
)


def compare_access_types(allowed: int, requested: int) -> AccessComparison:
    """Split *requested* into the bits *allowed* grants and those it denies."""
    # plain ints: IntFlag inversion is bounded to the enum's own bit width
    allowed, requested = int(allowed), int(requested)
    granted = allowed & requested
    return AccessComparison(allowed=granted, denied=requested & ~granted)


class AccessTypeAllocator:
    """Monotonic allocator for custom access kinds.

    Parameters
    ----------
    first_bit:
        The first bit to hand out.  Must be a power of two.
    ceiling:
        Allocation fails once the next bit reaches this value.
    """

    def __init__(
        self,
        first_bit: int = NEXT_STORAGE_ACCESS_TYPE_BIT,
        ceiling: int = StorageAccess.ANY,
    ) -> None:
        self._next_bit = first_bit
        self._ceiling = ceiling
        self._names: dict[int, str] = dict(BUILTIN_ACCESS_NAMES)

    @property
    def next_bit(self) -> int:
        """The bit the next :meth:`allocate` call would return."""
        return self._next_bit

    def allocate(self, name: str | None = None) -> int:
        """Return a fresh access bit, optionally naming it.

        Raises
        ------
        AccessTypeExhausted
            If the next bit would reach the ceiling.
        """
        bit = self._next_bit
        if bit >= self._ceiling:
            raise AccessTypeExhausted(
                details={"next_bit": bit, "ceiling": int(self._ceiling)},
            )
        self._next_bit <<= 1
        if name is not None:
            self._names[bit] = name
        return bit

    def describe(self, bits: int) -> str:
        """Render *bits* as ``"NAME|NAME"``.

        Unnamed bits render as ``UNKNOWN``; zero renders as ``NOTHING``.
        Bits outside ``ANY | DIR``, including the sign of a negative value,
        also count as unknown.
        """
        if bits == StorageAccess.NOTHING:
            return "NOTHING"
        labels: list[str] = []
        mask = int(StorageAccess.ANY | StorageAccess.DIR)
        unknown = bool(int(bits) & ~mask)
        remaining = int(bits) & mask
        while remaining:
            bit = remaining & -remaining
            remaining ^= bit
            name = self._names.get(bit)
            if name is None:
                unknown = True
            else:
                labels.append(name)
        if unknown:
            labels.append("UNKNOWN")
        return "|".join(labels)
