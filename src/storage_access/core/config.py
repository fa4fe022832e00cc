"""Storage access control configuration.

Defines the validated configuration model consumed by
:class:`~storage_access.control.StorageAccessControl`.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storage_access.core.types import NEXT_STORAGE_ACCESS_TYPE_BIT, StorageAccess


class StorageAccessConfig(BaseModel):
    """Configuration for a storage access control instance.

    All fields carry sensible defaults, so
    ``StorageAccessConfig()`` is sufficient for most callers.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    delimiter: str = Field(
        default=":",
        min_length=1,
        description="Separator between identifier segments.",
    )
    strict_identifiers: bool = Field(
        default=False,
        description=(
            "When True, identifiers with empty segments (leading, "
            "trailing or doubled delimiters) are rejected with "
            "MalformedIdentifier instead of being resolved as-is."
        ),
    )
    first_access_type_bit: int = Field(
        default=NEXT_STORAGE_ACCESS_TYPE_BIT,
        gt=int(StorageAccess.TEXT),
        lt=int(StorageAccess.ANY),
        description="First bit handed out when allocating access types.",
    )

    @field_validator("first_access_type_bit")
    @classmethod
    def _power_of_two(cls, value: int) -> int:
        if value & (value - 1):
            raise ValueError("first_access_type_bit must be a power of two")
        return value
