"""Top-level GlueModule container and the structures it owns."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from .types import GROUP_FLAG, LocationDirection
from .variables import LocatedVariable

BOOL_GROUP_SIZE = 8


class BoolGroup(BaseModel):
    """Up to eight bit variables sharing a direction and major index.

    ``slots[minor]`` holds the access name of the bit declared at that
    position, or None when nothing was declared there.
    """

    direction: LocationDirection
    major_index: int = Field(ge=0)
    slots: list[str | None] = Field(
        default_factory=lambda: [None] * BOOL_GROUP_SIZE,
    )

    @field_validator("slots")
    @classmethod
    def _eight_slots(cls, v: list[str | None]) -> list[str | None]:
        if len(v) != BOOL_GROUP_SIZE:
            raise ValueError(
                f"a bool group has exactly {BOOL_GROUP_SIZE} slots, got {len(v)}"
            )
        return v

    @property
    def name(self) -> str:
        """Group name, e.g. ``IG0`` for %IX0.x."""
        return f"{self.direction.flag}{GROUP_FLAG}{self.major_index}"

    @property
    def access_name(self) -> str:
        """Name of the group pointer referenced from the integrated glue."""
        return f"__{self.name}"

    @property
    def assigned(self) -> list[int]:
        return [i for i, s in enumerate(self.slots) if s is not None]


class BufferAssignment(BaseModel):
    """One pointer assignment into a classical glue buffer."""

    buffer: str
    index: int
    minor_index: int | None = None
    access_name: str
    cast: str | None = None


class GlueModule(BaseModel):
    """Everything one generation run derives from its declarations.

    Both emission passes (classical buffers and integrated glue) read
    from this value; neither modifies it.
    """

    variables: list[LocatedVariable] = []
    groups: list[BoolGroup] = []
    assignments: list[BufferAssignment] = []
    checksum: bytes = b""
    diagnostics: list[str] = []
    declaration_count: int = 0

    @property
    def table_size(self) -> int:
        return len(self.variables)

    def group(self, direction: LocationDirection, major_index: int) -> BoolGroup | None:
        for g in self.groups:
            if g.direction == direction and g.major_index == major_index:
                return g
        return None
