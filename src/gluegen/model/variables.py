"""Declarations and located variables.

A Declaration is one parsed line of ``LOCATED_VARIABLES.h``. A
LocatedVariable is the same declaration with its address decoded into
major/minor indices. Direction and size are not stored: they are read
structurally from the name (``__IX0_1`` -> direction I, size X).
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .types import BIT_FLAG, GROUP_FLAG, LocationDirection, LocationSize


class Declaration(BaseModel):
    """A ``(type, name)`` pair read from one input line."""

    name: str
    type: str
    line_number: int = 0
    raw: str = ""


class LocatedVariable(BaseModel):
    """A declaration with its address indices decoded."""

    name: str
    type: str
    major_index: int = Field(ge=0)
    minor_index: int = Field(default=0, ge=0)

    @property
    def direction_flag(self) -> str:
        return self.name[2]

    @property
    def size_flag(self) -> str:
        return self.name[3]

    @property
    def direction(self) -> LocationDirection:
        return LocationDirection.from_flag(self.direction_flag)

    @property
    def size(self) -> LocationSize:
        return LocationSize.from_flag(self.size_flag)

    @property
    def is_bit(self) -> bool:
        return self.size_flag == BIT_FLAG

    @property
    def is_group(self) -> bool:
        return self.size_flag == GROUP_FLAG
