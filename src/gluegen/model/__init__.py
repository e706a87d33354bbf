"""Data models for located variables and the glue they produce."""

from .glue import BOOL_GROUP_SIZE, BoolGroup, BufferAssignment, GlueModule
from .types import (
    DIRECTION_ORDER,
    GlueValueType,
    LocationDirection,
    LocationSize,
)
from .variables import Declaration, LocatedVariable

__all__ = [
    "BOOL_GROUP_SIZE",
    "BoolGroup",
    "BufferAssignment",
    "DIRECTION_ORDER",
    "Declaration",
    "GlueModule",
    "GlueValueType",
    "LocatedVariable",
    "LocationDirection",
    "LocationSize",
]
