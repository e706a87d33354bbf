"""Location and value tags for glued variables.

Three independent tag families describe every row of the integrated glue:
- LocationDirection: where the variable lives (%I, %Q, %M).
- LocationSize: how wide the location is (X, B, W, D, L).
- GlueValueType: the IEC 61131-3 elementary type behind the pointer.

Each enum's value is the suffix used in the generated C++ enumerators
(``IECLDT_IN``, ``IECLST_BIT``, ``IECVT_BOOL`` ...).
"""

from __future__ import annotations

from enum import Enum


# ---------------------------------------------------------------------------
# Location direction
# ---------------------------------------------------------------------------

class LocationDirection(str, Enum):
    """Direction of a located variable, from the I/Q/M flag."""

    IN = "IN"
    OUT = "OUT"
    MEM = "MEM"

    @property
    def flag(self) -> str:
        return _DIRECTION_TO_FLAG[self]

    @classmethod
    def from_flag(cls, flag: str) -> LocationDirection:
        """Map an address flag to a direction. Unknown flags are memory."""
        return _FLAG_TO_DIRECTION.get(flag, cls.MEM)


_FLAG_TO_DIRECTION: dict[str, LocationDirection] = {
    "I": LocationDirection.IN,
    "Q": LocationDirection.OUT,
    "M": LocationDirection.MEM,
}

_DIRECTION_TO_FLAG: dict[LocationDirection, str] = {
    v: k for k, v in _FLAG_TO_DIRECTION.items()
}

# Emission order of bool groups
DIRECTION_ORDER: tuple[LocationDirection, ...] = (
    LocationDirection.IN,
    LocationDirection.OUT,
    LocationDirection.MEM,
)


# ---------------------------------------------------------------------------
# Location size
# ---------------------------------------------------------------------------

class LocationSize(str, Enum):
    """Width of a located variable, from the X/B/W/D/L flag."""

    # Single bit
    BIT = "BIT"
    # 1 byte
    BYTE = "BYTE"
    # 2 bytes
    WORD = "WORD"
    # 4 bytes, including REAL
    DOUBLEWORD = "DOUBLEWORD"
    # 8 bytes, including LREAL
    LONGWORD = "LONGWORD"

    @classmethod
    def from_flag(cls, flag: str) -> LocationSize:
        """Map an address flag to a size. Unknown flags are long words."""
        return _FLAG_TO_SIZE.get(flag, cls.LONGWORD)


BIT_FLAG = "X"
GROUP_FLAG = "G"

_FLAG_TO_SIZE: dict[str, LocationSize] = {
    BIT_FLAG: LocationSize.BIT,
    # Merged bool groups keep the bit size
    GROUP_FLAG: LocationSize.BIT,
    "B": LocationSize.BYTE,
    "W": LocationSize.WORD,
    "D": LocationSize.DOUBLEWORD,
    "L": LocationSize.LONGWORD,
}


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------

class GlueValueType(str, Enum):
    """IEC 61131-3 elementary types that may appear at a located address."""

    # Boolean
    BOOL = "BOOL"

    # 8 bit
    BYTE = "BYTE"
    SINT = "SINT"
    USINT = "USINT"

    # 16 bit
    INT = "INT"
    UINT = "UINT"
    WORD = "WORD"

    # 32 bit
    DINT = "DINT"
    UDINT = "UDINT"
    DWORD = "DWORD"
    REAL = "REAL"

    # 64 bit
    LREAL = "LREAL"
    LWORD = "LWORD"
    LINT = "LINT"
    ULINT = "ULINT"

    # Never produced from a declaration. Lets consumers build their own
    # indexed mapping with a marker for "no type assigned".
    UNASSIGNED = "UNASSIGNED"

    @classmethod
    def is_known(cls, tag: str) -> bool:
        return tag in cls._value2member_map_ and tag != cls.UNASSIGNED.value
