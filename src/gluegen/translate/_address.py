"""Decodes the index suffix of a located variable name.

``__IX12_3`` -> major 12, minor 3; ``__QW7`` -> major 7, minor 0.
"""

from __future__ import annotations

import re

from gluegen.model.variables import Declaration, LocatedVariable

_SUFFIX_OFFSET = 4
_LEADING_DIGITS = re.compile(r"\d*")


def _atoi(text: str) -> int:
    """Leading decimal digits of *text* as an int, 0 when there are none."""
    digits = _LEADING_DIGITS.match(text).group()
    return int(digits) if digits else 0


def decode_address(name: str) -> tuple[int, int]:
    """Return ``(major_index, minor_index)`` for a located variable name."""
    suffix = name[_SUFFIX_OFFSET:]
    major, sep, minor = suffix.partition("_")
    if not sep:
        return _atoi(major), 0
    return _atoi(major), _atoi(minor)


def decode_declaration(decl: Declaration) -> LocatedVariable:
    major, minor = decode_address(decl.name)
    return LocatedVariable(
        name=decl.name,
        type=decl.type,
        major_index=major,
        minor_index=minor,
    )
