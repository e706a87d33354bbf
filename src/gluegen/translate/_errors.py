"""Errors raised while translating located variables."""

from __future__ import annotations


class GlueError(Exception):
    """Base class for glue generation errors."""


class MalformedDeclaration(GlueError):
    """A line that does not hold a ``(type, name, ...)`` declaration."""

    def __init__(self, message: str, line_number: int, raw: str):
        self.line_number = line_number
        self.raw = raw
        super().__init__(f"{message} (line {line_number}: {raw!r})")


class InvalidAddressing(GlueError):
    """A bit variable whose minor index does not fit in a bool group."""

    def __init__(self, name: str, minor_index: int):
        self.name = name
        self.minor_index = minor_index
        super().__init__(
            f"Invalid addressing on located variable {name}: "
            f"bit index {minor_index} is out of range 0..7"
        )
