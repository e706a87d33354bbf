"""gluegen — glue bindings for MATIEC located variables.

Usage::

    from gluegen import generate

    with open("LOCATED_VARIABLES.h") as f:
        cpp_text = generate(f)
"""

from __future__ import annotations

from collections.abc import Iterable

from .config import GlueConfig
from .export import GlueWriter, to_glue_source
from .model import GlueModule
from .translate import GlueError, InvalidAddressing, MalformedDeclaration, translate


def generate(lines: Iterable[str], config: GlueConfig | None = None) -> str:
    """Translate *lines* and emit the ``glueVars.cpp`` source."""
    module = translate(lines, config)
    return to_glue_source(module, config)


__all__ = [
    "GlueConfig",
    "GlueError",
    "GlueModule",
    "GlueWriter",
    "InvalidAddressing",
    "MalformedDeclaration",
    "generate",
    "to_glue_source",
    "translate",
]
