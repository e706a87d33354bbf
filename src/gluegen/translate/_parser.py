"""Reads ``__LOCATED_VAR(type, name, ...)`` lines into Declarations.

Only the first two comma-separated fields after the first ``(`` are
consumed. Everything else on the line is ignored, but still feeds the
checksum.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Protocol

from gluegen.config import GlueConfig
from gluegen.model.variables import Declaration

from ._errors import MalformedDeclaration

LOG = logging.getLogger("gluegen.parser")

# prefix (2) + direction (1) + size (1)
_NAME_HEADER_LEN = 4


class Digest(Protocol):
    def update(self, data: bytes, /) -> None: ...


def parse_declaration(line: str, line_number: int = 0) -> Declaration:
    """Extract the ``(type, name)`` pair from a single line."""
    open_paren = line.find("(")
    if open_paren < 0:
        raise MalformedDeclaration("Missing '('", line_number, line)

    type_end = line.find(",", open_paren + 1)
    if type_end < 0:
        raise MalformedDeclaration("Missing ',' after type", line_number, line)

    name_end = line.find(",", type_end + 1)
    if name_end < 0:
        raise MalformedDeclaration("Missing ',' after name", line_number, line)

    var_type = line[open_paren + 1:type_end]
    name = line[type_end + 1:name_end]
    if not var_type:
        raise MalformedDeclaration("Empty type", line_number, line)
    if len(name) <= _NAME_HEADER_LEN:
        raise MalformedDeclaration(
            f"Name {name!r} is too short for a located address", line_number, line,
        )

    return Declaration(name=name, type=var_type, line_number=line_number, raw=line)


def read_declarations(
    lines: Iterable[str],
    digest: Digest,
    *,
    config: GlueConfig | None = None,
    diagnostics: list[str] | None = None,
) -> Iterator[Declaration]:
    """Yield a Declaration per well-formed line.

    Every line, well-formed or not, is appended to *digest* before it is
    parsed. Only the trailing ``\\n`` is dropped, so a ``\\r`` from a CRLF
    file is hashed. Undecodable bytes read with ``surrogateescape`` are
    hashed as the original bytes. Malformed lines are logged,
    recorded in *diagnostics* and skipped, unless ``config.strict`` is set.
    """
    if config is None:
        config = GlueConfig()

    for line_number, line in enumerate(lines, start=1):
        raw = line[:-1] if line.endswith("\n") else line
        digest.update(raw.encode("utf-8", "surrogateescape"))
        try:
            decl = parse_declaration(raw, line_number)
        except MalformedDeclaration as exc:
            if config.strict:
                raise
            LOG.warning("%s", exc)
            if diagnostics is not None:
                diagnostics.append(str(exc))
            continue
        LOG.debug("varName: %s\tvarType: %s", decl.name, decl.type)
        yield decl
