"""gluegen translate — located variable declarations to a GlueModule.

Entry point::

    from gluegen.translate import translate

    with open("LOCATED_VARIABLES.h") as f:
        module = translate(f)
    module.table_size
    module.groups
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterable

from gluegen.config import GlueConfig
from gluegen.model.glue import GlueModule
from gluegen.model.types import GlueValueType

from ._address import decode_address, decode_declaration
from ._buffers import assign_buffers, check_table_ranges, route_variable
from ._errors import GlueError, InvalidAddressing, MalformedDeclaration
from ._grouping import merge_bool_groups
from ._parser import parse_declaration, read_declarations

LOG = logging.getLogger("gluegen.translate")


def translate(lines: Iterable[str], config: GlueConfig | None = None) -> GlueModule:
    """Parse, decode and group every declaration in *lines*.

    Parameters
    ----------
    lines
        Lines of a ``LOCATED_VARIABLES.h`` file, with or without their
        trailing newline (an open text file works).
    config
        Generation options. ``config.strict`` turns malformed lines and
        invalid addressing into raised ``GlueError``s.

    Returns
    -------
    GlueModule
        The merged variables, bool groups, classical buffer assignments,
        checksum and any diagnostics collected on the way.
    """
    if config is None:
        config = GlueConfig()

    # Detects likely changes to the declarations, not tampering
    digest = hashlib.md5(usedforsecurity=False)
    diagnostics: list[str] = []

    # Grouping needs every sibling bit, so read everything first
    variables = []
    for decl in read_declarations(lines, digest, config=config, diagnostics=diagnostics):
        var = decode_declaration(decl)
        if not GlueValueType.is_known(var.type):
            msg = f"Unknown value type {var.type!r} for {var.name} (line {decl.line_number})"
            LOG.warning("%s", msg)
            diagnostics.append(msg)
        variables.append(var)

    merged, groups = merge_bool_groups(variables, config=config, diagnostics=diagnostics)
    assignments = assign_buffers(merged, config=config, diagnostics=diagnostics)
    check_table_ranges(merged, diagnostics=diagnostics)

    LOG.info(
        "Parsed %d located variables: %d glue entries, %d bool groups, %d buffer assignments",
        len(variables), len(merged), len(groups), len(assignments),
    )

    return GlueModule(
        variables=merged,
        groups=groups,
        assignments=assignments,
        checksum=digest.digest(),
        diagnostics=diagnostics,
        declaration_count=len(variables),
    )


__all__ = [
    "GlueError",
    "InvalidAddressing",
    "MalformedDeclaration",
    "assign_buffers",
    "check_table_ranges",
    "decode_address",
    "decode_declaration",
    "merge_bool_groups",
    "parse_declaration",
    "read_declarations",
    "route_variable",
    "translate",
]
