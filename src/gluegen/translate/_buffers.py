"""Routes located variables into the classical glue buffers.

The classical buffers are flat pointer arrays indexed by major index,
one per (direction, size) combination the runtime supports. They exist
for legacy direct access; the integrated glue table is authoritative.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from gluegen.config import GlueConfig
from gluegen.model.glue import BOOL_GROUP_SIZE, BufferAssignment
from gluegen.model.variables import LocatedVariable

LOG = logging.getLogger("gluegen.buffers")


class _Route(NamedTuple):
    buffer: str
    cast: str | None = None
    bit: bool = False


_DINT_CAST = "(IEC_DINT *)"
_LINT_CAST = "(IEC_LINT *)"

SPECIAL_FUNCTIONS = "special_functions"

# (direction flag, size flag) -> buffer
_ROUTES: dict[tuple[str, str], _Route] = {
    ("I", "X"): _Route("bool_input", bit=True),
    ("I", "B"): _Route("byte_input"),
    ("I", "W"): _Route("int_input"),
    ("Q", "X"): _Route("bool_output", bit=True),
    ("Q", "B"): _Route("byte_output"),
    ("Q", "W"): _Route("int_output"),
    ("M", "W"): _Route("int_memory"),
    ("M", "D"): _Route("dint_memory", _DINT_CAST),
    ("M", "L"): _Route("lint_memory", _LINT_CAST),
}

# Memory long words past the end of lint_memory address the runtime's
# special function registers.
_SPECIAL_ROUTE = _Route(SPECIAL_FUNCTIONS, _LINT_CAST)


def route_variable(var: LocatedVariable, config: GlueConfig | None = None) -> BufferAssignment | None:
    """Return the buffer assignment for *var*, or None if it has no buffer."""
    if config is None:
        config = GlueConfig()

    route = _ROUTES.get((var.direction_flag, var.size_flag))
    if route is None:
        return None

    index = var.major_index
    if route.buffer == "lint_memory" and index >= config.special_functions_base:
        route = _SPECIAL_ROUTE
        index -= config.special_functions_base

    return BufferAssignment(
        buffer=route.buffer,
        index=index,
        minor_index=var.minor_index if route.bit else None,
        access_name=var.name,
        cast=route.cast,
    )


def assign_buffers(
    variables: list[LocatedVariable],
    *,
    config: GlueConfig | None = None,
    diagnostics: list[str] | None = None,
) -> list[BufferAssignment]:
    """Build the classical buffer assignments, in variable order.

    Combinations without a buffer produce nothing. Assignments whose
    index falls outside the buffer are reported and dropped.
    """
    if config is None:
        config = GlueConfig()

    assignments: list[BufferAssignment] = []
    for var in variables:
        a = route_variable(var, config)
        if a is None:
            if not var.is_group:
                LOG.debug("No classical buffer for %s", var.name)
            continue

        out_of_range = a.index >= config.buffer_size or (
            a.minor_index is not None and a.minor_index >= BOOL_GROUP_SIZE
        )
        if out_of_range:
            msg = f"{var.name} does not fit in {a.buffer}[{config.buffer_size}]"
            if a.minor_index is not None:
                msg = f"{var.name} does not fit in {a.buffer}[{config.buffer_size}][{BOOL_GROUP_SIZE}]"
            LOG.warning("%s", msg)
            if diagnostics is not None:
                diagnostics.append(msg)
            continue

        assignments.append(a)
    return assignments


# GlueVariable.msi is std::uint16_t, GlueVariable.lsi is std::uint8_t
_MSI_MAX = 0xFFFF
_LSI_MAX = 0xFF


def check_table_ranges(
    variables: list[LocatedVariable],
    *,
    diagnostics: list[str] | None = None,
) -> list[str]:
    """Report integrated glue rows whose indices overflow the row fields.

    The rows are still emitted; the returned messages are also appended
    to *diagnostics*.
    """
    found: list[str] = []
    for var in variables:
        if var.major_index > _MSI_MAX:
            found.append(f"{var.name} major index {var.major_index} does not fit in msi (uint16)")
        if var.minor_index > _LSI_MAX:
            found.append(f"{var.name} minor index {var.minor_index} does not fit in lsi (uint8)")
    for msg in found:
        LOG.warning("%s", msg)
    if diagnostics is not None:
        diagnostics.extend(found)
    return found
