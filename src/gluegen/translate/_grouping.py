"""Merges bit variables into bool groups.

Bits that share a direction and major index (``%IX0.0`` .. ``%IX0.7``)
are collected into one BoolGroup. The first bit seen for a group is
replaced in the variable list by a synthetic ``__IG0`` entry standing
for the whole group; later bits of the same group are dropped from the
list and live only in the group's slots.
"""

from __future__ import annotations

import logging

from gluegen.config import GlueConfig
from gluegen.model.glue import BOOL_GROUP_SIZE, BoolGroup
from gluegen.model.types import DIRECTION_ORDER, LocationDirection
from gluegen.model.variables import LocatedVariable

from ._errors import InvalidAddressing

LOG = logging.getLogger("gluegen.grouping")


def merge_bool_groups(
    variables: list[LocatedVariable],
    *,
    config: GlueConfig | None = None,
    diagnostics: list[str] | None = None,
) -> tuple[list[LocatedVariable], list[BoolGroup]]:
    """Return ``(merged_variables, groups)``.

    *variables* is not modified. ``merged_variables`` keeps the order of
    first appearance. ``groups`` is ordered by direction (I, Q, M) and
    then by ascending major index.
    """
    if config is None:
        config = GlueConfig()

    tables: dict[LocationDirection, dict[int, BoolGroup]] = {
        d: {} for d in DIRECTION_ORDER
    }
    merged: list[LocatedVariable] = []

    for var in variables:
        if not var.is_bit:
            merged.append(var)
            continue

        in_range = var.minor_index < BOOL_GROUP_SIZE
        if not in_range:
            err = InvalidAddressing(var.name, var.minor_index)
            if config.strict:
                raise err
            LOG.warning("%s", err)
            if diagnostics is not None:
                diagnostics.append(str(err))

        table = tables[var.direction]
        group = table.get(var.major_index)
        if group is None:
            group = BoolGroup(direction=var.direction, major_index=var.major_index)
            table[var.major_index] = group
            merged.append(var.model_copy(update={
                "name": group.access_name,
                "minor_index": 0,
            }))

        # Out of range bits still claim their group but have no slot
        if not in_range:
            continue
        if group.slots[var.minor_index] is not None:
            LOG.debug(
                "%s overrides %s in group %s",
                var.name, group.slots[var.minor_index], group.name,
            )
        group.slots[var.minor_index] = var.name

    groups = [
        tables[d][major]
        for d in DIRECTION_ORDER
        for major in sorted(tables[d])
    ]
    return merged, groups
