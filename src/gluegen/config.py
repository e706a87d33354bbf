"""Generation options."""

from __future__ import annotations

from pydantic import BaseModel, Field


class GlueConfig(BaseModel):
    """Options for one generation run.

    ``buffer_size`` must match ``BUFFER_SIZE`` in the generated preamble;
    indices at or past it are reported instead of written.
    """

    buffer_size: int = Field(default=1024, gt=0)
    special_functions_base: int = Field(default=1024, ge=0)
    strict: bool = False
    """Raise on malformed lines and invalid addressing instead of skipping."""
    emit_checksum: bool = True
