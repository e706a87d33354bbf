"""Shared test helpers for the gluegen test suite."""

from gluegen.config import GlueConfig
from gluegen.model.variables import LocatedVariable
from gluegen.translate import decode_address, translate


def located(var_type: str, name: str, *rest: str) -> str:
    """One LOCATED_VARIABLES.h line, as MATIEC writes it."""
    tail = ",".join(rest) if rest else "I,X,0,0"
    return f"__LOCATED_VAR({var_type},{name},{tail})\n"


def make_var(name: str, var_type: str = "INT") -> LocatedVariable:
    """Build a LocatedVariable with indices decoded from *name*."""
    major, minor = decode_address(name)
    return LocatedVariable(name=name, type=var_type, major_index=major, minor_index=minor)


def translate_lines(*lines: str, **config_kwargs):
    """Translate raw lines with a GlueConfig built from kwargs."""
    return translate(list(lines), GlueConfig(**config_kwargs))
