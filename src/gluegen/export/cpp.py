"""C++ glue emitter for a GlueModule.

Writes the ``glueVars.cpp`` translation unit that binds MATIEC located
variables to the runtime's buffers and integrated glue table.
"""

from __future__ import annotations

from io import StringIO

from gluegen.config import GlueConfig
from gluegen.model.glue import BoolGroup, BufferAssignment, GlueModule
from gluegen.model.types import GlueValueType
from gluegen.model.variables import LocatedVariable


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def to_glue_source(module: GlueModule, config: GlueConfig | None = None) -> str:
    """Emit the complete ``glueVars.cpp`` source for *module*."""
    w = GlueWriter(config)
    w.write_module(module)
    return w.getvalue()


# ---------------------------------------------------------------------------
# Fixed text
# ---------------------------------------------------------------------------

_PREAMBLE = """\
// Binds the located variables of the IEC program to the runtime's
// memory pointers. Generated by gluegen from LOCATED_VARIABLES.h.
// PLEASE DON'T EDIT THIS FILE!
// -----------------------------------------------------------------------------
#include <cstdint>

#include "iec_std_lib.h"

TIME __CURRENT_TIME;
extern unsigned long long common_ticktime__;

#ifndef OPLC_IEC_GLUE_DIRECTION
#define OPLC_IEC_GLUE_DIRECTION
enum IecLocationDirection {
    IECLDT_IN,
    IECLDT_OUT,
    IECLDT_MEM,
};
#endif  // OPLC_IEC_GLUE_DIRECTION

#ifndef OPLC_IEC_GLUE_SIZE
#define OPLC_IEC_GLUE_SIZE
enum IecLocationSize {
    /// Single bit
    IECLST_BIT,
    /// 1 byte
    IECLST_BYTE,
    /// 2 bytes
    IECLST_WORD,
    /// 4 bytes, including REAL
    IECLST_DOUBLEWORD,
    /// 8 bytes, including LREAL
    IECLST_LONGWORD,
};
#endif  // OPLC_IEC_GLUE_SIZE

#ifndef OPLC_IEC_GLUE_VALUE_TYPE
#define OPLC_IEC_GLUE_VALUE_TYPE
enum IecGlueValueType {
{value_types}
};
#endif  // OPLC_IEC_GLUE_VALUE_TYPE

#ifndef OPLC_GLUE_BOOL_GROUP
#define OPLC_GLUE_BOOL_GROUP
/// Eight bits sharing one major index, e.g. %IX0.0 through %IX0.7.
/// Bits that were not declared point to nullptr.
struct GlueBoolGroup {
    /// Major index shared by the bits in this group.
    std::uint16_t index;
    IEC_BOOL* values[8];
};
#endif // OPLC_GLUE_BOOL_GROUP

#ifndef OPLC_GLUE_VARIABLE
#define OPLC_GLUE_VARIABLE
/// One row of the packed glue table. Search it once to build a fast
/// lookup by location (e.g. %IB1.1) and use that lookup afterwards.
struct GlueVariable {
    /// I/Q/M
    IecLocationDirection dir;
    /// X/B/W/D/L
    IecLocationSize size;
    /// Index before the period.
    std::uint16_t msi;
    /// Index after the period, only used by bits.
    std::uint8_t lsi;
    IecGlueValueType type;
    /// Points to the value, or to a GlueBoolGroup for bits.
    void* value;
};
#endif  // OPLC_GLUE_VARIABLE

// Classical buffers for I/O and memory.
// Inputs: I
// Outputs: Q
// Memory: M
#define BUFFER_SIZE {buffer_size}

// Booleans - "X" width
IEC_BOOL *bool_input[BUFFER_SIZE][8] = {};
IEC_BOOL *bool_output[BUFFER_SIZE][8] = {};

// Bytes - "B" width
IEC_BYTE *byte_input[BUFFER_SIZE] = {};
IEC_BYTE *byte_output[BUFFER_SIZE] = {};

// Words - "W" width
IEC_UINT *int_input[BUFFER_SIZE] = {};
IEC_UINT *int_output[BUFFER_SIZE] = {};
IEC_UINT *int_memory[BUFFER_SIZE] = {};

// Double words - "D" width, REAL not allowed here
IEC_DINT *dint_memory[BUFFER_SIZE] = {};

// Long words - "L" width, LREAL not allowed here
IEC_LINT *lint_memory[BUFFER_SIZE] = {};

// Special functions - %ML1024 and up
IEC_LINT *special_functions[BUFFER_SIZE];


#define __LOCATED_VAR(type, name, ...) type __##name;
#include "LOCATED_VARIABLES.h"
#undef __LOCATED_VAR
#define __LOCATED_VAR(type, name, ...) type* name = &__##name;
#include "LOCATED_VARIABLES.h"
#undef __LOCATED_VAR
"""

_POSTAMBLE = """\
void updateTime()
{
    __CURRENT_TIME.tv_nsec += common_ticktime__;

    if (__CURRENT_TIME.tv_nsec >= 1000000000) {
        __CURRENT_TIME.tv_nsec -= 1000000000;
        __CURRENT_TIME.tv_sec += 1;
    }
}
"""

_HEX = "0123456789ABCDEF"


# ---------------------------------------------------------------------------
# GlueWriter
# ---------------------------------------------------------------------------

class GlueWriter:
    """Emits a GlueModule as C++ into an internal buffer."""

    def __init__(self, config: GlueConfig | None = None) -> None:
        self._config = config if config is not None else GlueConfig()
        self._buf = StringIO()
        self._indent = 0
        self._indent_str = "    "

    def getvalue(self) -> str:
        return self._buf.getvalue()

    # -- Low-level output helpers -------------------------------------------

    def _write(self, text: str) -> None:
        self._buf.write(text)

    def _line(self, text: str = "") -> None:
        if text:
            self._buf.write(self._indent_str * self._indent + text + "\n")
        else:
            self._buf.write("\n")

    def _indent_inc(self) -> None:
        self._indent += 1

    def _indent_dec(self) -> None:
        self._indent = max(0, self._indent - 1)

    # ======================================================================
    # Module
    # ======================================================================

    def write_module(self, module: GlueModule) -> None:
        self.write_preamble()
        self.write_classical_glue(module.assignments)
        self.write_bool_groups(module.groups)
        self.write_integrated_glue(module.variables)
        if self._config.emit_checksum:
            self.write_checksum(module.checksum)
        self.write_postamble()

    # ======================================================================
    # Preamble / postamble
    # ======================================================================

    def write_preamble(self) -> None:
        value_types = "\n".join(f"    IECVT_{vt.value}," for vt in GlueValueType)
        self._write(
            _PREAMBLE
            .replace("{value_types}", value_types)
            .replace("{buffer_size}", str(self._config.buffer_size))
        )

    def write_postamble(self) -> None:
        self._write(_POSTAMBLE)

    # ======================================================================
    # Classical glue
    # ======================================================================

    def write_classical_glue(self, assignments: list[BufferAssignment]) -> None:
        self._line("void glueVars()")
        self._line("{")
        self._indent_inc()
        for a in assignments:
            self._line(self._assignment(a))
        self._indent_dec()
        self._line("}")
        self._line()

    @staticmethod
    def _assignment(a: BufferAssignment) -> str:
        target = f"{a.buffer}[{a.index}]"
        if a.minor_index is not None:
            target += f"[{a.minor_index}]"
        value = f"{a.cast}{a.access_name}" if a.cast else a.access_name
        return f"{target} = {value};"

    # ======================================================================
    # Bool groups
    # ======================================================================

    def write_bool_groups(self, groups: list[BoolGroup]) -> None:
        for g in groups:
            self._write_bool_group(g)

    def _write_bool_group(self, g: BoolGroup) -> None:
        values = ", ".join(s if s is not None else "nullptr" for s in g.slots)
        self._line(
            f"GlueBoolGroup ___{g.name} {{ .index={g.major_index}, .values={{ {values} }} }};"
        )
        self._line(f"GlueBoolGroup* {g.access_name}(&___{g.name});")

    # ======================================================================
    # Integrated glue
    # ======================================================================

    def write_integrated_glue(self, variables: list[LocatedVariable]) -> None:
        self._line("/// The size of the array of glue variables.")
        self._line(f"extern std::size_t const OPLCGLUE_GLUE_SIZE({len(variables)});")
        self._line("/// The packed glue variables.")
        self._line("extern const GlueVariable oplc_glue_vars[] = {")
        self._indent_inc()
        for v in variables:
            self._line(self._table_row(v))
        self._indent_dec()
        self._line("};")
        self._line()

    @staticmethod
    def _table_row(v: LocatedVariable) -> str:
        fields = [
            f"IECLDT_{v.direction.value}",
            f"IECLST_{v.size.value}",
            str(v.major_index),
            str(v.minor_index),
            f"IECVT_{v.type}",
            v.name,
        ]
        return "{ " + ", ".join(fields) + " },"

    # ======================================================================
    # Checksum
    # ======================================================================

    def write_checksum(self, digest: bytes) -> None:
        self._line("/// MD5 checksum of the located variables.")
        self._line("/// WARNING: this must not be used to trust file contents.")
        chars = []
        for byte in digest:
            chars.append(f"'{_HEX[(byte & 0xF0) >> 4]}'")
            chars.append(f"'{_HEX[byte & 0x0F]}'")
        self._line(f"extern const char OPLCGLUE_MD5_DIGEST[] = {{{', '.join(chars)}}};")
        self._line()
        self._line()
