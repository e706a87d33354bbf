"""Tests for the C++ glue emitter (gluegen.export.cpp)."""

from conftest import located, translate_lines

from gluegen import generate
from gluegen.config import GlueConfig
from gluegen.export import GlueWriter, to_glue_source
from gluegen.model import BoolGroup, BufferAssignment, GlueModule, LocationDirection
from gluegen.model.variables import LocatedVariable


def _section(text: str, start: str, end: str) -> str:
    i = text.index(start)
    return text[i:text.index(end, i)]


# -----------------------------------------------------------------------
# Preamble / postamble
# -----------------------------------------------------------------------

class TestFraming:
    def test_preamble_first(self):
        text = to_glue_source(GlueModule())
        assert text.startswith("// Binds the located variables")
        assert "#define BUFFER_SIZE 1024" in text
        assert "struct GlueBoolGroup {" in text
        assert "struct GlueVariable {" in text

    def test_value_type_enum(self):
        text = to_glue_source(GlueModule())
        enum = _section(text, "enum IecGlueValueType {", "};")
        assert "    IECVT_BOOL,\n" in enum
        assert enum.index("IECVT_LREAL") < enum.index("IECVT_LWORD")
        assert enum.rstrip().endswith("IECVT_UNASSIGNED,")

    def test_buffer_size_from_config(self):
        text = to_glue_source(GlueModule(), GlueConfig(buffer_size=64))
        assert "#define BUFFER_SIZE 64" in text

    def test_postamble_last(self):
        text = to_glue_source(GlueModule())
        assert text.rstrip().endswith("}")
        assert text.index("void updateTime()") > text.index("oplc_glue_vars")

    def test_section_order(self):
        text = generate([located("BOOL", "__IX0_0"), located("INT", "__QW5")])
        positions = [
            text.index("#define BUFFER_SIZE"),
            text.index("void glueVars()"),
            text.index("GlueBoolGroup ___IG0"),
            text.index("OPLCGLUE_GLUE_SIZE("),
            text.index("oplc_glue_vars[] = {"),
            text.index("OPLCGLUE_MD5_DIGEST"),
            text.index("void updateTime()"),
        ]
        assert positions == sorted(positions)


# -----------------------------------------------------------------------
# Classical glue
# -----------------------------------------------------------------------

class TestClassicalGlue:
    def test_word_output(self):
        text = generate([located("INT", "__QW5")])
        assert "    int_output[5] = __QW5;\n" in text

    def test_casts(self):
        text = generate([located("DINT", "__MD2"), located("LINT", "__ML7")])
        assert "    dint_memory[2] = (IEC_DINT *)__MD2;\n" in text
        assert "    lint_memory[7] = (IEC_LINT *)__ML7;\n" in text

    def test_special_functions(self):
        text = generate([located("LINT", "__ML1025")])
        assert "    special_functions[1] = (IEC_LINT *)__ML1025;\n" in text
        assert "lint_memory[1025]" not in text

    def test_bit_assignment_rendering(self):
        w = GlueWriter()
        w.write_classical_glue([
            BufferAssignment(buffer="bool_input", index=3, minor_index=2, access_name="__IX3_2"),
        ])
        assert "    bool_input[3][2] = __IX3_2;\n" in w.getvalue()

    def test_grouped_bits_not_assigned(self):
        text = generate([located("BOOL", "__IX0_0"), located("BOOL", "__IX0_1")])
        body = _section(text, "void glueVars()", "}\n")
        assert "bool_input" not in body

    def test_empty_routine(self):
        text = to_glue_source(GlueModule())
        assert "void glueVars()\n{\n}\n\n" in text


# -----------------------------------------------------------------------
# Bool groups
# -----------------------------------------------------------------------

class TestBoolGroups:
    def test_scenario(self):
        text = generate([located("BOOL", "__IX0_0"), located("BOOL", "__IX0_1")])
        assert (
            "GlueBoolGroup ___IG0 { .index=0, .values={ __IX0_0, __IX0_1, "
            "nullptr, nullptr, nullptr, nullptr, nullptr, nullptr } };\n"
        ) in text
        assert "GlueBoolGroup* __IG0(&___IG0);\n" in text
        assert text.count("GlueBoolGroup ___") == 1

    def test_group_order(self):
        w = GlueWriter()
        w.write_bool_groups([
            BoolGroup(direction=LocationDirection.IN, major_index=1),
            BoolGroup(direction=LocationDirection.OUT, major_index=0),
        ])
        out = w.getvalue()
        assert out.index("___IG1") < out.index("___QG0")

    def test_memory_group(self):
        text = generate([located("BOOL", "__MX4_7")])
        assert ".index=4, .values={ nullptr, nullptr, nullptr, nullptr, nullptr, nullptr, nullptr, __MX4_7 }" in text
        assert "GlueBoolGroup* __MG4(&___MG4);" in text


# -----------------------------------------------------------------------
# Integrated glue
# -----------------------------------------------------------------------

class TestIntegratedGlue:
    def test_word_row(self):
        text = generate([located("INT", "__QW5")])
        assert "extern std::size_t const OPLCGLUE_GLUE_SIZE(1);" in text
        assert "    { IECLDT_OUT, IECLST_WORD, 5, 0, IECVT_INT, __QW5 },\n" in text

    def test_group_row(self):
        text = generate([located("BOOL", "__IX0_0"), located("BOOL", "__IX0_1")])
        assert "    { IECLDT_IN, IECLST_BIT, 0, 0, IECVT_BOOL, __IG0 },\n" in text
        assert "OPLCGLUE_GLUE_SIZE(1)" in text

    def test_row_per_surviving_variable(self):
        module = translate_lines(
            located("BOOL", "__QX1_0"),
            located("REAL", "__MD0"),
            located("BOOL", "__QX1_4"),
            located("LREAL", "__ML3"),
        )
        text = to_glue_source(module)
        table = _section(text, "oplc_glue_vars[] = {", "};")
        rows = [l.strip() for l in table.splitlines()[1:]]
        assert rows == [
            "{ IECLDT_OUT, IECLST_BIT, 1, 0, IECVT_BOOL, __QG1 },",
            "{ IECLDT_MEM, IECLST_DOUBLEWORD, 0, 0, IECVT_REAL, __MD0 },",
            "{ IECLDT_MEM, IECLST_LONGWORD, 3, 0, IECVT_LREAL, __ML3 },",
        ]
        assert "OPLCGLUE_GLUE_SIZE(3)" in text

    def test_type_verbatim(self):
        w = GlueWriter()
        w.write_integrated_glue([
            LocatedVariable(name="__IB2", type="USINT", major_index=2),
        ])
        assert "IECVT_USINT" in w.getvalue()

    def test_unsupported_combination_still_in_table(self):
        text = generate([located("BYTE", "__MB3")])
        assert "{ IECLDT_MEM, IECLST_BYTE, 3, 0, IECVT_BYTE, __MB3 }," in text
        assert "__MB3;" not in _section(text, "void glueVars()", "}\n")


# -----------------------------------------------------------------------
# Checksum
# -----------------------------------------------------------------------

class TestChecksum:
    def test_rendering(self):
        w = GlueWriter()
        w.write_checksum(bytes(range(16)))
        out = w.getvalue()
        assert "/// WARNING: this must not be used to trust file contents." in out
        assert "OPLCGLUE_MD5_DIGEST[] = {'0', '0', '0', '1', '0', '2'," in out
        assert "'0', 'F'};" in out

    def test_exactly_sixteen_bytes(self):
        w = GlueWriter()
        w.write_checksum(b"\xab" * 16)
        line = [l for l in w.getvalue().splitlines() if "OPLCGLUE_MD5_DIGEST" in l][0]
        assert line.count("'A'") == 16
        assert line.count("'B'") == 16

    def test_matches_module(self):
        module = translate_lines(located("INT", "__QW5"))
        text = to_glue_source(module)
        first = module.checksum[0]
        expected = f"{{'{first >> 4:X}', '{first & 0xF:X}',"
        assert expected in text

    def test_omitted(self):
        config = GlueConfig(emit_checksum=False)
        text = generate([located("INT", "__QW5")], config)
        assert "OPLCGLUE_MD5_DIGEST" not in text


# -----------------------------------------------------------------------
# Determinism
# -----------------------------------------------------------------------

class TestDeterminism:
    def test_same_input_same_output(self):
        lines = [
            located("BOOL", "__IX0_0"),
            located("BOOL", "__QX0_1"),
            located("INT", "__QW5"),
            located("BOOL", "__IX0_3"),
            located("LINT", "__ML1030"),
        ]
        assert generate(lines) == generate(list(lines))

    def test_swapped_lines_differ(self):
        a = located("INT", "__QW5")
        b = located("INT", "__QW6")
        assert generate([a, b]) != generate([b, a])
