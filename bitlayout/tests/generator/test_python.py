"""Tests for Python module assembly."""

import pytest

from bitlayout.generator import AlternativesRegistry, python
from bitlayout.generator.errors import SchemaError
from bitlayout.generator.python import GeneratedModule
from bitlayout.generator.types import (
    AlternativeGroup,
    BitfieldSchema,
    EnumeratedValue,
    StructureSchema,
)


def flags_schema():
    return BitfieldSchema("flags").add_field("a", 1).add_field("b", 3)


def describe_generated_module():
    def renders_each_schema_once(expect):
        module = GeneratedModule()
        module.add_bitfield(flags_schema())
        module.add_bitfield(flags_schema())
        module.add_struct(StructureSchema("first").add_bitfield("flags", flags_schema()))
        module.add_struct(StructureSchema("second").add_bitfield("flags", flags_schema()))
        code = module.render()

        expect(code.count("class FlagsR(RegisterReader):")) == 1
        expect(code.count("class First(Struct):")) == 1
        expect(code.count("class Second(Struct):")) == 1

    def rejects_different_schemas_with_one_name():
        module = GeneratedModule()
        module.add_bitfield(flags_schema())
        with pytest.raises(SchemaError):
            module.add_bitfield(BitfieldSchema("flags").add_field("c", 2))

    def renders_option_structures_before_unions(expect):
        group = AlternativeGroup.new("choice", StructureSchema("opt_a")).insert_struct(
            StructureSchema("opt_b").add_u8_field("b")
        )
        module = GeneratedModule(AlternativesRegistry([group]))
        module.add_alternatives()
        code = module.render()

        expect(code.index("class OptA(Struct):") < code.index("class Choice(Alternative):")) == True
        expect(code.index("class OptB(Struct):") < code.index("class Choice(Alternative):")) == True

    def rejects_unions_named_like_their_options(expect):
        group = AlternativeGroup.new("address", StructureSchema("address").add_u16_field("v"))
        holder = StructureSchema("holder").add_alt_field("dest", group)

        with pytest.raises(SchemaError) as exinfo:
            python.render([holder], AlternativesRegistry([group]))
        expect("Address" in str(exinfo.value)) == True

    def rejects_classes_shadowing_the_prelude():
        with pytest.raises(SchemaError):
            python.render([StructureSchema("struct")])
        with pytest.raises(SchemaError):
            reader = BitfieldSchema("field").add_field(
                "reader", 2, values=(EnumeratedValue("A", 0),)
            )
            python.render(bitfields=[reader])

    def rejects_classes_generated_twice_across_kinds():
        module = GeneratedModule()
        module.add_bitfield(flags_schema())
        with pytest.raises(SchemaError):
            module.add_struct(StructureSchema("flags_r"))

    def writes_files(expect, tmp_path):
        module = GeneratedModule(comments=["registers"])
        module.add_bitfield(flags_schema())
        path = tmp_path / "out" / "layout.py"
        module.write_file(path)

        content = path.read_text()
        expect("# registers" in content) == True
        expect("class FlagsW(RegisterWriter):" in content) == True


def describe_render():
    def imports_the_runtime(expect):
        code = python.render(bitfields=[flags_schema()], runtime_import="vendor.runtime")

        expect("from vendor.runtime import (" in code) == True

    def produces_an_importable_module(expect):
        group = AlternativeGroup.new("choice", StructureSchema("opt_a"))
        holder = StructureSchema("holder").add_bitfield("flags", flags_schema()).add_alt_field("body", group)
        code = python.render([holder], AlternativesRegistry([group]), comments=["test"])

        gbl = globals().copy()
        exec(code, gbl)
        expect(gbl["Holder"]().write()) == b"\x00"
        expect(gbl["Holder"].MAX_SIZE) == 1


def describe_runtime():
    def returns_every_runtime_file(expect):
        files = python.runtime()

        expect(sorted(files)) == ["__init__.py", "fields.py", "serialization.py"]
        expect("class Struct:" in files["serialization.py"]) == True
        expect("class RegisterWriter:" in files["fields.py"]) == True
