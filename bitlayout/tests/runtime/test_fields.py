"""Tests for the runtime reader, writer and serialization bases"""

import pytest

from bitlayout.runtime import (
    FieldReader,
    Known,
    RegisterReader,
    RegisterWriter,
    Struct,
    TruncatedInput,
    Unknown,
    UnknownVariant,
)


class ByteR(RegisterReader):
    WIDTH = 8


class ByteW(RegisterWriter):
    WIDTH = 8


def describe_decoded_values():
    def unwraps_known_variants(expect):
        expect(Known("data").unwrap()) == "data"

    def raises_on_unknown_variants(expect):
        with pytest.raises(UnknownVariant) as exinfo:
            Unknown(5).unwrap()
        expect(exinfo.value.bits) == 5
        expect(str(exinfo.value)) == "Raw value 5 matches no declared variant"

    def compares_by_value(expect):
        expect(Unknown(5)) == Unknown(5)
        expect(Unknown(5) == Unknown(6)) == False


def describe_field_reader():
    def compares_by_type_and_bits(expect):
        class OtherR(FieldReader):
            pass

        expect(FieldReader(3)) == FieldReader(3)
        expect(FieldReader(3) == OtherR(3)) == False
        expect(int(FieldReader(3))) == 3
        expect(repr(OtherR(3))) == "OtherR(3)"


def describe_registers():
    def default_to_zero(expect):
        expect(ByteR().bits) == 0
        expect(int(ByteW())) == 0

    def reject_values_wider_than_the_register():
        with pytest.raises(ValueError):
            ByteR(0x100)
        with pytest.raises(ValueError):
            ByteW(-1)

    def compare_readers_by_bits(expect):
        expect(ByteR(0x12)) == ByteR(0x12)
        expect(repr(ByteW(0x12))) == "ByteW(0x12)"


def describe_struct():
    def cannot_read_without_a_layout():
        with pytest.raises(NotImplementedError):
            Struct.read(b"")

    def cannot_write_without_a_layout():
        with pytest.raises(NotImplementedError):
            Struct().write()

    def reports_truncation(expect):
        error = TruncatedInput("Point", 15, -2)
        expect(error.available) == 0
        expect(str(error)) == "Point needs 15 bytes, only 0 available"
