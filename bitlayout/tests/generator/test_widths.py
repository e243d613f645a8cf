"""Tests for integer width resolution."""

import pytest

from bitlayout.generator.errors import WidthError
from bitlayout.generator.widths import resolve_bits, resolve_bytes, resolve_register


def describe_resolve_bits():
    def picks_smallest_width_for_every_valid_count(expect):
        for bits in range(1, 65):
            expected = next(w for w in (1, 8, 16, 32, 64) if w >= bits)
            expect(resolve_bits(bits).bits) == expected

    def treats_single_bit_as_bool(expect):
        width = resolve_bits(1)
        expect(width.bits) == 1
        expect(width.python_type) == "bool"
        expect(width.bytes) == 1

    def maps_boundaries(expect):
        expect(resolve_bits(8).bits) == 8
        expect(resolve_bits(9).bits) == 16
        expect(resolve_bits(17).bits) == 32
        expect(resolve_bits(33).bits) == 64
        expect(resolve_bits(64).bits) == 64

    def rejects_unrepresentable_counts(expect):
        for bits in (0, 65, 128, -3):
            with pytest.raises(WidthError) as exinfo:
                resolve_bits(bits)
            expect(f"{bits} bits" in str(exinfo.value)) == True


def describe_resolve_register():
    def never_narrower_than_a_byte(expect):
        expect(resolve_register(1).bits) == 8
        expect(resolve_register(7).bits) == 8
        expect(resolve_register(16).bits) == 16

    def rejects_oversized_registers():
        with pytest.raises(WidthError):
            resolve_register(65)


def describe_resolve_bytes():
    def accepts_primitive_widths(expect):
        for count, fmt in ((1, "B"), (2, "H"), (4, "I"), (8, "Q")):
            width = resolve_bytes(count)
            expect(width.bytes) == count
            expect(width.format_char) == fmt
            expect(width.mask) == (1 << (count * 8)) - 1

    def rejects_other_widths():
        for count in (0, 3, 5, 16):
            with pytest.raises(WidthError):
                resolve_bytes(count)
