"""Tests for identifier naming."""

from bitlayout.generator.naming import (
    escape_if_reserved,
    join_pascal_case,
    to_pascal_case,
    to_snake_case,
    to_upper_case,
)


def describe_to_snake_case():
    def converts_mixed_names(expect):
        expect(to_snake_case("Frame_type")) == "frame_type"
        expect(to_snake_case("Intra_PAN")) == "intra_pan"
        expect(to_snake_case("frameControl")) == "frame_control"
        expect(to_snake_case("HTTPServer")) == "http_server"
        expect(to_snake_case("Address_64bit_extended")) == "address_64bit_extended"

    def strips_blacklisted_characters(expect):
        expect(to_snake_case("Reg(0)")) == "reg_0"
        expect(to_snake_case("rx-fifo")) == "rxfifo"

    def guards_leading_digits(expect):
        expect(to_snake_case("2nd_byte")) == "_2nd_byte"

    def escapes_keywords_and_reserved_names(expect):
        expect(to_snake_case("class")) == "class_"
        expect(to_snake_case("Bits", {"bits"})) == "bits_"
        expect(to_snake_case("Bits")) == "bits"

    def is_total(expect):
        expect(to_snake_case("()")) == "_"


def describe_to_pascal_case():
    def converts_mixed_names(expect):
        expect(to_pascal_case("addr_none")) == "AddrNone"
        expect(to_pascal_case("MAC_command")) == "MacCommand"
        expect(to_pascal_case("Address_16bit")) == "Address16bit"
        expect(to_pascal_case("Frame_control")) == "FrameControl"

    def guards_leading_digits(expect):
        expect(to_pascal_case("64bit")) == "_64bit"

    def escapes_capitalized_keywords(expect):
        expect(to_pascal_case("None")) == "None_"
        expect(to_pascal_case("true")) == "True_"
        expect(to_pascal_case("false")) == "False_"
        expect(to_pascal_case("Nonempty")) == "Nonempty"


def describe_join_pascal_case():
    def concatenates_names(expect):
        expect(join_pascal_case("Frame_control", "Frame_type")) == "FrameControlFrameType"
        expect(join_pascal_case("mhr", "dest_pan", "field")) == "MhrDestPanField"

    def escapes_only_the_whole_identifier(expect):
        expect(join_pascal_case("addr", "None")) == "AddrNone"
        expect(join_pascal_case("None")) == "None_"


def describe_to_upper_case():
    def converts_mixed_names(expect):
        expect(to_upper_case("Frame_type")) == "FRAME_TYPE"
        expect(to_upper_case("opt_a")) == "OPT_A"
        expect(to_upper_case("None")) == "NONE"


def describe_escape_if_reserved():
    def leaves_plain_identifiers(expect):
        expect(escape_if_reserved("frame")) == "frame"

    def escapes_keywords(expect):
        expect(escape_if_reserved("def")) == "def_"
