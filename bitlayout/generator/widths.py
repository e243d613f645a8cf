"""Integer width resolution for bit and byte counts."""

from dataclasses import dataclass

from dataclasses_json import DataClassJsonMixin

from .errors import WidthError

BITS_PER_BYTE = 8
MAX_BITS = 64

# Little-endian struct codes per storage width in bits
FORMAT_CHARS = {
    1: "?",
    8: "B",
    16: "H",
    32: "I",
    64: "Q",
}

BYTE_WIDTHS = frozenset([1, 2, 4, 8])


@dataclass(frozen=True)
class IntWidth(DataClassJsonMixin):
    """A supported integer storage width.

    `bits` is 1 for booleans, otherwise one of 8, 16, 32 or 64.
    """

    bits: int

    @property
    def bytes(self) -> int:
        return max(1, self.bits // BITS_PER_BYTE)

    @property
    def mask(self) -> int:
        return (1 << self.bits) - 1

    @property
    def python_type(self) -> str:
        return "bool" if self.bits == 1 else "int"

    @property
    def format_char(self) -> str:
        return FORMAT_CHARS[self.bits]


def resolve_bits(bits: int) -> IntWidth:
    """Return the smallest integer width able to hold `bits` bits."""
    if bits == 1:
        return IntWidth(1)
    if 2 <= bits <= 8:
        return IntWidth(8)
    if 9 <= bits <= 16:
        return IntWidth(16)
    if 17 <= bits <= 32:
        return IntWidth(32)
    if 33 <= bits <= MAX_BITS:
        return IntWidth(64)
    raise WidthError(f"can't convert {bits} bits into an integer type")


def resolve_register(bits: int) -> IntWidth:
    """Return the storage width of a register holding `bits` bits.

    Registers live in whole bytes, so a single-bit register still takes eight.
    """
    width = resolve_bits(bits)
    if width.bits < BITS_PER_BYTE:
        return IntWidth(BITS_PER_BYTE)
    return width


def resolve_bytes(count: int) -> IntWidth:
    """Return the integer width for a primitive of `count` bytes."""
    if count not in BYTE_WIDTHS:
        raise WidthError(f"can't convert {count} bytes into an integer type")
    return IntWidth(count * BITS_PER_BYTE)
