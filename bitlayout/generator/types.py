"""Schema definitions for bitfield registers and packed structures.

Every schema object is a frozen dataclass. The `add_*` builder methods return
a new object rather than mutating, so a schema handed to an engine is never
changed underneath it.
"""

from collections.abc import Callable
from dataclasses import dataclass, replace

from dataclasses_json import DataClassJsonMixin

from .errors import SchemaError


@dataclass(frozen=True)
class EnumeratedValue(DataClassJsonMixin):
    """Represents a named value of a bitfield field."""

    name: str
    value: int
    description: str = ""


@dataclass(frozen=True)
class NamedField(DataClassJsonMixin):
    """Represents a named range of bits, optionally with enumerated values."""

    name: str
    width: int
    description: str = ""
    values: tuple[EnumeratedValue, ...] = ()

    @property
    def is_enumerated(self) -> bool:
        return bool(self.values)

    def add_enum_value(self, name: str, value: int, description: str = "") -> "NamedField":
        return replace(self, values=self.values + (EnumeratedValue(name, value, description),))


@dataclass(frozen=True)
class Reserved(DataClassJsonMixin):
    """Represents unnamed bits that only advance the offset."""

    width: int


FieldSlot = NamedField | Reserved


@dataclass(frozen=True)
class BitfieldSchema(DataClassJsonMixin):
    """Represents a register subdivided into fields, packed LSB first."""

    name: str
    description: str = ""
    slots: tuple[FieldSlot, ...] = ()

    @property
    def fields(self) -> list[NamedField]:
        return [slot for slot in self.slots if isinstance(slot, NamedField)]

    @property
    def total_width(self) -> int:
        return sum(slot.width for slot in self.slots)

    def add_slot(self, slot: FieldSlot) -> "BitfieldSchema":
        return replace(self, slots=self.slots + (slot,))

    def add_field(
        self,
        name: str,
        width: int,
        description: str = "",
        values: tuple[EnumeratedValue, ...] = (),
    ) -> "BitfieldSchema":
        return self.add_slot(NamedField(name, width, description, tuple(values)))

    def add_bit_field(
        self,
        name: str,
        description: str,
        width: int,
        fn: Callable[[NamedField], NamedField] | None = None,
    ) -> "BitfieldSchema":
        """Add a field, letting `fn` attach enumerated values to it."""
        field = NamedField(name, width, description)
        if fn is not None:
            field = fn(field)
        return self.add_slot(field)

    def add_reserved(self, width: int) -> "BitfieldSchema":
        return self.add_slot(Reserved(width))


@dataclass(frozen=True)
class PrimitiveMember(DataClassJsonMixin):
    """Represents an unsigned little-endian integer member."""

    name: str
    byte_width: int


@dataclass(frozen=True)
class BitfieldMember(DataClassJsonMixin):
    """Represents a member stored as a bitfield register.

    byte_width=None uses the register's own storage width.
    """

    name: str
    bitfield: BitfieldSchema
    byte_width: int | None = None


@dataclass(frozen=True)
class AlternativeMember(DataClassJsonMixin):
    """Represents a member holding one option of an alternative group."""

    name: str
    group: str


StructMember = PrimitiveMember | BitfieldMember | AlternativeMember


@dataclass(frozen=True)
class StructureSchema(DataClassJsonMixin):
    """Represents a densely packed structure; member order is wire order."""

    name: str
    members: tuple[StructMember, ...] = ()
    description: str = ""

    @property
    def has_alternatives(self) -> bool:
        return any(isinstance(m, AlternativeMember) for m in self.members)

    @property
    def alternative_members(self) -> list[AlternativeMember]:
        return [m for m in self.members if isinstance(m, AlternativeMember)]

    @property
    def bitfield_members(self) -> list[BitfieldMember]:
        return [m for m in self.members if isinstance(m, BitfieldMember)]

    def add_member(self, member: StructMember) -> "StructureSchema":
        return replace(self, members=self.members + (member,))

    def add_prim_field(self, name: str, byte_width: int) -> "StructureSchema":
        return self.add_member(PrimitiveMember(name, byte_width))

    def add_u8_field(self, name: str) -> "StructureSchema":
        return self.add_prim_field(name, 1)

    def add_u16_field(self, name: str) -> "StructureSchema":
        return self.add_prim_field(name, 2)

    def add_u32_field(self, name: str) -> "StructureSchema":
        return self.add_prim_field(name, 4)

    def add_u64_field(self, name: str) -> "StructureSchema":
        return self.add_prim_field(name, 8)

    def add_bitfield(
        self, name: str, bitfield: BitfieldSchema, byte_width: int | None = None
    ) -> "StructureSchema":
        return self.add_member(BitfieldMember(name, bitfield, byte_width))

    def add_alt_field(self, name: str, group: "AlternativeGroup | str") -> "StructureSchema":
        group_name = group if isinstance(group, str) else group.name
        return self.add_member(AlternativeMember(name, group_name))


@dataclass(frozen=True)
class AlternativeGroup(DataClassJsonMixin):
    """Represents a set of mutually exclusive structures with one default."""

    name: str
    default: str
    options: tuple[StructureSchema, ...]

    def __post_init__(self) -> None:
        names = self.option_names
        if len(set(names)) != len(names):
            raise SchemaError(f"Alternative group '{self.name}' repeats an option")
        if self.default not in names:
            raise SchemaError(
                f"Default '{self.default}' of alternative group '{self.name}' is not an option"
            )

    @classmethod
    def new(cls, name: str, default: StructureSchema) -> "AlternativeGroup":
        return cls(name, default.name, (default,))

    @property
    def option_names(self) -> list[str]:
        return [option.name for option in self.options]

    @property
    def default_option(self) -> StructureSchema:
        return self.option(self.default)

    def option(self, name: str) -> StructureSchema:
        for option in self.options:
            if option.name == name:
                return option
        raise SchemaError(f"Alternative group '{self.name}' has no option '{name}'")

    def insert_struct(self, structure: StructureSchema) -> "AlternativeGroup":
        return replace(self, options=self.options + (structure,))
