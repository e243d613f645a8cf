"""Bitfield engine: renders register readers and writers for bit-packed fields."""

import logging
from dataclasses import dataclass

from dataclasses_json import DataClassJsonMixin
from jinja2 import Environment, PackageLoader

from .errors import SchemaError, WidthError
from .naming import join_pascal_case, to_pascal_case, to_snake_case
from .types import BitfieldSchema, NamedField, Reserved
from .util import docstring, hex_literal
from .widths import resolve_bits, resolve_bytes, resolve_register

_logger = logging.getLogger(__name__)

env = Environment(
    loader=PackageLoader("bitlayout.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

template = env.get_template("bitfield.py.j2")

# Names the generated register reader/writer classes use themselves
REGISTER_INTERNALS = frozenset(["bit", "bits", "set_bit", "clear_bit"])
# Names the generated field writer classes use themselves
WRITER_INTERNALS = frozenset(["bits", "variant", "w"])


@dataclass(frozen=True)
class VariantLayout(DataClassJsonMixin):
    """A declared value of an enumerated field."""

    name: str
    ident: str
    setter: str
    value: int
    description: str = ""

    @property
    def predicate(self) -> str:
        return f"is_{self.setter.rstrip('_')}"


@dataclass(frozen=True)
class FieldLayout(DataClassJsonMixin):
    """Placement of a named field inside its register."""

    name: str
    ident: str
    type_name: str
    offset: int
    width: int
    description: str = ""
    variants: tuple[VariantLayout, ...] = ()

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1

    @property
    def shifted_mask(self) -> int:
        return self.mask << self.offset

    @property
    def is_bool(self) -> bool:
        return self.width == 1

    @property
    def is_enumerated(self) -> bool:
        return bool(self.variants)

    @property
    def is_exhaustive(self) -> bool:
        return len(self.variants) == 1 << self.width

    @property
    def python_type(self) -> str:
        return resolve_bits(self.width).python_type

    @property
    def enum_name(self) -> str:
        return self.type_name

    @property
    def reader_name(self) -> str:
        return f"{self.type_name}R"

    @property
    def writer_name(self) -> str:
        return f"{self.type_name}W"

    def literal(self, value: int) -> str:
        """Render a raw value the way the field's reader holds it."""
        if self.is_bool:
            return "True" if value else "False"
        return str(value)


@dataclass(frozen=True)
class BitfieldLayout(DataClassJsonMixin):
    """Computed layout of a bitfield register."""

    name: str
    type_name: str
    description: str
    total_width: int
    register_width: int
    fields: tuple[FieldLayout, ...]

    @property
    def reader_name(self) -> str:
        return f"{self.type_name}R"

    @property
    def writer_name(self) -> str:
        return f"{self.type_name}W"

    @property
    def storage_bytes(self) -> int:
        return self.register_width // 8

    @property
    def class_names(self) -> list[str]:
        """Every top-level class the rendered fragment defines."""
        names: list[str] = []
        for f in self.fields:
            if f.is_enumerated:
                names += [f.enum_name, f.reader_name]
            names.append(f.writer_name)
        return names + [self.reader_name, self.writer_name]


def _slot_name(slot: NamedField | Reserved) -> str:
    return slot.name if isinstance(slot, NamedField) else "<reserved>"


def _layout_variants(schema: BitfieldSchema, field: NamedField) -> tuple[VariantLayout, ...]:
    variants: list[VariantLayout] = []
    idents: set[str] = set()
    values: set[int] = set()

    for ev in field.values:
        if not 0 <= ev.value <= (1 << field.width) - 1:
            raise WidthError(
                f"{schema.name}.{field.name}: value {ev.name}={ev.value} "
                f"does not fit in {field.width} bits"
            )
        ident = to_pascal_case(ev.name)
        if ident in idents:
            raise SchemaError(f"{schema.name}.{field.name}: variant {ev.name} declared twice")
        if ev.value in values:
            raise SchemaError(
                f"{schema.name}.{field.name}: value {ev.value} declared by more than one variant"
            )
        idents.add(ident)
        values.add(ev.value)
        variants.append(
            VariantLayout(
                name=ev.name,
                ident=ident,
                setter=to_snake_case(ev.name, WRITER_INTERNALS),
                value=ev.value,
                description=ev.description,
            )
        )

    return tuple(variants)


def layout(schema: BitfieldSchema) -> BitfieldLayout:
    """Compute offsets and masks, walking slots LSB first."""
    type_name = to_pascal_case(schema.name)
    fields: list[FieldLayout] = []
    idents: set[str] = set()
    offset = 0

    for slot in schema.slots:
        try:
            resolve_bits(slot.width)
        except WidthError as e:
            raise WidthError(f"{schema.name}.{_slot_name(slot)}: {e}") from e

        if isinstance(slot, NamedField):
            ident = to_snake_case(slot.name, REGISTER_INTERNALS)
            if ident in idents:
                raise SchemaError(f"{schema.name}: field {slot.name} declared twice")
            idents.add(ident)
            fields.append(
                FieldLayout(
                    name=slot.name,
                    ident=ident,
                    type_name=join_pascal_case(schema.name, slot.name),
                    offset=offset,
                    width=slot.width,
                    description=slot.description,
                    variants=_layout_variants(schema, slot),
                )
            )

        offset += slot.width

    try:
        register = resolve_register(offset)
    except WidthError as e:
        raise WidthError(f"{schema.name}: {e}") from e

    _logger.debug(
        "Bitfield %s: %d bits in a %d-bit register", schema.name, offset, register.bits
    )

    result = BitfieldLayout(
        name=schema.name,
        type_name=type_name,
        description=schema.description,
        total_width=offset,
        register_width=register.bits,
        fields=tuple(fields),
    )

    seen: set[str] = set()
    for class_name in result.class_names:
        if class_name in seen:
            raise SchemaError(f"{schema.name}: generated class {class_name} defined twice")
        seen.add(class_name)

    return result


def storage_bytes(schema: BitfieldSchema, byte_width: int | None = None) -> int:
    """Return the bytes a bitfield occupies as a structure member.

    An explicit `byte_width` must be a valid primitive width and wide enough
    for the register.
    """
    register = resolve_register(schema.total_width)
    if byte_width is None:
        return register.bytes

    resolve_bytes(byte_width)
    if byte_width < register.bytes:
        raise WidthError(
            f"{schema.name} needs {register.bytes} bytes of storage, got {byte_width}"
        )
    return byte_width


def render(schema: BitfieldSchema) -> str:
    """Render a bitfield schema to Python source code."""
    bitfield = layout(schema)
    _logger.debug("Rendering bitfield %s (%d fields)", schema.name, len(bitfield.fields))
    return template.render(bitfield=bitfield, docstring=docstring, hex=hex_literal)
