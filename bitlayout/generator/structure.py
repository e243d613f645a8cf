"""Structure engine: renders packed records, member accessors and tagged unions."""

import logging
from dataclasses import dataclass

from jinja2 import Environment, PackageLoader

from . import bitfield
from .alternatives import AlternativesRegistry
from .errors import SchemaError, WidthError
from .naming import join_pascal_case, to_pascal_case, to_snake_case, to_upper_case
from .sizes import SizeCalculator
from .types import AlternativeGroup, AlternativeMember, BitfieldMember, PrimitiveMember, StructureSchema
from .util import docstring, hex_literal
from .widths import resolve_bytes

_logger = logging.getLogger(__name__)

env = Environment(
    loader=PackageLoader("bitlayout.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

struct_template = env.get_template("structure.py.j2")
alternative_template = env.get_template("alternative.py.j2")

# Names the generated record classes use themselves
STRUCT_INTERNALS = frozenset(["cls", "default", "field", "read", "write"])


@dataclass(frozen=True)
class MemberView:
    """Everything the template needs to know about one member."""

    kind: str  # "primitive", "bitfield" or "alternative"
    name: str
    ident: str
    accessor_name: str
    byte_width: int = 0
    register_mask: int = 0
    reader_name: str = ""
    writer_name: str = ""
    union_name: str = ""

    @property
    def is_fixed(self) -> bool:
        return self.kind != "alternative"

    @property
    def format_char(self) -> str:
        return resolve_bytes(self.byte_width).format_char

    @property
    def max_value(self) -> int:
        return resolve_bytes(self.byte_width).mask

    @property
    def annotation(self) -> str:
        if self.kind == "alternative":
            return f'"{self.union_name}"'
        return "int"

    @property
    def default(self) -> str:
        if self.kind == "alternative":
            return f"field(default_factory=lambda: {self.union_name}.default())"
        return "0"


@dataclass(frozen=True)
class OptionView:
    """One option of a tagged union."""

    name: str
    ident: str
    type_name: str
    tag: str
    is_fixed: bool


def _accessor_name(structure: StructureSchema, member_name: str) -> str:
    return join_pascal_case(structure.name, member_name, "field")


def class_names(structure: StructureSchema) -> list[str]:
    """Every top-level class the rendered structure fragment defines."""
    accessors = [_accessor_name(structure, m.name) for m in structure.members]
    return [*accessors, to_pascal_case(structure.name)]


def alternative_class_names(group: AlternativeGroup) -> list[str]:
    """The tag enum and tagged union rendered for a group."""
    type_name = to_pascal_case(group.name)
    return [f"{type_name}Tag", type_name]


def _member_view(
    structure: StructureSchema,
    member: PrimitiveMember | BitfieldMember | AlternativeMember,
    registry: AlternativesRegistry,
) -> MemberView:
    ident = to_snake_case(member.name, STRUCT_INTERNALS)
    accessor_name = _accessor_name(structure, member.name)

    if isinstance(member, PrimitiveMember):
        try:
            width = resolve_bytes(member.byte_width)
        except WidthError as e:
            raise WidthError(f"{structure.name}.{member.name}: {e}") from e
        return MemberView("primitive", member.name, ident, accessor_name, byte_width=width.bytes)

    if isinstance(member, BitfieldMember):
        try:
            bits = bitfield.layout(member.bitfield)
            size = bitfield.storage_bytes(member.bitfield, member.byte_width)
        except WidthError as e:
            raise WidthError(f"{structure.name}.{member.name}: {e}") from e
        return MemberView(
            "bitfield",
            member.name,
            ident,
            accessor_name,
            byte_width=size,
            register_mask=(1 << bits.register_width) - 1,
            reader_name=bits.reader_name,
            writer_name=bits.writer_name,
        )

    if isinstance(member, AlternativeMember):
        group = registry.get(member.group, member=member.name, structure=structure.name)
        return MemberView(
            "alternative",
            member.name,
            ident,
            accessor_name,
            union_name=to_pascal_case(group.name),
        )

    raise SchemaError(f"{structure.name}.{member}: unknown member kind")


def _batch_members(members: list[MemberView]) -> list[tuple[str, list[MemberView]]]:
    """Group members into runs written with a single struct.pack call.

    Returns list of (batch_type, members) where batch_type is "fixed" or "alternative".
    """
    batches: list[tuple[str, list[MemberView]]] = []
    current: list[MemberView] = []

    for member in members:
        if member.is_fixed:
            current.append(member)
        else:
            if current:
                batches.append(("fixed", current))
                current = []
            batches.append(("alternative", [member]))

    if current:
        batches.append(("fixed", current))

    return batches


def _format(members: list[MemberView]) -> str:
    return "<" + "".join(m.format_char for m in members)


def _pack_args(members: list[MemberView]) -> str:
    return ", ".join(f"self.{m.ident}" for m in members)


def _unpack_targets(members: list[MemberView]) -> str:
    names = ", ".join(m.ident for m in members)
    # Trailing comma for single values so tuple unpacking works: val, = (1,)
    if len(members) == 1:
        names += ","
    return names


def render(
    structure: StructureSchema,
    registry: AlternativesRegistry | None = None,
    *,
    sizes: SizeCalculator | None = None,
) -> str:
    """Render a structure schema to Python source code.

    Fails with UnknownAlternativeGroup if a member names a group missing from
    `registry`, and with WidthError if a member width cannot be represented.
    """
    registry = registry if registry is not None else AlternativesRegistry()
    sizes = sizes if sizes is not None else SizeCalculator(registry)
    type_name = to_pascal_case(structure.name)

    members = [_member_view(structure, m, registry) for m in structure.members]
    idents = [m.ident for m in members]
    for ident in idents:
        if idents.count(ident) > 1:
            raise SchemaError(f"{structure.name}: member {ident} declared twice")

    size = sizes.calc_struct_size(structure).size
    _logger.debug(
        "Rendering structure %s (%d members, %d-%d bytes)",
        structure.name,
        len(members),
        size.min_size,
        size.max_size,
    )

    return struct_template.render(
        structure=structure,
        type_name=type_name,
        members=members,
        fixed=not structure.has_alternatives,
        size=size,
        batches=_batch_members(members),
        pack_format=_format,
        pack_args=_pack_args,
        unpack_targets=_unpack_targets,
        docstring=docstring,
        hex=hex_literal,
    )


def render_alternative(group: AlternativeGroup) -> str:
    """Render the tagged union and tag enum of one alternative group."""
    options = [
        OptionView(
            name=option.name,
            ident=to_snake_case(option.name),
            type_name=to_pascal_case(option.name),
            tag=to_upper_case(option.name),
            is_fixed=not option.has_alternatives,
        )
        for option in group.options
    ]
    tags = [o.tag for o in options]
    for o in options:
        if tags.count(o.tag) > 1:
            raise SchemaError(f"{group.name}: option {o.name} clashes with another option's name")
    _logger.debug("Rendering alternative group %s (%d options)", group.name, len(options))

    return alternative_template.render(
        group=group,
        type_name=to_pascal_case(group.name),
        options=options,
        default=next(o for o in options if o.name == group.default),
        docstring=docstring,
    )


def render_alternatives(registry: AlternativesRegistry) -> str:
    """Render the tagged unions of every registered group."""
    return "\n\n".join(render_alternative(group) for group in registry)
