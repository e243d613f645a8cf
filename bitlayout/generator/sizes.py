"""Size calculation for packed structures."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum, auto

from dataclasses_json import DataClassJsonMixin

from .alternatives import AlternativesRegistry
from .bitfield import storage_bytes
from .errors import SchemaError, WidthError
from .types import AlternativeMember, BitfieldMember, PrimitiveMember, StructMember, StructureSchema
from .widths import resolve_bytes


class SizeKind(StrEnum):
    """Classification of size characteristics."""

    FIXED = auto()  # Min == Max, no alternative members
    BOUNDED = auto()  # Depends on which alternative option is active


@dataclass(frozen=True)
class SizeInfo(DataClassJsonMixin):
    """Size information for a member or structure."""

    min_size: int
    max_size: int
    kind: SizeKind

    @property
    def is_fixed(self) -> bool:
        return self.kind == SizeKind.FIXED


@dataclass(frozen=True)
class StructSizeInfo(DataClassJsonMixin):
    """Complete size information for a structure."""

    name: str
    size: SizeInfo


class SizeCalculator:
    """Calculate wire sizes for structures and their members."""

    def __init__(self, registry: AlternativesRegistry | None = None):
        self.registry = registry if registry is not None else AlternativesRegistry()
        self._cache: dict[str, SizeInfo] = {}
        self._in_progress: set[str] = set()

    def calc_member_size(self, structure: StructureSchema, member: StructMember) -> SizeInfo:
        """Calculate size for a structure member."""
        if isinstance(member, PrimitiveMember):
            try:
                size = resolve_bytes(member.byte_width).bytes
            except WidthError as e:
                raise WidthError(f"{structure.name}.{member.name}: {e}") from e
            return SizeInfo(size, size, SizeKind.FIXED)

        if isinstance(member, BitfieldMember):
            try:
                size = storage_bytes(member.bitfield, member.byte_width)
            except WidthError as e:
                raise WidthError(f"{structure.name}.{member.name}: {e}") from e
            return SizeInfo(size, size, SizeKind.FIXED)

        if isinstance(member, AlternativeMember):
            group = self.registry.get(member.group, member=member.name, structure=structure.name)
            options = [self.calc_struct_size(option).size for option in group.options]
            return SizeInfo(
                min(o.min_size for o in options),
                max(o.max_size for o in options),
                SizeKind.BOUNDED,
            )

        raise SchemaError(f"{structure.name}.{member}: unknown member kind")

    def calc_struct_size(self, structure: StructureSchema) -> StructSizeInfo:
        """Calculate size for a structure (with caching)."""
        name = structure.name
        if name in self._cache:
            return StructSizeInfo(name, self._cache[name])
        if name in self._in_progress:
            raise SchemaError(f"{name} contains itself through its alternatives")

        self._in_progress.add(name)
        try:
            total_min = 0
            total_max = 0
            overall_kind = SizeKind.FIXED

            for member in structure.members:
                size = self.calc_member_size(structure, member)
                total_min += size.min_size
                total_max += size.max_size
                if size.kind == SizeKind.BOUNDED:
                    overall_kind = SizeKind.BOUNDED
        finally:
            self._in_progress.discard(name)

        struct_size = SizeInfo(total_min, total_max, overall_kind)
        self._cache[name] = struct_size

        return StructSizeInfo(name, struct_size)


def calculate_sizes(
    structures: Iterable[StructureSchema],
    registry: AlternativesRegistry | None = None,
) -> dict[str, StructSizeInfo]:
    """Calculate size information for a set of structures."""
    calc = SizeCalculator(registry)
    return {s.name: calc.calc_struct_size(s) for s in structures}
