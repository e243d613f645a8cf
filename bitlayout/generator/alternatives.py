"""Registry mapping alternative group names to their option sets."""

import logging
from collections.abc import Callable, Iterable, Iterator

from .errors import SchemaError, UnknownAlternativeGroup
from .types import AlternativeGroup, StructureSchema

_logger = logging.getLogger(__name__)


class AlternativesRegistry:
    """Maps alternative group names to their options.

    Like the schema objects, a registry is never changed in place: `insert`
    returns a new registry.
    """

    def __init__(self, groups: Iterable[AlternativeGroup] = ()) -> None:
        self._groups: dict[str, AlternativeGroup] = {}
        for group in groups:
            if group.name in self._groups and self._groups[group.name] != group:
                raise SchemaError(f"Alternative group '{group.name}' registered twice")
            self._groups[group.name] = group

    def __contains__(self, name: object) -> bool:
        return name in self._groups

    def __iter__(self) -> Iterator[AlternativeGroup]:
        return iter(self._groups.values())

    def __len__(self) -> int:
        return len(self._groups)

    def insert(self, group: AlternativeGroup) -> "AlternativesRegistry":
        return AlternativesRegistry([*self._groups.values(), group])

    def insert_new_option(
        self,
        name: str,
        default: StructureSchema,
        fn: Callable[[AlternativeGroup], AlternativeGroup] | None = None,
    ) -> "AlternativesRegistry":
        """Register a group built from `default`, letting `fn` add the other options."""
        group = AlternativeGroup.new(name, default)
        if fn is not None:
            group = fn(group)
        return self.insert(group)

    def get(
        self, name: str, *, member: str | None = None, structure: str | None = None
    ) -> AlternativeGroup:
        """Look up a group, naming the referencing member if it is missing."""
        try:
            return self._groups[name]
        except KeyError:
            raise UnknownAlternativeGroup(name, member, structure) from None

    def groups_for(self, structure: StructureSchema) -> list[AlternativeGroup]:
        """Return the groups referenced by a structure, in first-use order."""
        found: dict[str, AlternativeGroup] = {}
        for member in structure.alternative_members:
            if member.group not in found:
                found[member.group] = self.get(
                    member.group, member=member.name, structure=structure.name
                )
        return list(found.values())

    def option_structures(self) -> list[StructureSchema]:
        """Return every option structure once, in registration order."""
        seen: dict[str, StructureSchema] = {}
        for group in self._groups.values():
            for option in group.options:
                if option.name in seen and seen[option.name] != option:
                    raise SchemaError(f"Two different structures are named '{option.name}'")
                seen.setdefault(option.name, option)
        _logger.debug("Registry provides %d option structures", len(seen))
        return list(seen.values())
