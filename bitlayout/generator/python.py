"""Python module assembly for rendered bitfields and structures."""

import logging
from collections.abc import Iterable
from importlib import resources
from pathlib import Path

from jinja2 import Environment, PackageLoader

from . import bitfield, structure
from .alternatives import AlternativesRegistry
from .errors import SchemaError
from .sizes import SizeCalculator
from .types import AlternativeGroup, BitfieldSchema, StructureSchema

_logger = logging.getLogger(__name__)

RUNTIME_FILES = [
    "__init__.py",
    "fields.py",
    "serialization.py",
]

# Names bound by the module prelude; generated classes must not shadow them
PRELUDE_NAMES = frozenset(
    [
        "Alternative",
        "Callable",
        "ClassVar",
        "Enum",
        "FieldReader",
        "FieldWriter",
        "IntEnum",
        "Known",
        "MemberAccessor",
        "RegisterReader",
        "RegisterWriter",
        "Self",
        "Struct",
        "TruncatedInput",
        "Unknown",
    ]
)

env = Environment(
    loader=PackageLoader("bitlayout.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

template = env.get_template("module.py.j2")


class GeneratedModule:
    """Accumulates rendered fragments into one importable Python module.

    Each schema is rendered once; adding a second, different schema under a
    name already used is an error.
    """

    def __init__(
        self,
        registry: AlternativesRegistry | None = None,
        *,
        runtime_import: str = "bitlayout.runtime",
        comments: Iterable[str] = (),
    ) -> None:
        self.registry = registry if registry is not None else AlternativesRegistry()
        self.runtime_import = runtime_import
        self.comments = list(comments)
        self._sizes = SizeCalculator(self.registry)
        self._fragments: list[str] = []
        self._rendered: dict[str, object] = {}
        self._classes: dict[str, str] = {}

    def _claim(self, kind: str, name: str, schema: object) -> bool:
        key = f"{kind}:{name}"
        if key in self._rendered:
            if self._rendered[key] != schema:
                raise SchemaError(f"Two different {kind} schemas are named '{name}'")
            return False
        self._rendered[key] = schema
        return True

    def _claim_classes(self, owner: str, class_names: Iterable[str]) -> None:
        for class_name in class_names:
            if class_name in PRELUDE_NAMES:
                raise SchemaError(f"{owner} would shadow the imported name {class_name}")
            if class_name in self._classes:
                raise SchemaError(
                    f"{owner} and {self._classes[class_name]} both generate class {class_name}"
                )
            self._classes[class_name] = owner

    def add_bitfield(self, schema: BitfieldSchema) -> None:
        if self._claim("bitfield", schema.name, schema):
            self._claim_classes(f"bitfield {schema.name}", bitfield.layout(schema).class_names)
            self._fragments.append(bitfield.render(schema))

    def add_struct(self, schema: StructureSchema) -> None:
        for member in schema.bitfield_members:
            self.add_bitfield(member.bitfield)
        if self._claim("structure", schema.name, schema):
            self._claim_classes(f"structure {schema.name}", structure.class_names(schema))
            self._fragments.append(structure.render(schema, self.registry, sizes=self._sizes))

    def add_alternative(self, group: AlternativeGroup) -> None:
        if self._claim("alternative", group.name, group):
            self._claim_classes(f"alternative {group.name}", structure.alternative_class_names(group))
            self._fragments.append(structure.render_alternative(group))

    def add_alternatives(self) -> None:
        """Render every registered group together with its option structures."""
        for option in self.registry.option_structures():
            self.add_struct(option)
        for group in self.registry:
            self.add_alternative(group)

    def render(self) -> str:
        return template.render(
            runtime_import=self.runtime_import,
            comments=self.comments,
            fragments=self._fragments,
        )

    def write_file(self, path: str | Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(), encoding="utf-8")
        _logger.info("Wrote %d fragments to %s", len(self._fragments), path)


def render(
    structures: Iterable[StructureSchema] = (),
    registry: AlternativesRegistry | None = None,
    bitfields: Iterable[BitfieldSchema] = (),
    *,
    comments: Iterable[str] = (),
    runtime_import: str = "bitlayout.runtime",
) -> str:
    """Render bitfields, structures and alternative groups to one Python module.

    Bitfields referenced by structures and the option structures of every
    registered group are pulled in automatically.
    """
    module = GeneratedModule(registry, runtime_import=runtime_import, comments=comments)
    for schema in bitfields:
        module.add_bitfield(schema)
    module.add_alternatives()
    for schema in structures:
        module.add_struct(schema)
    return module.render()


def runtime() -> dict[str, str]:
    """Return the Python runtime files as a dict of filename -> content."""
    result: dict[str, str] = {}
    for filename in RUNTIME_FILES:
        content = resources.files("bitlayout.runtime").joinpath(filename).read_text()
        result[filename] = content
    return result
