"""Errors raised while generating layout code."""


class GeneratorError(RuntimeError):
    """Base exception for layout generation failures."""


class SchemaError(GeneratorError):
    """Raised when a schema violates one of its invariants."""


class WidthError(GeneratorError):
    """Raised when a bit or byte width has no representable integer type."""


class UnknownAlternativeGroup(GeneratorError):
    """Raised when a member references an alternative group that was never registered."""

    def __init__(self, group: str, member: str | None = None, structure: str | None = None):
        self.group = group
        self.member = member
        self.structure = structure
        if structure is not None and member is not None:
            msg = f"{structure}.{member} references unknown alternative group '{group}'"
        else:
            msg = f"Unknown alternative group '{group}'"
        super().__init__(msg)
