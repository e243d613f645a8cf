"""Reader, writer and accessor bases for generated bitfield and structure code."""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Generic, NoReturn, TypeVar

from .serialization import SerializationError

E = TypeVar("E", bound=Enum)


class UnknownVariant(SerializationError):
    """Raised when raw field bits match none of the declared variants."""

    def __init__(self, bits: int) -> None:
        self.bits = bits
        super().__init__(f"Raw value {int(bits)} matches no declared variant")


@dataclass(frozen=True)
class Known(Generic[E]):
    """A decoded value that matches a declared variant."""

    variant: E

    def unwrap(self) -> E:
        return self.variant


@dataclass(frozen=True)
class Unknown:
    """A decoded value that matches no declared variant."""

    bits: int

    def unwrap(self) -> NoReturn:
        raise UnknownVariant(self.bits)


class FieldReader:
    """Holds the raw bits of one field extracted from a register."""

    def __init__(self, bits: int) -> None:
        self.bits = bits

    def __int__(self) -> int:
        return int(self.bits)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldReader):
            return type(self) is type(other) and self.bits == other.bits
        return NotImplemented

    def __hash__(self) -> int:
        return hash((type(self), self.bits))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.bits!r})"


class FieldWriter:
    """Writes one field into the register writer `w` it was taken from."""

    def __init__(self, w: "RegisterWriter") -> None:
        self.w = w


class RegisterReader:
    """Read-only view over a raw register value."""

    WIDTH: ClassVar[int] = 64

    def __init__(self, bits: int = 0) -> None:
        if not 0 <= bits < 1 << self.WIDTH:
            raise ValueError(f"{bits} does not fit in a {self.WIDTH}-bit register")
        self.bits = bits

    def __int__(self) -> int:
        return self.bits

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RegisterReader):
            return type(self) is type(other) and self.bits == other.bits
        return NotImplemented

    def __hash__(self) -> int:
        return hash((type(self), self.bits))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.bits:#x})"


class RegisterWriter:
    """Mutable register value updated field by field with masked writes."""

    WIDTH: ClassVar[int] = 64

    def __init__(self, bits: int = 0) -> None:
        if not 0 <= bits < 1 << self.WIDTH:
            raise ValueError(f"{bits} does not fit in a {self.WIDTH}-bit register")
        self.bits = bits

    def __int__(self) -> int:
        return self.bits

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.bits:#x})"


O = TypeVar("O")


class MemberAccessor(Generic[O]):
    """Reads and updates one member of the structure instance that owns it."""

    def __init__(self, owner: O) -> None:
        self._owner = owner
