"""Serialization support for generated layout types."""

from enum import Enum
from typing import Any, Self


class SerializationError(RuntimeError):
    """Raised when serialization or deserialization fails."""


class TruncatedInput(SerializationError):
    """Raised when a read runs past the end of the available bytes."""

    def __init__(self, type_name: str, needed: int, available: int) -> None:
        self.type_name = type_name
        self.needed = needed
        self.available = max(0, available)
        super().__init__(f"{type_name} needs {needed} bytes, only {self.available} available")


class Struct:
    """Base class for generated packed structures.

    Subclasses are @dataclass decorated. Structures without alternative
    members also provide `read()`; structures with alternative members can
    only be written, since the wire format carries no tag.

    Example:
        @dataclass
        class AddrShort(Struct):
            SIZE: ClassVar[int] = 2
            address: int = 0
    """

    @classmethod
    def default(cls) -> Self:
        """Return the all-zero instance with every alternative at its default."""
        return cls()

    def write(self) -> bytes:
        """Serialize to little-endian bytes. Generated code overrides this."""
        raise NotImplementedError("write() must be implemented by generated code")

    @classmethod
    def read(cls, data: bytes | memoryview, offset: int = 0) -> tuple[Self, int]:
        """Deserialize from bytes.

        Args:
            data: The bytes to read from.
            offset: Starting offset in data.

        Returns:
            Tuple of (instance, bytes_consumed).
        """
        raise NotImplementedError(f"{cls.__name__} has no fixed layout to read")


class Alternative:
    """Base class for generated tagged unions over alternative options.

    The union holds only the option payload; the tag is derived from the
    payload's type, so the two can never disagree.
    """

    value: Any

    @classmethod
    def default(cls) -> Self:
        raise NotImplementedError("default() must be implemented by generated code")

    @property
    def tag(self) -> Enum:
        raise NotImplementedError("tag must be implemented by generated code")

    def write(self) -> bytes:
        """Serialize the active option. No tag byte is written."""
        return self.value.write()
