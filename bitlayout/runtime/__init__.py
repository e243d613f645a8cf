"""Runtime support imported by generated layout code."""

from .fields import (
    FieldReader,
    FieldWriter,
    Known,
    MemberAccessor,
    RegisterReader,
    RegisterWriter,
    Unknown,
    UnknownVariant,
)
from .serialization import Alternative, SerializationError, Struct, TruncatedInput

__all__ = [
    "Alternative",
    "FieldReader",
    "FieldWriter",
    "Known",
    "MemberAccessor",
    "RegisterReader",
    "RegisterWriter",
    "SerializationError",
    "Struct",
    "TruncatedInput",
    "Unknown",
    "UnknownVariant",
]
