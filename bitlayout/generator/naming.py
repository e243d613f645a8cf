"""Identifier case conversion and keyword escaping for generated code."""

import keyword
import re
from collections.abc import Iterable

# Characters some schemas use in names that are not valid in identifiers
BLACKLIST_CHARS = "()[]/ -"

_STRIP = str.maketrans("", "", BLACKLIST_CHARS)
_WORD = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|\d+[a-z]*")


def _words(name: str) -> list[str]:
    stripped = name.translate(_STRIP)
    return [w for chunk in re.split(r"[^A-Za-z0-9]+", stripped) for w in _WORD.findall(chunk)]


def _guard_digit(ident: str) -> str:
    if not ident:
        return "_"
    if ident[0].isdigit():
        return f"_{ident}"
    return ident


def escape_if_reserved(ident: str, reserved: Iterable[str] = ()) -> str:
    """Append an underscore to Python keywords and caller-reserved names."""
    if keyword.iskeyword(ident) or ident in reserved:
        return f"{ident}_"
    return ident


def to_snake_case(name: str, reserved: Iterable[str] = ()) -> str:
    """Convert a schema name to a sanitized snake_case identifier."""
    ident = _guard_digit("_".join(w.lower() for w in _words(name)))
    return escape_if_reserved(ident, reserved)


def to_pascal_case(name: str, reserved: Iterable[str] = ()) -> str:
    """Convert a schema name to a sanitized PascalCase identifier."""
    return join_pascal_case(name, reserved=reserved)


def join_pascal_case(*names: str, reserved: Iterable[str] = ()) -> str:
    """Concatenate schema names into one PascalCase identifier, e.g. a register and its field."""
    words = [w for name in names for w in _words(name)]
    ident = _guard_digit("".join(w[0].upper() + w[1:].lower() for w in words))
    return escape_if_reserved(ident, reserved)


def to_upper_case(name: str) -> str:
    """Convert a schema name to a sanitized UPPER_SNAKE_CASE identifier."""
    return _guard_digit("_".join(w.upper() for w in _words(name)))
