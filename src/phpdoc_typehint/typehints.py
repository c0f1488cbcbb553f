"""Map documented types to declarable PHP types."""

from __future__ import annotations

from typing import NamedTuple

from .docblock import Tag
from .type_expressions import ArrayType, CompoundType, NullType, UnknownType

# Lowercase names that may be used as declarations
# https://www.php.net/manual/en/language.types.declarations.php
TYPES = frozenset({"array", "bool", "callable", "float", "int", "self", "string"})

# "real" is not part of the PHPDoc standard, so it is not mapped
_ALIASES = {
    "integer": "int",
    "boolean": "bool",
    "double": "float",
    "callback": "callable",
}


class ResolvedType(NamedTuple):
    name: str
    nullable: bool


def normalize_type(name: str) -> str:
    """Map common documentation aliases to their declaration names."""
    return _ALIASES.get(name, name)


def type_from_tag(tag: Tag) -> ResolvedType | None:
    """Get the documented type of a tag, or None if it cannot be guessed."""
    type_ = tag.type

    if type_ is None:
        return None

    if isinstance(type_, CompoundType):
        if type_.has(2):
            # Several types, cannot guess
            return None

        first, second = type_.get(0), type_.get(1)

        if isinstance(first, NullType) and isinstance(second, NullType):
            return None

        if isinstance(second, NullType):
            other = first
        elif isinstance(first, NullType):
            other = second
        else:
            # Mixed types, cannot guess
            return None

        if isinstance(other, ArrayType):
            return ResolvedType("array", True)
        if isinstance(other, (CompoundType, UnknownType)):
            return None
        return ResolvedType(str(other), True)

    if isinstance(type_, ArrayType):
        # Typed arrays (string[]) only convert to plain arrays
        return ResolvedType("array", False)

    if isinstance(type_, (NullType, UnknownType)):
        return None

    return ResolvedType(str(type_), False)


def get_type(tag: Tag) -> ResolvedType | None:
    """Get the declarable type of a tag.

    All-lowercase names are treated as scalar types: aliases are normalized
    and the result must be in TYPES. Other names are class names.
    """
    resolved = type_from_tag(tag)
    if resolved is None:
        return None

    if resolved.name == resolved.name.lower():
        name = normalize_type(resolved.name)
        if name not in TYPES:
            return None
        return ResolvedType(name, resolved.nullable)

    return resolved
