"""Type expressions found in documentation tags.

Only the shapes that matter for type declarations are modelled: single named
types, `null`, arrays, and unions. Everything else parses to `UnknownType`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .names import NameContext

# Documentation keywords, matched case-insensitively and stored lowercased
KEYWORDS = frozenset(
    {
        "array-key", "bool", "boolean", "callable", "callback", "double",
        "false", "float", "int", "integer", "iterable", "mixed", "never",
        "numeric", "object", "parent", "real", "resource", "scalar", "self",
        "static", "string", "true", "void", "$this",
    }
)  # fmt: skip

# Generic forms that are plain arrays as far as declarations go
_ARRAY_GENERICS = frozenset({"array", "list", "non-empty-array", "non-empty-list"})

_IDENT = r"[A-Za-z_\x80-\U0010ffff][\w\x80-\U0010ffff]*"
_CLASS_NAME = re.compile(rf"^\\?{_IDENT}(?:\\{_IDENT})*$")
_GENERIC = re.compile(r"^([\w\\-]+)\s*<.*>$", re.DOTALL)

_OPENERS = {"<": ">", "(": ")", "[": "]", "{": "}"}


@dataclass(frozen=True)
class NamedType:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class NullType:
    def __str__(self) -> str:
        return "null"


@dataclass(frozen=True)
class ArrayType:
    """Array, optionally of a known value type (`string[]`)."""

    value_type: Type | None = None

    def __str__(self) -> str:
        if self.value_type is None:
            return "array"
        inner = str(self.value_type)
        if isinstance(self.value_type, CompoundType):
            inner = f"({inner})"
        return f"{inner}[]"


@dataclass(frozen=True)
class CompoundType:
    """Union of alternatives (`int|null`)."""

    types: tuple[Type, ...]

    def has(self, index: int) -> bool:
        return 0 <= index < len(self.types)

    def get(self, index: int) -> Type | None:
        return self.types[index] if self.has(index) else None

    def __str__(self) -> str:
        return "|".join(str(t) for t in self.types)


@dataclass(frozen=True)
class UnknownType:
    """Expression that cannot map to a declaration (`A&B`, `class-string<T>`)."""

    text: str

    def __str__(self) -> str:
        return self.text


Type = NamedType | NullType | ArrayType | CompoundType | UnknownType


def split_top_level(text: str, separator: str) -> list[str]:
    """Split on separator, ignoring occurrences inside brackets."""
    parts = []
    depth = 0
    current = []
    for char in text:
        if char in _OPENERS:
            depth += 1
        elif char in _OPENERS.values():
            depth = max(depth - 1, 0)
        elif char == separator and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return parts


def _is_grouped(text: str) -> bool:
    """True when the whole text is one parenthesized group: "(a|b)"."""
    if not (text.startswith("(") and text.endswith(")")):
        return False
    depth = 0
    for i, char in enumerate(text):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0 and i != len(text) - 1:
                return False
    return True


def parse_type(text: str, context: NameContext | None = None) -> Type:
    """Parse a documentation type expression.

    Class names are resolved to fully qualified names with `context`.
    """
    context = context or NameContext()
    text = text.strip()

    if not text:
        return UnknownType(text)

    if text.startswith("?"):
        return CompoundType((parse_type(text[1:], context), NullType()))

    alternatives = split_top_level(text, "|")
    if len(alternatives) > 1:
        return CompoundType(tuple(parse_type(a, context) for a in alternatives))

    if _is_grouped(text):
        return parse_type(text[1:-1], context)

    if text.endswith("[]"):
        return ArrayType(parse_type(text[:-2], context))

    generic = _GENERIC.match(text)
    if generic:
        base = generic.group(1)
        if base.lower() in _ARRAY_GENERICS:
            return ArrayType()
        if _CLASS_NAME.match(base):
            return NamedType(context.resolve(base))
        return UnknownType(text)

    lowered = text.lower()
    if lowered == "null":
        return NullType()
    if lowered == "array":
        return ArrayType()
    if lowered in KEYWORDS:
        return NamedType(lowered)
    if _CLASS_NAME.match(text):
        if "\\" not in text and text == lowered:
            # All-lowercase single words stay as written, so that typos and
            # pseudo types are caught by the scalar whitelist
            return NamedType(text)
        return NamedType(context.resolve(text))

    return UnknownType(text)
