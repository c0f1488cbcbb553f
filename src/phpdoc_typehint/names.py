"""Name resolution and FQSEN helpers.

FQSENs (fully qualified structural element names) follow phpDocumentor:

    \\Ns\\Name           class, interface or trait
    \\Ns\\name()         function
    \\Ns\\Name::name()   method
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

# Names that are never namespace-qualified
SPECIAL_NAMES = frozenset({"self", "static", "parent", "$this"})

_USE_ITEM = re.compile(r"^\\?([\w\\\x80-\U0010ffff]+?)(?:\s+as\s+(\w+))?$", re.IGNORECASE)
_GROUP_USE = re.compile(r"^(.*?)\\?\s*\{(.*)\}$", re.DOTALL)


@dataclass
class NameContext:
    """Namespace and class imports in effect at a point in a file."""

    namespace: str | None = None  # "\\Foo\\Bar" or None for the global namespace
    imports: dict[str, str] = field(default_factory=dict)  # lowercased alias -> FQSEN

    def resolve(self, name: str) -> str:
        """Resolve a class name to its fully qualified form."""
        name = name.strip()
        if not name or name.startswith("\\") or name.lower() in SPECIAL_NAMES:
            return name

        if name.lower().startswith("namespace\\"):
            return object_fqsen(self.namespace, name[10:])

        first, sep, rest = name.partition("\\")
        imported = self.imports.get(first.lower())
        if imported is not None:
            return f"{imported}{sep}{rest}" if sep else imported

        return object_fqsen(self.namespace, name)

    def add_use(self, statement: str) -> None:
        """Register the class imports of a `use` statement.

        Handles plain, aliased and grouped imports. Function and constant
        imports do not affect class names and are ignored.
        """
        body = statement.strip()
        if body[:3].lower() == "use":
            body = body[3:]
        body = body.strip().rstrip(";").strip()

        if re.match(r"^(function|const)\b", body, re.IGNORECASE):
            return

        prefix = ""
        group = _GROUP_USE.match(body)
        if group:
            prefix = group.group(1).strip().strip("\\")
            body = group.group(2)

        for item in body.split(","):
            item = item.strip()
            if not item or re.match(r"^(function|const)\b", item, re.IGNORECASE):
                continue
            match = _USE_ITEM.match(item)
            if not match:
                continue
            target = match.group(1).strip("\\")
            if prefix:
                target = f"{prefix}\\{target}"
            alias = match.group(2) or target.rsplit("\\", 1)[-1]
            self.imports[alias.lower()] = f"\\{target}"


def namespace_of(fqsen: str) -> str:
    """Extract the namespace part of a class FQSEN ("" for the global namespace)."""
    return fqsen[: fqsen.rfind("\\")] if "\\" in fqsen else ""


def object_fqsen(namespace: str | None, name: str) -> str:
    return f"{namespace or ''}\\{name}"


def function_fqsen(namespace: str | None, name: str) -> str:
    return f"{object_fqsen(namespace, name)}()"


def method_fqsen(object_fqsen_: str, name: str) -> str:
    return f"{object_fqsen_}::{name}()"
