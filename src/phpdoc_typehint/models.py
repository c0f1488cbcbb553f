"""Read-only symbol model of a PHP project."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, NamedTuple

from .docblock import DocBlock
from .names import method_fqsen


class ObjectKind(Enum):
    CLASS = "class"
    INTERFACE = "interface"
    TRAIT = "trait"
    FUNCTION = "function"  # Top-level scope


class SymbolCoordinates(NamedTuple):
    """Identifies the declaration a signature belongs to."""

    kind: ObjectKind
    namespace: str | None  # "\\Foo\\Bar" or None
    object_name: str | None  # Enclosing class/interface/trait, None for functions
    member: str  # Function or method name


@dataclass
class Function:
    """A function or method declaration."""

    fqsen: str  # "\\Ns\\foo()" or "\\Ns\\Cls::foo()"
    name: str
    docblock: DocBlock | None = None


@dataclass
class ClassLike:
    """A class, interface or trait declaration."""

    fqsen: str  # "\\Ns\\Name"
    name: str
    kind: ObjectKind
    parent: str | None = None  # Parent class FQSEN (classes only)
    interfaces: list[str] = field(default_factory=list)  # Implemented, or extended for interfaces
    methods: dict[str, Function] = field(default_factory=dict)  # method FQSEN -> Function

    def get_method_docblock(self, name: str) -> DocBlock | None:
        method = self.methods.get(method_fqsen(self.fqsen, name))
        return method.docblock if method else None


@dataclass
class SourceFile:
    """A scanned source file and the declarations it contains."""

    path: str
    source: str
    functions: dict[str, Function] = field(default_factory=dict)  # FQSEN -> Function
    classes: dict[str, ClassLike] = field(default_factory=dict)
    interfaces: dict[str, ClassLike] = field(default_factory=dict)
    traits: dict[str, ClassLike] = field(default_factory=dict)

    def add_object(self, obj: ClassLike) -> None:
        self.objects(obj.kind)[obj.fqsen] = obj

    def objects(self, kind: ObjectKind) -> dict[str, ClassLike]:
        if kind is ObjectKind.CLASS:
            return self.classes
        if kind is ObjectKind.INTERFACE:
            return self.interfaces
        if kind is ObjectKind.TRAIT:
            return self.traits
        raise ValueError(f"Not an object kind: {kind}")


@dataclass
class Project:
    """All scanned files; the graph documentation lookups run against."""

    files: list[SourceFile] = field(default_factory=list)

    def find_function(self, fqsen: str) -> Function | None:
        for file in self.files:
            function = file.functions.get(fqsen)
            if function is not None:
                return function
        return None

    def iter_objects(self, kind: ObjectKind) -> Iterator[ClassLike]:
        for file in self.files:
            yield from file.objects(kind).values()

    def find_object(self, fqsen: str, kind: ObjectKind) -> ClassLike | None:
        for obj in self.iter_objects(kind):
            if obj.fqsen == fqsen:
                return obj
        return None
