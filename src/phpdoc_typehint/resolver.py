"""Documentation lookup for functions and methods, following inheritance."""

from __future__ import annotations

import logging
from typing import Iterable

from .docblock import DocBlock
from .models import ObjectKind, Project, SymbolCoordinates
from .names import function_fqsen, namespace_of, object_fqsen
from .typehints import ResolvedType, get_type

log = logging.getLogger(__name__)


class DocBlockResolver:
    """Finds the DocBlock that documents a function or method.

    Methods without their own documentation, or documented only with
    `{@inheritdoc}`, take the documentation of the same method in an
    implemented interface first, then in the parent class. Interfaces are
    searched through their own parents. Traits never inherit.
    """

    def __init__(self, project: Project) -> None:
        self.project = project

    def get_docblock(
        self,
        kind: ObjectKind,
        namespace: str | None,
        object_name: str | None,
        function: str,
        _seen: frozenset[str] = frozenset(),
    ) -> DocBlock | None:
        """Get the DocBlock for a symbol.

        Args:
            kind: Kind of the enclosing declaration (FUNCTION for top-level)
            namespace: Namespace as "\\Foo\\Bar", or None for the global namespace
            object_name: Short name of the enclosing class, interface or trait
            function: Function or method name

        Returns:
            The DocBlock, or None if no usable documentation exists
        """
        if kind is ObjectKind.FUNCTION:
            found = self.project.find_function(function_fqsen(namespace, function))
            return found.docblock if found else None

        if object_name is None:
            return None

        fqsen = object_fqsen(namespace, object_name)
        if fqsen in _seen:
            log.debug("Inheritance cycle through %s, giving up on %s()", fqsen, function)
            return None
        seen = _seen | {fqsen}

        for obj in self.project.iter_objects(kind):
            if obj.fqsen != fqsen:
                continue

            docblock = obj.get_method_docblock(function)

            if kind is ObjectKind.TRAIT or (docblock is not None and not docblock.inherits):
                return docblock

            if kind is ObjectKind.CLASS:
                inherited = self._docblock_for_interfaces(obj.interfaces, function, seen)
                if inherited is not None:
                    return inherited

                if obj.parent is None:
                    return None
                parent = self.project.find_object(obj.parent, ObjectKind.CLASS)
                if parent is None:
                    log.debug("Parent class %s of %s is not part of the project", obj.parent, fqsen)
                    return None

                log.debug("Looking up %s() in parent class %s", function, obj.parent)
                return self.get_docblock(ObjectKind.CLASS, namespace_of(obj.parent), parent.name, function, seen)

            if kind is ObjectKind.INTERFACE:
                inherited = self._docblock_for_interfaces(obj.interfaces, function, seen)
                if inherited is not None:
                    return inherited

        return None

    def _docblock_for_interfaces(
        self, fqsens: Iterable[str], function: str, seen: frozenset[str]
    ) -> DocBlock | None:
        """Get the first DocBlock found in a list of interfaces, in declaration order."""
        for fqsen in fqsens:
            interface = self.project.find_object(fqsen, ObjectKind.INTERFACE)
            if interface is None:
                continue

            docblock = self.get_docblock(ObjectKind.INTERFACE, namespace_of(fqsen), interface.name, function, seen)
            if docblock is not None:
                log.debug("Inherited documentation of %s() from %s", function, fqsen)
                return docblock

        return None

    def get_parameter(self, coordinates: SymbolCoordinates, variable: str) -> ResolvedType | None:
        """Get the type of a parameter ("$name") from its @param tag."""
        docblock = self.get_docblock(*coordinates)
        if docblock is None:
            return None

        for tag in docblock.get_tags_by_name("param"):
            if tag.variable_name is None or variable != f"${tag.variable_name}":
                continue
            return get_type(tag)

        return None

    def get_return(self, coordinates: SymbolCoordinates) -> ResolvedType | None:
        """Get the return type from the @return tag.

        Several @return tags are ambiguous and resolve to None.
        """
        docblock = self.get_docblock(*coordinates)
        if docblock is None:
            return None

        tags = docblock.get_tags_by_name("return")
        if len(tags) != 1:
            return None

        return get_type(tags[0])
