"""Build the symbol model from PHP sources using tree-sitter-php."""

from __future__ import annotations

import logging
from typing import Iterable

from tree_sitter import Node

from .docblock import DocBlock, parse_docblock
from .lexer import parse
from .models import ClassLike, Function, ObjectKind, Project, SourceFile
from .names import NameContext, function_fqsen, method_fqsen, object_fqsen

log = logging.getLogger(__name__)

_OBJECT_KINDS = {
    "class_declaration": ObjectKind.CLASS,
    "interface_declaration": ObjectKind.INTERFACE,
    "trait_declaration": ObjectKind.TRAIT,
    # Enums declare methods and implement interfaces like classes
    "enum_declaration": ObjectKind.CLASS,
}

_NAME_NODES = ("name", "qualified_name")

# Nested scopes whose contents never declare project symbols
_SKIPPED_NODES = frozenset(
    {"anonymous_function", "anonymous_function_creation_expression", "arrow_function"}
)


class _Scan:
    """Walks one file's syntax tree."""

    def __init__(self, path: str, source: str) -> None:
        self.data = source.encode("utf-8", errors="surrogateescape")
        self.file = SourceFile(path=path, source=source)

    def text(self, node: Node) -> str:
        return self.data[node.start_byte : node.end_byte].decode("utf-8", errors="surrogateescape")

    def docblock(self, node: Node, context: NameContext) -> DocBlock | None:
        """Parse the doc comment directly preceding a declaration."""
        previous = node.prev_named_sibling
        if previous is None or previous.type != "comment":
            return None
        text = self.text(previous)
        if not text.startswith("/**"):
            return None
        return parse_docblock(text, context)

    def names(self, clause: Node | None, context: NameContext) -> list[str]:
        if clause is None:
            return []
        return [context.resolve(self.text(c)) for c in clause.named_children if c.type in _NAME_NODES]

    def walk(self, node: Node, context: NameContext) -> None:
        for child in node.named_children:
            kind = child.type

            if kind == "namespace_definition":
                name_node = child.child_by_field_name("name")
                namespace = f"\\{self.text(name_node)}" if name_node is not None else None
                body = child.child_by_field_name("body")
                if body is None:
                    # "namespace Foo;" applies to the rest of the file
                    context = NameContext(namespace=namespace)
                else:
                    self.walk(body, NameContext(namespace=namespace))

            elif kind == "namespace_use_declaration":
                context.add_use(self.text(child))

            elif kind in _OBJECT_KINDS:
                self.object(child, _OBJECT_KINDS[kind], context)

            elif kind == "function_definition":
                self.function(child, context)

            elif kind not in _SKIPPED_NODES:
                self.walk(child, context)

    def function(self, node: Node, context: NameContext) -> None:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return
        name = self.text(name_node)
        fqsen = function_fqsen(context.namespace, name)
        self.file.functions[fqsen] = Function(fqsen=fqsen, name=name, docblock=self.docblock(node, context))

    def object(self, node: Node, kind: ObjectKind, context: NameContext) -> None:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return
        name = self.text(name_node)
        obj = ClassLike(
            fqsen=object_fqsen(context.namespace, name),
            name=name,
            kind=kind,
        )

        extends: list[str] = []
        for clause in node.children:
            if clause.type == "base_clause":
                extends = self.names(clause, context)
            elif clause.type == "class_interface_clause":
                obj.interfaces = self.names(clause, context)

        if kind is ObjectKind.CLASS:
            obj.parent = extends[0] if extends else None
        elif kind is ObjectKind.INTERFACE:
            obj.interfaces = extends

        body = node.child_by_field_name("body")
        if body is not None:
            for member in body.named_children:
                if member.type != "method_declaration":
                    continue
                method_name = member.child_by_field_name("name")
                if method_name is None:
                    continue
                method = self.text(method_name)
                fqsen = method_fqsen(obj.fqsen, method)
                obj.methods[fqsen] = Function(fqsen=fqsen, name=method, docblock=self.docblock(member, context))

        self.file.add_object(obj)


def scan_source(path: str, source: str) -> SourceFile:
    """Collect the declarations of one PHP file."""
    scan = _Scan(path, source)
    tree = parse(scan.data)
    if tree.root_node.has_error:
        log.warning("%s: syntax errors, declarations may be incomplete", path)
    scan.walk(tree.root_node, NameContext())
    return scan.file


def build_project(sources: Iterable[tuple[str, str]]) -> Project:
    """Build a project from (path, source) pairs."""
    project = Project()
    for path, source in sources:
        project.files.append(scan_source(path, source))
    log.debug("Scanned %d files", len(project.files))
    return project
