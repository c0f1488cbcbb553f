"""
Documentation lookup tests against hand-built symbol models.

Tests for:
- Function and method lookup
- Interface-before-parent inheritance order
- Interface parents
- Traits never inheriting
- Inheritance cycles
- @param/@return extraction
"""

import pytest

from phpdoc_typehint import (
    ClassLike,
    DocBlockResolver,
    Function,
    ObjectKind,
    Project,
    ResolvedType,
    SourceFile,
    SymbolCoordinates,
    parse_docblock,
)


def returns(type_text):
    return parse_docblock(f"/** @return {type_text} */")


def declare(file, kind, fqsen, methods=None, parent=None, interfaces=()):
    """Add a class-like with {method: docblock} to a file."""
    obj = ClassLike(
        fqsen=fqsen,
        name=fqsen.rsplit("\\", 1)[-1],
        kind=kind,
        parent=parent,
        interfaces=list(interfaces),
    )
    for name, docblock in (methods or {}).items():
        method = f"{fqsen}::{name}()"
        obj.methods[method] = Function(fqsen=method, name=name, docblock=docblock)
    file.add_object(obj)
    return obj


@pytest.fixture
def project():
    """
    Two-file project:

        \\Lib\\Sized             size(): int
        \\Lib\\Countable         extends Sized, count(): int
        \\App\\Base              size(): string, count(): string, name(): string
        \\App\\Items             extends Base implements Countable
        \\App\\Greets (trait)    greet(): {@inheritdoc}
    """
    lib = SourceFile(path="lib.php", source="")
    declare(lib, ObjectKind.INTERFACE, "\\Lib\\Sized", {"size": returns("int")})
    declare(lib, ObjectKind.INTERFACE, "\\Lib\\Countable", {"count": returns("int")}, interfaces=["\\Lib\\Sized"])

    app = SourceFile(path="app.php", source="")
    base_methods = {"size": returns("string"), "count": returns("string"), "name": returns("string")}
    declare(app, ObjectKind.CLASS, "\\App\\Base", base_methods)
    declare(
        app,
        ObjectKind.CLASS,
        "\\App\\Items",
        {"count": None, "size": parse_docblock("/** {@inheritdoc} */"), "name": None, "own": returns("bool")},
        parent="\\App\\Base",
        interfaces=["\\Lib\\Countable"],
    )
    declare(app, ObjectKind.TRAIT, "\\App\\Greets", {"greet": parse_docblock("/** {@inheritdoc} */")})
    app.functions["\\App\\helper()"] = Function(fqsen="\\App\\helper()", name="helper", docblock=returns("float"))

    return Project(files=[lib, app])


def items(method):
    return SymbolCoordinates(ObjectKind.CLASS, "\\App", "Items", method)


class TestInheritance:
    """Where undocumented methods take their documentation from."""

    def test_function(self, project):
        resolver = DocBlockResolver(project)
        coordinates = SymbolCoordinates(ObjectKind.FUNCTION, "\\App", None, "helper")
        assert resolver.get_return(coordinates) == ResolvedType("float", False)

    def test_own_documentation(self, project):
        assert DocBlockResolver(project).get_return(items("own")) == ResolvedType("bool", False)

    def test_interface_before_parent(self, project):
        assert DocBlockResolver(project).get_return(items("count")) == ResolvedType("int", False)

    def test_interface_parent(self, project):
        """{@inheritdoc} reaches Sized through Countable before Base."""
        assert DocBlockResolver(project).get_return(items("size")) == ResolvedType("int", False)

    def test_parent_class(self, project):
        assert DocBlockResolver(project).get_return(items("name")) == ResolvedType("string", False)

    def test_unknown_method(self, project):
        assert DocBlockResolver(project).get_docblock(*items("missing")) is None

    def test_unknown_class(self, project):
        coordinates = SymbolCoordinates(ObjectKind.CLASS, "\\App", "Nope", "count")
        assert DocBlockResolver(project).get_docblock(*coordinates) is None

    def test_trait_does_not_inherit(self, project):
        resolver = DocBlockResolver(project)
        docblock = resolver.get_docblock(ObjectKind.TRAIT, "\\App", "Greets", "greet")
        assert docblock is not None and docblock.inherits
        assert resolver.get_return(SymbolCoordinates(ObjectKind.TRAIT, "\\App", "Greets", "greet")) is None

    def test_parent_outside_project(self):
        file = SourceFile(path="a.php", source="")
        declare(file, ObjectKind.CLASS, "\\A", {"run": None}, parent="\\Vendor\\Base")
        resolver = DocBlockResolver(Project(files=[file]))
        assert resolver.get_docblock(ObjectKind.CLASS, None, "A", "run") is None

    def test_cycle(self):
        file = SourceFile(path="a.php", source="")
        declare(file, ObjectKind.CLASS, "\\A", {"run": None}, parent="\\B")
        declare(file, ObjectKind.CLASS, "\\B", {"run": None}, parent="\\A")
        declare(file, ObjectKind.INTERFACE, "\\I", {"run": None}, interfaces=["\\J"])
        declare(file, ObjectKind.INTERFACE, "\\J", {"run": None}, interfaces=["\\I"])
        resolver = DocBlockResolver(Project(files=[file]))
        assert resolver.get_docblock(ObjectKind.CLASS, None, "A", "run") is None
        assert resolver.get_docblock(ObjectKind.INTERFACE, None, "I", "run") is None


class TestTags:
    """Reading @param and @return."""

    @pytest.fixture
    def resolver(self):
        file = SourceFile(path="a.php", source="")
        docblock = parse_docblock(
            "/**\n * @param float\n * @param int|null $a\n * @param string $b\n * @param bool $b\n"
            " * @param mixed $c\n * @return int\n * @return string\n */"
        )
        file.functions["\\f()"] = Function(fqsen="\\f()", name="f", docblock=docblock)
        return DocBlockResolver(Project(files=[file]))

    def coordinates(self):
        return SymbolCoordinates(ObjectKind.FUNCTION, None, None, "f")

    def test_parameter(self, resolver):
        assert resolver.get_parameter(self.coordinates(), "$a") == ResolvedType("int", True)

    def test_first_matching_tag_wins(self, resolver):
        assert resolver.get_parameter(self.coordinates(), "$b") == ResolvedType("string", False)

    def test_undeclarable_parameter(self, resolver):
        assert resolver.get_parameter(self.coordinates(), "$c") is None

    def test_undocumented_parameter(self, resolver):
        assert resolver.get_parameter(self.coordinates(), "$d") is None

    def test_several_return_tags(self, resolver):
        assert resolver.get_return(self.coordinates()) is None

    def test_tag_without_variable_matches_nothing(self, resolver):
        assert resolver.get_parameter(self.coordinates(), "$None") is None
