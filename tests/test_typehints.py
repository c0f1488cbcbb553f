"""
Documented type to declaration mapping tests.

Tests for:
- Scalar whitelist and aliases
- Nullable detection
- Ambiguous unions
- Class names
"""

import pytest

from phpdoc_typehint import ResolvedType, Tag, get_type
from phpdoc_typehint.type_expressions import parse_type


def resolve(text):
    return get_type(Tag(name="param", type=parse_type(text), variable_name="a"))


class TestScalars:
    """Whitelisted lowercase types."""

    @pytest.mark.parametrize("name", ["array", "bool", "callable", "float", "int", "self", "string"])
    def test_whitelisted(self, name):
        assert resolve(name) == ResolvedType(name, False)

    @pytest.mark.parametrize(
        "alias, name",
        [("integer", "int"), ("boolean", "bool"), ("double", "float"), ("callback", "callable")],
    )
    def test_aliases(self, alias, name):
        assert resolve(alias) == ResolvedType(name, False)

    @pytest.mark.parametrize("name", ["mixed", "void", "resource", "object", "static", "real", "intger", "iterable"])
    def test_not_declarable(self, name):
        assert resolve(name) is None

    def test_typed_array(self):
        assert resolve("int[]") == ResolvedType("array", False)


class TestNullable:
    """Two-alternative unions with null."""

    @pytest.mark.parametrize("text", ["int|null", "null|int", "?int", "integer|NULL"])
    def test_nullable(self, text):
        assert resolve(text) == ResolvedType("int", True)

    def test_nullable_array(self):
        assert resolve("string[]|null") == ResolvedType("array", True)

    @pytest.mark.parametrize("text", ["null", "null|null", "int|string", "int|string|null", "mixed|null"])
    def test_ambiguous(self, text):
        assert resolve(text) is None


class TestClassNames:
    """Mixed-case names pass through as class names."""

    def test_class_name(self):
        assert resolve("\\DateTime") == ResolvedType("\\DateTime", False)
        assert resolve("Foo|null") == ResolvedType("\\Foo", True)

    def test_missing_type(self):
        assert get_type(Tag(name="param", variable_name="a")) is None

    def test_unknown_expression(self):
        assert resolve("A&B") is None
