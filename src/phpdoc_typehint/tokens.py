"""Token types produced by the lexer and consumed by the converter."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class TokenKind(Enum):
    """Lexical category of a token."""

    CHAR = "char"  # Single-character punctuation: ( ) , & = : ; { } ? ...
    OPERATOR = "operator"  # Multi-character operators: :: -> => === ...
    WHITESPACE = "whitespace"
    COMMENT = "comment"
    DOC_COMMENT = "doc_comment"
    INLINE_HTML = "inline_html"
    OPEN_TAG = "open_tag"
    VARIABLE = "variable"  # $name
    IDENTIFIER = "identifier"  # Names, including int/string/null/self
    NS_SEPARATOR = "ns_separator"  # \
    ELLIPSIS = "ellipsis"  # ...
    NUMBER = "number"
    STRING = "string"
    KEYWORD = "keyword"  # Reserved words without a dedicated kind
    NAMESPACE = "namespace"
    CLASS = "class"
    INTERFACE = "interface"
    TRAIT = "trait"
    ENUM = "enum"
    FUNCTION = "function"
    ARRAY = "array"
    CALLABLE = "callable"
    USE = "use"
    EXTENDS = "extends"
    IMPLEMENTS = "implements"


class Token(NamedTuple):
    """A lexical unit with its exact source text."""

    kind: TokenKind
    text: str

    def is_char(self, char: str) -> bool:
        return self.kind is TokenKind.CHAR and self.text == char


# Words with a dedicated token kind (matched case-insensitively)
KEYWORD_KINDS: dict[str, TokenKind] = {
    "namespace": TokenKind.NAMESPACE,
    "class": TokenKind.CLASS,
    "interface": TokenKind.INTERFACE,
    "trait": TokenKind.TRAIT,
    "enum": TokenKind.ENUM,
    "function": TokenKind.FUNCTION,
    "array": TokenKind.ARRAY,
    "callable": TokenKind.CALLABLE,
    "use": TokenKind.USE,
    "extends": TokenKind.EXTENDS,
    "implements": TokenKind.IMPLEMENTS,
}

# Reserved words that are neither names nor structurally relevant.
# Anything else made of word characters is an IDENTIFIER, the way PHP's own
# tokenizer reports int, string, null or self as T_STRING.
RESERVED_WORDS = frozenset(
    {
        "abstract", "and", "as", "break", "case", "catch", "clone", "const",
        "continue", "declare", "default", "die", "do", "echo", "else",
        "elseif", "empty", "enddeclare", "endfor", "endforeach", "endif",
        "endswitch", "endwhile", "eval", "exit", "final", "finally",
        "fn", "for", "foreach", "from", "global", "goto", "if", "include",
        "include_once", "instanceof", "insteadof", "isset", "list", "match",
        "new", "or", "print", "private", "protected", "public", "readonly",
        "require", "require_once", "return", "static", "switch", "throw",
        "try", "unset", "var", "while", "xor", "yield",
    }
)  # fmt: skip
