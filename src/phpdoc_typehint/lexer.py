"""Lossless PHP tokenizer built on tree-sitter-php.

The syntax tree is flattened into leaves in document order. Bytes the tree
does not cover (whitespace, mostly) are emitted as their own tokens, so
joining the token texts always reproduces the input exactly.
"""

from __future__ import annotations

import re
from functools import lru_cache

import tree_sitter_php
from tree_sitter import Language, Node, Parser, Tree

from .tokens import KEYWORD_KINDS, RESERVED_WORDS, Token, TokenKind

# Nodes emitted as a single token regardless of their inner structure
_ATOMIC_NODES: dict[str, TokenKind] = {
    "variable_name": TokenKind.VARIABLE,
    "string": TokenKind.STRING,
    "encapsed_string": TokenKind.STRING,
    "heredoc": TokenKind.STRING,
    "nowdoc": TokenKind.STRING,
    "shell_command_expression": TokenKind.STRING,
    "integer": TokenKind.NUMBER,
    "float": TokenKind.NUMBER,
    "text": TokenKind.INLINE_HTML,
    "php_tag": TokenKind.OPEN_TAG,
}

_WORD = re.compile(r"^[A-Za-z_\x80-\U0010ffff][\w\x80-\U0010ffff]*$")


@lru_cache(maxsize=1)
def php_parser() -> Parser:
    """Return a shared tree-sitter parser for PHP (with inline HTML)."""
    return Parser(Language(tree_sitter_php.language_php()))


def parse(source: bytes) -> Tree:
    """Parse PHP source bytes into a tree-sitter tree."""
    return php_parser().parse(source)


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="surrogateescape")


def _atomic_kind(node: Node) -> TokenKind | None:
    # Keyword leaves are anonymous nodes typed by their text ("string", "float")
    return _ATOMIC_NODES.get(node.type) if node.is_named else None


def _classify(node: Node, text: str) -> TokenKind:
    """Map a leaf node to a token kind."""
    if node.type == "comment":
        if text.startswith("/**") and len(text) > 4:
            return TokenKind.DOC_COMMENT
        return TokenKind.COMMENT

    atomic = _atomic_kind(node)
    if atomic is not None:
        return atomic

    # Member and constant names (Foo::class, $x->function()) are plain names
    if node.type == "name":
        return TokenKind.IDENTIFIER

    return _classify_text(text)


def _classify_text(text: str) -> TokenKind:
    if not text.strip():
        return TokenKind.WHITESPACE
    if text == "\\":
        return TokenKind.NS_SEPARATOR
    if text == "...":
        return TokenKind.ELLIPSIS
    if _WORD.match(text):
        lowered = text.lower()
        if lowered in KEYWORD_KINDS:
            return KEYWORD_KINDS[lowered]
        if lowered in RESERVED_WORDS:
            return TokenKind.KEYWORD
        return TokenKind.IDENTIFIER
    if len(text) == 1:
        return TokenKind.CHAR
    return TokenKind.OPERATOR


def _leaves(root: Node):
    """Yield token-producing nodes in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_missing:
            continue
        if node.child_count == 0 or _atomic_kind(node) is not None or node.type == "comment":
            yield node
            continue
        stack.extend(reversed(node.children))


def tokenize(source: str) -> list[Token]:
    """Split PHP source into a flat, lossless token sequence."""
    data = source.encode("utf-8", errors="surrogateescape")
    tree = parse(data)

    tokens: list[Token] = []
    position = 0

    for node in _leaves(tree.root_node):
        start, end = node.start_byte, node.end_byte
        # Zero-width and overlapping nodes carry no text of their own
        if end <= position:
            continue
        if start > position:
            gap = _decode(data[position:start])
            tokens.append(Token(_classify_text(gap), gap))
        start = max(start, position)
        text = _decode(data[start:end])
        tokens.append(Token(_classify(node, text), text))
        position = end

    if position < len(data):
        rest = _decode(data[position:])
        tokens.append(Token(_classify_text(rest), rest))

    return tokens
