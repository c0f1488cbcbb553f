"""Adds type declarations to PHP functions and methods from their DocBlocks.

The converter makes a single pass over the token stream. Tokens are copied
to the output unchanged; the only edits are injected parameter types,
injected return types and, when nullable types are disabled, `= null`
defaults for nullable parameters.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable

from .lexer import tokenize
from .models import ObjectKind, Project, SourceFile, SymbolCoordinates
from .resolver import DocBlockResolver
from .tokens import Token, TokenKind

log = logging.getLogger(__name__)

_OBJECT_KINDS = {
    TokenKind.CLASS: ObjectKind.CLASS,
    TokenKind.INTERFACE: ObjectKind.INTERFACE,
    TokenKind.TRAIT: ObjectKind.TRAIT,
    TokenKind.ENUM: ObjectKind.CLASS,
}

# Tokens that can follow a held "&" without cancelling it
_MARKER_KINDS = frozenset({TokenKind.VARIABLE, TokenKind.ELLIPSIS, TokenKind.WHITESPACE})

Handler = Callable[["RewriteState", Token], bool]


@dataclass
class RewriteState:
    """Mutable state of one file's rewrite."""

    output: list[str] = field(default_factory=list)
    level: int = 0  # Brace depth, reset when a class-like declaration starts
    namespace: str | None = None  # "\\Foo\\Bar"
    in_namespace: bool = False  # Collecting the name after "namespace"
    in_use: bool = False  # Inside a "use" statement ("use function ...")
    object_kind: ObjectKind = ObjectKind.FUNCTION
    object_name: str | None = None
    function: str | None = None
    awaiting_parameters: bool = False  # Between "function" and "("
    in_parameters: bool = False
    parameter_depth: int = 0  # Nesting of ( and [ inside the parameter list
    type_hint_allowed: bool = True
    default_null_pending: bool = False
    markers: str = ""  # Held "&", "..." and following whitespace
    return_pending: bool = True
    signature_end: int | None = None  # Output index just after the parameter list

    @property
    def coordinates(self) -> SymbolCoordinates:
        return SymbolCoordinates(self.object_kind, self.namespace, self.object_name, self.function or "")

    def flush_markers(self) -> None:
        if self.markers:
            self.output.append(self.markers)
            self.markers = ""


class Converter:
    """Rewrites PHP sources, adding type declarations taken from DocBlocks.

    Example:
        project = load_project(["src/"], Settings())
        converter = Converter(project, nullable_types=True)
        for file in project.files:
            output = converter.convert(file)
    """

    def __init__(self, project: Project, nullable_types: bool = True) -> None:
        """Initialize the converter.

        Args:
            project: Symbol model used to look up documentation
            nullable_types: Emit "?Type" declarations. When False, nullable
                parameters get "Type $x = null" and nullable returns are skipped.
        """
        self.resolver = DocBlockResolver(project)
        self.nullable_types = nullable_types

        self._char_handlers: dict[str, Handler] = {
            "(": self._on_open_paren,
            "[": self._on_open_bracket,
            ")": self._on_close_paren,
            "]": self._on_close_bracket,
            ",": self._on_comma,
            ":": self._on_colon,
            "&": self._on_marker,
            "=": self._on_equals,
            ";": self._on_terminator,
            "{": self._on_terminator,
            "}": self._on_close_brace,
        }
        self._kind_handlers: dict[TokenKind, Handler] = {
            TokenKind.NAMESPACE: self._on_namespace,
            TokenKind.USE: self._on_use,
            TokenKind.IDENTIFIER: self._on_identifier,
            TokenKind.NS_SEPARATOR: self._on_type_token,
            TokenKind.ARRAY: self._on_type_token,
            TokenKind.CALLABLE: self._on_type_token,
            TokenKind.CLASS: self._on_object,
            TokenKind.INTERFACE: self._on_object,
            TokenKind.TRAIT: self._on_object,
            TokenKind.ENUM: self._on_object,
            TokenKind.FUNCTION: self._on_function,
            TokenKind.VARIABLE: self._on_variable,
            TokenKind.ELLIPSIS: self._on_marker,
            TokenKind.WHITESPACE: self._on_whitespace,
            TokenKind.OPERATOR: self._on_operator,
        }

    def convert(self, file: SourceFile) -> str:
        """Convert a scanned file and return the new source."""
        return self.rewrite(tokenize(file.source))

    def rewrite(self, tokens: Iterable[Token]) -> str:
        """Rewrite a token stream and return the resulting source."""
        state = RewriteState()

        for token in tokens:
            if state.markers and token.kind not in _MARKER_KINDS and not token.is_char("&"):
                # Not a parameter marker after all, e.g. "&" in a default value
                state.flush_markers()

            if token.kind is TokenKind.CHAR:
                handler = self._char_handlers.get(token.text)
            else:
                handler = self._kind_handlers.get(token.kind)

            if handler is None or handler(state, token):
                state.output.append(token.text)

        state.flush_markers()
        return "".join(state.output)

    # Handlers return True when the token should be copied to the output as is.

    def _on_open_paren(self, state: RewriteState, token: Token) -> bool:
        if state.awaiting_parameters:
            state.awaiting_parameters = False
            state.in_parameters = True
            state.parameter_depth = 1
            state.type_hint_allowed = True
        elif state.in_parameters:
            state.parameter_depth += 1
        return True

    def _on_open_bracket(self, state: RewriteState, token: Token) -> bool:
        if state.in_parameters:
            state.parameter_depth += 1
        return True

    def _on_operator(self, state: RewriteState, token: Token) -> bool:
        if state.in_parameters and token.text == "#[":
            # Parameter attribute, closed by "]"
            state.parameter_depth += 1
        return True

    def _on_close_paren(self, state: RewriteState, token: Token) -> bool:
        if not state.in_parameters:
            return True

        state.parameter_depth -= 1
        if state.parameter_depth > 0:
            return True

        self._append_default_null(state)
        state.in_parameters = False
        state.output.append(token.text)
        state.signature_end = len(state.output)
        return False

    def _on_close_bracket(self, state: RewriteState, token: Token) -> bool:
        if state.in_parameters:
            state.parameter_depth -= 1
        return True

    def _on_comma(self, state: RewriteState, token: Token) -> bool:
        if state.in_parameters and state.parameter_depth == 1:
            self._append_default_null(state)
            state.type_hint_allowed = True
        return True

    def _on_colon(self, state: RewriteState, token: Token) -> bool:
        if state.function is not None and not state.in_parameters:
            # Explicit return type
            state.return_pending = False
        return True

    def _on_marker(self, state: RewriteState, token: Token) -> bool:
        if state.in_parameters:
            state.markers += token.text
            return False
        return True

    def _on_whitespace(self, state: RewriteState, token: Token) -> bool:
        if state.markers:
            state.markers += token.text
            return False
        return True

    def _on_equals(self, state: RewriteState, token: Token) -> bool:
        if state.in_parameters:
            # Explicit default value
            state.default_null_pending = False
        return True

    def _on_terminator(self, state: RewriteState, token: Token) -> bool:
        if state.function is not None and state.return_pending:
            self._inject_return(state)
        if state.function is not None:
            state.function = None
            state.return_pending = False
            state.signature_end = None

        if token.text == "{":
            state.level += 1

        state.in_namespace = False
        state.in_use = False
        return True

    def _on_close_brace(self, state: RewriteState, token: Token) -> bool:
        state.level -= 1
        if state.level == 0:
            state.object_kind = ObjectKind.FUNCTION
        return True

    def _on_namespace(self, state: RewriteState, token: Token) -> bool:
        state.in_namespace = True
        state.namespace = "\\"
        return True

    def _on_use(self, state: RewriteState, token: Token) -> bool:
        state.in_use = True
        return True

    def _on_identifier(self, state: RewriteState, token: Token) -> bool:
        if state.awaiting_parameters:
            state.function = token.text

        if state.object_name is None and state.object_kind is not ObjectKind.FUNCTION:
            state.object_name = token.text

        return self._on_type_token(state, token)

    def _on_type_token(self, state: RewriteState, token: Token) -> bool:
        if state.in_namespace and token.kind is not TokenKind.ARRAY and token.kind is not TokenKind.CALLABLE:
            state.namespace += token.text

        if state.in_parameters and state.parameter_depth == 1:
            # The parameter already declares a type
            state.type_hint_allowed = False
        return True

    def _on_object(self, state: RewriteState, token: Token) -> bool:
        state.object_kind = _OBJECT_KINDS[token.kind]
        state.object_name = None
        state.level = 0
        return True

    def _on_function(self, state: RewriteState, token: Token) -> bool:
        if state.in_use:
            # "use function Foo\bar;" imports, it does not declare
            return True
        state.awaiting_parameters = True
        state.default_null_pending = False
        state.return_pending = True
        state.signature_end = None
        return True

    def _on_variable(self, state: RewriteState, token: Token) -> bool:
        if not state.in_parameters or state.parameter_depth != 1:
            state.flush_markers()
            return True

        state.default_null_pending = False

        if state.function is not None and state.type_hint_allowed:
            parameter = self.resolver.get_parameter(state.coordinates, token.text)

            if parameter is not None:
                if parameter.nullable and self.nullable_types:
                    state.output.append("?")
                elif parameter.nullable and "..." not in state.markers:
                    # Variadic parameters cannot have a default
                    state.default_null_pending = True

                state.output.append(f"{parameter.name} ")
                log.debug("%s(): %s declared as %s", state.function, token.text, parameter.name)

        state.flush_markers()
        state.output.append(token.text)
        state.type_hint_allowed = True
        return False

    def _append_default_null(self, state: RewriteState) -> None:
        if state.default_null_pending:
            state.output.append(" = null")
            state.default_null_pending = False

    def _inject_return(self, state: RewriteState) -> None:
        returned = self.resolver.get_return(state.coordinates)

        if returned is None:
            return
        if returned.nullable and not self.nullable_types:
            log.debug("%s(): nullable return type %s skipped", state.function, returned.name)
            return

        declaration = f": {'?' if returned.nullable else ''}{returned.name}"

        # Right after ")", which keeps it on the signature's line and ahead
        # of any comment between the signature and the body
        if state.signature_end is None:
            state.output.append(declaration)
        else:
            state.output.insert(state.signature_end, declaration)

        log.debug("%s(): returns %s", state.function, declaration[2:])
