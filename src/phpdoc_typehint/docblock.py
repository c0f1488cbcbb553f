"""DocBlock parsing for `/** ... */` comments."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .names import NameContext
from .type_expressions import Type, parse_type

INHERIT_MARKER = "{@inheritdoc}"

_TAG_LINE = re.compile(r"^@([\w\-\\:]+)(.*)$", re.DOTALL)
_VARIABLE = re.compile(r"^(?:&\s*)?(?:\.\.\.\s*)?\$(\w+)")


@dataclass
class Tag:
    """A single annotation, e.g. `@param int|null $count Number of items`."""

    name: str
    type: Type | None = None
    variable_name: str | None = None  # Without the leading "$"
    description: str = ""


@dataclass
class DocBlock:
    """Parsed documentation comment."""

    summary: str = ""
    description: str = ""
    tags: list[Tag] = field(default_factory=list)

    def get_tags_by_name(self, name: str) -> list[Tag]:
        return [t for t in self.tags if t.name == name]

    @property
    def inherits(self) -> bool:
        """True when the summary defers to the parent's documentation."""
        return self.summary.strip().lower() == INHERIT_MARKER


def _strip_comment(text: str) -> list[str]:
    """Remove comment delimiters and leading asterisks."""
    text = text.strip()
    if text.startswith("/**"):
        text = text[3:]
    if text.endswith("*/"):
        text = text[:-2]

    lines = []
    for line in text.splitlines():
        line = re.sub(r"^\s*\*(?!/) ?", "", line)
        lines.append(line.rstrip())

    # Drop leading/trailing blank lines
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return lines


def _split_type(body: str) -> tuple[str, str]:
    """Split the leading type expression off a tag body.

    Whitespace inside brackets (`array<string, int>`) belongs to the type.
    """
    depth = 0
    for i, char in enumerate(body):
        if char in "<([{":
            depth += 1
        elif char in ">)]}":
            depth = max(depth - 1, 0)
        elif char.isspace() and depth == 0:
            return body[:i], body[i:].strip()
    return body, ""


def _parse_tag(name: str, body: str, context: NameContext) -> Tag:
    body = body.strip()
    tag = Tag(name=name)

    if not body:
        return tag

    if name in ("param", "var", "property", "property-read", "property-write"):
        variable = _VARIABLE.match(body)
        if variable:
            # No type given: "@param $name description"
            tag.variable_name = variable.group(1)
            tag.description = body[variable.end() :].strip()
            return tag

    type_text, rest = _split_type(body)
    tag.type = parse_type(type_text, context)

    variable = _VARIABLE.match(rest)
    if variable:
        tag.variable_name = variable.group(1)
        rest = rest[variable.end() :].strip()
    tag.description = rest

    return tag


def _split_summary(lines: list[str]) -> tuple[str, str]:
    """Summary ends at the first blank line or at a line ending with a period."""
    summary: list[str] = []
    i = 0
    while i < len(lines):
        line = lines[i].strip()
        i += 1
        if not line:
            if summary:
                break
            continue
        summary.append(line)
        if line.endswith("."):
            break

    description = "\n".join(lines[i:]).strip()
    return " ".join(summary), description


def parse_docblock(text: str, context: NameContext | None = None) -> DocBlock:
    """Parse a documentation comment into summary, description and tags.

    Types in tags are resolved against `context` (namespace and imports of
    the documented declaration).
    """
    context = context or NameContext()
    lines = _strip_comment(text)

    free_text: list[str] = []
    raw_tags: list[list[str]] = []

    for line in lines:
        stripped = line.strip()
        if stripped.startswith("@"):
            raw_tags.append([stripped])
        elif raw_tags:
            if stripped:
                raw_tags[-1].append(stripped)
        else:
            free_text.append(line)

    summary, description = _split_summary(free_text)
    docblock = DocBlock(summary=summary, description=description)

    for raw in raw_tags:
        match = _TAG_LINE.match(" ".join(raw))
        if not match:
            continue
        docblock.tags.append(_parse_tag(match.group(1).lower(), match.group(2), context))

    return docblock
