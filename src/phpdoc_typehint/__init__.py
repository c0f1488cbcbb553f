"""phpdoc_typehint - Add PHP type declarations from PHPDoc annotations.

This package provides:
- Converter: rewrites PHP sources, adding parameter and return types
- DocBlockResolver: documentation lookup with interface/parent inheritance
- load_project / build_project: symbol model from PHP files
- Settings: conversion options
"""

from __future__ import annotations

from phpdoc_typehint.config import Settings
from phpdoc_typehint.converter import Converter, RewriteState
from phpdoc_typehint.docblock import DocBlock, Tag, parse_docblock
from phpdoc_typehint.errors import ProjectLoadError, SourceNotFoundError, TypeHintError
from phpdoc_typehint.files import discover_files, load_project
from phpdoc_typehint.lexer import tokenize
from phpdoc_typehint.models import ClassLike, Function, ObjectKind, Project, SourceFile, SymbolCoordinates
from phpdoc_typehint.resolver import DocBlockResolver
from phpdoc_typehint.scanner import build_project, scan_source
from phpdoc_typehint.tokens import Token, TokenKind
from phpdoc_typehint.typehints import ResolvedType, get_type

__all__ = [
    "ClassLike",
    "Converter",
    "DocBlock",
    "DocBlockResolver",
    "Function",
    "ObjectKind",
    "Project",
    "ProjectLoadError",
    "ResolvedType",
    "RewriteState",
    "Settings",
    "SourceFile",
    "SourceNotFoundError",
    "SymbolCoordinates",
    "Tag",
    "Token",
    "TokenKind",
    "TypeHintError",
    "build_project",
    "discover_files",
    "get_type",
    "load_project",
    "parse_docblock",
    "scan_source",
    "tokenize",
]
