"""Runtime settings, with environment variable overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

ENV_NULLABLE_TYPES = "PHPDOC_TYPEHINT_NULLABLE_TYPES"
ENV_EXCLUDE = "PHPDOC_TYPEHINT_EXCLUDE"

_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True)
class Settings:
    """Conversion settings.

    Attributes:
        nullable_types: Use "?Type" declarations (PHP 7.1+). When disabled,
            nullable parameters get a "= null" default instead and nullable
            return types are left undeclared.
        extensions: File suffixes picked up when walking directories
        exclude: Glob patterns (POSIX relative paths) of files to skip
    """

    nullable_types: bool = True
    extensions: tuple[str, ...] = (".php",)
    exclude: tuple[str, ...] = ()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from PHPDOC_TYPEHINT_* environment variables."""
        environ = os.environ if environ is None else environ

        nullable = environ.get(ENV_NULLABLE_TYPES)
        exclude = environ.get(ENV_EXCLUDE, "")

        return cls(
            nullable_types=nullable is None or nullable.strip().lower() not in _FALSE_VALUES,
            exclude=tuple(p.strip() for p in exclude.split(",") if p.strip()),
        )
