"""Command line entry point.

Usage:
    phpdoc-typehint src/ lib/Foo.php
    phpdoc-typehint --dry-run --no-nullable-types src/
"""

from __future__ import annotations

import argparse
import difflib
import logging
import sys
from dataclasses import replace
from pathlib import Path

from .config import Settings
from .converter import Converter
from .errors import TypeHintError
from .files import load_project, write_source


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phpdoc-typehint",
        description="Add scalar type declarations to PHP functions and methods using their DocBlocks.",
    )
    parser.add_argument("paths", nargs="+", help="Files or directories to convert")
    parser.add_argument(
        "--no-nullable-types",
        dest="nullable_types",
        action="store_false",
        default=None,
        help="Do not use nullable types (PHP < 7.1): nullable parameters get a '= null' default",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="GLOB",
        help="Skip files matching this pattern (relative to the directory argument)",
    )
    parser.add_argument("--dry-run", action="store_true", help="Print a diff instead of writing files")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Convert the given paths. Returns the process exit status."""
    args = _parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = Settings.from_env()
    if args.nullable_types is not None:
        settings = replace(settings, nullable_types=args.nullable_types)
    if args.exclude:
        settings = replace(settings, exclude=settings.exclude + tuple(args.exclude))

    try:
        project = load_project(args.paths, settings)
        converter = Converter(project, nullable_types=settings.nullable_types)

        changed = 0
        for file in project.files:
            output = converter.convert(file)
            if output == file.source:
                continue
            changed += 1

            if args.dry_run:
                sys.stdout.writelines(
                    difflib.unified_diff(
                        file.source.splitlines(keepends=True),
                        output.splitlines(keepends=True),
                        fromfile=f"a/{file.path}",
                        tofile=f"b/{file.path}",
                    )
                )
            else:
                write_source(Path(file.path), output)
                print(f"  ✓ {file.path}", file=sys.stderr)

    except TypeHintError as e:
        print(f"  ✗ {e}", file=sys.stderr)
        return 1

    verb = "would be converted" if args.dry_run else "converted"
    print(f"\n{changed}/{len(project.files)} files {verb}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
