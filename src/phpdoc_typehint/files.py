"""Source discovery and project loading."""

from __future__ import annotations

import logging
from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable

from .config import Settings
from .errors import ProjectLoadError, SourceNotFoundError
from .models import Project
from .scanner import build_project

log = logging.getLogger(__name__)


def _excluded(relative: str, settings: Settings) -> bool:
    return any(fnmatch(relative, pattern) for pattern in settings.exclude)


def discover_files(paths: Iterable[str | Path], settings: Settings) -> list[Path]:
    """Expand files and directories into the sorted list of files to process.

    Files given explicitly are always included. Directories are searched
    recursively for files with one of the configured extensions.

    Raises:
        SourceNotFoundError: If a path does not exist
    """
    found: set[Path] = set()

    for raw in paths:
        path = Path(raw)
        if not path.exists():
            raise SourceNotFoundError(f"No such file or directory: {path}", str(path))

        if path.is_file():
            found.add(path)
            continue

        for candidate in path.rglob("*"):
            if not candidate.is_file() or candidate.suffix not in settings.extensions:
                continue
            relative = candidate.relative_to(path).as_posix()
            if _excluded(relative, settings):
                log.debug("Excluded %s", candidate)
                continue
            found.add(candidate)

    return sorted(found)


def read_source(path: Path) -> str:
    try:
        return path.read_bytes().decode("utf-8", errors="surrogateescape")
    except OSError as e:
        raise ProjectLoadError(f"Cannot read {path}: {e}", str(path)) from e


def write_source(path: Path, source: str) -> None:
    try:
        path.write_bytes(source.encode("utf-8", errors="surrogateescape"))
    except OSError as e:
        raise ProjectLoadError(f"Cannot write {path}: {e}", str(path)) from e


def load_project(paths: Iterable[str | Path], settings: Settings) -> Project:
    """Scan every discovered file into one project.

    All files form the symbol model, so documentation is inherited across
    files.
    """
    files = discover_files(paths, settings)
    log.info("Scanning %d files", len(files))
    return build_project((str(path), read_source(path)) for path in files)
