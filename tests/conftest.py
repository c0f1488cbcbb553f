"""Shared pytest fixtures for phpdoc_typehint tests."""

import pytest

from phpdoc_typehint import Converter, build_project


@pytest.fixture
def make_project():
    """
    Factory fixture that scans PHP sources into a project.

    Each source becomes one file (file0.php, file1.php, ...).

    Example:
        def test_inheritance(make_project):
            project = make_project(INTERFACE_SOURCE, CLASS_SOURCE)
    """

    def _make(*sources: str):
        return build_project((f"file{i}.php", source) for i, source in enumerate(sources))

    return _make


@pytest.fixture
def convert(make_project):
    """
    Convert the first source; all sources form the project.

    Example:
        def test_return(convert):
            assert ": int" in convert(SOURCE)
            assert ": int" not in convert(SOURCE, nullable_types=False)
    """

    def _convert(source: str, *others: str, nullable_types: bool = True) -> str:
        project = make_project(source, *others)
        return Converter(project, nullable_types=nullable_types).convert(project.files[0])

    return _convert
