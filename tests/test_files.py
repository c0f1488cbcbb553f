"""
Source discovery and loading tests.

Tests for:
- Directory walking, extensions and exclusion patterns
- Missing paths
- Loading a project across files
"""

import pytest

from phpdoc_typehint import ObjectKind, ProjectLoadError, Settings, SourceNotFoundError, discover_files, load_project
from phpdoc_typehint.files import read_source, write_source


@pytest.fixture
def tree(tmp_path):
    """
    src/
        a.php
        lib/b.php
        vendor/c.php
        notes.txt
    """
    src = tmp_path / "src"
    (src / "lib").mkdir(parents=True)
    (src / "vendor").mkdir()
    (src / "a.php").write_text("<?php\nnamespace App;\nclass A extends \\Lib\\B {}\n")
    (src / "lib" / "b.php").write_text("<?php\nnamespace Lib;\nclass B {}\n")
    (src / "vendor" / "c.php").write_text("<?php\n")
    (src / "notes.txt").write_text("not php\n")
    return src


class TestDiscovery:
    """discover_files()."""

    def test_directory(self, tree):
        files = discover_files([tree], Settings())
        assert [f.relative_to(tree).as_posix() for f in files] == ["a.php", "lib/b.php", "vendor/c.php"]

    def test_exclude(self, tree):
        files = discover_files([tree], Settings(exclude=("vendor/*",)))
        assert [f.relative_to(tree).as_posix() for f in files] == ["a.php", "lib/b.php"]

    def test_explicit_file_is_always_included(self, tree):
        notes = tree / "notes.txt"
        assert discover_files([notes], Settings()) == [notes]

    def test_duplicates(self, tree):
        assert len(discover_files([tree, tree / "a.php"], Settings())) == 3

    def test_missing_path(self, tmp_path):
        with pytest.raises(SourceNotFoundError, match="No such file or directory") as excinfo:
            discover_files([tmp_path / "missing"], Settings())
        assert excinfo.value.path == str(tmp_path / "missing")


class TestLoading:
    """Reading, writing and scanning."""

    def test_load_project(self, tree):
        project = load_project([tree], Settings())
        assert len(project.files) == 3
        a = project.find_object("\\App\\A", ObjectKind.CLASS)
        assert a.parent == "\\Lib\\B"
        assert project.find_object(a.parent, ObjectKind.CLASS) is not None

    def test_undecodable_bytes_survive(self, tmp_path):
        path = tmp_path / "latin1.php"
        path.write_bytes(b"<?php\n$a = '\xe9';\n")
        write_source(path, read_source(path))
        assert path.read_bytes() == b"<?php\n$a = '\xe9';\n"

    def test_read_error(self, tmp_path):
        with pytest.raises(ProjectLoadError, match="Cannot read"):
            read_source(tmp_path)

    def test_write_error(self, tmp_path):
        with pytest.raises(ProjectLoadError, match="Cannot write"):
            write_source(tmp_path / "missing" / "a.php", "<?php\n")
