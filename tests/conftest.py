from pathlib import Path

import pytest

from bumv.core import RenameOptions


def write_files(root: Path, files: dict) -> None:
    """Create files with the given contents below root"""
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def read_files(root: Path) -> dict:
    """Contents of every file below root, keyed by relative POSIX path"""
    return {
        path.relative_to(root).as_posix(): path.read_text(encoding="utf-8")
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """
    .ignore               (ignores ignored.txt)
    file1.txt
    file2.txt
    ignored.txt
    subdir/file3.txt
    subdir/file4.txt
    """
    write_files(tmp_path, {
        ".ignore": "ignored.txt",
        "file1.txt": "one",
        "file2.txt": "two",
        "ignored.txt": "ignored",
        "subdir/file3.txt": "three",
        "subdir/file4.txt": "four",
    })
    return tmp_path


@pytest.fixture
def options(tree: Path) -> RenameOptions:
    return RenameOptions(root=tree, no_log=True)


@pytest.fixture
def recursive_options(tree: Path) -> RenameOptions:
    return RenameOptions(root=tree, recursive=True, no_log=True)
