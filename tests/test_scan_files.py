from pathlib import Path

import pytest

from bumv.core import RenameOptions, scan_snapshot
from conftest import write_files


def test_nonrecursive_lists_root_files_only(options: RenameOptions) -> None:
    assert scan_snapshot(options) == ["file1.txt", "file2.txt"]


def test_nonrecursive_no_ignore_lists_hidden_and_ignored(tree: Path) -> None:
    files = scan_snapshot(RenameOptions(root=tree, no_ignore=True))

    assert files == [".ignore", "file1.txt", "file2.txt", "ignored.txt"]


def test_recursive_descends_into_subdirectories(recursive_options: RenameOptions) -> None:
    assert scan_snapshot(recursive_options) == [
        "file1.txt",
        "file2.txt",
        "subdir/file3.txt",
        "subdir/file4.txt",
    ]


def test_recursive_no_ignore(tree: Path) -> None:
    files = scan_snapshot(RenameOptions(root=tree, recursive=True, no_ignore=True))

    assert files == [
        ".ignore",
        "file1.txt",
        "file2.txt",
        "ignored.txt",
        "subdir/file3.txt",
        "subdir/file4.txt",
    ]


def test_git_directory_is_never_listed(tmp_path: Path) -> None:
    write_files(tmp_path, {".git/config": "", "a.txt": ""})

    files = scan_snapshot(RenameOptions(root=tmp_path, recursive=True, no_ignore=True))

    assert files == ["a.txt"]


def test_gitignore_directory_patterns_and_negation(tmp_path: Path) -> None:
    write_files(tmp_path, {
        ".gitignore": "build/\n*.log\n!keep.log\n",
        "build/out.bin": "",
        "notes.log": "",
        "keep.log": "",
        "src/main.py": "",
        "src/debug.log": "",
    })

    files = scan_snapshot(RenameOptions(root=tmp_path, recursive=True))

    assert files == ["keep.log", "src/main.py"]


def test_nested_ignore_file_applies_to_its_subtree(tmp_path: Path) -> None:
    write_files(tmp_path, {
        "a/.ignore": "/local.txt\n",
        "a/local.txt": "",
        "a/deep/local.txt": "",
        "local.txt": "",
    })

    files = scan_snapshot(RenameOptions(root=tmp_path, recursive=True))

    assert files == ["a/deep/local.txt", "local.txt"]


def test_directories_are_not_listed(tmp_path: Path) -> None:
    write_files(tmp_path, {"a.txt": ""})
    (tmp_path / "empty").mkdir()

    assert scan_snapshot(RenameOptions(root=tmp_path)) == ["a.txt"]


def test_missing_root_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        scan_snapshot(RenameOptions(root=tmp_path / "missing"))
