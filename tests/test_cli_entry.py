from pathlib import Path

import pytest

from bumv.cli import cli_entry
from bumv.cli.cli_entry import create_parser, main, options_from_args


def test_parser_defaults() -> None:
    options = options_from_args(create_parser().parse_args([]))

    assert options.root == Path(".")
    assert not options.recursive
    assert not options.no_ignore
    assert not options.no_log
    assert options.journal_path is None


def test_parser_flags() -> None:
    args = create_parser().parse_args(["-r", "-n", "--no-log", "-c", "-y", "-d", "--journal", "j.json", "photos"])
    options = options_from_args(args)

    assert options.root == Path("photos")
    assert options.recursive and options.no_ignore and options.no_log
    assert options.use_vscode and options.assume_yes and options.dry_run
    assert options.journal_path == Path("j.json")


@pytest.fixture
def fake_editor(monkeypatch):
    def install(transform):
        monkeypatch.setattr(cli_entry, "edit_in_editor", lambda content, editor: transform(content))
    return install


def test_main_renames_after_confirmation(tree: Path, fake_editor, monkeypatch, capsys) -> None:
    fake_editor(lambda content: content.replace("file1.txt", "x.txt"))
    monkeypatch.setattr("builtins.input", lambda prompt: "")

    status = main(["--no-log", str(tree)])

    assert status == 0
    assert (tree / "x.txt").exists()
    out = capsys.readouterr().out
    assert "file1.txt -> x.txt" in out
    assert "Files renamed successfully." in out


def test_main_aborts_on_no(tree: Path, fake_editor, monkeypatch, capsys) -> None:
    fake_editor(lambda content: content.replace("file1.txt", "x.txt"))
    monkeypatch.setattr("builtins.input", lambda prompt: "n")

    assert main([str(tree)]) == 0
    assert "Aborted." in capsys.readouterr().out
    assert (tree / "file1.txt").exists()


def test_main_reports_validation_errors(tree: Path, fake_editor, capsys) -> None:
    fake_editor(lambda content: content.replace("file1.txt", "file2.txt"))

    assert main([str(tree)]) == 1
    err = capsys.readouterr().err
    assert "line 1" in err
    assert "not being renamed" in err


def test_main_nothing_to_rename(tree: Path, fake_editor, capsys) -> None:
    fake_editor(lambda content: content)

    assert main([str(tree)]) == 0
    assert "No files to rename." in capsys.readouterr().out


def test_main_missing_directory(tmp_path: Path, capsys) -> None:
    assert main([str(tmp_path / "missing")]) == 1
    assert "does not exist" in capsys.readouterr().err
