import os

import pytest

from bumv.core import EditValidationError, RenameOptions, validate_edit

SNAPSHOT = ["a.txt", "b.txt", "c.txt"]


@pytest.fixture
def flat() -> RenameOptions:
    return RenameOptions()


@pytest.fixture
def nested() -> RenameOptions:
    return RenameOptions(recursive=True)


def test_unchanged_list_gives_empty_mapping(flat: RenameOptions) -> None:
    mapping = validate_edit(SNAPSHOT, list(SNAPSHOT), flat)

    assert mapping.is_empty()
    assert len(mapping) == 0


def test_mapping_holds_only_changed_lines_in_order(flat: RenameOptions) -> None:
    mapping = validate_edit(SNAPSHOT, ["x.txt", "b.txt", "y.txt"], flat)

    assert mapping.pairs == [("a.txt", "x.txt"), ("c.txt", "y.txt")]


@pytest.mark.parametrize("edited", [
    ["a.txt", "b.txt"],
    ["a.txt", "b.txt", "c.txt", "d.txt"],
    [],
])
def test_line_count_mismatch_is_rejected(flat: RenameOptions, edited: list) -> None:
    with pytest.raises(EditValidationError, match="number of files"):
        validate_edit(SNAPSHOT, edited, flat)


def test_two_lines_with_the_same_target_are_rejected(flat: RenameOptions) -> None:
    with pytest.raises(EditValidationError) as excinfo:
        validate_edit(SNAPSHOT, ["z.txt", "z.txt", "c.txt"], flat)

    assert [p.line for p in excinfo.value.problems] == [1, 2]


def test_target_equal_to_untouched_file_is_rejected(flat: RenameOptions) -> None:
    with pytest.raises(EditValidationError) as excinfo:
        validate_edit(SNAPSHOT, ["b.txt", "b.txt", "c.txt"], flat)

    problem, = excinfo.value.problems
    assert problem.line == 1
    assert "not being renamed" in problem.reason


def test_target_equal_to_a_renamed_source_is_a_chain(flat: RenameOptions) -> None:
    # a -> b is fine because b itself moves on to d
    mapping = validate_edit(SNAPSHOT, ["b.txt", "d.txt", "c.txt"], flat)

    assert mapping.pairs == [("a.txt", "b.txt"), ("b.txt", "d.txt")]


def test_target_equal_to_a_renamed_source_listed_earlier(flat: RenameOptions) -> None:
    mapping = validate_edit(SNAPSHOT, ["d.txt", "b.txt", "a.txt"], flat)

    assert mapping.pairs == [("a.txt", "d.txt"), ("c.txt", "a.txt")]


def test_swap_is_accepted(flat: RenameOptions) -> None:
    mapping = validate_edit(SNAPSHOT, ["b.txt", "a.txt", "c.txt"], flat)

    assert mapping.pairs == [("a.txt", "b.txt"), ("b.txt", "a.txt")]


def test_equivalent_spelling_is_not_a_change(flat: RenameOptions) -> None:
    mapping = validate_edit(SNAPSHOT, ["./a.txt", "b.txt", "c.txt\r"], flat)

    assert mapping.is_empty()


@pytest.mark.parametrize("target, reason", [
    ("", "Empty line"),
    ("   ", "Empty line"),
    ("/etc/passwd", "Absolute"),
    ("../outside.txt", "escapes"),
    ("sub/../../outside.txt", "escapes"),
    ("newdir/", "directory"),
    ("with\0nul", "NUL"),
    ("x" * 300, "255"),
])
def test_malformed_targets_are_rejected(nested: RenameOptions, target: str, reason: str) -> None:
    with pytest.raises(EditValidationError) as excinfo:
        validate_edit(SNAPSHOT, [target, "b.txt", "c.txt"], nested)

    problem, = excinfo.value.problems
    assert problem.line == 1
    assert reason in problem.reason


def test_subdirectory_target_needs_recursive_mode(flat: RenameOptions, nested: RenameOptions) -> None:
    edited = ["sub/a.txt", "b.txt", "c.txt"]

    with pytest.raises(EditValidationError, match="invalid paths"):
        validate_edit(SNAPSHOT, edited, flat)

    assert validate_edit(SNAPSHOT, edited, nested).pairs == [("a.txt", "sub/a.txt")]


def test_target_cannot_turn_a_file_into_a_directory(nested: RenameOptions) -> None:
    with pytest.raises(EditValidationError) as excinfo:
        validate_edit(SNAPSHOT, ["b.txt/a.txt", "b.txt", "c.txt"], nested)

    assert "also a file" in excinfo.value.problems[0].reason


def test_details_lists_offending_lines(flat: RenameOptions) -> None:
    with pytest.raises(EditValidationError) as excinfo:
        validate_edit(SNAPSHOT, ["z.txt", "z.txt", "c.txt"], flat)

    details = excinfo.value.details()
    assert "line 1: 'z.txt'" in details
    assert "line 2: 'z.txt'" in details


def test_listed_file_cannot_become_a_directory(nested: RenameOptions) -> None:
    # b moves away, but a -> b/x would still need b as a directory
    with pytest.raises(EditValidationError) as excinfo:
        validate_edit(["0", "a", "b"], ["z", "b/x", "c"], nested)

    problem, = excinfo.value.problems
    assert problem.line == 2
    assert "listed file" in problem.reason


def test_listed_directory_cannot_become_a_file(nested: RenameOptions) -> None:
    with pytest.raises(EditValidationError) as excinfo:
        validate_edit(["a", "d/x"], ["d", "e"], nested)

    problem, = excinfo.value.problems
    assert problem.line == 1
    assert "holding listed files" in problem.reason


@pytest.mark.skipif(os.sep == "\\", reason="backslash is the path separator")
def test_backslash_is_part_of_the_name(nested: RenameOptions) -> None:
    mapping = validate_edit(["a.txt", "x\\y.txt"], ["b.txt", "x\\z.txt"], nested)

    assert mapping.pairs == [("a.txt", "b.txt"), ("x\\y.txt", "x\\z.txt")]
