"""
validate_edit.py - Edited List Validation

Checks an edited list against the snapshot it was produced from and
derives the rename mapping. Pure function of its inputs, never touches
the filesystem.

Checks, in order, each rejecting the whole edit:
1. Same number of lines as the snapshot
2. No two changed lines share a target
3. No target overwrites a file that is not being renamed away
4. Every target is a well-formed file path inside the root
"""

from collections import defaultdict
from typing import Dict, List, Optional, Tuple
import platform
import re

from .models_fs import RenameMapping, RenameOptions, normalize_entry
from .errors import EditValidationError, LineProblem

WINDOWS_INVALID_CHARS = '<>:"|?*'
WINDOWS_RESERVED_NAMES = {
    'CON', 'PRN', 'AUX', 'NUL',
    'COM1', 'COM2', 'COM3', 'COM4', 'COM5', 'COM6', 'COM7', 'COM8', 'COM9',
    'LPT1', 'LPT2', 'LPT3', 'LPT4', 'LPT5', 'LPT6', 'LPT7', 'LPT8', 'LPT9'
}
MAX_NAME_LENGTH = 255
WINDOWS_ABSOLUTE_PATTERN = re.compile(r"^[a-zA-Z]:/")


def is_valid_component(name: str, windows: Optional[bool] = None) -> Tuple[bool, Optional[str]]:
    """
    Check if a single path component is a valid file or directory name

    Args:
        name: Path component
        windows: Apply Windows naming rules (defaults to the current platform)

    Returns:
        (is_valid, error_reason)
    """
    if windows is None:
        windows = platform.system() == "Windows"

    if "\0" in name:
        return False, "Path contains a NUL character"

    if len(name) > MAX_NAME_LENGTH:
        return False, f"Name exceeds {MAX_NAME_LENGTH} characters"

    if windows:
        for char in WINDOWS_INVALID_CHARS:
            if char in name:
                return False, f"Name contains invalid character: {char}"

        if name.endswith(' ') or name.endswith('.'):
            return False, "Name cannot end with space or dot"

        name_upper = name.upper().split('.')[0]
        if name_upper in WINDOWS_RESERVED_NAMES:
            return False, f"Name is a Windows reserved name: {name_upper}"

    return True, None


def check_entry(entry: str, options: RenameOptions) -> Optional[str]:
    """
    Check that a normalized target is a relative file path inside the root

    Returns:
        Error reason, or None if the entry is well-formed
    """
    if not entry.strip():
        return "Empty line"
    if entry.startswith("/") or WINDOWS_ABSOLUTE_PATTERN.match(entry):
        return "Absolute paths are not allowed"
    if entry == "." or entry.endswith("/"):
        return "Path refers to a directory"

    parts = entry.split("/")
    if parts[0] == "..":
        return "Path escapes the root directory"
    if not options.recursive and len(parts) > 1:
        return "Subdirectories are only allowed in recursive mode"

    for part in parts:
        valid, error = is_valid_component(part)
        if not valid:
            return error
    return None


def _parent_dirs(entry: str) -> List[str]:
    parts = entry.split("/")[:-1]
    return ["/".join(parts[:i]) for i in range(1, len(parts) + 1)]


def validate_edit(snapshot: List[str], edited: List[str], options: RenameOptions) -> RenameMapping:
    """
    Validate an edited list and build the rename mapping

    Args:
        snapshot: Paths as listed before editing
        edited: Paths as parsed after editing
        options: Rename options (recursive mode)

    Returns:
        Mapping with one pair per changed line, in snapshot order
    """
    if len(edited) != len(snapshot):
        raise EditValidationError(
            f"The number of files in the edited list ({len(edited)}) does not match "
            f"the original ({len(snapshot)}). Lines must not be added or removed."
        )

    # Snapshot entries come from the scanner and are already normalized
    old_entries = list(snapshot)
    new_entries = [normalize_entry(e) for e in edited]
    changed = [i for i, (old, new) in enumerate(zip(old_entries, new_entries)) if old != new]

    # Duplicate targets among changed lines
    lines_by_target: Dict[str, List[int]] = defaultdict(list)
    for i in changed:
        if new_entries[i].strip():
            lines_by_target[new_entries[i]].append(i)
    problems = []
    for target, lines in lines_by_target.items():
        if len(lines) > 1:
            others = ", ".join(str(i + 1) for i in lines)
            for i in lines:
                problems.append(LineProblem(i + 1, edited[i], f"Same target as lines {others}"))
    if problems:
        problems.sort(key=lambda p: p.line)
        raise EditValidationError("There is a name clash in the edited files.", problems)

    # Targets that would overwrite a file nobody renames away
    sources = {old_entries[i] for i in changed}
    untouched = set(old_entries) - sources
    for i in changed:
        if new_entries[i] in untouched:
            problems.append(LineProblem(
                i + 1, edited[i], f"Would overwrite {new_entries[i]}, which is not being renamed"
            ))
    if problems:
        raise EditValidationError("A new name collides with a file that is not being renamed.", problems)

    # Well-formedness
    final_entries = set(untouched) | {new_entries[i] for i in changed}
    final_dirs = {d for entry in final_entries for d in _parent_dirs(entry)}
    listed = set(old_entries)
    listed_dirs = {d for entry in old_entries for d in _parent_dirs(entry)}
    for i in changed:
        error = check_entry(new_entries[i], options)
        if error is None and new_entries[i] in final_dirs:
            error = "Path is also used as a directory by another entry"
        if error is None and any(d in final_entries for d in _parent_dirs(new_entries[i])):
            error = "A parent directory of this path is also a file"
        # Directories are created but never removed, so a listed file cannot
        # become a directory and a listed directory cannot become a file
        if error is None and any(d in listed for d in _parent_dirs(new_entries[i])):
            error = "A parent directory of this path is a listed file"
        if error is None and new_entries[i] in listed_dirs:
            error = "Path is a directory holding listed files"
        if error is not None:
            problems.append(LineProblem(i + 1, edited[i], error))
    if problems:
        raise EditValidationError("The edited list contains invalid paths.", problems)

    return RenameMapping(pairs=[(old_entries[i], new_entries[i]) for i in changed])
