"""
safety_checks.py - Safety Check Module

Checks run immediately before each filesystem operation
"""

from pathlib import Path
from typing import Tuple, Optional
import os

from .models_fs import RenameOp, RenameOptions


def check_writable(directory: Path) -> Tuple[bool, Optional[str]]:
    """
    Check if entries can be created or removed in a directory

    A directory that does not exist yet is checked through its nearest
    existing ancestor.

    Args:
        directory: Directory to check

    Returns:
        (is_writable, error_reason)
    """
    while not directory.exists():
        if directory.parent == directory:
            return False, f"Directory does not exist: {directory}"
        directory = directory.parent

    if not directory.is_dir():
        return False, f"Not a directory: {directory}"
    if not os.access(directory, os.W_OK):
        return False, f"Directory is not writable: {directory}"

    return True, None


def is_case_only_change(src: Path, dst: Path) -> bool:
    """Whether only the case of the name changes"""
    return (src.parent == dst.parent and
            src.name.lower() == dst.name.lower() and
            src.name != dst.name)


def is_same_file(src: Path, dst: Path) -> bool:
    try:
        return os.path.samefile(src, dst)
    except OSError:
        return False


def check_rename_op(op: RenameOp, options: RenameOptions) -> Tuple[bool, Optional[str]]:
    """
    Check if a single rename operation is safe right now

    Args:
        op: Operation with root-relative paths
        options: Options holding the root

    Returns:
        (is_safe, error_reason)
    """
    src = options.resolve(op.src)
    dst = options.resolve(op.dst)

    # Check if source file exists
    if not src.exists():
        return False, f"Source file does not exist: {op.src}"

    # Check if source is a file
    if not src.is_file():
        return False, f"Source path is not a file: {op.src}"

    # Check that the target is free; a case-only rename on a
    # case-insensitive filesystem sees its own source here
    if os.path.lexists(dst):
        if not (is_case_only_change(src, dst) and is_same_file(src, dst)):
            return False, f"The file {op.dst} already exists"

    for directory in (src.parent, dst.parent):
        valid, error = check_writable(directory)
        if not valid:
            return False, error

    return True, None
