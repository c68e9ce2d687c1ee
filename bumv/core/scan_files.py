"""
scan_files.py - File Scanning Module

Produces the snapshot: root-relative paths of regular files, in a
deterministic order, honouring hidden-file and ignore-file rules.
"""

from pathlib import Path
from typing import Dict, List
import logging
import os
import posixpath

from .models_fs import RenameOptions
from .ignore_rules import IgnoreRule, is_ignored, load_ignore_file

logger = logging.getLogger(__name__)


def _join(base: str, name: str) -> str:
    return f"{base}/{name}" if base else name


def _load_rules(directory: Path, base: str, options: RenameOptions) -> List[IgnoreRule]:
    rules: List[IgnoreRule] = []
    for ignore_name in options.ignore_files:
        ignore_file = directory / ignore_name
        if ignore_file.is_file():
            rules.extend(load_ignore_file(ignore_file, base))
    return rules


def scan_snapshot(options: RenameOptions) -> List[str]:
    """
    List the files to rename under options.root

    Args:
        options: Root directory, recursive and ignore settings

    Returns:
        Sorted list of POSIX paths relative to the root
    """
    root = Path(options.root)
    if not root.is_dir():
        raise ValueError(f"Directory does not exist: {root}")

    results: List[str] = []
    # Rules in effect for each visited directory (inherited + own)
    rules_by_dir: Dict[str, List[IgnoreRule]] = {}

    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix()
        if rel_dir == ".":
            rel_dir = ""

        parent_rules = rules_by_dir.get(posixpath.dirname(rel_dir), []) if rel_dir else []
        rules = list(parent_rules)
        if not options.no_ignore:
            rules.extend(_load_rules(current_dir, rel_dir, options))
        rules_by_dir[rel_dir] = rules

        if options.recursive:
            # Modifying dirnames in place prevents os.walk from entering these directories
            dirnames[:] = [
                d for d in dirnames
                if d not in options.ignore_dirs
                and (options.include_hidden or not d.startswith("."))
                and (options.no_ignore or not is_ignored(rules, _join(rel_dir, d), True))
            ]
        else:
            dirnames[:] = []

        for filename in filenames:
            if not options.include_hidden and filename.startswith("."):
                continue

            rel_path = _join(rel_dir, filename)
            if not options.no_ignore and is_ignored(rules, rel_path, False):
                continue

            if not (current_dir / filename).is_file():
                continue

            results.append(rel_path)

    results.sort()
    logger.debug("Scanned %d files under %s", len(results), root)
    return results

