"""
ignore_rules.py - Ignore File Matching

Reads .ignore / .gitignore style files and decides whether a path is
excluded from the listing. Supported syntax: '#' comments, '!' negation,
trailing '/' for directory-only patterns, leading '/' (or any inner '/')
for patterns anchored to the directory holding the ignore file, and '**'
for any number of directories. The last matching pattern wins.
"""

from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import List, Optional
import logging
import posixpath

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IgnoreRule:
    """Single pattern line from an ignore file"""
    base: str           # Directory of the ignore file, relative to the root ("" for root)
    pattern: str
    negated: bool = False
    dir_only: bool = False
    anchored: bool = False

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        """
        Check whether a root-relative path matches this rule

        Args:
            rel_path: POSIX path relative to the scan root
            is_dir: Whether the path is a directory

        Returns:
            Whether the rule applies
        """
        if self.dir_only and not is_dir:
            return False

        if self.base:
            prefix = self.base + "/"
            if not rel_path.startswith(prefix):
                return False
            rel_path = rel_path[len(prefix):]

        if self.anchored:
            return _match_segments(self.pattern.split("/"), rel_path.split("/"))
        return fnmatchcase(posixpath.basename(rel_path), self.pattern)


def _match_segments(pattern: List[str], parts: List[str]) -> bool:
    """
    Match path segments one by one

    '*' and '?' never cross a '/'. A '**' segment matches zero or more
    segments, or one or more when it ends the pattern ('dir/**' matches
    everything inside dir but not dir itself).
    """
    if not pattern:
        return not parts
    head, rest = pattern[0], pattern[1:]
    if head == "**":
        if not rest:
            return len(parts) > 0
        return any(_match_segments(rest, parts[i:]) for i in range(len(parts) + 1))
    if not parts:
        return False
    return fnmatchcase(parts[0], head) and _match_segments(rest, parts[1:])


def parse_rule(line: str, base: str = "") -> Optional[IgnoreRule]:
    """
    Parse one line of an ignore file

    Args:
        line: Raw line
        base: Root-relative directory of the ignore file

    Returns:
        Rule, or None for blank lines and comments
    """
    line = line.rstrip("\r\n")
    if not line.strip() or line.startswith("#"):
        return None

    # Unescaped trailing spaces are not part of the pattern
    if not line.endswith("\\ "):
        line = line.rstrip(" ")

    negated = False
    if line.startswith("!"):
        negated = True
        line = line[1:]
    elif line.startswith("\\!") or line.startswith("\\#"):
        line = line[1:]

    dir_only = line.endswith("/")
    line = line.rstrip("/")

    anchored = "/" in line
    line = line.lstrip("/")
    if line.startswith("**/"):
        # '**/name' matches at any depth, same as an unanchored pattern
        line = line[3:]
        anchored = "/" in line

    if not line:
        return None

    return IgnoreRule(
        base=base,
        pattern=line,
        negated=negated,
        dir_only=dir_only,
        anchored=anchored,
    )


def load_ignore_file(path: Path, base: str = "") -> List[IgnoreRule]:
    """
    Load all rules of an ignore file

    Args:
        path: Ignore file path
        base: Root-relative directory of the ignore file

    Returns:
        Rule list in file order (empty if unreadable)
    """
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning("Cannot read ignore file %s: %s", path, e)
        return []

    rules = []
    for line in text.splitlines():
        rule = parse_rule(line, base)
        if rule is not None:
            rules.append(rule)
    return rules


def is_ignored(rules: List[IgnoreRule], rel_path: str, is_dir: bool) -> bool:
    """Whether the last matching rule excludes the path"""
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negated
    return ignored
