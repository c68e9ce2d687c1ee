"""
models_fs.py - Core Data Structure Definitions

Contains:
- RenameOp: Single filesystem rename step
- RenameGroup: Connected component of the rename mapping (chain or cycle)
- RenameMapping: Old path -> new path pairs taken from the edited list
- RenamePlan: Ordered rename steps ready for execution
- RenameOptions: Configuration threaded through every call
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List, Tuple, Iterator
from enum import Enum
import os
import posixpath


class OpKind(Enum):
    """Kind of rename step"""
    RENAME = "rename"        # Direct rename to the final name
    TO_TEMP = "to_temp"      # Move a cycle member out of the way
    FROM_TEMP = "from_temp"  # Move the parked file to its final name


class GroupKind(Enum):
    """Shape of a connected component of the mapping graph"""
    CHAIN = "chain"
    CYCLE = "cycle"


def normalize_entry(text: str) -> str:
    """
    Normalize a path entry for comparison

    Backslashes become forward slashes where they are the platform
    separator (elsewhere they are legal in file names). '.' segments and
    duplicate separators are collapsed. A trailing directory separator is
    kept so the validator can reject it. Empty input stays empty.
    """
    text = text.rstrip("\r")
    if not text:
        return text
    if os.sep == "\\":
        text = text.replace("\\", "/")
    trailing_slash = text.endswith("/") and text != "/"
    normalized = posixpath.normpath(text)
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    if trailing_slash:
        normalized += "/"
    return normalized


@dataclass(frozen=True)
class RenameOp:
    """Single rename operation (paths relative to the root)"""
    src: str
    dst: str
    kind: OpKind = OpKind.RENAME

    @property
    def is_same(self) -> bool:
        """Whether source and destination are the same"""
        return self.src == self.dst

    def __str__(self) -> str:
        return f"{self.src} -> {self.dst}"


@dataclass
class RenameMapping:
    """Changed lines of the edited list, in snapshot order"""
    pairs: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def sources(self) -> List[str]:
        return [old for old, _ in self.pairs]

    @property
    def targets(self) -> List[str]:
        return [new for _, new in self.pairs]

    def is_empty(self) -> bool:
        return not self.pairs

    def __len__(self) -> int:
        return len(self.pairs)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self.pairs)


@dataclass
class RenameGroup:
    """Connected component of the mapping graph with its ordered steps"""
    kind: GroupKind
    edges: List[Tuple[str, str]]
    ops: List[RenameOp] = field(default_factory=list)

    @property
    def is_cycle(self) -> bool:
        return self.kind is GroupKind.CYCLE

    @property
    def temp_count(self) -> int:
        return sum(1 for op in self.ops if op.kind is OpKind.TO_TEMP)


@dataclass
class RenameOptions:
    """Rename options configuration"""
    root: Path = field(default_factory=lambda: Path("."))

    # Traversal
    recursive: bool = False         # Descend into subdirectories
    no_ignore: bool = False         # Do not observe ignore files or hide dotfiles
    ignore_dirs: List[str] = field(default_factory=lambda: [".git"])
    ignore_files: List[str] = field(default_factory=lambda: [".ignore", ".gitignore"])

    # Editor
    use_vscode: bool = False
    editor: Optional[str] = None    # Overrides $VISUAL / $EDITOR

    # Execution options
    dry_run: bool = False           # Preview only, do not actually execute
    assume_yes: bool = False        # Skip the confirmation prompt
    no_log: bool = False            # Do not write bumv_<timestamp>.log
    journal_path: Optional[Path] = None

    @property
    def include_hidden(self) -> bool:
        """Hidden files are only listed when ignore rules are off"""
        return self.no_ignore

    def resolve(self, entry: str) -> Path:
        """Absolute path of a root-relative entry"""
        return Path(self.root) / entry


@dataclass
class RenamePlan:
    """Batch rename plan"""
    mapping: RenameMapping = field(default_factory=RenameMapping)
    groups: List[RenameGroup] = field(default_factory=list)

    @property
    def ops(self) -> List[RenameOp]:
        """All steps in execution order"""
        return [op for group in self.groups for op in group.ops]

    @property
    def total_count(self) -> int:
        """Total number of filesystem steps"""
        return len(self.ops)

    @property
    def temp_count(self) -> int:
        return sum(group.temp_count for group in self.groups)

    @property
    def cycle_count(self) -> int:
        return sum(1 for group in self.groups if group.is_cycle)

    def is_empty(self) -> bool:
        return self.mapping.is_empty()

    def human_readable(self) -> str:
        """One 'old -> new' line per step, in execution order"""
        return "\n".join(str(op) for op in self.ops)

    def summary(self) -> str:
        """Generate summary"""
        lines = [
            f"Rename Plan Summary:",
            f"  - Files to rename: {len(self.mapping)}",
            f"  - Total operations: {self.total_count}",
            f"  - Cycles broken: {self.cycle_count}",
        ]
        return "\n".join(lines)

