"""
journal.py - Rename Journal and Log Files

RenameJournal records every completed step in order. Nothing is ever
removed from it, which makes it the starting point for an undo feature:
replaying its entries backwards restores the previous names.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional
import json

from .models_fs import RenameMapping, RenameOp


@dataclass
class RenameJournal:
    """Append-only list of completed rename steps"""
    root: Optional[Path] = None
    started: datetime = field(default_factory=datetime.now)
    _entries: List[RenameOp] = field(default_factory=list)

    def record(self, op: RenameOp) -> None:
        """Append a completed step"""
        self._entries.append(op)

    @property
    def entries(self) -> List[RenameOp]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def save(self, path: Path) -> Path:
        """Save the journal as JSON"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "started": self.started.strftime("%Y%m%d_%H%M%S"),
            "root": str(self.root) if self.root is not None else None,
            "completed_count": len(self._entries),
            "completed": [
                {"src": op.src, "dst": op.dst, "kind": op.kind.value}
                for op in self._entries
            ],
        }

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

        return path


def format_rename_log(mapping: RenameMapping) -> str:
    """Tab separated 'old<TAB>new' lines, old names padded to a common width"""
    if mapping.is_empty():
        return ""
    width = max(len(old) for old in mapping.sources)
    return "\n".join(f"{old:<{width}}\t{new}" for old, new in mapping)


def write_rename_log(mapping: RenameMapping, root: Path, now: Optional[datetime] = None) -> Path:
    """
    Write bumv_<timestamp>.log into the root

    The log holds the requested mapping, not the planned steps, so
    temporary names never show up in it.

    Args:
        mapping: Requested renames
        root: Directory the renames happened in
        now: Timestamp to use (defaults to the current time)

    Returns:
        Path of the log file
    """
    timestamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    log_file = Path(root) / f"bumv_{timestamp}.log"
    with open(log_file, 'w', encoding='utf-8') as f:
        f.write(format_rename_log(mapping))
    return log_file
