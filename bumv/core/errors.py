"""
errors.py - Error Types

Everything raised by the core derives from BumvError. Errors raised
before execution guarantee that the filesystem was not touched.
"""

from dataclasses import dataclass
from typing import List, Optional


class BumvError(Exception):
    """Base class for all bulk rename errors"""

    def details(self) -> str:
        """Message including any offending entries"""
        return str(self)


@dataclass(frozen=True)
class LineProblem:
    """An offending line of the edited list (1-based)"""
    line: int
    text: str
    reason: str

    def __str__(self) -> str:
        return f"line {self.line}: {self.text!r}: {self.reason}"


class EditValidationError(BumvError):
    """The edited list is structurally invalid"""

    def __init__(self, message: str, problems: Optional[List[LineProblem]] = None):
        super().__init__(message)
        self.problems: List[LineProblem] = list(problems or [])

    def details(self) -> str:
        lines = [str(self)]
        lines.extend(f"  - {problem}" for problem in self.problems)
        return "\n".join(lines)


class StaleSnapshotError(BumvError):
    """The files changed while the list was being edited"""

    def __init__(self, added: List[str], removed: List[str]):
        super().__init__("The files in the directory changed while you were editing them.")
        self.added = added
        self.removed = removed

    def details(self) -> str:
        lines = [str(self)]
        lines.extend(f"  + {path}" for path in self.added)
        lines.extend(f"  - {path}" for path in self.removed)
        if not self.added and not self.removed:
            lines.append("  (listing order changed)")
        return "\n".join(lines)


class PlanningError(BumvError):
    """No safe ordering could be computed"""


class PreconditionError(BumvError):
    """A target or source no longer matches what the plan expects"""


class EditorError(BumvError):
    """The external editor could not be run or exited with an error"""
