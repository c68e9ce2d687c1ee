"""
exec_rename.py - Rename Execution Module

Responsibilities:
- Re-scan before starting and refuse to run on a stale snapshot
- Re-check every step immediately before performing it
- Stop on the first failure (completed steps are not rolled back)
"""

from typing import List, Tuple, Optional, Callable
from dataclasses import dataclass, field
import logging
import os

from .models_fs import RenamePlan, RenameOp, RenameOptions
from .errors import StaleSnapshotError, PreconditionError
from .journal import RenameJournal
from .safety_checks import check_rename_op, is_case_only_change, is_same_file
from .scan_files import scan_snapshot

logger = logging.getLogger(__name__)


@dataclass
class RenameResult:
    """Rename execution result"""
    success: List[RenameOp] = field(default_factory=list)
    failed: List[Tuple[RenameOp, str]] = field(default_factory=list)  # (op, error_msg)
    skipped: List[RenameOp] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.success)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def completed(self) -> bool:
        """Whether every step ran"""
        return not self.failed and not self.skipped

    def summary(self) -> str:
        """Generate summary"""
        lines = [
            f"Execution Result:",
            f"  - Success: {self.success_count}",
            f"  - Failed: {self.failed_count}",
            f"  - Not attempted: {self.skipped_count}",
        ]
        if self.failed:
            lines.append("Failure Details:")
            for op, error in self.failed:
                lines.append(f"  - {op}: {error}")
            lines.append("Renames completed before the failure were not undone.")
        return "\n".join(lines)


def ensure_snapshot_current(snapshot: List[str], options: RenameOptions) -> None:
    """
    Ensure that the files have not changed since the snapshot was taken

    Args:
        snapshot: Listing shown to the user
        options: Same traversal options used for the snapshot
    """
    current = scan_snapshot(options)
    if current != list(snapshot):
        before = set(snapshot)
        after = set(current)
        raise StaleSnapshotError(
            added=sorted(after - before),
            removed=sorted(before - after),
        )


def ensure_targets_free(plan: RenamePlan, snapshot: List[str], options: RenameOptions) -> None:
    """
    Ensure no final target clobbers something outside the snapshot

    Ignored, hidden or unlisted files and directories are invisible to the
    validator, so they are checked here before the first rename.
    """
    entries = set(snapshot)
    for old, new in plan.mapping:
        if new in entries:
            continue
        src = options.resolve(old)
        dst = options.resolve(new)
        if os.path.lexists(dst):
            # A case-insensitive filesystem reports the source itself
            if is_case_only_change(src, dst) and is_same_file(src, dst):
                continue
            raise PreconditionError(f"The file {new} already exists. Aborting.")


def execute_plan(
    plan: RenamePlan,
    options: RenameOptions,
    progress_callback: Optional[Callable[[int, int, str], None]] = None,
    journal: Optional[RenameJournal] = None,
) -> RenameResult:
    """
    Execute rename plan step by step

    Args:
        plan: Rename plan
        options: Options holding the root
        progress_callback: Progress callback (current, total, message),
            called before each step
        journal: Receives every completed step

    Returns:
        Execution result
    """
    result = RenameResult()
    ops = plan.ops
    total = len(ops)

    for i, op in enumerate(ops):
        if progress_callback:
            progress_callback(i + 1, total, str(op))

        if op.is_same:
            continue

        valid, error = check_rename_op(op, options)
        if valid:
            src = options.resolve(op.src)
            dst = options.resolve(op.dst)
            try:
                dst.parent.mkdir(parents=True, exist_ok=True)
                os.rename(src, dst)
            except OSError as e:
                error = f"Rename failed: {e}"

        if error is not None:
            logger.error("Step %d/%d failed (%s): %s", i + 1, total, op, error)
            result.failed.append((op, error))
            result.skipped.extend(ops[i + 1:])
            break

        logger.debug("Step %d/%d: %s", i + 1, total, op)
        result.success.append(op)
        if journal is not None:
            journal.record(op)

    return result


def run_plan(
    plan: RenamePlan,
    snapshot: List[str],
    options: RenameOptions,
    progress_callback: Optional[Callable[[int, int, str], None]] = None,
    journal: Optional[RenameJournal] = None,
) -> RenameResult:
    """
    Check global preconditions, then execute the plan

    Raises StaleSnapshotError or PreconditionError before any rename.
    """
    ensure_snapshot_current(snapshot, options)
    ensure_targets_free(plan, snapshot, options)
    return execute_plan(plan, options, progress_callback=progress_callback, journal=journal)
