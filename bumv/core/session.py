"""
session.py - One Bulk Rename Run

snapshot -> edit -> validate -> plan -> confirm -> execute

The editor and the confirmation prompt are passed in as functions so the
whole flow can run without a terminal.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional
import logging

from .models_fs import RenamePlan, RenameOptions
from .scan_files import scan_snapshot
from .edit_list import render_list, parse_list
from .validate_edit import validate_edit
from .plan_rename import build_plan
from .exec_rename import RenameResult, run_plan
from .journal import RenameJournal, write_rename_log

logger = logging.getLogger(__name__)


class SessionStatus(Enum):
    """How a run ended"""
    NOTHING_TO_DO = "nothing_to_do"
    CANCELLED = "cancelled"
    DRY_RUN = "dry_run"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class SessionOutcome:
    """Result of bulk_rename"""
    status: SessionStatus
    plan: Optional[RenamePlan] = None
    result: Optional[RenameResult] = None
    journal: Optional[RenameJournal] = None
    log_file: Optional[Path] = None


def bulk_rename(
    options: RenameOptions,
    edit_function: Callable[[str], str],
    prompt_function: Callable[[RenamePlan], bool],
) -> SessionOutcome:
    """
    Bulk rename files according to the options

    Args:
        options: Rename options
        edit_function: Receives the listing text, returns the edited text
        prompt_function: Receives the plan, returns whether to execute it

    Returns:
        Session outcome. Validation, planning and staleness errors are
        raised (as BumvError) before anything is renamed.
    """
    snapshot = scan_snapshot(options)
    if not snapshot:
        return SessionOutcome(SessionStatus.NOTHING_TO_DO)

    edited = parse_list(edit_function(render_list(snapshot)))
    mapping = validate_edit(snapshot, edited, options)
    plan = build_plan(mapping, options, snapshot)

    if plan.is_empty():
        return SessionOutcome(SessionStatus.NOTHING_TO_DO, plan=plan)

    if options.dry_run:
        return SessionOutcome(SessionStatus.DRY_RUN, plan=plan)

    if not options.assume_yes and not prompt_function(plan):
        return SessionOutcome(SessionStatus.CANCELLED, plan=plan)

    journal = RenameJournal(root=options.root)
    try:
        result = run_plan(plan, snapshot, options, journal=journal)
    finally:
        if options.journal_path is not None:
            journal.save(options.journal_path)

    if not result.completed:
        return SessionOutcome(SessionStatus.FAILED, plan=plan, result=result, journal=journal)

    log_file = None
    if not options.no_log:
        log_file = write_rename_log(mapping, options.root)
        logger.info("Wrote rename log %s", log_file)

    return SessionOutcome(
        SessionStatus.COMPLETED, plan=plan, result=result, journal=journal, log_file=log_file,
    )
