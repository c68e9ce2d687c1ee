"""
core - Bulk Rename Core Module

Provides snapshotting, edited list validation, rename planning and
step-by-step execution.
"""

from .models_fs import (
    RenameOp,
    RenameGroup,
    RenameMapping,
    RenamePlan,
    RenameOptions,
    OpKind,
    GroupKind,
    normalize_entry,
)

from .errors import (
    BumvError,
    LineProblem,
    EditValidationError,
    StaleSnapshotError,
    PlanningError,
    PreconditionError,
    EditorError,
)

from .scan_files import (
    scan_snapshot,
)

from .edit_list import (
    render_list,
    parse_list,
    resolve_editor,
    edit_in_editor,
)

from .validate_edit import (
    validate_edit,
)

from .plan_rename import (
    build_plan,
    decompose,
    is_temp_name,
)

from .exec_rename import (
    execute_plan,
    run_plan,
    ensure_snapshot_current,
    ensure_targets_free,
    RenameResult,
)

from .journal import (
    RenameJournal,
    write_rename_log,
)

from .session import (
    bulk_rename,
    SessionOutcome,
    SessionStatus,
)

__all__ = [
    # Data models
    "RenameOp",
    "RenameGroup",
    "RenameMapping",
    "RenamePlan",
    "RenameOptions",
    "OpKind",
    "GroupKind",
    "normalize_entry",
    "RenameResult",

    # Errors
    "BumvError",
    "LineProblem",
    "EditValidationError",
    "StaleSnapshotError",
    "PlanningError",
    "PreconditionError",
    "EditorError",

    # Scanning
    "scan_snapshot",

    # Editing
    "render_list",
    "parse_list",
    "resolve_editor",
    "edit_in_editor",

    # Validation
    "validate_edit",

    # Planning
    "build_plan",
    "decompose",
    "is_temp_name",

    # Execution
    "execute_plan",
    "run_plan",
    "ensure_snapshot_current",
    "ensure_targets_free",

    # Journal
    "RenameJournal",
    "write_rename_log",

    # Session
    "bulk_rename",
    "SessionOutcome",
    "SessionStatus",
]
