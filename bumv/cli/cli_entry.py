"""
cli_entry.py - CLI Entry Point

Lists the files, opens them in your editor, shows the resulting renames
and performs them after confirmation.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..core import (
    RenameOptions, RenamePlan, BumvError,
    SessionOutcome, SessionStatus, bulk_rename, edit_in_editor, resolve_editor,
)


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser"""
    parser = argparse.ArgumentParser(
        prog="bumv",
        description="bumv (bulk move) - A bulk file renaming utility that uses your editor as its UI. "
                    "Invoke the utility, edit the filenames, save the temporary file, "
                    "close the editor and confirm changes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Rename files in the current directory
  bumv

  # Rename files in ./photos and all its subdirectories, using vim
  bumv -r -e vim ./photos

  # Show what would be renamed without touching anything
  bumv --dry-run ./photos
"""
    )

    parser.add_argument("base_path", nargs="?", default=".", help="Base path for the operation")
    parser.add_argument("--recursive", "-r", action="store_true",
                        help="Recursively rename files in subdirectories")
    parser.add_argument("--no-ignore", "-n", action="store_true",
                        help="Do not observe ignore files (also lists hidden files)")
    parser.add_argument("--no-log", action="store_true", help="Do not write a log file")
    parser.add_argument("--use-vscode", "-c", action="store_true", help="Use VS Code as editor")
    parser.add_argument("--editor", "-e", type=str, default=None,
                        help="Editor command (default: $VISUAL, $EDITOR, then VS Code)")
    parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")
    parser.add_argument("--dry-run", "-d", action="store_true", help="Preview only, do not execute")
    parser.add_argument("--journal", type=Path, default=None,
                        help="Write the completed renames as JSON to this file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Print debug output")

    return parser


def options_from_args(args: argparse.Namespace) -> RenameOptions:
    """Build rename options from parsed arguments"""
    return RenameOptions(
        root=Path(args.base_path),
        recursive=args.recursive,
        no_ignore=args.no_ignore,
        use_vscode=args.use_vscode,
        editor=args.editor,
        dry_run=args.dry_run,
        assume_yes=args.yes,
        no_log=args.no_log,
        journal_path=args.journal,
    )


def prompt_for_confirmation(plan: RenamePlan) -> bool:
    """Show the plan and ask the user; an empty answer accepts"""
    print(plan.human_readable())
    try:
        answer = input("\nRename: [Y/n]? ").strip().lower()
    except EOFError:
        return False
    return answer in ("y", "yes", "")


def report_outcome(outcome: SessionOutcome) -> int:
    """Print the outcome and return the exit status"""
    if outcome.status is SessionStatus.NOTHING_TO_DO:
        print("No files to rename.")
        return 0

    if outcome.status is SessionStatus.DRY_RUN:
        print(outcome.plan.human_readable())
        print()
        print(outcome.plan.summary())
        print("\n[Preview mode] Will not actually execute")
        return 0

    if outcome.status is SessionStatus.CANCELLED:
        print("Aborted.")
        return 0

    if outcome.status is SessionStatus.FAILED:
        print(outcome.result.summary(), file=sys.stderr)
        return 1

    print("Files renamed successfully.")
    if outcome.log_file is not None:
        print(f"Log written to {outcome.log_file}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    options = options_from_args(args)
    if not options.root.is_dir():
        print(f"Error: Directory does not exist: {options.root}", file=sys.stderr)
        return 1

    editor = resolve_editor(options)

    try:
        outcome = bulk_rename(
            options,
            lambda content: edit_in_editor(content, editor),
            prompt_for_confirmation,
        )
    except BumvError as e:
        print(f"Error: {e.details()}", file=sys.stderr)
        return 1

    return report_outcome(outcome)


if __name__ == "__main__":
    sys.exit(main())
