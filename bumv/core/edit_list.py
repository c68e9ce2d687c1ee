"""
edit_list.py - Editor Round Trip

Renders the snapshot as text, lets the user edit it in an external
editor and parses the result back into an edited list.
"""

from pathlib import Path
from typing import List, Optional
import logging
import os
import platform
import shlex
import subprocess
import tempfile

from .models_fs import RenameOptions
from .errors import EditorError

logger = logging.getLogger(__name__)

VS_CODE = "code.cmd" if platform.system() == "Windows" else "code"


def render_list(snapshot: List[str]) -> str:
    """Render the snapshot one path per line"""
    return "\n".join(snapshot)


def parse_list(content: str) -> List[str]:
    """
    Parse the edited text back into entries

    Args:
        content: File content after editing

    Returns:
        One entry per line, order preserved. Trailing blank lines are
        dropped; blank lines in between are kept for the validator.
    """
    lines = [line.rstrip("\r") for line in content.split("\n")]
    while lines and not lines[-1].strip():
        lines.pop()
    return lines


def resolve_editor(options: RenameOptions, environ: Optional[dict] = None) -> str:
    """
    Pick the editor command

    Priority: --use-vscode, --editor, $VISUAL, $EDITOR, VS Code.
    """
    if environ is None:
        environ = os.environ
    if options.use_vscode:
        return VS_CODE
    if options.editor:
        return options.editor
    return environ.get("VISUAL") or environ.get("EDITOR") or VS_CODE


def _editor_command(editor: str, path: Path) -> List[str]:
    command = shlex.split(editor, posix=os.name != "nt")
    if not command:
        raise EditorError("No editor configured")
    # VS Code needs --wait to block until the file is closed
    if Path(command[0]).name in ("code", "code.cmd") and "--wait" not in command:
        command.append("--wait")
    command.append(str(path))
    return command


def edit_in_editor(content: str, editor: str) -> str:
    """
    Let the user edit content in an external editor

    Args:
        content: Initial file content
        editor: Editor command line (may include arguments)

    Returns:
        File content after the editor exits
    """
    fd, name = tempfile.mkstemp(prefix="bumv_", suffix=".txt", text=True)
    temp_path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)

        command = _editor_command(editor, temp_path)
        logger.debug("Running editor: %s", command)
        try:
            completed = subprocess.run(command)
        except OSError as e:
            raise EditorError(f"Cannot start editor {command[0]!r}: {e}") from e
        if completed.returncode != 0:
            raise EditorError(f"Editor exited with an error (status {completed.returncode})")

        return temp_path.read_text(encoding="utf-8")
    finally:
        try:
            temp_path.unlink()
        except FileNotFoundError:
            pass
