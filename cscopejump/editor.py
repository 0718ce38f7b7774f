"""Editor launch helper for opening a jump target.

Runs ``$EDITOR +LINE FILE`` (the convention vi, emacs, nano and friends share).
Returns an error message string instead of raising for UI-friendly handling.
"""

from __future__ import annotations

import os
import shlex
import subprocess


def editor_command(editor_env: str, path: str, line: int) -> list[str]:
    return [*shlex.split(editor_env), f"+{max(1, line)}", path]


def launch_editor(path: str, line: int) -> str | None:
    editor_env = os.environ.get("EDITOR", "").strip()
    if not editor_env:
        return "Cannot edit: $EDITOR is not set."
    cmd = editor_command(editor_env, path, line)
    if len(cmd) < 3:
        return "Cannot edit: $EDITOR is empty."

    try:
        subprocess.run(cmd, check=False)
    except OSError as exc:
        return f"Failed to launch editor: {exc}"
    return None
