"""Locating commands on disk."""

from __future__ import annotations

import os

from mshell.diagnostics import handle_directory_error, handle_permission_error
from mshell.environment import ShellState


def check_file_access(command: str) -> int:
    """Check that *command* names an executable file.

    Returns 0 when it does, 127 when it is missing (or not addressed by a
    path), and 126 after reporting a directory or missing permission.
    """
    if not os.access(command, os.F_OK):
        return 127
    has_slash = "/" in command
    if os.path.isdir(command):
        return handle_directory_error(command) if has_slash else 127
    if not os.access(command, os.X_OK):
        return handle_permission_error(command) if has_slash else 127
    return 0


def _check_path_with_slash(command: str) -> str | None:
    if not os.access(command, os.F_OK) or os.path.isdir(command):
        return None
    if not os.access(command, os.X_OK):
        return None
    try:
        return os.path.realpath(command, strict=True)
    except OSError:
        return command


def find_command_path(command: str, shell: ShellState) -> str | None:
    """Resolve *command* to an executable path, searching ``PATH`` if needed."""
    if "/" in command:
        return _check_path_with_slash(command)
    path_env = shell.get_env_value("PATH")
    if not path_env:
        return None
    for directory in filter(None, path_env.split(":")):
        candidate = f"{directory}/{command}"
        if os.access(candidate, os.X_OK):
            return candidate
    return None