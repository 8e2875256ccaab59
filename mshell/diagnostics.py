"""Identifier checks and the shell's error messages."""

from __future__ import annotations

import errno as _errno
import os
import sys

SHELL_NAME = "minishell"


def _is_ascii_alpha(char: str) -> bool:
    return "a" <= char <= "z" or "A" <= char <= "Z"


def _is_name_char(char: str) -> bool:
    return _is_ascii_alpha(char) or "0" <= char <= "9" or char == "_"


def is_valid_identifier(name: str | None) -> bool:
    """Return True if *name* is a valid shell variable name."""
    if not name:
        return False
    if not (_is_ascii_alpha(name[0]) or name[0] == "_"):
        return False
    return all(_is_name_char(char) for char in name[1:])


def print_error(cmd: str | None, msg: str) -> None:
    """Write ``minishell: [cmd: ]msg`` to standard error."""
    prefix = f"{SHELL_NAME}: "
    if cmd:
        prefix += f"{cmd}: "
    sys.stderr.write(f"{prefix}{msg}\n")


def handle_directory_error(command: str) -> int:
    """Report that *command* is a directory; return exit status 126."""
    print_error(command, "is a directory")
    return 126


def handle_permission_error(command: str) -> int:
    """Report that *command* is not executable; return exit status 126."""
    print_error(command, "Permission denied")
    return 126


def handle_cd_error(path: str, error: int | OSError) -> int:
    """Report a failed ``cd`` to *path*; return exit status 1.

    *error* is an errno value or the OSError raised by the change of directory.
    """
    code = error.errno if isinstance(error, OSError) else error
    if code == _errno.EACCES:
        print_error("cd", f"{path}: Permission denied")
    elif code == _errno.ENOENT:
        print_error("cd", f"{path}: No such file or directory")
    else:
        sys.stderr.write(f"cd: {os.strerror(code or 0)}\n")
    return 1