"""Helpers behind the ``echo``, ``export`` and ``unset`` builtins."""

from __future__ import annotations

import sys
from typing import TextIO

from mshell.diagnostics import SHELL_NAME, is_valid_identifier
from mshell.environment import ShellState

_EXPORT_USAGE = "export: usage: export [-nf] [name[=value] ...] or export -p\n"
_UNSET_USAGE = "unset: usage: unset [-fv] [name ...]\n"


def is_valid_n_flag(arg: str | None) -> bool:
    """Return True if *arg* is ``-n``, ``-nn``, ... as accepted by ``echo``."""
    if not arg or len(arg) < 2 or arg[0] != "-":
        return False
    return all(char == "n" for char in arg[1:])


def _report_invalid_option(command: str, arg: str, usage: str) -> int:
    sys.stderr.write(f"{SHELL_NAME}: {command}: {arg}: invalid option\n")
    sys.stderr.write(usage)
    return 2


def _report_invalid_identifier(command: str, arg: str) -> int:
    sys.stderr.write(f"{SHELL_NAME}: {command}: `{arg}': not a valid identifier\n")
    return 1


def process_export_arg(arg: str, shell: ShellState) -> int:
    """Apply one ``export`` argument (``NAME`` or ``NAME=VALUE``).

    Returns 0 on success, 1 for an invalid identifier and 2 for an option.
    """
    key, sep, value = arg.partition("=")
    if key.startswith("--") or (key.startswith("-") and len(key) > 1):
        return _report_invalid_option("export", arg, _EXPORT_USAGE)
    if not is_valid_identifier(key):
        return _report_invalid_identifier("export", arg)
    shell.env.set(key, value if sep else None)
    return 0


def _byte_key(entry: tuple[str, str | None]) -> bytes:
    return entry[0].encode("utf-8", "surrogateescape")


def sorted_env_entries(shell: ShellState) -> list[tuple[str, str | None]]:
    """Return every variable as ``(key, value)``, sorted by the key's bytes."""
    return sorted(shell.env.items(), key=_byte_key)


def print_export_env(shell: ShellState, out: TextIO | None = None) -> int:
    """Write the ``declare -x`` listing of all variables; return 0."""
    stream = out if out is not None else sys.stdout
    for key, value in sorted_env_entries(shell):
        stream.write(f'declare -x {key}="{value or ""}"\n')
    return 0


def process_unset_arg(arg: str, shell: ShellState) -> int:
    """Apply one ``unset`` argument.

    Returns 0 on success, 1 for an invalid identifier and 2 for an option.
    """
    if arg.startswith("-") and len(arg) > 1:
        return _report_invalid_option("unset", arg, _UNSET_USAGE)
    if not is_valid_identifier(arg):
        return _report_invalid_identifier("unset", arg)
    shell.env.unset(arg)
    return 0