"""Expansion of a command's argument list."""

from __future__ import annotations

import os
from collections.abc import Iterable

from mshell.environment import ShellState
from mshell.expand import expand_variables
from mshell.lexer import DOUBLE_QUOTE_MARK, SINGLE_QUOTE_MARK
from mshell.wildcard import expand_with_wildcards

_STRIP_MARKERS = str.maketrans("", "", SINGLE_QUOTE_MARK + DOUBLE_QUOTE_MARK)


def expand_tilde(word: str, shell: ShellState) -> str:
    """Replace a leading ``~`` or ``~/`` by the value of ``HOME``."""
    if not word.startswith("~"):
        return word
    if len(word) > 1 and word[1] != "/":
        return word
    home = shell.get_env_value("HOME")
    if home is None:
        return word
    return home + word[1:]


def expand_tilde_array(args: Iterable[str], shell: ShellState) -> list[str]:
    """Apply :func:`expand_tilde` to every argument."""
    return [expand_tilde(arg, shell) for arg in args]


def expand_variables_array(args: Iterable[str], shell: ShellState) -> list[str]:
    """Apply variable expansion to every argument."""
    return [expand_variables(arg, shell) for arg in args]


def remove_quote_markers(text: str) -> str:
    """Drop the lexer's quote markers from *text*."""
    return text.translate(_STRIP_MARKERS)


def remove_empty_args(args: Iterable[str]) -> list[str]:
    """Drop empty arguments and strip quote markers from the rest.

    An argument made only of quotes (``''``) is not empty and becomes ``""``.
    """
    return [remove_quote_markers(arg) for arg in args if arg]


def expand_args(
    args: Iterable[str],
    shell: ShellState,
    directory: str | os.PathLike[str] | None = None,
) -> list[str]:
    """Expand tildes, variables and wildcards, then drop empty arguments."""
    expanded = expand_variables_array(expand_tilde_array(args, shell), shell)
    return remove_empty_args(expand_with_wildcards(expanded, directory))