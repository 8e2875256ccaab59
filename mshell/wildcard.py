"""Expansion of ``*`` patterns against the entries of a directory."""

from __future__ import annotations

import os
from collections.abc import Iterable

from mshell.lexer import DOUBLE_QUOTE_MARK, SINGLE_QUOTE_MARK


def match_pattern(name: str, pattern: str) -> bool:
    """Return True if *name* matches *pattern*, where ``*`` matches any run."""
    n = p = 0
    star = -1
    mark = 0
    while n < len(name):
        if p < len(pattern) and pattern[p] == "*":
            star = p
            mark = n
            p += 1
        elif p < len(pattern) and pattern[p] == name[n]:
            n += 1
            p += 1
        elif star != -1:
            p = star + 1
            mark += 1
            n = mark
        else:
            return False
    while p < len(pattern) and pattern[p] == "*":
        p += 1
    return p == len(pattern)


def should_match_entry(pattern: str, entry_name: str) -> bool:
    """Match *entry_name*; hidden entries only match patterns starting with a dot."""
    if pattern.startswith(".") != entry_name.startswith("."):
        return False
    return match_pattern(entry_name, pattern)


def _byte_key(text: str) -> bytes:
    return text.encode("utf-8", "surrogateescape")


def sort_matches(matches: Iterable[str]) -> list[str]:
    """Return *matches* sorted by their byte values."""
    return sorted(matches, key=_byte_key)


def _directory_entries(directory: str | os.PathLike[str] | None) -> list[str] | None:
    try:
        names = os.listdir(directory if directory is not None else ".")
    except OSError:
        return None
    return [".", "..", *names]


def expand_wildcard(
    pattern: str, directory: str | os.PathLike[str] | None = None
) -> list[str] | None:
    """Return the sorted entries of *directory* matching *pattern*.

    Returns None when the pattern has no ``*``, contains quoted parts, the
    directory cannot be read, or nothing matches.
    """
    if "*" not in pattern:
        return None
    if SINGLE_QUOTE_MARK in pattern or DOUBLE_QUOTE_MARK in pattern:
        return None
    entries = _directory_entries(directory)
    if entries is None:
        return None
    matches = [entry for entry in entries if should_match_entry(pattern, entry)]
    if not matches:
        return None
    return sort_matches(matches)


def expand_with_wildcards(
    args: Iterable[str], directory: str | os.PathLike[str] | None = None
) -> list[str]:
    """Replace each argument by its wildcard matches, keeping it when none."""
    result: list[str] = []
    for arg in args:
        matches = expand_wildcard(arg, directory)
        if matches:
            result.extend(matches)
        else:
            result.append(arg)
    return result