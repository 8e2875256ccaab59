"""Variable expansion inside words.

Words still carry the quote markers put in by the lexer: variables are not
expanded inside single-quoted parts, and the markers are left in place for
later stages to remove.
"""

from __future__ import annotations

import os

from mshell.environment import ShellState
from mshell.lexer import DOUBLE_QUOTE_MARK, SINGLE_QUOTE_MARK

_QUOTE_ENDS = frozenset(("'", '"', SINGLE_QUOTE_MARK, DOUBLE_QUOTE_MARK))
_MARK_TO_QUOTE = str.maketrans({SINGLE_QUOTE_MARK: "'", DOUBLE_QUOTE_MARK: '"'})


def _is_name_char(char: str) -> bool:
    return (
        "a" <= char <= "z"
        or "A" <= char <= "Z"
        or "0" <= char <= "9"
        or char == "_"
    )


def _starts_variable(char: str) -> bool:
    return _is_name_char(char) or char in ("?", "$")


def _read_var_name(text: str, pos: int) -> tuple[str | None, int]:
    """Read a variable name at *pos*; return it and the position after it."""
    char = text[pos : pos + 1]
    if char in ("?", "$"):
        return char, pos + 1
    if not char or not _is_name_char(char):
        return None, pos
    end = pos
    while end < len(text) and _is_name_char(text[end]):
        end += 1
    return text[pos:end], end


def get_variable_value(name: str, shell: ShellState) -> str | None:
    """Return the value of variable *name*, or None when it is unset.

    ``?`` gives the last exit status and ``$`` the process id.
    """
    if name == "?":
        return str(shell.last_exit_status)
    if name == "$":
        return str(os.getpid())
    if name == "":
        return ""
    return shell.get_env_value(name)


def _process_variable(text: str, pos: int, shell: ShellState) -> tuple[str, int]:
    """Substitute the variable whose ``$`` is at *pos*.

    Returns the new text and the position just after the substituted value.
    """
    dollar = pos
    if text[pos + 1 : pos + 2] == SINGLE_QUOTE_MARK:
        return text, pos + 1
    name, end = _read_var_name(text, pos + 1)
    if name is None:
        return text, dollar + 1
    value = get_variable_value(name, shell)
    text = text[:dollar] + (value or "") + text[end:]
    return text, dollar + len(value) if value else dollar


def expand_variables(text: str, shell: ShellState) -> str:
    """Expand ``$NAME``, ``$?`` and ``$$`` outside single-quoted parts of *text*."""
    out: list[str] = []
    in_single = False
    pos = 0
    length = len(text)
    while pos < length:
        char = text[pos]
        if char == SINGLE_QUOTE_MARK:
            in_single = not in_single
        elif (
            char == "$"
            and pos + 1 < length
            and not in_single
            and _starts_variable(text[pos + 1])
        ):
            name, end = _read_var_name(text, pos + 1)
            if name is not None:
                out.append(get_variable_value(name, shell) or "")
                pos = end
                continue
        out.append(char)
        pos += 1
    return "".join(out)


def count_backslashes(text: str, start: int) -> int:
    """Count consecutive backslashes in *text* from *start*."""
    end = start
    while end < len(text) and text[end] == "\\":
        end += 1
    return end - start


def process_backslashes(text: str, pos: int) -> tuple[str, int]:
    """Halve the run of backslashes at *pos*.

    Returns the new text and the position after the remaining backslashes.
    """
    count = count_backslashes(text, pos)
    kept = count // 2
    text = text[:pos] + "\\" * kept + text[pos + count :]
    return text, pos + kept


def handle_backslash(text: str, pos: int, shell: ShellState) -> tuple[str, int]:
    """Handle a run of backslashes at *pos*, expanding a following ``$`` if unescaped."""
    count = count_backslashes(text, pos)
    if text[pos + count : pos + count + 1] != "$":
        return process_backslashes(text, pos)
    text, pos = process_backslashes(text, pos)
    if count % 2 == 1:
        return text, pos + 1
    if text[pos : pos + 1] == "$" and pos + 1 < len(text):
        return _process_variable(text, pos, shell)
    return text, pos + 1


def _find_closing_quote(text: str, start: int) -> int:
    end = start
    while end < len(text) and text[end] not in _QUOTE_ENDS:
        end += 1
    return end if end < len(text) else -1


def handle_dollar_quote(text: str, pos: int) -> tuple[str, int]:
    """Replace the ``$``-quoted section at *pos* by its bare contents.

    Returns the new text and the advanced position. When no closing quote is
    found the text is kept and the position moves past the ``$``.
    """
    start = pos + 2
    end = _find_closing_quote(text, start)
    if end == -1:
        return text, pos + 1
    content = text[start:end].translate(_MARK_TO_QUOTE)
    text = text[:pos] + content + text[end + 1 :]
    return text, pos + (end - start)