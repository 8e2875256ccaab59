"""Split a command line into shell tokens.

Quoted sections are kept inside words, wrapped in marker characters so that
later stages can tell which parts were single or double quoted.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum, auto

SINGLE_QUOTE_MARK = "\x01"
DOUBLE_QUOTE_MARK = "\x02"

_WHITESPACE = frozenset(" \t\n\r")
_OPERATOR_CHARS = frozenset("|<>&();")
_QUOTES = frozenset("'\"")


class TokenType(Enum):
    """Kinds of token produced by the lexer."""

    WORD = auto()
    PIPE = auto()
    REDIRECT_IN = auto()
    REDIRECT_OUT = auto()
    REDIRECT_APPEND = auto()
    REDIRECT_HEREDOC = auto()
    AND = auto()
    OR = auto()
    SEMICOLON = auto()
    LPAREN = auto()
    RPAREN = auto()
    BACKGROUND = auto()
    EOF = auto()


class QuoteType(IntEnum):
    """How a token was quoted."""

    NONE = 0
    SINGLE = 1
    DOUBLE = 2


@dataclass
class Token:
    """One lexical token."""

    type: TokenType
    value: str
    quote_type: QuoteType = QuoteType.NONE


_DOUBLE_OPERATORS = {
    "||": TokenType.OR,
    "&&": TokenType.AND,
    "<<": TokenType.REDIRECT_HEREDOC,
    ">>": TokenType.REDIRECT_APPEND,
}

_SINGLE_OPERATORS = {
    "|": TokenType.PIPE,
    "<": TokenType.REDIRECT_IN,
    ">": TokenType.REDIRECT_OUT,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ";": TokenType.SEMICOLON,
    "&": TokenType.BACKGROUND,
}

_QUOTE_MARKS = {"'": SINGLE_QUOTE_MARK, '"': DOUBLE_QUOTE_MARK}


def is_whitespace(char: str) -> bool:
    """Return True for the blanks that separate tokens."""
    return char in _WHITESPACE and char != ""


def is_operator(char: str) -> bool:
    """Return True for characters that start an operator token."""
    return char in _OPERATOR_CHARS and char != ""


def is_quote(char: str) -> bool:
    """Return True for a single or double quote."""
    return char in _QUOTES and char != ""


def get_operator_type(text: str) -> tuple[TokenType, int]:
    """Classify the operator at the start of *text*.

    Returns the token type and how many characters it spans. Text that does
    not start with an operator yields ``(TokenType.WORD, 1)``.
    """
    double = _DOUBLE_OPERATORS.get(text[:2])
    if double is not None:
        return double, 2
    return _SINGLE_OPERATORS.get(text[:1], TokenType.WORD), 1


def extract_quoted_string(text: str, pos: int) -> tuple[str | None, int]:
    """Read the quoted section starting at ``text[pos]``.

    Returns the contents wrapped in quote markers and the position after the
    closing quote. An unterminated quote yields ``None`` and the end of text.
    """
    quote = text[pos]
    start = pos + 1
    end = text.find(quote, start)
    if end == -1:
        return None, len(text)
    mark = _QUOTE_MARKS[quote]
    return f"{mark}{text[start:end]}{mark}", end + 1


def extract_word(text: str, pos: int) -> tuple[str, int]:
    """Read unquoted word characters from *pos*; return them and the new position."""
    end = pos
    while end < len(text) and not (
        is_whitespace(text[end]) or is_operator(text[end]) or is_quote(text[end])
    ):
        end += 1
    return text[pos:end], end


def _extract_dollar_quote(text: str, pos: int) -> tuple[str, int]:
    """Read a ``$'...'`` or ``$"..."`` section, returning its bare contents."""
    quote = text[pos + 1]
    start = pos + 2
    end = text.find(quote, start)
    if end == -1:
        return text[pos], pos + 1
    return text[start:end], end + 1


def _extract_continuous_word(text: str, pos: int) -> tuple[str, int]:
    parts: list[str] = []
    while pos < len(text) and not (is_whitespace(text[pos]) or is_operator(text[pos])):
        char = text[pos]
        if char == "$" and is_quote(text[pos + 1 : pos + 2]):
            part, pos = _extract_dollar_quote(text, pos)
        elif is_quote(char):
            part, pos = extract_quoted_string(text, pos)
        else:
            part, pos = extract_word(text, pos)
        if part is not None:
            parts.append(part)
    return "".join(parts), pos


def tokenize(text: str) -> list[Token]:
    """Split *text* into a list of tokens."""
    tokens: list[Token] = []
    pos = 0
    length = len(text)
    while pos < length:
        while pos < length and is_whitespace(text[pos]):
            pos += 1
        if pos >= length:
            break
        if is_operator(text[pos]):
            token_type, advance = get_operator_type(text[pos:])
            tokens.append(Token(token_type, text[pos : pos + advance]))
            pos += advance
        else:
            value, pos = _extract_continuous_word(text, pos)
            tokens.append(Token(TokenType.WORD, value))
    return tokens