"""Syntax checks on a token list before it is parsed."""

from __future__ import annotations

from collections.abc import Sequence

from mshell.lexer import Token, TokenType

_REDIRECTS = frozenset(
    {
        TokenType.REDIRECT_IN,
        TokenType.REDIRECT_OUT,
        TokenType.REDIRECT_APPEND,
        TokenType.REDIRECT_HEREDOC,
    }
)

_OPERATORS = _REDIRECTS | {
    TokenType.PIPE,
    TokenType.AND,
    TokenType.OR,
    TokenType.BACKGROUND,
}

_LOGICAL = frozenset({TokenType.AND, TokenType.OR, TokenType.BACKGROUND})
_AFTER_PIPE_FORBIDDEN = frozenset({TokenType.PIPE, TokenType.AND, TokenType.OR})
_AFTER_LOGICAL_FORBIDDEN = _AFTER_PIPE_FORBIDDEN | {TokenType.BACKGROUND}


class ShellSyntaxError(Exception):
    """A token appears where the grammar does not allow it."""

    status = 2

    def __init__(self, token: str | None) -> None:
        self.token = token if token is not None else "newline"
        super().__init__(f"syntax error near unexpected token `{self.token}'")


def is_operator_token(token_type: TokenType) -> bool:
    """Return True for pipes, redirections and ``&&``, ``||``, ``&``."""
    return token_type in _OPERATORS


def is_redirect_token(token_type: TokenType) -> bool:
    """Return True for the four redirection operators."""
    return token_type in _REDIRECTS


def _check_token(token: Token, following: Token | None) -> None:
    if token.type is TokenType.PIPE:
        if following is None:
            raise ShellSyntaxError("|")
        if following.type in _AFTER_PIPE_FORBIDDEN:
            raise ShellSyntaxError(following.value)
    if token.type in _LOGICAL:
        if following is None:
            raise ShellSyntaxError(token.value)
        if following.type in _AFTER_LOGICAL_FORBIDDEN:
            raise ShellSyntaxError(following.value)
    if is_redirect_token(token.type):
        if following is None:
            raise ShellSyntaxError(None)
        if following.type is not TokenType.WORD:
            raise ShellSyntaxError(following.value)


def validate_syntax(tokens: Sequence[Token]) -> None:
    """Check *tokens*; raise :class:`ShellSyntaxError` at the first problem."""
    if not tokens:
        return
    first = tokens[0]
    if is_operator_token(first.type) and not is_redirect_token(first.type):
        raise ShellSyntaxError(first.value)
    for index, token in enumerate(tokens):
        following = tokens[index + 1] if index + 1 < len(tokens) else None
        _check_token(token, following)