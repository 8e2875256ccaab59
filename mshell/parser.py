"""Build a syntax tree from a list of tokens."""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum, auto

from mshell.arguments import remove_quote_markers
from mshell.lexer import DOUBLE_QUOTE_MARK, SINGLE_QUOTE_MARK, Token, TokenType
from mshell.syntax import is_redirect_token
from mshell.wildcard import expand_wildcard


class NodeType(Enum):
    """Kinds of node in the syntax tree."""

    COMMAND = auto()
    PIPE = auto()
    REDIRECT_IN = auto()
    REDIRECT_OUT = auto()
    REDIRECT_APPEND = auto()
    REDIRECT_HEREDOC = auto()
    AND = auto()
    OR = auto()
    SEMICOLON = auto()
    SUBSHELL = auto()
    BACKGROUND = auto()


@dataclass
class Node:
    """One node of the syntax tree.

    Commands hold their words in ``args``; redirections hold their target in
    ``filename`` and the redirected node in ``left``; operators join ``left``
    and ``right``; a subshell holds its body in ``left``.
    """

    type: NodeType
    args: list[str] | None = None
    filename: str | None = None
    left: Node | None = None
    right: Node | None = None


@dataclass
class ParseError(Exception):
    """The token list could not be turned into a tree.

    ``reportable`` is True for errors whose message is meant for the user.
    """

    message: str = ""
    reportable: bool = False
    status: int = field(default=1)

    def __str__(self) -> str:
        return self.message


_REDIRECT_NODES = {
    TokenType.REDIRECT_IN: NodeType.REDIRECT_IN,
    TokenType.REDIRECT_OUT: NodeType.REDIRECT_OUT,
    TokenType.REDIRECT_APPEND: NodeType.REDIRECT_APPEND,
    TokenType.REDIRECT_HEREDOC: NodeType.REDIRECT_HEREDOC,
}

_LIST_NODES = {
    TokenType.AND: NodeType.AND,
    TokenType.OR: NodeType.OR,
    TokenType.SEMICOLON: NodeType.SEMICOLON,
    TokenType.BACKGROUND: NodeType.BACKGROUND,
}


def count_word_tokens(tokens: Sequence[Token]) -> int:
    """Count the words of the simple command at the start of *tokens*.

    Redirection operators and their targets are skipped, not counted.
    """
    count = 0
    pos = 0
    while pos < len(tokens):
        token_type = tokens[pos].type
        if token_type is TokenType.WORD:
            count += 1
            pos += 1
        elif is_redirect_token(token_type):
            pos += 1
            if pos < len(tokens) and tokens[pos].type is TokenType.WORD:
                pos += 1
        else:
            break
    return count


def find_command_node(node: Node | None) -> Node | None:
    """Follow ``left`` links from *node* down to the first command node."""
    while node is not None and node.type is not NodeType.COMMAND:
        node = node.left
    return node


def _expand_redirect_filename(
    filename: str,
    redirect: TokenType,
    directory: str | os.PathLike[str] | None,
) -> str:
    if redirect is TokenType.REDIRECT_HEREDOC:
        return filename
    if (
        "*" in filename
        and SINGLE_QUOTE_MARK not in filename
        and DOUBLE_QUOTE_MARK not in filename
    ):
        matches = expand_wildcard(filename, directory)
        if not matches:
            return filename
        if len(matches) > 1:
            raise ParseError(f"{filename}: ambiguous redirect", reportable=True)
        return matches[0]
    return remove_quote_markers(filename)


class _Parser:
    def __init__(
        self,
        tokens: Sequence[Token],
        directory: str | os.PathLike[str] | None,
    ) -> None:
        self._tokens = tokens
        self._pos = 0
        self._directory = directory

    def _peek(self) -> Token | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _peek_type(self) -> TokenType | None:
        token = self._peek()
        return token.type if token is not None else None

    def _advance(self) -> Token:
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def parse_list(self) -> Node:
        left = self.parse_pipeline()
        node_type = _LIST_NODES.get(self._peek_type())  # type: ignore[arg-type]
        if node_type is None:
            return left
        self._advance()
        right = self.parse_list()
        return Node(node_type, left=left, right=right)

    def parse_pipeline(self) -> Node:
        if self._peek_type() is TokenType.LPAREN:
            left = self._parse_subshell()
        else:
            left = self._parse_command()
        left = self._parse_trailing_redirections(left)
        if self._peek_type() is TokenType.PIPE:
            self._advance()
            right = self.parse_pipeline()
            return Node(NodeType.PIPE, left=left, right=right)
        return left

    def _parse_subshell(self) -> Node:
        self._advance()
        inner = self.parse_list()
        if self._peek_type() is not TokenType.RPAREN:
            raise ParseError("missing `)'")
        self._advance()
        return Node(NodeType.SUBSHELL, left=inner)

    def _parse_trailing_redirections(self, node: Node) -> Node:
        while (token_type := self._peek_type()) is not None and is_redirect_token(
            token_type
        ):
            self._advance()
            redirect = Node(_REDIRECT_NODES[token_type], left=node)
            following = self._peek()
            if following is not None and following.type is TokenType.WORD:
                redirect.filename = following.value
                self._advance()
            node = redirect
        return node

    def _parse_command(self) -> Node:
        if self._peek() is None:
            raise ParseError("unexpected end of input")
        command = Node(NodeType.COMMAND)
        args: list[str] = []
        node = command
        while (token := self._peek()) is not None:
            if token.type is TokenType.WORD:
                args.append(token.value)
                self._advance()
            elif is_redirect_token(token.type):
                node = self._parse_redirect(node)
            else:
                break
        command.args = args
        return node

    def _parse_redirect(self, inner: Node) -> Node:
        redirect_type = self._advance().type
        redirect = Node(_REDIRECT_NODES[redirect_type], left=inner)
        target = self._peek()
        if target is not None and target.type is TokenType.WORD:
            redirect.filename = _expand_redirect_filename(
                target.value, redirect_type, self._directory
            )
            self._advance()
        return redirect


def parse(
    tokens: Sequence[Token],
    directory: str | os.PathLike[str] | None = None,
) -> Node | None:
    """Parse *tokens* into a tree; return None when there are no tokens.

    Wildcards in redirection targets are matched against *directory*, the
    current directory by default. Raises :class:`ParseError` when the tokens
    do not form a complete command.
    """
    if not tokens:
        return None
    return _Parser(tokens, directory).parse_list()