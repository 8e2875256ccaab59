"""Lexer, syntax checker, parser and word expansion for a small POSIX-style shell language."""

__version__ = "0.1.0"