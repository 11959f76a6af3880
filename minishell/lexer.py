"""Classify raw strings into typed tokens."""

from __future__ import annotations

from collections.abc import Iterable

from minishell.models import Token, TokenType

_OPERATOR_TYPES = {
    "|": TokenType.PIPE,
    "<": TokenType.REDIRECT_IN,
    ">": TokenType.REDIRECT_OUT,
    ">>": TokenType.APPEND,
    "<<": TokenType.HEREDOC,
}


def token_type(text: str | None) -> TokenType:
    """Return the token type of ``text``; anything not an operator is a word."""
    if text is None:
        return TokenType.WORD
    return _OPERATOR_TYPES.get(text, TokenType.WORD)


def make_token(text: str) -> Token:
    """Build a token, marking it quoted when wrapped in matching quotes."""
    quoted = (
        text != "$?"
        and len(text) > 0
        and text[0] in "\"'"
        and text[-1] == text[0]
    )
    return Token(text, token_type(text), quoted)


def lex(words: Iterable[str]) -> list[Token]:
    """Turn raw strings into tokens."""
    return [make_token(word) for word in words]