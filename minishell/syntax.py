"""Syntax checks on lexed tokens and raw input lines."""

from __future__ import annotations

from collections.abc import Iterable

from minishell.models import Token, TokenType


class ShellSyntaxError(Exception):
    """Raised when a token sequence is not a well formed command line."""

    exit_status = 2

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"syntax error near unexpected token `{token}'")


def check_syntax(tokens: Iterable[Token]) -> list[Token]:
    """Return the tokens unchanged when they are well formed.

    Raises ShellSyntaxError for a leading pipe, a pipe with nothing or
    another pipe after it, and a redirection not followed by a word.
    """
    tokens = list(tokens)
    if tokens and tokens[0].type is TokenType.PIPE and not tokens[0].quoted:
        raise ShellSyntaxError("|")
    followers: list[Token | None] = [*tokens[1:], None]
    for token, following in zip(tokens, followers):
        if token.quoted:
            continue
        if token.type is TokenType.PIPE and (
            following is None
            or (following.type is TokenType.PIPE and not following.quoted)
        ):
            raise ShellSyntaxError("|")
        if token.type.is_redirection and (
            following is None or following.type is not TokenType.WORD
        ):
            raise ShellSyntaxError("newline")
    return tokens


def has_unclosed_quotes(line: str) -> bool:
    """Return True when ``line`` leaves a single or double quote open."""
    single = double = 0
    for char in line:
        if char == "'" and double % 2 == 0:
            single += 1
        elif char == '"' and single % 2 == 0:
            double += 1
    return bool(single % 2 or double % 2)